"""Tests for pc_outlier.reporting module."""

import json
import math

import numpy as np


def test_classification_stats():
    """Test per-class counts and percentages."""
    from pc_outlier.reporting.statistics import calculate_classification_stats

    stats = calculate_classification_stats(np.array([2, 2, 7, 2], dtype=np.uint8))

    assert stats["total"] == 4
    assert set(stats["by_class"]) == {2, 7}
    assert stats["by_class"][2]["count"] == 3
    assert stats["by_class"][2]["percent"] == 75.0
    assert stats["by_class"][7]["name"] == "Low Point (noise)"


def test_classification_stats_user_defined():
    """Test codes outside the standard table are named generically."""
    from pc_outlier.reporting.statistics import calculate_classification_stats

    stats = calculate_classification_stats(np.array([64], dtype=np.uint8))

    assert stats["by_class"][64]["name"] == "User Defined"


def test_classification_stats_empty():
    """Test an empty array gives zero totals."""
    from pc_outlier.reporting.statistics import calculate_classification_stats

    stats = calculate_classification_stats(np.array([], dtype=np.uint8))

    assert stats["total"] == 0
    assert stats["by_class"] == {}


def test_outlier_stats(noisy_cloud):
    """Test the run summary."""
    from pc_outlier.classifier import OutlierFilter
    from pc_outlier.reporting.statistics import calculate_outlier_stats

    cloud, noise_idx = noisy_cloud
    summary = calculate_outlier_stats(OutlierFilter().run(cloud))

    assert summary["method"] == "statistical"
    assert summary["status"] == "labeled"
    assert summary["n_points"] == cloud.n_points
    assert summary["n_outliers"] == len(noise_idx)
    assert summary["outlier_percent"] == round(100 * len(noise_idx) / cloud.n_points, 2)
    assert isinstance(summary["threshold"], float)
    assert "total" in summary["timing"]


def test_outlier_stats_nan_threshold():
    """Test an undefined threshold is reported as None."""
    from pc_outlier.classifier import OutlierFilter
    from pc_outlier.io.las_reader import PointCloud
    from pc_outlier.reporting.statistics import calculate_outlier_stats

    result = OutlierFilter().run(PointCloud(xyz=np.zeros((1, 3))))
    assert math.isnan(result.threshold)

    assert calculate_outlier_stats(result)["threshold"] is None


def test_write_json_report(tmp_path, noisy_cloud):
    """Test the JSON report is valid and complete."""
    from pc_outlier.classifier import OutlierFilter
    from pc_outlier.config import OutlierConfig
    from pc_outlier.reporting.report_writer import write_json_report

    cloud, _ = noisy_cloud
    config = OutlierConfig(method="radius", radius=1.0)
    result = OutlierFilter(config).run(cloud)

    path = write_json_report(result, tmp_path / "reports" / "run.json", config=config)

    report = json.loads(path.read_text())
    assert report["summary"]["method"] == "radius"
    assert report["summary"]["threshold"] is None
    assert report["config"]["radius"] == 1.0
    assert report["config"]["output_dir"] == "output"
    assert report["classification"]["total"] == cloud.n_points
    assert "7" in report["classification"]["by_class"]
