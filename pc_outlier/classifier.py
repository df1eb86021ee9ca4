"""
Outlier Filter - Main processing pipeline for point cloud outlier labelling.

Provides a unified interface for the complete workflow:
spatial index → per-point measurement → inlier/outlier split → labelling.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import numpy as np

from pc_outlier.classification.indices import OutlierIndices
from pc_outlier.classification.labeling import LabelStatus, apply_classification
from pc_outlier.classification.radius import classify_radius
from pc_outlier.classification.statistical import classify_statistical
from pc_outlier.config import METHOD_RADIUS, METHOD_STATISTICAL, METHODS, OutlierConfig
from pc_outlier.io.las_reader import PointCloud, load_point_cloud
from pc_outlier.io.las_writer import save_point_cloud
from pc_outlier.reporting.report_writer import write_json_report
from pc_outlier.utils.parallel import resolve_thread_count

logger = logging.getLogger(__name__)

STAGE_NAME = "filters.outlier"
STAGE_DESCRIPTION = "Outlier removal"


@dataclass
class OutlierResult:
    """Container for outlier filter results.

    Attributes
    ----------
    cloud : PointCloud
        The labelled (or unchanged) point cloud.
    method : str
        Method that was requested.
    status : LabelStatus
        Which branch of the labelling policy was taken.
    n_points : int
        Number of points in the cloud.
    n_inliers : int
        Number of inlier points (0 when no classification ran).
    n_outliers : int
        Number of outlier points (0 when no classification ran).
    label : int
        Classification code used for outliers.
    threshold : float, optional
        Distance threshold (statistical method only).
    source_file : str
        Name of input file.
    output_file : Path, optional
        Path of the written output file (``process_file`` only).
    timing : dict
        Processing timing information.
    """

    cloud: PointCloud
    method: str
    status: LabelStatus
    n_points: int
    n_inliers: int = 0
    n_outliers: int = 0
    label: int = 0
    threshold: Optional[float] = None
    source_file: str = "unknown"
    output_file: Optional[Path] = None
    timing: Dict[str, float] = field(default_factory=dict)

    @property
    def labeled(self) -> bool:
        """Return True if any point's classification was changed."""
        return self.status == LabelStatus.LABELED


def point_coordinates(point_set) -> np.ndarray:
    """
    Return the (N, 3) float64 coordinates of a point set.

    Uses the ``xyz`` array of a PointCloud directly; any other object is read
    through ``size()`` and ``get_coordinates(i)``.
    """
    if isinstance(point_set, PointCloud):
        return point_set.xyz

    n_points = point_set.size()
    xyz = np.empty((n_points, 3), dtype=np.float64)
    for i in range(n_points):
        xyz[i] = point_set.get_coordinates(i)
    return xyz


class OutlierFilter:
    """Label outlier points of a cloud with a noise class.

    Parameters
    ----------
    config : OutlierConfig, optional
        Configuration parameters. Uses defaults if not provided.

    Examples
    --------
    >>> from pc_outlier import OutlierFilter, load_point_cloud
    >>> outlier_filter = OutlierFilter()
    >>> cloud = load_point_cloud("input.las")
    >>> result = outlier_filter.run(cloud)
    >>> print(f"Labeled {result.n_outliers} of {result.n_points} points")
    """

    name = STAGE_NAME

    def __init__(self, config: Optional[OutlierConfig] = None):
        self.config = config or OutlierConfig()
        self.threads = resolve_thread_count(self.config.threads)

    def classify(self, cloud: PointCloud, show_progress: bool = False) -> Optional[OutlierIndices]:
        """
        Split the cloud into inliers and outliers without labelling.

        Returns None when the configured method is not recognised.
        """
        method = self.config.normalized_method
        if method not in METHODS:
            return None

        xyz = point_coordinates(cloud)

        if method == METHOD_STATISTICAL:
            return classify_statistical(
                xyz,
                mean_k=self.config.mean_k,
                multiplier=self.config.multiplier,
                threads=self.threads,
                show_progress=show_progress,
            )
        return classify_radius(
                xyz,
                radius=self.config.radius,
                min_k=self.config.min_k,
                threads=self.threads,
                show_progress=show_progress,
            )

    def run(self, cloud: PointCloud, show_progress: bool = False) -> OutlierResult:
        """
        Classify the cloud and label its outliers in place.

        Parameters
        ----------
        cloud : PointCloud
            Point cloud to process.
        show_progress : bool
            Display a progress bar during the neighbor queries.

        Returns
        -------
        OutlierResult
            Labelling outcome and counts. ``result.cloud`` is ``cloud``.
        """
        timing = {}
        total_start = time.time()

        result = OutlierResult(
            cloud=cloud,
            method=self.config.method,
            status=LabelStatus.EMPTY,
            n_points=cloud.size(),
            label=self.config.label,
            source_file=str(getattr(cloud, "source_file", None) or "unknown"),
            timing=timing,
        )

        if cloud.size() == 0:
            timing["total"] = time.time() - total_start
            return result

        t0 = time.time()
        indices = self.classify(cloud, show_progress=show_progress)
        timing["classification"] = time.time() - t0

        if indices is None:
            logger.warning(
                f"Requested method '{self.config.method}' is unrecognized. "
                f"Please choose from \"{METHOD_STATISTICAL}\" or \"{METHOD_RADIUS}\"."
            )
            result.status = LabelStatus.UNRECOGNIZED_METHOD
            timing["total"] = time.time() - total_start
            return result

        t0 = time.time()
        _, status = apply_classification(cloud, indices, self.config.label)
        timing["labeling"] = time.time() - t0

        result.status = status
        result.n_inliers = indices.n_inliers
        result.n_outliers = indices.n_outliers
        result.threshold = indices.threshold
        timing["total"] = time.time() - total_start

        return result

    def process_file(
        self,
        input_path: Path,
        output_dir: Optional[Path] = None,
        generate_report: Optional[bool] = None,
        show_progress: bool = False,
    ) -> OutlierResult:
        """
        Process a single file end-to-end.

        Loads input, labels outliers, saves output and optionally a JSON
        report.

        Parameters
        ----------
        input_path : Path
            Path to input LAS/LAZ file.
        output_dir : Path, optional
            Directory for output files. Defaults to ``config.output_dir``.
        generate_report : bool, optional
            Write a JSON report. Defaults to ``config.write_report``.
        show_progress : bool
            Display a progress bar during the neighbor queries.

        Returns
        -------
        OutlierResult
            Processing results.
        """
        input_path = Path(input_path)
        output_dir = Path(output_dir) if output_dir is not None else self.config.output_dir
        if generate_report is None:
            generate_report = self.config.write_report

        t0 = time.time()
        cloud = load_point_cloud(input_path)
        load_time = time.time() - t0
        logger.info(f"Loaded {cloud.n_points:,} points from {input_path}")

        result = self.run(cloud, show_progress=show_progress)
        result.timing["load"] = load_time

        t0 = time.time()
        output_path = output_dir / f"{input_path.stem}_outlier.las"
        result.output_file = save_point_cloud(
            cloud, output_path, compress=self.config.compress_output
        )
        result.timing["save"] = time.time() - t0
        logger.info(f"Saved {result.output_file}")

        if generate_report:
            report_path = output_dir / f"{input_path.stem}_outlier_report.json"
            write_json_report(result, report_path, config=self.config)
            logger.info(f"Saved {report_path}")

        return result


def classify_and_label(
    point_set: PointCloud,
    config: Optional[OutlierConfig] = None,
) -> PointCloud:
    """
    Label outlier points of ``point_set`` according to ``config``.

    Non-fatal conditions (empty cloud, unknown method, all points or no
    points flagged) are logged and the cloud is returned unchanged.

    Parameters
    ----------
    point_set : PointCloud
        Point cloud to label, modified in place. Any object providing
        ``size()``, ``get_coordinates(i)`` and ``set_classification(idx, label)``
        is accepted.
    config : OutlierConfig, optional
        Filter configuration. Uses defaults if not provided.

    Returns
    -------
    PointCloud
        The same point cloud object.
    """
    return OutlierFilter(config).run(point_set).cloud
