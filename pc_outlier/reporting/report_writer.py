"""JSON report output for outlier filter runs."""

import json
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from pc_outlier.config import OutlierConfig
from pc_outlier.reporting.statistics import (
    calculate_classification_stats,
    calculate_outlier_stats,
)


def generate_config_summary(config: OutlierConfig) -> Dict[str, Any]:
    """Return the configuration as a JSON-serializable dict."""
    summary = asdict(config)
    summary["output_dir"] = str(config.output_dir)
    return summary


def write_json_report(
    result: Any,
    output_path: Path,
    config: Optional[OutlierConfig] = None,
) -> Path:
    """
    Write a JSON report describing an outlier filter run.

    Parameters
    ----------
    result : OutlierResult
        Result returned by ``OutlierFilter.run``.
    output_path : Path
        Output JSON path.
    config : OutlierConfig, optional
        Configuration used for the run, included when given.

    Returns
    -------
    Path
        The written path.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    report = {
        "generated": datetime.now().isoformat(timespec="seconds"),
        "summary": calculate_outlier_stats(result),
        "classification": calculate_classification_stats(result.cloud.classification),
    }
    if config is not None:
        report["config"] = generate_config_summary(config)
    if result.output_file is not None:
        report["output_file"] = str(result.output_file)

    with open(output_path, "w") as f:
        json.dump(report, f, indent=2)

    return output_path
