"""
Statistics computation for outlier filter results.

Calculates classification statistics and a summary of a filter run.
"""

from typing import Any, Dict

import numpy as np

from pc_outlier.config import ASPRS_CLASS_NAMES


def calculate_classification_stats(classification: np.ndarray) -> Dict:
    """
    Calculate per-class point counts.

    Parameters
    ----------
    classification : np.ndarray
        (N,) array of classification codes.

    Returns
    -------
    dict
        Dictionary with per-class statistics:
        - 'total': Total number of points
        - 'by_class': Dict mapping each present class code to
          {'count', 'percent', 'name'}
    """
    n_total = len(classification)

    stats = {
        "total": n_total,
        "by_class": {},
    }

    codes, counts = np.unique(classification, return_counts=True)
    for code, count in zip(codes.tolist(), counts.tolist()):
        percent = 100 * count / n_total if n_total > 0 else 0.0
        stats["by_class"][code] = {
            "count": count,
            "percent": round(percent, 2),
            "name": ASPRS_CLASS_NAMES.get(code, "User Defined"),
        }

    return stats


def calculate_outlier_stats(result: Any) -> Dict:
    """
    Summarize an outlier filter run.

    Parameters
    ----------
    result : OutlierResult
        Result returned by ``OutlierFilter.run``.

    Returns
    -------
    dict
        Counts, outlier percentage, status, threshold and timing.
    """
    n_points = result.n_points
    outlier_pct = 100 * result.n_outliers / n_points if n_points > 0 else 0.0

    threshold = result.threshold
    if threshold is not None:
        threshold = float(threshold) if np.isfinite(threshold) else None

    return {
        "source_file": result.source_file,
        "method": result.method,
        "status": result.status.value,
        "n_points": n_points,
        "n_inliers": result.n_inliers,
        "n_outliers": result.n_outliers,
        "outlier_percent": round(outlier_pct, 2),
        "label": result.label,
        "threshold": threshold,
        "timing": {k: round(v, 4) for k, v in result.timing.items()},
    }
