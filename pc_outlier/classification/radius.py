"""
Radius outlier classification.

A point is an inlier when more than ``min_k`` points, itself included, lie
within ``radius`` of it.
"""

import logging
from typing import List

import numpy as np

from pc_outlier.classification.indices import OutlierIndices
from pc_outlier.utils.parallel import distribute
from pc_outlier.utils.spatial import SpatialIndex

logger = logging.getLogger(__name__)


def classify_radius(
    xyz: np.ndarray,
    radius: float = 1.0,
    min_k: int = 2,
    threads: int = 1,
    show_progress: bool = False,
) -> OutlierIndices:
    """
    Classify points by neighbor count within a fixed radius.

    The neighbor count includes the query point itself, and the comparison
    is strict: a point with exactly ``min_k`` points in its radius (itself
    included) is an outlier.

    Parameters
    ----------
    xyz : np.ndarray
        (N, 3) point coordinates.
    radius : float
        Search radius in same units as points.
    min_k : int
        Neighbor count that must be exceeded for a point to be an inlier.
    threads : int
        Number of worker threads.
    show_progress : bool
        If True, display a progress bar.

    Returns
    -------
    OutlierIndices
        Sorted inlier and outlier index sets.
    """
    index = SpatialIndex(xyz).build()

    inliers: List[int] = []
    outliers: List[int] = []

    def count_neighbors(idx: int) -> int:
        return len(index.radius_query(idx, radius))

    def record(idx: int, count: int) -> None:
        if count > min_k:
            inliers.append(idx)
        else:
            outliers.append(idx)

    distribute(index.n_points, threads, count_neighbors, record, show_progress)

    logger.debug(
        f"Radius classification (r={radius}, min_k={min_k}): "
        f"{len(inliers)} inliers, {len(outliers)} outliers"
    )

    return OutlierIndices.from_lists(inliers, outliers)
