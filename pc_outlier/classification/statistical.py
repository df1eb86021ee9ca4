"""
Statistical outlier classification.

Each point's mean distance to its ``mean_k`` nearest neighbors is compared
against ``mean + multiplier * std`` of those mean distances over the whole
cloud. Both the per-point mean and the global statistics are accumulated
in a single pass with online update rules, so large clouds with very large
or very small spacings stay numerically stable.
"""

import logging
import math
from typing import Iterable

import numpy as np

from pc_outlier.classification.indices import OutlierIndices
from pc_outlier.utils.parallel import distribute
from pc_outlier.utils.spatial import SpatialIndex

logger = logging.getLogger(__name__)


def running_mean(values: Iterable[float]) -> float:
    """
    Arithmetic mean via the update ``A <- A + (d_j - A) / j``.

    Returns 0.0 for an empty sequence.
    """
    acc = 0.0
    for j, d in enumerate(values, start=1):
        acc += (d - acc) / j
    return acc


class RunningStats:
    """Single-pass mean and sample variance (Welford's method).

    Examples
    --------
    >>> stats = RunningStats()
    >>> for d in (1.0, 2.0, 3.0):
    ...     stats.push(d)
    >>> stats.mean, stats.variance
    (2.0, 1.0)
    """

    def __init__(self):
        self.n = 0
        self._m1 = 0.0
        self._m2 = 0.0

    def push(self, value: float) -> None:
        n1 = self.n
        self.n += 1
        delta = value - self._m1
        delta_n = delta / self.n
        self._m1 += delta_n
        self._m2 += delta * delta_n * n1

    def extend(self, values: Iterable[float]) -> "RunningStats":
        for value in values:
            self.push(float(value))
        return self

    @property
    def mean(self) -> float:
        return self._m1

    @property
    def variance(self) -> float:
        """Sample variance (n - 1 denominator); NaN with fewer than two values."""
        if self.n < 2:
            return math.nan
        return self._m2 / (self.n - 1.0)

    @property
    def std(self) -> float:
        return math.sqrt(self.variance)


def mean_neighbor_distances(
    index: SpatialIndex,
    mean_k: int,
    threads: int = 1,
    show_progress: bool = False,
) -> np.ndarray:
    """
    Compute each point's mean distance to its ``mean_k`` nearest neighbors.

    Parameters
    ----------
    index : SpatialIndex
        Built spatial index over the points.
    mean_k : int
        Number of neighbors, excluding the point itself.
    threads : int
        Number of worker threads.
    show_progress : bool
        If True, display a progress bar.

    Returns
    -------
    np.ndarray
        (N,) mean neighbor distances in float64.
    """
    distances = np.zeros(index.n_points, dtype=np.float64)

    # The query point comes back first at distance 0 and is skipped
    count = mean_k + 1

    def mean_distance(idx: int) -> float:
        _, sqr_dists = index.knn_query(idx, count)
        return running_mean(math.sqrt(d) for d in sqr_dists[1:])

    def record(idx: int, value: float) -> None:
        distances[idx] = value

    distribute(index.n_points, threads, mean_distance, record, show_progress)

    return distances


def classify_statistical(
    xyz: np.ndarray,
    mean_k: int = 8,
    multiplier: float = 2.0,
    threads: int = 1,
    show_progress: bool = False,
) -> OutlierIndices:
    """
    Classify points by mean neighbor distance against a global threshold.

    Parameters
    ----------
    xyz : np.ndarray
        (N, 3) point coordinates.
    mean_k : int
        Number of nearest neighbors (excluding self) per point.
    multiplier : float
        Standard deviation multiplier for the threshold.
    threads : int
        Number of worker threads.
    show_progress : bool
        If True, display a progress bar.

    Returns
    -------
    OutlierIndices
        Sorted inlier and outlier index sets, with the per-point mean
        distances and the threshold used.
    """
    index = SpatialIndex(xyz).build()

    distances = mean_neighbor_distances(index, mean_k, threads, show_progress)

    # Fixed index order keeps the statistics independent of worker scheduling
    stats = RunningStats().extend(distances)
    threshold = stats.mean + multiplier * stats.std

    logger.debug(
        f"Statistical classification (mean_k={mean_k}, multiplier={multiplier}): "
        f"mean={stats.mean:.6g}, std={stats.std:.6g}, threshold={threshold:.6g}"
    )

    # NaN threshold compares False everywhere, so every point is an outlier
    return OutlierIndices.from_mask(
        distances < threshold,
        mean_distances=distances,
        threshold=threshold,
    )
