"""Inlier/outlier index sets produced by the outlier classifiers."""

from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np


@dataclass
class OutlierIndices:
    """Disjoint inlier and outlier index sets covering [0, N).

    Attributes
    ----------
    inliers : np.ndarray
        Sorted int64 indices of inlier points.
    outliers : np.ndarray
        Sorted int64 indices of outlier points.
    mean_distances : np.ndarray, optional
        (N,) mean neighbor distance per point (statistical method only).
    threshold : float, optional
        Distance threshold used for classification (statistical method only).
    """

    inliers: np.ndarray
    outliers: np.ndarray
    mean_distances: Optional[np.ndarray] = None
    threshold: Optional[float] = None

    @classmethod
    def from_lists(
        cls,
        inliers: Iterable[int],
        outliers: Iterable[int],
        **kwargs,
    ) -> "OutlierIndices":
        """Build from unordered index collections, sorting each set."""
        return cls(
            inliers=np.sort(np.fromiter(inliers, dtype=np.int64)),
            outliers=np.sort(np.fromiter(outliers, dtype=np.int64)),
            **kwargs,
        )

    @classmethod
    def from_mask(cls, inlier_mask: np.ndarray, **kwargs) -> "OutlierIndices":
        """Build from a boolean (N,) mask where True marks an inlier."""
        inlier_mask = np.asarray(inlier_mask, dtype=bool)
        return cls(
            inliers=np.flatnonzero(inlier_mask).astype(np.int64),
            outliers=np.flatnonzero(~inlier_mask).astype(np.int64),
            **kwargs,
        )

    @property
    def n_inliers(self) -> int:
        return len(self.inliers)

    @property
    def n_outliers(self) -> int:
        return len(self.outliers)

    def outlier_mask(self, n_points: int) -> np.ndarray:
        """Return a boolean (N,) mask where True marks an outlier."""
        mask = np.zeros(n_points, dtype=bool)
        mask[self.outliers] = True
        return mask
