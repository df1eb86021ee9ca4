"""
Spatial indexing utilities for PC-Outlier.

Provides the SpatialIndex class wrapping scipy's cKDTree for the
per-point neighbor queries made by the outlier classifiers.
"""

from typing import Tuple

import numpy as np
from scipy.spatial import cKDTree


class SpatialIndex:
    """Wrapper around scipy cKDTree for per-point neighbor queries.

    The tree is immutable once built, so queries may be issued from several
    threads at the same time.

    Parameters
    ----------
    points : np.ndarray
        (N, 3) array of XYZ coordinates.

    Attributes
    ----------
    points : np.ndarray
        Original point coordinates.
    tree : cKDTree or None
        Spatial index structure, None until ``build()`` is called.
    n_points : int
        Number of points in the index.
    """

    def __init__(self, points: np.ndarray):
        points = np.asarray(points)
        if points.ndim != 2 or points.shape[1] != 3:
            raise ValueError(f"Points must have shape (N, 3), got {points.shape}")

        self.points = np.ascontiguousarray(points, dtype=np.float64)
        self.tree = None
        self.n_points = len(points)

    def build(self) -> "SpatialIndex":
        """Build the KD-tree. Calling it again is a no-op."""
        if self.tree is None:
            self.tree = cKDTree(self.points)
        return self

    def _require_tree(self) -> cKDTree:
        if self.tree is None:
            raise RuntimeError("SpatialIndex.build() must be called before querying")
        return self.tree

    def radius_query(self, idx: int, radius: float) -> np.ndarray:
        """
        Query all points within ``radius`` of point ``idx``.

        Parameters
        ----------
        idx : int
            Index of the query point.
        radius : float
            Search radius in same units as points.

        Returns
        -------
        indices : np.ndarray
            Indices of neighbors within radius (includes ``idx`` itself).
        """
        tree = self._require_tree()
        indices = tree.query_ball_point(self.points[idx], radius)
        return np.asarray(indices, dtype=np.int64)

    def knn_query(self, idx: int, k: int) -> Tuple[np.ndarray, np.ndarray]:
        """
        Query the k nearest neighbors of point ``idx``.

        Parameters
        ----------
        idx : int
            Index of the query point.
        k : int
            Number of neighbors (including self). Capped at ``n_points``.

        Returns
        -------
        indices : np.ndarray
            (k,) indices of neighbors, nearest first.
        sqr_distances : np.ndarray
            (k,) squared Euclidean distances to the neighbors.
        """
        tree = self._require_tree()
        k = min(k, self.n_points)

        distances, indices = tree.query(self.points[idx], k=k)
        distances = np.atleast_1d(distances).astype(np.float64)
        indices = np.atleast_1d(indices).astype(np.int64)

        # cKDTree returns Euclidean distances; squaring may move the last bit
        return indices, distances * distances
