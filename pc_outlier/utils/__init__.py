"""Utility module for spatial indexing and parallel work distribution."""

from pc_outlier.utils.parallel import (
    WorkerError,
    distribute,
    resolve_thread_count,
)
from pc_outlier.utils.spatial import SpatialIndex

__all__ = [
    "SpatialIndex",
    "WorkerError",
    "distribute",
    "resolve_thread_count",
]
