"""Classification module for radius and statistical outlier detection."""

from pc_outlier.classification.indices import OutlierIndices
from pc_outlier.classification.labeling import LabelStatus, apply_classification
from pc_outlier.classification.radius import classify_radius
from pc_outlier.classification.statistical import (
    RunningStats,
    classify_statistical,
    mean_neighbor_distances,
    running_mean,
)

__all__ = [
    # indices
    "OutlierIndices",
    # radius
    "classify_radius",
    # statistical
    "RunningStats",
    "classify_statistical",
    "mean_neighbor_distances",
    "running_mean",
    # labeling
    "LabelStatus",
    "apply_classification",
]
