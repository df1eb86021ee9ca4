"""
PC-Outlier: Point Cloud Outlier Classification.

A Python tool for labelling outlier points in LiDAR point clouds using
either a radius neighbor-count criterion or a statistical mean neighbor
distance criterion.
"""

__version__ = "0.1.0"
__author__ = "connorjmack"

# Import public API
from pc_outlier.config import ASPRS_CLASS_NAMES, LOW_POINT_CLASS, OutlierConfig
from pc_outlier.io import PointCloud, load_point_cloud, save_point_cloud
from pc_outlier.classification import LabelStatus, OutlierIndices
from pc_outlier.classifier import OutlierFilter, OutlierResult, classify_and_label
from pc_outlier.registry import StageRegistry, default_registry

__all__ = [
    "__version__",
    # Config
    "OutlierConfig",
    "ASPRS_CLASS_NAMES",
    "LOW_POINT_CLASS",
    # I/O
    "PointCloud",
    "load_point_cloud",
    "save_point_cloud",
    # Classification
    "OutlierIndices",
    "LabelStatus",
    # Filter
    "OutlierFilter",
    "OutlierResult",
    "classify_and_label",
    # Registry
    "StageRegistry",
    "default_registry",
]
