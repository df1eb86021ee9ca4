"""I/O module for reading and writing point cloud files."""

from pc_outlier.io.las_reader import (
    PointCloud,
    get_las_info,
    load_point_cloud,
)
from pc_outlier.io.las_writer import save_point_cloud

__all__ = [
    "PointCloud",
    "load_point_cloud",
    "get_las_info",
    "save_point_cloud",
]
