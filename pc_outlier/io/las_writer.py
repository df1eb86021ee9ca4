"""
LAS/LAZ file writer for PC-Outlier.

Provides save_point_cloud for writing point clouds back out with their
(possibly updated) classification field.
"""

import copy
import logging
from pathlib import Path

import laspy

from pc_outlier.io.las_reader import PointCloud

logger = logging.getLogger(__name__)

# Point formats 0-5 store classification in 5 bits
LEGACY_MAX_CLASS = 31

# Legacy point format -> 1.4 format carrying the same fields
EXTENDED_POINT_FORMATS = {0: 6, 1: 6, 2: 7, 3: 7, 4: 9, 5: 10}


def save_point_cloud(
    cloud: PointCloud,
    output_path: Path,
    compress: bool = True,
) -> Path:
    """
    Save point cloud with its classification field.

    When the cloud was read from a file, the source header (VLRs included)
    and every point record are carried over and only the classification
    changes. A legacy source (point formats 0-5) is upgraded to the matching
    1.4 point format if a classification code above 31 has to be stored.

    Parameters
    ----------
    cloud : PointCloud
        Point cloud (preserves all original attributes if available).
    output_path : Path
        Output file path (.las or .laz).
    compress : bool
        If True, save as LAZ (compressed). Default True.

    Returns
    -------
    Path
        Path actually written, with the suffix adjusted to ``compress``.
    """
    output_path = Path(output_path)

    # Ensure output directory exists
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if cloud._las_data is not None:
        las = _copy_las_data(cloud._las_data)
        if cloud.n_points and int(cloud.classification.max()) > LEGACY_MAX_CLASS:
            las = _extend_point_format(las)
    else:
        las = _create_new_las(cloud)

    las.classification = cloud.classification

    # Handle compression based on file extension and compress flag
    if compress and not output_path.suffix.lower() == ".laz":
        output_path = output_path.with_suffix(".laz")
    elif not compress and output_path.suffix.lower() == ".laz":
        output_path = output_path.with_suffix(".las")

    las.write(output_path)
    return output_path


def _copy_las_data(original: laspy.LasData) -> laspy.LasData:
    """Copy header and points of the source so the original stays untouched."""
    return laspy.LasData(
        header=copy.deepcopy(original.header),
        points=original.points.copy(),
    )


def _extend_point_format(las: laspy.LasData) -> laspy.LasData:
    """Convert a legacy point format to one with an 8-bit classification."""
    source_id = las.header.point_format.id
    target_id = EXTENDED_POINT_FORMATS.get(source_id)
    if target_id is None:
        return las

    logger.info(
        f"Point format {source_id} stores classes up to {LEGACY_MAX_CLASS}; "
        f"writing point format {target_id} instead"
    )
    return laspy.convert(las, point_format_id=target_id, file_version="1.4")


def _create_new_las(cloud: PointCloud) -> laspy.LasData:
    """Create a new LAS file from PointCloud data."""
    # Point format 6 stores the full 8-bit classification
    las = laspy.create(point_format=6, file_version="1.4")

    las.header.offsets = cloud.xyz.min(axis=0) if cloud.n_points else [0.0, 0.0, 0.0]
    las.header.scales = [0.001, 0.001, 0.001]

    las.x = cloud.xyz[:, 0]
    las.y = cloud.xyz[:, 1]
    las.z = cloud.xyz[:, 2]

    return las
