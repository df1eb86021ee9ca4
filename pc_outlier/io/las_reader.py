"""
LAS/LAZ file reader for PC-Outlier.

Provides the PointCloud dataclass and load_point_cloud function for
reading LiDAR point cloud files.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import laspy
import numpy as np


@dataclass
class PointCloud:
    """Container for point cloud data.

    Only coordinates are read and only the classification attribute is
    written by the outlier filter; everything else in the source file is
    carried through untouched in ``_las_data``.

    Parameters
    ----------
    xyz : np.ndarray
        (N, 3) array of XYZ coordinates in float64.
    classification : np.ndarray, optional
        (N,) array of classification codes as uint8. Zeros when omitted.
    source_file : Path, optional
        Path to the source LAS/LAZ file.

    Attributes
    ----------
    _las_data : laspy.LasData, optional
        Original LAS data for preserving attributes during output.
    """

    xyz: np.ndarray
    classification: Optional[np.ndarray] = None
    source_file: Optional[Path] = None

    # Store original LAS data for preservation
    _las_data: Optional[laspy.LasData] = field(default=None, repr=False)

    def __post_init__(self):
        """Validate array shapes and types."""
        self.xyz = np.asarray(self.xyz, dtype=np.float64)
        if self.xyz.ndim != 2 or self.xyz.shape[1] != 3:
            raise ValueError(f"xyz must have shape (N, 3), got {self.xyz.shape}")

        if self.classification is None:
            self.classification = np.zeros(len(self.xyz), dtype=np.uint8)
        else:
            self.classification = np.asarray(self.classification, dtype=np.uint8)
            if self.classification.shape != (len(self.xyz),):
                raise ValueError(
                    f"classification length ({len(self.classification)}) must match "
                    f"xyz length ({len(self.xyz)})"
                )

    @property
    def n_points(self) -> int:
        """Return number of points in the cloud."""
        return len(self.xyz)

    def size(self) -> int:
        """Return number of points in the cloud."""
        return self.n_points

    def get_coordinates(self, idx: int) -> Tuple[float, float, float]:
        """Return the (x, y, z) coordinates of point ``idx``."""
        x, y, z = self.xyz[idx]
        return float(x), float(y), float(z)

    def set_classification(
        self,
        idx: Union[int, np.ndarray],
        label: int,
    ) -> None:
        """
        Write a classification code to one or more points.

        Parameters
        ----------
        idx : int or np.ndarray
            Point index or array of point indices.
        label : int
            Classification code (0-255).
        """
        self.classification[idx] = label

    def copy(self) -> "PointCloud":
        """Return an independent copy of the cloud (shares ``_las_data``)."""
        return PointCloud(
            xyz=self.xyz.copy(),
            classification=self.classification.copy(),
            source_file=self.source_file,
            _las_data=self._las_data,
        )


def load_point_cloud(filepath: Path) -> PointCloud:
    """
    Load a LAS/LAZ file into a PointCloud object.

    Extracts XYZ coordinates and the classification field.
    Preserves original LAS data for later output.

    Parameters
    ----------
    filepath : Path
        Path to LAS or LAZ file.

    Returns
    -------
    PointCloud
        Point cloud object with XYZ and classification.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the file cannot be read as a valid LAS/LAZ file.
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    try:
        las = laspy.read(filepath)
    except Exception as e:
        raise ValueError(f"Failed to read LAS file: {filepath}. Error: {e}") from e

    xyz = np.column_stack([las.x, las.y, las.z]).astype(np.float64)
    classification = np.array(las.classification, dtype=np.uint8)

    return PointCloud(
        xyz=xyz,
        classification=classification,
        source_file=filepath,
        _las_data=las,
    )


def get_las_info(filepath: Path) -> Dict[str, Any]:
    """
    Get summary information about a LAS file without fully loading it.

    Parameters
    ----------
    filepath : Path
        Path to LAS or LAZ file.

    Returns
    -------
    dict
        Dictionary containing file information.
    """
    filepath = Path(filepath)

    with laspy.open(filepath) as f:
        header = f.header
        info = {
            "filepath": str(filepath),
            "point_count": header.point_count,
            "point_format": header.point_format.id,
            "version": f"{header.version.major}.{header.version.minor}",
            "bounds": {
                "x": (header.x_min, header.x_max),
                "y": (header.y_min, header.y_max),
                "z": (header.z_min, header.z_max),
            },
            "scale": (header.x_scale, header.y_scale, header.z_scale),
            "offset": (header.x_offset, header.y_offset, header.z_offset),
        }

    return info
