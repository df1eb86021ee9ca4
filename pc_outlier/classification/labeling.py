"""
Writing outlier labels into a point cloud.

The applier never discards data: it either labels the outliers or, when
labelling would be meaningless, returns the cloud unchanged.
"""

import logging
from enum import Enum
from typing import Tuple

from pc_outlier.classification.indices import OutlierIndices
from pc_outlier.config import LOW_POINT_CLASS
from pc_outlier.io.las_reader import PointCloud

logger = logging.getLogger(__name__)


class LabelStatus(str, Enum):
    """Outcome of an outlier filter run."""

    EMPTY = "empty"
    UNRECOGNIZED_METHOD = "unrecognized_method"
    ALL_OUTLIERS = "all_outliers"
    LABELED = "labeled"
    NO_OUTLIERS = "no_outliers"


def apply_classification(
    cloud: PointCloud,
    indices: OutlierIndices,
    label: int = LOW_POINT_CLASS,
) -> Tuple[PointCloud, LabelStatus]:
    """
    Write ``label`` to every outlier point of ``cloud`` in place.

    Parameters
    ----------
    cloud : PointCloud
        Point cloud to label.
    indices : OutlierIndices
        Inlier/outlier partition of the cloud.
    label : int
        Classification code for outlier points.

    Returns
    -------
    cloud : PointCloud
        The same cloud object, modified only in the LABELED case.
    status : LabelStatus
        Which of the fallback branches was taken.
    """
    if cloud.size() == 0:
        return cloud, LabelStatus.EMPTY

    if indices.n_inliers == 0:
        logger.warning(
            "Requested filter would remove all points. "
            "Try a larger radius/smaller minimum neighbors."
        )
        return cloud, LabelStatus.ALL_OUTLIERS

    if indices.n_outliers == 0:
        logger.info("Filtered cloud has no outliers.")
        return cloud, LabelStatus.NO_OUTLIERS

    cloud.set_classification(indices.outliers, label)
    logger.debug(f"Labeled {indices.n_outliers} outliers as class {label}")

    return cloud, LabelStatus.LABELED
