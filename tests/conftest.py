"""
Shared pytest fixtures for PC-Outlier tests.

These fixtures provide consistent test data across all test modules.
"""

import numpy as np
import pytest
from pathlib import Path


# =============================================================================
# Synthetic Point Cloud Fixtures
# =============================================================================

@pytest.fixture
def simple_xyz() -> np.ndarray:
    """Simple 100-point random point cloud."""
    np.random.seed(42)  # Reproducible
    return np.random.uniform(0, 10, (100, 3)).astype(np.float64)


@pytest.fixture
def grid_xyz() -> np.ndarray:
    """Regular 10 x 10 x 10 grid with unit spacing (1000 points)."""
    axis = np.arange(10, dtype=np.float64)
    gx, gy, gz = np.meshgrid(axis, axis, axis, indexing="ij")
    return np.column_stack([gx.ravel(), gy.ravel(), gz.ravel()])


@pytest.fixture
def grid_with_far_point(grid_xyz) -> np.ndarray:
    """Unit grid plus one point far outside it (last index)."""
    far = np.array([[100.0, 100.0, 100.0]])
    return np.vstack([grid_xyz, far])


@pytest.fixture
def line_with_gap() -> np.ndarray:
    """
    Points on the X axis: a cluster at 0, 1, 2 and an isolated point at 10.

    With radius 1.5 the neighbor counts (self included) are 2, 3, 2, 1.
    """
    return np.array(
        [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [2.0, 0.0, 0.0], [10.0, 0.0, 0.0]]
    )


@pytest.fixture
def large_xyz() -> np.ndarray:
    """Larger point cloud (10K points) for numerical checks."""
    np.random.seed(42)
    return np.random.uniform(0, 100, (10000, 3)).astype(np.float64)


@pytest.fixture
def noisy_cloud():
    """Dense planar patch with a handful of scattered noise points.

    Returns the PointCloud and the indices of the noise points.
    """
    from pc_outlier.io.las_reader import PointCloud

    np.random.seed(7)
    x = np.repeat(np.linspace(0, 10, 40), 40)
    y = np.tile(np.linspace(0, 10, 40), 40)
    z = np.random.normal(0, 0.01, len(x))
    plane = np.column_stack([x, y, z])

    noise = np.array([
        [5.0, 5.0, 30.0],
        [-20.0, 5.0, 0.0],
        [5.0, 40.0, -15.0],
    ])
    xyz = np.vstack([plane, noise])
    classification = np.full(len(xyz), 2, dtype=np.uint8)  # Ground

    noise_idx = np.arange(len(plane), len(xyz))
    return PointCloud(xyz=xyz, classification=classification), noise_idx


# =============================================================================
# LAS File Fixtures
# =============================================================================

@pytest.fixture
def temp_las_file(tmp_path, simple_xyz) -> Path:
    """Create a temporary LAS file for I/O testing."""
    try:
        import laspy
    except ImportError:
        pytest.skip("laspy not installed")

    filepath = tmp_path / "test_cloud.las"

    las = laspy.create(point_format=0, file_version="1.4")
    las.x = simple_xyz[:, 0]
    las.y = simple_xyz[:, 1]
    las.z = simple_xyz[:, 2]
    las.classification = np.ones(len(simple_xyz), dtype=np.uint8)
    las.write(filepath)

    return filepath


@pytest.fixture
def temp_las_with_noise(tmp_path, noisy_cloud) -> Path:
    """Create a temporary LAS file containing the noisy planar patch."""
    try:
        import laspy
    except ImportError:
        pytest.skip("laspy not installed")

    cloud, _ = noisy_cloud
    filepath = tmp_path / "noisy.las"

    las = laspy.create(point_format=0, file_version="1.4")
    las.header.scales = [0.001, 0.001, 0.001]
    las.x = cloud.xyz[:, 0]
    las.y = cloud.xyz[:, 1]
    las.z = cloud.xyz[:, 2]
    las.classification = cloud.classification
    las.write(filepath)

    return filepath


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def default_config():
    """Default outlier configuration."""
    from pc_outlier.config import OutlierConfig
    return OutlierConfig()


@pytest.fixture
def radius_config():
    """Radius-method configuration matching ``line_with_gap``."""
    from pc_outlier.config import OutlierConfig
    return OutlierConfig(method="radius", radius=1.5, min_k=2)


# =============================================================================
# Utility Fixtures
# =============================================================================

@pytest.fixture
def output_dir(tmp_path) -> Path:
    """Create a temporary output directory."""
    out = tmp_path / "output"
    out.mkdir()
    return out


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )
