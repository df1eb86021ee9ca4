"""Tests for pc_outlier.classification.radius module."""

import os

import numpy as np
import pytest


def test_neighbor_count_includes_self(line_with_gap):
    """Test exactly ``min_k`` points in radius (self included) is an outlier."""
    from pc_outlier.classification.radius import classify_radius

    # Neighbor counts with r=1.5 are 2, 3, 2, 1
    result = classify_radius(line_with_gap, radius=1.5, min_k=2)

    assert result.inliers.tolist() == [1]
    assert result.outliers.tolist() == [0, 2, 3]


def test_min_k_one(line_with_gap):
    """Test min_k=1 keeps every point with at least one other neighbor."""
    from pc_outlier.classification.radius import classify_radius

    result = classify_radius(line_with_gap, radius=1.5, min_k=1)

    assert result.inliers.tolist() == [0, 1, 2]
    assert result.outliers.tolist() == [3]


def test_min_k_zero_keeps_everything(line_with_gap):
    """Test min_k=0 makes every point an inlier (self always counts)."""
    from pc_outlier.classification.radius import classify_radius

    result = classify_radius(line_with_gap, radius=0.1, min_k=0)

    assert result.inliers.tolist() == [0, 1, 2, 3]
    assert result.outliers.size == 0


def test_counts_match_brute_force(simple_xyz):
    """Test classification matches a brute-force neighbor count."""
    from pc_outlier.classification.radius import classify_radius

    radius, min_k = 2.0, 3
    diffs = simple_xyz[:, None, :] - simple_xyz[None, :, :]
    counts = (np.linalg.norm(diffs, axis=2) <= radius).sum(axis=1)

    result = classify_radius(simple_xyz, radius=radius, min_k=min_k, threads=4)

    assert result.inliers.tolist() == np.flatnonzero(counts > min_k).tolist()
    assert result.outliers.tolist() == np.flatnonzero(counts <= min_k).tolist()


def test_partition_invariant(simple_xyz):
    """Test inliers and outliers are disjoint and cover every index."""
    from pc_outlier.classification.radius import classify_radius

    result = classify_radius(simple_xyz, radius=1.5, min_k=2, threads=3)

    combined = np.concatenate([result.inliers, result.outliers])
    assert np.intersect1d(result.inliers, result.outliers).size == 0
    assert np.array_equal(np.sort(combined), np.arange(len(simple_xyz)))


@pytest.mark.parametrize("threads", [1, 4, (os.cpu_count() or 1) + 2])
def test_independent_of_thread_count(simple_xyz, threads):
    """Test results do not depend on the degree of parallelism."""
    from pc_outlier.classification.radius import classify_radius

    reference = classify_radius(simple_xyz, radius=1.5, min_k=2, threads=1)
    result = classify_radius(simple_xyz, radius=1.5, min_k=2, threads=threads)

    assert np.array_equal(result.inliers, reference.inliers)
    assert np.array_equal(result.outliers, reference.outliers)


def test_no_statistics_attached(line_with_gap):
    """Test radius results carry no distance statistics."""
    from pc_outlier.classification.radius import classify_radius

    result = classify_radius(line_with_gap)

    assert result.mean_distances is None
    assert result.threshold is None
