"""Tests for distance helpers."""

import numpy as np

from py_realm.utils.geometry import distance_between, distances_to, truncated_distance


class TestDistances:
    """Test truncated Euclidean distances."""

    def test_truncation(self):
        """Test that distances are truncated, not rounded."""
        assert truncated_distance(3, 4) == 5
        assert truncated_distance(1, 1) == 1
        assert truncated_distance(2, 2) == 2
        assert truncated_distance(0, 0) == 0

    def test_distance_between(self):
        """Test distance between two points."""
        assert distance_between((0, 0), (0, 10)) == 10
        assert distance_between((-3, -4), (0, 0)) == 5

    def test_vectorised_matches_scalar(self):
        """Test that bulk distances agree with the scalar helper."""
        coords = [(3, 4), (1, 1), (-7, 2), (10, 10)]
        bulk = distances_to(coords, (1, 2))
        assert bulk.dtype == np.int64
        assert list(bulk) == [distance_between(c, (1, 2)) for c in coords]

    def test_empty(self):
        """Test empty input."""
        assert len(distances_to([])) == 0
