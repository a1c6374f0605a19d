"""
Tests for vertex-to-coordinate resolution, synthetic paths and cleaning.
"""

import logging

import pytest

from constants import SYNTHETIC_CENTER_LAT, SYNTHETIC_CENTER_LON
from path_resolver import (
    ResolvedPath,
    clean_path,
    resolve,
    smooth_path,
    synthetic_path,
)


# ============================================================================
# Resolution
# ============================================================================

class TestResolve:
    """Tests for resolve()."""

    def test_empty_sequence(self, sample_lookup):
        """An empty sequence resolves to an empty, non-synthetic path."""
        result = resolve([], sample_lookup)
        assert result.points == []
        assert result.synthetic is False

    def test_swaps_lon_lat(self, sample_lookup):
        """Lookup entries are (lon, lat); path points are (lat, lon)."""
        result = resolve([1, 2], sample_lookup)
        assert result.points == [(51.505, -0.09), (51.506, -0.091)]
        assert result.synthetic is False

    def test_order_and_repeats_preserved(self, sample_lookup):
        """Repeated vertices produce repeated points in order."""
        result = resolve([1, 2, 1], sample_lookup)
        assert result.points == [(51.505, -0.09), (51.506, -0.091), (51.505, -0.09)]

    def test_unmapped_vertices_skipped(self, sample_lookup):
        """Vertices missing from the lookup are dropped and reported."""
        result = resolve([1, 99, 3], sample_lookup)
        assert result.points == [(51.505, -0.09), (51.507, -0.092)]
        assert result.unresolved_ids == [99]
        assert result.synthetic is False

    def test_no_mapping_falls_back_to_synthetic(self, caplog):
        """When nothing resolves, a synthetic path is produced."""
        with caplog.at_level(logging.WARNING, logger="path_resolver"):
            result = resolve([5, 12, 7], {})

        assert result.synthetic is True
        assert len(result.points) == 4
        assert result.unresolved_ids == [5, 12, 7]
        assert "demonstration path" in caplog.text

    def test_none_lookup(self):
        """A missing lookup behaves like an empty one."""
        result = resolve([1, 2], None)
        assert result.synthetic is True

    def test_malformed_entry_treated_as_missing(self):
        """Entries with fewer than two values are unusable."""
        result = resolve([1, 2], {1: (0.0,), 2: (-0.09, 51.5)})
        assert result.points == [(51.5, -0.09)]
        assert result.unresolved_ids == [1]

    def test_result_is_frozen(self, sample_lookup):
        """ResolvedPath should be immutable."""
        result = resolve([1], sample_lookup)
        assert isinstance(result, ResolvedPath)
        with pytest.raises(Exception):
            result.synthetic = True


# ============================================================================
# Synthetic path
# ============================================================================

class TestSyntheticPath:
    """Tests for the deterministic demonstration path."""

    def test_single_vertex(self):
        """Vertex 0 steps 0.3 * 0.05 degrees north from the center."""
        path = synthetic_path([0])
        assert len(path) == 2
        assert path[0] == (SYNTHETIC_CENTER_LAT, SYNTHETIC_CENTER_LON)
        assert path[1][0] == pytest.approx(51.52)
        assert path[1][1] == pytest.approx(-0.09)

    def test_length_is_sequence_plus_one(self):
        """The start point is prepended to one point per vertex."""
        assert len(synthetic_path([3, 8, 15])) == 4
        assert len(synthetic_path(list(range(25)))) == 26

    def test_deterministic(self):
        """The same sequence always produces the same path."""
        assert synthetic_path([5, 12, 7]) == synthetic_path([5, 12, 7])

    def test_resolve_deterministic_without_lookup(self):
        """Resolving with an empty lookup twice gives identical synthetic paths."""
        first = resolve([5, 12, 7], {})
        second = resolve([5, 12, 7], {})
        assert first.points == second.points
        assert first.synthetic is second.synthetic is True

    def test_depends_on_ids(self):
        """Different IDs bend the path differently."""
        assert synthetic_path([5, 12, 7]) != synthetic_path([6, 13, 8])

    def test_endpoints_not_smoothed(self):
        """Smoothing keeps the first point at the center."""
        path = synthetic_path([1, 2, 3, 4])
        assert path[0] == (SYNTHETIC_CENTER_LAT, SYNTHETIC_CENTER_LON)

    def test_negative_ids(self):
        """Negative IDs still produce a full path."""
        path = synthetic_path([-3, -7])
        assert len(path) == 3


# ============================================================================
# Smoothing and cleaning
# ============================================================================

class TestSmoothPath:
    """Tests for the 3-point moving average."""

    def test_short_paths_unchanged(self):
        """Paths under three points are returned as-is."""
        assert smooth_path([(0.0, 0.0), (1.0, 1.0)]) == [(0.0, 0.0), (1.0, 1.0)]

    def test_interior_averaged(self):
        """Interior points are replaced with the mean of their neighborhood."""
        result = smooth_path([(0.0, 0.0), (3.0, 3.0), (0.0, 6.0)])
        assert result[0] == (0.0, 0.0)
        assert result[1] == pytest.approx((1.0, 3.0))
        assert result[2] == (0.0, 6.0)


class TestCleanPath:
    """Tests for near-duplicate removal."""

    def test_empty_and_single(self):
        """Empty and single-point paths pass through."""
        assert clean_path([]) == []
        assert clean_path([(1.0, 2.0)]) == [(1.0, 2.0)]

    def test_exact_duplicates_removed(self):
        """Consecutive identical points collapse."""
        path = [(51.5, -0.1), (51.5, -0.1), (51.6, -0.1)]
        assert clean_path(path) == [(51.5, -0.1), (51.6, -0.1)]

    def test_compares_against_last_retained(self):
        """Small drifts accumulate against the last kept point."""
        path = [(0.0, 0.0), (6e-7, 0.0), (1.2e-6, 0.0)]
        assert clean_path(path) == [(0.0, 0.0), (1.2e-6, 0.0)]

    def test_non_consecutive_repeats_kept(self):
        """Revisiting a point later in the route is not a duplicate."""
        path = [(0.0, 0.0), (0.001, 0.0), (0.0, 0.0)]
        assert clean_path(path) == path

    def test_custom_tolerance(self):
        """A larger tolerance removes coarser jitter."""
        path = [(0.0, 0.0), (0.005, 0.0), (0.02, 0.0)]
        assert clean_path(path, tolerance=0.01) == [(0.0, 0.0), (0.02, 0.0)]

    def test_all_identical_points(self):
        """A path of one repeated point collapses to that point."""
        assert clean_path([(1.0, 2.0)] * 6) == [(1.0, 2.0)]
