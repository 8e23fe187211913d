"""
Tests for closure detection and repair.
"""

import pytest

from boundary_tracer.extraction.closure import (
    point_distance,
    is_contour_closed,
    repair_closure,
)

SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10)]


class TestIsContourClosed:
    """Tests for is_contour_closed."""

    def test_distance(self):
        """Test Euclidean distance."""
        assert point_distance((0, 0), (3, 4)) == 5.0

    def test_close_ends(self):
        """Test that ends within tolerance count as closed."""
        assert is_contour_closed([(0, 0), (10, 0), (10, 10), (0, 4)], 5.0)

    def test_gap_at_tolerance_is_open(self):
        """Test that a gap exactly at the tolerance is not closed."""
        assert not is_contour_closed([(0, 0), (10, 0), (10, 10), (3, 4)], 5.0)

    def test_far_ends_open(self):
        """Test that distant ends are open."""
        assert not is_contour_closed(SQUARE, 5.0)

    @pytest.mark.parametrize("points", [[], [(0, 0)], [(0, 0), (1, 1)]])
    def test_too_few_points(self, points):
        """Test that fewer than 3 points are never closed."""
        assert not is_contour_closed(points, 5.0)


class TestRepairClosure:
    """Tests for repair_closure."""

    def test_closed_source_appends_first_point(self):
        """Test that an open reduced polygon from a closed contour is re-closed."""
        raw = [(0, 0), (10, 0), (10, 10), (0, 10), (0, 2)]

        points, source_closed = repair_closure(SQUARE, raw, 5.0)

        assert source_closed
        assert points == SQUARE + [(0, 0)]
        assert point_distance(points[0], points[-1]) < 5.0

    def test_open_source_passes_through(self):
        """Test that nothing is appended when the raw contour is open."""
        points, source_closed = repair_closure(SQUARE, SQUARE, 5.0)

        assert not source_closed
        assert points == SQUARE

    def test_already_closed_not_duplicated(self):
        """Test that a reduced polygon whose ends already meet is left alone."""
        reduced = [(0, 0), (10, 0), (10, 10), (0, 10), (0, 3)]

        points, source_closed = repair_closure(reduced, reduced, 5.0)

        assert source_closed
        assert points == reduced

    def test_gap_equal_to_tolerance_is_closed(self):
        """Test that a reduced gap of exactly the tolerance still gets closed."""
        raw = [(0, 0), (10, 0), (10, 10), (0, 1)]
        reduced = [(0, 0), (10, 0), (10, 10), (3, 4)]

        points, _ = repair_closure(reduced, raw, 5.0)

        assert points[-1] == (0, 0)

    def test_empty_reduced(self):
        """Test that an empty reduced list stays empty."""
        points, source_closed = repair_closure([], [(0, 0), (5, 0), (0, 1)], 5.0)

        assert source_closed
        assert points == []

    def test_input_not_mutated(self):
        """Test that the reduced list passed in is not modified."""
        reduced = list(SQUARE)
        raw = [(0, 0), (10, 0), (10, 10), (0, 1)]

        repair_closure(reduced, raw, 5.0)

        assert reduced == SQUARE

    @pytest.mark.parametrize("tolerance", [1.0, 5.0, 20.0])
    def test_closure_invariant(self, tolerance):
        """Test that a closed-marked polygon always ends within tolerance of its start."""
        raw = [(0, 0), (40, 0), (40, 40), (0, 40), (0, 0)]
        reduced = [(0, 0), (40, 0), (40, 40), (0, 40)]

        points, source_closed = repair_closure(reduced, raw, tolerance)

        assert source_closed
        assert point_distance(points[0], points[-1]) < tolerance
