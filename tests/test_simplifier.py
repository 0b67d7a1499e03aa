"""Tests for Ramer-Douglas-Peucker polyline simplification."""

from gahull.shared.models import ClassifiedContour, Contour, ContourRole, Point2D
from gahull.vectorization.simplifier import (
    simplify_contour,
    simplify_contours,
    simplify_points,
)


def pts(*coords):
    return [Point2D(x=x, y=y) for x, y in coords]


def test_short_sequences_returned_as_copy():
    """Fewer than 3 points come back unchanged, as a new list."""
    for points in ([], pts((1, 1)), pts((0, 0), (5, 5))):
        result = simplify_points(points, 100.0)
        assert result == points
        assert result is not points


def test_two_points_preserved_for_any_tolerance():
    """A 2-point polyline cannot lose points."""
    points = pts((0, 0), (1000, 3))
    for tolerance in (0.0, 1.0, 1e9, -5.0):
        assert simplify_points(points, tolerance) == points


def test_collinear_points_collapse_to_endpoints():
    """Points on the chord are dropped."""
    points = pts((0, 0), (1, 0), (2, 0), (3, 0))
    assert simplify_points(points, 0.5) == pts((0, 0), (3, 0))


def test_zero_and_negative_tolerance_drop_only_exact_chord_points():
    """Negative tolerance behaves like zero."""
    points = pts((0, 0), (1, 0), (2, 0), (3, 1), (4, 0))
    expected = pts((0, 0), (2, 0), (3, 1), (4, 0))
    assert simplify_points(points, 0.0) == expected
    assert simplify_points(points, -3.0) == expected


def test_spike_kept_or_removed_by_tolerance():
    """A peak survives only when it is farther than the tolerance."""
    points = pts((0, 0), (5, 5), (10, 0))
    assert simplify_points(points, 1.0) == points
    assert simplify_points(points, 10.0) == pts((0, 0), (10, 0))


def test_projection_outside_segment_uses_endpoint_distance():
    """A point beyond the chord end is measured to the nearest endpoint."""
    points = pts((0, 0), (20, 0), (10, 0))
    # Perpendicular distance to the line is 0, but (20, 0) is 10 from the segment
    assert simplify_points(points, 1.0) == points


def test_closed_square_keeps_corners():
    """Degenerate chord (first == last) falls back to endpoint distance."""
    square = pts((0, 0), (10, 0), (10, 10), (0, 10), (0, 0))
    assert simplify_points(square, 1.0) == square


def test_ties_pick_lowest_index():
    """Equal distances split at the earlier point."""
    points = pts((0, 0), (3, 2), (7, 2), (10, 0))
    assert simplify_points(points, 1.2) == pts((0, 0), (3, 2), (10, 0))


def test_result_is_subsequence_with_same_endpoints():
    """Output keeps endpoints and input order."""
    points = pts(*[(i, (i * 7) % 5 - 2) for i in range(40)])
    result = simplify_points(points, 1.5)

    assert result[0] == points[0]
    assert result[-1] == points[-1]
    assert len(result) <= len(points)

    it = iter(points)
    assert all(any(p == q for q in it) for p in result)


def test_simplification_is_idempotent():
    """A second pass with the same tolerance changes nothing."""
    points = pts(*[(i, ((i * 13) % 11) * 0.7) for i in range(60)])
    for tolerance in (0.0, 0.5, 2.0, 10.0):
        once = simplify_points(points, tolerance)
        assert simplify_points(once, tolerance) == once


def test_long_contour_does_not_recurse():
    """Very long inputs are handled without recursion limits."""
    points = pts(*[(i, (i % 2) * 0.01) for i in range(20000)])
    result = simplify_points(points, 1.0)
    assert result == [points[0], points[-1]]


def test_simplify_contour_carries_classification():
    """Role, layer and color follow the contour into the polyline."""
    contour = ClassifiedContour(
        id="side_contour_3",
        points=pts((0, 0), (5, 0), (10, 0)),
        role=ContourRole.KEEL,
        layer="KEEL",
        color="#0000FF",
    )
    polyline = simplify_contour(contour, 1.0)

    assert polyline.source_id == "side_contour_3"
    assert polyline.points == pts((0, 0), (10, 0))
    assert polyline.role == ContourRole.KEEL
    assert polyline.layer == "KEEL"
    assert polyline.color == "#0000FF"


def test_simplify_contours_drops_short_and_keeps_order():
    """Contours with fewer than 2 points produce no polyline."""
    contours = [
        Contour(id="a", points=pts((0, 0), (1, 1))),
        Contour(id="b", points=pts((4, 4))),
        Contour(id="c", points=[]),
        Contour(id="d", points=pts((0, 0), (1, 0), (2, 0))),
    ]
    polylines = simplify_contours(contours, 0.5)
    assert [p.source_id for p in polylines] == ["a", "d"]
