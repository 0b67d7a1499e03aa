"""
Polyline simplification (Ramer-Douglas-Peucker).
"""

import logging
from typing import Optional, Sequence, Union

from gahull.shared.models import ClassifiedContour, Contour, Point2D, Polyline

logger = logging.getLogger(__name__)


def _segment_distance_sq(
    px: float,
    py: float,
    ax: float,
    ay: float,
    bx: float,
    by: float,
) -> float:
    """Squared distance from point P to segment AB."""
    dx = bx - ax
    dy = by - ay
    length_sq = dx * dx + dy * dy

    if length_sq == 0:
        # Degenerate chord
        ex = px - ax
        ey = py - ay
        return ex * ex + ey * ey

    t = ((px - ax) * dx + (py - ay) * dy) / length_sq
    if t < 0:
        t = 0.0
    elif t > 1:
        t = 1.0

    ex = px - (ax + t * dx)
    ey = py - (ay + t * dy)
    return ex * ex + ey * ey


def simplify_points(points: Sequence[Point2D], tolerance: float) -> list[Point2D]:
    """
    Simplify an ordered point sequence with Ramer-Douglas-Peucker.

    Uses an explicit stack instead of recursion so long, nearly collinear
    contours cannot exhaust the interpreter stack.

    Args:
        points: Ordered points
        tolerance: Maximum perpendicular distance in pixels (negative is 0)

    Returns:
        Subsequence of the input that keeps the first and last point
    """
    if len(points) < 3:
        return list(points)

    if tolerance < 0:
        logger.debug(f"Negative tolerance {tolerance} treated as 0")
        tolerance = 0.0
    tolerance_sq = tolerance * tolerance

    coords = [(float(p.x), float(p.y)) for p in points]
    keep = [False] * len(coords)
    keep[0] = keep[-1] = True

    stack = [(0, len(coords) - 1)]
    while stack:
        first, last = stack.pop()
        if last - first < 2:
            continue

        ax, ay = coords[first]
        bx, by = coords[last]

        max_dist_sq = -1.0
        max_idx = first
        for i in range(first + 1, last):
            px, py = coords[i]
            dist_sq = _segment_distance_sq(px, py, ax, ay, bx, by)
            # Strict comparison keeps the lowest index on ties
            if dist_sq > max_dist_sq:
                max_dist_sq = dist_sq
                max_idx = i

        if max_dist_sq > tolerance_sq:
            keep[max_idx] = True
            stack.append((max_idx, last))
            stack.append((first, max_idx))

    return [p for p, kept in zip(points, keep) if kept]


def simplify_contour(
    contour: Union[Contour, ClassifiedContour],
    tolerance: float,
) -> Optional[Polyline]:
    """
    Simplify one contour into a polyline.

    Role, layer and color are carried over from classified contours.
    Returns None when fewer than 2 points remain.
    """
    points = simplify_points(contour.points, tolerance)
    if len(points) < 2:
        return None

    if isinstance(contour, ClassifiedContour):
        return Polyline(
            source_id=contour.id,
            points=points,
            role=contour.role,
            layer=contour.layer,
            color=contour.color,
        )
    return Polyline(source_id=contour.id, points=points)


def simplify_contours(
    contours: Sequence[Union[Contour, ClassifiedContour]],
    tolerance: float,
) -> list[Polyline]:
    """Simplify contours in order, dropping those with fewer than 2 points."""
    polylines = []
    for contour in contours:
        polyline = simplify_contour(contour, tolerance)
        if polyline is not None:
            polylines.append(polyline)

    logger.info(f"Simplified {len(contours)} contours into {len(polylines)} polylines")
    return polylines
