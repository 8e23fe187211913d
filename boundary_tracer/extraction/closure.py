"""
Closure detection and repair for reduced boundary polygons.
"""

import math
from typing import List, Sequence, Tuple

Point = Tuple[int, int]


def point_distance(p: Sequence[float], q: Sequence[float]) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p[0] - q[0], p[1] - q[1])


def is_contour_closed(points: Sequence[Sequence[float]], max_distance: float = 5.0) -> bool:
    """
    Check whether a point list ends near where it starts.

    Args:
        points: Ordered contour points
        max_distance: Largest first/last gap still counted as closed

    Returns:
        True if there are at least 3 points and the gap is below max_distance
    """
    if len(points) < 3:
        return False
    return point_distance(points[0], points[-1]) < max_distance


def repair_closure(
    reduced: List[Point],
    raw: Sequence[Sequence[float]],
    tolerance: float = 5.0,
) -> Tuple[List[Point], bool]:
    """
    Reconnect the ends of a reduced polygon whose source contour was closed.

    The closure test runs on the raw contour, not the reduced one. When the
    raw contour is closed but the reduced polygon's ends are tolerance or
    more apart, the first point is appended to the end.

    Args:
        reduced: Output of the point reducer
        raw: Points of the selected contour before reduction
        tolerance: Closure tolerance in pixels

    Returns:
        Tuple of (points, source_closed). points is a new list.
    """
    points = list(reduced)
    source_closed = is_contour_closed(raw, tolerance)

    if source_closed and points:
        first = points[0]
        if point_distance(first, points[-1]) >= tolerance:
            points.append((first[0], first[1]))

    return points, source_closed
