"""
Near-duplicate vertex removal.

A point is a duplicate when it lies within the tolerance of any point
already kept, on both axes independently:

    |dx| < tolerance and |dy| < tolerance

The first occurrence wins and traversal order is preserved.
"""

import math
from typing import Dict, Iterable, List, Sequence, Tuple

Point = Tuple[int, int]


def round_pixel(value: float) -> int:
    """Round a coordinate to the nearest pixel, halves going up."""
    return int(math.floor(value + 0.5))


def _is_near(a: Point, b: Point, tolerance: float) -> bool:
    return abs(a[0] - b[0]) < tolerance and abs(a[1] - b[1]) < tolerance


def reduce_points(
    points: Iterable[Sequence[float]],
    tolerance: float = 0.5,
) -> List[Point]:
    """
    Collapse near-duplicate vertices by comparing against every kept point.

    Runs in O(n * k) for n input and k kept points, which is fine for
    contours of a few hundred points.

    Args:
        points: Raw (x, y) points
        tolerance: Per-axis merge distance in pixels

    Returns:
        Reduced list of integer (x, y) tuples

    Example:
        >>> reduce_points([(0, 0), (0.2, 0.1), (5, 5)])
        [(0, 0), (5, 5)]
    """
    kept: List[Point] = []

    for x, y in points:
        candidate = (round_pixel(x), round_pixel(y))
        if any(_is_near(existing, candidate, tolerance) for existing in kept):
            continue
        kept.append(candidate)

    return kept


def reduce_points_indexed(
    points: Iterable[Sequence[float]],
    tolerance: float = 0.5,
) -> List[Point]:
    """
    Same result as reduce_points, using a bucket grid instead of all pairs.

    Buckets are tolerance-sized cells. Two points within tolerance on both
    axes always sit in the same or an adjacent cell, so only the 3x3
    neighborhood of a candidate needs checking.

    Args:
        points: Raw (x, y) points
        tolerance: Per-axis merge distance in pixels

    Returns:
        Reduced list of integer (x, y) tuples
    """
    if tolerance <= 0:
        # Nothing is ever strictly closer than zero
        return [(round_pixel(x), round_pixel(y)) for x, y in points]

    kept: List[Point] = []
    grid: Dict[Tuple[int, int], List[Point]] = {}

    for x, y in points:
        candidate = (round_pixel(x), round_pixel(y))
        cell_x = math.floor(candidate[0] / tolerance)
        cell_y = math.floor(candidate[1] / tolerance)

        duplicate = False
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                for existing in grid.get((cell_x + dx, cell_y + dy), ()):
                    if _is_near(existing, candidate, tolerance):
                        duplicate = True
                        break
                if duplicate:
                    break
            if duplicate:
                break

        if duplicate:
            continue

        kept.append(candidate)
        grid.setdefault((cell_x, cell_y), []).append(candidate)

    return kept
