"""
Contour extraction and longest-contour selection.
"""

import cv2
import numpy as np
from typing import List, Optional, Tuple

# Fewer points than this cannot enclose anything
MIN_CONTOUR_POINTS = 3


def find_external_contours(
    edge_map: np.ndarray,
    min_points: int = MIN_CONTOUR_POINTS,
) -> List[np.ndarray]:
    """
    Extract outer contours from a binary edge map.

    Nested contours (holes) are not returned.

    Args:
        edge_map: Binary image (uint8)
        min_points: Minimum number of points for a contour to be kept

    Returns:
        List of contours (each is Nx1x2 int32 array), in the order traced

    Example:
        >>> contours = find_external_contours(closed_edges)
    """
    # Handle empty map
    if edge_map.size == 0 or np.count_nonzero(edge_map) == 0:
        return []

    contours, _ = cv2.findContours(
        edge_map,
        cv2.RETR_EXTERNAL,  # Only external contours
        cv2.CHAIN_APPROX_SIMPLE  # Compress horizontal/vertical segments
    )

    return [c for c in contours if len(c) >= min_points]


def contour_perimeter(contour: np.ndarray) -> float:
    """Arc length of a contour treated as closed."""
    return float(cv2.arcLength(contour, closed=True))


def select_longest_contour(contours: List[np.ndarray]) -> Optional[np.ndarray]:
    """
    Pick the contour with the largest perimeter.

    Ties keep the contour found first.

    Args:
        contours: Candidate contours

    Returns:
        The longest contour, or None if there are no candidates
    """
    longest = None
    max_perimeter = -1.0

    for contour in contours:
        perimeter = contour_perimeter(contour)
        if perimeter > max_perimeter:
            max_perimeter = perimeter
            longest = contour

    return longest


def contour_points(contour: np.ndarray) -> List[Tuple[int, int]]:
    """
    Convert an OpenCV contour to a list of (x, y) tuples.

    Args:
        contour: OpenCV contour (Nx1x2 array)

    Returns:
        List of (x, y) tuples as Python integers
    """
    return [(int(point[0][0]), int(point[0][1])) for point in contour]


def polygon_to_contour(polygon: List[Tuple[int, int]]) -> np.ndarray:
    """
    Convert a polygon (list of tuples) back to OpenCV contour format.

    Args:
        polygon: List of (x, y) tuples

    Returns:
        OpenCV contour (Nx1x2 int32 array)
    """
    points = np.array(polygon, dtype=np.int32)
    return points.reshape((-1, 1, 2))
