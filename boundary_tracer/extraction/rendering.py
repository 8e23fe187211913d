"""
Drawing extracted boundaries onto a canvas.
"""

import cv2
import numpy as np
from typing import List, Sequence, Tuple

from .contour_extraction import polygon_to_contour

# BGR
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)

# Stroke on the source image / on the overlay canvas
SOURCE_STROKE_COLOR = WHITE
OVERLAY_STROKE_COLOR = BLACK


def create_overlay_canvas(
    shape: Sequence[int],
    color: Tuple[int, int, int] = WHITE,
) -> np.ndarray:
    """
    Allocate a uniform 3-channel canvas.

    Args:
        shape: Image shape; only (height, width) is used
        color: Background color (BGR)

    Returns:
        New uint8 canvas of shape (height, width, 3)
    """
    height, width = int(shape[0]), int(shape[1])
    canvas = np.empty((height, width, 3), dtype=np.uint8)
    canvas[:, :] = color
    return canvas


def draw_boundary(
    canvas: np.ndarray,
    polygon: List[Tuple[int, int]],
    color: Tuple[int, int, int] = SOURCE_STROKE_COLOR,
    thickness: int = 2,
) -> np.ndarray:
    """
    Draw a polygon as a closed polyline, in place.

    The stroke is always closed, whether or not the polygon's source
    contour passed the closure test.

    Args:
        canvas: Target image, modified in place
        polygon: Ordered (x, y) vertices
        color: Stroke color (BGR)
        thickness: Stroke width in pixels

    Returns:
        The same canvas array
    """
    if not polygon:
        return canvas

    cv2.polylines(canvas, [polygon_to_contour(polygon)], True, color, thickness)
    return canvas
