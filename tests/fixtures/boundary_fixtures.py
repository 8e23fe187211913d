"""
Programmatic test image generation for boundary extraction tests.
"""

import numpy as np
import cv2
from typing import Tuple

# OpenCV hues (0-180)
PURPLE_HUE = 150
ORANGE_HUE = 15
RED_WRAP_HUE = 175
GREEN_HUE = 60

# Unsaturated background that no band matches and a white stroke changes
MID_GRAY = 128


def hsv_color_to_bgr(h: int, s: int = 255, v: int = 255) -> Tuple[int, int, int]:
    """Convert a single HSV color to a BGR tuple."""
    hsv = np.zeros((1, 1, 3), dtype=np.uint8)
    hsv[:, :] = (h, s, v)
    bgr = cv2.cvtColor(hsv, cv2.COLOR_HSV2BGR)[0, 0]
    return int(bgr[0]), int(bgr[1]), int(bgr[2])


def create_solid_hsv_image(h: int, s: int = 255, v: int = 255, size: Tuple[int, int] = (100, 100)) -> np.ndarray:
    """Create a BGR image filled with a single HSV color."""
    image = np.zeros((size[0], size[1], 3), dtype=np.uint8)
    image[:, :] = hsv_color_to_bgr(h, s, v)
    return image


def create_black_image(size: Tuple[int, int] = (200, 200)) -> np.ndarray:
    """Create an all-black BGR image."""
    return np.zeros((size[0], size[1], 3), dtype=np.uint8)


def create_border_image(
    rect: Tuple[int, int, int, int] = (40, 160, 40, 160),
    thickness: int = 10,
    hue: int = PURPLE_HUE,
    size: Tuple[int, int] = (200, 200),
    background: int = 255,
) -> np.ndarray:
    """
    Create a gray-level image with a rectangular colored border.

    Args:
        rect: Outer edge of the border as (y1, y2, x1, x2)
        thickness: Border thickness in pixels
        hue: OpenCV hue of the border
        size: Image dimensions (height, width)
        background: Gray level outside and inside the border (default white)

    Returns:
        BGR image
    """
    image = np.full((size[0], size[1], 3), background, dtype=np.uint8)
    y1, y2, x1, x2 = rect

    image[y1:y2, x1:x2] = hsv_color_to_bgr(hue)
    image[y1 + thickness:y2 - thickness, x1 + thickness:x2 - thickness] = background

    return image


def create_two_color_border(
    rect: Tuple[int, int, int, int] = (40, 160, 40, 160),
    thickness: int = 10,
    size: Tuple[int, int] = (200, 200),
) -> np.ndarray:
    """
    Create a border that is purple on its top half and orange on its bottom half.
    """
    image = create_border_image(rect, thickness, PURPLE_HUE, size)
    y1, y2, x1, x2 = rect
    mid = (y1 + y2) // 2

    orange = hsv_color_to_bgr(ORANGE_HUE)
    bottom = image[mid:y2, x1:x2]
    border_pixels = np.all(bottom == hsv_color_to_bgr(PURPLE_HUE), axis=2)
    bottom[border_pixels] = orange

    return image


def create_quadrant_border(quadrant: str, size: Tuple[int, int] = (200, 200)) -> np.ndarray:
    """
    Create a white image with a purple border inside one quadrant.

    Args:
        quadrant: One of "top_left", "top_right", "bottom_left", "bottom_right"
    """
    h, w = size
    half_h, half_w = h // 2, w // 2
    margin = 15

    y_offset = 0 if quadrant.startswith("top") else half_h
    x_offset = 0 if quadrant.endswith("left") else half_w

    rect = (
        y_offset + margin,
        y_offset + half_h - margin,
        x_offset + margin,
        x_offset + half_w - margin,
    )
    return create_border_image(rect, thickness=8, size=size)


def encode_png(image: np.ndarray) -> bytes:
    """Encode a BGR image to PNG bytes."""
    ok, buffer = cv2.imencode(".png", image)
    assert ok
    return buffer.tobytes()


def polygon_bounds(points) -> Tuple[int, int, int, int]:
    """Return (x_min, y_min, x_max, y_max) of a list of (x, y) points."""
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return min(xs), min(ys), max(xs), max(ys)
