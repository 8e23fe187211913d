"""
Color mask detection for the two marker bands.

Blurs the input, converts it to HSV and builds one binary mask per band.
"""

import cv2
import numpy as np
from typing import Optional, Tuple

from .color_config import BandRanges, ColorRange


def smooth_image(image: np.ndarray, kernel_size: int = 15) -> np.ndarray:
    """
    Apply a Gaussian blur strong enough to suppress sensor noise.

    Args:
        image: BGR image
        kernel_size: Odd kernel size (kernel_size x kernel_size)

    Returns:
        Blurred copy of the image
    """
    return cv2.GaussianBlur(image, (kernel_size, kernel_size), 0)


def to_hsv(image: np.ndarray) -> np.ndarray:
    """Convert a BGR image to OpenCV HSV (hue 0-180)."""
    return cv2.cvtColor(image, cv2.COLOR_BGR2HSV)


def threshold_range(hsv: np.ndarray, color_range: ColorRange) -> np.ndarray:
    """
    Create a binary mask for pixels within an HSV range.

    Args:
        hsv: HSV image
        color_range: Inclusive HSV bounds

    Returns:
        Binary mask (uint8) where matching pixels are 255, others are 0
    """
    lower, upper = color_range.to_numpy()
    return cv2.inRange(hsv, lower, upper)


def build_band_masks(
    image: np.ndarray,
    ranges: Optional[BandRanges] = None,
    blur_kernel_size: int = 15,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Build the Band A and Band B masks for an image.

    Band B is the union of its main range and the hue-wrap range.

    Args:
        image: BGR image
        ranges: Band ranges (default: purple / orange + red wrap)
        blur_kernel_size: Gaussian kernel size applied before conversion

    Returns:
        Tuple of (band_a_mask, band_b_mask), pixel-aligned with the input

    Example:
        >>> band_a, band_b = build_band_masks(image)
    """
    if ranges is None:
        ranges = BandRanges.default()

    hsv = to_hsv(smooth_image(image, blur_kernel_size))

    band_a_mask = threshold_range(hsv, ranges.band_a)

    band_b_mask = threshold_range(hsv, ranges.band_b)
    wrap_mask = threshold_range(hsv, ranges.band_b_wrap)
    band_b_mask = cv2.bitwise_or(band_b_mask, wrap_mask)

    return band_a_mask, band_b_mask
