"""
Edge synthesis from the band masks.

Edges are detected per band and merged afterwards so the transition
between the two marker colors does not produce a gradient of its own.
"""

import cv2
import numpy as np


def detect_edges(
    mask: np.ndarray,
    low_threshold: int = 50,
    high_threshold: int = 150,
) -> np.ndarray:
    """
    Apply Canny edge detection to a binary mask.

    Args:
        mask: Binary mask (uint8)
        low_threshold: Lower threshold for hysteresis
        high_threshold: Upper threshold for hysteresis

    Returns:
        Binary edge mask
    """
    return cv2.Canny(mask, low_threshold, high_threshold)


def synthesize_edges(
    band_a_mask: np.ndarray,
    band_b_mask: np.ndarray,
    low_threshold: int = 50,
    high_threshold: int = 150,
) -> np.ndarray:
    """
    Detect edges on each band mask and OR the two edge maps together.

    Returns:
        Combined binary edge map with the masks' dimensions
    """
    band_a_edges = detect_edges(band_a_mask, low_threshold, high_threshold)
    band_b_edges = detect_edges(band_b_mask, low_threshold, high_threshold)
    return cv2.bitwise_or(band_a_edges, band_b_edges)
