"""
Morphological gap closing on the combined edge map.
"""

import cv2
import numpy as np
from typing import Optional

from ..config.extraction_config import MorphologySettings


def close_gaps(
    edge_map: np.ndarray,
    settings: Optional[MorphologySettings] = None,
) -> np.ndarray:
    """
    Bridge small breaks in the traced boundary.

    Operations applied in order:
    1. MORPH_CLOSE with an elliptical kernel: bridges gaps left by thresholding
    2. Dilation with a rectangular kernel: thickens the outline so the top
       edge of a rectangular boundary closes

    Args:
        edge_map: Binary edge map (uint8)
        settings: Kernel sizes and iteration counts

    Returns:
        New binary edge map with the same dimensions
    """
    if settings is None:
        settings = MorphologySettings()

    if edge_map.size == 0:
        return edge_map.copy()

    result = edge_map.copy()

    if settings.close_iterations > 0:
        close_kernel = cv2.getStructuringElement(
            cv2.MORPH_ELLIPSE,
            (settings.close_kernel_size, settings.close_kernel_size),
        )
        result = cv2.morphologyEx(
            result,
            cv2.MORPH_CLOSE,
            close_kernel,
            iterations=settings.close_iterations,
        )

    if settings.dilate_iterations > 0:
        dilate_kernel = cv2.getStructuringElement(
            cv2.MORPH_RECT,
            (settings.dilate_kernel_size, settings.dilate_kernel_size),
        )
        result = cv2.dilate(result, dilate_kernel, iterations=settings.dilate_iterations)

    return result
