"""
Batch processing and image I/O.
"""

from .aggregator import (
    MultiImageAggregator,
    BatchResult,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_COMBINED_OUTPUT_PATH,
)
from .image_io import load_image, save_image, image_from_base64, image_to_base64

__all__ = [
    "MultiImageAggregator",
    "BatchResult",
    "DEFAULT_OUTPUT_PATH",
    "DEFAULT_COMBINED_OUTPUT_PATH",
    "load_image",
    "save_image",
    "image_from_base64",
    "image_to_base64",
]
