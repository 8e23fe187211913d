"""
Image decoding and encoding helpers.

Load and save failures are reported through return values, not exceptions:
load_image returns None and save_image returns False.
"""

import base64
import io
import logging
import os
from pathlib import Path
from typing import Optional, Union

import cv2
import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_image(path: PathLike) -> Optional[np.ndarray]:
    """
    Read a BGR image from disk.

    Returns:
        The decoded image, or None if the file is missing or undecodable
    """
    image = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if image is None:
        logger.error(f"Could not load image: {path}")
        return None
    return image


def save_image(path: PathLike, image: np.ndarray) -> bool:
    """
    Encode an image to disk, creating the parent directory if needed.

    Returns:
        True if the file was written
    """
    dir_path = os.path.dirname(str(path))
    try:
        if dir_path:
            os.makedirs(dir_path, exist_ok=True)
        success = cv2.imwrite(str(path), image)
    except (cv2.error, OSError) as e:
        logger.error(f"Failed to save image to {path}: {e}")
        return False

    if success:
        logger.info(f"Saved image to: {path}")
    else:
        logger.error(f"Failed to save image to: {path}")
    return bool(success)


def image_from_bytes(data: bytes) -> Optional[np.ndarray]:
    """Decode encoded image bytes (PNG, JPEG, ...) to a BGR array."""
    if not data:
        return None
    img_array = np.frombuffer(data, dtype=np.uint8)
    return cv2.imdecode(img_array, cv2.IMREAD_COLOR)


def image_from_base64(base64_string: str) -> Optional[np.ndarray]:
    """Decode a base64 image string to numpy array"""
    # Remove data URL prefix if present
    if "," in base64_string:
        base64_string = base64_string.split(",")[1]

    try:
        img_bytes = base64.b64decode(base64_string, validate=True)
    except ValueError:
        return None

    return image_from_bytes(img_bytes)


def image_to_base64(image: np.ndarray, format: str = "png") -> str:
    """Encode a numpy array image to base64 string"""
    # Convert BGR to RGB for PIL
    if len(image.shape) == 3:
        image_rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
    else:
        image_rgb = image

    pil_image = Image.fromarray(image_rgb)
    buffer = io.BytesIO()
    pil_image.save(buffer, format=format.upper())
    buffer.seek(0)

    return base64.b64encode(buffer.read()).decode("utf-8")
