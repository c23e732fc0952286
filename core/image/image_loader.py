"""
Image Loader Module

Decodes page photos into numpy arrays for the OCR pipeline.
Accepts a file path, encoded image bytes, or an already decoded array.
"""

import logging
from pathlib import Path
from typing import Union

import cv2
import numpy as np

from core.errors import ImageConversionFailedError


logger = logging.getLogger(__name__)

ImageSource = Union[str, Path, bytes, bytearray, np.ndarray]


def loadImage(source: ImageSource) -> np.ndarray:
    """
    Load an image as a uint8 BGR (or grayscale) array.

    Args:
        source: Path to an image file, encoded bytes (JPEG, PNG, ...),
                or a decoded numpy array.

    Returns:
        Decoded image (H, W) or (H, W, C).

    Raises:
        ImageConversionFailedError: If the source cannot be decoded.
    """
    if isinstance(source, np.ndarray):
        return _validateArray(source)

    if isinstance(source, (str, Path)):
        path = Path(source)
        try:
            source = path.read_bytes()
        except OSError as e:
            logger.error(f"Cannot read image file {path}: {e}")
            raise ImageConversionFailedError(f"Cannot read image file: {path}") from e

    if isinstance(source, (bytes, bytearray)):
        if not source:
            raise ImageConversionFailedError("Empty image data")
        buffer = np.frombuffer(bytes(source), dtype=np.uint8)
        image = cv2.imdecode(buffer, cv2.IMREAD_COLOR)
        if image is None:
            logger.error(f"cv2.imdecode failed for {len(source)} bytes")
            raise ImageConversionFailedError("Unsupported or corrupt image data")
        return image

    raise ImageConversionFailedError(f"Unsupported image type: {type(source).__name__}")


def _validateArray(image: np.ndarray) -> np.ndarray:
    if image.size == 0:
        raise ImageConversionFailedError("Empty image array")
    if image.ndim not in (2, 3) or (image.ndim == 3 and image.shape[2] not in (1, 3, 4)):
        raise ImageConversionFailedError(f"Unsupported image shape: {image.shape}")
    if image.dtype != np.uint8:
        # float images in [0, 1]
        if np.issubdtype(image.dtype, np.floating) and image.max() <= 1.0:
            image = image * 255.0
        image = np.clip(image, 0, 255).astype(np.uint8)
    return image
