"""
Image normalization for GA Hull.
"""

import logging

import cv2
import numpy as np

from gahull.shared.models import BoundingBox

logger = logging.getLogger(__name__)


class ImageNormalizer:
    """
    Normalizes raster buffers before tracing.

    Operations:
    - Color space conversion (RGB/RGBA to grayscale)
    - Cropping to a page region
    """

    def to_grayscale(self, image: np.ndarray) -> np.ndarray:
        """Convert an RGB or RGBA image to grayscale."""
        if image.ndim == 2:
            return image
        if image.shape[2] == 4:
            return cv2.cvtColor(image, cv2.COLOR_RGBA2GRAY)
        return cv2.cvtColor(image, cv2.COLOR_RGB2GRAY)

    def crop(self, image: np.ndarray, box: BoundingBox) -> np.ndarray:
        """
        Crop an image to a box, clipped to the image bounds.

        Returns an empty array when the box lies outside the image.
        """
        height, width = image.shape[:2]

        x1 = max(0, int(box.x))
        y1 = max(0, int(box.y))
        x2 = min(width, int(round(box.x2)))
        y2 = min(height, int(round(box.y2)))

        if x2 <= x1 or y2 <= y1:
            logger.warning(f"Crop box {box} lies outside {width}x{height} image")
            return image[0:0, 0:0]

        return image[y1:y2, x1:x2].copy()
