"""
Tesseract OCR client for GA Hull.

Extracts word tokens with bounding boxes from a page image.
"""

import logging
from typing import Any, Optional

import numpy as np
import pytesseract
from PIL import Image

from gahull.shared.config import OCRConfig
from gahull.shared.models import BoundingBox, OCRToken

logger = logging.getLogger(__name__)


class TesseractOCRClient:
    """
    Runs Tesseract on page images via pytesseract.
    """

    def __init__(self, config: Optional[OCRConfig] = None):
        self.config = config or OCRConfig()

    def extract_tokens(self, image: np.ndarray) -> list[OCRToken]:
        """
        Extract word tokens from an image.

        Args:
            image: Page image (RGB or grayscale)

        Returns:
            Non-empty word tokens with their boxes and confidences
        """
        pil_image = Image.fromarray(image)
        ocr_data = pytesseract.image_to_data(
            pil_image,
            output_type=pytesseract.Output.DICT,
            config=f"--psm {self.config.psm}",
        )

        tokens = parse_ocr_data(ocr_data)
        logger.info(f"OCR found {len(tokens)} word tokens")
        return tokens


def parse_ocr_data(ocr_data: dict[str, list[Any]]) -> list[OCRToken]:
    """Convert a pytesseract ``image_to_data`` dict into tokens."""
    tokens = []

    for i in range(len(ocr_data.get("text", []))):
        text = str(ocr_data["text"][i]).strip()
        if not text:
            continue

        try:
            conf = float(ocr_data["conf"][i])
        except (TypeError, ValueError):
            conf = -1.0
        if conf < 0:
            continue

        width = int(ocr_data["width"][i])
        height = int(ocr_data["height"][i])
        if width <= 0 or height <= 0:
            continue

        tokens.append(
            OCRToken(
                text=text,
                box=BoundingBox(
                    x=int(ocr_data["left"][i]),
                    y=int(ocr_data["top"][i]),
                    width=width,
                    height=height,
                ),
                confidence=conf,
            )
        )

    return tokens
