"""
Raster loading for GA Hull.

Loads a PNG/JPG image or the first page of a PDF into an RGB buffer.
"""

import logging
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image, UnidentifiedImageError

from gahull.ingest.pdf_processor import PDFProcessor

logger = logging.getLogger(__name__)


IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".bmp", ".tif", ".tiff"}


def load_raster(path: "str | Path", dpi: Optional[int] = None) -> np.ndarray:
    """
    Load a drawing into an RGB numpy array.

    Args:
        path: Image or PDF file
        dpi: Rasterization DPI for PDFs

    Returns:
        Image as numpy array (H, W, 3)

    Raises:
        ValueError: If the file is missing, unsupported or unreadable
    """
    path = Path(path)
    if not path.is_file():
        raise ValueError(f"Input file not found: {path}")

    suffix = path.suffix.lower()

    if suffix == ".pdf":
        return PDFProcessor().rasterize(path.read_bytes(), dpi=dpi)

    if suffix not in IMAGE_SUFFIXES:
        raise ValueError(f"Unsupported input type '{suffix}': {path}")

    try:
        with Image.open(path) as img:
            image = np.array(img.convert("RGB"))
    except UnidentifiedImageError as e:
        raise ValueError(f"Could not load image: {path}") from e

    logger.info(f"Loaded {path.name}: {image.shape[1]}x{image.shape[0]}")
    return image
