"""
PDF processing for GA Hull.

Rasterizes the first page of a PDF drawing.
"""

import io
import logging
from typing import Optional

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


class PDFProcessor:
    """
    Processes PDF files for the ingestion pipeline.

    Only the first page is rasterized; GA drawings are single-page.
    """

    DEFAULT_DPI = 150

    def __init__(self, dpi: int = DEFAULT_DPI):
        """
        Initialize PDF processor.

        Args:
            dpi: Resolution for rasterization
        """
        self.dpi = dpi

    def rasterize(self, pdf_data: bytes, dpi: Optional[int] = None) -> np.ndarray:
        """
        Rasterize the first PDF page to an RGB image.

        Args:
            pdf_data: PDF file as bytes
            dpi: Optional DPI override

        Returns:
            Image as numpy array (H, W, 3)
        """
        import fitz  # PyMuPDF

        dpi = dpi or self.dpi
        logger.info(f"Rasterizing PDF at {dpi} DPI")

        try:
            doc = fitz.open(stream=pdf_data, filetype="pdf")
        except Exception as e:
            raise ValueError(f"Could not open PDF: {e}") from e

        with doc:
            if len(doc) == 0:
                raise ValueError("PDF has no pages")
            if len(doc) > 1:
                logger.warning(f"PDF has {len(doc)} pages; using the first one only")

            page = doc[0]

            # PDF default is 72 DPI
            zoom = dpi / 72
            pix = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom))
            img_data = pix.tobytes("png")

        with Image.open(io.BytesIO(img_data)) as img:
            img_array = np.array(img.convert("RGB"))

        logger.info(f"Rasterized page 1: {img_array.shape}")
        return img_array
