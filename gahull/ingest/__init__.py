"""
Ingestion module for GA Hull.

Loads drawings into raster buffers.
"""

from gahull.ingest.loader import load_raster
from gahull.ingest.normalizer import ImageNormalizer
from gahull.ingest.pdf_processor import PDFProcessor

__all__ = [
    "ImageNormalizer",
    "PDFProcessor",
    "load_raster",
]
