"""
OCR module for GA Hull.

Extracts word tokens used to locate view title labels.
"""

from gahull.ocr.tesseract_client import TesseractOCRClient, parse_ocr_data

__all__ = [
    "TesseractOCRClient",
    "parse_ocr_data",
]
