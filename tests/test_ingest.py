"""Tests for raster loading, PDF rasterization and cropping."""

import fitz
import numpy as np
import pytest
from PIL import Image

from gahull.ingest.loader import load_raster
from gahull.ingest.normalizer import ImageNormalizer
from gahull.ingest.pdf_processor import PDFProcessor
from gahull.shared.models import BoundingBox


def make_pdf(pages=1):
    doc = fitz.open()
    for _ in range(pages):
        page = doc.new_page(width=200, height=100)
        page.draw_rect(fitz.Rect(20, 20, 180, 80), color=(0, 0, 0), fill=(0, 0, 0))
    data = doc.tobytes()
    doc.close()
    return data


def test_rasterize_first_page():
    image = PDFProcessor().rasterize(make_pdf(), dpi=72)

    assert image.shape == (100, 200, 3)
    assert image[50, 100].max() < 50
    assert image[5, 5].min() > 200


def test_rasterize_dpi_scales_output():
    image = PDFProcessor(dpi=144).rasterize(make_pdf())
    assert image.shape[:2] == (200, 400)


def test_rasterize_multi_page_uses_first(caplog):
    image = PDFProcessor().rasterize(make_pdf(pages=2), dpi=72)

    assert image.shape == (100, 200, 3)
    assert "using the first one only" in caplog.text


def test_rasterize_rejects_garbage():
    with pytest.raises(ValueError):
        PDFProcessor().rasterize(b"definitely not a pdf")


def test_load_png(tmp_path):
    path = tmp_path / "view.png"
    Image.new("L", (30, 20), color=128).save(path)

    image = load_raster(path)

    assert image.shape == (20, 30, 3)
    assert image.dtype == np.uint8


def test_load_pdf(tmp_path):
    path = tmp_path / "page.pdf"
    path.write_bytes(make_pdf())

    assert load_raster(path, dpi=72).shape == (100, 200, 3)


def test_load_missing_file(tmp_path):
    with pytest.raises(ValueError, match="not found"):
        load_raster(tmp_path / "missing.png")


def test_load_unsupported_suffix(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello")

    with pytest.raises(ValueError, match="Unsupported"):
        load_raster(path)


def test_load_corrupt_image(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"not really a png")

    with pytest.raises(ValueError, match="Could not load"):
        load_raster(path)


def test_crop_clips_to_image():
    image = np.arange(100, dtype=np.uint8).reshape(10, 10)
    normalizer = ImageNormalizer()

    crop = normalizer.crop(image, BoundingBox(x=5, y=5, width=20, height=20))
    assert crop.shape == (5, 5)
    assert crop[0, 0] == 55

    outside = normalizer.crop(image, BoundingBox(x=50, y=50, width=5, height=5))
    assert outside.size == 0


def test_to_grayscale():
    normalizer = ImageNormalizer()
    rgb = np.zeros((4, 4, 3), dtype=np.uint8)
    rgba = np.zeros((4, 4, 4), dtype=np.uint8)

    assert normalizer.to_grayscale(rgb).shape == (4, 4)
    assert normalizer.to_grayscale(rgba).shape == (4, 4)
    assert normalizer.to_grayscale(rgb[:, :, 0]).shape == (4, 4)
