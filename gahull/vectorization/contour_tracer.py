"""
Contour tracing for vectorization.

Thin OpenCV boundary: edge detection and contour tracing happen here and
nowhere else; everything downstream works on plain contours and boxes.
"""

import logging
from typing import Optional

import cv2
import numpy as np

from gahull.ingest.normalizer import ImageNormalizer
from gahull.shared.config import TracerConfig
from gahull.shared.models import BoundingBox, Contour, Point2D, RegionCandidate, ViewName
from gahull.vision.region_classifier import filter_candidates

logger = logging.getLogger(__name__)


class ContourTracer:
    """Traces contours and page regions from raster images."""

    def __init__(self, config: Optional[TracerConfig] = None):
        self.config = config or TracerConfig()
        self.normalizer = ImageNormalizer()

    def detect_edges(self, image: np.ndarray) -> np.ndarray:
        """Blur and run Canny edge detection."""
        gray = self.normalizer.to_grayscale(image)
        k = self.config.blur_kernel
        blurred = cv2.GaussianBlur(gray, (k, k), 0)
        return cv2.Canny(blurred, self.config.canny_low, self.config.canny_high)

    def trace(self, image: np.ndarray, view: "str | ViewName") -> list[Contour]:
        """
        Trace external contours of a view image.

        Args:
            image: View image (RGB, RGBA or grayscale)
            view: View name used to build contour ids

        Returns:
            Contours in discovery order, ids "{view}_contour_{i}"
        """
        view_name = view.value if isinstance(view, ViewName) else str(view)

        if image.size == 0 or image.shape[0] == 0 or image.shape[1] == 0:
            logger.warning(f"[{view_name}] image empty or zero-sized")
            return []

        edges = self.detect_edges(image)
        contours, _ = cv2.findContours(
            edges,
            cv2.RETR_EXTERNAL,
            cv2.CHAIN_APPROX_SIMPLE,
        )

        logger.info(f"[{view_name}] Found {len(contours)} raw contours")

        results = []
        for i, contour in enumerate(contours):
            points = [Point2D(x=int(p[0][0]), y=int(p[0][1])) for p in contour]
            results.append(Contour(id=f"{view_name}_contour_{i}", points=points))

        return results

    def find_region_candidates(self, image: np.ndarray) -> list[RegionCandidate]:
        """
        Find candidate view regions on a full page.

        Dark ink is thresholded and dilated so that each drawing view merges
        into one blob; the bounding boxes of the external blobs are the
        candidates. Boxes too small to be a view are filtered out.

        Args:
            image: Full page image

        Returns:
            Region candidates in discovery order
        """
        if image.size == 0:
            return []

        gray = self.normalizer.to_grayscale(image)
        page_h, page_w = gray.shape[:2]

        _, binary = cv2.threshold(gray, self.config.binary_threshold, 255, cv2.THRESH_BINARY_INV)
        if self.config.dilate_iterations > 0:
            kernel = np.ones((3, 3), np.uint8)
            binary = cv2.dilate(binary, kernel, iterations=self.config.dilate_iterations)

        contours, _ = cv2.findContours(binary, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)

        candidates = []
        for i, contour in enumerate(contours):
            x, y, w, h = cv2.boundingRect(contour)
            if w <= 0 or h <= 0:
                continue
            box = BoundingBox(x=int(x), y=int(y), width=int(w), height=int(h))
            candidates.append(RegionCandidate(box=box, area=box.area, index=i))

        kept = filter_candidates(
            candidates,
            page_w,
            page_h,
            min_area_fraction=self.config.min_area_fraction,
            min_dimension_fraction=self.config.min_dimension_fraction,
        )

        logger.info(f"Found {len(kept)} region candidates ({len(contours)} blobs)")
        return kept
