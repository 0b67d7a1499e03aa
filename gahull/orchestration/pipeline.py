"""
Pipeline orchestration for GA Hull.

Two modes:
- views: one image per view, traced and classified directly
- page: one full GA page, split into views first (by shape, or by
  OCR title labels), then each cropped view is traced and classified
"""

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

import cv2
import numpy as np

from gahull.dxf_writer.writer import DXFWriter
from gahull.ingest.normalizer import ImageNormalizer
from gahull.shared.config import get_settings
from gahull.shared.models import (
    BoundingBox,
    PipelineResult,
    RegionCandidate,
    ViewAssignment,
    ViewName,
    ViewResult,
)
from gahull.vectorization.contour_tracer import ContourTracer
from gahull.vectorization.handler import VectorizationHandler
from gahull.vision.label_regions import LabelRegionFinder
from gahull.vision.region_classifier import RegionClassifier

logger = logging.getLogger(__name__)


class GAPipeline:
    """
    Runs a GA drawing through tracing, classification, simplification
    and serialization. Every run returns a fresh PipelineResult; the
    pipeline itself holds no per-run state.
    """

    def __init__(
        self,
        settings: Optional[Any] = None,
        tracer: Optional[ContourTracer] = None,
        ocr_client: Optional[Any] = None,
        max_workers: Optional[int] = None,
    ):
        """
        Initialize pipeline.

        Args:
            settings: Settings instance (defaults to cached settings)
            tracer: Contour tracer (defaults to the OpenCV tracer)
            ocr_client: Object with ``extract_tokens(image)``; created on
                first use of OCR mode when not given
            max_workers: Worker threads per view
        """
        self.settings = settings or get_settings()

        self.tracer = tracer or ContourTracer(self.settings.tracer)
        self.normalizer = ImageNormalizer()
        self.region_classifier = RegionClassifier(self.settings.region)
        self.label_finder = LabelRegionFinder(
            keywords=self.settings.ocr.keywords,
            min_confidence=self.settings.ocr.min_confidence,
        )
        self.handler = VectorizationHandler(self.settings, max_workers=max_workers)
        self._ocr_client = ocr_client

    @property
    def ocr_client(self) -> Any:
        """Get or create the OCR client."""
        if self._ocr_client is None:
            from gahull.ocr.tesseract_client import TesseractOCRClient

            self._ocr_client = TesseractOCRClient(self.settings.ocr)
        return self._ocr_client

    def run_views(
        self,
        images: Mapping["str | ViewName", np.ndarray],
        tolerance: Optional[float] = None,
        scale: Optional[float] = None,
    ) -> PipelineResult:
        """
        Process one image per view.

        Args:
            images: View name to view image
            tolerance: Simplification tolerance override
            scale: Export scale override

        Returns:
            Pipeline result keyed by view
        """
        result = PipelineResult()
        logger.info("=== AUTO-DETECT START ===")

        for view, image in images.items():
            view_result = self._process_view(view, image, tolerance, scale)
            if view_result is None:
                continue
            if view_result.view in result.views:
                logger.warning(
                    f"View '{view}' maps to {view_result.view.value}, "
                    f"which is already taken; replacing the earlier result"
                )
                result.add_note(f"Duplicate view {view_result.view.value} replaced by '{view}'")
            result.views[view_result.view] = view_result

        result.add_note(f"Processed {len(result.views)} of {len(images)} views")
        logger.info("=== AUTO-DETECT COMPLETE ===")
        return result

    def run_page(
        self,
        page: np.ndarray,
        use_ocr: bool = False,
        tolerance: Optional[float] = None,
        scale: Optional[float] = None,
    ) -> PipelineResult:
        """
        Split a full page into views and process each one.

        Args:
            page: Full page image
            use_ocr: Locate views by their title labels before falling
                back to shape rules
            tolerance: Simplification tolerance override
            scale: Export scale override

        Returns:
            Pipeline result keyed by view
        """
        result = PipelineResult()

        candidates = self.tracer.find_region_candidates(page)
        result.add_note(f"Region candidates: {len(candidates)}")

        if use_ocr:
            assignment = self._assign_by_labels(page, candidates, result)
        else:
            assignment = self.region_classifier.classify(candidates)
        result.assignment = assignment

        if len(assignment) == 0:
            logger.warning("No views found on page")
            result.add_note("No views found on page")
            return result

        for view, box in assignment.boxes.items():
            crop = self.normalizer.crop(page, box)
            view_result = self._process_view(view, crop, tolerance, scale, region=box)
            if view_result is not None:
                result.views[view] = view_result

        result.add_note(f"Processed {len(result.views)} of {len(assignment)} views")
        return result

    def _assign_by_labels(
        self,
        page: np.ndarray,
        candidates: list[RegionCandidate],
        result: PipelineResult,
    ) -> ViewAssignment:
        """Pair OCR title labels with regions, then fill the rest by shape."""
        tokens = self.ocr_client.extract_tokens(page)
        labels = self.label_finder.find(tokens)
        assignment = self.label_finder.attach_regions(labels, candidates)
        result.add_note(f"Views located by label: {sorted(v.value for v in assignment.boxes)}")

        taken = list(assignment.boxes.values())
        remaining = [c for c in candidates if c.box not in taken]
        fallback = self.region_classifier.classify(remaining, filled=assignment.boxes.keys())
        assignment.boxes.update(fallback.boxes)

        return assignment

    def _process_view(
        self,
        view: "str | ViewName",
        image: np.ndarray,
        tolerance: Optional[float],
        scale: Optional[float],
        region: Optional[BoundingBox] = None,
    ) -> Optional[ViewResult]:
        view_name = ViewName.parse(view)
        if image is None or image.size == 0:
            logger.warning(f"[{view_name.value}] no image; skipping")
            return None

        height, width = image.shape[:2]
        logger.info(f"Extracting contours from {view_name.value} view...")

        try:
            contours = self.tracer.trace(image, view_name)
        except cv2.error as e:
            logger.exception(f"[{view_name.value}] contour tracing failed: {e}")
            return None

        return self.handler.vectorize(
            view,
            contours,
            canvas_width=width,
            canvas_height=height,
            tolerance=tolerance,
            scale=scale,
            region=region,
        )


def write_outputs(
    result: PipelineResult,
    output_dir: "str | Path",
    layered: bool = False,
    settings: Optional[Any] = None,
) -> list[Path]:
    """
    Write one DXF per view plus a JSON summary.

    Args:
        result: Pipeline result
        output_dir: Output directory (created if missing)
        layered: Also write an ezdxf document with one layer per role
        settings: Settings instance (defaults to cached settings)

    Returns:
        Paths of the written files
    """
    settings = settings or get_settings()
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    written = []
    for view, view_result in result.views.items():
        dxf_path = output_path / f"{view.value}.dxf"
        with open(dxf_path, "w", encoding="ascii", newline="") as f:
            f.write(view_result.document)
        written.append(dxf_path)

        if layered:
            writer = DXFWriter(
                dxf_version=settings.export.layered_dxf_version,
                units_type=settings.export.insunits,
                closure_tolerance=settings.export.closure_tolerance,
            )
            layered_path = output_path / f"{view.value}_layers.dxf"
            layered_path.write_bytes(
                writer.write(
                    view_result.polylines,
                    view_result.canvas_height,
                    view_result.scale,
                    view,
                )
            )
            written.append(layered_path)

    summary_path = output_path / "summary.json"
    with open(summary_path, "w") as f:
        json.dump(result.summary(), f, indent=2)
    written.append(summary_path)

    logger.info(f"Wrote {len(written)} files to {output_path}")
    return written
