"""
Main handler for vectorization module.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Optional, Sequence, TypeVar

from gahull.dxf_writer.serializer import PolylineSerializer
from gahull.shared.config import get_settings
from gahull.shared.models import (
    BoundingBox,
    ClassifiedContour,
    Contour,
    ViewName,
    ViewResult,
)
from gahull.vectorization.simplifier import simplify_contour
from gahull.vision.contour_classifier import ContourClassifier

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class VectorizationHandler:
    """
    Main vectorization handler.

    Turns the raw contours of one view into:
    - classified contours (role, layer, color)
    - simplified polylines
    - a serialized DXF document
    """

    def __init__(self, settings: Optional[Any] = None, max_workers: Optional[int] = None):
        """
        Initialize vectorization handler.

        Args:
            settings: Settings instance (defaults to cached settings)
            max_workers: Worker threads per view; 1 runs sequentially
        """
        self.settings = settings or get_settings()
        self.max_workers = max_workers or self.settings.simplify.max_workers

        self.classifier = ContourClassifier(self.settings.roles)
        self.serializer = PolylineSerializer(
            closure_tolerance=self.settings.export.closure_tolerance,
            acad_version=self.settings.export.acad_version,
            insunits=self.settings.export.insunits,
        )

    def _map(self, func: Callable[[T], R], items: Sequence[T]) -> list[R]:
        """Apply func to every item, keeping input order."""
        if self.max_workers <= 1 or len(items) < 2:
            return [func(item) for item in items]

        # executor.map yields results in submission order
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            return list(executor.map(func, items))

    def vectorize(
        self,
        view: "str | ViewName",
        contours: Sequence[Contour],
        canvas_width: int,
        canvas_height: int,
        tolerance: Optional[float] = None,
        scale: Optional[float] = None,
        region: Optional[BoundingBox] = None,
    ) -> ViewResult:
        """
        Classify, simplify and serialize the contours of one view.

        Args:
            view: View name
            contours: Raw contours in canvas pixel space
            canvas_width: Canvas width in pixels
            canvas_height: Canvas height in pixels
            tolerance: Simplification tolerance override
            scale: Export scale override
            region: Page region the view was cropped from, if any

        Returns:
            View result with classified contours, polylines and document
        """
        view_name = ViewName.parse(view)
        tolerance = self.settings.simplify.tolerance if tolerance is None else tolerance
        scale = self.settings.export.scale if scale is None else scale

        if view_name == ViewName.UNKNOWN:
            logger.warning(f"Unrecognized view '{view}'; contours will be left unassigned")

        logger.info(f"Vectorizing {len(contours)} contours in {view_name.value} view")

        classified: list[ClassifiedContour] = self._map(
            lambda c: self.classifier.classify_contour(view, c, canvas_width, canvas_height),
            list(contours),
        )

        simplified = self._map(lambda c: simplify_contour(c, tolerance), classified)
        polylines = [p for p in simplified if p is not None]

        document = self.serializer.serialize(polylines, canvas_height, scale)

        logger.info(
            f"{view_name.value}: {len(classified)} classified, {len(polylines)} polylines"
        )

        return ViewResult(
            view=view_name,
            canvas_width=canvas_width,
            canvas_height=canvas_height,
            scale=self.serializer.normalize_scale(scale),
            region=region,
            contours=list(contours),
            classified=classified,
            polylines=polylines,
            document=document,
        )

