"""
Byte-stable DXF serialization of polylines.

Writes a minimal ASCII DXF (HEADER, empty TABLES, ENTITIES, EOF) with one
LWPOLYLINE per polyline. Output depends only on the input, so identical
polylines always produce identical bytes.
"""

import logging
import math
from typing import Sequence

from gahull.shared.models import Polyline

logger = logging.getLogger(__name__)


RECORD_SEPARATOR = "\r\n"
DEFAULT_ACAD_VERSION = "AC1015"
DEFAULT_CLOSURE_TOLERANCE = 1.5


class PolylineSerializer:
    """
    Serializes polylines into a DXF document.

    Each vertex (x, y) becomes (x * scale, (canvas_height - y) * scale), so
    the image's top-left origin maps onto the DXF bottom-left origin.
    """

    def __init__(
        self,
        closure_tolerance: float = DEFAULT_CLOSURE_TOLERANCE,
        acad_version: str = DEFAULT_ACAD_VERSION,
        insunits: int = 0,
    ):
        """
        Initialize serializer.

        Args:
            closure_tolerance: Endpoint distance (scaled units) below which
                a polyline is flagged closed
            acad_version: Value written to $ACADVER
            insunits: Value written to $INSUNITS (0 = unitless)
        """
        self.closure_tolerance = closure_tolerance
        self.acad_version = acad_version
        self.insunits = insunits

    @staticmethod
    def normalize_scale(scale: float) -> float:
        """Replace non-positive or non-finite scale factors with 1.0."""
        try:
            scale = float(scale)
        except (TypeError, ValueError):
            return 1.0
        if not math.isfinite(scale) or scale <= 0:
            return 1.0
        return scale

    def serialize(
        self,
        polylines: Sequence[Polyline],
        canvas_height: float,
        scale: float = 1.0,
    ) -> str:
        """
        Serialize polylines to DXF text.

        Args:
            polylines: Polylines in image pixel space
            canvas_height: Height of the source canvas in pixels
            scale: User units per pixel

        Returns:
            DXF document as a string with CRLF record separators
        """
        normalized = self.normalize_scale(scale)
        if normalized != scale:
            logger.warning(f"Invalid scale {scale!r}; using 1.0")

        records: list[str] = []
        records.extend(self._header())
        records.extend(["0", "SECTION", "2", "TABLES", "0", "ENDSEC"])
        records.extend(["0", "SECTION", "2", "ENTITIES"])

        written = 0
        for polyline in polylines:
            entity = self._entity(polyline, canvas_height, normalized)
            if entity:
                records.extend(entity)
                written += 1

        records.extend(["0", "ENDSEC", "0", "EOF"])

        logger.info(f"Serialized {written} of {len(polylines)} polylines")
        return RECORD_SEPARATOR.join(records) + RECORD_SEPARATOR

    def serialize_bytes(
        self,
        polylines: Sequence[Polyline],
        canvas_height: float,
        scale: float = 1.0,
    ) -> bytes:
        """Serialize polylines to ASCII-encoded DXF bytes."""
        return self.serialize(polylines, canvas_height, scale).encode("ascii")

    def _header(self) -> list[str]:
        return [
            "0", "SECTION",
            "2", "HEADER",
            "9", "$ACADVER",
            "1", self.acad_version,
            "9", "$INSUNITS",
            "70", str(self.insunits),
            "0", "ENDSEC",
        ]

    def _entity(self, polyline: Polyline, canvas_height: float, scale: float) -> list[str]:
        points = polyline.points
        if len(points) < 2:
            return []

        vertices = [transform_point(p.x, p.y, canvas_height, scale) for p in points]
        closed = is_closed(vertices, self.closure_tolerance)

        records = [
            "0", "LWPOLYLINE",
            "90", str(len(vertices)),
            "70", "1" if closed else "0",
        ]
        for x, y in vertices:
            records.extend(["10", f"{x:.6f}", "20", f"{y:.6f}"])
        return records


def transform_point(x: float, y: float, canvas_height: float, scale: float) -> tuple[float, float]:
    """Flip the vertical axis against the canvas height, then scale."""
    return (x * scale, (canvas_height - y) * scale)


def is_closed(vertices: Sequence[tuple[float, float]], tolerance: float) -> bool:
    """True when the first and last vertex are closer than ``tolerance``."""
    if len(vertices) < 2:
        return False
    (x0, y0), (x1, y1) = vertices[0], vertices[-1]
    return math.hypot(x1 - x0, y1 - y0) < tolerance
