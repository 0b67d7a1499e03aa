"""
Layered DXF writer using ezdxf.
"""

import io
import logging
from typing import Any, Optional, Sequence

import ezdxf
from ezdxf import units

from gahull.dxf_writer.layer_manager import LayerManager, hex_to_rgb
from gahull.dxf_writer.serializer import (
    DEFAULT_CLOSURE_TOLERANCE,
    PolylineSerializer,
    is_closed,
    transform_point,
)
from gahull.shared.models import Polyline, ViewName

logger = logging.getLogger(__name__)


class DXFWriter:
    """
    Writes classified polylines to a layered DXF document using ezdxf.

    Every role gets its own layer, named after the classifier's layer and
    colored with the role's display color. Coordinates follow the same
    flip-and-scale transform as the plain serializer.
    """

    def __init__(
        self,
        dxf_version: str = "R2010",
        units_type: int = units.MM,
        closure_tolerance: float = DEFAULT_CLOSURE_TOLERANCE,
    ):
        self.dxf_version = dxf_version
        self.units_type = units_type
        self.closure_tolerance = closure_tolerance

        self.layer_manager = LayerManager()

    def build(
        self,
        polylines: Sequence[Polyline],
        canvas_height: float,
        scale: float = 1.0,
        view: Optional[ViewName] = None,
    ) -> Any:
        """
        Build an ezdxf document from polylines.

        Args:
            polylines: Polylines in image pixel space
            canvas_height: Height of the source canvas in pixels
            scale: User units per pixel (non-positive falls back to 1.0)
            view: Optional view, recorded as the drawing's project name

        Returns:
            ezdxf Drawing
        """
        scale = PolylineSerializer.normalize_scale(scale)

        doc = ezdxf.new(self.dxf_version)
        doc.units = self.units_type
        msp = doc.modelspace()

        self.layer_manager.create_standard_layers(doc)

        written = 0
        for polyline in polylines:
            if len(polyline.points) < 2:
                continue

            layer_name = self._setup_layer(doc, polyline)
            vertices = [transform_point(p.x, p.y, canvas_height, scale) for p in polyline.points]

            msp.add_lwpolyline(
                vertices,
                close=is_closed(vertices, self.closure_tolerance),
                dxfattribs={"layer": layer_name},
            )
            written += 1

        if view is not None:
            doc.header["$PROJECTNAME"] = f"GA {view.value} view"

        logger.info(f"Built layered DXF with {written} polylines")
        return doc

    def write(
        self,
        polylines: Sequence[Polyline],
        canvas_height: float,
        scale: float = 1.0,
        view: Optional[ViewName] = None,
    ) -> bytes:
        """
        Write polylines to layered DXF format.

        Returns:
            DXF file as bytes
        """
        doc = self.build(polylines, canvas_height, scale, view)

        stream = io.StringIO()
        doc.write(stream)
        stream.seek(0)

        return stream.read().encode("utf-8")

    def _setup_layer(self, doc: Any, polyline: Polyline) -> str:
        """Create the polyline's layer on first use and return its name."""
        layer_name = polyline.layer or "UNASSIGNED"
        self.layer_manager.create_layer(
            doc,
            layer_name,
            color=self.layer_manager.get_role_color(polyline.role),
            rgb=hex_to_rgb(polyline.color) if polyline.color else None,
        )
        return layer_name
