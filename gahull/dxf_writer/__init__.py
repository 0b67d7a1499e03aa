"""
DXF writer module for GA Hull.

Generates DXF documents from simplified polylines.
"""

from gahull.dxf_writer.layer_manager import LayerManager
from gahull.dxf_writer.serializer import PolylineSerializer
from gahull.dxf_writer.writer import DXFWriter

__all__ = [
    "DXFWriter",
    "LayerManager",
    "PolylineSerializer",
]
