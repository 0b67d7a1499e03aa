"""
Shared utilities and models for GA Hull.
"""

from gahull.shared.config import Settings, get_settings
from gahull.shared.models import (
    BoundingBox,
    ClassifiedContour,
    Contour,
    ContourRole,
    OCRToken,
    PipelineResult,
    Point2D,
    Polyline,
    RegionCandidate,
    ViewAssignment,
    ViewName,
    ViewResult,
)

__all__ = [
    "Settings",
    "get_settings",
    "BoundingBox",
    "ClassifiedContour",
    "Contour",
    "ContourRole",
    "OCRToken",
    "PipelineResult",
    "Point2D",
    "Polyline",
    "RegionCandidate",
    "ViewAssignment",
    "ViewName",
    "ViewResult",
]
