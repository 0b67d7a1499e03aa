"""
Vectorization module for GA Hull.

Converts raster views to classified, simplified polylines.
"""

from gahull.vectorization.contour_tracer import ContourTracer
from gahull.vectorization.handler import VectorizationHandler
from gahull.vectorization.simplifier import simplify_contour, simplify_contours, simplify_points

__all__ = [
    "ContourTracer",
    "VectorizationHandler",
    "simplify_contour",
    "simplify_contours",
    "simplify_points",
]
