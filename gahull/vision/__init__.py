"""
Vision module for GA Hull.

Maps page regions and traced contours to views and hull roles.
"""

from gahull.vision.contour_classifier import ROLE_STYLES, ContourClassifier
from gahull.vision.label_regions import LabelRegionFinder
from gahull.vision.region_classifier import RegionClassifier, filter_candidates

__all__ = [
    "ROLE_STYLES",
    "ContourClassifier",
    "LabelRegionFinder",
    "RegionClassifier",
    "filter_candidates",
]
