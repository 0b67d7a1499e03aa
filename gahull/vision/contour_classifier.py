"""
Contour role classification for GA Hull.

Assigns each traced contour a hull role, a CAD layer and a display color
from its bounding-box geometry, using one rule table per view.
"""

import logging
from typing import Callable, Optional, Sequence

from gahull.shared.config import RoleThresholds
from gahull.shared.models import (
    BoundingBox,
    ClassifiedContour,
    Contour,
    ContourRole,
    ViewName,
)

logger = logging.getLogger(__name__)


# Layer name and hex color per role
ROLE_STYLES: dict[ContourRole, tuple[str, str]] = {
    ContourRole.PLAN_OUTLINE: ("PLAN_OUTLINE", "#FF0000"),
    ContourRole.DECK_SHAPE: ("DECK_SHAPE", "#00FFFF"),
    ContourRole.SHEER: ("SHEER", "#FF0000"),
    ContourRole.KEEL: ("KEEL", "#0000FF"),
    ContourRole.WATERLINE: ("WL", "#00FFFF"),
    ContourRole.STATION: ("ST", "#FF00FF"),
    ContourRole.BUTTOCK: ("BT", "#FFFF00"),
    ContourRole.UNASSIGNED: ("", ""),
}


class ContourGeometry:
    """Bounding-box measurements used by the role rules."""

    __slots__ = ("min_x", "min_y", "width", "height", "aspect")

    def __init__(self, box: BoundingBox):
        self.min_x = box.x
        self.min_y = box.y
        self.width = max(box.width, 1)
        self.height = max(box.height, 1)
        self.aspect = self.width / self.height


RoleRule = Callable[[ContourGeometry, float, float], ContourRole]


class ContourClassifier:
    """
    Classifies contours of one view into hull roles.

    Rules per view (first match wins):
    - top: plan outline when long and thin, otherwise deck shape
    - side: sheer when flat, keel when wide and in the lower half,
      otherwise waterline
    - profile/body: station when tall and narrow, otherwise buttock
    """

    def __init__(self, thresholds: Optional[RoleThresholds] = None):
        """
        Initialize contour classifier.

        Args:
            thresholds: Geometric rule thresholds (defaults to the tuned values)
        """
        self.thresholds = thresholds or RoleThresholds()
        self._rules: dict[ViewName, RoleRule] = {
            ViewName.TOP: self._classify_top,
            ViewName.SIDE: self._classify_side,
            ViewName.PROFILE: self._classify_body_plan,
            ViewName.BODY: self._classify_body_plan,
        }

    def classify(
        self,
        view: "str | ViewName",
        contours: Sequence[Contour],
        canvas_width: float,
        canvas_height: float,
    ) -> list[ClassifiedContour]:
        """
        Classify contours traced from one view.

        Args:
            view: View name (top, side, profile or body)
            contours: Contours in canvas pixel space
            canvas_width: Width of the view canvas in pixels
            canvas_height: Height of the view canvas in pixels

        Returns:
            Classified contours in input order
        """
        view_name = ViewName.parse(view)
        rule = self._rules.get(view_name)

        if rule is None:
            logger.warning(f"Unrecognized view '{view}'; {len(contours)} contours left unassigned")

        logger.info(f"Classifying {len(contours)} contours in {view_name.value} view")

        results = [
            self._classify_one(contour, view_name, rule, canvas_width, canvas_height)
            for contour in contours
        ]

        logger.info(f"Classification for {view_name.value} complete")
        return results

    def classify_contour(
        self,
        view: "str | ViewName",
        contour: Contour,
        canvas_width: float,
        canvas_height: float,
    ) -> ClassifiedContour:
        """Classify a single contour."""
        view_name = ViewName.parse(view)
        return self._classify_one(
            contour, view_name, self._rules.get(view_name), canvas_width, canvas_height
        )

    def _classify_one(
        self,
        contour: Contour,
        view: ViewName,
        rule: Optional[RoleRule],
        canvas_width: float,
        canvas_height: float,
    ) -> ClassifiedContour:
        role = ContourRole.UNASSIGNED
        box = BoundingBox.from_points(contour.points)

        if rule is not None and box is not None:
            role = rule(ContourGeometry(box), canvas_width, canvas_height)

        layer, color = ROLE_STYLES[role]
        return ClassifiedContour(
            id=contour.id,
            points=contour.points,
            view=view,
            role=role,
            layer=layer,
            color=color,
        )

    def _classify_top(self, geom: ContourGeometry, canvas_w: float, canvas_h: float) -> ContourRole:
        if geom.aspect > self.thresholds.plan_outline_min_aspect:
            return ContourRole.PLAN_OUTLINE
        return ContourRole.DECK_SHAPE

    def _classify_side(self, geom: ContourGeometry, canvas_w: float, canvas_h: float) -> ContourRole:
        t = self.thresholds
        if geom.height < canvas_h * t.sheer_max_height_fraction:
            return ContourRole.SHEER
        if geom.width > canvas_w * t.keel_min_width_fraction and geom.min_y > canvas_h * t.keel_min_top_fraction:
            return ContourRole.KEEL
        return ContourRole.WATERLINE

    def _classify_body_plan(self, geom: ContourGeometry, canvas_w: float, canvas_h: float) -> ContourRole:
        if geom.aspect < self.thresholds.station_max_aspect:
            return ContourRole.STATION
        return ContourRole.BUTTOCK
