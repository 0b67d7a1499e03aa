"""
Label-based view detection from OCR tokens.
"""

import logging
import re
from typing import Optional, Sequence

from gahull.shared.models import (
    BoundingBox,
    OCRToken,
    RegionCandidate,
    ViewAssignment,
    ViewName,
)

logger = logging.getLogger(__name__)


DEFAULT_KEYWORDS: dict[str, list[str]] = {
    "top": ["PLAN", "DECK", "TOP"],
    "side": ["PROFILE", "ELEVATION", "SIDE", "OUTBOARD", "INBOARD"],
    "body": ["BODY", "SECTION", "SECTIONS", "STATIONS", "MIDSHIP"],
}


class LabelRegionFinder:
    """
    Finds view title labels such as "PROFILE" or "BODY PLAN" among OCR
    tokens and keeps the largest matching label per view.
    """

    def __init__(
        self,
        keywords: Optional[dict[str, list[str]]] = None,
        min_confidence: float = 0.0,
    ):
        """
        Initialize label finder.

        Args:
            keywords: Keyword table keyed by view name
            min_confidence: Tokens below this OCR confidence are ignored
        """
        self.min_confidence = min_confidence
        self.keywords: dict[ViewName, set[str]] = {}

        for name, words in (keywords or DEFAULT_KEYWORDS).items():
            view = ViewName.parse(name)
            if view == ViewName.UNKNOWN:
                logger.warning(f"Ignoring keywords for unknown view '{name}'")
                continue
            self.keywords[view] = {w.upper() for w in words}

    @staticmethod
    def _normalize(text: str) -> str:
        """Uppercase and strip punctuation around a token."""
        return re.sub(r"[^A-Z0-9]", "", text.upper())

    def match_view(self, text: str) -> Optional[ViewName]:
        """Return the first view whose keyword table contains the token."""
        word = self._normalize(text)
        if not word:
            return None
        for view, words in self.keywords.items():
            if word in words:
                return view
        return None

    def find(self, tokens: Sequence[OCRToken]) -> ViewAssignment:
        """
        Select the highest-area matching token per view.

        Args:
            tokens: OCR word tokens from one page

        Returns:
            View assignment holding the label boxes
        """
        best: dict[ViewName, BoundingBox] = {}

        for token in tokens:
            if token.confidence < self.min_confidence:
                continue
            view = self.match_view(token.text)
            if view is None:
                continue
            current = best.get(view)
            if current is None or token.box.area > current.area:
                best[view] = token.box

        logger.info(f"Found labels for {len(best)} views among {len(tokens)} tokens")
        return ViewAssignment(boxes=best)

    def attach_regions(
        self,
        labels: ViewAssignment,
        candidates: Sequence[RegionCandidate],
    ) -> ViewAssignment:
        """
        Pair each view label with the nearest unused region candidate.

        Distance is measured from the label center to the candidate box
        (0 when the center lies inside). Ties go to the larger candidate.

        Args:
            labels: Label boxes per view, as returned by ``find``
            candidates: Region candidates from the same page

        Returns:
            View assignment holding the paired region boxes
        """
        regions: dict[ViewName, BoundingBox] = {}
        used: set[int] = set()

        for view, label in labels.boxes.items():
            cx = label.x + label.width / 2
            cy = label.y + label.height / 2

            best_idx = None
            best_key = None
            for idx, candidate in enumerate(candidates):
                if idx in used:
                    continue
                key = (_distance_to_box(cx, cy, candidate.box), -candidate.area)
                if best_key is None or key < best_key:
                    best_idx, best_key = idx, key

            if best_idx is None:
                break
            used.add(best_idx)
            regions[view] = candidates[best_idx].box

        return ViewAssignment(boxes=regions)


def _distance_to_box(x: float, y: float, box: BoundingBox) -> float:
    dx = max(box.x - x, 0.0, x - box.x2)
    dy = max(box.y - y, 0.0, y - box.y2)
    return (dx * dx + dy * dy) ** 0.5
