"""
Region classification for GA Hull.

Maps candidate boxes found on a full General Arrangement page to the
top, side and body views using aspect-ratio rules and area ordering.
"""

import logging
from typing import Callable, Iterable, Optional, Sequence

from gahull.shared.config import RegionThresholds
from gahull.shared.models import RegionCandidate, ViewAssignment, ViewName

logger = logging.getLogger(__name__)


# Order in which still-empty views take leftover boxes
FALLBACK_ORDER = (ViewName.SIDE, ViewName.TOP, ViewName.BODY)


def filter_candidates(
    candidates: Sequence[RegionCandidate],
    page_width: float,
    page_height: float,
    min_area_fraction: float = 0.0005,
    min_dimension_fraction: float = 0.05,
) -> list[RegionCandidate]:
    """
    Drop candidates too small to be a drawing view.

    A candidate is dropped when its area is below ``min_area_fraction`` of
    the page, or when it is narrower than ``min_dimension_fraction`` of the
    page width or shorter than that fraction of the page height.
    """
    page_area = page_width * page_height
    min_area = page_area * min_area_fraction
    min_w = page_width * min_dimension_fraction
    min_h = page_height * min_dimension_fraction

    kept = [
        c for c in candidates
        if c.area >= min_area and c.box.width >= min_w and c.box.height >= min_h
    ]

    logger.debug(f"Kept {len(kept)} of {len(candidates)} region candidates")
    return kept


class RegionClassifier:
    """
    Assigns at most one page region to each view.

    Candidates are visited largest first. Each one is tested against the
    view rules in fixed priority (side, top, body); rules whose view is
    already filled are skipped and the first match consumes the box. Views
    still empty afterwards take the largest remaining boxes in the order
    side, top, body.
    """

    def __init__(self, thresholds: Optional[RegionThresholds] = None):
        """
        Initialize region classifier.

        Args:
            thresholds: Aspect-ratio rules (defaults to the tuned values)
        """
        self.thresholds = thresholds or RegionThresholds()

    def _rules(self) -> list[tuple[ViewName, Callable[[float], bool]]]:
        t = self.thresholds
        return [
            (ViewName.SIDE, lambda aspect: aspect >= t.side_min_aspect),
            (ViewName.TOP, lambda aspect: t.top_min_aspect <= aspect < t.side_min_aspect),
            (ViewName.BODY, lambda aspect: t.body_min_aspect <= aspect <= t.body_max_aspect),
        ]

    def classify(
        self,
        candidates: Sequence[RegionCandidate],
        filled: Optional[Iterable[ViewName]] = None,
    ) -> ViewAssignment:
        """
        Assign candidate regions to views.

        Args:
            candidates: Region candidates from one page
            filled: Views already located by other means; their rules and
                fallback slots are skipped so the candidates go to the
                remaining views

        Returns:
            View assignment with zero to three entries, never including
            a view from ``filled``
        """
        assignment = ViewAssignment()
        if not candidates:
            logger.info("No region candidates; all views unavailable")
            return assignment

        taken = set(filled or ())

        def is_open(view: ViewName) -> bool:
            return view not in taken and view not in assignment.boxes

        # sorted() is stable, so equal areas keep discovery order
        ordered = sorted(candidates, key=lambda c: c.area, reverse=True)
        rules = [(view, matches) for view, matches in self._rules() if view not in taken]
        used = [False] * len(ordered)

        for idx, candidate in enumerate(ordered):
            if len(assignment.boxes) == len(rules):
                break

            aspect = candidate.box.aspect_ratio
            for view, matches in rules:
                if not is_open(view):
                    continue
                if matches(aspect):
                    assignment.boxes[view] = candidate.box
                    used[idx] = True
                    logger.debug(
                        f"Region {candidate.index} (aspect {aspect:.2f}) -> {view.value}"
                    )
                    break

        remaining = (c for c, was_used in zip(ordered, used) if not was_used)
        for view in FALLBACK_ORDER:
            if not is_open(view):
                continue
            candidate = next(remaining, None)
            if candidate is None:
                break
            assignment.boxes[view] = candidate.box
            logger.debug(f"Region {candidate.index} -> {view.value} (fallback)")

        logger.info(
            f"Assigned {len(assignment)} views from {len(candidates)} candidates: "
            f"{sorted(v.value for v in assignment.boxes)}"
        )
        return assignment
