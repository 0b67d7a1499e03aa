"""Tests for page region to view assignment."""

from gahull.shared.config import RegionThresholds
from gahull.shared.models import BoundingBox, RegionCandidate, ViewName
from gahull.vision.region_classifier import RegionClassifier, filter_candidates


def candidate(x, y, w, h, index=0, area=None):
    return RegionCandidate(
        box=BoundingBox(x=x, y=y, width=w, height=h),
        area=area,
        index=index,
    )


def test_empty_candidates_give_empty_assignment():
    """No candidates is not an error."""
    assignment = RegionClassifier().classify([])
    assert len(assignment) == 0
    assert assignment.get(ViewName.SIDE) is None


def test_single_box_by_aspect():
    """Aspect 4 is side, 2 is top, 1 is body."""
    classifier = RegionClassifier()

    side = candidate(0, 0, 400, 100)
    assert classifier.classify([side]).boxes == {ViewName.SIDE: side.box}

    top = candidate(0, 0, 200, 100)
    assert classifier.classify([top]).boxes == {ViewName.TOP: top.box}

    body = candidate(0, 0, 100, 100)
    assert classifier.classify([body]).boxes == {ViewName.BODY: body.box}


def test_three_views_assigned():
    """A typical GA page yields all three views."""
    side = candidate(0, 0, 400, 100, index=0)
    top = candidate(0, 200, 200, 100, index=1)
    body = candidate(300, 200, 100, 100, index=2)

    assignment = RegionClassifier().classify([body, top, side])

    assert assignment.get(ViewName.SIDE) is side.box
    assert assignment.get(ViewName.TOP) is top.box
    assert assignment.get(ViewName.BODY) is body.box


def test_fallback_fills_empty_views_by_area():
    """Leftover boxes fill empty views in side, top, body order."""
    big_side = candidate(0, 0, 800, 100, index=0)
    small_side = candidate(0, 200, 400, 100, index=1)

    assignment = RegionClassifier().classify([small_side, big_side])

    assert assignment.get(ViewName.SIDE) is big_side.box
    assert assignment.get(ViewName.TOP) is small_side.box
    assert ViewName.BODY not in assignment


def test_fallback_side_taken_by_largest_remaining():
    """Two square boxes: the first body, the next falls back to side."""
    first = candidate(0, 0, 100, 100, index=0)
    second = candidate(500, 0, 100, 100, index=1)

    assignment = RegionClassifier().classify([first, second])

    assert assignment.get(ViewName.BODY) is first.box
    assert assignment.get(ViewName.SIDE) is second.box
    assert ViewName.TOP not in assignment


def test_filled_rule_is_skipped():
    """Aspect 1.6 goes to body when top is already filled."""
    top = candidate(0, 0, 300, 150, index=0)
    boundary = candidate(0, 300, 160, 100, index=1)

    assignment = RegionClassifier().classify([top, boundary])

    assert assignment.get(ViewName.TOP) is top.box
    assert assignment.get(ViewName.BODY) is boundary.box


def test_equal_areas_keep_discovery_order():
    """Stable sort: the earlier of two equal boxes wins the rule."""
    a = candidate(0, 0, 200, 100, index=0)
    b = candidate(0, 500, 200, 100, index=1)

    assignment = RegionClassifier().classify([a, b])

    assert assignment.get(ViewName.TOP) is a.box
    assert assignment.get(ViewName.SIDE) is b.box


def test_explicit_area_orders_candidates():
    """The candidate area, not the box area, drives the ordering."""
    small_box_big_area = candidate(0, 0, 100, 100, index=0, area=50000)
    big_box_small_area = candidate(0, 200, 150, 150, index=1, area=100)

    assignment = RegionClassifier().classify([big_box_small_area, small_box_big_area])

    assert assignment.get(ViewName.BODY) is small_box_big_area.box
    assert assignment.get(ViewName.SIDE) is big_box_small_area.box


def test_at_most_one_box_per_view_and_no_reuse():
    """Every view gets at most one box and no box is used twice."""
    candidates = [
        candidate(i * 50, i * 40, 60 + (i * 37) % 300, 40 + (i * 53) % 200, index=i)
        for i in range(12)
    ]

    assignment = RegionClassifier().classify(candidates)
    boxes = list(assignment.boxes.values())

    assert len(assignment) == 3
    assert len({id(b) for b in boxes}) == len(boxes)
    assert set(assignment.boxes) <= {ViewName.SIDE, ViewName.TOP, ViewName.BODY}


def test_assignment_count_bounded_by_candidates():
    """Two candidates give at most two views."""
    candidates = [candidate(0, 0, 30, 300, index=0), candidate(0, 400, 20, 200, index=1)]
    assert len(RegionClassifier().classify(candidates)) == 2


def test_thresholds_are_overridable():
    """Raising the side threshold turns an aspect-4 box into a top view."""
    classifier = RegionClassifier(RegionThresholds(side_min_aspect=5.0))
    box = candidate(0, 0, 400, 100)
    assert classifier.classify([box]).boxes == {ViewName.TOP: box.box}


def test_candidate_area_defaults_to_box_area():
    """Candidates built without an area use the box area."""
    assert candidate(0, 0, 30, 20).area == 600


def test_filter_candidates_drops_small_boxes():
    """Boxes under the area fraction or dimension fraction are dropped."""
    keep = candidate(0, 0, 60, 60)
    tiny = candidate(0, 0, 10, 10)
    narrow = candidate(0, 0, 40, 500)
    short = candidate(0, 0, 500, 40)

    kept = filter_candidates([keep, tiny, narrow, short], 1000, 1000)

    assert kept == [keep]


def test_filled_views_are_skipped_by_rules_and_fallback():
    """Boxes flow past views located elsewhere into the views still open."""
    wide = candidate(0, 0, 400, 100, index=0)
    medium = candidate(0, 200, 200, 100, index=1)

    assignment = RegionClassifier().classify([wide, medium], filled={ViewName.SIDE})

    assert ViewName.SIDE not in assignment
    assert assignment.get(ViewName.TOP) is medium.box
    assert assignment.get(ViewName.BODY) is wide.box


def test_all_views_filled_assigns_nothing():
    boxes = [candidate(0, 0, 400, 100), candidate(0, 200, 200, 100)]

    assignment = RegionClassifier().classify(
        boxes, filled=[ViewName.SIDE, ViewName.TOP, ViewName.BODY]
    )

    assert len(assignment) == 0
