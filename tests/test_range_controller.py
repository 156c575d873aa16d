"""
Unit tests for RangeController in page_selector/core/range_controller.py.
Covers initialization, range commits (valid and resetting), page navigation,
notifications and the empty-document case.
"""

import pytest

from page_selector.core.range_controller import (
    RangeBound,
    RangeController,
    RangeState,
    parse_page_number,
)

pytestmark = pytest.mark.usefixtures("qapp")


class Recorder:
    """Collects every emission of the controller's signals."""

    def __init__(self, controller: RangeController):
        self.pages = []
        self.ranges = []
        self.states = []
        controller.current_page_changed.connect(self.pages.append)
        controller.range_changed.connect(lambda start, end: self.ranges.append((start, end)))
        controller.state_changed.connect(self.states.append)


@pytest.fixture
def controller():
    rc = RangeController()
    rc.initialize(10)
    return rc


def as_tuple(rc: RangeController):
    return rc.start, rc.end, rc.current_page


# --- initialize ---

def test_initialize_seeds_full_range():
    rc = RangeController()
    recorder = Recorder(rc)

    rc.initialize(7)

    assert rc.state == RangeState(page_count=7, start=1, end=7, current_page=1)
    assert rc.selected_page_count == 7
    assert recorder.pages == [1]
    assert recorder.ranges == [(1, 7)]
    assert len(recorder.states) == 1


@pytest.mark.parametrize("bad_count", [-1, 2.0, "3", None, True])
def test_initialize_rejects_invalid_page_count(bad_count):
    with pytest.raises(ValueError):
        RangeController().initialize(bad_count)


def test_clear_returns_to_empty_state(controller):
    controller.clear()
    assert controller.state == RangeState()
    assert controller.draft_start is None


# --- committed ranges ---

@pytest.mark.parametrize(
    "start,end,page_count",
    [(1, 1, 1), (3, 8, 10), (5, 5, 10), (1, 10, 10), (10, 10, 10), (2, 3, 3)],
)
def test_valid_commit_applies_range(start, end, page_count):
    rc = RangeController()
    rc.initialize(page_count)

    rc.set_range_bound(RangeBound.START, start, commit=False)
    rc.set_range_bound(RangeBound.END, end, commit=False)
    accepted = rc.commit_range()

    assert accepted is True
    assert (rc.start, rc.end) == (start, end)
    assert start <= rc.current_page <= end
    assert rc.selected_page_count == end - start + 1


@pytest.mark.parametrize(
    "start,end",
    [(4, 2), (0, 5), (-3, 4), (2, 11), (11, 12), ("abc", 5), (3, "")],
)
def test_invalid_commit_resets_everything(controller, start, end):
    controller.set_range_bound(RangeBound.START, 3)
    controller.set_range_bound(RangeBound.END, 8)
    controller.set_current_page(6)
    assert as_tuple(controller) == (3, 8, 6)

    controller.set_range_bound(RangeBound.START, start, commit=False)
    controller.set_range_bound(RangeBound.END, end, commit=False)
    accepted = controller.commit_range()

    assert accepted is False
    assert as_tuple(controller) == (1, 10, 1)
    assert (controller.draft_start, controller.draft_end) == (1, 10)


def test_start_after_end_scenario_resets_to_full_document():
    rc = RangeController()
    rc.initialize(5)

    rc.set_range_bound("start", 4)
    rc.set_range_bound("end", 2)

    assert rc.state == RangeState(page_count=5, start=1, end=5, current_page=1)


def test_commit_pulls_current_page_into_range(controller):
    controller.set_current_page(9)

    controller.set_range_bound(RangeBound.END, 6)
    assert controller.current_page == 6

    controller.set_range_bound(RangeBound.START, 4)
    controller.set_current_page(4)
    controller.set_range_bound(RangeBound.START, 5)
    assert controller.current_page == 5


def test_uncommitted_draft_does_not_touch_state(controller):
    controller.set_range_bound(RangeBound.START, 4, commit=False)

    assert controller.start == 1
    assert controller.draft_start == 4


@pytest.mark.parametrize("move", ["advance", "set_current_page"])
def test_page_move_discards_uncommitted_draft(controller, move):
    controller.set_range_bound(RangeBound.START, 4, commit=False)

    if move == "advance":
        assert controller.advance() is True
    else:
        assert controller.set_current_page(7) is True
    assert controller.draft_start == 1

    controller.set_range_bound(RangeBound.END, 8)
    assert (controller.start, controller.end) == (1, 8)


def test_unknown_bound_name_is_rejected(controller):
    with pytest.raises(ValueError):
        controller.set_range_bound("middle", 3)


def test_range_changed_only_on_real_change(controller):
    recorder = Recorder(controller)

    controller.set_range_bound(RangeBound.START, 1)
    assert recorder.ranges == []

    controller.set_range_bound(RangeBound.START, 3)
    assert recorder.ranges == [(3, 10)]

    controller.set_range_bound(RangeBound.END, 99)
    assert recorder.ranges == [(3, 10), (1, 10)]


# --- current page ---

def test_set_current_page_clamps_into_range(controller):
    controller.set_range_bound(RangeBound.START, 3)
    controller.set_range_bound(RangeBound.END, 8)

    controller.set_current_page(10)
    assert controller.current_page == 8

    controller.set_current_page(1)
    assert controller.current_page == 3

    controller.set_current_page(" 5 ")
    assert controller.current_page == 5


@pytest.mark.parametrize("value", ["", "abc", "4.5", 2.5, None, [3]])
def test_unparseable_current_page_is_ignored(controller, value):
    controller.set_current_page(4)
    recorder = Recorder(controller)

    assert controller.set_current_page(value) is False
    assert controller.current_page == 4
    assert recorder.states == []


def test_current_page_changed_only_when_page_moves(controller):
    recorder = Recorder(controller)

    controller.set_current_page(4)
    controller.set_current_page(4)
    controller.commit_current_page()

    assert recorder.pages == [4]


def test_advance_and_retreat_saturate(controller):
    controller.set_range_bound(RangeBound.START, 2)
    controller.set_range_bound(RangeBound.END, 4)
    recorder = Recorder(controller)

    assert controller.retreat() is False
    assert controller.current_page == 2

    assert controller.advance() is True
    assert controller.advance() is True
    assert controller.current_page == 4
    assert controller.advance() is False
    assert controller.current_page == 4

    assert controller.retreat() is True
    assert recorder.pages == [3, 4, 3]


# --- empty document ---

def test_empty_document_makes_everything_a_no_op():
    rc = RangeController()
    recorder = Recorder(rc)

    rc.initialize(0)

    assert rc.set_current_page(1) is False
    assert rc.commit_current_page() is False
    assert rc.set_range_bound(RangeBound.START, 1) is False
    assert rc.commit_range() is False
    assert rc.advance() is False
    assert rc.retreat() is False
    rc.reset()

    assert recorder.pages == []
    assert recorder.ranges == []
    assert rc.state.is_empty
    assert rc.selected_page_count == 0


# --- helpers ---

@pytest.mark.parametrize(
    "value,expected",
    [(3, 3), ("7", 7), (" 2", 2), (4.0, 4), (4.5, None), ("x", None), (True, None), (None, None)],
)
def test_parse_page_number(value, expected):
    assert parse_page_number(value) == expected


def test_state_contains_requires_int_inside_range():
    state = RangeState(page_count=10, start=3, end=8, current_page=3)
    assert state.contains(3)
    assert state.contains(8)
    assert not state.contains(2)
    assert not state.contains(9)
    assert not state.contains("5")
    assert not state.contains(True)
