"""
Range Controller

Single source of truth for the page count, the selected page range and the
page currently shown. Every public operation leaves the state satisfying

    1 <= start <= end <= page_count   and   start <= current_page <= end

whenever the document has pages. Bound edits go to a draft copy and are only
applied on commit; any other state change discards them. A commit that would
break the invariant resets the whole range to the full document.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional, Union

from PyQt6.QtCore import QObject, pyqtSignal

logger = logging.getLogger(__name__)


class RangeBound(Enum):
    """Which end of the selected range is being edited."""

    START = "start"
    END = "end"


@dataclass(frozen=True)
class RangeState:
    """Immutable snapshot of the controller state."""

    page_count: int = 0
    start: int = 1
    end: int = 0
    current_page: int = 1

    @property
    def is_empty(self) -> bool:
        return self.page_count == 0

    @property
    def selected_page_count(self) -> int:
        if self.is_empty:
            return 0
        return self.end - self.start + 1

    def contains(self, page_number: Any) -> bool:
        """True if page_number is a well-formed page inside the committed range."""
        if not isinstance(page_number, int) or isinstance(page_number, bool):
            return False
        return self.start <= page_number <= self.end <= self.page_count


def parse_page_number(value: Any) -> Optional[int]:
    """
    Parse a page number coming from code or from a text field.

    Returns None for anything that is not a whole number.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


class RangeController(QObject):
    """
    {
        "name": "RangeController",
        "version": "1.0.0",
        "description": "Page-range selection state machine keeping current page, range and page count consistent.",
        "dependencies": [],
        "interface": {
            "inputs": ["initialize", "set_current_page", "set_range_bound", "commit_range", "advance", "retreat"],
            "outputs": "current_page_changed, range_changed and state_changed signals"
        }
    }
    Mutations run synchronously on the caller's thread; observers only ever see
    complete, valid states.
    """

    current_page_changed = pyqtSignal(int)  # new current page
    range_changed = pyqtSignal(int, int)  # start, end
    state_changed = pyqtSignal(object)  # RangeState

    def __init__(self, parent=None):
        super().__init__(parent)
        self._state = RangeState()
        self._draft_start: Optional[int] = None
        self._draft_end: Optional[int] = None

    # --- Read access ---

    @property
    def state(self) -> RangeState:
        return self._state

    @property
    def page_count(self) -> int:
        return self._state.page_count

    @property
    def start(self) -> int:
        return self._state.start

    @property
    def end(self) -> int:
        return self._state.end

    @property
    def current_page(self) -> int:
        return self._state.current_page

    @property
    def selected_page_count(self) -> int:
        return self._state.selected_page_count

    @property
    def draft_start(self) -> Optional[int]:
        return self._draft_start

    @property
    def draft_end(self) -> Optional[int]:
        return self._draft_end

    # --- Lifecycle ---

    def initialize(self, page_count: int) -> None:
        """
        Seed the state from a freshly opened document.

        A page count of 0 is accepted; every other operation is then a no-op.

        Raises:
            ValueError: If page_count is negative or not an integer.
        """
        if not isinstance(page_count, int) or isinstance(page_count, bool) or page_count < 0:
            raise ValueError(f"page_count must be a non-negative integer, got {page_count!r}")

        self._state = RangeState(page_count=page_count, start=1, end=page_count, current_page=1)
        self._draft_start, self._draft_end = 1, page_count
        logger.info(f"RangeController initialized with {page_count} pages")

        self.state_changed.emit(self._state)
        if page_count > 0:
            self.range_changed.emit(1, page_count)
            self.current_page_changed.emit(1)

    def clear(self) -> None:
        """Drop all state at session close."""
        self._state = RangeState()
        self._draft_start = self._draft_end = None
        self.state_changed.emit(self._state)

    # --- Current page ---

    def set_current_page(self, value: Union[int, str]) -> bool:
        """
        Move to a page, clamping it into the selected range.

        Unparseable input leaves the current page unchanged.

        Returns:
            True if the current page changed.
        """
        if self._state.is_empty:
            return False
        page = parse_page_number(value)
        if page is None:
            logger.debug(f"Ignoring non-numeric page value {value!r}")
            return False
        return self._apply(current_page=self._clamp_to_range(page))

    def commit_current_page(self) -> bool:
        """Blur-equivalent for the current page field."""
        if self._state.is_empty:
            return False
        return self._apply(current_page=self._clamp_to_range(self._state.current_page))

    def advance(self) -> bool:
        """Next page; no-op at the end of the range."""
        if self._state.is_empty:
            return False
        if self._state.current_page >= min(self._state.end, self._state.page_count):
            return False
        return self._apply(current_page=self._state.current_page + 1)

    def retreat(self) -> bool:
        """Previous page; no-op at the start of the range."""
        if self._state.is_empty or self._state.current_page <= self._state.start:
            return False
        return self._apply(current_page=self._state.current_page - 1)

    # --- Range ---

    def set_range_bound(
        self, bound: Union[RangeBound, str], value: Union[int, str], commit: bool = True
    ) -> bool:
        """
        Edit one bound of the range.

        Args:
            bound: RangeBound or "start"/"end"
            value: New bound, as an int or field text
            commit: Validate and apply the draft immediately

        Returns:
            With commit, whether the draft was accepted as-is (False after a
            reset). Without commit, whether the draft was recorded.
        """
        bound = RangeBound(bound)
        if self._state.is_empty:
            return False

        parsed = parse_page_number(value)
        if bound is RangeBound.START:
            self._draft_start = parsed
        else:
            self._draft_end = parsed
        logger.debug(f"Draft range now {self._draft_start}-{self._draft_end}")

        if commit:
            return self.commit_range()
        return True

    def commit_range(self) -> bool:
        """
        Validate the draft range and apply it.

        A valid draft becomes the range and the current page is pulled inside
        it. An invalid draft resets the range to the full document and the
        current page to 1.

        Returns:
            True if the draft was accepted, False if it was rejected.
        """
        if self._state.is_empty:
            return False

        start, end = self._draft_start, self._draft_end
        if start is None or end is None or not 1 <= start <= end <= self._state.page_count:
            logger.info(
                f"Invalid range {start}-{end} for {self._state.page_count} pages, "
                "resetting to the full document"
            )
            self.reset()
            return False

        current = _clamp(self._state.current_page, start, end)
        self._apply(start=start, end=end, current_page=current)
        return True

    def reset(self) -> None:
        """Select the whole document and go back to page 1."""
        if self._state.is_empty:
            return
        self._draft_start, self._draft_end = 1, self._state.page_count
        self._apply(start=1, end=self._state.page_count, current_page=1)

    # --- Internals ---

    def _clamp_to_range(self, page: int) -> int:
        return _clamp(page, self._state.start, min(self._state.end, self._state.page_count))

    def _apply(self, **changes) -> bool:
        old = self._state
        new = replace(old, **changes)
        if new == old:
            return False

        self._state = new
        # Any state change discards an uncommitted draft.
        self._draft_start, self._draft_end = new.start, new.end
        logger.debug(f"Range state: {old} -> {new}")

        if (new.start, new.end) != (old.start, old.end):
            self.range_changed.emit(new.start, new.end)
        if new.current_page != old.current_page:
            self.current_page_changed.emit(new.current_page)
        self.state_changed.emit(new)
        return True
