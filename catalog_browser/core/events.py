from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class EventKind(str, Enum):
    """Everything the UI can ask of a BrowserSession."""

    # filter lifecycle
    ACTIVATE = "activate"
    DEACTIVATE = "deactivate"

    # predicate edits
    SELECT_TERM = "select_term"
    SET_BOUNDS = "set_bounds"
    RESET_BOUNDS = "reset_bounds"

    # histogram
    TOGGLE_HISTOGRAM = "toggle_histogram"
    DRAG_START = "drag_start"
    DRAG_END = "drag_end"
    DRAG_CANCEL = "drag_cancel"
    TOGGLE_LOG_AXIS = "toggle_log_axis"

    # result table
    SET_SAMPLE = "set_sample"
    PAGE = "page"
    SORT = "sort"
    SET_VISIBLE_FIELDS = "set_visible_fields"


@dataclass(frozen=True)
class Event:
    """
    One UI event.

    - field: name of the field the event targets (filter events only)
    - value: event payload, e.g. the selected term, (lb, ub), (offset, limit),
      [(field, ascending), ...], a pointer x-value or an axis name
    """

    kind: EventKind
    field: Optional[str] = None
    value: Any = None
