from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from catalog_browser.core.events import Event, EventKind
from catalog_browser.core.filters import CategoricalFilter, NumericFilter
from catalog_browser.core.formatting import coerce_number
from catalog_browser.core.session import BrowserSession
from catalog_browser.ui.ids import IDs

logger = logging.getLogger(__name__)

_CLICK_INPUTS = {
    IDs.Pattern.FILTER_REMOVE: "remove",
    IDs.Pattern.FILTER_HIST: "hist",
    IDs.Pattern.FILTER_RESET: "reset",
}


def by_field(ids: Optional[List[dict]], values: Optional[List[Any]]) -> Dict[str, Any]:
    """Pair pattern-matching component ids with their values, keyed by field."""
    return {i["field"]: v for i, v in zip(ids or [], values or [])}


def _table_events(prop: str, inputs: Dict[str, Any], session: BrowserSession) -> List[Event]:
    limit = inputs.get("page_size") or session.window.limit

    if prop == "page_current":
        page = inputs.get("page_current") or 0
        return [Event(EventKind.PAGE, value=(page * limit, limit))]

    if prop == "sort_by":
        keys = [(s["column_id"], s.get("direction") == "asc") for s in inputs.get("sort_by") or []]
        return [Event(EventKind.SORT, value=keys), Event(EventKind.PAGE, value=(0, limit))]

    if prop == "hidden_columns":
        hidden = set(inputs.get("hidden_columns") or [])
        visible = [n for n in session.catalog.field_names() if n not in hidden]
        if visible == session.visible_fields:
            return []
        return [Event(EventKind.SET_VISIBLE_FIELDS, value=visible)]

    return []


def _histogram_drag_events(selected: Optional[dict], session: BrowserSession) -> List[Event]:
    x_range = ((selected or {}).get("range") or {}).get("x")
    if not x_range or len(x_range) != 2:
        return [Event(EventKind.DRAG_CANCEL)]

    engine = session.histogram
    start, end = engine.key_at(x_range[0]), engine.key_at(x_range[1])
    if start is None or end is None:
        return [Event(EventKind.DRAG_CANCEL)]
    return [Event(EventKind.DRAG_START, value=start), Event(EventKind.DRAG_END, value=end)]


def _filter_events(kind: str, name: str, inputs: Dict[str, Any], session: BrowserSession) -> List[Event]:
    filt = session.filter_set.get(name)
    if filt is None:
        return []

    if kind == IDs.Pattern.FILTER_SELECT and isinstance(filt, CategoricalFilter):
        value = by_field(inputs.get("select_ids"), inputs.get("select")).get(name)
        if (value or None) == filt.selection:
            return []
        return [Event(EventKind.SELECT_TERM, field=name, value=value)]

    if kind in (IDs.Pattern.FILTER_LB, IDs.Pattern.FILTER_UB) and isinstance(filt, NumericFilter):
        lb = by_field(inputs.get("lb_ids"), inputs.get("lb")).get(name)
        ub = by_field(inputs.get("ub_ids"), inputs.get("ub")).get(name)
        if coerce_number(lb) == filt.lb and coerce_number(ub) == filt.ub:
            return []
        return [Event(EventKind.SET_BOUNDS, field=name, value=(lb, ub))]

    key = _CLICK_INPUTS.get(kind)
    if key is None:
        return []
    clicks = by_field(inputs.get(f"{key}_ids"), inputs.get(key)).get(name)
    if not clicks:
        # freshly rendered button
        return []
    if kind == IDs.Pattern.FILTER_REMOVE:
        return [Event(EventKind.DEACTIVATE, field=name)]
    if kind == IDs.Pattern.FILTER_HIST:
        return [Event(EventKind.TOGGLE_HISTOGRAM, field=name)]
    if kind == IDs.Pattern.FILTER_RESET:
        return [Event(EventKind.RESET_BOUNDS, field=name)]
    return []


def events_from_trigger(
        trigger: Any,
        prop: str,
        inputs: Dict[str, Any],
        session: BrowserSession,
) -> List[Event]:
    """
    Translate the component property that fired the browser callback into
    session events. Returns [] when the value already matches the session
    (e.g. a control re-rendered with its current value).

    `inputs` holds the callback's input/state values by name; pattern-matching
    values come with a parallel "<name>_ids" list.
    """
    if isinstance(trigger, dict):
        return _filter_events(trigger.get("type", ""), trigger.get("field", ""), inputs, session)

    if trigger == IDs.Control.RESULT_TABLE:
        return _table_events(prop, inputs, session)

    if trigger == IDs.Control.ADD_FILTER_SELECT:
        name = inputs.get("add_field")
        return [Event(EventKind.ACTIVATE, field=name)] if name else []

    if trigger in (IDs.Control.SAMPLE_RATIO, IDs.Control.SAMPLE_SEED):
        ratio, seed = inputs.get("sample_ratio"), inputs.get("sample_seed")
        current = session.sample
        if coerce_number(ratio) == current.ratio and coerce_number(seed) == current.seed:
            return []
        return [Event(EventKind.SET_SAMPLE, value=(ratio, seed))]

    if trigger == IDs.Control.HIST_GRAPH:
        return _histogram_drag_events(inputs.get("selected"), session)

    if trigger == IDs.Control.HIST_LOG_X:
        return [Event(EventKind.TOGGLE_LOG_AXIS, value="x")]
    if trigger == IDs.Control.HIST_LOG_Y:
        return [Event(EventKind.TOGGLE_LOG_AXIS, value="y")]

    logger.debug("No events for trigger %r.%s", trigger, prop)
    return []
