from __future__ import annotations

import pytest

from catalog_browser.core.events import Event, EventKind
from catalog_browser.core.session import BrowserSession
from catalog_browser.ui.callbacks.events import by_field, events_from_trigger
from catalog_browser.ui.ids import IDs, filter_control_id


@pytest.fixture
def session(catalog) -> BrowserSession:
    session = BrowserSession.create(catalog)
    session.apply_response(
        session.build_request(),
        {
            "hits": {"total": 10, "hits": []},
            "aggregations": {
                "mass": {"min": 10.0, "max": 13.0, "avg": 11.0},
                "snapshot": [{"key": "99", "doc_count": 10}],
            },
        },
    )
    return session


def _ids(kind, *names):
    return [filter_control_id(kind, n) for n in names]


def test_by_field():
    assert by_field(_ids("x", "a", "b"), [1, 2]) == {"a": 1, "b": 2}
    assert by_field(None, None) == {}


def test_bound_edit(session):
    inputs = {
        "lb_ids": _ids(IDs.Pattern.FILTER_LB, "mass"),
        "lb": [11],
        "ub_ids": _ids(IDs.Pattern.FILTER_UB, "mass"),
        "ub": [13.0],
    }
    trigger = filter_control_id(IDs.Pattern.FILTER_LB, "mass")
    assert events_from_trigger(trigger, "value", inputs, session) == [
        Event(EventKind.SET_BOUNDS, field="mass", value=(11, 13.0))
    ]

    inputs["lb"] = [10]
    assert events_from_trigger(trigger, "value", inputs, session) == []


def test_term_selection(session):
    trigger = filter_control_id(IDs.Pattern.FILTER_SELECT, "snapshot")
    inputs = {"select_ids": _ids(IDs.Pattern.FILTER_SELECT, "snapshot"), "select": ["99"]}
    assert events_from_trigger(trigger, "value", inputs, session) == [
        Event(EventKind.SELECT_TERM, field="snapshot", value="99")
    ]
    inputs["select"] = [None]
    assert events_from_trigger(trigger, "value", inputs, session) == []


def test_button_clicks(session):
    trigger = filter_control_id(IDs.Pattern.FILTER_REMOVE, "mass")
    inputs = {"remove_ids": _ids(IDs.Pattern.FILTER_REMOVE, "mass"), "remove": [None]}
    assert events_from_trigger(trigger, "n_clicks", inputs, session) == []

    inputs["remove"] = [1]
    assert events_from_trigger(trigger, "n_clicks", inputs, session) == [Event(EventKind.DEACTIVATE, field="mass")]

    trigger = filter_control_id(IDs.Pattern.FILTER_HIST, "mass")
    inputs = {"hist_ids": _ids(IDs.Pattern.FILTER_HIST, "mass"), "hist": [2]}
    assert events_from_trigger(trigger, "n_clicks", inputs, session) == [
        Event(EventKind.TOGGLE_HISTOGRAM, field="mass")
    ]


def test_event_for_inactive_filter_is_dropped(session):
    trigger = filter_control_id(IDs.Pattern.FILTER_RESET, "npart")
    assert events_from_trigger(trigger, "n_clicks", {"reset": [1]}, session) == []


def test_table_events(session):
    table = IDs.Control.RESULT_TABLE
    assert events_from_trigger(table, "page_current", {"page_current": 2, "page_size": 25}, session) == [
        Event(EventKind.PAGE, value=(50, 25))
    ]

    sort_by = [{"column_id": "mass", "direction": "desc"}, {"column_id": "id", "direction": "asc"}]
    assert events_from_trigger(table, "sort_by", {"sort_by": sort_by}, session) == [
        Event(EventKind.SORT, value=[("mass", False), ("id", True)]),
        Event(EventKind.PAGE, value=(0, 25)),
    ]

    assert events_from_trigger(table, "hidden_columns", {"hidden_columns": ["x"]}, session) == []
    assert events_from_trigger(table, "hidden_columns", {"hidden_columns": ["x", "npart"]}, session) == [
        Event(EventKind.SET_VISIBLE_FIELDS, value=["id", "mass", "snapshot", "type"])
    ]


def test_add_filter_and_sample(session):
    assert events_from_trigger(IDs.Control.ADD_FILTER_SELECT, "value", {"add_field": "npart"}, session) == [
        Event(EventKind.ACTIVATE, field="npart")
    ]
    assert events_from_trigger(IDs.Control.ADD_FILTER_SELECT, "value", {"add_field": None}, session) == []

    sample = {"sample_ratio": 1, "sample_seed": None}
    assert events_from_trigger(IDs.Control.SAMPLE_RATIO, "value", sample, session) == []
    sample["sample_ratio"] = 0.5
    assert events_from_trigger(IDs.Control.SAMPLE_RATIO, "value", sample, session) == [
        Event(EventKind.SET_SAMPLE, value=(0.5, None))
    ]


def test_histogram_selection_snaps_to_buckets(session):
    session.dispatch(Event(EventKind.TOGGLE_HISTOGRAM, field="mass"))
    req = session.histogram.request()
    session.histogram.apply_aggregation([{"key": 10.0, "doc_count": 1}, {"key": 10.03, "doc_count": 2}], req.bin_width)

    selected = {"range": {"x": [10.01, 10.05]}}
    assert events_from_trigger(IDs.Control.HIST_GRAPH, "selectedData", {"selected": selected}, session) == [
        Event(EventKind.DRAG_START, value=10.0),
        Event(EventKind.DRAG_END, value=10.03),
    ]
    assert events_from_trigger(IDs.Control.HIST_GRAPH, "selectedData", {"selected": None}, session) == [
        Event(EventKind.DRAG_CANCEL)
    ]


def test_log_axis_buttons(session):
    assert events_from_trigger(IDs.Control.HIST_LOG_Y, "n_clicks", {}, session) == [
        Event(EventKind.TOGGLE_LOG_AXIS, value="y")
    ]
