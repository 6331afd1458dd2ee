from __future__ import annotations

from typing import List

import dash_bootstrap_components as dbc
from dash import dcc, html

from catalog_browser.core.filters import CategoricalFilter, Filter, NumericFilter
from catalog_browser.core.session import BrowserSession
from catalog_browser.ui.helpers import add_filter_options
from catalog_browser.ui.ids import IDs, filter_control_id


def _remove_button(filt: Filter) -> dbc.Button:
    return dbc.Button(
        "×",
        id=filter_control_id(IDs.Pattern.FILTER_REMOVE, filt.name),
        color="link",
        size="sm",
        className="p-0 me-2",
        title=f"Remove {filt.field.title} filter",
    )


def _categorical_controls(filt: CategoricalFilter) -> List:
    return [
        dcc.Dropdown(
            id=filter_control_id(IDs.Pattern.FILTER_SELECT, filt.name),
            options=[{"label": o.label, "value": o.value} for o in filt.options],
            value=filt.selection,
            disabled=not filt.loaded,
            placeholder="loading..." if not filt.loaded else "Any",
        ),
    ]


def _bound_input(filt: NumericFilter, upper: bool) -> dcc.Input:
    return dcc.Input(
        id=filter_control_id(IDs.Pattern.FILTER_UB if upper else IDs.Pattern.FILTER_LB, filt.name),
        type="number",
        value=filt.ub if upper else filt.lb,
        min=filt.default_lb,
        max=filt.default_ub,
        step=filt.step,
        debounce=True,
        disabled=not filt.loaded,
        title=f"{'Upper' if upper else 'Lower'} bound for {filt.field.title} values",
        className="form-control form-control-sm",
        style={"width": "8em"},
    )


def _numeric_controls(filt: NumericFilter, is_histogram: bool) -> List:
    avg = html.Em("loading...") if filt.avg is None else str(filt.avg)
    return [
        html.Div(
            [_bound_input(filt, upper=False), html.Span(" – "), _bound_input(filt, upper=True)],
            className="d-flex align-items-center",
        ),
        html.Div(
            [
                html.Span(["μ = ", avg], className="me-2 small"),
                dbc.Button(
                    "histogram",
                    id=filter_control_id(IDs.Pattern.FILTER_HIST, filt.name),
                    size="sm",
                    outline=not is_histogram,
                    color="secondary",
                    className="me-1",
                ),
                dbc.Button(
                    "reset",
                    id=filter_control_id(IDs.Pattern.FILTER_RESET, filt.name),
                    size="sm",
                    outline=True,
                    color="secondary",
                    disabled=not filt.loaded,
                ),
            ],
            className="d-flex align-items-center mt-1",
        ),
    ]


def build_filter_rows(session: BrowserSession) -> List[html.Div]:
    target = session.filter_set.histogram_target
    rows = []
    for filt in session.filter_set:
        if isinstance(filt, NumericFilter):
            controls = _numeric_controls(filt, filt is target)
        else:
            controls = _categorical_controls(filt)
        rows.append(
            html.Div(
                [
                    html.Div(
                        [_remove_button(filt), html.Strong(filt.field.label)],
                        className="d-flex align-items-center",
                        title=filt.field.description or "",
                    ),
                    *controls,
                ],
                className="mb-3",
            )
        )
    return rows


def build_filter_panel(session: BrowserSession) -> dbc.Card:
    sample = session.sample
    return dbc.Card(
        [
            dbc.CardHeader("Filters", className="fw-semibold"),
            dbc.CardBody(
                [
                    dcc.Dropdown(
                        id=IDs.Control.ADD_FILTER_SELECT,
                        options=add_filter_options(session),
                        value=None,
                        placeholder="Select field to view/filter",
                        className="mb-3",
                    ),
                    html.Div(id=IDs.Control.FILTER_ROWS, children=build_filter_rows(session)),
                    html.Hr(),
                    html.Label("Random sample", className="form-label"),
                    html.Div(
                        [
                            html.Span("fraction ", className="me-1 small"),
                            dcc.Input(
                                id=IDs.Control.SAMPLE_RATIO,
                                type="number",
                                min=0,
                                max=1,
                                step="any",
                                value=sample.ratio,
                                debounce=True,
                                title="Probability (0,1] with which to include each item",
                                className="form-control form-control-sm me-2",
                                style={"width": "6em"},
                            ),
                            html.Span("seed ", className="me-1 small"),
                            dcc.Input(
                                id=IDs.Control.SAMPLE_SEED,
                                type="number",
                                min=0,
                                step=1,
                                value=sample.seed,
                                debounce=True,
                                disabled=not sample.enabled,
                                title="Random seed to generate sample selection",
                                className="form-control form-control-sm",
                                style={"width": "6em"},
                            ),
                        ],
                        className="d-flex align-items-center",
                    ),
                ]
            ),
        ],
        className="mb-3",
    )
