from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dash_table, dcc, html

from catalog_browser.core.session import BrowserSession
from catalog_browser.ui.helpers import hidden_columns, table_columns
from catalog_browser.ui.ids import IDs


def build_result_panel(session: BrowserSession) -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader(
                html.Div(
                    [
                        html.Strong("Results"),
                        html.Small(id=IDs.Control.RESULT_INFO, className="text-muted ms-3"),
                        html.Div(id=IDs.Control.DOWNLOAD_LINKS, className="ms-auto small"),
                    ],
                    className="d-flex align-items-center",
                ),
                className="p-2",
            ),
            dbc.CardBody(
                [
                    dbc.Alert(id=IDs.Control.STATUS_ALERT, color="danger", is_open=False),
                    dcc.Loading(
                        dash_table.DataTable(
                            id=IDs.Control.RESULT_TABLE,
                            columns=table_columns(session.catalog),
                            data=[],
                            hidden_columns=hidden_columns(session),
                            page_action="custom",
                            page_current=0,
                            page_size=session.window.limit,
                            page_count=1,
                            sort_action="custom",
                            sort_mode="multi",
                            sort_by=[],
                            style_table={"overflowX": "auto"},
                            style_as_list_view=True,
                            style_cell={
                                "fontSize": "12px",
                                "padding": "4px 8px",
                                "whiteSpace": "nowrap",
                            },
                            style_cell_conditional=[
                                {"if": {"column_id": f.name}, "textAlign": "right"}
                                for f in session.catalog.fields
                                if f.is_numeric
                            ],
                            style_header={"fontWeight": "600", "backgroundColor": "#f3f4f6"},
                        ),
                        type="default",
                    ),
                ]
            ),
        ],
        className="mb-3",
    )


def build_histogram_panel() -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader(
                html.Div(
                    [
                        html.Strong("Histogram"),
                        html.Div(
                            [
                                dbc.Button("log x", id=IDs.Control.HIST_LOG_X, size="sm",
                                           outline=True, color="secondary", className="me-1"),
                                dbc.Button("log y", id=IDs.Control.HIST_LOG_Y, size="sm",
                                           outline=True, color="secondary"),
                            ],
                            className="ms-auto",
                        ),
                    ],
                    className="d-flex align-items-center",
                ),
                className="p-2",
            ),
            dbc.CardBody(
                dcc.Graph(id=IDs.Control.HIST_GRAPH, config={"responsive": True, "displaylogo": False}),
            ),
        ],
        id=IDs.Control.HIST_CONTAINER,
        style={"display": "none"},
        className="mb-3",
    )


def build_code_panel() -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader("Python", className="fw-semibold"),
            dbc.CardBody(html.Pre(id=IDs.Control.CODE_SNIPPET, className="mb-0 small")),
        ],
        className="mb-3",
    )
