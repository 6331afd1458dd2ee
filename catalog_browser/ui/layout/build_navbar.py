from __future__ import annotations

from typing import List, Optional

import dash_bootstrap_components as dbc
from dash import dcc, html

from catalog_browser.config.model import GlobalConfig
from catalog_browser.ui.ids import IDs


def build_navbar(
    global_config: GlobalConfig,
    catalog_names: List[str],
    default_name: Optional[str],
) -> dbc.Navbar:
    return dbc.Navbar(
        dbc.Container(
            fluid=True,
            children=[
                html.Div(
                    [
                        html.H2(global_config.ui_title, className="mb-0"),
                        html.Small(global_config.subtitle, className="text-muted"),
                    ],
                    className="d-flex flex-column justify-content-center",
                ),
                html.Div(
                    [
                        html.Div("Catalog", className="navbar-catalog-title"),
                        dcc.Dropdown(
                            id=IDs.Control.CATALOG_SELECT,
                            options=[{"label": n, "value": n} for n in catalog_names],
                            value=default_name,
                            clearable=False,
                            placeholder="Select catalog",
                            className="mt-1",
                        ),
                    ],
                    className="ms-auto",
                    style={"minWidth": "280px", "maxWidth": "380px", "marginRight": "24px"},
                ),
            ],
        ),
        dark=False,
        className="shadow-sm",
    )
