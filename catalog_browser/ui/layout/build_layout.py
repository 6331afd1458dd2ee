from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc

from catalog_browser.core.session import BrowserSession
from catalog_browser.ui.config import AppConfig
from catalog_browser.ui.ids import IDs
from catalog_browser.ui.layout.build_filter_panel import build_filter_panel
from catalog_browser.ui.layout.build_navbar import build_navbar
from catalog_browser.ui.layout.build_result_panel import (
    build_code_panel,
    build_histogram_panel,
    build_result_panel,
)


def build_layout(ctx: AppConfig) -> dbc.Container:
    catalog = ctx.default_catalog
    session = BrowserSession.create(
        catalog,
        page_size=ctx.global_config.page_size,
        bins=ctx.global_config.histogram_bins,
    )

    return dbc.Container(
        fluid=True,
        children=[
            build_navbar(ctx.global_config, ctx.catalog_names, catalog.name),
            # session state lives in the browser tab; None triggers the first draw
            dcc.Store(id=IDs.Store.SESSION, storage_type="memory"),
            dbc.Row(
                [
                    dbc.Col(build_filter_panel(session), md=3, className="mt-3"),
                    dbc.Col(
                        [
                            build_histogram_panel(),
                            build_result_panel(session),
                            build_code_panel(),
                        ],
                        md=9,
                        className="mt-3",
                    ),
                ],
                className="gx-3",
            ),
        ],
    )
