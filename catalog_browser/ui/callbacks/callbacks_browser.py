from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict

import dash
from dash import ALL, Input, Output, State, html

from catalog_browser.core.session import BrowserSession
from catalog_browser.ui.callbacks.events import events_from_trigger
from catalog_browser.ui.figures import histogram_figure
from catalog_browser.ui.helpers import (
    add_filter_options,
    hidden_columns,
    page_count,
    result_info,
    table_columns,
    table_rows,
)
from catalog_browser.ui.ids import IDs
from catalog_browser.ui.layout.build_filter_panel import build_filter_rows

if TYPE_CHECKING:
    from catalog_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


def _pattern(kind: str) -> Dict[str, Any]:
    return {"type": kind, "field": ALL}


def _restore_session(ctx: AppConfig, catalog_name: str | None, data: dict | None) -> tuple[BrowserSession, bool]:
    """Return the stored session, or a fresh one (flagged True) on first load / catalog switch."""
    gc = ctx.global_config
    catalog = ctx.catalog_by_name.get(catalog_name or "") or ctx.default_catalog
    if data and data.get("catalog") == catalog.name:
        return BrowserSession.from_dict(data, catalog, bins=gc.histogram_bins), False
    logger.info("Starting browser session", extra={"catalog": catalog.name})
    return BrowserSession.create(catalog, page_size=gc.page_size, bins=gc.histogram_bins), True


def _view_outputs(session: BrowserSession) -> Dict[str, Any]:
    """Outputs derived from session state alone (no response needed)."""
    engine = session.histogram
    show_hist = engine.target is not None and bool(engine.points)
    return {
        "session": session.to_dict(),
        "filter_rows": build_filter_rows(session),
        "add_options": add_filter_options(session),
        "add_value": None,
        "columns": table_columns(session.catalog),
        "hidden": hidden_columns(session),
        "page_current": session.window.offset // session.window.limit,
        "seed_disabled": not session.sample.enabled,
        "hist_figure": histogram_figure(engine) if show_hist else dash.no_update,
        "hist_style": {} if show_hist else {"display": "none"},
    }


def register_browser_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Single entry point: component event -> session events -> draw
    # ---------------------------------------------------------
    @app.callback(
        output=dict(
            session=Output(IDs.Store.SESSION, "data"),
            filter_rows=Output(IDs.Control.FILTER_ROWS, "children"),
            add_options=Output(IDs.Control.ADD_FILTER_SELECT, "options"),
            add_value=Output(IDs.Control.ADD_FILTER_SELECT, "value"),
            columns=Output(IDs.Control.RESULT_TABLE, "columns"),
            data=Output(IDs.Control.RESULT_TABLE, "data"),
            page_count=Output(IDs.Control.RESULT_TABLE, "page_count"),
            page_current=Output(IDs.Control.RESULT_TABLE, "page_current"),
            hidden=Output(IDs.Control.RESULT_TABLE, "hidden_columns"),
            info=Output(IDs.Control.RESULT_INFO, "children"),
            alert=Output(IDs.Control.STATUS_ALERT, "children"),
            alert_open=Output(IDs.Control.STATUS_ALERT, "is_open"),
            seed_disabled=Output(IDs.Control.SAMPLE_SEED, "disabled"),
            hist_figure=Output(IDs.Control.HIST_GRAPH, "figure"),
            hist_style=Output(IDs.Control.HIST_CONTAINER, "style"),
            downloads=Output(IDs.Control.DOWNLOAD_LINKS, "children"),
            code=Output(IDs.Control.CODE_SNIPPET, "children"),
        ),
        inputs=dict(
            catalog=Input(IDs.Control.CATALOG_SELECT, "value"),
            page_current=Input(IDs.Control.RESULT_TABLE, "page_current"),
            sort_by=Input(IDs.Control.RESULT_TABLE, "sort_by"),
            hidden_columns=Input(IDs.Control.RESULT_TABLE, "hidden_columns"),
            add_field=Input(IDs.Control.ADD_FILTER_SELECT, "value"),
            select=Input(_pattern(IDs.Pattern.FILTER_SELECT), "value"),
            lb=Input(_pattern(IDs.Pattern.FILTER_LB), "value"),
            ub=Input(_pattern(IDs.Pattern.FILTER_UB), "value"),
            remove=Input(_pattern(IDs.Pattern.FILTER_REMOVE), "n_clicks"),
            hist=Input(_pattern(IDs.Pattern.FILTER_HIST), "n_clicks"),
            reset=Input(_pattern(IDs.Pattern.FILTER_RESET), "n_clicks"),
            sample_ratio=Input(IDs.Control.SAMPLE_RATIO, "value"),
            sample_seed=Input(IDs.Control.SAMPLE_SEED, "value"),
            selected=Input(IDs.Control.HIST_GRAPH, "selectedData"),
            log_x=Input(IDs.Control.HIST_LOG_X, "n_clicks"),
            log_y=Input(IDs.Control.HIST_LOG_Y, "n_clicks"),
        ),
        state=dict(
            session_data=State(IDs.Store.SESSION, "data"),
            page_size=State(IDs.Control.RESULT_TABLE, "page_size"),
            select_ids=State(_pattern(IDs.Pattern.FILTER_SELECT), "id"),
            lb_ids=State(_pattern(IDs.Pattern.FILTER_LB), "id"),
            ub_ids=State(_pattern(IDs.Pattern.FILTER_UB), "id"),
            remove_ids=State(_pattern(IDs.Pattern.FILTER_REMOVE), "id"),
            hist_ids=State(_pattern(IDs.Pattern.FILTER_HIST), "id"),
            reset_ids=State(_pattern(IDs.Pattern.FILTER_RESET), "id"),
        ),
    )
    def on_browser_event(**values):
        session, fresh = _restore_session(ctx, values.get("catalog"), values.get("session_data"))

        triggered = dash.ctx.triggered[0]["prop_id"] if dash.ctx.triggered else ""
        prop = triggered.rsplit(".", 1)[-1]
        events = [] if fresh else events_from_trigger(dash.ctx.triggered_id, prop, values, session)
        if not fresh and not events:
            raise dash.exceptions.PreventUpdate

        # every event is applied; a redraw is needed if any of them asks for one
        needs_draw = fresh
        for event in events:
            needs_draw = session.dispatch(event) or needs_draw

        out = {
            "data": dash.no_update,
            "page_count": dash.no_update,
            "info": dash.no_update,
            "alert": dash.no_update,
            "alert_open": dash.no_update,
            "downloads": dash.no_update,
            "code": ctx.export_service.python_snippet(session.catalog, session.filter_set, session.sample),
        }

        if needs_draw:
            try:
                request, page = session.draw(ctx.fetch)
            except Exception as e:
                logger.exception("Catalog draw failed")
                out.update(alert=f"{type(e).__name__}: {e}", alert_open=True)
            else:
                if page.error is not None:
                    out.update(data=[], alert=page.error, alert_open=True)
                elif not page.stale:
                    out.update(
                        data=table_rows(session.catalog, page.rows),
                        page_count=page_count(page.records_filtered, session.window.limit),
                        info=result_info(session.window.offset, len(page.rows), page.total),
                        alert=None,
                        alert_open=False,
                        downloads=_download_links(ctx, session, request.params),
                    )

        out.update(_view_outputs(session))
        return out


def _download_links(ctx: AppConfig, session: BrowserSession, params) -> list:
    links = ctx.export_service.download_links(session.catalog, params)
    if not links:
        return []
    children: list = ["download as "]
    for link in links:
        children.extend([html.A(link.format, href=link.href, id=f"download-{link.format}"), " "])
    return children
