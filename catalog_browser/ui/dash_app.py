from __future__ import annotations

import logging
from pathlib import Path

import dash_bootstrap_components as dbc
from dash import Dash

from catalog_browser.config.config_loader import load_catalog_registry
from catalog_browser.core.exceptions import ConfigError
from catalog_browser.services.export_service import ExportService
from catalog_browser.services.transport import CatalogClient
from catalog_browser.ui.callbacks.callbacks_browser import register_browser_callbacks
from catalog_browser.ui.config import AppConfig
from catalog_browser.ui.layout.build_layout import build_layout

logger = logging.getLogger(__name__)


def create_dash_app(config_root: Path | str = Path("config")) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config
    global_config, catalog_by_name = load_catalog_registry(config_root)
    if not catalog_by_name:
        raise ConfigError(f"No catalog descriptors were loaded from {config_root}")

    # 2) Services
    client = CatalogClient(global_config.server_url, timeout=global_config.request_timeout)
    export_service = ExportService(client_module=global_config.client_module)

    # 3) App Context
    ctx = AppConfig(
        config_root=config_root,
        global_config=global_config,
        catalog_by_name=catalog_by_name,
        default_catalog=catalog_by_name[sorted(catalog_by_name)[0]],
        fetch=client,
        export_service=export_service,
    )
    ctx.validate()
    logger.info(
        "Catalog browser configured",
        extra={"catalogs": ctx.catalog_names, "server_url": global_config.server_url},
    )

    app = Dash(__name__, external_stylesheets=[dbc.themes.FLATLY])
    app.title = global_config.ui_title
    app.layout = build_layout(ctx)

    register_browser_callbacks(app, ctx)

    return app
