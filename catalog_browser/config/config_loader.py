from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict, List, Tuple

from catalog_browser.config.model import GlobalConfig
from catalog_browser.core.catalog import Catalog
from catalog_browser.core.exceptions import CatalogError, ConfigError

logger = logging.getLogger(__name__)

SERVER_URL_ENV = "CATALOG_BROWSER_SERVER_URL"


def _read_json(path: Path) -> dict:
    try:
        with path.open() as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e


def load_catalog(path: Path) -> Catalog:
    raw = _read_json(path)
    if not isinstance(raw, dict):
        raise ConfigError(f"Catalog descriptor {path.name} must be a JSON object")
    return Catalog.from_dict(raw)


def load_global_config(root: Path) -> GlobalConfig:
    """
    Load configuration from a directory using the multi-file layout:
    root/global.json and root/catalogs/*.json
    """
    root = Path(root)
    logger.info("Loading global config", extra={"config_root": str(root)})

    global_path = root / "global.json"
    if not global_path.is_file():
        # Fallback to defaults if global.json is missing
        raw_global = {}
    else:
        raw_global = _read_json(global_path)

    catalogs_dir = root / "catalogs"
    catalogs: List[Catalog] = []

    if catalogs_dir.is_dir():
        logger.info(f"Scanning for catalog descriptors in: {catalogs_dir}")
        # Sort files for deterministic loading
        for descriptor in sorted(catalogs_dir.glob("*.json")):
            # Ignore macOS 'Apple Double' files
            if descriptor.name.startswith("._"):
                continue

            logger.info(f"Loading catalog descriptor: {descriptor.name}")
            try:
                catalogs.append(load_catalog(descriptor))
            except (ConfigError, CatalogError) as e:
                logger.error(f"Failed to load {descriptor.name}: {e}")
    else:
        logger.warning(f"Catalogs directory not found at: {catalogs_dir}")

    defaults = GlobalConfig()
    try:
        return GlobalConfig(
            ui_title=raw_global.get("ui_title", defaults.ui_title),
            subtitle=raw_global.get("subtitle", defaults.subtitle),
            server_url=os.getenv(SERVER_URL_ENV) or raw_global.get("server_url", defaults.server_url),
            page_size=int(raw_global.get("page_size", defaults.page_size)),
            request_timeout=float(raw_global.get("request_timeout", defaults.request_timeout)),
            histogram_bins=int(raw_global.get("histogram_bins", defaults.histogram_bins)),
            client_module=raw_global.get("client_module", defaults.client_module),
            catalogs=catalogs,
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value in {global_path}: {e}") from e


def load_catalog_registry(root: Path) -> Tuple[GlobalConfig, Dict[str, Catalog]]:
    """
    Load global config + catalog mapping by name.
    Expected by catalog_browser/ui/dash_app.py
    """
    global_config = load_global_config(root)

    by_name: Dict[str, Catalog] = {}
    for catalog in global_config.catalogs:
        if catalog.name in by_name:
            logger.warning(f"Duplicate catalog name ignored: {catalog.name}")
            continue
        by_name[catalog.name] = catalog

    return global_config, by_name
