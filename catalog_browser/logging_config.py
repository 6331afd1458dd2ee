from __future__ import annotations

import logging
import os
from typing import Optional

from pythonjsonlogger import jsonlogger

LOG_FORMAT_ENV = "CATALOG_BROWSER_LOG_FORMAT"
LOG_LEVEL_ENV = "CATALOG_BROWSER_LOG_LEVEL"

_FIELDS = "%(asctime)s %(levelname)s %(name)s %(message)s"

# chatty at INFO: one line per catalog request
_NOISY_LOGGERS = ("httpx", "httpcore", "werkzeug")


def _resolve_level(level: Optional[int]) -> int:
    if level is not None:
        return level
    name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def build_formatter(format_mode: str) -> logging.Formatter:
    if format_mode == "plain":
        return logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    return jsonlogger.JsonFormatter(
        _FIELDS,
        rename_fields={"asctime": "time", "levelname": "level", "name": "logger"},
    )


def configure_logging(
        level: Optional[int] = None,
        force_format: Optional[str] = None,
) -> None:
    """
    Configure the root logger for the browser process.

    Structured `extra={...}` fields (catalog, generation, url, ...) end up
    as top-level keys in JSON mode and are dropped in plain mode.

    Format: force_format ("json" / "plain"), else $CATALOG_BROWSER_LOG_FORMAT,
    else JSON.
    Level: level, else $CATALOG_BROWSER_LOG_LEVEL, else INFO.
    """
    format_mode = (force_format or os.getenv(LOG_FORMAT_ENV, "json")).lower()
    root_level = _resolve_level(level)

    root = logging.getLogger()
    root.setLevel(root_level)

    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter(format_mode))

    # Replace any existing handlers to avoid duplicate logs
    root.handlers.clear()
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(root_level, logging.WARNING))
