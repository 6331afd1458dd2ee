"""
Config package for catalog_browser.

Responsible for:
- config models (GlobalConfig)
- config I/O helpers (load_global_config / load_catalog_registry)
"""

from .model import GlobalConfig
from .config_loader import load_catalog_registry, load_global_config

__all__ = ["GlobalConfig", "load_catalog_registry", "load_global_config"]
