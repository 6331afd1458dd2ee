"""
Top-level package for the catalog browser.

This package exposes the core architecture (engine, services, UI adapters).
Most code should import from submodules such as:
    catalog_browser.core
    catalog_browser.services
    catalog_browser.ui
"""

__all__: list[str] = []
