from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from catalog_browser.core.catalog import Catalog
from catalog_browser.core.histogram import HISTOGRAM_BINS


@dataclass
class GlobalConfig:
    """
    Parsed global.json plus the catalog descriptors found next to it.

    - server_url: base URL of the catalog search backend
    - page_size: initial number of rows per table page
    - client_module: Python client package named in the generated snippet
    """

    ui_title: str = "Catalog Browser"
    subtitle: str = "Interactive Catalog Explorer"
    server_url: str = "http://localhost:8000"
    page_size: int = 25
    request_timeout: float = 30.0
    histogram_bins: int = HISTOGRAM_BINS
    client_module: str = "catalog_client"
    catalogs: List[Catalog] = field(default_factory=list)
