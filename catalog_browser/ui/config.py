from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from catalog_browser.config.model import GlobalConfig
from catalog_browser.core.catalog import Catalog
from catalog_browser.core.session import Fetch
from catalog_browser.services.export_service import ExportService


@dataclass
class AppConfig:
    """
    Shared state for the Dash app: config, catalogs, transport and export
    services. Passed into layout + callback registration instead of
    module-level globals.
    """
    config_root: Path
    global_config: GlobalConfig
    catalog_by_name: Dict[str, Catalog] = field(default_factory=dict)
    default_catalog: Optional[Catalog] = None

    fetch: Optional[Fetch] = None
    export_service: Optional[ExportService] = None

    @property
    def catalog_names(self) -> List[str]:
        return sorted(self.catalog_by_name)

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        if self.fetch is None:
            raise RuntimeError("AppConfig.fetch must be initialized.")
        if self.export_service is None:
            raise RuntimeError("AppConfig.export_service must be initialized.")
        if self.default_catalog is None:
            raise RuntimeError("AppConfig.default_catalog must be set.")
