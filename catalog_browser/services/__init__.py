"""
Service layer: transport to the catalog search backend and the derived
export views (download links, client code snippet).
"""

from .export_service import DownloadLink, ExportService
from .transport import CatalogClient

__all__ = ["CatalogClient", "DownloadLink", "ExportService"]
