

class CatalogBrowserError(Exception):
    """Base exception for all catalog_browser errors"""
    pass

class ConfigError(CatalogBrowserError):
    """Invalid or inconsistent global.json or catalog config directory"""
    pass

class CatalogError(CatalogBrowserError):
    """
    Catalog descriptor is malformed:
    missing field names, duplicate fields, wrong kinds, etc
    """
    pass

class TransportError(CatalogBrowserError):
    """
    The catalog search endpoint could not be reached or answered badly.
    The message is the raw "<reason>: <detail>" text shown to the user.
    """
    pass
