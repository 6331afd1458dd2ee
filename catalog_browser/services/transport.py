from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from catalog_browser.core.catalog import Catalog
from catalog_browser.core.exceptions import TransportError
from catalog_browser.core.query import QueryParams

logger = logging.getLogger(__name__)


class CatalogClient:
    """
    Synchronous client for the catalog search endpoint
    (GET <server>/<catalog uri>/catalog).

    Failures are raised as TransportError carrying the raw
    "<reason>: <detail>" text that the result view shows verbatim.
    """

    def __init__(
            self,
            base_url: str,
            *,
            timeout: float = 30.0,
            transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def __enter__(self) -> CatalogClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def __call__(self, catalog: Catalog, params: QueryParams) -> Dict[str, Any]:
        return self.fetch(catalog, params)

    def fetch(self, catalog: Catalog, params: QueryParams) -> Dict[str, Any]:
        url = catalog.uri.rstrip("/") + "/catalog"
        logger.debug("Fetching catalog page", extra={"url": url, "params": dict(params)})

        try:
            response = self._client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(f"error: {e.response.reason_phrase or e.response.status_code}") from e
        except httpx.TimeoutException as e:
            raise TransportError(f"timeout: {e}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"error: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise TransportError(f"parsererror: {e}") from e
        if not isinstance(payload, dict):
            raise TransportError("parsererror: expected a JSON object")
        return payload
