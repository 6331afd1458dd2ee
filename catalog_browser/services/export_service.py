from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import List

import httpx

from catalog_browser.core.catalog import Catalog
from catalog_browser.core.filter_set import FilterSet
from catalog_browser.core.formatting import format_number
from catalog_browser.core.query import QueryParams, committed_query
from catalog_browser.core.sampling import SampleConfig


@dataclass(frozen=True)
class DownloadLink:
    format: str
    href: str


def _identifier(name: str) -> str:
    ident = re.sub(r"\W", "_", name)
    return "_" + ident if ident[:1].isdigit() else ident


class ExportService:
    """
    Read-only views over the committed query: bulk download links and a
    Python snippet reproducing the current selection with the client package.
    Stateless: everything is derived from the arguments.
    """

    def __init__(self, *, client_module: str = "catalog_client") -> None:
        self.client_module = client_module

    def download_links(self, catalog: Catalog, query: QueryParams) -> List[DownloadLink]:
        params = httpx.QueryParams(committed_query(query))
        base = catalog.uri.rstrip("/")
        return [DownloadLink(format=fmt, href=f"{base}/{fmt}?{params}") for fmt in catalog.bulk]

    def python_snippet(self, catalog: Catalog, filter_set: FilterSet, sample: SampleConfig) -> str:
        mod = self.client_module
        var = _identifier(catalog.name)

        args = [var]
        for filt in filter_set:
            literal = filt.python_literal()
            if literal is not None:
                args.append(f"{filt.name} = {literal}")
        if sample.enabled:
            args.append(f"sample = {format_number(sample.ratio)}")
            if sample.seed is not None:
                args.append(f"seed = {sample.seed}")

        return "\n".join([
            f"import {mod}",
            f"{var} = {mod}.Simulation({json.dumps(catalog.name)})",
            f"q = {mod}.Query({', '.join(args)})",
            "dat = q.numpy()",
        ])
