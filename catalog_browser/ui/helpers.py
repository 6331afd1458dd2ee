from __future__ import annotations

import math
from typing import Any, Dict, List

from catalog_browser.core.catalog import Catalog
from catalog_browser.core.session import BrowserSession


def table_columns(catalog: Catalog) -> List[dict]:
    return [
        {"name": f.label, "id": f.name, "hideable": True}
        for f in catalog.fields
    ]


def table_rows(catalog: Catalog, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Render raw hits for display (float precision, enum labels)."""
    rendered = []
    for row in rows:
        out = {}
        for name, value in row.items():
            fld = catalog.field(name)
            out[name] = fld.render(value) if fld is not None else value
        rendered.append(out)
    return rendered


def hidden_columns(session: BrowserSession) -> List[str]:
    visible = set(session.visible_fields)
    return [n for n in session.catalog.field_names() if n not in visible]


def add_filter_options(session: BrowserSession) -> List[dict]:
    return [
        {"label": f.title, "value": f.name, "title": f.description or f.title}
        for f in session.catalog.fields
        if not session.filter_set.is_active(f.name)
    ]


def page_count(records_filtered: int, page_size: int) -> int:
    return max(1, math.ceil(records_filtered / max(page_size, 1)))


def result_info(offset: int, n_rows: int, total: int) -> str:
    if n_rows == 0:
        return f"Showing 0 of {total:,}"
    return f"Showing {offset + 1:,} to {offset + n_rows:,} of {total:,}"
