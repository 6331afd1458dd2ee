from __future__ import annotations

import json
from pathlib import Path

from catalog_browser.config.model import GlobalConfig
from catalog_browser.core.session import BrowserSession
from catalog_browser.services.export_service import ExportService
from catalog_browser.ui.callbacks.callbacks_browser import _restore_session
from catalog_browser.ui.config import AppConfig
from catalog_browser.ui.dash_app import create_dash_app
from catalog_browser.ui.ids import IDs
from catalog_browser.ui.layout.build_filter_panel import build_filter_rows
from catalog_browser.ui.layout.build_layout import build_layout


def _collect_ids(component, found=None) -> list:
    found = [] if found is None else found
    if isinstance(component, (list, tuple)):
        for child in component:
            _collect_ids(child, found)
        return found
    if not hasattr(component, "to_plotly_json"):
        return found
    cid = getattr(component, "id", None)
    if cid is not None:
        found.append(cid)
    _collect_ids(getattr(component, "children", None), found)
    return found


def _make_ctx(catalog) -> AppConfig:
    return AppConfig(
        config_root=Path("config"),
        global_config=GlobalConfig(catalogs=[catalog]),
        catalog_by_name={catalog.name: catalog},
        default_catalog=catalog,
        fetch=lambda cat, params: {"hits": {"total": 0, "hits": []}},
        export_service=ExportService(),
    )


def test_layout_contains_controls(catalog):
    ids = _collect_ids(build_layout(_make_ctx(catalog)))
    for cid in (
        IDs.Store.SESSION,
        IDs.Control.CATALOG_SELECT,
        IDs.Control.ADD_FILTER_SELECT,
        IDs.Control.FILTER_ROWS,
        IDs.Control.SAMPLE_RATIO,
        IDs.Control.SAMPLE_SEED,
        IDs.Control.RESULT_TABLE,
        IDs.Control.HIST_GRAPH,
        IDs.Control.DOWNLOAD_LINKS,
        IDs.Control.CODE_SNIPPET,
    ):
        assert cid in ids


def test_filter_rows_per_variant(catalog):
    session = BrowserSession.create(catalog)
    ids = _collect_ids(build_filter_rows(session))
    assert {"type": IDs.Pattern.FILTER_LB, "field": "mass"} in ids
    assert {"type": IDs.Pattern.FILTER_HIST, "field": "mass"} in ids
    assert {"type": IDs.Pattern.FILTER_SELECT, "field": "snapshot"} in ids
    assert {"type": IDs.Pattern.FILTER_LB, "field": "snapshot"} not in ids
    assert {"type": IDs.Pattern.FILTER_REMOVE, "field": "snapshot"} in ids


def test_restore_session(catalog):
    ctx = _make_ctx(catalog)
    session, fresh = _restore_session(ctx, "halos", None)
    assert fresh
    assert [f.name for f in session.filter_set] == ["mass", "snapshot"]

    session.filter_set.activate(catalog.field("npart"))
    restored, fresh = _restore_session(ctx, "halos", session.to_dict())
    assert not fresh
    assert restored.filter_set.is_active("npart")

    # unknown catalog falls back to the default, stored state of another catalog is discarded
    other, fresh = _restore_session(ctx, "missing", dict(session.to_dict(), catalog="other"))
    assert fresh
    assert not other.filter_set.is_active("npart")


def test_create_dash_app(tmp_path, monkeypatch):
    monkeypatch.delenv("CATALOG_BROWSER_SERVER_URL", raising=False)
    (tmp_path / "catalogs").mkdir()
    (tmp_path / "global.json").write_text(json.dumps({"ui_title": "Sims"}))
    (tmp_path / "catalogs" / "halos.json").write_text(
        json.dumps({"name": "halos", "fields": [{"name": "mass", "base": "f", "top": True}]})
    )

    app = create_dash_app(tmp_path)
    assert app.title == "Sims"
    assert len(app.callback_map) == 1
