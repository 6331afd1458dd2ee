from __future__ import annotations

import pytest

from catalog_browser.core.catalog import Catalog, Field, FieldKind
from catalog_browser.core.exceptions import CatalogError


def test_field_kind_from_legacy_descriptor(catalog):
    assert catalog.field("id").kind is FieldKind.INTEGER
    assert catalog.field("mass").kind is FieldKind.FLOAT
    assert catalog.field("snapshot").kind is FieldKind.CATEGORICAL
    assert catalog.field("type").kind is FieldKind.ENUM
    assert catalog.field("type").enum_labels == ("central", "satellite", "orphan")


def test_explicit_kind_wins():
    fld = Field.from_dict({"name": "n", "kind": "integer", "base": "f"})
    assert fld.kind is FieldKind.INTEGER
    assert fld.title == "n"


def test_unknown_kind_and_missing_name_rejected():
    with pytest.raises(CatalogError):
        Field.from_dict({"name": "n", "kind": "complex"})
    with pytest.raises(CatalogError):
        Field.from_dict({"title": "nameless"})


def test_duplicate_fields_rejected():
    with pytest.raises(CatalogError):
        Catalog.from_dict({"name": "c", "fields": [{"name": "a"}, {"name": "a"}]})


def test_catalog_lookups(catalog):
    assert catalog.uri == "/halos"
    assert catalog.bulk == ("csv", "fits")
    assert catalog.field("nope") is None
    assert [f.name for f in catalog.top_fields()] == ["mass", "snapshot"]
    assert "x" not in catalog.default_visible()
    assert catalog.field("mass").label == "Mass (Msun)"


def test_render_values(catalog):
    assert catalog.field("mass").render(1.234567891234) == "1.2345679"
    assert catalog.field("mass").render(None) is None
    assert catalog.field("type").render(1) == "satellite"
    assert catalog.field("type").render(7) == 7
    assert catalog.field("id").render(42) == 42
