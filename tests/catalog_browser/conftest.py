from __future__ import annotations

import pytest

from catalog_browser.core.catalog import Catalog


def make_catalog() -> Catalog:
    """
    Small catalog with:
    - id: integer, displayed
    - mass: float, top
    - npart: integer
    - snapshot: categorical, top
    - type: enum (central / satellite / orphan)
    - x: float, hidden by default
    """
    return Catalog.from_dict(
        {
            "name": "halos",
            "bulk": ["csv", "fits"],
            "fields": [
                {"name": "id", "title": "Halo ID", "base": "i"},
                {"name": "mass", "title": "Mass", "base": "f", "units": "Msun", "top": True},
                {"name": "npart", "title": "Particles", "base": "i"},
                {"name": "snapshot", "title": "Snapshot", "terms": True, "top": True},
                {"name": "type", "title": "Type", "terms": True, "enum": ["central", "satellite", "orphan"]},
                {"name": "x", "title": "x", "base": "f", "disp": False},
            ],
        }
    )


@pytest.fixture
def catalog() -> Catalog:
    return make_catalog()
