from __future__ import annotations

from catalog_browser.core.catalog import Catalog
from catalog_browser.core.filter_set import FilterSet
from catalog_browser.core.sampling import SampleConfig
from catalog_browser.services.export_service import ExportService


def _make_filter_set(catalog) -> FilterSet:
    fs = FilterSet(catalog)
    mass = fs.activate(catalog.field("mass"))
    snapshot = fs.activate(catalog.field("snapshot"))
    npart = fs.activate(catalog.field("npart"))
    mass.apply_facet_data({"min": 10.0, "max": 13.5, "avg": 11.0})
    snapshot.apply_facet_data([{"key": "99", "doc_count": 1}])
    npart.apply_facet_data({"min": 20, "max": 20, "avg": 20})
    snapshot.set_selection("99")
    return fs


def test_download_links_carry_committed_query(catalog):
    query = {"sort": "-mass", "mass": "10,13", "offset": 25, "limit": 25, "fields": "id mass", "aggs": "", "hist": "mass:0.03"}
    links = ExportService().download_links(catalog, query)

    assert [link.format for link in links] == ["csv", "fits"]
    assert links[0].href == "/halos/csv?sort=-mass&mass=10%2C13&fields=id+mass"
    assert links[1].href.startswith("/halos/fits?")


def test_no_bulk_formats_no_links():
    bare = Catalog.from_dict({"name": "bare", "fields": [{"name": "a"}]})
    assert ExportService().download_links(bare, {"sort": ""}) == []


def test_python_snippet(catalog):
    fs = _make_filter_set(catalog)
    snippet = ExportService(client_module="flathub").python_snippet(catalog, fs, SampleConfig(0.25, 7))
    assert snippet.splitlines() == [
        "import flathub",
        'halos = flathub.Simulation("halos")',
        'q = flathub.Query(halos, mass = (10, 13.5), snapshot = "99", npart = 20, sample = 0.25, seed = 7)',
        "dat = q.numpy()",
    ]


def test_python_snippet_without_predicates(catalog):
    snippet = ExportService().python_snippet(catalog, FilterSet(catalog), SampleConfig())
    assert "q = catalog_client.Query(halos)" in snippet


def test_snippet_variable_is_an_identifier():
    odd = Catalog.from_dict({"name": "2-sims", "fields": [{"name": "a"}]})
    snippet = ExportService().python_snippet(odd, FilterSet(odd), SampleConfig())
    assert '_2_sims = catalog_client.Simulation("2-sims")' in snippet
