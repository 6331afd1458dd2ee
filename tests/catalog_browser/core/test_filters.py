from __future__ import annotations

import math

from catalog_browser.core.filters import CategoricalFilter, NumericFilter, filter_from_dict, make_filter


def test_make_filter_picks_variant(catalog):
    assert isinstance(make_filter(catalog.field("mass"), 0), NumericFilter)
    assert isinstance(make_filter(catalog.field("npart"), 0), NumericFilter)
    assert isinstance(make_filter(catalog.field("snapshot"), 0), CategoricalFilter)
    assert isinstance(make_filter(catalog.field("type"), 0), CategoricalFilter)


def test_categorical_facets_rebuild_options_and_clear_selection(catalog):
    filt = CategoricalFilter(field=catalog.field("type"))
    assert not filt.loaded

    assert filt.apply_facet_data({"buckets": [{"key": 0, "doc_count": 10}, {"key": 2, "doc_count": 3}]})
    assert filt.loaded
    assert [(o.value, o.label) for o in filt.options] == [("0", "central (10)"), ("2", "orphan (3)")]

    filt.set_selection("2")
    assert filt.query_value() == "2"
    assert filt.pins_single_value

    filt.apply_facet_data([{"key": 0, "doc_count": 4}])
    assert filt.selection is None
    assert filt.query_value() is None


def test_categorical_empty_selection_means_none(catalog):
    filt = CategoricalFilter(field=catalog.field("snapshot"))
    filt.set_selection("")
    assert filt.selection is None
    assert filt.python_literal() is None
    filt.set_selection("99")
    assert filt.python_literal() == '"99"'


def test_categorical_malformed_aggregation_stays_unloaded(catalog):
    filt = CategoricalFilter(field=catalog.field("snapshot"))
    assert not filt.apply_facet_data({"min": 1})
    assert not filt.apply_facet_data([{"doc_count": 1}])
    assert not filt.loaded


def test_numeric_facets_seed_bounds(catalog):
    filt = NumericFilter(field=catalog.field("mass"))
    assert filt.query_value() is None
    assert not filt.set_bounds(1, 2)  # disabled until loaded

    assert filt.apply_facet_data({"min": 1.5, "max": 9.25, "avg": 4.0})
    assert (filt.lb, filt.ub) == (1.5, 9.25)
    assert (filt.default_lb, filt.default_ub) == (1.5, 9.25)
    assert filt.avg == 4.0
    assert filt.query_value() == "1.5,9.25"


def test_numeric_exact_and_range_encoding(catalog):
    filt = NumericFilter(field=catalog.field("npart"))
    filt.apply_facet_data({"min": 1, "max": 9, "avg": 5})

    filt.set_bounds(3, 3)
    assert filt.query_value() == "3"
    assert filt.python_literal() == "3"
    assert filt.pins_single_value

    filt.set_bounds(3, 6)
    assert filt.query_value() == "3,6"
    assert filt.python_literal() == "(3, 6)"
    assert not filt.pins_single_value


def test_numeric_non_finite_bound_falls_back_to_default(catalog):
    filt = NumericFilter(field=catalog.field("mass"))
    filt.apply_facet_data({"min": 1, "max": 9, "avg": 5})

    filt.set_bounds(math.nan, 4)
    assert (filt.lb, filt.ub) == (1, 4)
    filt.set_bounds(2, None)
    assert (filt.lb, filt.ub) == (2, 9)
    filt.set_bounds("abc", math.inf)
    assert (filt.lb, filt.ub) == (1, 9)


def test_numeric_reset_restores_facet_bounds(catalog):
    filt = NumericFilter(field=catalog.field("mass"))
    filt.apply_facet_data({"min": 1, "max": 9, "avg": 5})
    filt.set_range(3, 6)
    assert filt.reset()
    assert (filt.lb, filt.ub) == (1, 9)


def test_numeric_null_stats_stay_unloaded(catalog):
    filt = NumericFilter(field=catalog.field("mass"))
    assert not filt.apply_facet_data({"min": None, "max": None, "avg": None})
    assert not filt.apply_facet_data([{"key": 1}])
    assert not filt.loaded


def test_filter_dict_roundtrip(catalog):
    num = NumericFilter(field=catalog.field("mass"), position=0)
    num.apply_facet_data({"min": 1, "max": 9, "avg": 5})
    num.set_bounds(2, 3)
    cat = CategoricalFilter(field=catalog.field("snapshot"), position=1)
    cat.apply_facet_data([{"key": "99", "doc_count": 1}])

    assert filter_from_dict(num.to_dict(), catalog, position=0) == num
    assert filter_from_dict(cat.to_dict(), catalog, position=1) == cat


def test_filter_from_dict_drops_unknown_or_mismatched(catalog):
    assert filter_from_dict({"kind": "numeric", "field": "gone"}, catalog, 0) is None
    assert filter_from_dict({"kind": "numeric", "field": "snapshot"}, catalog, 0) is None
