"""
Core domain layer: field catalog, filters and the staleness boundary,
query assembly, histogram binning and the browser session
"""

from .catalog import Catalog, Field, FieldKind
from .events import Event, EventKind
from .filter_set import FilterSet
from .filters import CategoricalFilter, Filter, NumericFilter
from .histogram import HistogramEngine
from .query import CatalogRequest, PageWindow, SortKey, build_query
from .sampling import SampleConfig
from .session import BrowserSession
from .sync import AggregationSync, ResultPage

__all__ = [
    "AggregationSync",
    "BrowserSession",
    "Catalog",
    "CatalogRequest",
    "CategoricalFilter",
    "Event",
    "EventKind",
    "Field",
    "FieldKind",
    "Filter",
    "FilterSet",
    "HistogramEngine",
    "NumericFilter",
    "PageWindow",
    "ResultPage",
    "SampleConfig",
    "SortKey",
    "build_query",
]
