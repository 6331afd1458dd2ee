from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Sequence, Tuple, Union

from .filter_set import FilterSet
from .formatting import Number, format_number
from .sampling import SampleConfig

QueryParams = Dict[str, Union[str, int]]

# parameters that only make sense for an interactive page of results
PAGING_PARAMS = ("offset", "limit", "aggs", "hist")


@dataclass(frozen=True)
class SortKey:
    field: str
    ascending: bool = True

    def encode(self) -> str:
        return self.field if self.ascending else "-" + self.field


@dataclass(frozen=True)
class PageWindow:
    offset: int = 0
    limit: int = 25


@dataclass(frozen=True)
class HistogramRequest:
    field: str
    bin_width: Number

    def encode(self) -> str:
        return f"{self.field}:{format_number(self.bin_width)}"


@dataclass(frozen=True)
class CatalogRequest:
    """
    One assembled request plus what is needed to apply its response:
    the names of the filters whose facets were requested, and the
    generation number used to spot superseded responses.
    """

    params: QueryParams
    pending: Tuple[str, ...] = ()
    generation: int = 0
    histogram: Optional[HistogramRequest] = None
    committed: QueryParams = field(default_factory=dict)


def encode_sort(sort: Iterable[SortKey]) -> str:
    return " ".join(key.encode() for key in sort)


def build_query(
        sort: Sequence[SortKey],
        window: PageWindow,
        visible_fields: Sequence[str],
        filter_set: FilterSet,
        sample: SampleConfig,
        histogram: Optional[HistogramRequest] = None,
) -> QueryParams:
    """
    Assemble the flat request parameter map for the catalog endpoint.

    Only committed filters (position < update_aggs) constrain the result;
    filters awaiting a facet refresh are left out so their aggregation is
    not narrowed by their own predicate.
    """
    query: QueryParams = {"sort": encode_sort(sort)}

    for filt in filter_set.committed():
        value = filt.query_value()
        if value is not None:
            query[filt.name] = value

    sample_value = sample.query_value()
    if sample_value is not None:
        query["sample"] = sample_value

    query["offset"] = window.offset
    query["limit"] = window.limit
    query["fields"] = " ".join(visible_fields)
    query["aggs"] = " ".join(f.name for f in filter_set.pending_facet_refresh())

    if histogram is not None:
        query["hist"] = histogram.encode()

    return query


def committed_query(query: QueryParams) -> QueryParams:
    """The query without its paging/aggregation parameters (download views)."""
    return {k: v for k, v in query.items() if k not in PAGING_PARAMS}
