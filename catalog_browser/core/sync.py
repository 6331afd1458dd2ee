from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .filter_set import FilterSet
from .histogram import HistogramEngine, HistogramPoint
from .query import CatalogRequest

logger = logging.getLogger(__name__)

# elasticsearch max_result_window
DISPLAY_LIMIT = 10000


@dataclass
class ResultPage:
    """
    What the result table and chart need after one request/response cycle.

    - records_total: largest total seen so far for this catalog
    - records_filtered: total capped at the backend's paging window
    - error: raw transport error text, rows are empty when set
    - stale: the response belonged to a superseded request and was not applied
    """

    rows: List[Dict[str, Any]] = field(default_factory=list)
    total: int = 0
    records_total: int = 0
    records_filtered: int = 0
    error: Optional[str] = None
    stale: bool = False
    histogram: Optional[List[HistogramPoint]] = None


def _hits_total(hits: Dict[str, Any]) -> int:
    total = hits.get("total", 0)
    if isinstance(total, dict):
        total = total.get("value", 0)
    try:
        return int(total)
    except (TypeError, ValueError):
        return 0


class AggregationSync:
    """
    Applies catalog responses to the filter set.

    Collaborators:
    - FilterSet: pending filters receive their facet data, then the
      staleness boundary is reset to the full length
    - HistogramEngine: receives the "hist" aggregation when present
    """

    def __init__(self, filter_set: FilterSet, histogram: HistogramEngine, *, count: int = 0, generation: int = 0):
        self.filter_set = filter_set
        self.histogram = histogram
        self.count = count
        self.generation = generation

    def next_generation(self) -> int:
        self.generation += 1
        return self.generation

    def is_stale(self, request: CatalogRequest) -> bool:
        return request.generation < self.generation

    def apply_response(self, request: CatalogRequest, payload: Dict[str, Any]) -> ResultPage:
        if self.is_stale(request):
            logger.info(
                "Dropping response for superseded request",
                extra={"generation": request.generation, "latest": self.generation},
            )
            return ResultPage(stale=True)

        hits = payload.get("hits") or {}
        total = _hits_total(hits)
        self.count = max(self.count, total)
        page = ResultPage(
            rows=list(hits.get("hits") or []),
            total=total,
            records_total=self.count,
            records_filtered=min(total, DISPLAY_LIMIT),
        )

        aggregations = payload.get("aggregations") or {}
        for name in request.pending:
            filt = self.filter_set.get(name)
            if filt is None:
                # removed while the request was in flight
                continue
            agg = aggregations.get(name)
            if agg is None:
                logger.warning("No aggregation returned for %s", name)
                continue
            filt.apply_facet_data(agg)

        self.filter_set.mark_fresh()

        hist = request.histogram
        target = self.histogram.target
        # buckets for a field that is no longer the target are ignored
        fresh_hist = hist is not None and target is not None and target.name == hist.field
        if fresh_hist and aggregations.get("hist") is not None:
            page.histogram = self.histogram.apply_aggregation(aggregations["hist"], hist.bin_width)

        return page

    def apply_error(self, request: CatalogRequest, message: str) -> ResultPage:
        """Leave the filter set untouched so the next draw retries the same facets."""
        logger.warning(
            "Catalog request failed: %s",
            message,
            extra={"generation": request.generation, "pending": list(request.pending)},
        )
        return ResultPage(error=message, records_total=self.count)
