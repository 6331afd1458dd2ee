from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from .catalog import Catalog
from .events import Event, EventKind
from .exceptions import TransportError
from .filter_set import FilterSet
from .filters import CategoricalFilter, Filter, NumericFilter
from .histogram import HISTOGRAM_BINS, HistogramEngine
from .query import CatalogRequest, PageWindow, QueryParams, SortKey, build_query, committed_query
from .sampling import SampleConfig
from .sync import AggregationSync, ResultPage

logger = logging.getLogger(__name__)

Fetch = Callable[[Catalog, QueryParams], Dict[str, Any]]


class BrowserSession:
    """
    Everything one user's browser tab knows about the catalog being explored:
    active filters and their staleness boundary, histogram, sampling, sort,
    page window and visible columns.

    Design Notes:
    - UI code never mutates the parts directly; it builds an `Event` and
      calls `dispatch`, which returns whether a redraw is needed
    - `build_request` / `apply_response` form one draw cycle; `draw` runs
      both around a fetch callable
    - `to_dict` / `from_dict` let the Dash layer keep the session in a store
    """

    def __init__(self, catalog: Catalog, *, page_size: int = 25, bins: int = HISTOGRAM_BINS):
        self.catalog = catalog
        self.filter_set = FilterSet(catalog)
        self.histogram = HistogramEngine(self.filter_set, bins=bins)
        self.sync = AggregationSync(self.filter_set, self.histogram)
        self.sample = SampleConfig()
        self.sort: List[SortKey] = []
        self.window = PageWindow(offset=0, limit=page_size)
        self.visible_fields: List[str] = catalog.default_visible()

    @classmethod
    def create(cls, catalog: Catalog, *, page_size: int = 25, bins: int = HISTOGRAM_BINS) -> BrowserSession:
        """New session with the catalog's `top` fields pre-activated."""
        session = cls(catalog, page_size=page_size, bins=bins)
        for fld in catalog.top_fields():
            session.filter_set.activate(fld)
        return session

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def dispatch(self, event: Event) -> bool:
        handler = self._handlers.get(event.kind)
        if handler is None:
            raise ValueError(f"Unhandled event kind {event.kind!r}")
        return handler(self, event)

    def _filter_for(self, event: Event) -> Optional[Filter]:
        filt = self.filter_set.get(event.field or "")
        if filt is None:
            logger.debug("Event %s for inactive field %r ignored", event.kind.value, event.field)
        return filt

    def _predicate_changed(self, filt: Filter) -> None:
        self.filter_set.on_predicate_changed(filt)
        # a single pinned value need not be displayed in every row
        self._set_column_visible(filt.name, not filt.pins_single_value)

    def _set_column_visible(self, name: str, visible: bool) -> None:
        names = set(self.visible_fields)
        if visible:
            names.add(name)
        else:
            names.discard(name)
        self.visible_fields = [n for n in self.catalog.field_names() if n in names]

    def _on_activate(self, event: Event) -> bool:
        fld = self.catalog.field(event.field or "")
        if fld is None:
            logger.debug("Unknown field %r cannot be activated", event.field)
            return False
        return self.filter_set.activate(fld) is not None

    def _on_deactivate(self, event: Event) -> bool:
        filt = self._filter_for(event)
        if filt is None or not self.filter_set.deactivate(filt):
            return False
        if self.histogram.target is None:
            self.histogram.clear()
        self._set_column_visible(filt.name, True)
        return True

    def _on_select_term(self, event: Event) -> bool:
        filt = self._filter_for(event)
        if not isinstance(filt, CategoricalFilter) or not filt.loaded:
            return False
        filt.set_selection(event.value)
        self._predicate_changed(filt)
        return True

    def _on_set_bounds(self, event: Event) -> bool:
        filt = self._filter_for(event)
        if not isinstance(filt, NumericFilter):
            return False
        lb, ub = event.value
        if not filt.set_bounds(lb, ub):
            return False
        self._predicate_changed(filt)
        return True

    def _on_reset_bounds(self, event: Event) -> bool:
        filt = self._filter_for(event)
        if not isinstance(filt, NumericFilter) or not filt.reset():
            return False
        self._predicate_changed(filt)
        return True

    def _on_toggle_histogram(self, event: Event) -> bool:
        filt = self._filter_for(event)
        if not isinstance(filt, NumericFilter):
            return False
        # clearing only hides the chart, nothing to fetch
        return self.histogram.toggle(filt) is not None

    def _on_drag_start(self, event: Event) -> bool:
        self.histogram.drag_start(event.value)
        return False

    def _on_drag_end(self, event: Event) -> bool:
        selected = self.histogram.drag_end(event.value)
        if selected is None:
            return False
        self._set_column_visible(self.histogram.target.name, True)
        return True

    def _on_drag_cancel(self, event: Event) -> bool:
        self.histogram.drag_cancel()
        return False

    def _on_toggle_log_axis(self, event: Event) -> bool:
        self.histogram.toggle_log(event.value)
        return False

    def _on_set_sample(self, event: Event) -> bool:
        ratio, seed = event.value
        self.sample = SampleConfig.from_inputs(ratio, seed)
        return True

    def _on_page(self, event: Event) -> bool:
        offset, limit = event.value
        self.window = PageWindow(offset=max(int(offset), 0), limit=max(int(limit), 1))
        return True

    def _on_sort(self, event: Event) -> bool:
        self.sort = [
            SortKey(field=name, ascending=bool(asc))
            for name, asc in event.value or []
            if self.catalog.field(name) is not None
        ]
        return True

    def _on_set_visible_fields(self, event: Event) -> bool:
        wanted = set(event.value or [])
        self.visible_fields = [n for n in self.catalog.field_names() if n in wanted]
        return True

    _handlers: Dict[EventKind, Callable[[BrowserSession, Event], bool]] = {
        EventKind.ACTIVATE: _on_activate,
        EventKind.DEACTIVATE: _on_deactivate,
        EventKind.SELECT_TERM: _on_select_term,
        EventKind.SET_BOUNDS: _on_set_bounds,
        EventKind.RESET_BOUNDS: _on_reset_bounds,
        EventKind.TOGGLE_HISTOGRAM: _on_toggle_histogram,
        EventKind.DRAG_START: _on_drag_start,
        EventKind.DRAG_END: _on_drag_end,
        EventKind.DRAG_CANCEL: _on_drag_cancel,
        EventKind.TOGGLE_LOG_AXIS: _on_toggle_log_axis,
        EventKind.SET_SAMPLE: _on_set_sample,
        EventKind.PAGE: _on_page,
        EventKind.SORT: _on_sort,
        EventKind.SET_VISIBLE_FIELDS: _on_set_visible_fields,
    }

    # ------------------------------------------------------------------
    # Draw cycle
    # ------------------------------------------------------------------
    def build_request(self) -> CatalogRequest:
        hist = self.histogram.request()
        params = build_query(
            sort=self.sort,
            window=self.window,
            visible_fields=self.visible_fields,
            filter_set=self.filter_set,
            sample=self.sample,
            histogram=hist,
        )
        return CatalogRequest(
            params=params,
            pending=tuple(f.name for f in self.filter_set.pending_facet_refresh()),
            generation=self.sync.next_generation(),
            histogram=hist,
            committed=committed_query(params),
        )

    def apply_response(self, request: CatalogRequest, payload: Dict[str, Any]) -> ResultPage:
        return self.sync.apply_response(request, payload)

    def apply_error(self, request: CatalogRequest, message: str) -> ResultPage:
        return self.sync.apply_error(request, message)

    def draw(self, fetch: Fetch) -> Tuple[CatalogRequest, ResultPage]:
        request = self.build_request()
        try:
            payload = fetch(self.catalog, request.params)
        except TransportError as e:
            return request, self.apply_error(request, str(e))
        return request, self.apply_response(request, payload)

    # ------------------------------------------------------------------
    # Store (de)serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "catalog": self.catalog.name,
            "filter_set": self.filter_set.to_dict(),
            "histogram": self.histogram.to_dict(),
            "sample": self.sample.to_dict(),
            "sort": [[k.field, k.ascending] for k in self.sort],
            "window": [self.window.offset, self.window.limit],
            "visible_fields": list(self.visible_fields),
            "count": self.sync.count,
            "generation": self.sync.generation,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], catalog: Catalog, *, bins: int = HISTOGRAM_BINS) -> BrowserSession:
        offset, limit = data.get("window") or (0, 25)
        session = cls(catalog, page_size=int(limit), bins=bins)
        session.window = PageWindow(offset=int(offset), limit=int(limit))

        session.filter_set = FilterSet.from_dict(data.get("filter_set") or {}, catalog)
        session.histogram = HistogramEngine(session.filter_set, bins=bins)
        session.histogram.load_dict(data.get("histogram"))
        session.sync = AggregationSync(
            session.filter_set,
            session.histogram,
            count=int(data.get("count", 0)),
            generation=int(data.get("generation", 0)),
        )

        session.sample = SampleConfig.from_dict(data.get("sample"))
        session._on_sort(Event(EventKind.SORT, value=data.get("sort")))
        if "visible_fields" in data:
            session._on_set_visible_fields(Event(EventKind.SET_VISIBLE_FIELDS, value=data["visible_fields"]))
        return session
