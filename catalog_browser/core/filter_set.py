from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional

from .catalog import Catalog, Field
from .filters import Filter, NumericFilter, filter_from_dict, make_filter

logger = logging.getLogger(__name__)


class FilterSet:
    """
    Ordered collection of active filters plus the staleness boundary.

    Design Notes:
    - Insertion order is creation order; filters are never re-sorted.
    - `filter.position` always equals its index in the sequence.
    - `update_aggs` splits the sequence: facet data of filters before it is
      current, filters from it onward must have their facets re-requested.
      It only moves left between requests; `mark_fresh()` is the only way
      to move it right.
    - Holds the histogram target, since removing a filter must clear it.
    """

    def __init__(self, catalog: Catalog):
        self.catalog = catalog
        self._filters: List[Filter] = []
        self.update_aggs: int = 0
        self.histogram_target: Optional[NumericFilter] = None

    def __len__(self) -> int:
        return len(self._filters)

    def __iter__(self) -> Iterator[Filter]:
        return iter(self._filters)

    def __getitem__(self, idx: int) -> Filter:
        return self._filters[idx]

    def get(self, name: str) -> Optional[Filter]:
        return next((f for f in self._filters if f.name == name), None)

    def is_active(self, name: str) -> bool:
        return self.get(name) is not None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def activate(self, fld: Field) -> Optional[Filter]:
        """
        Append a filter for fld. Returns None if the field is unknown to the
        catalog or already has a filter.
        """
        if self.catalog.field(fld.name) is not fld or self.is_active(fld.name):
            return None
        filt = make_filter(fld, position=len(self._filters))
        self._filters.append(filt)
        logger.debug("Activated filter %s at position %d", fld.name, filt.position)
        return filt

    def deactivate(self, filt: Filter) -> bool:
        i = filt.position
        if not (0 <= i < len(self._filters)) or self._filters[i] is not filt:
            return False

        del self._filters[i]
        for j in range(i, len(self._filters)):
            self._filters[j].position = j

        # later filters' facets were computed under the removed predicate
        self.update_aggs = min(self.update_aggs, i)

        if self.histogram_target is filt:
            self.histogram_target = None
        filt.on_removed()
        logger.debug("Deactivated filter %s from position %d", filt.name, i)
        return True

    def on_predicate_changed(self, filt: Filter) -> None:
        # the changed filter's own facet excludes its predicate and stays valid
        self.update_aggs = min(self.update_aggs, filt.position + 1)

    def pending_facet_refresh(self) -> List[Filter]:
        return self._filters[self.update_aggs:]

    def committed(self) -> List[Filter]:
        return self._filters[:self.update_aggs]

    def mark_fresh(self) -> None:
        self.update_aggs = len(self._filters)

    def toggle_histogram(self, filt: NumericFilter) -> Optional[NumericFilter]:
        """Designate filt as the histogram target, or clear it if it already is."""
        if not isinstance(filt, NumericFilter):
            return self.histogram_target
        if self.histogram_target is filt:
            self.histogram_target = None
        else:
            self.histogram_target = filt
        return self.histogram_target

    # ------------------------------------------------------------------
    # Store (de)serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "filters": [f.to_dict() for f in self._filters],
            "update_aggs": self.update_aggs,
            "histogram": self.histogram_target.name if self.histogram_target else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], catalog: Catalog) -> FilterSet:
        fs = cls(catalog)
        dropped = None
        for raw in data.get("filters", []):
            filt = filter_from_dict(raw, catalog, position=len(fs._filters))
            if filt is None or fs.is_active(filt.name):
                if dropped is None:
                    dropped = len(fs._filters)
                continue
            fs._filters.append(filt)

        update_aggs = int(data.get("update_aggs", 0))
        if dropped is not None:
            update_aggs = min(update_aggs, dropped)
        fs.update_aggs = max(0, min(update_aggs, len(fs._filters)))

        target = fs.get(data.get("histogram") or "")
        fs.histogram_target = target if isinstance(target, NumericFilter) else None
        return fs
