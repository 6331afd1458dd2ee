from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Union

from .catalog import Catalog, Field
from .formatting import Number, coerce_number, format_number

logger = logging.getLogger(__name__)


class FilterKind(str, Enum):
    CATEGORICAL = "categorical"
    NUMERIC = "numeric"


@dataclass(frozen=True)
class FacetOption:
    """One selectable term of a categorical facet."""
    value: str
    label: str
    count: int


def _buckets(aggregation: Any) -> Optional[List[Dict[str, Any]]]:
    if isinstance(aggregation, dict):
        aggregation = aggregation.get("buckets")
    if not isinstance(aggregation, list):
        return None
    if not all(isinstance(b, dict) and "key" in b for b in aggregation):
        return None
    return aggregation


@dataclass
class CategoricalFilter:
    """
    Equality predicate over a categorical or enum field.

    The selectable terms come from the last facet aggregation; until one
    arrives the filter is not loaded and its control stays disabled.
    """

    field: Field
    position: int = 0
    selection: Optional[str] = None
    options: List[FacetOption] = field(default_factory=list)
    loaded: bool = False

    kind: ClassVar[FilterKind] = FilterKind.CATEGORICAL

    @property
    def name(self) -> str:
        return self.field.name

    @property
    def pins_single_value(self) -> bool:
        return self.selection is not None

    def set_selection(self, term: Optional[str]) -> None:
        self.selection = str(term) if term not in (None, "") else None

    def apply_facet_data(self, aggregation: Any) -> bool:
        buckets = _buckets(aggregation)
        if buckets is None:
            logger.warning("Malformed term aggregation for %s", self.name)
            return False

        self.options = [
            FacetOption(
                value=str(b["key"]),
                label=f"{self.field.enum_label(b['key'])} ({b.get('doc_count', 0)})",
                count=int(b.get("doc_count", 0)),
            )
            for b in buckets
        ]
        self.selection = None
        self.loaded = True
        return True

    def query_value(self) -> Optional[str]:
        return self.selection

    def python_literal(self) -> Optional[str]:
        if self.selection is None:
            return None
        return json.dumps(self.selection)

    def on_removed(self) -> None:
        self.position = -1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "field": self.name,
            "selection": self.selection,
            "options": [[o.value, o.label, o.count] for o in self.options],
            "loaded": self.loaded,
        }


@dataclass
class NumericFilter:
    """
    Range predicate over an integer or float field.

    Bounds are seeded from the facet's min/max; lb == ub is an exact match.
    """

    field: Field
    position: int = 0
    lb: Optional[Number] = None
    ub: Optional[Number] = None
    default_lb: Optional[Number] = None
    default_ub: Optional[Number] = None
    avg: Optional[Number] = None
    loaded: bool = False

    kind: ClassVar[FilterKind] = FilterKind.NUMERIC

    @property
    def name(self) -> str:
        return self.field.name

    @property
    def pins_single_value(self) -> bool:
        return self.lb is not None and self.lb == self.ub

    @property
    def span(self) -> Optional[Number]:
        if self.lb is None or self.ub is None:
            return None
        return self.ub - self.lb

    @property
    def step(self) -> Union[int, str]:
        return 1 if self.field.is_integer else "any"

    def apply_facet_data(self, aggregation: Any) -> bool:
        if not isinstance(aggregation, dict):
            logger.warning("Malformed stats aggregation for %s", self.name)
            return False
        lo = coerce_number(aggregation.get("min"))
        hi = coerce_number(aggregation.get("max"))
        if lo is None or hi is None:
            # empty result sets come back with null min/max
            logger.warning("Stats aggregation for %s has no min/max", self.name)
            return False

        self.default_lb = self.lb = _as_field_number(self.field, lo)
        self.default_ub = self.ub = _as_field_number(self.field, hi)
        self.avg = coerce_number(aggregation.get("avg"))
        self.loaded = True
        return True

    def set_bounds(self, lb: Any, ub: Any) -> bool:
        """
        Apply a user edit. Non-finite bounds fall back to the facet defaults.
        Returns False while the facet has not loaded (controls disabled).
        """
        if not self.loaded:
            logger.debug("Ignoring bound edit on unloaded filter %s", self.name)
            return False
        lo = coerce_number(lb)
        hi = coerce_number(ub)
        self.lb = _as_field_number(self.field, lo) if lo is not None else self.default_lb
        self.ub = _as_field_number(self.field, hi) if hi is not None else self.default_ub
        return True

    def set_range(self, lb: Number, ub: Number) -> bool:
        return self.set_bounds(lb, ub)

    def reset(self) -> bool:
        if not self.loaded:
            return False
        self.lb = self.default_lb
        self.ub = self.default_ub
        return True

    def query_value(self) -> Optional[str]:
        if self.lb is None or self.ub is None:
            return None
        if self.lb == self.ub:
            return format_number(self.lb)
        return f"{format_number(self.lb)},{format_number(self.ub)}"

    def python_literal(self) -> Optional[str]:
        if self.lb is None or self.ub is None:
            return None
        if self.lb == self.ub:
            return format_number(self.lb)
        return f"({format_number(self.lb)}, {format_number(self.ub)})"

    def on_removed(self) -> None:
        self.position = -1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "field": self.name,
            "lb": self.lb,
            "ub": self.ub,
            "default_lb": self.default_lb,
            "default_ub": self.default_ub,
            "avg": self.avg,
            "loaded": self.loaded,
        }


Filter = Union[CategoricalFilter, NumericFilter]


def _as_field_number(fld: Field, value: float) -> Number:
    if fld.is_integer and float(value).is_integer():
        return int(value)
    return value


def make_filter(fld: Field, position: int) -> Filter:
    """Construct the filter variant matching the field's value domain."""
    if fld.is_numeric:
        return NumericFilter(field=fld, position=position)
    return CategoricalFilter(field=fld, position=position)


def filter_from_dict(data: Dict[str, Any], catalog: Catalog, position: int) -> Optional[Filter]:
    fld = catalog.field(data.get("field", ""))
    if fld is None:
        logger.warning("Dropping stored filter for unknown field %r", data.get("field"))
        return None

    if data.get("kind") == FilterKind.NUMERIC.value and fld.is_numeric:
        return NumericFilter(
            field=fld,
            position=position,
            lb=data.get("lb"),
            ub=data.get("ub"),
            default_lb=data.get("default_lb"),
            default_ub=data.get("default_ub"),
            avg=data.get("avg"),
            loaded=bool(data.get("loaded", False)),
        )
    if data.get("kind") == FilterKind.CATEGORICAL.value and not fld.is_numeric:
        return CategoricalFilter(
            field=fld,
            position=position,
            selection=data.get("selection"),
            options=[FacetOption(str(v), str(label), int(n)) for v, label, n in data.get("options", [])],
            loaded=bool(data.get("loaded", False)),
        )

    logger.warning("Stored filter kind %r does not match field %s", data.get("kind"), fld.name)
    return None
