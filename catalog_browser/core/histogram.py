from __future__ import annotations

import bisect
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .filter_set import FilterSet
from .filters import NumericFilter
from .formatting import Number
from .query import HistogramRequest

logger = logging.getLogger(__name__)

HISTOGRAM_BINS = 100
AXES = ("x", "y")


@dataclass(frozen=True)
class HistogramPoint:
    x: Number
    y: int


def bin_width_for(filt: NumericFilter, bins: int = HISTOGRAM_BINS) -> Optional[Number]:
    """
    Width of one bucket over the filter's current bounds, or None when the
    span is unknown or not positive. Integer fields round up to whole bins.
    """
    span = filt.span
    if span is None or span <= 0:
        return None
    width = span / bins
    if filt.field.is_integer:
        return int(math.ceil(width))
    return width


class HistogramEngine:
    """
    Binning, bucket-to-point conversion and drag-to-range selection for the
    filter set's histogram target.

    The engine keeps the bin width of the last request so that the trailing
    point and drag selections line up with the buckets the server returned.
    """

    def __init__(self, filter_set: FilterSet, bins: int = HISTOGRAM_BINS):
        self.filter_set = filter_set
        self.bins = bins
        self.bin_width: Optional[Number] = None
        self.points: List[HistogramPoint] = []
        self.drag_origin: Optional[Number] = None
        self.log_axes: Dict[str, bool] = {axis: False for axis in AXES}

    @property
    def target(self) -> Optional[NumericFilter]:
        return self.filter_set.histogram_target

    @property
    def axis_label(self) -> str:
        return self.target.field.label if self.target else ""

    def toggle(self, filt: NumericFilter) -> Optional[NumericFilter]:
        previous = self.target
        target = self.filter_set.toggle_histogram(filt)
        if target is not previous:
            # buckets and width belong to the previous field
            self.clear()
        return target

    def clear(self) -> None:
        self.bin_width = None
        self.points = []
        self.drag_origin = None

    def request(self) -> Optional[HistogramRequest]:
        """
        Histogram parameters for the next request. The engine's own bin
        width only changes when the matching buckets arrive.
        """
        target = self.target
        width = bin_width_for(target, self.bins) if target is not None else None
        if width is None:
            self.clear()
            return None
        return HistogramRequest(field=target.name, bin_width=width)

    # ------------------------------------------------------------------
    # Buckets
    # ------------------------------------------------------------------
    def apply_aggregation(self, aggregation: Any, bin_width: Number) -> List[HistogramPoint]:
        """
        Turn {key, doc_count} buckets computed at bin_width into chart points,
        closing the last bucket with a zero-height point one bin width further on.
        """
        buckets = aggregation.get("buckets") if isinstance(aggregation, dict) else aggregation
        self.drag_origin = None
        if not isinstance(buckets, list):
            logger.warning("Malformed histogram aggregation: %r", type(aggregation).__name__)
            self.clear()
            return self.points

        self.bin_width = bin_width

        points = [
            HistogramPoint(x=b["key"], y=int(b.get("doc_count", 0)))
            for b in buckets
            if isinstance(b, dict) and "key" in b
        ]
        if points and self.bin_width is not None:
            points.append(HistogramPoint(x=points[-1].x + self.bin_width, y=0))
        self.points = points
        return points

    def key_at(self, x: Number) -> Optional[Number]:
        """Bucket key under pointer position x (largest key <= x)."""
        keys = [p.x for p in self.points[:-1]] if len(self.points) > 1 else [p.x for p in self.points]
        if not keys:
            return None
        idx = bisect.bisect_right(keys, x) - 1
        return keys[max(idx, 0)]

    # ------------------------------------------------------------------
    # Drag gesture
    # ------------------------------------------------------------------
    def drag_start(self, x: Number) -> None:
        self.drag_origin = x

    def drag_cancel(self) -> None:
        self.drag_origin = None

    def drag_end(self, x: Number) -> Optional[Tuple[Number, Number]]:
        """
        Finish a drag and apply the covered buckets as the target's range.

        A release on the starting bucket is ignored. The right edge is
        widened by one bin so the bucket under the release point is kept.
        """
        start, self.drag_origin = self.drag_origin, None
        target = self.target
        if start is None or target is None or self.bin_width is None:
            return None
        if start == x:
            return None

        left, right = min(start, x), max(start, x)
        right += self.bin_width
        if not target.set_range(left, right):
            return None
        self.filter_set.on_predicate_changed(target)
        logger.debug("Histogram drag on %s selected [%s, %s]", target.name, left, right)
        return left, right

    def toggle_log(self, axis: str) -> bool:
        if axis not in AXES:
            raise ValueError(f"Unknown histogram axis {axis!r}")
        self.log_axes[axis] = not self.log_axes[axis]
        return self.log_axes[axis]

    # ------------------------------------------------------------------
    # Store (de)serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "bin_width": self.bin_width,
            "points": [[p.x, p.y] for p in self.points],
            "drag_origin": self.drag_origin,
            "log_axes": dict(self.log_axes),
        }

    def load_dict(self, data: Optional[Dict[str, Any]]) -> None:
        data = data or {}
        if self.target is None:
            self.clear()
        else:
            self.bin_width = data.get("bin_width")
            self.points = [HistogramPoint(x=x, y=y) for x, y in data.get("points", [])]
            self.drag_origin = data.get("drag_origin")
        for axis, flag in (data.get("log_axes") or {}).items():
            if axis in AXES:
                self.log_axes[axis] = bool(flag)
