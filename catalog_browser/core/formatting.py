from __future__ import annotations

import math
from typing import Union

Number = Union[int, float]


def format_number(value: Number) -> str:
    """
    Render a number the way the browser puts it on the wire: integral values
    without a trailing ".0", everything else with the shortest repr.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    value = float(value)
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)


def coerce_number(value) -> float | None:
    """Parse a user-supplied bound; anything non-finite becomes None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number
