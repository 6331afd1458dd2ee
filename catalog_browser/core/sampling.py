from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .formatting import coerce_number, format_number

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SampleConfig:
    """
    Random sampling of the result set.

    - ratio: probability in (0, 1] with which each item is included; 1 disables sampling
    - seed: random seed for a reproducible sample, only meaningful when ratio < 1
    """

    ratio: float = 1.0
    seed: Optional[int] = None

    @property
    def enabled(self) -> bool:
        return self.ratio < 1

    @classmethod
    def from_inputs(cls, ratio: Any, seed: Any = None) -> SampleConfig:
        r = coerce_number(ratio)
        if r is None or not 0 < r <= 1:
            if ratio not in (None, ""):
                logger.debug("Sample ratio %r out of range, sampling disabled", ratio)
            r = 1.0
        if r >= 1:
            return cls()

        s = coerce_number(seed)
        return cls(ratio=r, seed=int(s) if s is not None else None)

    def query_value(self) -> Optional[str]:
        if not self.enabled:
            return None
        value = format_number(self.ratio)
        if self.seed is not None:
            value += "@" + str(self.seed)
        return value

    def to_dict(self) -> Dict[str, Any]:
        return {"ratio": self.ratio, "seed": self.seed}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> SampleConfig:
        data = data or {}
        return cls.from_inputs(data.get("ratio", 1.0), data.get("seed"))
