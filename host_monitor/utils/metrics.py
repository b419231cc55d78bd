"""
Host statistics snapshot model and parser.
"""
from __future__ import annotations

import math
from dataclasses import astuple, dataclass
from typing import List, Optional, Sequence, Tuple

FIELD_COUNT = 7
DELIMITER = ","


@dataclass(frozen=True)
class MetricVector:
    load_average: float
    mem_total: float
    mem_used: float
    disk_total: float
    disk_used: float
    net_total: float
    net_used: float

    @classmethod
    def from_values(cls, values: Sequence[float]) -> "MetricVector":
        if len(values) != FIELD_COUNT:
            raise ValueError(f"expected {FIELD_COUNT} values, got {len(values)}")
        return cls(*(float(v) for v in values))

    def as_list(self) -> List[float]:
        return list(astuple(self))


def parse_stats(text: str) -> Tuple[Optional[MetricVector], bool]:
    """
    Parse a line like "12,2147483648,1073741824,..." into a MetricVector.
    Any malformed field fails the whole line; no partial vector is returned.
    """
    line = (text or "").strip()
    if not line:
        return None, False
    parts = line.split(DELIMITER)
    if len(parts) != FIELD_COUNT:
        return None, False

    values: List[float] = []
    for p in parts:
        try:
            v = float(p.strip())
        except ValueError:
            return None, False
        # float() accepts "nan" and "inf"
        if not math.isfinite(v):
            return None, False
        values.append(v)
    return MetricVector.from_values(values), True
