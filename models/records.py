"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, NamedTuple


@dataclass(frozen=True, slots=True)
class PriceRecord:
    """A single closing price parsed from the TSV input."""

    timestamp: datetime
    value: float


Series = List[PriceRecord]


class Point(NamedTuple):
    """Pixel-space coordinate inside the plot area."""

    x: float
    y: float
