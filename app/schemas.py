"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from datetime import datetime
from typing import List, Union

from pydantic import BaseModel, Field

from services.renderer import ChartLayout


class TimeDomain(BaseModel):
    minimum: datetime
    maximum: datetime


class ValueDomain(BaseModel):
    minimum: float
    maximum: float


class TickSummary(BaseModel):
    """A labeled axis tick and its pixel offset inside the plot area."""

    label: str
    position: float
    value: Union[datetime, float]


class PointSummary(BaseModel):
    x: float
    y: float


class ChartSummary(BaseModel):
    """Computed domains, ticks and coordinates for a chart."""

    row_count: int = Field(..., ge=0)
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    x_domain: TimeDomain
    y_domain: ValueDomain
    x_ticks: List[TickSummary] = Field(default_factory=list)
    y_ticks: List[TickSummary] = Field(default_factory=list)
    points: List[PointSummary] = Field(default_factory=list)

    @classmethod
    def from_layout(cls, layout: ChartLayout) -> "ChartSummary":
        return cls(
            row_count=layout.row_count,
            width=layout.config.width,
            height=layout.config.height,
            x_domain=TimeDomain(minimum=layout.x_domain.minimum, maximum=layout.x_domain.maximum),
            y_domain=ValueDomain(minimum=layout.y_domain.minimum, maximum=layout.y_domain.maximum),
            x_ticks=[
                TickSummary(label=tick.label, position=tick.position, value=tick.value)
                for tick in layout.x_ticks
            ],
            y_ticks=[
                TickSummary(label=tick.label, position=tick.position, value=tick.value)
                for tick in layout.y_ticks
            ],
            points=[PointSummary(x=point.x, y=point.y) for point in layout.points],
        )
