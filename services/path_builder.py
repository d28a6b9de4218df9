"""Projection of a series into pixel space and SVG path data."""

from __future__ import annotations

from typing import Iterable, List

from models.records import Point, Series
from services.scales import LinearScale, TimeScale


def build_points(series: Series, x_scale: TimeScale, y_scale: LinearScale) -> List[Point]:
    """Map each record to a pixel coordinate, preserving series order."""
    return [Point(x_scale.map(record.timestamp), y_scale.map(record.value)) for record in series]


def format_number(value: float) -> str:
    text = f"{round(value, 3):.3f}".rstrip("0").rstrip(".")
    return "0" if text in {"-0", ""} else text


def path_data(points: Iterable[Point]) -> str:
    """Straight-line ``d`` attribute connecting ``points`` in order."""
    segments = [f"{format_number(point.x)},{format_number(point.y)}" for point in points]
    if not segments:
        return ""
    return "M" + "L".join(segments)
