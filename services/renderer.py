"""SVG rendering of a single price series with date and price axes."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from models.records import Point, Series
from services.extent import Extent, compute_extent
from services.path_builder import build_points, format_number, path_data
from services.scales import DEFAULT_TICK_COUNT, LinearScale, Tick, TimeScale

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
TICK_SIZE = 6
TICK_PADDING = 3

STYLESHEET = """
svg { font: 10px sans-serif; }
.axis path, .axis line { fill: none; stroke: #000; shape-rendering: crispEdges; }
.line { fill: none; stroke: %(stroke)s; stroke-width: %(stroke_width)s; }
"""


@dataclass(frozen=True)
class Margins:
    top: int = 20
    right: int = 20
    bottom: int = 30
    left: int = 50


@dataclass(frozen=True)
class ChartConfig:
    """Canvas geometry and presentation for one render pass."""

    width: int = 960
    height: int = 500
    margins: Margins = field(default_factory=Margins)
    y_label: str = "Price ($)"
    tick_count: int = DEFAULT_TICK_COUNT
    stroke: str = "steelblue"
    stroke_width: str = "1.5px"

    def __post_init__(self) -> None:
        if self.inner_width <= 0 or self.inner_height <= 0:
            raise ValueError(
                f"Chart {self.width}x{self.height} leaves no room inside its margins."
            )

    @property
    def inner_width(self) -> int:
        return self.width - self.margins.left - self.margins.right

    @property
    def inner_height(self) -> int:
        return self.height - self.margins.top - self.margins.bottom


@dataclass
class ChartLayout:
    """Everything the SVG writer needs, computed from one series."""

    config: ChartConfig
    x_domain: Extent[datetime]
    y_domain: Extent[float]
    x_scale: TimeScale
    y_scale: LinearScale
    x_ticks: List[Tick]
    y_ticks: List[Tick]
    points: List[Point]

    @property
    def row_count(self) -> int:
        return len(self.points)


def prepare_chart(series: Series, config: ChartConfig) -> ChartLayout:
    x_domain = compute_extent(record.timestamp for record in series)
    y_domain = compute_extent(record.value for record in series)

    x_scale = TimeScale.from_extent(x_domain, 0, config.inner_width)
    # Pixel y grows downward, so the price range is inverted.
    y_scale = LinearScale.from_extent(y_domain, config.inner_height, 0)

    return ChartLayout(
        config=config,
        x_domain=x_domain,
        y_domain=y_domain,
        x_scale=x_scale,
        y_scale=y_scale,
        x_ticks=x_scale.ticks(config.tick_count),
        y_ticks=y_scale.ticks(config.tick_count),
        points=build_points(series, x_scale, y_scale),
    )


def _translate(x: float, y: float) -> str:
    return f"translate({format_number(x)},{format_number(y)})"


def _x_axis(parent: ET.Element, layout: ChartLayout) -> ET.Element:
    axis = ET.SubElement(
        parent,
        "g",
        {"class": "axis axis-x", "transform": _translate(0, layout.config.inner_height)},
    )
    for tick in layout.x_ticks:
        group = ET.SubElement(axis, "g", {"class": "tick", "transform": _translate(tick.position, 0)})
        ET.SubElement(group, "line", {"x2": "0", "y2": str(TICK_SIZE)})
        label = ET.SubElement(
            group,
            "text",
            {"y": str(TICK_SIZE + TICK_PADDING), "dy": ".71em", "style": "text-anchor: middle"},
        )
        label.text = tick.label
    start, end = (format_number(value) for value in layout.x_scale.range)
    ET.SubElement(
        axis, "path", {"class": "domain", "d": f"M{start},{TICK_SIZE}V0H{end}V{TICK_SIZE}"}
    )
    return axis


def _y_axis(parent: ET.Element, layout: ChartLayout) -> ET.Element:
    axis = ET.SubElement(parent, "g", {"class": "axis axis-y"})
    for tick in layout.y_ticks:
        group = ET.SubElement(axis, "g", {"class": "tick", "transform": _translate(0, tick.position)})
        ET.SubElement(group, "line", {"x2": str(-TICK_SIZE), "y2": "0"})
        label = ET.SubElement(
            group,
            "text",
            {"x": str(-(TICK_SIZE + TICK_PADDING)), "dy": ".32em", "style": "text-anchor: end"},
        )
        label.text = tick.label
    start, end = (format_number(value) for value in layout.y_scale.range)
    ET.SubElement(
        axis, "path", {"class": "domain", "d": f"M{-TICK_SIZE},{start}H0V{end}H{-TICK_SIZE}"}
    )
    caption = ET.SubElement(
        axis,
        "text",
        {"transform": "rotate(-90)", "y": "6", "dy": ".71em", "style": "text-anchor: end"},
    )
    caption.text = layout.config.y_label
    return axis


def render_svg(layout: ChartLayout) -> str:
    config = layout.config
    root = ET.Element(
        "svg",
        {
            "xmlns": SVG_NAMESPACE,
            "width": str(config.width),
            "height": str(config.height),
            "viewBox": f"0 0 {config.width} {config.height}",
        },
    )
    style = ET.SubElement(root, "style")
    style.text = STYLESHEET % {"stroke": config.stroke, "stroke_width": config.stroke_width}

    plot = ET.SubElement(
        root, "g", {"transform": _translate(config.margins.left, config.margins.top)}
    )
    _x_axis(plot, layout)
    _y_axis(plot, layout)
    ET.SubElement(plot, "path", {"class": "line", "d": path_data(layout.points)})
    return ET.tostring(root, encoding="unicode")


def render_chart(series: Series, config: ChartConfig | None = None) -> str:
    """Render ``series`` to an SVG document string."""
    return render_svg(prepare_chart(series, config or ChartConfig()))
