from __future__ import annotations

from typing import Any, Iterable

import typer

from services.parser import format_date
from services.renderer import ChartLayout


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_summary(layout: ChartLayout, source: str) -> None:
    config = layout.config
    echo_heading("Chart")
    echo_key_values(
        [
            ("source", source),
            ("size", f"{config.width}x{config.height}"),
            ("plot_area", f"{config.inner_width}x{config.inner_height}"),
            ("row_count", layout.row_count),
        ]
    )

    typer.echo()
    echo_heading("Domains")
    echo_key_values(
        [
            ("x_domain", f"{format_date(layout.x_domain.minimum)} .. {format_date(layout.x_domain.maximum)}"),
            ("y_domain", f"{layout.y_domain.minimum} .. {layout.y_domain.maximum}"),
        ]
    )

    typer.echo()
    echo_heading("Ticks")
    typer.echo("x: " + ", ".join(tick.label for tick in layout.x_ticks))
    typer.echo("y: " + ", ".join(tick.label for tick in layout.y_ticks))
