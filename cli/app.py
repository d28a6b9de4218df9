from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn, Optional

import typer

from cli.config import CLIConfig, load_config
from cli.render import render_summary
from logging_config import configure_logging
from services.chart_service import ChartService
from services.errors import ChartError

logger = logging.getLogger(__name__)


@dataclass
class CLIState:
    config: CLIConfig


app = typer.Typer(
    help="Render closing-price TSV files as SVG line charts.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


def _fail(exc: Exception) -> NoReturn:
    typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


WIDTH_OPTION = typer.Option(
    None,
    "--width",
    min=1,
    help="Canvas width in pixels (defaults to CHART_WIDTH env or 960).",
)
HEIGHT_OPTION = typer.Option(
    None,
    "--height",
    min=1,
    help="Canvas height in pixels (defaults to CHART_HEIGHT env or 500).",
)
SOURCE_ARGUMENT = typer.Argument(
    None, help="TSV file path or http(s) URL (defaults to CHART_DATA_SOURCE)."
)


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to LOG_LEVEL env or INFO).",
    ),
) -> None:
    """Entry point for the CLI."""
    try:
        config = load_config(log_level=log_level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    configure_logging(config.log_level)
    ctx.obj = CLIState(config=config)


def _build_service(state: CLIState, width: Optional[int], height: Optional[int]) -> ChartService:
    try:
        config = load_config(width=width, height=height, log_level=state.config.log_level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    return ChartService(config=config.chart, default_source=config.data_source)


@app.command("render")
def render_command(
    ctx: typer.Context,
    source: Optional[str] = SOURCE_ARGUMENT,
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        dir_okay=False,
        writable=True,
        help="Write the SVG here instead of standard output.",
    ),
    width: Optional[int] = WIDTH_OPTION,
    height: Optional[int] = HEIGHT_OPTION,
) -> None:
    """Render a price series to SVG."""
    service = _build_service(_get_state(ctx), width, height)
    try:
        svg = asyncio.run(service.render_source(source))
    except ChartError as exc:
        _fail(exc)

    if output is None:
        typer.echo(svg)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(svg + "\n", encoding="utf-8")
    logger.info("Chart written", extra={"output": output})
    typer.secho(f"Chart written to {output}", fg=typer.colors.GREEN, err=True)


@app.command("summary")
def summary_command(
    ctx: typer.Context,
    source: Optional[str] = SOURCE_ARGUMENT,
    width: Optional[int] = WIDTH_OPTION,
    height: Optional[int] = HEIGHT_OPTION,
) -> None:
    """Print domains, ticks and row count for a price series."""
    state = _get_state(ctx)
    service = _build_service(state, width, height)
    try:
        layout = asyncio.run(service.summarize_source(source))
    except ChartError as exc:
        _fail(exc)
    render_summary(layout, source or state.config.data_source)
