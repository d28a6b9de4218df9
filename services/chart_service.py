"""Load-then-render orchestration for price charts."""

from __future__ import annotations

import logging
import time
from functools import lru_cache
from typing import Optional

import httpx

from models.records import Series
from services.errors import ChartError
from services.loader import Source, load_series
from services.parser import parse_series
from services.renderer import ChartConfig, ChartLayout, prepare_chart, render_svg
from settings import chart_config_from_settings, get_settings

logger = logging.getLogger(__name__)


class ChartService:
    """Turns TSV price data into SVG documents with a fixed configuration."""

    def __init__(self, config: ChartConfig, default_source: Optional[str] = None) -> None:
        self.config = config
        self.default_source = default_source

    async def render_source(
        self,
        source: Optional[Source] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> str:
        """Load ``source`` (or the default data source) and render it."""
        target = self._resolve(source)
        series = await self._load(target, client)
        return self.render_series(series, source=str(target))

    async def summarize_source(
        self,
        source: Optional[Source] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> ChartLayout:
        target = self._resolve(source)
        series = await self._load(target, client)
        return self._layout(series, str(target))

    def render_text(self, text: str, source: str = "<upload>") -> str:
        return self.render_series(self._parse(text, source), source=source)

    def summarize_text(self, text: str, source: str = "<upload>") -> ChartLayout:
        series = self._parse(text, source)
        return self._layout(series, source)

    def render_series(self, series: Series, source: str = "<memory>") -> str:
        start_time = time.perf_counter()
        svg = render_svg(self._layout(series, source))
        render_ms = int((time.perf_counter() - start_time) * 1000)
        logger.info(
            "Rendered chart",
            extra={"source": source, "row_count": len(series), "render_ms": render_ms},
        )
        return svg

    def _resolve(self, source: Optional[Source]) -> Source:
        target = source if source is not None else self.default_source
        if target is None:
            raise ValueError("No data source configured.")
        return target

    async def _load(self, target: Source, client: Optional[httpx.AsyncClient]) -> Series:
        try:
            return await load_series(target, client=client)
        except ChartError as exc:
            logger.error(
                "Loading chart data failed", extra={"source": str(target), "reason": str(exc)}
            )
            raise

    def _parse(self, text: str, source: str) -> Series:
        try:
            return parse_series(text)
        except ChartError as exc:
            logger.error("Parsing chart data failed", extra={"source": source, "reason": str(exc)})
            raise

    def _layout(self, series: Series, source: str) -> ChartLayout:
        try:
            return prepare_chart(series, self.config)
        except ChartError as exc:
            logger.error("Preparing chart failed", extra={"source": source, "reason": str(exc)})
            raise


@lru_cache
def build_default_chart_service() -> ChartService:
    """Factory that wires the chart service from environment settings."""
    settings = get_settings()
    return ChartService(config=chart_config_from_settings(settings), default_source=settings.data_source)
