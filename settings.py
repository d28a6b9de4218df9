from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from services.renderer import ChartConfig

_DATA_SOURCE_ENV = "CHART_DATA_SOURCE"
_WIDTH_ENV = "CHART_WIDTH"
_HEIGHT_ENV = "CHART_HEIGHT"
_Y_LABEL_ENV = "CHART_Y_LABEL"
_LOG_LEVEL_ENV = "LOG_LEVEL"

DEFAULT_DATA_SOURCE = str(Path(__file__).resolve().parent / "data" / "line.tsv")


@dataclass(frozen=True)
class Settings:
    data_source: str
    width: int
    height: int
    y_label: str
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_positive_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        data_source=_read_str_env(_DATA_SOURCE_ENV, DEFAULT_DATA_SOURCE),
        width=_read_positive_int(_WIDTH_ENV, 960),
        height=_read_positive_int(_HEIGHT_ENV, 500),
        y_label=_read_str_env(_Y_LABEL_ENV, "Price ($)"),
        log_level=_read_log_level("INFO"),
    )


def chart_config_from_settings(
    settings: Optional[Settings] = None,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> ChartConfig:
    settings = settings or get_settings()
    return ChartConfig(
        width=width or settings.width,
        height=height or settings.height,
        y_label=settings.y_label,
    )
