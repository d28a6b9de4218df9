from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from services.renderer import ChartConfig
from settings import chart_config_from_settings, get_settings


@dataclass(frozen=True)
class CLIConfig:
    chart: ChartConfig
    data_source: str
    log_level: str


def load_config(
    width: Optional[int] = None,
    height: Optional[int] = None,
    log_level: Optional[str] = None,
) -> CLIConfig:
    settings = get_settings()
    return CLIConfig(
        chart=chart_config_from_settings(settings, width=width, height=height),
        data_source=settings.data_source,
        log_level=(log_level or settings.log_level).upper(),
    )
