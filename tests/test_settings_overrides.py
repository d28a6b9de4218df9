from __future__ import annotations

from typing import Iterable

from services.chart_service import build_default_chart_service
from settings import DEFAULT_DATA_SOURCE, chart_config_from_settings, get_settings


def _clear_caches(caches: Iterable) -> None:
    for cache in caches:
        cache.cache_clear()


def test_defaults(monkeypatch) -> None:
    for name in ("CHART_DATA_SOURCE", "CHART_WIDTH", "CHART_HEIGHT", "CHART_Y_LABEL", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    try:
        settings = get_settings()
        assert settings.data_source == DEFAULT_DATA_SOURCE
        assert (settings.width, settings.height) == (960, 500)
        assert settings.y_label == "Price ($)"
        assert settings.log_level == "INFO"
    finally:
        get_settings.cache_clear()


def test_environment_overrides_apply(monkeypatch, tmp_path) -> None:
    data_path = tmp_path / "prices.tsv"

    monkeypatch.setenv("CHART_DATA_SOURCE", str(data_path))
    monkeypatch.setenv("CHART_WIDTH", "800")
    monkeypatch.setenv("CHART_HEIGHT", "not-a-number")
    monkeypatch.setenv("CHART_Y_LABEL", "Close (EUR)")
    monkeypatch.setenv("LOG_LEVEL", " debug ")

    caches = (get_settings, build_default_chart_service)
    _clear_caches(caches)

    try:
        settings = get_settings()
        service = build_default_chart_service()

        assert settings.log_level == "DEBUG"
        assert service.default_source == str(data_path)
        assert service.config.width == 800
        assert service.config.height == 500
        assert service.config.y_label == "Close (EUR)"
    finally:
        _clear_caches(caches)


def test_non_positive_sizes_fall_back(monkeypatch) -> None:
    monkeypatch.setenv("CHART_WIDTH", "-5")
    monkeypatch.setenv("CHART_HEIGHT", "0")
    get_settings.cache_clear()
    try:
        config = chart_config_from_settings()
        assert (config.width, config.height) == (960, 500)
    finally:
        get_settings.cache_clear()


def test_explicit_size_overrides_settings() -> None:
    config = chart_config_from_settings(width=640, height=480)

    assert (config.inner_width, config.inner_height) == (570, 430)
