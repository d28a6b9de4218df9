from __future__ import annotations

import logging
from pathlib import PurePosixPath

from logging_config import ContextualFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="services.chart_service",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Rendered chart",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_known_context() -> None:
    formatter = ContextualFormatter(fmt="%(levelname)s %(message)s")

    message = formatter.format(_record(source="line.tsv", row_count=3, render_ms=None, other="x"))

    assert message == "INFO Rendered chart | source=line.tsv row_count=3"


def test_formatter_without_context() -> None:
    formatter = ContextualFormatter(fmt="%(message)s", extra_keys=["source"])

    assert formatter.format(_record(row_count=3)) == "Rendered chart"


def test_formatter_renders_context_values_compactly() -> None:
    formatter = ContextualFormatter(fmt="%(message)s", extra_keys=["output", "reason", "render_ms"])

    message = formatter.format(
        _record(output=PurePosixPath("out/chart.svg"), reason="invalid date 'x'", render_ms=1.0 / 3)
    )

    assert message == "Rendered chart | output=out/chart.svg reason=\"invalid date 'x'\" render_ms=0.333333"
