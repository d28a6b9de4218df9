"""Conversion of raw TSV rows into typed price records."""

from __future__ import annotations

import csv
import io
import logging
import math
from datetime import datetime
from typing import Mapping, Optional

from models.records import PriceRecord, Series
from services.errors import ParseError

logger = logging.getLogger(__name__)

DATE_FORMAT = "%d-%b-%y"
DATE_COLUMN = "date"
VALUE_COLUMN = "close"
DELIMITER = "\t"


def parse_date(raw: str) -> datetime:
    """Parse ``DD-Mon-YY`` strings such as ``01-Jan-15``."""
    candidate = (raw or "").strip()
    if not candidate:
        raise ParseError("missing date", column=DATE_COLUMN)
    try:
        return datetime.strptime(candidate, DATE_FORMAT)
    except ValueError as exc:
        raise ParseError(f"invalid date {candidate!r}", column=DATE_COLUMN) from exc


def format_date(value: datetime) -> str:
    return value.strftime(DATE_FORMAT)


def parse_value(raw: str) -> float:
    candidate = (raw or "").strip()
    if not candidate:
        raise ParseError("missing close value", column=VALUE_COLUMN)
    try:
        value = float(candidate)
    except ValueError as exc:
        raise ParseError(
            f"invalid numeric value {candidate!r}", column=VALUE_COLUMN
        ) from exc
    if not math.isfinite(value):
        raise ParseError(f"non-finite value {candidate!r}", column=VALUE_COLUMN)
    return value


def parse_record(row: Mapping[str, Optional[str]], row_number: Optional[int] = None) -> PriceRecord:
    """Build a record from a row keyed by the ``date`` and ``close`` columns."""
    try:
        timestamp = parse_date(row.get(DATE_COLUMN) or "")
        value = parse_value(row.get(VALUE_COLUMN) or "")
    except ParseError as exc:
        exc.row_number = row_number
        raise
    return PriceRecord(timestamp=timestamp, value=value)


def parse_series(text: str) -> Series:
    """Parse tab-separated text with a header row into a series.

    Rows keep their file order. The first malformed row aborts the parse.
    """
    reader = csv.DictReader(io.StringIO(text), delimiter=DELIMITER)
    if not reader.fieldnames:
        raise ParseError("TSV input is missing a header row.")

    normalized = {name.lower().strip(): name for name in reader.fieldnames if name}
    required = {DATE_COLUMN, VALUE_COLUMN}
    missing = sorted(required - normalized.keys())
    if missing:
        raise ParseError(f"TSV missing required columns: {', '.join(missing)}")

    date_col = normalized[DATE_COLUMN]
    value_col = normalized[VALUE_COLUMN]

    series: Series = []
    for row in reader:
        row_number = reader.line_num
        try:
            record = parse_record(
                {DATE_COLUMN: row.get(date_col), VALUE_COLUMN: row.get(value_col)},
                row_number=row_number,
            )
        except ParseError as exc:
            logger.warning(
                "Rejecting malformed row",
                extra={"row_number": row_number, "column": exc.column, "reason": str(exc)},
            )
            raise
        series.append(record)

    logger.debug("Parsed series", extra={"row_count": len(series)})
    return series
