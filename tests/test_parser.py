"""Unit tests for row and file parsing."""

from __future__ import annotations

from datetime import datetime

import pytest

from models.records import PriceRecord
from services.errors import ParseError
from services.parser import format_date, parse_date, parse_record, parse_series, parse_value


def test_parse_date_fixed_format() -> None:
    assert parse_date("01-Jan-15") == datetime(2015, 1, 1)
    assert parse_date(" 30-Apr-12 ") == datetime(2012, 4, 30)


def test_parse_date_accepts_single_digit_day() -> None:
    assert parse_date("1-May-12") == datetime(2012, 5, 1)


def test_parse_date_two_digit_year_pivot() -> None:
    assert parse_date("01-Jan-68").year == 2068
    assert parse_date("01-Jan-69").year == 1969


@pytest.mark.parametrize("raw", ["2015-01-01", "01/Jan/15", "32-Jan-15", "01-Foo-15", ""])
def test_parse_date_rejects_other_formats(raw: str) -> None:
    with pytest.raises(ParseError) as excinfo:
        parse_date(raw)
    assert excinfo.value.column == "date"


@pytest.mark.parametrize(
    "value",
    [datetime(2015, 1, 1), datetime(2012, 2, 29), datetime(1999, 12, 31), datetime(2007, 4, 9)],
)
def test_format_then_parse_yields_same_calendar_date(value: datetime) -> None:
    assert parse_date(format_date(value)) == value


def test_parse_value_decimal() -> None:
    assert parse_value("582.13") == 582.13
    assert parse_value(" 90 ") == 90.0


@pytest.mark.parametrize("raw", ["", "abc", "12,5", "nan", "inf", "-Infinity"])
def test_parse_value_rejects_non_finite_or_malformed(raw: str) -> None:
    with pytest.raises(ParseError) as excinfo:
        parse_value(raw)
    assert excinfo.value.column == "close"


def test_parse_record_builds_typed_record() -> None:
    record = parse_record({"date": "02-Jan-15", "close": "110.0"})

    assert record == PriceRecord(timestamp=datetime(2015, 1, 2), value=110.0)


def test_parse_record_attaches_row_number() -> None:
    with pytest.raises(ParseError) as excinfo:
        parse_record({"date": "02-Jan-15", "close": "n/a"}, row_number=7)

    assert excinfo.value.row_number == 7
    assert str(excinfo.value).startswith("row 7:")


def test_parse_series_preserves_file_order(sample_tsv: str) -> None:
    series = parse_series(sample_tsv)

    assert [record.value for record in series] == [100.0, 110.0, 90.0]
    assert [record.timestamp.day for record in series] == [1, 2, 3]


def test_parse_series_header_is_case_insensitive_and_ignores_extra_columns() -> None:
    text = "Open\t Date \tCLOSE\n1\t01-Jan-15\t5\n\n2\t02-Jan-15\t6\n"

    series = parse_series(text)

    assert [record.value for record in series] == [5.0, 6.0]


def test_parse_series_missing_column() -> None:
    with pytest.raises(ParseError) as excinfo:
        parse_series("date\tprice\n01-Jan-15\t1\n")
    assert "missing required columns: close" in str(excinfo.value)


def test_parse_series_comma_separated_input_is_rejected() -> None:
    with pytest.raises(ParseError):
        parse_series("date,close\n01-Jan-15,1\n")


def test_parse_series_missing_header() -> None:
    with pytest.raises(ParseError):
        parse_series("")


def test_parse_series_header_only_is_empty() -> None:
    assert parse_series("date\tclose\n") == []


def test_parse_series_first_bad_row_is_fatal() -> None:
    text = "date\tclose\n01-Jan-15\t1\nbogus\t2\n03-Jan-15\t3\n"

    with pytest.raises(ParseError) as excinfo:
        parse_series(text)

    assert excinfo.value.row_number == 3
    assert excinfo.value.column == "date"


def test_parse_series_reports_physical_line_after_blank_lines() -> None:
    text = "date\tclose\n01-Jan-15\t1\n\nbogus\t2\n"

    with pytest.raises(ParseError) as excinfo:
        parse_series(text)

    assert excinfo.value.row_number == 4
