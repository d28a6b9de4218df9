"""Failures raised while loading, parsing or charting a series."""

from __future__ import annotations

from typing import Optional


class ChartError(Exception):
    """Base class for errors that abort a chart render."""


class LoadError(ChartError):
    """The input resource could not be read or fetched."""

    def __init__(self, message: str, source: Optional[str] = None) -> None:
        super().__init__(message)
        self.source = source


class SourceNotFoundError(LoadError):
    """The local data file does not exist."""


class ParseError(ChartError, ValueError):
    """A row contained a malformed date or number, or a column is missing."""

    def __init__(
        self,
        message: str,
        row_number: Optional[int] = None,
        column: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.row_number = row_number
        self.column = column

    def __str__(self) -> str:
        message = super().__str__()
        if self.row_number is None:
            return message
        return f"row {self.row_number}: {message}"


class EmptyInputError(ChartError, ValueError):
    """No values were available to compute a domain from."""
