"""Exception types raised while loading, parsing and aggregating case data."""

from __future__ import annotations

from typing import Optional


class CaseDataError(Exception):
    """Base class for every error raised by the case-data pipeline."""


class MalformedDateError(CaseDataError, ValueError):
    """A date string matched neither `YYYY-MM-DD` nor `MM/DD/YYYY`, or is out of calendar range."""

    def __init__(self, value: object, row_index: Optional[int] = None, reason: str = "") -> None:
        self.value = value
        self.row_index = row_index
        self.reason = reason
        location = f" (row {row_index})" if row_index is not None else ""
        detail = f": {reason}" if reason else ""
        super().__init__(f"Malformed date {value!r}{location}{detail}")


class MalformedValueError(CaseDataError, ValueError):
    """A count column held something other than a non-negative integer (strict mode only)."""

    def __init__(self, column: str, value: object, row_index: Optional[int] = None) -> None:
        self.column = column
        self.value = value
        self.row_index = row_index
        location = f" (row {row_index})" if row_index is not None else ""
        super().__init__(f"Column '{column}' holds malformed count {value!r}{location}")


class InvalidParameterError(CaseDataError, ValueError):
    """An aggregation entry point received an unusable parameter."""


class DataLoadError(CaseDataError, RuntimeError):
    """The input table could not be read or lacks the required columns."""


__all__ = [
    "CaseDataError",
    "DataLoadError",
    "InvalidParameterError",
    "MalformedDateError",
    "MalformedValueError",
]
