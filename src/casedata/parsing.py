"""Turn untyped CSV rows into `DailyRecord`s.

Dates are accepted as `YYYY-MM-DD` or `MM/DD/YYYY`; the separator decides which
layout applies. Any time-of-day suffix is discarded. Count columns are read with
"missing or malformed becomes 0" semantics, and every fallback is tallied in a
`ParseReport` so callers can judge data quality. With `strict=True` the parser
raises instead of skipping rows or zero-filling malformed counts.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional

from .config import COLUMNS, ColumnAliases
from .errors import MalformedDateError, MalformedValueError
from .helpers import MALFORMED, MISSING, ensure_mapping, first_present, to_count
from .records import DailyRecord, ParseReport, ParseResult, SkippedRow

_ISO_DATE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
_US_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")

COUNT_FIELDS = ("new_confirmed", "new_deceased", "cumulative_confirmed", "cumulative_deceased")


def parse_date(value: Any, row_index: Optional[int] = None) -> date:
    """Parse a `YYYY-MM-DD` or `MM/DD/YYYY` string into a `date`."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None:
        raise MalformedDateError(value, row_index, "no date given")

    text = str(value).strip()
    # Drop a trailing time component ("2021-03-01T00:00:00", "03/01/2021 12:00").
    for separator in ("T", " "):
        if separator in text:
            text = text.split(separator, 1)[0]

    if "-" in text:
        match = _ISO_DATE.match(text)
        if match is None:
            raise MalformedDateError(value, row_index, "expected YYYY-MM-DD")
        year, month, day = (int(part) for part in match.groups())
    elif "/" in text:
        match = _US_DATE.match(text)
        if match is None:
            raise MalformedDateError(value, row_index, "expected MM/DD/YYYY")
        month, day, year = (int(part) for part in match.groups())
    else:
        raise MalformedDateError(value, row_index, "unrecognised date layout")

    try:
        return date(year, month, day)
    except ValueError as exc:
        raise MalformedDateError(value, row_index, str(exc)) from exc


def parse_rows(
    raw_rows: Iterable[Mapping[str, Any]],
    *,
    strict: bool = False,
    columns: ColumnAliases = COLUMNS,
) -> ParseResult:
    """Parse every row, preserving input order.

    Rows whose date cannot be read are skipped (and listed in the report) unless
    `strict` is set, in which case the first one raises `MalformedDateError`.
    """
    report = ParseReport()
    records: list[DailyRecord] = []

    for row_index, raw in enumerate(raw_rows):
        row = ensure_mapping(raw)
        report.rows_read += 1

        _, raw_date = first_present(row, columns["date"])
        try:
            parsed_date = parse_date(raw_date, row_index)
        except MalformedDateError as exc:
            if strict:
                raise
            report.skipped.append(SkippedRow(row_index=row_index, value=str(raw_date), reason=exc.reason))
            continue

        counts: dict[str, int] = {}
        for field_name in COUNT_FIELDS:
            header, raw_value = first_present(row, columns[field_name])
            if header is None:
                counts[field_name] = 0
                continue
            count, status = to_count(raw_value)
            if status == MALFORMED:
                if strict:
                    raise MalformedValueError(header, raw_value, row_index)
                report.malformed_values += 1
            elif status == MISSING:
                report.missing_values += 1
            counts[field_name] = count

        records.append(DailyRecord(date=parsed_date, **counts))

    report.records = len(records)
    return ParseResult(records=tuple(records), report=report)


__all__ = ["COUNT_FIELDS", "parse_date", "parse_rows"]
