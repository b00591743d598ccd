"""Row-level records produced by the parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Tuple


@dataclass(frozen=True)
class DailyRecord:
    """One parsed row of the daily case table."""

    date: date
    new_confirmed: int = 0
    new_deceased: int = 0
    cumulative_confirmed: int = 0
    cumulative_deceased: int = 0


@dataclass(frozen=True)
class SkippedRow:
    """A row dropped by the lenient parser."""

    row_index: int
    value: str
    reason: str


@dataclass
class ParseReport:
    """Data-quality counters collected while parsing."""

    rows_read: int = 0
    records: int = 0
    skipped: List[SkippedRow] = field(default_factory=list)
    missing_values: int = 0
    malformed_values: int = 0

    @property
    def zero_filled(self) -> int:
        """Number of count fields that fell back to zero."""
        return self.missing_values + self.malformed_values

    @property
    def clean(self) -> bool:
        return not self.skipped and self.malformed_values == 0


@dataclass(frozen=True)
class ParseResult:
    records: Tuple[DailyRecord, ...]
    report: ParseReport


__all__ = ["DailyRecord", "ParseReport", "ParseResult", "SkippedRow"]
