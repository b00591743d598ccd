"""Static configuration for case-data loading and chart output paths."""

from __future__ import annotations

from pathlib import Path
from typing import Tuple, TypedDict


class ColumnAliases(TypedDict):
    date: Tuple[str, ...]
    new_confirmed: Tuple[str, ...]
    new_deceased: Tuple[str, ...]
    cumulative_confirmed: Tuple[str, ...]
    cumulative_deceased: Tuple[str, ...]


# Default directories used by the Typer CLI; callers may override these.
DEFAULT_RAW_ROOT = Path("data/raw")
DEFAULT_PLOTS_ROOT = Path("data/plots")
DEFAULT_DATA_FILE = "COVID_US_cases.csv"

# ---------------------------------------------------------------------------
# CSV layout. The first header present in a row wins.

COLUMNS: ColumnAliases = {
    "date": ("date",),
    "new_confirmed": ("new_confirmed", "cases"),
    "new_deceased": ("new_deceased", "deaths"),
    "cumulative_confirmed": ("cumulative_confirmed",),
    "cumulative_deceased": ("cumulative_deceased",),
}

# Years covered by the published charts.
DEFAULT_YEAR_RANGE: Tuple[int, int] = (2020, 2022)

DEFAULT_MOVING_AVERAGE_WINDOW = 7


__all__ = [
    "COLUMNS",
    "ColumnAliases",
    "DEFAULT_DATA_FILE",
    "DEFAULT_MOVING_AVERAGE_WINDOW",
    "DEFAULT_PLOTS_ROOT",
    "DEFAULT_RAW_ROOT",
    "DEFAULT_YEAR_RANGE",
]
