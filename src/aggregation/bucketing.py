from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, List, Literal, Sequence, Tuple

from src.casedata.errors import InvalidParameterError
from src.casedata.records import DailyRecord

BucketKey = Tuple[int, ...]
Bucketing = Literal["week-of-month", "week-of-year", "month"]
BUCKETINGS: Tuple[Bucketing, ...] = ("week-of-month", "week-of-year", "month")


def week_of_month_key(day: date) -> BucketKey:
    """`(year, month0, week)`; weeks restart on the 1st, so weeks 4 and 5 may be short."""
    return (day.year, day.month - 1, (day.day - 1) // 7)


def week_of_year_key(day: date) -> BucketKey:
    """`(year, week)` counting 7-day blocks from January 1st."""
    return (day.year, (day.timetuple().tm_yday - 1) // 7)


def month_key(day: date) -> BucketKey:
    """`(year, month0)` with January as 0."""
    return (day.year, day.month - 1)


KEY_FUNCTIONS: Dict[str, Callable[[date], BucketKey]] = {
    "week-of-month": week_of_month_key,
    "week-of-year": week_of_year_key,
    "month": month_key,
}


def key_function(bucketing: str) -> Callable[[date], BucketKey]:
    try:
        return KEY_FUNCTIONS[bucketing]
    except KeyError:
        choices = ", ".join(BUCKETINGS)
        raise InvalidParameterError(f"Unknown bucketing '{bucketing}'; expected one of {choices}") from None


@dataclass(frozen=True)
class BucketPlan:
    """Chronological bucket keys and the record positions that fall into each."""

    keys: List[BucketKey]
    indices: Dict[BucketKey, List[int]]

    def members(self, key: BucketKey, records: Sequence[DailyRecord]) -> List[DailyRecord]:
        return [records[idx] for idx in self.indices[key]]


def build_bucket_plan(
    records: Sequence[DailyRecord],
    key_fn: Callable[[date], BucketKey],
) -> BucketPlan:
    """Group records by `key_fn(record.date)`, keeping each bucket's members in input order."""
    buckets: Dict[BucketKey, List[int]] = defaultdict(list)
    for idx, record in enumerate(records):
        buckets[key_fn(record.date)].append(idx)
    return BucketPlan(keys=sorted(buckets), indices=dict(buckets))


__all__ = [
    "BUCKETINGS",
    "BucketKey",
    "BucketPlan",
    "Bucketing",
    "build_bucket_plan",
    "key_function",
    "month_key",
    "week_of_month_key",
    "week_of_year_key",
]
