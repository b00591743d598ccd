"""Resample a daily case series into weekly or monthly bucket summaries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Literal, Optional, Sequence, Tuple

import numpy as np

from src.casedata.errors import InvalidParameterError
from src.casedata.records import DailyRecord

from .bucketing import BUCKETINGS, Bucketing, build_bucket_plan, key_function
from .records import BucketSummary

Statistic = Literal["mean", "sum"]
RepresentativeDate = Literal["first", "last", "median"]
STATISTICS: Tuple[Statistic, ...] = ("mean", "sum")
REPRESENTATIVE_DATES: Tuple[RepresentativeDate, ...] = ("first", "last", "median")


@dataclass(frozen=True)
class AggregationConfig:
    """How records are bucketed, reduced and placed on the time axis."""

    bucketing: Bucketing = "week-of-month"
    statistic: Statistic = "mean"
    representative_date: RepresentativeDate = "first"

    def validate(self) -> None:
        if self.bucketing not in BUCKETINGS:
            raise InvalidParameterError(f"bucketing must be one of {', '.join(BUCKETINGS)}, got '{self.bucketing}'")
        if self.statistic not in STATISTICS:
            raise InvalidParameterError(f"statistic must be one of {', '.join(STATISTICS)}, got '{self.statistic}'")
        if self.representative_date not in REPRESENTATIVE_DATES:
            raise InvalidParameterError(
                f"representative_date must be one of {', '.join(REPRESENTATIVE_DATES)}, "
                f"got '{self.representative_date}'"
            )


WEEKLY = AggregationConfig(bucketing="week-of-month", statistic="mean", representative_date="first")
MONTHLY = AggregationConfig(bucketing="month", statistic="sum", representative_date="last")


def sort_by_date(records: Iterable[DailyRecord]) -> List[DailyRecord]:
    """Stable chronological ordering; same-day records keep their input order."""
    return sorted(records, key=lambda record: record.date)


def aggregate(records: Iterable[DailyRecord], config: Optional[AggregationConfig] = None) -> List[BucketSummary]:
    """Group `records` into buckets and summarise each one.

    Records are sorted by date first, so "first"/"last" representative dates and
    the cumulative snapshot are chronological regardless of input order. Output
    is ordered by bucket key, which is also date order.
    """
    cfg = config or WEEKLY
    cfg.validate()

    ordered = sort_by_date(records)
    if not ordered:
        return []

    plan = build_bucket_plan(ordered, key_function(cfg.bucketing))
    reduce = np.mean if cfg.statistic == "mean" else np.sum

    summaries: List[BucketSummary] = []
    for key in plan.keys:
        members = plan.members(key, ordered)
        confirmed = np.asarray([record.new_confirmed for record in members], dtype=float)
        deceased = np.asarray([record.new_deceased for record in members], dtype=float)
        last = members[-1]

        summaries.append(
            BucketSummary(
                key=key,
                bucketing=cfg.bucketing,
                statistic=cfg.statistic,
                representative_date=_representative(members, cfg.representative_date).date,
                start_date=members[0].date,
                end_date=last.date,
                record_count=len(members),
                new_confirmed=float(reduce(confirmed)),
                new_deceased=float(reduce(deceased)),
                cumulative_confirmed=last.cumulative_confirmed,
                cumulative_deceased=last.cumulative_deceased,
            )
        )
    return summaries


def _representative(members: Sequence[DailyRecord], policy: RepresentativeDate) -> DailyRecord:
    if policy == "first":
        return members[0]
    if policy == "last":
        return members[-1]
    # Lower middle so the label is always a date that occurs in the bucket.
    return members[(len(members) - 1) // 2]


def group_by_week(
    records: Iterable[DailyRecord],
    config: Optional[AggregationConfig] = None,
) -> List[BucketSummary]:
    """Weekly means using week-of-month buckets, labelled by each bucket's first day."""
    return aggregate(records, config or WEEKLY)


def group_by_month(
    records: Iterable[DailyRecord],
    config: Optional[AggregationConfig] = None,
) -> List[BucketSummary]:
    """Monthly sums with the end-of-month cumulative snapshot, labelled by each bucket's last day."""
    return aggregate(records, config or MONTHLY)


__all__ = [
    "AggregationConfig",
    "MONTHLY",
    "REPRESENTATIVE_DATES",
    "RepresentativeDate",
    "STATISTICS",
    "Statistic",
    "WEEKLY",
    "aggregate",
    "group_by_month",
    "group_by_week",
    "sort_by_date",
]
