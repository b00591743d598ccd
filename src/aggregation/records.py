"""Summary records emitted by the aggregator."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from .bucketing import BucketKey


@dataclass(frozen=True)
class BucketSummary:
    """Aggregate statistics for one temporal bucket.

    `new_confirmed`/`new_deceased` hold the configured statistic (mean or sum).
    The cumulative counters are the values of the chronologically last record
    in the bucket.
    """

    key: BucketKey
    bucketing: str
    statistic: str
    representative_date: date
    start_date: date
    end_date: date
    record_count: int
    new_confirmed: float
    new_deceased: float
    cumulative_confirmed: int
    cumulative_deceased: int

    @property
    def year(self) -> int:
        return self.key[0]

    @property
    def month(self) -> int:
        """Zero-based month of the representative date."""
        return self.representative_date.month - 1

    @property
    def week(self) -> Optional[int]:
        """Week index for weekly buckets, None for months."""
        if self.bucketing == "month":
            return None
        return self.key[-1]


@dataclass(frozen=True)
class MovingAveragePoint:
    """Trailing mean for one day of the series."""

    date: date
    new_confirmed: int
    new_deceased: int
    mean_new_confirmed: float
    mean_new_deceased: float
    window_samples: int


__all__ = ["BucketSummary", "MovingAveragePoint"]
