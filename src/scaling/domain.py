"""Scale-domain parameters and legend breakpoints derived from aggregated series."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence, Tuple

import numpy as np

from src.aggregation.records import BucketSummary
from src.casedata.records import DailyRecord

QUANTILE_LABELS: Tuple[str, ...] = ("Lowest Wave", "Low Wave", "Medium Wave", "High Wave", "Highest Wave")


@dataclass(frozen=True)
class LegendConfig:
    """Legend breakpoints: fixed `breakpoints`, or `quantiles` of the weekly means when none are given."""

    breakpoints: Tuple[float, ...] = ()
    quantiles: Tuple[float, ...] = (0.1, 0.25, 0.5, 0.75, 0.9)
    labels: Tuple[str, ...] = ()

    def validate(self) -> None:
        if any(not np.isfinite(value) or value < 0 for value in self.breakpoints):
            raise ValueError("Legend breakpoints must be finite and non-negative.")
        if any(not 0.0 <= q <= 1.0 for q in self.quantiles):
            raise ValueError("Legend quantiles must fall within [0, 1].")
        expected = len(self.breakpoints) if self.breakpoints else len(self.quantiles)
        if self.labels and len(self.labels) != expected:
            raise ValueError(f"Expected {expected} legend labels, received {len(self.labels)}.")


@dataclass(frozen=True)
class LegendEntry:
    label: str
    value: float


def legend_entries(values: Sequence[float], config: Optional[LegendConfig] = None) -> List[LegendEntry]:
    """Resolve the legend into concrete (label, value) pairs."""
    cfg = config or LegendConfig()
    cfg.validate()

    if cfg.breakpoints:
        resolved = [float(value) for value in cfg.breakpoints]
    else:
        arr = np.asarray(values, dtype=float)
        if arr.size == 0:
            return []
        if np.any(~np.isfinite(arr)):
            raise ValueError("Legend quantiles cannot be computed with NaN/inf values.")
        # numpy's default linear interpolation matches d3.quantile.
        resolved = [float(value) for value in np.quantile(arr, cfg.quantiles)]

    if cfg.labels:
        labels = list(cfg.labels)
    elif not cfg.breakpoints and len(cfg.quantiles) == len(QUANTILE_LABELS):
        labels = list(QUANTILE_LABELS)
    else:
        labels = [f"{value:,.0f}" for value in resolved]

    return [LegendEntry(label=label, value=value) for label, value in zip(labels, resolved)]


@dataclass(frozen=True)
class ScaleDomain:
    """Everything a renderer needs to size its axes and mark scales."""

    date_start: Optional[date]
    date_end: Optional[date]
    max_weekly_confirmed: float
    max_weekly_deceased: float
    max_monthly_confirmed: float
    max_monthly_deceased: float
    max_cumulative_confirmed: int
    max_cumulative_deceased: int
    radius_domain_max: float


def _max_or_zero(values: Sequence[float]) -> float:
    return float(max(values)) if values else 0.0


def compute_scale_domain(
    records: Sequence[DailyRecord],
    weekly: Sequence[BucketSummary],
    monthly: Sequence[BucketSummary],
    legend: Sequence[LegendEntry] = (),
    deceased_weight: float = 1.0,
) -> ScaleDomain:
    """Derive axis extents and the shared radius domain.

    The radius domain covers the larger of the weekly case maximum and the
    weekly death maximum times `deceased_weight`, and never falls below the
    largest legend value so every legend circle fits the scale. Empty inputs
    produce zero maxima rather than failing.
    """
    if deceased_weight <= 0:
        raise ValueError("deceased_weight must be strictly positive.")

    dates = [record.date for record in records]
    max_weekly_confirmed = _max_or_zero([summary.new_confirmed for summary in weekly])
    max_weekly_deceased = _max_or_zero([summary.new_deceased for summary in weekly])
    radius_domain_max = max(
        max_weekly_confirmed,
        max_weekly_deceased * deceased_weight,
        _max_or_zero([entry.value for entry in legend]),
    )

    return ScaleDomain(
        date_start=min(dates) if dates else None,
        date_end=max(dates) if dates else None,
        max_weekly_confirmed=max_weekly_confirmed,
        max_weekly_deceased=max_weekly_deceased,
        max_monthly_confirmed=_max_or_zero([summary.new_confirmed for summary in monthly]),
        max_monthly_deceased=_max_or_zero([summary.new_deceased for summary in monthly]),
        max_cumulative_confirmed=int(max((record.cumulative_confirmed for record in records), default=0)),
        max_cumulative_deceased=int(max((record.cumulative_deceased for record in records), default=0)),
        radius_domain_max=float(radius_domain_max),
    )


__all__ = [
    "LegendConfig",
    "LegendEntry",
    "QUANTILE_LABELS",
    "ScaleDomain",
    "compute_scale_domain",
    "legend_entries",
]
