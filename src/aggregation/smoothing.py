"""Trailing moving average over the daily series."""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from src.casedata.errors import InvalidParameterError
from src.casedata.records import DailyRecord

from .records import MovingAveragePoint


def trailing_mean(values: Sequence[float], window_size: int) -> np.ndarray:
    """Mean of `values[max(0, i-w+1) : i+1]` for every index, computed from a running sum.

    Early indices average over fewer than `window_size` samples instead of padding.
    """
    _validate_window(window_size)
    series = np.asarray(values, dtype=float)
    if series.ndim != 1:
        raise ValueError(f"values must be 1-D, got shape {series.shape}")
    if series.size == 0:
        return np.zeros(0, dtype=float)

    running = np.concatenate(([0.0], np.cumsum(series)))
    ends = np.arange(1, series.size + 1)
    starts = np.maximum(0, ends - window_size)
    return (running[ends] - running[starts]) / (ends - starts)


def moving_average(records: Sequence[DailyRecord], window_size: int) -> List[MovingAveragePoint]:
    """Produce one `MovingAveragePoint` per record, in the order given."""
    _validate_window(window_size)
    if not records:
        return []

    confirmed = trailing_mean([record.new_confirmed for record in records], window_size)
    deceased = trailing_mean([record.new_deceased for record in records], window_size)

    points: List[MovingAveragePoint] = []
    for idx, record in enumerate(records):
        points.append(
            MovingAveragePoint(
                date=record.date,
                new_confirmed=record.new_confirmed,
                new_deceased=record.new_deceased,
                mean_new_confirmed=float(confirmed[idx]),
                mean_new_deceased=float(deceased[idx]),
                window_samples=int(min(idx + 1, window_size)),
            )
        )
    return points


def _validate_window(window_size: int) -> None:
    if isinstance(window_size, bool) or not isinstance(window_size, (int, np.integer)):
        raise InvalidParameterError(f"window_size must be an integer, got {window_size!r}")
    if window_size < 1:
        raise InvalidParameterError(f"window_size must be positive, got {window_size}")


__all__ = ["moving_average", "trailing_mean"]
