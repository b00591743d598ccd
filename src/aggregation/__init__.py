"""Resampling helpers for turning daily case counts into plot-ready summaries."""

from .bucketing import BucketKey, BucketPlan, build_bucket_plan, month_key, week_of_month_key, week_of_year_key
from .records import BucketSummary, MovingAveragePoint
from .resample import MONTHLY, WEEKLY, AggregationConfig, aggregate, group_by_month, group_by_week
from .smoothing import moving_average, trailing_mean

__all__ = [
    "AggregationConfig",
    "BucketKey",
    "BucketPlan",
    "BucketSummary",
    "MONTHLY",
    "MovingAveragePoint",
    "WEEKLY",
    "aggregate",
    "build_bucket_plan",
    "group_by_month",
    "group_by_week",
    "month_key",
    "moving_average",
    "trailing_mean",
    "week_of_month_key",
    "week_of_year_key",
]
