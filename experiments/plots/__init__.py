"""Plotting utilities for aggregated case data."""

from .daily_trends import plot_daily_trends, trend_frame
from .monthly_circles import plot_monthly_circles
from .save_config import CHART_SLUGS, PlotSaveConfig, PlotSaveDestinations, emit_figure
from .weekly_bands import plot_weekly_bands, weekly_band_frame

__all__ = [
    "plot_daily_trends",
    "plot_monthly_circles",
    "plot_weekly_bands",
    "trend_frame",
    "weekly_band_frame",
    "CHART_SLUGS",
    "emit_figure",
    "PlotSaveConfig",
    "PlotSaveDestinations",
]
