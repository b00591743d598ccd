"""End-to-end pipeline from a case table to chart-ready summaries."""

from .chart_pipeline import ChartData, ChartRequest, build_chart_data, filter_years, run_chart_pipeline, summary_frame

__all__ = [
    "ChartData",
    "ChartRequest",
    "build_chart_data",
    "filter_years",
    "run_chart_pipeline",
    "summary_frame",
]
