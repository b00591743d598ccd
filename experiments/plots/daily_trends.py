"""Line chart of daily new counts against their trailing moving average."""

from __future__ import annotations

from typing import Optional, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from src.aggregation.records import MovingAveragePoint
from .save_config import PlotSaveDestinations, emit_figure

SERIES_COLORS = {
    "new cases": "#f0abfc",
    "new cases (avg)": "#e879f9",
    "new deaths": "#bfdbfe",
    "new deaths (avg)": "#93c5fd",
}


def trend_frame(points: Sequence[MovingAveragePoint]) -> pd.DataFrame:
    """Long-form frame with one row per (date, series)."""
    rows: list[dict[str, object]] = []
    for point in points:
        rows.extend(
            [
                {"date": point.date, "series": "new cases", "value": point.new_confirmed, "panel": "cases"},
                {"date": point.date, "series": "new cases (avg)", "value": point.mean_new_confirmed, "panel": "cases"},
                {"date": point.date, "series": "new deaths", "value": point.new_deceased, "panel": "deaths"},
                {"date": point.date, "series": "new deaths (avg)", "value": point.mean_new_deceased, "panel": "deaths"},
            ]
        )
    return pd.DataFrame(rows, columns=["date", "series", "value", "panel"])


def plot_daily_trends(
    points: Sequence[MovingAveragePoint],
    window_size: int,
    save_to: Optional[PlotSaveDestinations] = None,
) -> Optional[go.Figure]:
    """Plot raw daily counts (dashed) and the `window_size`-day trailing mean (solid)."""
    if not points:
        return None

    df = trend_frame(points)
    fig = px.line(
        df,
        x="date",
        y="value",
        color="series",
        line_dash="series",
        facet_row="panel",
        color_discrete_map=SERIES_COLORS,
        line_dash_map={
            "new cases": "dot",
            "new cases (avg)": "solid",
            "new deaths": "dot",
            "new deaths (avg)": "solid",
        },
        title=f"Daily new cases and deaths with {window_size}-day moving average",
        labels={"date": "Date", "value": "Count", "series": ""},
        template="plotly_dark",
    )
    fig.update_yaxes(matches=None, rangemode="tozero", tickformat=",.0f")

    emit_figure(fig, save_to)
    return fig


__all__ = ["plot_daily_trends", "trend_frame"]
