"""Cumulative case/death lines with monthly new-count circles."""

from __future__ import annotations

from typing import Optional, Sequence

import pandas as pd
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from src.aggregation.records import BucketSummary
from src.casedata.records import DailyRecord
from src.scaling import LinearColorScale, ScaleDomain, SqrtScale
from .save_config import PlotSaveDestinations, emit_figure

CONFIRMED_COLOR = "#e879f9"
DECEASED_COLOR = "#93c5fd"
MAX_RADIUS = 50.0


def plot_monthly_circles(
    records: Sequence[DailyRecord],
    monthly: Sequence[BucketSummary],
    domain: ScaleDomain,
    save_to: Optional[PlotSaveDestinations] = None,
) -> Optional[go.Figure]:
    """Draw end-of-month cumulative totals with circles sized by that month's new counts."""
    if not records or not monthly:
        return None

    daily = pd.DataFrame(
        {
            "date": [record.date for record in records],
            "cumulative_confirmed": [record.cumulative_confirmed for record in records],
            "cumulative_deceased": [record.cumulative_deceased for record in records],
        }
    )
    months = pd.DataFrame(
        {
            "date": [summary.representative_date for summary in monthly],
            "label": [summary.representative_date.strftime("%b %Y") for summary in monthly],
            "new_confirmed": [summary.new_confirmed for summary in monthly],
            "new_deceased": [summary.new_deceased for summary in monthly],
            "cumulative_confirmed": [summary.cumulative_confirmed for summary in monthly],
            "cumulative_deceased": [summary.cumulative_deceased for summary in monthly],
        }
    )

    confirmed_radius = SqrtScale(domain.max_monthly_confirmed, range_min=2.0, range_max=MAX_RADIUS, clamp_max=MAX_RADIUS)
    deceased_radius = SqrtScale(domain.max_monthly_deceased, range_min=2.0, range_max=MAX_RADIUS, clamp_max=MAX_RADIUS)
    confirmed_colors = LinearColorScale(domain.max_monthly_confirmed, low="#d8b4fe", high="#a855f7")
    deceased_colors = LinearColorScale(domain.max_monthly_deceased, low="#bfdbfe", high="#3b82f6")

    fig = make_subplots(rows=2, cols=1, shared_xaxes=True, row_heights=[0.85, 0.15], vertical_spacing=0.03)

    series = (
        ("confirmed", "Confirmed cases", CONFIRMED_COLOR, confirmed_radius, confirmed_colors, 1),
        ("deceased", "Deceased", DECEASED_COLOR, deceased_radius, deceased_colors, 2),
    )
    for column, title, color, radius_scale, color_scale, row in series:
        fig.add_trace(
            go.Scatter(
                x=daily["date"],
                y=daily[f"cumulative_{column}"],
                mode="lines",
                line=dict(color=color, width=2),
                name=f"Cumulative {title.lower()}",
            ),
            row=row,
            col=1,
        )
        fig.add_trace(
            go.Scatter(
                x=months["date"],
                y=months[f"cumulative_{column}"],
                mode="markers",
                marker=dict(
                    size=2 * radius_scale.map(months[f"new_{column}"]),
                    color=[color_scale(value) for value in months[f"new_{column}"]],
                    line=dict(color=color, width=1),
                    opacity=0.8,
                ),
                customdata=months[[f"new_{column}"]].to_numpy(),
                text=months["label"],
                hovertemplate="%{text}: %{customdata[0]:,.0f} new<extra></extra>",
                name=f"Monthly new {title.lower()}",
            ),
            row=row,
            col=1,
        )

    fig.update_yaxes(range=[0, domain.max_cumulative_confirmed * 1.05 or 1], row=1, col=1, tickformat=",.0f")
    fig.update_yaxes(
        range=[domain.max_cumulative_deceased * 1.05 or 1, 0],
        row=2,
        col=1,
        tickformat=",.0f",
    )
    fig.update_layout(
        title="Cumulative cases and deaths with monthly new counts",
        template="plotly_dark",
        xaxis2_title="Time",
    )

    emit_figure(fig, save_to)
    return fig


__all__ = ["plot_monthly_circles"]
