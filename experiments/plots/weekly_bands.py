"""Band chart of weekly mean cases and deaths, one row per year."""

from __future__ import annotations

import calendar
from typing import Optional, Sequence

import pandas as pd
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from src.aggregation.records import BucketSummary
from src.scaling import LegendEntry, LinearColorScale, ScaleDomain, SqrtScale
from .save_config import PlotSaveDestinations, emit_figure

CASE_FILL = "rgba(186, 85, 211, 0.5)"
CASE_LINE = "rgba(186, 85, 211, 0.7)"
DEATH_FILL = "rgba(96, 96, 96, 0.6)"
MONTH_LABELS = [calendar.month_abbr[month] for month in range(1, 13)]

__all__ = ["plot_weekly_bands", "weekly_band_frame"]


def weekly_band_frame(
    summaries: Sequence[BucketSummary],
    radius_scale: SqrtScale,
    case_colors: LinearColorScale,
    death_colors: LinearColorScale,
) -> pd.DataFrame:
    """Flatten weekly summaries into plotting rows.

    `x` places each week at `month + day / days_in_month` of its representative
    date, so a year spans the interval [0, 12).
    """
    rows: list[dict[str, object]] = []
    for summary in summaries:
        day = summary.representative_date
        days_in_month = calendar.monthrange(day.year, day.month)[1]
        rows.append(
            {
                "year": day.year,
                "x": (day.month - 1) + (day.day - 1) / days_in_month,
                "date": day,
                "cases": summary.new_confirmed,
                "deaths": summary.new_deceased,
                "case_radius": radius_scale(summary.new_confirmed),
                "death_radius": radius_scale(summary.new_deceased),
                "case_color": case_colors(summary.new_confirmed),
                "death_color": death_colors(summary.new_deceased),
            }
        )
    columns = ["year", "x", "date", "cases", "deaths", "case_radius", "death_radius", "case_color", "death_color"]
    return pd.DataFrame(rows, columns=columns).sort_values(["year", "x"]).reset_index(drop=True)


def _add_band(fig: go.Figure, year_df: pd.DataFrame, radius_column: str, fill: str, line: str, row: int) -> None:
    # Upper edge first, then the lower edge filled back up to it.
    fig.add_trace(
        go.Scatter(
            x=year_df["x"],
            y=year_df[radius_column],
            mode="lines",
            line=dict(color=line, width=0.5, shape="spline"),
            hoverinfo="skip",
            showlegend=False,
        ),
        row=row,
        col=1,
    )
    fig.add_trace(
        go.Scatter(
            x=year_df["x"],
            y=-year_df[radius_column],
            mode="lines",
            line=dict(color=line, width=0.5, shape="spline"),
            fill="tonexty",
            fillcolor=fill,
            hoverinfo="skip",
            showlegend=False,
        ),
        row=row,
        col=1,
    )


def plot_weekly_bands(
    summaries: Sequence[BucketSummary],
    domain: ScaleDomain,
    legend: Sequence[LegendEntry] = (),
    radius_range: tuple[float, float] = (3.0, 30.0),
    save_to: Optional[PlotSaveDestinations] = None,
) -> Optional[go.Figure]:
    """Draw a band per year whose half-width is the sqrt-scaled weekly mean."""
    if not summaries:
        return None

    radius_scale = SqrtScale(domain.radius_domain_max, range_min=radius_range[0], range_max=radius_range[1])
    case_colors = LinearColorScale(domain.max_weekly_confirmed, low="#f3e8ff", high="#ba55d3")
    death_colors = LinearColorScale(domain.max_weekly_deceased, low="#d4d4d4", high="#171717")
    df = weekly_band_frame(summaries, radius_scale, case_colors, death_colors)

    years = sorted(df["year"].unique())
    fig = make_subplots(
        rows=len(years),
        cols=1,
        shared_xaxes=True,
        vertical_spacing=0.02,
        row_titles=[str(year) for year in years],
    )

    for row, year in enumerate(years, start=1):
        year_df = df[df["year"] == year]
        if len(year_df) >= 2:
            _add_band(fig, year_df, "case_radius", CASE_FILL, CASE_LINE, row)
            _add_band(fig, year_df, "death_radius", DEATH_FILL, DEATH_FILL, row)
        fig.add_trace(
            go.Scatter(
                x=year_df["x"],
                y=[0.0] * len(year_df),
                mode="markers",
                marker=dict(size=2 * year_df["case_radius"], color=year_df["case_color"], line=dict(width=0)),
                customdata=year_df[["cases", "deaths"]].to_numpy(),
                text=[day.isoformat() for day in year_df["date"]],
                hovertemplate="%{text}<br>cases/day: %{customdata[0]:,.0f}<br>deaths/day: %{customdata[1]:,.0f}<extra></extra>",
                name="Weekly mean cases",
                showlegend=row == 1,
            ),
            row=row,
            col=1,
        )

    for entry in legend:
        # Invisible markers that only populate the size legend.
        fig.add_trace(
            go.Scatter(
                x=[None],
                y=[None],
                mode="markers",
                marker=dict(size=2 * radius_scale(entry.value), color="rgba(0,0,0,0)", line=dict(color="grey", width=1)),
                name=f"{entry.label}: {entry.value:,.0f}",
            ),
            row=1,
            col=1,
        )

    limit = radius_range[1] * 1.1
    fig.update_yaxes(range=[-limit, limit], showticklabels=False, showgrid=False, zeroline=False)
    fig.update_xaxes(
        range=[0, 12],
        tickmode="array",
        tickvals=[month + 0.5 for month in range(12)],
        ticktext=MONTH_LABELS,
        showgrid=False,
    )
    fig.update_layout(
        title="Weekly average new cases and deaths",
        template="plotly_dark",
        height=max(300, 220 * len(years)),
    )

    emit_figure(fig, save_to)
    return fig
