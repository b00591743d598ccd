"""Tests for the Plotly chart builders."""

from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path
import sys

import plotly.graph_objects as go
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from experiments.plots import (
    PlotSaveConfig,
    emit_figure,
    plot_daily_trends,
    plot_monthly_circles,
    plot_weekly_bands,
    trend_frame,
    weekly_band_frame,
)
from src.casedata.records import DailyRecord
from src.pipelines import ChartData, ChartRequest, build_chart_data
from src.scaling import LinearColorScale, SqrtScale


# ---------------------------------------------------------------------------
# Helper fixtures and utilities


def _chart_data(days: int = 70) -> ChartData:
    records = []
    cumulative_confirmed = cumulative_deceased = 0
    for offset in range(days):
        new_confirmed = 1000 + 50 * (offset % 20)
        new_deceased = 10 + offset % 7
        cumulative_confirmed += new_confirmed
        cumulative_deceased += new_deceased
        records.append(
            DailyRecord(
                date(2020, 12, 1) + timedelta(days=offset),
                new_confirmed,
                new_deceased,
                cumulative_confirmed,
                cumulative_deceased,
            )
        )
    return build_chart_data(records, ChartRequest(source="unused.csv"))


def _save_config(tmp_path: Path) -> PlotSaveConfig:
    return PlotSaveConfig(plots_root=tmp_path, run_tag="test", save_static=False, save_html=True)


# ---------------------------------------------------------------------------
# Save configuration tests


def test_plot_save_config_paths(tmp_path: Path) -> None:
    destinations = PlotSaveConfig(plots_root=tmp_path, run_tag="run").for_plot("weekly_bands")

    assert destinations.run_dir == tmp_path / "run"
    assert destinations.png_path == tmp_path / "run" / "weekly_bands.png"
    assert destinations.html_path == tmp_path / "run" / "weekly_bands.html"
    assert destinations.save_static and destinations.save_html


def test_plot_save_config_tags_and_chart_names(tmp_path: Path) -> None:
    tagged = PlotSaveConfig.timestamped(tmp_path, "fixed", save_static=False)
    assert tagged.run_dir == tmp_path / "fixed"
    assert not tagged.save_static

    stamped = PlotSaveConfig.timestamped(tmp_path)
    assert len(stamped.run_tag) == len("20210301-120000")

    with pytest.raises(ValueError):
        tagged.for_plot("pie_chart")


def test_emit_figure_without_formats_writes_nothing(tmp_path: Path) -> None:
    config = PlotSaveConfig(plots_root=tmp_path, run_tag="off", save_static=False, save_html=False)
    emit_figure(go.Figure(), config.for_plot("daily_trends"))
    assert not (tmp_path / "off").exists()


def test_emit_figure_shows_when_not_saving(monkeypatch: pytest.MonkeyPatch) -> None:
    shown: list[bool] = []
    monkeypatch.setattr(go.Figure, "show", lambda self, *args, **kwargs: shown.append(True))
    emit_figure(go.Figure(), None)
    assert shown == [True]


# ---------------------------------------------------------------------------
# Frame builder tests


def test_weekly_band_frame_positions() -> None:
    data = _chart_data()
    radius = SqrtScale(data.domain.radius_domain_max, range_min=3.0, range_max=30.0)
    colors = LinearColorScale(data.domain.max_weekly_confirmed)
    frame = weekly_band_frame(data.weekly, radius, colors, colors)

    assert len(frame) == len(data.weekly)
    assert frame["x"].between(0, 12, inclusive="left").all()
    assert frame["case_radius"].between(3.0, 30.0).all()
    assert frame.loc[0, "x"] == pytest.approx(11.0)
    assert sorted(frame["year"].unique()) == [2020, 2021]
    assert frame["case_color"].str.match(r"^#[0-9a-f]{6}$").all()


def test_trend_frame_is_long_form() -> None:
    data = _chart_data(days=10)
    frame = trend_frame(data.trend)

    assert len(frame) == 40
    assert set(frame["panel"]) == {"cases", "deaths"}
    averages = frame[frame["series"] == "new cases (avg)"]["value"].tolist()
    assert averages == pytest.approx([point.mean_new_confirmed for point in data.trend])


# ---------------------------------------------------------------------------
# Figure tests


def test_plot_weekly_bands_writes_html(tmp_path: Path) -> None:
    data = _chart_data()
    save_config = _save_config(tmp_path)

    fig = plot_weekly_bands(data.weekly, data.domain, legend=data.legend, save_to=save_config.for_plot("weekly_bands"))

    assert fig is not None
    assert (tmp_path / "test" / "weekly_bands.html").exists()
    assert not (tmp_path / "test" / "weekly_bands.png").exists()
    legend_names = [trace.name for trace in fig.data if trace.name and "Wave" in trace.name]
    assert len(legend_names) == len(data.legend)


def test_plot_monthly_circles_writes_html(tmp_path: Path) -> None:
    data = _chart_data()
    save_config = _save_config(tmp_path)

    fig = plot_monthly_circles(data.records, data.monthly, data.domain, save_to=save_config.for_plot("monthly_circles"))

    assert fig is not None
    assert (tmp_path / "test" / "monthly_circles.html").exists()
    markers = [trace for trace in fig.data if trace.mode == "markers"]
    assert len(markers) == 2
    assert max(markers[0].marker.size) <= 100.0


def test_plot_daily_trends_writes_html(tmp_path: Path) -> None:
    data = _chart_data()
    save_config = _save_config(tmp_path)

    fig = plot_daily_trends(data.trend, 7, save_to=save_config.for_plot("daily_trends"))

    assert fig is not None
    assert "7-day moving average" in fig.layout.title.text
    assert (tmp_path / "test" / "daily_trends.html").exists()


def test_plots_skip_empty_inputs(tmp_path: Path) -> None:
    data = build_chart_data([], ChartRequest(source="unused.csv"))
    save_to = _save_config(tmp_path).for_plot("weekly_bands")

    assert plot_weekly_bands(data.weekly, data.domain, save_to=save_to) is None
    assert plot_monthly_circles(data.records, data.monthly, data.domain, save_to=save_to) is None
    assert plot_daily_trends(data.trend, 7, save_to=save_to) is None
    assert not (tmp_path / "test").exists()
