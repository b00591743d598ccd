"""Where chart figures go: `<plots_root>/<run_tag>/<chart>.{png,html}`."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import plotly.graph_objects as go

CHART_SLUGS = ("weekly_bands", "monthly_circles", "daily_trends")


@dataclass(frozen=True)
class PlotSaveDestinations:
    """Output files for one chart of one run."""

    run_dir: Path
    chart: str
    save_static: bool
    save_html: bool

    def _path(self, suffix: str) -> Path:
        return self.run_dir / f"{self.chart}.{suffix}"

    @property
    def png_path(self) -> Path:
        return self._path("png")

    @property
    def html_path(self) -> Path:
        return self._path("html")

    @property
    def enabled(self) -> bool:
        return self.save_static or self.save_html


@dataclass(frozen=True)
class PlotSaveConfig:
    """Per-run save settings shared by every chart the CLI draws."""

    plots_root: Path
    run_tag: str
    save_static: bool = True
    save_html: bool = True

    @classmethod
    def timestamped(cls, plots_root: Path, run_tag: Optional[str] = None, **flags: bool) -> "PlotSaveConfig":
        """Use `run_tag` when given, otherwise the current UTC time as the run folder."""
        tag = run_tag or datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
        return cls(plots_root=plots_root, run_tag=tag, **flags)

    @property
    def run_dir(self) -> Path:
        return self.plots_root / self.run_tag

    def for_plot(self, chart: str) -> PlotSaveDestinations:
        if chart not in CHART_SLUGS:
            raise ValueError(f"Unknown chart '{chart}'; expected one of {', '.join(CHART_SLUGS)}")
        return PlotSaveDestinations(
            run_dir=self.run_dir,
            chart=chart,
            save_static=self.save_static,
            save_html=self.save_html,
        )


def emit_figure(fig: go.Figure, save_to: Optional[PlotSaveDestinations]) -> None:
    """Write `fig` to the requested destinations, or open it interactively when none are given."""
    if save_to is None:
        fig.show()
        return
    if not save_to.enabled:
        return

    save_to.run_dir.mkdir(parents=True, exist_ok=True)
    if save_to.save_static:
        # PNG export goes through kaleido.
        fig.write_image(str(save_to.png_path), engine="kaleido")
    if save_to.save_html:
        fig.write_html(str(save_to.html_path), include_plotlyjs="cdn", full_html=True)


__all__ = ["CHART_SLUGS", "PlotSaveConfig", "PlotSaveDestinations", "emit_figure"]
