from pathlib import Path
from typing import List, Optional

import typer

from experiments.plots import PlotSaveConfig, plot_daily_trends, plot_monthly_circles, plot_weekly_bands
from src.casedata import CaseDataError, fetch_csv
from src.casedata.config import DEFAULT_MOVING_AVERAGE_WINDOW, DEFAULT_PLOTS_ROOT, DEFAULT_RAW_ROOT
from src.pipelines import ChartData, ChartRequest, run_chart_pipeline, summary_frame

app = typer.Typer()

CHARTS = ("weekly", "monthly", "trend")


def _build_request(source: str, **options) -> ChartRequest:
    try:
        return ChartRequest.from_options(source, **options)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _run(request: ChartRequest) -> ChartData:
    try:
        return run_chart_pipeline(request)
    except CaseDataError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


@app.command("fetch")
def fetch(
    url: str = typer.Argument(..., help="URL of the daily case CSV."),
    raw_root: Path = typer.Option(
        DEFAULT_RAW_ROOT,
        "--raw-root",
        exists=False,
        file_okay=False,
        dir_okay=True,
        writable=True,
        help="Directory to store downloaded tables.",
    ),
    force: bool = typer.Option(False, "--force", help="Redownload even if the file exists."),
) -> None:
    """
    Download a case table so later runs can read it from disk.
    """
    try:
        fetch_csv(url, raw_root, force=force)
    except CaseDataError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


@app.command("summarize")
def summarize(
    source: str = typer.Argument(..., help="Path or http(s) URL of the daily case CSV."),
    bucketing: str = typer.Option(
        "week-of-month",
        "--bucketing",
        help="Bucket layout: week-of-month, week-of-year or month.",
        show_default=True,
    ),
    statistic: str = typer.Option("mean", "--statistic", help="Per-bucket statistic: mean or sum."),
    representative: str = typer.Option(
        "first",
        "--representative",
        help="Date used to place each bucket: first, last or median.",
    ),
    start_year: Optional[int] = typer.Option(None, "--start-year", help="Drop records before this year."),
    end_year: Optional[int] = typer.Option(None, "--end-year", help="Drop records after this year."),
    strict: bool = typer.Option(False, "--strict", help="Fail on malformed dates or counts instead of skipping."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the summaries to this CSV file."),
) -> None:
    """
    Print (or export) bucket summaries for the chosen aggregation.
    """
    request = _build_request(
        source,
        strict=strict,
        start_year=start_year,
        end_year=end_year,
        bucketing=bucketing,
        statistic=statistic,
        representative=representative,
    )
    data = _run(request)
    frame = summary_frame(data.weekly)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(output, index=False)
        print(f"[casedata] Wrote {len(frame)} summaries → {output}")
    elif frame.empty:
        print("[casedata] No records to summarise.")
    else:
        print(frame.to_string(index=False))


@app.command("plot")
def plot(
    source: str = typer.Argument(..., help="Path or http(s) URL of the daily case CSV."),
    charts: List[str] = typer.Option(
        list(CHARTS),
        "--chart",
        help="Charts to draw (weekly, monthly, trend).",
        show_default=True,
    ),
    window: int = typer.Option(DEFAULT_MOVING_AVERAGE_WINDOW, "--window", help="Moving-average window in days."),
    legend_values: List[float] = typer.Option(
        [],
        "--legend-value",
        help="Fixed legend breakpoints for the weekly chart (defaults to quantiles).",
    ),
    deceased_weight: float = typer.Option(
        1.0,
        "--deceased-weight",
        help="Multiplier applied to deaths when sizing the shared radius scale.",
    ),
    start_year: Optional[int] = typer.Option(None, "--start-year", help="Drop records before this year."),
    end_year: Optional[int] = typer.Option(None, "--end-year", help="Drop records after this year."),
    strict: bool = typer.Option(False, "--strict", help="Fail on malformed dates or counts instead of skipping."),
    plots_root: Optional[Path] = typer.Option(
        None,
        "--plots-root",
        help=f"Directory where plots should be saved (e.g. {DEFAULT_PLOTS_ROOT}); shows them when omitted.",
    ),
    plots_tag: Optional[str] = typer.Option(
        None,
        "--plots-tag",
        help="Folder suffix for this run (defaults to timestamp).",
    ),
    save_static: bool = typer.Option(True, help="Write static PNG snapshots when saving plots."),
    save_html: bool = typer.Option(True, help="Write interactive HTML plots when saving."),
) -> None:
    """
    Aggregate the case table and render the weekly, monthly and trend charts.
    """
    unknown = [chart for chart in charts if chart not in CHARTS]
    if unknown:
        raise typer.BadParameter(f"Unknown chart(s): {', '.join(unknown)}; choose from {', '.join(CHARTS)}.")

    request = _build_request(
        source,
        strict=strict,
        start_year=start_year,
        end_year=end_year,
        window_size=window,
        legend_values=legend_values,
        deceased_weight=deceased_weight,
    )
    data = _run(request)
    if not data.records:
        print("[plots] No records to plot.")
        return

    save_config: Optional[PlotSaveConfig] = None
    if plots_root:
        save_config = PlotSaveConfig.timestamped(plots_root, plots_tag, save_static=save_static, save_html=save_html)
        print(f"[plots] Saving figures under {save_config.run_dir}")

    if "weekly" in charts:
        plot_weekly_bands(
            data.weekly,
            data.domain,
            legend=data.legend,
            save_to=save_config.for_plot("weekly_bands") if save_config else None,
        )
    if "monthly" in charts:
        plot_monthly_circles(
            data.records,
            data.monthly,
            data.domain,
            save_to=save_config.for_plot("monthly_circles") if save_config else None,
        )
    if "trend" in charts:
        plot_daily_trends(
            data.trend,
            request.window_size,
            save_to=save_config.for_plot("daily_trends") if save_config else None,
        )


if __name__ == "__main__":
    app()
