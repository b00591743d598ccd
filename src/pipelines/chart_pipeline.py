"""High-level orchestration: load the case table, aggregate it and derive scale domains."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import pandas as pd

from src.aggregation import (
    MONTHLY,
    WEEKLY,
    AggregationConfig,
    BucketSummary,
    MovingAveragePoint,
    aggregate,
    moving_average,
)
from src.aggregation.resample import sort_by_date
from src.casedata import DailyRecord, InvalidParameterError, ParseReport, parse_rows, read_rows
from src.casedata.config import DEFAULT_MOVING_AVERAGE_WINDOW, DEFAULT_YEAR_RANGE
from src.scaling import LegendConfig, LegendEntry, ScaleDomain, compute_scale_domain, legend_entries


@dataclass(frozen=True)
class ChartRequest:
    """Describe one aggregation run over a case table."""

    source: Union[str, Path]
    strict: bool = False
    year_range: Optional[Tuple[int, int]] = None
    weekly: AggregationConfig = WEEKLY
    monthly: AggregationConfig = MONTHLY
    window_size: int = DEFAULT_MOVING_AVERAGE_WINDOW
    legend: LegendConfig = field(default_factory=LegendConfig)
    deceased_weight: float = 1.0

    def validate(self) -> None:
        self.weekly.validate()
        self.monthly.validate()
        self.legend.validate()
        if self.year_range is not None and self.year_range[0] > self.year_range[1]:
            raise InvalidParameterError("year_range start cannot be after its end.")
        if isinstance(self.window_size, bool) or not isinstance(self.window_size, int) or self.window_size < 1:
            raise InvalidParameterError(f"window_size must be a positive integer, got {self.window_size!r}")
        if self.deceased_weight <= 0:
            raise InvalidParameterError("deceased_weight must be strictly positive.")

    @classmethod
    def from_options(
        cls,
        source: Union[str, Path],
        *,
        strict: bool = False,
        start_year: Optional[int] = None,
        end_year: Optional[int] = None,
        bucketing: str = "week-of-month",
        statistic: str = "mean",
        representative: str = "first",
        window_size: int = DEFAULT_MOVING_AVERAGE_WINDOW,
        legend_values: Sequence[float] = (),
        deceased_weight: float = 1.0,
    ) -> "ChartRequest":
        """Translate CLI options into a validated request."""
        if start_year is None and end_year is None:
            year_range: Optional[Tuple[int, int]] = None
        else:
            year_range = (
                start_year if start_year is not None else DEFAULT_YEAR_RANGE[0],
                end_year if end_year is not None else DEFAULT_YEAR_RANGE[1],
            )
        request = cls(
            source=source,
            strict=strict,
            year_range=year_range,
            weekly=AggregationConfig(
                bucketing=bucketing,  # type: ignore[arg-type]
                statistic=statistic,  # type: ignore[arg-type]
                representative_date=representative,  # type: ignore[arg-type]
            ),
            window_size=window_size,
            legend=LegendConfig(breakpoints=tuple(float(value) for value in legend_values)),
            deceased_weight=deceased_weight,
        )
        request.validate()
        return request


@dataclass(frozen=True)
class ChartData:
    """Output of one run: summary streams plus the parameters a renderer needs."""

    records: Tuple[DailyRecord, ...]
    report: ParseReport
    weekly: List[BucketSummary]
    monthly: List[BucketSummary]
    trend: List[MovingAveragePoint]
    legend: List[LegendEntry]
    domain: ScaleDomain


def filter_years(records: Sequence[DailyRecord], year_range: Optional[Tuple[int, int]]) -> List[DailyRecord]:
    if year_range is None:
        return list(records)
    first, last = year_range
    return [record for record in records if first <= record.date.year <= last]


def build_chart_data(records: Sequence[DailyRecord], request: ChartRequest, report: Optional[ParseReport] = None) -> ChartData:
    """Pure part of the pipeline; rerunning it on the same records yields the same output."""
    request.validate()
    selected = sort_by_date(filter_years(records, request.year_range))

    weekly = aggregate(selected, request.weekly)
    monthly = aggregate(selected, request.monthly)
    trend = moving_average(selected, request.window_size)
    legend = legend_entries([summary.new_confirmed for summary in weekly], request.legend)
    domain = compute_scale_domain(selected, weekly, monthly, legend, deceased_weight=request.deceased_weight)

    return ChartData(
        records=tuple(selected),
        report=report or ParseReport(rows_read=len(records), records=len(records)),
        weekly=weekly,
        monthly=monthly,
        trend=trend,
        legend=legend,
        domain=domain,
    )


def run_chart_pipeline(request: ChartRequest) -> ChartData:
    """Load → parse → aggregate → derive scale domains."""
    request.validate()
    rows = read_rows(request.source)
    parsed = parse_rows(rows, strict=request.strict)
    _print_report(parsed.report)
    return build_chart_data(parsed.records, request, parsed.report)


def summary_frame(summaries: Sequence[BucketSummary]) -> pd.DataFrame:
    """Tabulate bucket summaries for printing or CSV export."""
    columns = [
        "key",
        "representative_date",
        "start_date",
        "end_date",
        "record_count",
        "statistic",
        "new_confirmed",
        "new_deceased",
        "cumulative_confirmed",
        "cumulative_deceased",
    ]
    rows = [
        {
            "key": "-".join(str(part) for part in summary.key),
            "representative_date": summary.representative_date.isoformat(),
            "start_date": summary.start_date.isoformat(),
            "end_date": summary.end_date.isoformat(),
            "record_count": summary.record_count,
            "statistic": summary.statistic,
            "new_confirmed": summary.new_confirmed,
            "new_deceased": summary.new_deceased,
            "cumulative_confirmed": summary.cumulative_confirmed,
            "cumulative_deceased": summary.cumulative_deceased,
        }
        for summary in summaries
    ]
    return pd.DataFrame(rows, columns=columns)


def _print_report(report: ParseReport) -> None:
    if report.skipped:
        preview = ", ".join(f"row {row.row_index} ({row.value!r})" for row in report.skipped[:5])
        more = f" and {len(report.skipped) - 5} more" if len(report.skipped) > 5 else ""
        print(f"[casedata] Skipped {len(report.skipped)} rows with malformed dates: {preview}{more}")
    if report.zero_filled:
        print(
            f"[casedata] Zero-filled {report.zero_filled} count fields "
            f"({report.missing_values} missing, {report.malformed_values} malformed)"
        )
    print(f"[casedata] Parsed {report.records} of {report.rows_read} rows")


__all__ = ["ChartData", "ChartRequest", "build_chart_data", "filter_years", "run_chart_pipeline", "summary_frame"]
