from __future__ import annotations

from datetime import date
from pathlib import Path
import sys

import numpy as np
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.aggregation.resample import group_by_month, group_by_week
from src.casedata.records import DailyRecord
from src.scaling.domain import (
    QUANTILE_LABELS,
    LegendConfig,
    LegendEntry,
    compute_scale_domain,
    legend_entries,
)
from src.scaling.scales import LinearColorScale, SqrtScale


# ---------------------------------------------------------------------------
# Scale tests


def test_sqrt_scale_area_is_proportional_to_value() -> None:
    scale = SqrtScale(domain_max=100.0, range_max=10.0)

    assert scale(0) == pytest.approx(0.0)
    assert scale(100) == pytest.approx(10.0)
    assert scale(25) == pytest.approx(5.0)
    # Quadrupling the value doubles the radius.
    assert scale(64) / scale(16) == pytest.approx(2.0)


def test_sqrt_scale_handles_offsets_and_clamping() -> None:
    scale = SqrtScale(domain_max=400.0, range_min=2.0, range_max=50.0, clamp_max=30.0)
    radii = scale.map([-5, 0, 100, 400])

    assert radii[0] == pytest.approx(2.0)
    assert radii[1] == pytest.approx(2.0)
    assert radii[2] == pytest.approx(2.0 + 48.0 * 0.5)
    assert radii[3] == pytest.approx(30.0)


def test_sqrt_scale_with_empty_domain_maps_to_minimum() -> None:
    scale = SqrtScale(domain_max=0.0, range_min=3.0)
    assert np.all(scale.map([0, 10, 1000]) == 3.0)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"domain_max": -1.0},
        {"domain_max": float("nan")},
        {"domain_max": 10.0, "range_min": 5.0, "range_max": 1.0},
        {"domain_max": 10.0, "range_min": 5.0, "clamp_max": 1.0},
    ],
)
def test_sqrt_scale_rejects_invalid_parameters(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        SqrtScale(**kwargs)


def test_linear_color_scale_endpoints() -> None:
    scale = LinearColorScale(domain_max=10.0, low="#000000", high="#ffffff")

    assert scale(0) == "#000000"
    assert scale(10) == "#ffffff"
    assert scale(50) == "#ffffff"
    assert scale(5) == "#808080"
    assert LinearColorScale(domain_max=0.0)(5) == "#d8b4fe"


def test_linear_color_scale_rejects_bad_colour() -> None:
    with pytest.raises(ValueError):
        LinearColorScale(domain_max=1.0, low="purple")


# ---------------------------------------------------------------------------
# Legend tests


def test_legend_entries_from_quantiles() -> None:
    values = [float(value) for value in range(0, 101)]
    entries = legend_entries(values)

    assert [entry.label for entry in entries] == list(QUANTILE_LABELS)
    assert [entry.value for entry in entries] == pytest.approx([10.0, 25.0, 50.0, 75.0, 90.0])


def test_legend_entries_from_fixed_breakpoints() -> None:
    entries = legend_entries([1.0, 2.0], LegendConfig(breakpoints=(10000, 50000, 250000)))

    assert entries == [
        LegendEntry(label="10,000", value=10000.0),
        LegendEntry(label="50,000", value=50000.0),
        LegendEntry(label="250,000", value=250000.0),
    ]


def test_legend_entries_empty_values() -> None:
    assert legend_entries([]) == []


def test_legend_config_validation() -> None:
    with pytest.raises(ValueError):
        legend_entries([1.0], LegendConfig(breakpoints=(-1.0,)))
    with pytest.raises(ValueError):
        legend_entries([1.0], LegendConfig(quantiles=(0.5, 1.5)))
    with pytest.raises(ValueError):
        legend_entries([1.0], LegendConfig(breakpoints=(1.0, 2.0), labels=("one",)))


# ---------------------------------------------------------------------------
# Scale-domain tests


def _records() -> list[DailyRecord]:
    return [
        DailyRecord(date(2021, 1, 1), 100, 2, 100, 2),
        DailyRecord(date(2021, 1, 2), 300, 40, 400, 42),
        DailyRecord(date(2021, 2, 1), 50, 1, 450, 43),
    ]


def test_compute_scale_domain_extents() -> None:
    records = _records()
    weekly = group_by_week(records)
    monthly = group_by_month(records)

    domain = compute_scale_domain(records, weekly, monthly)

    assert domain.date_start == date(2021, 1, 1)
    assert domain.date_end == date(2021, 2, 1)
    assert domain.max_weekly_confirmed == pytest.approx(200.0)
    assert domain.max_weekly_deceased == pytest.approx(21.0)
    assert domain.max_monthly_confirmed == pytest.approx(400.0)
    assert domain.max_monthly_deceased == pytest.approx(42.0)
    assert domain.max_cumulative_confirmed == 450
    assert domain.max_cumulative_deceased == 43
    assert domain.radius_domain_max == pytest.approx(200.0)


def test_radius_domain_covers_weighted_deaths_and_legend() -> None:
    records = _records()
    weekly = group_by_week(records)
    monthly = group_by_month(records)

    weighted = compute_scale_domain(records, weekly, monthly, deceased_weight=20.0)
    assert weighted.radius_domain_max == pytest.approx(21.0 * 20.0)

    legend = [LegendEntry("big", 5000.0)]
    with_legend = compute_scale_domain(records, weekly, monthly, legend=legend)
    assert with_legend.radius_domain_max == pytest.approx(5000.0)


def test_compute_scale_domain_empty_inputs() -> None:
    domain = compute_scale_domain([], [], [])

    assert domain.date_start is None
    assert domain.date_end is None
    assert domain.radius_domain_max == 0.0
    assert domain.max_cumulative_confirmed == 0


def test_compute_scale_domain_rejects_non_positive_weight() -> None:
    with pytest.raises(ValueError):
        compute_scale_domain(_records(), [], [], deceased_weight=0.0)
