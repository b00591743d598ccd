from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path
import sys

import pandas as pd
import pytest
from typer.testing import CliRunner

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import main
from src.casedata import io as casedata_io
from main import app

runner = CliRunner()


def _write_cases_csv(tmp_path: Path, days: int = 21) -> Path:
    lines = ["date,cases,deaths"]
    for offset in range(days):
        day = date(2021, 3, 1) + timedelta(days=offset)
        lines.append(f"{day.strftime('%m/%d/%Y')},{10 * (offset + 1)},{offset % 3}")
    path = tmp_path / "cases.csv"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# summarize


def test_summarize_prints_weekly_table(tmp_path: Path) -> None:
    result = runner.invoke(app, ["summarize", str(_write_cases_csv(tmp_path))])

    assert result.exit_code == 0, result.output
    assert "2021-03-01" in result.output
    assert "2021-03-15" in result.output
    assert "[casedata] Parsed 21 of 21 rows" in result.output


def test_summarize_writes_csv(tmp_path: Path) -> None:
    output = tmp_path / "out" / "monthly.csv"
    result = runner.invoke(
        app,
        [
            "summarize",
            str(_write_cases_csv(tmp_path)),
            "--bucketing",
            "month",
            "--statistic",
            "sum",
            "--representative",
            "last",
            "--output",
            str(output),
        ],
    )

    assert result.exit_code == 0, result.output
    frame = pd.read_csv(output)
    assert list(frame["key"]) == ["2021-2"]
    assert frame.loc[0, "new_confirmed"] == pytest.approx(sum(10 * (idx + 1) for idx in range(21)))
    assert frame.loc[0, "representative_date"] == "2021-03-21"


def test_summarize_rejects_unknown_bucketing(tmp_path: Path) -> None:
    result = runner.invoke(app, ["summarize", str(_write_cases_csv(tmp_path)), "--bucketing", "quarter"])
    assert result.exit_code != 0


def test_summarize_reports_load_errors(tmp_path: Path) -> None:
    result = runner.invoke(app, ["summarize", str(tmp_path / "absent.csv")])
    assert result.exit_code == 1


def test_summarize_reports_unparseable_remote_csv(monkeypatch: pytest.MonkeyPatch) -> None:
    class BrokenResponse:
        text = 'date,cases\n2021-01-01,1,2,3\n"unterminated'

        def raise_for_status(self) -> None:
            return None

    monkeypatch.setattr(casedata_io.requests, "get", lambda url, timeout: BrokenResponse())
    result = runner.invoke(app, ["summarize", "https://example.org/cases.csv"])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Error: Could not parse" in result.output


def test_summarize_empty_year_range(tmp_path: Path) -> None:
    result = runner.invoke(
        app,
        ["summarize", str(_write_cases_csv(tmp_path)), "--start-year", "2020", "--end-year", "2020"],
    )
    assert result.exit_code == 0, result.output
    assert "No records to summarise" in result.output


# ---------------------------------------------------------------------------
# plot


def test_plot_saves_html(tmp_path: Path) -> None:
    plots_root = tmp_path / "plots"
    result = runner.invoke(
        app,
        [
            "plot",
            str(_write_cases_csv(tmp_path)),
            "--plots-root",
            str(plots_root),
            "--plots-tag",
            "run",
            "--no-save-static",
        ],
    )

    assert result.exit_code == 0, result.output
    for slug in ("weekly_bands", "monthly_circles", "daily_trends"):
        assert (plots_root / "run" / f"{slug}.html").exists()


def test_plot_single_chart(tmp_path: Path) -> None:
    plots_root = tmp_path / "plots"
    result = runner.invoke(
        app,
        [
            "plot",
            str(_write_cases_csv(tmp_path)),
            "--chart",
            "trend",
            "--window",
            "3",
            "--plots-root",
            str(plots_root),
            "--plots-tag",
            "run",
            "--no-save-static",
        ],
    )

    assert result.exit_code == 0, result.output
    assert (plots_root / "run" / "daily_trends.html").exists()
    assert not (plots_root / "run" / "weekly_bands.html").exists()


def test_plot_rejects_unknown_chart(tmp_path: Path) -> None:
    result = runner.invoke(app, ["plot", str(_write_cases_csv(tmp_path)), "--chart", "pie"])
    assert result.exit_code != 0


def test_plot_rejects_bad_window(tmp_path: Path) -> None:
    result = runner.invoke(app, ["plot", str(_write_cases_csv(tmp_path)), "--window", "0"])
    assert result.exit_code != 0


# ---------------------------------------------------------------------------
# fetch


def test_fetch_delegates_to_fetch_csv(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls: list[tuple[str, Path, bool]] = []

    def fake_fetch(url: str, raw_root: Path, force: bool = False) -> Path:
        calls.append((url, raw_root, force))
        return raw_root / "cases.csv"

    monkeypatch.setattr(main, "fetch_csv", fake_fetch)
    result = runner.invoke(app, ["fetch", "https://example.org/cases.csv", "--raw-root", str(tmp_path), "--force"])

    assert result.exit_code == 0, result.output
    assert calls == [("https://example.org/cases.csv", tmp_path, True)]
