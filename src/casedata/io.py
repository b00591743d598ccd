"""Helpers for fetching the case table and reading it into untyped rows."""

from __future__ import annotations

import io
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Union

import pandas as pd
import requests

from .config import COLUMNS
from .errors import DataLoadError

Source = Union[str, Path]


def is_url(source: Source) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))


def download_stream(url: str, dest: Path) -> None:
    """Stream a remote file to disk atomically."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    with requests.get(url, stream=True, timeout=60) as response:
        response.raise_for_status()
        with tempfile.NamedTemporaryFile(delete=False, dir=dest.parent) as tmp:
            for chunk in response.iter_content(chunk_size=8192):
                if chunk:
                    tmp.write(chunk)
    os.replace(tmp.name, dest)


def fetch_csv(url: str, raw_root: Path, force: bool = False) -> Path:
    """Download `url` under `raw_root`, skipping the request when the file already exists."""
    name = url.rstrip("/").rsplit("/", 1)[-1] or "cases.csv"
    dest = raw_root / name
    if dest.exists() and not force:
        print(f"[casedata] {dest} already present; pass --force to refresh")
        return dest
    try:
        download_stream(url, dest)
    except requests.RequestException as exc:
        raise DataLoadError(f"Could not download {url}: {exc}") from exc
    print(f"[casedata] Downloaded {url} → {dest}")
    return dest


def _read_frame(source: Source) -> pd.DataFrame:
    # Every cell stays a string; the parser owns numeric coercion.
    read_kwargs = dict(dtype=str, keep_default_na=False, skipinitialspace=True)
    if is_url(source):
        try:
            response = requests.get(str(source), timeout=60)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise DataLoadError(f"Could not fetch {source}: {exc}") from exc
        try:
            return pd.read_csv(io.StringIO(response.text), **read_kwargs)
        except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
            raise DataLoadError(f"Could not parse {source}: {exc}") from exc

    path = Path(source)
    if not path.exists():
        raise DataLoadError(f"Input table {path} does not exist")
    try:
        return pd.read_csv(path, **read_kwargs)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise DataLoadError(f"Could not read {path}: {exc}") from exc


def read_rows(source: Source) -> List[Dict[str, str]]:
    """Load a CSV (local path or http(s) URL) as a list of column → string mappings."""
    frame = _read_frame(source)
    frame.columns = [str(column).strip() for column in frame.columns]

    if not any(header in frame.columns for header in COLUMNS["date"]):
        raise DataLoadError(f"{source} has no 'date' column")
    if not any(header in frame.columns for header in COLUMNS["new_confirmed"]):
        joined = " or ".join(COLUMNS["new_confirmed"])
        raise DataLoadError(f"{source} needs a {joined} column")

    print(f"[casedata] Loaded {len(frame)} rows from {source}")
    return frame.to_dict(orient="records")


__all__ = ["download_stream", "fetch_csv", "is_url", "read_rows"]
