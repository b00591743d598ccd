from __future__ import annotations

import math
from typing import Any, Mapping, Optional, Sequence, Tuple

MISSING = "missing"
MALFORMED = "malformed"


def ensure_mapping(row: Any) -> Mapping[str, Any]:
    """Guarantee table rows behave like mappings."""
    if isinstance(row, Mapping):
        return row
    raise TypeError(f"Unexpected row type: {type(row)}")


def first_present(row: Mapping[str, Any], headers: Sequence[str]) -> Tuple[Optional[str], Any]:
    """Return the first header from `headers` whose cell is non-blank, with its value.

    Blank cells fall through to the next alias. When every alias present is
    blank, the first present header is returned so the caller can count it as
    missing; `(None, None)` means the row carries none of the headers.
    """
    fallback: Tuple[Optional[str], Any] = (None, None)
    for header in headers:
        if header not in row:
            continue
        value = row[header]
        if value is not None and str(value).strip():
            return header, value
        if fallback[0] is None:
            fallback = (header, value)
    return fallback


def to_count(value: Any) -> Tuple[int, Optional[str]]:
    """Convert a CSV cell into a non-negative integer count.

    Returns the count together with a status: None when the cell parsed cleanly,
    "missing" for blank cells and "malformed" for anything else that could not be
    read as a non-negative whole number. Both fallbacks yield 0.
    """
    if value is None:
        return 0, MISSING
    if isinstance(value, bool):
        return 0, MALFORMED
    if isinstance(value, int):
        return (value, None) if value >= 0 else (0, MALFORMED)

    text = str(value).strip()
    if not text or text.lower() in {"nan", "na", "null", "none"}:
        return 0, MISSING

    try:
        return _non_negative(int(text))
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return 0, MALFORMED
    if not math.isfinite(number) or not number.is_integer():
        return 0, MALFORMED
    return _non_negative(int(number))


def _non_negative(number: int) -> Tuple[int, Optional[str]]:
    if number < 0:
        return 0, MALFORMED
    return number, None


__all__ = ["MALFORMED", "MISSING", "ensure_mapping", "first_present", "to_count"]
