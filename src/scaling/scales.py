"""Value-to-visual mappings used by the chart layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

import numpy as np

Number = Union[int, float]


@dataclass(frozen=True)
class SqrtScale:
    """Square-root scale for circle radii.

    With `range_min == 0` the circle *area* is proportional to the value, so
    small counts are not visually exaggerated the way a linear radius would.
    Values below zero map to `range_min`; a zero domain maps everything to
    `range_min`. `clamp_max` optionally caps the output radius.
    """

    domain_max: float
    range_min: float = 0.0
    range_max: float = 30.0
    clamp_max: Optional[float] = None

    def __post_init__(self) -> None:
        if not np.isfinite(self.domain_max) or self.domain_max < 0:
            raise ValueError("domain_max must be a finite, non-negative number.")
        if self.range_min < 0 or self.range_max < self.range_min:
            raise ValueError("Radius range must satisfy 0 <= range_min <= range_max.")
        if self.clamp_max is not None and self.clamp_max < self.range_min:
            raise ValueError("clamp_max cannot be smaller than range_min.")

    def __call__(self, value: Number) -> float:
        return float(self.map([value])[0])

    def map(self, values: Sequence[Number]) -> np.ndarray:
        arr = np.clip(np.asarray(values, dtype=float), 0.0, None)
        if self.domain_max == 0:
            radii = np.full(arr.shape, self.range_min, dtype=float)
        else:
            radii = self.range_min + (self.range_max - self.range_min) * np.sqrt(arr / self.domain_max)
        if self.clamp_max is not None:
            radii = np.minimum(radii, self.clamp_max)
        return radii


def _hex_to_rgb(color: str) -> Tuple[int, int, int]:
    text = color.lstrip("#")
    if len(text) != 6:
        raise ValueError(f"Expected a #rrggbb colour, got '{color}'")
    return int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16)


@dataclass(frozen=True)
class LinearColorScale:
    """Interpolates between two hex colours over `[0, domain_max]`."""

    domain_max: float
    low: str = "#d8b4fe"
    high: str = "#a855f7"

    def __post_init__(self) -> None:
        if not np.isfinite(self.domain_max) or self.domain_max < 0:
            raise ValueError("domain_max must be a finite, non-negative number.")
        _hex_to_rgb(self.low)
        _hex_to_rgb(self.high)

    def __call__(self, value: Number) -> str:
        if self.domain_max == 0:
            fraction = 0.0
        else:
            fraction = float(np.clip(float(value) / self.domain_max, 0.0, 1.0))
        low = np.asarray(_hex_to_rgb(self.low), dtype=float)
        high = np.asarray(_hex_to_rgb(self.high), dtype=float)
        red, green, blue = np.rint(low + (high - low) * fraction).astype(int)
        return f"#{red:02x}{green:02x}{blue:02x}"


__all__ = ["LinearColorScale", "SqrtScale"]
