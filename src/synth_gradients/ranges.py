from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping, Union


@dataclass(frozen=True)
class Range:
    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min


# number → band centre; mapping / Range → partial or full bounds
RangeInput = Union[float, int, Mapping[str, float], Range, None]


def clamp(value: float, lo: float, hi: float) -> float:
    if math.isnan(value):
        return lo
    return min(hi, max(lo, value))


def clamp01(value: float) -> float:
    if math.isnan(value):
        return 0.0
    return 0.0 if value < 0 else 1.0 if value > 1 else value


def normalize_hue(h: float) -> float:
    if not math.isfinite(h):
        return 0.0
    h = h % 360.0
    # tiny negatives round up to exactly 360.0
    return 0.0 if h >= 360.0 else h


def _finite(v: object) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v)


def _bounds(value: Mapping[str, float] | Range) -> tuple[object, object]:
    if isinstance(value, Range):
        return value.min, value.max
    return value.get("min"), value.get("max")


def _widen_degenerate(lo: float, hi: float, a: float, b: float) -> tuple[float, float]:
    if hi != lo:
        return lo, hi
    delta = min(2.0, b - a)
    mid = clamp(lo, a, b)
    return clamp(mid - delta, a, b), clamp(mid + delta, a, b)


def normalize_range(
    value: RangeInput,
    fallback: Range,
    absolute_min: float,
    absolute_max: float,
) -> Range:
    """
    Resolve a flexible lightness/chroma input into a concrete band.

      None           → fallback, verbatim
      number         → band centred on it, fallback span wide
      {min} / {max}  → the other side derived with the fallback span
      {min, max}     → clamped, swapped when inverted

    A degenerate result (min == max) is widened so interpolation over the band
    never divides by zero.
    """
    fallback_span = fallback.max - fallback.min
    default_span = clamp(
        fallback_span if math.isfinite(fallback_span) and fallback_span > 0 else 10.0,
        1.0,
        absolute_max - absolute_min,
    )

    if value is None:
        return fallback

    if _finite(value):
        center = clamp(float(value), absolute_min, absolute_max)  # type: ignore[arg-type]
        half = default_span / 2
        lo = clamp(center - half, absolute_min, absolute_max)
        hi = clamp(center + half, absolute_min, absolute_max)
        if hi < lo:
            lo, hi = hi, lo
        lo, hi = _widen_degenerate(lo, hi, absolute_min, absolute_max)
        return Range(lo, hi)

    if not isinstance(value, (Mapping, Range)):
        return fallback

    raw_min, raw_max = _bounds(value)
    has_min, has_max = _finite(raw_min), _finite(raw_max)

    if not has_min and not has_max:
        return fallback

    if has_min and not has_max:
        lo = clamp(float(raw_min), absolute_min, absolute_max)  # type: ignore[arg-type]
        hi = clamp(lo + default_span, absolute_min, absolute_max)
    elif has_max and not has_min:
        hi = clamp(float(raw_max), absolute_min, absolute_max)  # type: ignore[arg-type]
        lo = clamp(hi - default_span, absolute_min, absolute_max)
    else:
        lo = clamp(float(raw_min), absolute_min, absolute_max)  # type: ignore[arg-type]
        hi = clamp(float(raw_max), absolute_min, absolute_max)  # type: ignore[arg-type]

    if hi < lo:
        lo, hi = hi, lo
    lo, hi = _widen_degenerate(lo, hi, absolute_min, absolute_max)
    return Range(lo, hi)


__all__ = [
    "Range",
    "RangeInput",
    "clamp",
    "clamp01",
    "normalize_hue",
    "normalize_range",
]
