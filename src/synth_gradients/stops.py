from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from coloraide import Color

from .harmonic import GradientStop
from .ranges import clamp01

FIT_HEX = {"method": "raytrace"}  # consistent gamut-fit for hex output
MIX_SPACE = "lab"
WHITE = "#ffffff"


def normalize_color(c: str) -> str:
    """Trim and prefix '#' when missing."""
    c = c.strip()
    return c if c.startswith("#") else f"#{c}"


def mix_colors(a: str, b: str, t: float) -> str:
    """Perceptual A→B mix in CIE Lab, `t` in [0,1]."""
    return (
        Color(normalize_color(a))
        .mix(normalize_color(b), clamp01(t), space=MIX_SPACE, out_space="srgb")
        .to_string(hex=True, fit=FIT_HEX)
    )


def mix_stops_by_index(
    a: Sequence[GradientStop], b: Sequence[GradientStop], t: float
) -> list[GradientStop]:
    """
    Pairwise morph of two stop lists. Colours mix in Lab, opacity lerps,
    `at` comes from `a`. Surplus stops of the longer list are appended as-is.
    """
    n = min(len(a), len(b))
    tt = clamp01(t)
    out: list[GradientStop] = []
    for sa, sb in zip(a[:n], b[:n]):
        op_a = 1.0 if sa.opacity is None else sa.opacity
        op_b = 1.0 if sb.opacity is None else sb.opacity
        out.append(
            GradientStop(
                color=mix_colors(sa.color, sb.color, tt),
                at=sa.at,
                opacity=op_a + (op_b - op_a) * tt,
            )
        )
    out.extend(a[n:])
    out.extend(b[n:])
    return out


def _sorted(stops: Sequence[GradientStop]) -> list[GradientStop]:
    return sorted(stops, key=lambda s: s.at)


def compute_interactive_stops(
    base_stops: Sequence[GradientStop],
    progress: float,
    *,
    interactive: bool = False,
    stops_from: Sequence[GradientStop] | None = None,
    stops_to: Sequence[GradientStop] | None = None,
) -> list[GradientStop]:
    """Stops for the current frame, morphed by `progress` when interactive; sorted by `at`."""
    effective: Sequence[GradientStop] = base_stops
    if interactive and stops_from and stops_to:
        effective = mix_stops_by_index(_sorted(stops_from), _sorted(stops_to), progress)
    return _sorted(effective)


def compute_brightness_factor(
    base: float | None = None, boost: float | None = None, progress: float = 0.0
) -> float:
    return clamp01(clamp01(base or 0.0) + clamp01(boost or 0.0) * clamp01(progress))


def brighten_stops(
    stops: list[GradientStop], factor: float
) -> list[GradientStop]:
    if not stops:
        return stops
    f = clamp01(factor)
    if f <= 0:
        return stops
    return [replace(s, color=mix_colors(s.color, WHITE, f), hsl=None) for s in stops]


__all__ = [
    "brighten_stops",
    "compute_brightness_factor",
    "compute_interactive_stops",
    "mix_colors",
    "mix_stops_by_index",
    "normalize_color",
]
