# presets.py – the synth theme's gradient settings

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from .harmonic import GradientConfig, GradientStop, generate_harmonic_gradient
from .ranges import Range

# variance and base hue are intentionally out of range; the generator clamps
# variance to 1 and wraps 575° to 215°
BASE_SYNTH_GRADIENT_CONFIG = GradientConfig(
    base_hue=575,
    hue_scheme="dual-complementary",
    lightness_range=Range(0.0, 22.0),
    chroma_range=Range(80.0, 100.0),
    mode="side-bright",
    stops=22,
    variance=100,
    center_stretch=0.3,
    seed=50,
)

SYNTH_LOGO_GRADIENT_OVERRIDES: Mapping[str, Any] = MappingProxyType(
    {"lightness_range": Range(80.0, 100.0)}
)

# positions run to 1000% so only the inner tenth of the ramp lands on the card
BACKGROUND_POSITION_SCALE = 1000


def build_synth_background_gradient(**overrides: Any) -> str:
    stops = generate_harmonic_gradient(BASE_SYNTH_GRADIENT_CONFIG.replace(**overrides))
    body = ", ".join(
        f"{s.color} {round(s.at * BACKGROUND_POSITION_SCALE)}%" for s in stops
    )
    return f"radial-gradient(circle at 0% 0%, {body})"


def build_synth_logo_stops(**overrides: Any) -> list[GradientStop]:
    """Logo stops on a 0–100 scale, ready for an SVG gradient definition."""
    config = BASE_SYNTH_GRADIENT_CONFIG.replace(
        **{**SYNTH_LOGO_GRADIENT_OVERRIDES, **overrides}
    )
    return [
        GradientStop(color=s.color, at=s.at * 100)
        for s in generate_harmonic_gradient(config)
    ]


__all__ = [
    "BASE_SYNTH_GRADIENT_CONFIG",
    "SYNTH_LOGO_GRADIENT_OVERRIDES",
    "build_synth_background_gradient",
    "build_synth_logo_stops",
]
