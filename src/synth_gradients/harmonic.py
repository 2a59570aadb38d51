# harmonic.py – seeded procedural gradient around a base hue

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Callable, Literal, Mapping, Sequence

from coloraide import Color

from .ranges import (
    Range,
    RangeInput,
    clamp,
    normalize_hue,
    normalize_range,
)
from .rng import RandomFn, create_random

log = logging.getLogger(__name__)

Hex = str
Hue = float
GradientMode = Literal["center-bright", "side-bright"]
HueScheme = Literal["mono", "dual-complementary"]

DEFAULT_HUE_SPREAD = 30.0
MAX_HUE_SPREAD = 90.0  # wider bands turn into rainbows
DEFAULT_LIGHTNESS_RANGE = Range(18.0, 58.0)
DEFAULT_CHROMA_RANGE = Range(40.0, 80.0)
DEFAULT_STOPS = 5
DEFAULT_VARIANCE = 0.7

CONTRAST_STEPS = 16
WARM_ANCHOR_HUE = 50.0


@dataclass(frozen=True)
class HSL:
    h: float  # 0–360
    s: float  # 0–100
    l: float  # 0–100


@dataclass(frozen=True)
class GradientStop:
    """One colour anchored at `at` (0–1, or 0–100 for percent-scale stops)."""

    color: Hex
    at: float
    hsl: HSL | None = None
    opacity: float | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"color": self.color, "at": self.at}
        if self.hsl is not None:
            out["hsl"] = asdict(self.hsl)
        if self.opacity is not None:
            out["opacity"] = self.opacity
        return out


@dataclass(frozen=True)
class ContrastTarget:
    against: str  # foreground colour, any CSS colour coloraide parses
    min_ratio: float  # e.g. 4.5 for WCAG AA body text


_CAMEL_KEYS = {
    "baseHue": "base_hue",
    "hueSpread": "hue_spread",
    "lightnessRange": "lightness_range",
    "chromaRange": "chroma_range",
    "stopCount": "stops",
    "perStopLightness": "per_stop_lightness",
    "perStopChroma": "per_stop_chroma",
    "hueScheme": "hue_scheme",
    "secondaryHue": "secondary_hue",
    "centerStretch": "center_stretch",
}


@dataclass(frozen=True)
class GradientConfig:
    """
    Declarative gradient input. Only `base_hue` is required; every other value
    is clamped or defaulted when the gradient is generated, never rejected.
    """

    base_hue: Hue
    hue_spread: float | None = None
    lightness_range: RangeInput = None
    chroma_range: RangeInput = None
    mode: GradientMode = "center-bright"
    stops: int | float | None = None
    seed: float | None = None
    contrast: ContrastTarget | None = None
    variance: float | None = None
    per_stop_lightness: Sequence[float | None] | None = None
    per_stop_chroma: Sequence[float | None] | None = None
    hue_scheme: HueScheme = "mono"
    secondary_hue: Hue | None = None
    zoom: float | None = None
    center_stretch: float | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GradientConfig":
        names = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _CAMEL_KEYS.get(key, key)
            if name not in names:
                continue
            if name == "contrast" and isinstance(value, Mapping):
                value = ContrastTarget(
                    against=value["against"],
                    min_ratio=float(value.get("minRatio", value.get("min_ratio", 0.0))),
                )
            kwargs[name] = value
        return cls(**kwargs)

    def replace(self, **overrides: Any) -> "GradientConfig":
        return replace(self, **overrides)


def _finite_or(value: object, default: float) -> float:
    if isinstance(value, (int, float)) and math.isfinite(value):
        return float(value)
    return default


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def _hue_circular_distance(a: Hue, b: Hue) -> float:
    diff = abs(a - b) % 360.0
    return 360.0 - diff if diff > 180.0 else diff


def _interpolate_hue(a: Hue, b: Hue, t: float) -> Hue:
    """Shortest path around the hue circle."""
    diff = ((b - a + 540.0) % 360.0) - 180.0
    return normalize_hue(a + diff * t)


def _is_prime(n: int) -> bool:
    if n <= 1:
        return False
    if n == 2:
        return True
    if n % 2 == 0:
        return False
    for i in range(3, math.isqrt(n) + 1, 2):
        if n % i == 0:
            return False
    return True


def warp_around_center(u: float, stretch: float) -> float:
    """
    Pull [0,1] positions toward 0.5 so the middle of the palette changes
    slowly and the edges quickly. Endpoints and the centre stay fixed.
    """
    u = clamp(u, 0.0, 1.0)
    s = clamp(stretch, 0.0, 1.0)
    if s == 0:
        return u
    x = u - 0.5
    if x == 0:
        return 0.5
    sign = -1.0 if x < 0 else 1.0
    distance = min(1.0, abs(x) * 2)
    warped = distance ** (1 + s * 3)
    return clamp(0.5 + sign * (warped / 2), 0.0, 1.0)


def hsl_to_hex(h: Hue, s: float, l: float) -> Hex:
    return (
        Color(f"hsl({h:.6f} {s:.6f}% {l:.6f}%)")
        .convert("srgb")
        .to_string(hex=True, fit="clip")
    )


def contrast_ratio(h: Hue, s: float, l: float, against: str) -> float:
    """WCAG 2.1 contrast; an unparseable `against` colour scores 0."""
    try:
        return float(Color(f"hsl({h:.6f} {s:.6f}% {l:.6f}%)").contrast(against))
    except ValueError:
        return 0.0


def adjust_lightness_for_contrast(
    h: Hue,
    s: float,
    initial_l: float,
    band: Range,
    contrast: ContrastTarget | None,
    ratio_fn: Callable[[Hue, float, float, str], float] = contrast_ratio,
) -> float:
    """
    Nudge lightness until the stop reaches `contrast.min_ratio`, keeping hue
    and saturation. Picks the passing candidate closest to `initial_l`, else
    the best ratio the band can offer.
    """
    if contrast is None:
        return initial_l

    lo = clamp(band.min, 0.0, 100.0)
    hi = clamp(band.max, 0.0, 100.0)
    if lo >= hi:
        return clamp(initial_l, lo, hi)

    start = clamp(initial_l, lo, hi)
    best_l = start
    best_ratio = ratio_fn(h, s, start, contrast.against)
    if best_ratio >= contrast.min_ratio:
        return start

    passing_l: float | None = None
    passing_dist = math.inf
    for i in range(CONTRAST_STEPS + 1):
        cand = lo + (i / CONTRAST_STEPS) * (hi - lo)
        ratio = ratio_fn(h, s, cand, contrast.against)
        dist = abs(cand - start)
        if ratio >= contrast.min_ratio and dist < passing_dist:
            passing_dist = dist
            passing_l = cand
        if ratio > best_ratio:
            best_ratio = ratio
            best_l = cand

    if passing_l is not None:
        return passing_l
    log.debug(
        "contrast %.2f vs %s unreachable in L[%.1f, %.1f]; best %.2f",
        contrast.min_ratio,
        contrast.against,
        lo,
        hi,
        best_ratio,
    )
    return best_l


def _override(values: Sequence[float | None] | None, i: int) -> float | None:
    if values is None or i >= len(values):
        return None
    v = values[i]
    if isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v):
        return float(v)
    return None


@dataclass
class _Shape:
    """Per-call randomized shape parameters, drawn once before any stop."""

    warm_hue: Hue
    cool_hue: Hue
    bridge_hue: Hue
    secondary_hue: Hue
    edge_chroma: float
    center_chroma: float
    center_bright_gamma: float
    side_bright_gamma: float
    chroma_gamma: float


class HarmonicGradient:
    """Stateless generator; `generate` draws from its own RNG per call."""

    def __init__(self, config: GradientConfig):
        self.config = config

        self.base_hue = normalize_hue(_finite_or(config.base_hue, 0.0))
        self.hue_spread = clamp(
            _finite_or(config.hue_spread, DEFAULT_HUE_SPREAD), 0.0, MAX_HUE_SPREAD
        )
        self.lightness = normalize_range(
            config.lightness_range, DEFAULT_LIGHTNESS_RANGE, 0.0, 100.0
        )
        self.chroma = normalize_range(
            config.chroma_range, DEFAULT_CHROMA_RANGE, 0.0, 100.0
        )

        raw_stops = _finite_or(config.stops, DEFAULT_STOPS)
        self.stop_count = max(2, math.floor(raw_stops))
        if self.stop_count != raw_stops:
            log.debug("stop count %r resolved to %d", config.stops, self.stop_count)

        self.variance = clamp(_finite_or(config.variance, DEFAULT_VARIANCE), 0.0, 1.0)
        self.zoom = clamp(_finite_or(config.zoom, 1.0), 0.0, 1.0)
        self.center_stretch = clamp(_finite_or(config.center_stretch, 0.0), 0.0, 1.0)
        self.mode: GradientMode = (
            "side-bright" if config.mode == "side-bright" else "center-bright"
        )
        self.hue_scheme: HueScheme = (
            "dual-complementary"
            if config.hue_scheme == "dual-complementary"
            else "mono"
        )

    # ---- public ----

    def generate(self) -> list[GradientStop]:
        rng = create_random(self.config.seed)
        shape = self._draw_shape(rng)

        n = self.stop_count
        hues = [0.0] * n
        sats = [0.0] * n
        lights = [0.0] * n

        mirror = n >= 3 and _is_prime(n) and self.hue_scheme == "mono"
        center_int = (n - 1) // 2
        unique = center_int + 1 if mirror else n

        for i in range(unique):
            hues[i], sats[i], lights[i] = self._stop_hsl(i, shape, rng)

        if mirror:
            for i in range(center_int + 1, n):
                j = n - 1 - i
                hues[i], sats[i], lights[i] = hues[j], sats[j], lights[j]

        cfg = self.config
        out: list[GradientStop] = []
        for i in range(n):
            h, s, l = hues[i], sats[i], lights[i]
            if (oc := _override(cfg.per_stop_chroma, i)) is not None:
                s = clamp(oc, self.chroma.min, self.chroma.max)
            if (ol := _override(cfg.per_stop_lightness, i)) is not None:
                l = clamp(ol, self.lightness.min, self.lightness.max)

            l = adjust_lightness_for_contrast(h, s, l, self.lightness, cfg.contrast)
            at = i / (n - 1)
            out.append(GradientStop(color=hsl_to_hex(h, s, l), at=at, hsl=HSL(h, s, l)))
        return out

    # ---- internals ----

    def _draw_shape(self, rng: RandomFn) -> _Shape:
        v = self.variance
        warm_anchor = normalize_hue(WARM_ANCHOR_HUE + (rng() - 0.5) * 40.0 * v)

        raw_min = normalize_hue(self.base_hue - self.hue_spread / 2)
        raw_max = normalize_hue(self.base_hue + self.hue_spread / 2)
        min_is_warm = _hue_circular_distance(raw_min, warm_anchor) < _hue_circular_distance(
            raw_max, warm_anchor
        )
        warm_hue, cool_hue = (raw_min, raw_max) if min_is_warm else (raw_max, raw_min)

        secondary = normalize_hue(_finite_or(self.config.secondary_hue, self.base_hue + 180.0))
        diff = ((secondary - self.base_hue + 540.0) % 360.0) - 180.0
        bridge = normalize_hue(self.base_hue + diff * 0.5)

        band = self.chroma
        edge_offset = (rng() - 0.5) * band.span * 0.1 * v
        center_offset = (rng() - 0.5) * band.span * 0.15 * v
        edge_chroma = clamp(band.max - band.span * 0.05 + edge_offset, band.min, band.max)
        center_chroma = clamp(band.min + band.span * 0.5 + center_offset, band.min, band.max)

        return _Shape(
            warm_hue=warm_hue,
            cool_hue=cool_hue,
            bridge_hue=bridge,
            secondary_hue=secondary,
            edge_chroma=edge_chroma,
            center_chroma=center_chroma,
            center_bright_gamma=_lerp(1.2, 1.8, v * rng()),
            side_bright_gamma=_lerp(1.0, 1.6, v * rng()),
            chroma_gamma=_lerp(0.6, 1.1, v * rng()),
        )

    def _color_position(self, t: float) -> float:
        if self.center_stretch > 0:
            return warp_around_center(t, self.center_stretch)
        return clamp(0.5 + (t - 0.5) * self.zoom, 0.0, 1.0)

    def _stop_hsl(self, i: int, shape: _Shape, rng: RandomFn) -> tuple[float, float, float]:
        v = self.variance
        t = i / (self.stop_count - 1)
        p = self._color_position(t)
        d = min(1.0, abs(p - 0.5) * 2) * self.zoom

        hue_jitter = self.hue_spread * 0.18 * v
        if self.hue_scheme == "dual-complementary":
            if p <= 0.5:
                h = _interpolate_hue(self.base_hue, shape.bridge_hue, p / 0.5)
            else:
                h = _interpolate_hue(shape.bridge_hue, shape.secondary_hue, (p - 0.5) / 0.5)
            h = normalize_hue(h + (rng() - 0.5) * hue_jitter)
        else:
            warm_factor = 1 - d**1.2
            h = normalize_hue(
                shape.cool_hue
                + (shape.warm_hue - shape.cool_hue) * warm_factor
                + (rng() - 0.5) * hue_jitter
            )

        band_l = self.lightness
        if self.mode == "side-bright":
            brightness = d**shape.side_bright_gamma
        else:
            brightness = 1 - d**shape.center_bright_gamma
        l_jitter = band_l.span * 0.08 * v * (rng() - 0.5)
        l = clamp(band_l.min + brightness * band_l.span + l_jitter, band_l.min, band_l.max)

        band_c = self.chroma
        c_factor = d**shape.chroma_gamma
        c_jitter = band_c.span * 0.12 * v * (rng() - 0.5)
        s = clamp(
            shape.center_chroma + c_factor * (shape.edge_chroma - shape.center_chroma) + c_jitter,
            band_c.min,
            band_c.max,
        )
        return h, s, l


def generate_harmonic_gradient(
    config: GradientConfig | Mapping[str, Any],
) -> list[GradientStop]:
    if not isinstance(config, GradientConfig):
        config = GradientConfig.from_mapping(config)
    return HarmonicGradient(config).generate()


def harmonic_gradient(base_hue: Hue, **options: Any) -> list[GradientStop]:
    return generate_harmonic_gradient(GradientConfig(base_hue=base_hue, **options))


__all__ = [
    "ContrastTarget",
    "GradientConfig",
    "GradientMode",
    "GradientStop",
    "HSL",
    "HarmonicGradient",
    "HueScheme",
    "adjust_lightness_for_contrast",
    "contrast_ratio",
    "generate_harmonic_gradient",
    "harmonic_gradient",
    "hsl_to_hex",
    "warp_around_center",
]
