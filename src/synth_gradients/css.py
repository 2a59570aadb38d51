# css.py – stop lists → CSS gradient functions and background layout

from __future__ import annotations

import colorsys
import logging
import math
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal, Sequence

from coloraide import Color

from .harmonic import GradientStop
from .ranges import clamp
from .stops import normalize_color

log = logging.getLogger(__name__)

CssGradientKind = Literal["linear", "radial", "conic"]
RadialShape = Literal["circle", "ellipse"]
RadialExtent = Literal[
    "closest-side", "farthest-side", "closest-corner", "farthest-corner"
]

PERCENT_SCALE_THRESHOLD = 1.0001
DEFAULT_PIVOT_PERCENT = 50.0

_TRAILING_ZEROS = re.compile(r"\.?0+$")


def fmt_number(x: float) -> str:
    """Format like JS number→string: integral floats drop the '.0'."""
    if isinstance(x, float) and x.is_integer():
        return str(int(x))
    return repr(x) if isinstance(x, float) else str(x)


def _fmt_position(pos: float) -> str:
    # ties round up, as JS toFixed does
    fixed = Decimal(pos).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return _TRAILING_ZEROS.sub("", f"{fixed:f}") + "%"


def to_rgba_string(color: str, alpha: float) -> str:
    srgb = Color(normalize_color(color)).convert("srgb").fit(method="clip")
    r, g, b = (round(v * 255) for v in srgb.coords())
    return f"rgba({r}, {g}, {b}, {fmt_number(round(alpha, 3))})"


def _css_stop(stop: GradientStop, percent_scale: bool) -> str:
    position = stop.at if percent_scale else stop.at * 100
    color = stop.color
    if stop.opacity is not None and 0 <= stop.opacity < 1:
        color = to_rgba_string(stop.color, stop.opacity)
    clamped = max(0.0, min(100.0, position))
    if not math.isfinite(clamped):
        return color
    return f"{color} {_fmt_position(clamped)}"


def stops_to_css_gradient(
    kind: CssGradientKind,
    stops: Sequence[GradientStop],
    angle_deg: float | None = None,
    anchor_x_percent: float | None = None,
    anchor_y_percent: float | None = None,
    radial_shape: RadialShape | None = "circle",
    radial_extent: RadialExtent | None = None,
) -> str:
    """
    Build a CSS gradient function from stops with `at` in [0..1] or [0..100]:

      linear-gradient(45deg, #fff 0%, #000 100%)
      radial-gradient(circle at 50% 50%, #fff 0%, #000 100%)
      conic-gradient(from 90deg at 50% 50%, #fff 0%, #000 100%)

    An empty stop list gives "".
    """
    if not stops:
        return ""

    percent_scale = any(s.at > PERCENT_SCALE_THRESHOLD for s in stops)
    body = ", ".join(
        _css_stop(s, percent_scale) for s in sorted(stops, key=lambda s: s.at)
    )

    at_part = ""
    if anchor_x_percent is not None and anchor_y_percent is not None:
        at_part = f"at {fmt_number(anchor_x_percent)}% {fmt_number(anchor_y_percent)}%"

    if kind == "linear":
        angle = f"{fmt_number(angle_deg)}deg" if angle_deg is not None else "to right"
        return f"linear-gradient({angle}, {body})"

    if kind == "radial":
        shape_extent = " ".join(p for p in (radial_shape, radial_extent) if p)
        prefix = " ".join(p for p in (shape_extent, at_part) if p)
    else:
        from_part = f"from {fmt_number(angle_deg)}deg" if angle_deg is not None else ""
        prefix = " ".join(p for p in (from_part, at_part) if p)

    fn = f"{kind}-gradient"
    return f"{fn}({prefix}, {body})" if prefix else f"{fn}({body})"


# ---- background layout -----------------------------------------------------


def clamp_percent(value: float | None, fallback: float) -> float:
    if value is None or not math.isfinite(value):
        return fallback
    return max(0.0, min(100.0, value))


def resolve_scale(value: float | None) -> float:
    if value is None or not math.isfinite(value) or value <= 0:
        return 1.0
    return value


def compute_background_position(
    pivot_percent: float, placement_percent: float, scale: float
) -> str:
    """
    background-position that keeps `pivot` of a `scale`× oversized background
    on `placement` of the box. At scale 1 the usual formula divides by zero.
    """
    pivot = clamp_percent(pivot_percent, DEFAULT_PIVOT_PERCENT) / 100
    placement = clamp_percent(placement_percent, DEFAULT_PIVOT_PERCENT) / 100
    denom = 1 - scale
    if not math.isfinite(scale) or abs(denom) < 1e-6:
        return f"calc({fmt_number(placement * 100)}% - {fmt_number(pivot * 100)}%)"
    return f"{fmt_number((placement - pivot * scale) / denom * 100)}%"


@dataclass(frozen=True)
class BackgroundLayout:
    background_repeat: str = "no-repeat"
    background_size: str | None = None
    background_position: str | None = None

    def to_css(self) -> dict[str, str]:
        out = {"background-repeat": self.background_repeat}
        if self.background_size is not None:
            out["background-size"] = self.background_size
        if self.background_position is not None:
            out["background-position"] = self.background_position
        return out


def background_layout(
    anchor_x_percent: float | None = None,
    anchor_y_percent: float | None = None,
    scale: float | None = None,
    scale_x: float | None = None,
    scale_y: float | None = None,
) -> BackgroundLayout:
    """Size and position for a card background; the anchor doubles as placement."""
    has_anchor = anchor_x_percent is not None and anchor_y_percent is not None
    has_scale = scale is not None or scale_x is not None or scale_y is not None
    if not (has_anchor or has_scale):
        return BackgroundLayout()

    ax = clamp_percent(anchor_x_percent, DEFAULT_PIVOT_PERCENT) if has_anchor else DEFAULT_PIVOT_PERCENT
    ay = clamp_percent(anchor_y_percent, DEFAULT_PIVOT_PERCENT) if has_anchor else DEFAULT_PIVOT_PERCENT
    sx = resolve_scale(scale_x if scale_x is not None else scale)
    sy = resolve_scale(scale_y if scale_y is not None else scale)

    return BackgroundLayout(
        background_size=f"{fmt_number(sx * 100)}% {fmt_number(sy * 100)}%",
        background_position=(
            f"{compute_background_position(ax, ax, sx)} "
            f"{compute_background_position(ay, ay, sy)}"
        ),
    )


# ---- colour transforms over finished gradient strings ------------------------

AdjustableGradientKind = Literal["linear", "radial", "diamond"]

# diamond-gradient is not CSS; it is kept as an app-specific kind
_GRADIENT_FUNCTIONS: dict[str, AdjustableGradientKind] = {
    "linear-gradient": "linear",
    "radial-gradient": "radial",
    "diamond-gradient": "diamond",
}
_FUNCTION_FOR_KIND = {kind: fn for fn, kind in _GRADIENT_FUNCTIONS.items()}

# hex, rgb[a](), hsl[a]() or a bare word; words that are not colours pass through
_COLOR_TOKEN = re.compile(
    r"(#(?:[0-9a-fA-F]{3,8})\b|rgba?\([^)]*\)|hsla?\([^)]*\)|\b[a-zA-Z]+\b)"
)


def _parse_gradient_function(gradient: str) -> tuple[AdjustableGradientKind, str] | None:
    text = gradient.strip()
    open_at = text.find("(")
    close_at = text.rfind(")")
    if open_at == -1 or close_at == -1 or close_at <= open_at + 1:
        return None
    kind = _GRADIENT_FUNCTIONS.get(text[:open_at].strip().lower())
    if kind is None:
        return None
    return kind, text[open_at + 1 : close_at]


def _js_round(v: float) -> int:
    return math.floor(v + 0.5)


def adjust_color_lightness(color: str, delta: float) -> str:
    """
    Shift the HSL lightness of one CSS colour by `delta` (-1..1) and return it
    as ``rgb(...)``, or ``rgba(...)`` when the colour is translucent.

    Raises ValueError when `color` is not a colour.
    """
    c = Color(color)
    alpha = c.get("alpha")
    alpha = 1.0 if math.isnan(alpha) else alpha
    r, g, b = c.convert("srgb").fit(method="clip").coords()
    h, light, s = colorsys.rgb_to_hls(r, g, b)
    r, g, b = colorsys.hls_to_rgb(h, clamp(light + delta, 0.0, 1.0), s)
    r, g, b = (_js_round(v * 255) for v in (r, g, b))
    if alpha < 1:
        return f"rgba({r}, {g}, {b}, {fmt_number(round(alpha, 3))})"
    return f"rgb({r}, {g}, {b})"


def _adjust_colors(value: str, delta: float) -> str:
    def sub(match: re.Match[str]) -> str:
        token = match.group(0)
        try:
            return adjust_color_lightness(token, delta)
        except ValueError:
            return token

    return _COLOR_TOKEN.sub(sub, value)


def _adjust_css_gradient(
    gradient: str,
    delta: float,
    target_kind: AdjustableGradientKind | None,
) -> str:
    parsed = _parse_gradient_function(gradient)
    if parsed is None:
        log.warning("unable to parse gradient %r; returning it unchanged", gradient)
        return gradient
    kind, inner = parsed
    fn = _FUNCTION_FOR_KIND[target_kind or kind]
    return f"{fn}({_adjust_colors(inner, delta)})"


def lighten_css_gradient(
    gradient: str,
    amount: float,
    target_kind: AdjustableGradientKind | None = None,
) -> str:
    """
    Lighten every colour stop of a linear/radial/diamond gradient string.

    `amount` is clamped to 0..1 and added to each colour's HSL lightness.
    Passing `target_kind` rewrites the gradient function; the arguments are
    kept as they are. Strings that are not such a gradient come back unchanged.
    """
    return _adjust_css_gradient(gradient, clamp(amount, 0.0, 1.0), target_kind)


def darken_css_gradient(
    gradient: str,
    amount: float,
    target_kind: AdjustableGradientKind | None = None,
) -> str:
    """Mirror of `lighten_css_gradient` that lowers lightness instead."""
    return _adjust_css_gradient(gradient, -clamp(amount, 0.0, 1.0), target_kind)


__all__ = [
    "AdjustableGradientKind",
    "BackgroundLayout",
    "CssGradientKind",
    "adjust_color_lightness",
    "background_layout",
    "clamp_percent",
    "compute_background_position",
    "darken_css_gradient",
    "fmt_number",
    "lighten_css_gradient",
    "resolve_scale",
    "stops_to_css_gradient",
    "to_rgba_string",
]
