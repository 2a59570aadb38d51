# svg.py – <linearGradient>/<radialGradient> geometry in viewBox units

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal, NamedTuple, Sequence
from xml.sax.saxutils import quoteattr

from .css import fmt_number
from .harmonic import GradientStop
from .stops import normalize_color

Pivot = Literal["left-center", "right-center", "center"]
SvgGradientKind = Literal["linear", "radial"]


class RadialParams(NamedTuple):
    cx: float
    cy: float
    r: float


class LinearEndpoints(NamedTuple):
    x1: float
    y1: float
    x2: float
    y2: float


def resolve_anchor(
    width: float,
    height: float,
    pivot: str | None = None,
    anchor_x_percent: float | None = None,
    anchor_y_percent: float | None = None,
) -> tuple[float, float]:
    """
    Anchor point in user space. Percentages win per axis; they are floored at
    0 but may exceed 100 to push the anchor off-canvas. Axes without a
    percentage fall back to the pivot keyword, then to the box centre.
    """
    x, y = width / 2, height / 2

    if anchor_x_percent is not None:
        x = max(0.0, anchor_x_percent / 100) * width
    if anchor_y_percent is not None:
        y = max(0.0, anchor_y_percent / 100) * height

    if pivot:
        if anchor_x_percent is None:
            if "left" in pivot:
                x = 0.0
            elif "right" in pivot:
                x = width
            elif "center" in pivot:
                x = width / 2
        if anchor_y_percent is None:
            if "top" in pivot:
                y = 0.0
            elif "bottom" in pivot:
                y = height
            elif "center" in pivot:
                y = height / 2

    return x, y


def compute_radial_gradient_params(
    width: float,
    height: float,
    pivot: str | None = None,
    anchor_x_percent: float | None = None,
    anchor_y_percent: float | None = None,
) -> RadialParams:
    cx, cy = resolve_anchor(width, height, pivot, anchor_x_percent, anchor_y_percent)
    return RadialParams(cx, cy, math.hypot(width, height) / 2)


def compute_linear_gradient_endpoints(
    width: float,
    height: float,
    angle_deg: float = 0.0,
    pivot: str | None = None,
    anchor_x_percent: float | None = None,
    anchor_y_percent: float | None = None,
) -> LinearEndpoints:
    """
    A line through the anchor at `angle_deg` (0° = left→right, y grows down),
    extended one full diagonal each way so any anchor still covers the box.
    """
    x0, y0 = resolve_anchor(width, height, pivot, anchor_x_percent, anchor_y_percent)

    rad = math.radians(angle_deg)
    dx, dy = math.cos(rad), math.sin(rad)
    length = math.hypot(dx, dy)
    if length < 1e-6:
        dx, dy = 1.0, 0.0
    else:
        dx, dy = dx / length, dy / length

    half = math.hypot(width, height)
    return LinearEndpoints(x0 - dx * half, y0 - dy * half, x0 + dx * half, y0 + dy * half)


def compute_gradient_endpoints(
    angle_deg: float,
    scale: float,
    pivot: Pivot,
    width: float,
    height: float,
    interactive: bool,
) -> LinearEndpoints:
    """
    Logo gradient line. Static logos run from the origin along the angle;
    interactive ones take a `scale`× diagonal pinned at the pivot.
    """
    rad = math.radians(angle_deg)
    cos, sin = math.cos(rad), math.sin(rad)

    if not interactive:
        return LinearEndpoints(0.0, 0.0, width * cos, height * sin)

    length = max(0.0, scale) * math.hypot(width, height)
    cy = height / 2

    if pivot == "center":
        cx = width / 2
        return LinearEndpoints(
            cx - length / 2 * cos,
            cy - length / 2 * sin,
            cx + length / 2 * cos,
            cy + length / 2 * sin,
        )
    if pivot == "right-center":
        return LinearEndpoints(width - length * cos, cy - length * sin, width, cy)
    return LinearEndpoints(0.0, cy, length * cos, length * sin + cy)


@dataclass(frozen=True)
class SvgGradientDef:
    id: str
    width: float
    height: float
    stops: Sequence[GradientStop]
    kind: SvgGradientKind = "linear"
    angle_deg: float = 0.0
    pivot: Pivot | None = "left-center"
    anchor_x_percent: float | None = None
    anchor_y_percent: float | None = None

    def geometry(self) -> RadialParams | LinearEndpoints:
        if self.kind == "radial":
            return compute_radial_gradient_params(
                self.width, self.height, self.pivot, self.anchor_x_percent, self.anchor_y_percent
            )
        return compute_linear_gradient_endpoints(
            self.width,
            self.height,
            self.angle_deg,
            self.pivot,
            self.anchor_x_percent,
            self.anchor_y_percent,
        )

    def render(self) -> str:
        tag = "radialGradient" if self.kind == "radial" else "linearGradient"
        attrs = " ".join(
            f'{k}="{fmt_number(float(v))}"' for k, v in self.geometry()._asdict().items()
        )
        # stop offsets are percentages; callers pass stops scaled to 0–100
        stops = "".join(
            f'<stop offset="{fmt_number(s.at)}%" stop-color={quoteattr(normalize_color(s.color))}'
            f' stop-opacity="{fmt_number(1.0 if s.opacity is None else s.opacity)}"/>'
            for s in self.stops
        )
        return (
            f'<{tag} id={quoteattr(self.id)} {attrs} gradientUnits="userSpaceOnUse">'
            f"{stops}</{tag}>"
        )


def render_svg_gradient(
    id: str,
    width: float,
    height: float,
    stops: Sequence[GradientStop],
    **options,
) -> str:
    return SvgGradientDef(id=id, width=width, height=height, stops=stops, **options).render()


__all__ = [
    "LinearEndpoints",
    "Pivot",
    "RadialParams",
    "SvgGradientDef",
    "compute_gradient_endpoints",
    "compute_linear_gradient_endpoints",
    "compute_radial_gradient_params",
    "render_svg_gradient",
    "resolve_anchor",
]
