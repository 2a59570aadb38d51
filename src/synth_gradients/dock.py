# dock.py – arc placement and proximity weighting for the card dock
#
# Every function recomputes from (index, active index, count) plus a static
# config; nothing here holds state between frames.

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from .ranges import clamp01

GOLDEN_RATIO_WEIGHT = 0.6180469716
NAV_ANCHOR_BASE_Y = 50.0
ACTIVE_TITLE_SCALE = 1.2


def clamp_percent(v: float) -> float:
    return max(0.0, min(100.0, v))


@dataclass(frozen=True)
class DockArcConfig:
    peak_x: float = 40.0
    arc_lift: float = 20.0
    hue_amplitude: float = 40.0
    angle_amplitude: float = 40.0
    anchor_base_y: float = NAV_ANCHOR_BASE_Y


@dataclass(frozen=True)
class DockMathConfig:
    active_pct: float = 38.19530284
    closest_title_opacity: float = 0.5
    far_title_opacity: float = 0.2
    sigma_title_opacity: float = 1.2
    title_opacity_gamma: float = 1.4
    influence_radius: float | None = None
    closest_title_scale: float = 1.0
    far_title_scale: float = 0.82
    sigma_title_scale: float = 1.25
    title_scale_gamma: float = 1.4
    title_scale_influence_radius: float | None = None
    # timing hints, passed through to the renderer untouched
    transition_ms: int = 700
    transition_delay_ms: int = 0
    transition_easing: str = "cubic-bezier(0.22, 1, 0.36, 1)"
    title_scale_transition_ms: int = 350
    title_scale_transition_delay_ms: int = 50
    title_scale_easing: str = "cubic-bezier(0.22, 1, 0.36, 1)"


DEFAULT_DOCK_CONFIG = DockMathConfig()
DEFAULT_ARC_CONFIG = DockArcConfig()


class ArcRow(NamedTuple):
    anchor_x_percent: float
    anchor_y_percent: float
    row_hue: float
    row_angle: float
    u: float


def compute_arc_row(
    index: int,
    center: float,
    last: float,
    base_hue: float,
    angle_deg: float,
    config: DockArcConfig = DEFAULT_ARC_CONFIG,
) -> ArcRow:
    """
    Place a row on a half-sine arc around `center`: u = 1 on the centre row,
    0 at the far ends. Anchor, hue and angle offsets all scale with u.
    """
    t_shift = 0.5 + (index - center) / max(1.0, last)
    u = math.sin(math.pi * clamp01(t_shift))
    return ArcRow(
        anchor_x_percent=clamp_percent(u * config.peak_x),
        anchor_y_percent=clamp_percent(config.anchor_base_y - u * config.arc_lift),
        row_hue=base_hue + u * config.hue_amplitude,
        row_angle=angle_deg + u * config.angle_amplitude,
        u=u,
    )


def _golden_shares(n: int, active: int, remaining: float) -> np.ndarray:
    """Split `remaining` over the n-1 inactive rows, golden-ratio decay by distance."""
    distance = np.abs(np.arange(n) - active)
    weights = GOLDEN_RATIO_WEIGHT ** np.maximum(0, distance - 1).astype(float)
    weights[active] = 0.0
    total = weights.sum()
    if total == 0:
        return np.zeros(n)
    return remaining * weights / total


def compute_heights(
    count: int,
    active_index: int | None,
    nav_mode: bool,
    active_pct: float,
) -> list[float]:
    """
    Percent height per row, summing to 100. The active row takes `active_pct`;
    its two neighbours get full weight in the remainder and rows further out
    decay by φ per step. In nav mode row 0 is a pinned bar sized elsewhere
    and gets 0.
    """
    if count <= 0:
        return []

    if nav_mode:
        rest = count - 1
        if rest <= 0:
            return [100.0]
        if active_index is None:
            return [0.0] + [100.0 / rest] * rest
        local_active = max(0, active_index - 1)
        if rest - 1 <= 0:
            return [0.0] + [100.0] * rest
        shares = _golden_shares(rest, local_active, 100.0 - active_pct)
        shares[local_active] = active_pct
        return [0.0] + shares.tolist()

    if active_index is None:
        return [100.0 / count] * count
    if count - 1 <= 0:
        return [100.0]

    shares = _golden_shares(count, active_index, 100.0 - active_pct)
    shares[active_index] = active_pct
    return shares.tolist()


def compute_weight(distance: float, sigma: float, influence_radius: float | None) -> float:
    if influence_radius is not None and distance > influence_radius:
        return 0.0
    s = max(1e-6, sigma)
    return math.exp(-(distance * distance) / (2 * s * s))


def _falloff(
    index: int,
    active_index: int | None,
    sigma: float,
    radius: float | None,
    gamma: float,
    closest: float,
    far: float,
) -> float:
    if active_index is None or index == active_index:
        return 1.0
    weight = compute_weight(abs(index - active_index), sigma, radius)
    w1 = compute_weight(1, sigma, radius)
    normalized = clamp01(weight / w1) if w1 > 0 else 0.0
    return far + (closest - far) * normalized**gamma


def compute_title_opacity(
    index: int, active_index: int | None, config: DockMathConfig = DEFAULT_DOCK_CONFIG
) -> float:
    return _falloff(
        index,
        active_index,
        config.sigma_title_opacity,
        config.influence_radius,
        config.title_opacity_gamma,
        config.closest_title_opacity,
        config.far_title_opacity,
    )


def compute_title_scale(
    index: int, active_index: int | None, config: DockMathConfig = DEFAULT_DOCK_CONFIG
) -> float:
    return _falloff(
        index,
        active_index,
        config.sigma_title_scale,
        config.title_scale_influence_radius,
        config.title_scale_gamma,
        config.closest_title_scale,
        config.far_title_scale,
    )


@dataclass(frozen=True)
class DockRow:
    index: int
    active: bool
    height_pct: float
    arc: ArcRow
    title_opacity: float
    title_scale: float


def dock_layout(
    count: int,
    active_index: int | None,
    *,
    base_hue: float,
    angle_deg: float = 9.0,
    last_active_index: int | None = None,
    arc: DockArcConfig = DEFAULT_ARC_CONFIG,
    config: DockMathConfig = DEFAULT_DOCK_CONFIG,
) -> list[DockRow]:
    """
    Per-row visual parameters for a dock of `count` cards. Any active row
    other than the first switches to nav mode. With nothing active the arc
    stays centred on the last active row, or the middle of the dock.
    """
    nav_mode = active_index != 0
    heights = compute_heights(count, active_index, nav_mode, config.active_pct)

    if active_index is not None:
        center = float(active_index)
    elif last_active_index is not None:
        center = float(last_active_index)
    else:
        center = (count - 1) / 2
    last = max(1, count - 1)

    span = max(1e-6, config.closest_title_scale - config.far_title_scale)
    rows: list[DockRow] = []
    for i in range(count):
        dock_scale = compute_title_scale(i, active_index, config)
        proximity = 0.0 if active_index is None else clamp01((dock_scale - config.far_title_scale) / span)
        rows.append(
            DockRow(
                index=i,
                active=i == active_index,
                height_pct=heights[i],
                arc=compute_arc_row(i, center, last, base_hue, angle_deg, arc),
                title_opacity=compute_title_opacity(i, active_index, config),
                title_scale=1 + proximity * (ACTIVE_TITLE_SCALE - 1),
            )
        )
    return rows


__all__ = [
    "ArcRow",
    "DEFAULT_ARC_CONFIG",
    "DEFAULT_DOCK_CONFIG",
    "DockArcConfig",
    "DockMathConfig",
    "DockRow",
    "GOLDEN_RATIO_WEIGHT",
    "compute_arc_row",
    "compute_heights",
    "compute_title_opacity",
    "compute_title_scale",
    "compute_weight",
    "dock_layout",
]
