from __future__ import annotations

from .ranges import clamp01


def cubic_bezier_eval(x1: float, y1: float, x2: float, y2: float, x: float) -> float:
    """
    y for progress x on a CSS cubic-bezier(x1, y1, x2, y2) timing curve.
    Newton–Raphson first, a few bisection steps if it has not converged.
    """
    cx = 3 * x1
    bx = 3 * (x2 - x1) - cx
    ax = 1 - cx - bx
    cy = 3 * y1
    by = 3 * (y2 - y1) - cy
    ay = 1 - cy - by

    def sample_x(t: float) -> float:
        return ((ax * t + bx) * t + cx) * t

    def sample_y(t: float) -> float:
        return ((ay * t + by) * t + cy) * t

    def sample_dx(t: float) -> float:
        return (3 * ax * t + 2 * bx) * t + cx

    t = clamp01(x)
    for _ in range(5):
        err = sample_x(t) - x
        slope = sample_dx(t)
        if abs(err) < 1e-5 or abs(slope) < 1e-5:
            break
        t = clamp01(t - err / slope)

    lo, hi = 0.0, 1.0
    for _ in range(5):
        if abs(sample_x(t) - x) <= 1e-5:
            break
        if sample_x(t) > x:
            hi = t
        else:
            lo = t
        t = (lo + hi) / 2

    return sample_y(t)


def ease_out(x: float) -> float:
    return cubic_bezier_eval(0.33, 1, 0.68, 1, clamp01(x))


def ease_linear(x: float) -> float:
    return clamp01(x)


__all__ = ["cubic_bezier_eval", "ease_linear", "ease_out"]
