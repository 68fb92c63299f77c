"""Easing curves that remap interpolation progress.

Every curve maps ``t`` in [0, 1] onto [0, 1] with ``f(0) == 0`` and
``f(1) == 1``. Callers clamp ``t`` before calling; the boundary widths of a
fluid range never reach this module.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional, Sequence, Union

from . import config
from .models import Bezier, ScalingFunction


def linear(t: float) -> float:
    return t


def ease_in(t: float) -> float:
    """Smoothstep, ``t^2 (3 - 2t)``."""
    return t * t * (3 - 2 * t)


def ease_out(t: float) -> float:
    """Cubic ease-out."""
    return 1 - (1 - t) ** 3


def ease_in_out(t: float) -> float:
    """Piecewise cubic ease-in-out."""
    if t < 0.5:
        return 2 * t * t
    return 1 - ((-2 * t + 2) ** 3) / 2


def cubic_bezier_point(s: float, p1: float, p2: float) -> float:
    """Point on a 1D cubic Bezier with end points 0 and 1."""
    ms = 1 - s
    return 3 * ms * ms * s * p1 + 3 * ms * s * s * p2 + s * s * s


def cubic_bezier(t: float, x1: float, y1: float, x2: float, y2: float) -> float:
    """CSS ``cubic-bezier(x1, y1, x2, y2)`` evaluated at progress ``t``.

    x(s) is monotonic for x1, x2 in [0, 1], so the curve parameter is found
    by bisection and the y coordinate is returned.
    """
    if t <= 0:
        return 0.0
    if t >= 1:
        return 1.0
    low, high = 0.0, 1.0
    for _ in range(config.BEZIER_BISECTION_STEPS):
        mid = (low + high) / 2
        if cubic_bezier_point(mid, x1, x2) < t:
            low = mid
        else:
            high = mid
    return cubic_bezier_point((low + high) / 2, y1, y2)


EASING_FUNCTIONS: Dict[ScalingFunction, Callable[[float], float]] = {
    ScalingFunction.LINEAR: linear,
    ScalingFunction.EASE_IN: ease_in,
    ScalingFunction.EASE_OUT: ease_out,
    ScalingFunction.EASE_IN_OUT: ease_in_out,
}


def parse_bezier(raw: Union[str, Sequence[float], None]) -> Optional[Bezier]:
    """Parse ``"x1,y1,x2,y2"`` (or a 4-item sequence). Returns None when malformed."""
    if raw is None:
        return None
    parts = raw.split(",") if isinstance(raw, str) else list(raw)
    if len(parts) != 4:
        return None
    try:
        values = tuple(float(p) for p in parts)
    except (TypeError, ValueError):
        return None
    if any(v != v or v in (float("inf"), float("-inf")) for v in values):
        return None
    return values  # type: ignore[return-value]


def ease(
    t: float,
    function: Union[ScalingFunction, str] = ScalingFunction.LINEAR,
    bezier: Union[str, Sequence[float], None] = None,
) -> float:
    function = ScalingFunction(function)
    if function is ScalingFunction.CUSTOM:
        points = parse_bezier(bezier)
        if points is None:
            return t
        return cubic_bezier(t, *points)
    return EASING_FUNCTIONS[function](t)
