"""Plain-language summaries for the live preview."""

from __future__ import annotations

from .emitter import format_number
from .interpolation import evaluate
from .models import BreakpointStatus, ScalingConfig, ScalingFunction

_CURVE_WORDS = {
    ScalingFunction.LINEAR: "at a steady rate",
    ScalingFunction.EASE_IN: "slowly at first, then faster",
    ScalingFunction.EASE_OUT: "quickly at first, then levelling off",
    ScalingFunction.EASE_IN_OUT: "slowly at both ends and fastest in the middle",
    ScalingFunction.CUSTOM: "along a custom cubic-bezier curve",
}


def describe_config(cfg: ScalingConfig) -> str:
    unit = cfg.unit
    return (
        f"Grows from {format_number(cfg.min_size)}{unit} at {cfg.min_screen_width}px "
        f"to {format_number(cfg.max_size)}{unit} at {cfg.max_screen_width}px, "
        f"{_CURVE_WORDS[cfg.scaling_function]}."
    )


def describe_width(cfg: ScalingConfig, width: float) -> str:
    value, status = evaluate(cfg, width)
    shown = f"{format_number(value)}{cfg.unit}"
    if cfg.unit == "rem":
        shown += f" ({format_number(cfg.to_px(value))}px)"
    if status is BreakpointStatus.MIN:
        return f"At {width:.0f}px the value is held at the minimum, {shown}."
    if status is BreakpointStatus.MAX:
        return f"At {width:.0f}px the value is held at the maximum, {shown}."
    return f"At {width:.0f}px the value is fluid: {shown}."
