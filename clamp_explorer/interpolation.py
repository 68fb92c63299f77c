"""Fluid value computation.

All internal math happens in pixel space: sizes are converted to px on the
way in and back to the output unit on the way out. Boundary widths return
the configured sizes untouched so there is no floating-point drift at the
ends of the fluid range.
"""

from __future__ import annotations

from typing import Iterator, List, Tuple

from . import config
from .easing import ease
from .models import BreakpointStatus, CurveSample, FluidLine, ScalingConfig


def generate_x_samples(x_min: float, x_max: float, count: int) -> List[float]:
    if count < 2:
        return [x_min]
    step = (x_max - x_min) / (count - 1)
    return [x_min + i * step for i in range(count)]


def fluid_line(cfg: ScalingConfig) -> FluidLine:
    min_px = cfg.to_px(cfg.min_size)
    max_px = cfg.to_px(cfg.max_size)
    slope = (max_px - min_px) / (cfg.max_screen_width - cfg.min_screen_width)
    intercept = min_px - slope * cfg.min_screen_width
    return FluidLine(slope=slope, intercept=intercept)


def status_at(cfg: ScalingConfig, width: float) -> BreakpointStatus:
    if width <= cfg.min_screen_width:
        return BreakpointStatus.MIN
    if width >= cfg.max_screen_width:
        return BreakpointStatus.MAX
    return BreakpointStatus.FLUID


def progress_at(cfg: ScalingConfig, width: float) -> float:
    span = cfg.max_screen_width - cfg.min_screen_width
    t = (width - cfg.min_screen_width) / span
    return max(0.0, min(1.0, t))


def evaluate(cfg: ScalingConfig, width: float) -> Tuple[float, BreakpointStatus]:
    """Value (in ``cfg.output_unit``) and status at ``width`` px."""
    status = status_at(cfg, width)
    if status is BreakpointStatus.MIN:
        return cfg.min_size, status
    if status is BreakpointStatus.MAX:
        return cfg.max_size, status
    min_px = cfg.to_px(cfg.min_size)
    max_px = cfg.to_px(cfg.max_size)
    eased = ease(progress_at(cfg, width), cfg.scaling_function, cfg.custom_bezier)
    return cfg.from_px(min_px + (max_px - min_px) * eased), status


def compute_value(cfg: ScalingConfig, width: float) -> float:
    return evaluate(cfg, width)[0]


def sample_curve(
    cfg: ScalingConfig,
    count: int = config.CHART_NUM_SAMPLES,
    padding: float = config.CHART_PADDING_PX,
) -> Iterator[CurveSample]:
    """Dense samples across a padded range around the fluid range, for charting."""
    start = max(0.0, cfg.min_screen_width - padding)
    stop = cfg.max_screen_width + padding
    for width in generate_x_samples(start, stop, count):
        value, status = evaluate(cfg, width)
        yield CurveSample(screen_width=width, value=value, status=status)
