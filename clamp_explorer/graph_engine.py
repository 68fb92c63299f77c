from __future__ import annotations

from typing import Dict, List, Optional, Sequence

import plotly.graph_objects as go

from . import config
from .interpolation import compute_value, sample_curve
from .models import BreakpointResult, BreakpointStatus, CurveSample, ScalingConfig

_STATUS_LABELS = {
    BreakpointStatus.MIN: "Min (clamped)",
    BreakpointStatus.FLUID: "Fluid",
    BreakpointStatus.MAX: "Max (clamped)",
}


def split_by_status(samples: Sequence[CurveSample]) -> Dict[BreakpointStatus, List[CurveSample]]:
    """Group samples per status; each group is contiguous since the curve is monotonic."""
    groups: Dict[BreakpointStatus, List[CurveSample]] = {status: [] for status in BreakpointStatus}
    for sample in samples:
        groups[sample.status].append(sample)
    return groups


def curve_traces(cfg: ScalingConfig, samples: Sequence[CurveSample]) -> List[go.Scatter]:
    groups = split_by_status(samples)
    # Clamped plateaus meet the fluid segment at the boundary points.
    if groups[BreakpointStatus.MIN]:
        groups[BreakpointStatus.FLUID].insert(
            0, CurveSample(cfg.min_screen_width, cfg.min_size, BreakpointStatus.FLUID)
        )
    if groups[BreakpointStatus.MAX]:
        groups[BreakpointStatus.FLUID].append(
            CurveSample(cfg.max_screen_width, cfg.max_size, BreakpointStatus.FLUID)
        )
    traces: List[go.Scatter] = []
    for status in (BreakpointStatus.MIN, BreakpointStatus.FLUID, BreakpointStatus.MAX):
        points = groups[status]
        if status is BreakpointStatus.FLUID:
            line = dict(config.CURVE_LINE_STYLE)
        else:
            line = dict(config.CLAMPED_LINE_STYLE, color=config.FIGURE_COLORS[status.value])
        traces.append(
            go.Scatter(
                x=[p.screen_width for p in points],
                y=[p.value for p in points],
                mode="lines",
                name=_STATUS_LABELS[status],
                line=line,
                hovertemplate=f"%{{x:.0f}}px<br>%{{y:.3f}}{cfg.unit}<extra></extra>",
            )
        )
    return traces


def boundary_trace(cfg: ScalingConfig) -> go.Scatter:
    return go.Scatter(
        x=[cfg.min_screen_width, cfg.max_screen_width],
        y=[cfg.min_size, cfg.max_size],
        mode="markers",
        name="Boundaries",
        marker=dict(
            config.BOUNDARY_MARKER_STYLE,
            color=[config.FIGURE_COLORS["min"], config.FIGURE_COLORS["max"]],
        ),
        text=[f"Min: {cfg.min_screen_width}px", f"Max: {cfg.max_screen_width}px"],
        hovertemplate="%{text}<br>%{y}" + cfg.unit + "<extra></extra>",
        showlegend=False,
    )


def breakpoint_trace(table: Sequence[BreakpointResult]) -> go.Scatter:
    return go.Scatter(
        x=[row.breakpoint.width for row in table],
        y=[float(row.computed_value) for row in table],
        mode="markers",
        name="Breakpoints",
        marker=dict(config.BREAKPOINT_MARKER_STYLE),
        text=[f"{row.breakpoint.name} ({row.breakpoint.device})" for row in table],
        customdata=[f"{row.computed_value}{row.unit}" for row in table],
        hovertemplate="%{text}<br>%{x}px: %{customdata}<extra></extra>",
    )


def preview_shape(width: float) -> Dict[str, object]:
    return dict(
        type="line",
        x0=width,
        x1=width,
        yref="paper",
        y0=0,
        y1=1,
        line=dict(color=config.FIGURE_COLORS["boundary"], width=1, dash="dash"),
    )


def build_figure(
    cfg: ScalingConfig,
    table: Sequence[BreakpointResult] = (),
    *,
    uirevision: str = "clamp",
    preview_width: Optional[float] = None,
) -> go.Figure:
    samples = list(sample_curve(cfg))
    fig = go.Figure(
        data=[
            *curve_traces(cfg, samples),
            boundary_trace(cfg),
            breakpoint_trace(table),
        ]
    )
    shapes = []
    if preview_width is not None:
        shapes.append(preview_shape(preview_width))
        fig.add_annotation(
            x=preview_width,
            y=compute_value(cfg, preview_width),
            text=f"{preview_width:.0f}px",
            showarrow=True,
            arrowhead=2,
        )
    fig.update_layout(
        height=420,
        margin=dict(l=56, r=16, t=32, b=40),
        xaxis=dict(title="Screen width (px)", showgrid=True, gridcolor=config.AXIS_LINE_STYLE["gridcolor"]),
        yaxis=dict(title=f"Value ({cfg.unit})", showgrid=True, gridcolor=config.AXIS_LINE_STYLE["gridcolor"]),
        legend=dict(orientation="h", y=-0.2),
        uirevision=uirevision,
        shapes=shapes,
    )
    return fig


def empty_figure(message: str = "Fix the highlighted fields to see the chart.") -> go.Figure:
    fig = go.Figure()
    fig.update_layout(
        height=420,
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        annotations=[dict(text=message, showarrow=False, xref="paper", yref="paper", x=0.5, y=0.5)],
    )
    return fig
