"""CSS/SCSS text generation from computed fluid values."""

from __future__ import annotations

import re
from typing import Dict, List, Optional

from . import config
from .interpolation import compute_value
from .models import FluidLine, ScalingConfig, ScalingFunction

_PROPERTY_NAME_STRIP = re.compile(r"[^A-Za-z0-9-]")
_FALLBACK_SELECTOR = ".fluid-element"
_FALLBACK_PROPERTY = "font-size"


def format_number(value: float) -> str:
    """Round to 3 decimals and drop trailing zeros; tiny magnitudes print as ``0``.

    The breakpoint table and every emitted snippet go through this, so the
    numbers a user copies always match the numbers the table shows.
    """
    if abs(value) < config.FORMAT_ZERO_THRESHOLD:
        return "0"
    text = f"{value:.{config.NUMBER_PRECISION}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def sanitize_property_name(name: Optional[str]) -> str:
    cleaned = _PROPERTY_NAME_STRIP.sub("", name or "")
    return cleaned or config.DEFAULT_FORM_VALUES["custom_property_name"]


def _clamp_expression(
    cfg: ScalingConfig, min_value: float, max_value: float, line: FluidLine
) -> str:
    unit = cfg.unit
    slope_percent = format_number(line.slope * 100)
    intercept = format_number(cfg.from_px(line.intercept))
    fluid = f"calc({slope_percent}{cfg.fluid_unit} + {intercept}{unit})"
    return f"clamp({format_number(min_value)}{unit}, {fluid}, {format_number(max_value)}{unit})"


def emit_clamp(cfg: ScalingConfig, line: FluidLine) -> str:
    return _clamp_expression(cfg, cfg.min_size, cfg.max_size, line)


def emit_fallback(cfg: ScalingConfig) -> str:
    unit = cfg.unit
    min_formatted = f"{format_number(cfg.min_size)}{unit}"
    max_formatted = f"{format_number(cfg.max_size)}{unit}"
    return "\n".join(
        [
            "/* Fallback for browsers without clamp() support */",
            f"@supports not ({_FALLBACK_PROPERTY}: clamp(1px, 1{cfg.fluid_unit}, 2px)) {{",
            f"  @media (min-width: {cfg.min_screen_width}px) {{",
            f"    {_FALLBACK_SELECTOR} {{",
            f"      {_FALLBACK_PROPERTY}: {min_formatted};",
            "    }",
            "  }",
            "",
            f"  @media (min-width: {cfg.max_screen_width}px) {{",
            f"    {_FALLBACK_SELECTOR} {{",
            f"      {_FALLBACK_PROPERTY}: {max_formatted};",
            "    }",
            "  }",
            "}",
        ]
    )


def emit_custom_properties(cfg: ScalingConfig, css_clamp: str) -> str:
    name = sanitize_property_name(cfg.custom_property_name)
    return "\n".join(
        [
            ":root {",
            f"  --{name}: {css_clamp};",
            "}",
            "",
            f"/* Usage: {_FALLBACK_PROPERTY}: var(--{name}); */",
        ]
    )


def emit_scss(cfg: ScalingConfig) -> str:
    args = [
        format_number(cfg.min_size),
        format_number(cfg.max_size),
        str(cfg.min_screen_width),
        str(cfg.max_screen_width),
        f"'{cfg.unit}'",
    ]
    if cfg.unit == "rem":
        args.append(format_number(cfg.root_font_size))
    return "\n".join(
        [
            "// SCSS Function Usage",
            ".element {",
            f"  {_FALLBACK_PROPERTY}: fluid-clamp({', '.join(args)});",
            "}",
        ]
    )


def emit_eased_segments(cfg: ScalingConfig, segments: int = config.EASED_SEGMENTS) -> str:
    """Approximate an eased curve with one linear ``clamp()`` per width segment.

    Empty for linear scaling, where the single ``clamp()`` is already exact.
    """
    if cfg.scaling_function is ScalingFunction.LINEAR or segments < 1:
        return ""
    span = cfg.max_screen_width - cfg.min_screen_width
    edges = [cfg.min_screen_width + span * i / segments for i in range(segments + 1)]
    blocks: List[str] = [
        f"/* {cfg.scaling_function.value} approximated with {segments} linear segments */",
        f"{_FALLBACK_SELECTOR} {{",
        f"  {_FALLBACK_PROPERTY}: {format_number(cfg.min_size)}{cfg.unit};",
        "}",
    ]
    for start, stop in zip(edges, edges[1:]):
        low = compute_value(cfg, start)
        high = compute_value(cfg, stop)
        low_px, high_px = cfg.to_px(low), cfg.to_px(high)
        slope = (high_px - low_px) / (stop - start)
        segment = FluidLine(slope=slope, intercept=low_px - slope * start)
        blocks.extend(
            [
                "",
                f"@media (min-width: {format_number(start)}px) {{",
                f"  {_FALLBACK_SELECTOR} {{",
                f"    {_FALLBACK_PROPERTY}: {_clamp_expression(cfg, low, high, segment)};",
                "  }",
                "}",
            ]
        )
    return "\n".join(blocks)


def emit(cfg: ScalingConfig, line: FluidLine) -> Dict[str, str]:
    css_clamp = emit_clamp(cfg, line)
    return {
        "css_clamp": css_clamp,
        "css_fallback": emit_fallback(cfg) if cfg.include_fallback else "",
        "css_custom_properties": (
            emit_custom_properties(cfg, css_clamp) if cfg.generate_custom_properties else ""
        ),
    }

