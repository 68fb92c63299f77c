"""One-call entry point for the presentation layers."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Tuple, Union

from .breakpoints import build_table
from .emitter import emit, emit_eased_segments, emit_scss
from .interpolation import fluid_line
from .models import Breakpoint, ClampOutputs, ScalingConfig
from .validation import ValidationError, validate_config


def calculate_clamp(cfg: ScalingConfig, custom_breakpoints: Iterable[Breakpoint] = ()) -> ClampOutputs:
    code = emit(cfg, fluid_line(cfg))
    return ClampOutputs(
        css_clamp=code["css_clamp"],
        css_fallback=code["css_fallback"],
        css_custom_properties=code["css_custom_properties"],
        scss_function=emit_scss(cfg),
        css_eased=emit_eased_segments(cfg),
        breakpoint_table=build_table(cfg, custom_breakpoints),
    )


def calculate_from_form(
    raw: Union[Mapping[str, Any], ScalingConfig],
    custom_breakpoints: Iterable[Breakpoint] = (),
) -> Tuple[ClampOutputs, Dict[str, str]]:
    """Validate then calculate.

    Returns ``(outputs, errors)``; on invalid input the outputs are
    empty and ``errors`` maps each bad field to its message.
    """
    try:
        cfg = validate_config(raw)
    except ValidationError as exc:
        return ClampOutputs.empty(), exc.errors
    return calculate_clamp(cfg, custom_breakpoints), {}
