"""Form validation for scaling configs and custom breakpoints.

Invalid input never reaches the engine: callers catch ``ValidationError``,
show ``errors`` next to the offending inputs and render empty outputs.
"""

from __future__ import annotations

import math
import re
from typing import Any, Dict, Mapping, Optional, Union

from . import config
from .easing import parse_bezier
from .models import OutputUnit, ScalingConfig, ScalingFunction

_PROPERTY_RE = re.compile(config.CUSTOM_PROPERTY_PATTERN)
_NAME_RE = re.compile(config.BREAKPOINT_NAME_PATTERN)
_DEVICE_RE = re.compile(config.BREAKPOINT_DEVICE_PATTERN)
_TRUE_STRINGS = {"1", "true", "yes", "on"}


class ValidationError(ValueError):
    """One or more form fields are invalid. ``errors`` maps field -> message."""

    def __init__(self, errors: Mapping[str, str]):
        self.errors: Dict[str, str] = dict(errors)
        summary = "; ".join(f"{k}: {v}" for k, v in self.errors.items())
        super().__init__(summary or "invalid input")


class ConfigInvariantViolation(ValidationError):
    """An ordering invariant between two fields does not hold (e.g. max <= min)."""


def coerce_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        num = float(value)
    except (TypeError, ValueError):
        return None
    return num if math.isfinite(num) else None


def coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    if isinstance(value, (list, tuple)):
        # dcc.Checklist yields a list of checked values
        return bool(value)
    return bool(value)


def _number_field(
    raw: Mapping[str, Any], name: str, errors: Dict[str, str], *, integer: bool = False
) -> Optional[float]:
    label = config.FIELD_LABELS[name]
    value = raw.get(name)
    if value is None or (isinstance(value, str) and not value.strip()):
        errors[name] = f"{label} is required"
        return None
    num = coerce_float(value)
    if num is None:
        errors[name] = "Please enter a valid number"
        return None
    if num <= 0:
        errors[name] = f"{label} must be positive"
        return None
    if integer and not num.is_integer():
        errors[name] = f"{label} must be a whole number"
        return None
    bounds = config.FIELD_BOUNDS[name]
    if num < bounds["min"]:
        errors[name] = f"{label} should be at least {bounds['min']}"
        return None
    if num > bounds["max"]:
        errors[name] = f"{label} should be at most {bounds['max']}"
        return None
    return num


def _check_bezier(raw_bezier: Any, errors: Dict[str, str]) -> Optional[tuple]:
    points = parse_bezier(raw_bezier)
    if points is None:
        errors["custom_bezier"] = "Enter four numbers: x1, y1, x2, y2"
        return None
    if not all(0.0 <= p <= 1.0 for p in points):
        errors["custom_bezier"] = "Bezier control points must be between 0 and 1"
        return None
    return points


def _invariant_errors(values: Mapping[str, Optional[float]]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    min_size, max_size = values.get("min_size"), values.get("max_size")
    if min_size is not None and max_size is not None and max_size <= min_size:
        errors["max_size"] = "Maximum size must be greater than minimum size"
    min_w, max_w = values.get("min_screen_width"), values.get("max_screen_width")
    if min_w is not None and max_w is not None and max_w <= min_w:
        errors["max_screen_width"] = "Maximum screen width must be greater than minimum screen width"
    return errors


def collect_config_errors(raw: Mapping[str, Any]) -> Dict[str, str]:
    return _parse_config(raw)[1]


def _parse_config(raw: Mapping[str, Any]):
    errors: Dict[str, str] = {}

    unit = raw.get("output_unit")
    if unit not in config.OUTPUT_UNITS:
        errors["output_unit"] = "Please select px or rem"

    scaling = raw.get("scaling_function") or config.DEFAULT_FORM_VALUES["scaling_function"]
    if scaling not in config.SCALING_FUNCTIONS:
        errors["scaling_function"] = "Unknown scaling function"

    numbers = {
        "root_font_size": _number_field(raw, "root_font_size", errors, integer=True),
        "min_size": _number_field(raw, "min_size", errors),
        "max_size": _number_field(raw, "max_size", errors),
        "min_screen_width": _number_field(raw, "min_screen_width", errors, integer=True),
        "max_screen_width": _number_field(raw, "max_screen_width", errors, integer=True),
    }
    invariant_errors = {k: v for k, v in _invariant_errors(numbers).items() if k not in errors}

    bezier = config.DEFAULT_FORM_VALUES["custom_bezier"]
    if scaling == ScalingFunction.CUSTOM.value:
        bezier = _check_bezier(raw.get("custom_bezier"), errors) or bezier
    else:
        bezier = parse_bezier(raw.get("custom_bezier")) or bezier

    generate_props = coerce_bool(raw.get("generate_custom_properties", False))
    prop_name = raw.get("custom_property_name")
    prop_name = prop_name.strip() if isinstance(prop_name, str) else ""
    if generate_props:
        if not prop_name:
            errors["custom_property_name"] = "Property name is required when generating custom properties"
        elif len(prop_name) > config.CUSTOM_PROPERTY_MAX_LEN:
            errors["custom_property_name"] = "Property name must be 50 characters or less"
        elif not _PROPERTY_RE.match(prop_name):
            errors["custom_property_name"] = (
                "Property name must start with a letter and contain only letters, numbers, and hyphens"
            )
    if not prop_name:
        prop_name = config.DEFAULT_FORM_VALUES["custom_property_name"]

    if errors or invariant_errors:
        return None, {**errors, **invariant_errors}, bool(invariant_errors) and not errors

    cfg = ScalingConfig(
        output_unit=OutputUnit(unit),
        root_font_size=int(numbers["root_font_size"]),
        min_size=numbers["min_size"],
        max_size=numbers["max_size"],
        min_screen_width=int(numbers["min_screen_width"]),
        max_screen_width=int(numbers["max_screen_width"]),
        scaling_function=ScalingFunction(scaling),
        custom_bezier=tuple(bezier),
        use_container_queries=coerce_bool(raw.get("use_container_queries", False)),
        include_fallback=coerce_bool(raw.get("include_fallback", False)),
        generate_custom_properties=generate_props,
        custom_property_name=prop_name,
    )
    return cfg, {}, False


def validate_config(raw: Union[Mapping[str, Any], ScalingConfig]) -> ScalingConfig:
    """Turn raw form values into a ``ScalingConfig``.

    Raises ``ConfigInvariantViolation`` when the only problems are ordering
    invariants, and ``ValidationError`` for everything else.
    """
    if isinstance(raw, ScalingConfig):
        raw = raw.to_form()
    cfg, errors, invariant_only = _parse_config(raw)
    if errors:
        if invariant_only:
            raise ConfigInvariantViolation(errors)
        raise ValidationError(errors)
    return cfg


def collect_breakpoint_errors(raw: Mapping[str, Any]) -> Dict[str, str]:
    errors: Dict[str, str] = {}

    name = raw.get("name")
    name = name.strip() if isinstance(name, str) else ""
    if not name:
        errors["name"] = "Please enter a breakpoint name"
    elif len(name) > config.BREAKPOINT_NAME_MAX_LEN:
        errors["name"] = "Name must be 30 characters or less"
    elif not _NAME_RE.match(name):
        errors["name"] = "Name can only contain letters, numbers, spaces, hyphens, and underscores"

    width = raw.get("width")
    if width is None or (isinstance(width, str) and not width.strip()):
        errors["width"] = "Please enter a screen width"
    else:
        num = coerce_float(width)
        if num is None:
            errors["width"] = "Please enter a valid number"
        elif not num.is_integer():
            errors["width"] = "Width must be a whole number"
        elif num < config.BREAKPOINT_WIDTH_MIN:
            errors["width"] = f"Width should be at least {config.BREAKPOINT_WIDTH_MIN}px"
        elif num > config.BREAKPOINT_WIDTH_MAX:
            errors["width"] = f"Width should be at most {config.BREAKPOINT_WIDTH_MAX}px"

    device = raw.get("device")
    device = device.strip() if isinstance(device, str) else ""
    if not device:
        errors["device"] = "Please enter a device name"
    elif len(device) > config.BREAKPOINT_DEVICE_MAX_LEN:
        errors["device"] = "Device name must be 50 characters or less"
    elif not _DEVICE_RE.match(device):
        errors["device"] = (
            "Device name can only contain letters, numbers, spaces, hyphens, underscores, and parentheses"
        )
    return errors


def validate_breakpoint_data(raw: Mapping[str, Any]) -> Dict[str, Any]:
    errors = collect_breakpoint_errors(raw)
    if errors:
        raise ValidationError(errors)
    return {
        "name": str(raw["name"]).strip(),
        "width": int(float(raw["width"])),
        "device": str(raw["device"]).strip(),
    }
