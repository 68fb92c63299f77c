"""Query-string persistence of a ``ScalingConfig`` for shareable links."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Union
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from . import config
from .easing import parse_bezier
from .models import OutputUnit, ScalingConfig, ScalingFunction
from .validation import coerce_bool, coerce_float

_KEYS = config.URL_PARAMS
_DEFAULTS = config.DEFAULT_FORM_VALUES


def _format_param(value: Union[int, float]) -> str:
    num = float(value)
    if num.is_integer():
        return str(int(num))
    return repr(num)


def _format_flag(value: bool) -> str:
    return "1" if value else "0"


def serialize_to_query_string(cfg: ScalingConfig) -> str:
    params = [
        (_KEYS["output_unit"], cfg.unit),
        (_KEYS["root_font_size"], _format_param(cfg.root_font_size)),
        (_KEYS["min_size"], _format_param(cfg.min_size)),
        (_KEYS["max_size"], _format_param(cfg.max_size)),
        (_KEYS["min_screen_width"], _format_param(cfg.min_screen_width)),
        (_KEYS["max_screen_width"], _format_param(cfg.max_screen_width)),
        (_KEYS["scaling_function"], cfg.scaling_function.value),
        (_KEYS["custom_bezier"], ",".join(_format_param(v) for v in cfg.custom_bezier)),
        (_KEYS["generate_custom_properties"], _format_flag(cfg.generate_custom_properties)),
        (_KEYS["custom_property_name"], cfg.custom_property_name),
        (_KEYS["include_fallback"], _format_flag(cfg.include_fallback)),
        (_KEYS["use_container_queries"], _format_flag(cfg.use_container_queries)),
    ]
    return urlencode(params, safe=",")


def _positive(params: Mapping[str, str], field: str, *, integer: bool = False) -> Any:
    num = coerce_float(params.get(_KEYS[field]))
    if num is None or num <= 0:
        return _DEFAULTS[field]
    if integer:
        return int(num) if num.is_integer() else _DEFAULTS[field]
    return num


def query_params(query: Union[str, Mapping[str, Any], None]) -> Dict[str, str]:
    """First value per key from a query string (leading ``?`` allowed) or a mapping."""
    if not query:
        return {}
    if isinstance(query, Mapping):
        return {k: v[0] if isinstance(v, (list, tuple)) else v for k, v in query.items() if v}
    parsed = parse_qs(query.lstrip("?"), keep_blank_values=False)
    return {k: v[0] for k, v in parsed.items() if v}


def parse_query_string(query: Union[str, Mapping[str, Any], None]) -> ScalingConfig:
    """Read a config back from a query string.

    Absent or unparseable values fall back to the form defaults; the result
    is not validated (cross-field invariants are the validator's job).
    """
    params = query_params(query)

    unit = params.get(_KEYS["output_unit"])
    if unit not in config.OUTPUT_UNITS:
        unit = _DEFAULTS["output_unit"]
    scaling = params.get(_KEYS["scaling_function"])
    if scaling not in config.SCALING_FUNCTIONS:
        scaling = _DEFAULTS["scaling_function"]
    bezier = parse_bezier(params.get(_KEYS["custom_bezier"])) or _DEFAULTS["custom_bezier"]
    prop_name = params.get(_KEYS["custom_property_name"]) or _DEFAULTS["custom_property_name"]

    return ScalingConfig(
        output_unit=OutputUnit(unit),
        root_font_size=_positive(params, "root_font_size", integer=True),
        min_size=float(_positive(params, "min_size")),
        max_size=float(_positive(params, "max_size")),
        min_screen_width=_positive(params, "min_screen_width", integer=True),
        max_screen_width=_positive(params, "max_screen_width", integer=True),
        scaling_function=ScalingFunction(scaling),
        custom_bezier=tuple(bezier),
        use_container_queries=coerce_bool(params.get(_KEYS["use_container_queries"], "0")),
        include_fallback=coerce_bool(params.get(_KEYS["include_fallback"], "0")),
        generate_custom_properties=coerce_bool(params.get(_KEYS["generate_custom_properties"], "0")),
        custom_property_name=prop_name,
    )


def generate_share_url(base_url: str, cfg: ScalingConfig) -> str:
    """``base_url`` with its query replaced by the serialized config."""
    parts = urlsplit(base_url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, serialize_to_query_string(cfg), ""))
