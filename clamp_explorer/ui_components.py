"""Streamlit UI components."""

from typing import Any, Dict, Optional

import streamlit as st
import streamlit_shadcn_ui as ui

from . import config
from .models import ScalingConfig


def config_controls(defaults: ScalingConfig) -> Dict[str, Any]:
    """Render the scaling form and return the raw (unvalidated) values."""
    bounds = config.FIELD_BOUNDS
    raw: Dict[str, Any] = {}
    raw["output_unit"] = st.radio(
        config.FIELD_LABELS["output_unit"],
        options=list(config.OUTPUT_UNITS),
        index=list(config.OUTPUT_UNITS).index(defaults.unit),
        horizontal=True,
    )
    raw["root_font_size"] = st.number_input(
        config.FIELD_LABELS["root_font_size"],
        value=int(defaults.root_font_size),
        step=bounds["root_font_size"]["step"],
        disabled=raw["output_unit"] != "rem",
    )
    left, right = st.columns(2)
    with left:
        raw["min_size"] = st.number_input(
            config.FIELD_LABELS["min_size"], value=float(defaults.min_size), step=0.1, format="%.3f"
        )
        raw["min_screen_width"] = st.number_input(
            config.FIELD_LABELS["min_screen_width"], value=int(defaults.min_screen_width), step=1
        )
    with right:
        raw["max_size"] = st.number_input(
            config.FIELD_LABELS["max_size"], value=float(defaults.max_size), step=0.1, format="%.3f"
        )
        raw["max_screen_width"] = st.number_input(
            config.FIELD_LABELS["max_screen_width"], value=int(defaults.max_screen_width), step=1
        )
    raw["scaling_function"] = st.selectbox(
        config.FIELD_LABELS["scaling_function"],
        options=list(config.SCALING_FUNCTIONS),
        index=list(config.SCALING_FUNCTIONS).index(defaults.scaling_function.value),
    )
    if raw["scaling_function"] == "custom":
        raw["custom_bezier"] = st.text_input(
            config.FIELD_LABELS["custom_bezier"],
            value=",".join(str(v) for v in defaults.custom_bezier),
            help="x1, y1, x2, y2 (each between 0 and 1)",
        )
    raw["use_container_queries"] = st.checkbox("Use container query units (cqi)", value=defaults.use_container_queries)
    raw["include_fallback"] = st.checkbox("Generate media query fallback", value=defaults.include_fallback)
    raw["generate_custom_properties"] = st.checkbox(
        "Generate CSS custom property", value=defaults.generate_custom_properties
    )
    raw["custom_property_name"] = defaults.custom_property_name
    if raw["generate_custom_properties"]:
        raw["custom_property_name"] = st.text_input(
            config.FIELD_LABELS["custom_property_name"], value=defaults.custom_property_name
        )
    return raw


def _slider_number(value: Any) -> Optional[float]:
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return None
    if isinstance(value, (int, float)):
        return float(value)
    return None


def preview_width_slider(cfg: ScalingConfig, *, key: str = "preview_width") -> float:
    """Viewport slider for the live preview; falls back to the last good value."""
    last_key = f"{key}_last"
    last = st.session_state.get(last_key, config.PREVIEW_DEFAULT_WIDTH)
    start = min(max(last, cfg.min_screen_width), cfg.max_screen_width)
    value = ui.slider(
        label="Viewport width (px)",
        min_value=cfg.min_screen_width,
        max_value=cfg.max_screen_width,
        step=1,
        default_value=[start],
        key=key,
    )
    width = _slider_number(value)
    if width is None:
        width = float(start)
    st.session_state[last_key] = width
    return width


def value_card(title: str, content: str, description: str, *, key: str) -> None:
    ui.metric_card(title=title, content=content, description=description, key=key)
