import streamlit as st

from clamp_explorer import config
from clamp_explorer.breakpoints import DEVICE_GLYPHS
from clamp_explorer.engine import calculate_clamp
from clamp_explorer.graph_engine import build_figure
from clamp_explorer.interpolation import compute_value
from clamp_explorer.ui_components import config_controls, preview_width_slider, value_card
from clamp_explorer.url_state import parse_query_string, query_params, serialize_to_query_string
from clamp_explorer.validation import ValidationError, validate_config
from clamp_explorer.verbal_descriptions import describe_config, describe_width

st.set_page_config(page_title="Clamp Explorer", layout="wide")

st.title("Clamp Explorer")
st.caption("Fluid CSS clamp() values: controls (left), chart and preview (right), code and breakpoints (bottom).")

# Seed the form once from the page URL so shared links open with their settings
if "initial_config" not in st.session_state:
    st.session_state["initial_config"] = parse_query_string(dict(st.query_params))

left_col, right_col = st.columns([1, 2], gap="large")

with left_col:
    st.header("Settings")
    raw = config_controls(st.session_state["initial_config"])

try:
    cfg = validate_config(raw)
except ValidationError as exc:
    cfg = None
    with left_col:
        for field, message in exc.errors.items():
            st.error(f"{config.FIELD_LABELS.get(field, field)}: {message}")

if cfg is None:
    with right_col:
        st.info("Fix the highlighted fields to see the result.")
    st.stop()

st.query_params.from_dict(query_params(serialize_to_query_string(cfg)))
outputs = calculate_clamp(cfg, [])

with right_col:
    st.header("Chart")
    st.caption(describe_config(cfg))
    width = preview_width_slider(cfg)
    st.plotly_chart(
        build_figure(cfg, outputs.breakpoint_table, preview_width=width),
        use_container_width=True,
        config={"displaylogo": False},
    )
    value = compute_value(cfg, width)
    value_card("Current value", f"{value:.3f}{cfg.unit}", describe_width(cfg, width), key="current-value")
    st.markdown(
        f'<p style="font-size:{cfg.to_px(value)}px;line-height:1.3">{config.PREVIEW_TEXT}</p>',
        unsafe_allow_html=True,
    )

st.divider()

code_col, table_col = st.columns(2, gap="large")
with code_col:
    st.header("Code")
    st.code(outputs.css_clamp, language="css")
    if outputs.css_fallback:
        st.code(outputs.css_fallback, language="css")
    if outputs.css_custom_properties:
        st.code(outputs.css_custom_properties, language="css")
    if outputs.css_eased:
        st.code(outputs.css_eased, language="css")
    st.code(outputs.scss_function, language="scss")

with table_col:
    st.header("Breakpoints")
    st.dataframe(
        [
            {
                "": DEVICE_GLYPHS[row.breakpoint.category],
                "Name": row.breakpoint.name,
                "Device": row.breakpoint.device,
                "Width": f"{row.breakpoint.width}px",
                "Value": f"{row.computed_value}{row.unit}",
                "Status": row.status.value.upper(),
            }
            for row in outputs.breakpoint_table
        ],
        hide_index=True,
        use_container_width=True,
    )
