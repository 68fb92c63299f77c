from __future__ import annotations

from pathlib import Path

# Paths and filenames
PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "clamp_explorer" / "data"

# Form defaults (sizes are expressed in the output unit)
DEFAULT_FORM_VALUES = {
    "output_unit": "px",
    "root_font_size": 16,
    "min_size": 16.0,
    "max_size": 32.0,
    "min_screen_width": 320,
    "max_screen_width": 1200,
    "scaling_function": "linear",
    "custom_bezier": (0.25, 0.1, 0.25, 1.0),
    "use_container_queries": False,
    "include_fallback": False,
    "generate_custom_properties": False,
    "custom_property_name": "fluid-size",
}
OUTPUT_UNITS = ("px", "rem")
SCALING_FUNCTIONS = ("linear", "ease-in", "ease-out", "ease-in-out", "custom")
FIELD_BOUNDS = {
    "root_font_size": {"min": 8, "max": 32, "step": 1},
    "min_size": {"min": 0.1, "max": 1000.0, "step": 0.1},
    "max_size": {"min": 0.1, "max": 1000.0, "step": 0.1},
    "min_screen_width": {"min": 200, "max": 2000, "step": 1},
    "max_screen_width": {"min": 400, "max": 4000, "step": 1},
}
FIELD_LABELS = {
    "output_unit": "Output Unit",
    "root_font_size": "Root Font Size (px)",
    "min_size": "Min Size",
    "max_size": "Max Size",
    "min_screen_width": "Min Screen Width (px)",
    "max_screen_width": "Max Screen Width (px)",
    "scaling_function": "Scaling Function",
    "custom_bezier": "Custom Bezier",
    "custom_property_name": "Property Name",
}
CUSTOM_PROPERTY_PATTERN = r"^[A-Za-z][A-Za-z0-9-]*$"
CUSTOM_PROPERTY_MAX_LEN = 50

# Custom breakpoint form
BREAKPOINT_NAME_MAX_LEN = 30
BREAKPOINT_NAME_PATTERN = r"^[A-Za-z0-9 _-]+$"
BREAKPOINT_DEVICE_MAX_LEN = 50
BREAKPOINT_DEVICE_PATTERN = r"^[A-Za-z0-9 _()-]+$"
BREAKPOINT_WIDTH_MIN = 200
BREAKPOINT_WIDTH_MAX = 4000

# Device categorisation by width (exclusive upper bounds)
DEVICE_THRESHOLDS = {"mobile_max": 768, "tablet_max": 1024}

# Query-string keys
URL_PARAMS = {
    "output_unit": "unit",
    "root_font_size": "root",
    "min_size": "min",
    "max_size": "max",
    "min_screen_width": "minScreen",
    "max_screen_width": "maxScreen",
    "scaling_function": "scaling",
    "custom_bezier": "bezier",
    "generate_custom_properties": "customProps",
    "custom_property_name": "propName",
    "include_fallback": "fallback",
    "use_container_queries": "container",
}
URL_UPDATE_DELAY_SECONDS = 0.5

# Number formatting / sampling
NUMBER_PRECISION = 3
FORMAT_ZERO_THRESHOLD = 0.001
UNIT_SWITCH_PRECISION = 3
CHART_NUM_SAMPLES = 201
CHART_PADDING_PX = 200
EASED_SEGMENTS = 4
BEZIER_BISECTION_STEPS = 40

# Logging and session
SCHEMA_VERSION = 1
APP_MODE = "dash"
DEFAULT_CONSENT_STATE = {"granted": False, "declined": False, "timestamp_utc": None}
LOG_RATE_LIMIT_SECONDS = 0.1

# CSV column order
SCHEMA_COLUMNS = [
    "schema_version",
    "session_id",
    "t_server_iso",
    "seq",
    "event",
    "elapsed_time_ms",
    "mode",
    "output_unit",
    "root_font_size",
    "min_size",
    "max_size",
    "min_screen_width",
    "max_screen_width",
    "scaling_function",
    "custom_bezier",
    "breakpoint_id",
    "breakpoint_width",
    "copy_target",
    "css_clamp",
    "error_count",
]

# Plot palette and styles (Okabe-Ito)
FIGURE_COLORS = {
    "min": "#009E73",
    "fluid": "#0072B2",
    "max": "#D55E00",
    "breakpoint": "#000000",
    "boundary": "#999999",
}
CURVE_LINE_STYLE = {"color": FIGURE_COLORS["fluid"], "width": 3}
CLAMPED_LINE_STYLE = {"width": 3, "dash": "dot"}
BREAKPOINT_MARKER_STYLE = {
    "color": FIGURE_COLORS["breakpoint"],
    "size": 9,
    "symbol": "diamond",
    "line": {"color": "#ffffff", "width": 1},
}
BOUNDARY_MARKER_STYLE = {
    "size": 11,
    "symbol": "circle",
    "line": {"color": "#ffffff", "width": 1},
}
AXIS_LINE_STYLE = {"gridcolor": "#e5e5e5"}

# Live preview
PREVIEW_TEXT = "The quick brown fox jumps over the lazy dog"
PREVIEW_DEFAULT_WIDTH = 375
