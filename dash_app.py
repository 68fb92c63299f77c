"""Dash UI for Clamp Explorer: form, chart, breakpoint table, preview and code."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

import dash
from dash import ALL, Input, Output, State, dcc, html
from dash.exceptions import PreventUpdate
import plotly.graph_objects as go

from clamp_explorer import config
from clamp_explorer.breakpoints import (
    DEVICE_GLYPHS,
    add_breakpoint,
    custom_from_store,
    custom_to_store,
    delete_breakpoint,
    find_breakpoint,
    update_breakpoint,
)
from clamp_explorer.engine import calculate_clamp
from clamp_explorer.graph_engine import build_figure, empty_figure
from clamp_explorer.interpolation import compute_value
from clamp_explorer.logger import (
    build_csv_content,
    build_event_record,
    close_session,
    log_event,
    read_jsonl,
    safe_session_id,
    session_log_path,
)
from clamp_explorer.models import BreakpointResult, OutputUnit, ScalingConfig
from clamp_explorer.url_state import parse_query_string, serialize_to_query_string
from clamp_explorer.validation import ValidationError, coerce_float, validate_config
from clamp_explorer.verbal_descriptions import describe_config, describe_width

_DEFAULTS = ScalingConfig()
_UI_BASE_TOKEN = "clamp-"
_OPTION_CONTAINER = "container"
_OPTION_FALLBACK = "fallback"
_OPTION_CUSTOM_PROPS = "custom-props"

# Form inputs in the order the sync callback reads and writes them
_FORM_FIELDS: List[Tuple[str, str]] = [
    ("radio-unit", "output_unit"),
    ("input-root", "root_font_size"),
    ("input-min", "min_size"),
    ("input-max", "max_size"),
    ("input-min-screen", "min_screen_width"),
    ("input-max-screen", "max_screen_width"),
    ("dropdown-scaling", "scaling_function"),
    ("input-bezier", "custom_bezier"),
    ("checklist-options", "options"),
    ("input-prop-name", "custom_property_name"),
]

_CODE_BLOCKS: List[Tuple[str, str]] = [
    ("css_clamp", "CSS clamp()"),
    ("css_fallback", "CSS Fallback"),
    ("css_custom_properties", "CSS Custom Properties"),
    ("css_eased", "Eased Segments"),
    ("scss_function", "SCSS Function"),
]

_MODAL_OVERLAY_BASE_STYLE: Dict[str, Any] = {
    "position": "fixed",
    "inset": "0",
    "backgroundColor": "rgba(0, 0, 0, 0.4)",
    "display": "flex",
    "alignItems": "center",
    "justifyContent": "center",
    "zIndex": 1000,
    "padding": "16px",
}
_MODAL_PANEL_STYLE: Dict[str, Any] = {
    "backgroundColor": "#ffffff",
    "padding": "24px",
    "borderRadius": "12px",
    "maxWidth": "640px",
    "width": "100%",
    "boxShadow": "0 8px 20px rgba(0,0,0,0.15)",
}
_CARD_STYLE: Dict[str, Any] = {
    "border": "1px solid #e5e5e5",
    "borderRadius": "12px",
    "padding": "16px",
    "marginBottom": "16px",
}
_FIELD_STYLE: Dict[str, Any] = {"marginBottom": "12px", "display": "flex", "flexDirection": "column"}
_INPUT_STYLE: Dict[str, Any] = {"height": "36px", "padding": "0 8px"}
_CODE_STYLE: Dict[str, Any] = {
    "backgroundColor": "#f6f8fa",
    "padding": "12px",
    "borderRadius": "8px",
    "whiteSpace": "pre-wrap",
    "margin": 0,
}
_STATUS_BADGE_COLORS = {
    "min": config.FIGURE_COLORS["min"],
    "fluid": config.FIGURE_COLORS["fluid"],
    "max": config.FIGURE_COLORS["max"],
}


def _get_session_id(session_data: Optional[Dict[str, Any]]) -> str:
    if isinstance(session_data, dict):
        raw = session_data.get("session_id")
        if isinstance(raw, str) and raw:
            return raw
    return "unknown"


def _default_consent_data() -> Dict[str, Any]:
    return dict(config.DEFAULT_CONSENT_STATE)


def _is_logging_allowed(consent_data: Optional[Dict[str, Any]]) -> bool:
    return bool(consent_data and consent_data.get("granted"))


def _is_modal_dismissed(consent_data: Optional[Dict[str, Any]]) -> bool:
    if not consent_data:
        return False
    return bool(consent_data.get("granted") or consent_data.get("declined"))


def _modal_overlay_style(visible: bool) -> Dict[str, Any]:
    style = dict(_MODAL_OVERLAY_BASE_STYLE)
    style["display"] = "flex" if visible else "none"
    return style


def _resolve_uirevision_value(ui_store: Optional[Dict[str, Any]]) -> str:
    nonce = "0"
    if isinstance(ui_store, dict) and ui_store.get("uirevision_nonce") is not None:
        nonce = str(ui_store["uirevision_nonce"])
    return f"{_UI_BASE_TOKEN}{nonce}"


def _bump_uirevision_store(data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    base = dict(data) if isinstance(data, dict) else {}
    try:
        nonce_int = int(base.get("uirevision_nonce", 0))
    except (TypeError, ValueError):
        nonce_int = 0
    base["uirevision_nonce"] = str(nonce_int + 1)
    return base


def _options_from_config(cfg: ScalingConfig) -> List[str]:
    options = []
    if cfg.use_container_queries:
        options.append(_OPTION_CONTAINER)
    if cfg.include_fallback:
        options.append(_OPTION_FALLBACK)
    if cfg.generate_custom_properties:
        options.append(_OPTION_CUSTOM_PROPS)
    return options


def _form_values(cfg: ScalingConfig) -> List[Any]:
    """Widget values for ``cfg`` in ``_FORM_FIELDS`` order."""
    return [
        cfg.unit,
        cfg.root_font_size,
        cfg.min_size,
        cfg.max_size,
        cfg.min_screen_width,
        cfg.max_screen_width,
        cfg.scaling_function.value,
        ",".join(str(v) for v in cfg.custom_bezier),
        _options_from_config(cfg),
        cfg.custom_property_name,
    ]


def _raw_form(values: List[Any]) -> Dict[str, Any]:
    raw = {field: value for (_, field), value in zip(_FORM_FIELDS, values)}
    options = raw.pop("options") or []
    raw["use_container_queries"] = _OPTION_CONTAINER in options
    raw["include_fallback"] = _OPTION_FALLBACK in options
    raw["generate_custom_properties"] = _OPTION_CUSTOM_PROPS in options
    return raw


def _log_if_allowed(consent_data, session_data, event: str, cfg=None, *, throttled=False, **extras) -> None:
    if not _is_logging_allowed(consent_data):
        return
    session_id = _get_session_id(session_data)
    record = build_event_record(session_id, event, cfg, **extras)
    log_event(session_id, record, throttled=throttled)


def _build_consent_modal() -> html.Div:
    return html.Div(
        [
            html.Div(
                [
                    html.H2("Usage Log Consent"),
                    html.P(
                        "With your consent, Clamp Explorer records the settings you try and the "
                        "breakpoints you add, so you can download your session later."
                    ),
                    html.P(
                        "Each record includes the anonymous session ID stored in your browser, a timestamp, "
                        "and the current scaling settings. Nothing is sent anywhere else."
                    ),
                    html.P("Declining keeps the app fully usable but disables logging."),
                    html.Div(
                        [
                            html.Button(
                                "Accept",
                                id="btn-consent-accept",
                                n_clicks=0,
                                style={"marginRight": "12px", "padding": "8px 20px", "fontWeight": 600},
                            ),
                            html.Button("Decline", id="btn-consent-decline", n_clicks=0, style={"padding": "8px 20px"}),
                        ],
                        style={"marginTop": "18px", "textAlign": "right"},
                    ),
                ],
                style=_MODAL_PANEL_STYLE,
            )
        ],
        id="consent-modal",
        style=_modal_overlay_style(True),
    )


def _field(label: str, control, *, field_id: Optional[str] = None) -> html.Div:
    return html.Div(
        [html.Label(label, htmlFor=field_id, style={"fontWeight": 600, "marginBottom": "4px"}), control],
        style=_FIELD_STYLE,
    )


def _number_input(input_id: str, field: str, value: Any) -> dcc.Input:
    bounds = config.FIELD_BOUNDS[field]
    return dcc.Input(
        id=input_id,
        type="number",
        min=bounds["min"],
        max=bounds["max"],
        step="any" if bounds["step"] != 1 else 1,
        value=value,
        debounce=config.URL_UPDATE_DELAY_SECONDS,
        style=_INPUT_STYLE,
    )


def _settings_panel() -> html.Div:
    values = dict(zip([field for _, field in _FORM_FIELDS], _form_values(_DEFAULTS)))
    return html.Div(
        [
            html.H3("Settings"),
            _field(
                config.FIELD_LABELS["output_unit"],
                dcc.RadioItems(
                    id="radio-unit",
                    options=[{"label": u, "value": u} for u in config.OUTPUT_UNITS],
                    value=values["output_unit"],
                    inline=True,
                ),
            ),
            _field(
                config.FIELD_LABELS["root_font_size"],
                _number_input("input-root", "root_font_size", values["root_font_size"]),
                field_id="input-root",
            ),
            _field(config.FIELD_LABELS["min_size"], _number_input("input-min", "min_size", values["min_size"]), field_id="input-min"),
            _field(config.FIELD_LABELS["max_size"], _number_input("input-max", "max_size", values["max_size"]), field_id="input-max"),
            _field(
                config.FIELD_LABELS["min_screen_width"],
                _number_input("input-min-screen", "min_screen_width", values["min_screen_width"]),
                field_id="input-min-screen",
            ),
            _field(
                config.FIELD_LABELS["max_screen_width"],
                _number_input("input-max-screen", "max_screen_width", values["max_screen_width"]),
                field_id="input-max-screen",
            ),
            _field(
                config.FIELD_LABELS["scaling_function"],
                dcc.Dropdown(
                    id="dropdown-scaling",
                    options=[{"label": s, "value": s} for s in config.SCALING_FUNCTIONS],
                    value=values["scaling_function"],
                    clearable=False,
                ),
            ),
            _field(
                f"{config.FIELD_LABELS['custom_bezier']} (x1, y1, x2, y2)",
                dcc.Input(
                    id="input-bezier",
                    type="text",
                    value=values["custom_bezier"],
                    debounce=config.URL_UPDATE_DELAY_SECONDS,
                    style=_INPUT_STYLE,
                ),
                field_id="input-bezier",
            ),
            dcc.Checklist(
                id="checklist-options",
                options=[
                    {"label": " Use container query units (cqi)", "value": _OPTION_CONTAINER},
                    {"label": " Generate media query fallback", "value": _OPTION_FALLBACK},
                    {"label": " Generate CSS custom property", "value": _OPTION_CUSTOM_PROPS},
                ],
                value=values["options"],
                style={"marginBottom": "12px"},
            ),
            _field(
                config.FIELD_LABELS["custom_property_name"],
                dcc.Input(
                    id="input-prop-name",
                    type="text",
                    value=values["custom_property_name"],
                    debounce=config.URL_UPDATE_DELAY_SECONDS,
                    style=_INPUT_STYLE,
                ),
                field_id="input-prop-name",
            ),
            html.Ul(id="error-list", style={"color": "#b00020", "paddingLeft": "18px"}),
            html.Div(
                [
                    html.Button("Reset", id="btn-reset", n_clicks=0, type="button", style={"marginRight": "8px"}),
                    dcc.Clipboard(id="clipboard-share", content="", title="Copy share link", style={"display": "inline-block"}),
                    html.Span(" Copy share link", style={"fontSize": "0.9em"}),
                ],
            ),
        ],
        style=_CARD_STYLE,
    )


def _code_panel() -> html.Div:
    blocks = []
    for key, title in _CODE_BLOCKS:
        blocks.append(
            html.Div(
                [
                    html.Div(
                        [
                            html.Strong(title),
                            dcc.Clipboard(
                                id={"type": "copy-code", "key": key},
                                target_id=f"code-{key}",
                                title=f"Copy {title}",
                                style={"display": "inline-block", "marginLeft": "8px"},
                            ),
                        ],
                        style={"marginBottom": "4px"},
                    ),
                    html.Pre(id=f"code-{key}", style=_CODE_STYLE),
                ],
                id=f"block-{key}",
                style={"marginBottom": "12px"},
            )
        )
    return html.Div([html.H3("Code"), *blocks], style=_CARD_STYLE)


def _breakpoint_form() -> html.Div:
    return html.Div(
        [
            html.H4("Add breakpoint", id="bp-form-title"),
            html.Div(
                [
                    dcc.Input(id="input-bp-name", type="text", placeholder="Name", style=_INPUT_STYLE),
                    dcc.Input(
                        id="input-bp-width",
                        type="number",
                        placeholder="Width (px)",
                        min=config.BREAKPOINT_WIDTH_MIN,
                        max=config.BREAKPOINT_WIDTH_MAX,
                        step=1,
                        style=_INPUT_STYLE,
                    ),
                    dcc.Input(id="input-bp-device", type="text", placeholder="Device", style=_INPUT_STYLE),
                    html.Button("Save", id="btn-bp-save", n_clicks=0, type="button"),
                    html.Button("Cancel", id="btn-bp-cancel", n_clicks=0, type="button"),
                ],
                style={"display": "flex", "gap": "8px", "flexWrap": "wrap"},
            ),
            html.Ul(id="bp-form-errors", style={"color": "#b00020", "paddingLeft": "18px"}),
        ]
    )


def _preview_panel() -> html.Div:
    return html.Div(
        [
            html.H3("Live preview"),
            dcc.Slider(
                id="slider-preview",
                min=_DEFAULTS.min_screen_width,
                max=_DEFAULTS.max_screen_width,
                step=1,
                value=config.PREVIEW_DEFAULT_WIDTH,
                marks=None,
                updatemode="drag",
                tooltip={"placement": "bottom", "always_visible": False},
            ),
            html.Div(id="preview-readout", style={"margin": "8px 0", "color": "#555555"}),
            html.Div(config.PREVIEW_TEXT, id="preview-text", style={"lineHeight": 1.3, "overflowWrap": "anywhere"}),
        ],
        style=_CARD_STYLE,
    )


def _serve_layout() -> html.Div:
    return html.Div(
        [
            dcc.Location(id="url", refresh=False),
            dcc.Store(id="store-session", storage_type="session", data={"session_id": uuid.uuid4().hex}),
            dcc.Store(id="store-consent", storage_type="local", data=_default_consent_data()),
            dcc.Store(id="store-breakpoints", storage_type="session", data=[]),
            dcc.Store(id="store-editing", data=None),
            dcc.Store(id="store-config", data=None),
            dcc.Store(id="store-form-meta", data={"loaded": False, "unit": _DEFAULTS.unit}),
            dcc.Store(id="store-ui", data={"uirevision_nonce": "0"}),
            dcc.Download(id="download-log"),
            _build_consent_modal(),
            html.H1("Clamp Explorer"),
            html.P("Generate fluid CSS clamp() values and check them across device breakpoints."),
            html.Div(
                [
                    html.Div([_settings_panel()], style={"flex": "1", "minWidth": "280px"}),
                    html.Div(
                        [
                            html.Div(
                                [
                                    html.H3("Chart"),
                                    html.P(id="config-summary", style={"color": "#555555"}),
                                    dcc.Graph(id="graph-clamp", figure=empty_figure(""), config={"displaylogo": False}),
                                ],
                                style=_CARD_STYLE,
                            ),
                            _preview_panel(),
                        ],
                        style={"flex": "2", "minWidth": "360px"},
                    ),
                ],
                style={"display": "flex", "gap": "24px", "flexWrap": "wrap"},
            ),
            html.Div(
                [
                    html.Div([_code_panel()], style={"flex": "1", "minWidth": "320px"}),
                    html.Div(
                        [
                            html.Div(
                                [html.H3("Breakpoints"), html.Div(id="table-breakpoints"), _breakpoint_form()],
                                style=_CARD_STYLE,
                            )
                        ],
                        style={"flex": "1", "minWidth": "320px"},
                    ),
                ],
                style={"display": "flex", "gap": "24px", "flexWrap": "wrap"},
            ),
            html.Div(
                [
                    html.Button("Download log (JSONL)", id="btn-download-jsonl", n_clicks=0, style={"marginRight": "8px"}),
                    html.Button("Download log (CSV)", id="btn-download-csv", n_clicks=0),
                ],
                style={"marginTop": "8px"},
            ),
        ],
        style={"maxWidth": "1280px", "margin": "0 auto", "padding": "16px", "fontFamily": "system-ui, sans-serif"},
    )


def _render_table(rows: List[BreakpointResult]) -> Any:
    if not rows:
        return html.P("No breakpoints available. Add some breakpoints to see the preview.")
    header = html.Tr([html.Th(t) for t in ("Device", "Screen Width", "Computed Value", "Status", "Actions")])
    body = []
    for row in rows:
        bp = row.breakpoint
        actions = [html.Button("Edit", id={"type": "bp-edit", "id": bp.id}, n_clicks=0, type="button")]
        if not bp.is_default:
            actions.append(
                html.Button(
                    "Delete",
                    id={"type": "bp-delete", "id": bp.id},
                    n_clicks=0,
                    type="button",
                    title="Delete custom breakpoint",
                    style={"marginLeft": "4px"},
                )
            )
        badge_style = {
            "color": "#ffffff",
            "backgroundColor": _STATUS_BADGE_COLORS[row.status.value],
            "borderRadius": "6px",
            "padding": "2px 6px",
            "fontSize": "0.8em",
        }
        body.append(
            html.Tr(
                [
                    html.Td(
                        [
                            html.Span(DEVICE_GLYPHS[bp.category], style={"marginRight": "6px"}),
                            html.Strong(bp.name),
                            html.Div(bp.device, style={"color": "#777777", "fontSize": "0.85em"}),
                        ]
                    ),
                    html.Td(f"{bp.width}px"),
                    html.Td(html.Code(f"{row.computed_value}{row.unit}")),
                    html.Td(html.Span(row.status.value.upper(), style=badge_style)),
                    html.Td(actions),
                ]
            )
        )
    return html.Table([html.Thead(header), html.Tbody(body)], style={"width": "100%", "borderCollapse": "collapse"})


def _error_items(errors: Dict[str, str]) -> List[html.Li]:
    return [html.Li(f"{config.FIELD_LABELS.get(field, field.title())}: {message}") for field, message in errors.items()]


def _convert_sizes(prev_unit: str, new_unit: str, root: Any, min_size: Any, max_size: Any):
    root_num = coerce_float(root) or config.DEFAULT_FORM_VALUES["root_font_size"]
    min_num, max_num = coerce_float(min_size), coerce_float(max_size)
    if min_num is None or max_num is None:
        return dash.no_update, dash.no_update
    converted = ScalingConfig(
        output_unit=OutputUnit(prev_unit), root_font_size=root_num, min_size=min_num, max_size=max_num
    ).with_output_unit(OutputUnit(new_unit))
    return converted.min_size, converted.max_size


app = dash.Dash(__name__, title="Clamp Explorer")
server = app.server
app.layout = _serve_layout


@app.callback(
    [Output(component_id, "value") for component_id, _ in _FORM_FIELDS]
    + [Output("store-form-meta", "data"), Output("store-ui", "data")],
    Input("url", "search"),
    Input("btn-reset", "n_clicks"),
    Input("radio-unit", "value"),
    [State(component_id, "value") for component_id, _ in _FORM_FIELDS]
    + [
        State("store-form-meta", "data"),
        State("store-ui", "data"),
        State("store-session", "data"),
        State("store-consent", "data"),
    ],
)
def _sync_form(search, reset_clicks, unit_value, *state):
    values = list(state[: len(_FORM_FIELDS)])
    meta, ui_store, session_data, consent_data = state[len(_FORM_FIELDS):]
    meta = dict(meta) if isinstance(meta, dict) else {"loaded": False, "unit": _DEFAULTS.unit}
    trigger_id = dash.callback_context.triggered_id
    no_change = [dash.no_update] * len(_FORM_FIELDS)

    if trigger_id == "btn-reset" and reset_clicks:
        _log_if_allowed(consent_data, session_data, "reset", _DEFAULTS)
        meta["unit"] = _DEFAULTS.unit
        return _form_values(_DEFAULTS) + [meta, _bump_uirevision_store(ui_store)]

    if trigger_id == "radio-unit":
        prev_unit = meta.get("unit") or _DEFAULTS.unit
        if unit_value not in config.OUTPUT_UNITS or unit_value == prev_unit:
            return no_change + [dash.no_update, dash.no_update]
        new_min, new_max = _convert_sizes(prev_unit, unit_value, values[1], values[2], values[3])
        meta["unit"] = unit_value
        updates = list(no_change)
        updates[2], updates[3] = new_min, new_max
        return updates + [meta, dash.no_update]

    # Page load: seed the form from the query string once; later URL writes are ours.
    if meta.get("loaded"):
        return no_change + [dash.no_update, dash.no_update]
    meta["loaded"] = True
    if not search:
        return no_change + [meta, dash.no_update]
    cfg = parse_query_string(search)
    meta["unit"] = cfg.unit
    return _form_values(cfg) + [meta, dash.no_update]


@app.callback(
    Output("store-config", "data"),
    Output("error-list", "children"),
    [Input(component_id, "value") for component_id, _ in _FORM_FIELDS],
    State("store-session", "data"),
    State("store-consent", "data"),
)
def _validate_form(*args):
    values = list(args[: len(_FORM_FIELDS)])
    session_data, consent_data = args[len(_FORM_FIELDS):]
    try:
        cfg = validate_config(_raw_form(values))
    except ValidationError as exc:
        _log_if_allowed(consent_data, session_data, "config_invalid", throttled=True, error_count=len(exc.errors))
        return None, _error_items(exc.errors)
    _log_if_allowed(consent_data, session_data, "config_change", cfg, throttled=True)
    return cfg.to_form(), []


@app.callback(
    Output("url", "search"),
    Output("clipboard-share", "content"),
    Input("store-config", "data"),
    State("store-form-meta", "data"),
    State("url", "href"),
    prevent_initial_call=True,
)
def _sync_url(config_data, meta, href):
    if not config_data or not (isinstance(meta, dict) and meta.get("loaded")):
        return dash.no_update, dash.no_update
    query = serialize_to_query_string(validate_config(config_data))
    base = (href or "").split("?", 1)[0]
    return f"?{query}", f"{base}?{query}"


def _empty_outputs(message: str):
    code = [""] * len(_CODE_BLOCKS)
    hidden = [{"display": "none"}] * len(_CODE_BLOCKS)
    return [*code, *hidden, empty_figure(message), html.P(message), message]


@app.callback(
    [Output(f"code-{key}", "children") for key, _ in _CODE_BLOCKS]
    + [Output(f"block-{key}", "style") for key, _ in _CODE_BLOCKS]
    + [
        Output("graph-clamp", "figure"),
        Output("table-breakpoints", "children"),
        Output("config-summary", "children"),
    ],
    Input("store-config", "data"),
    Input("store-breakpoints", "data"),
    Input("slider-preview", "value"),
    State("store-ui", "data"),
)
def _render_outputs(config_data, breakpoint_data, preview_width, ui_store):
    if not config_data:
        return _empty_outputs("Fix the highlighted fields to see the result.")
    cfg = validate_config(config_data)
    outputs = calculate_clamp(cfg, custom_from_store(breakpoint_data))
    code = [getattr(outputs, key) for key, _ in _CODE_BLOCKS]
    styles = [{"marginBottom": "12px"} if text else {"display": "none"} for text in code]
    width = preview_width if isinstance(preview_width, (int, float)) else None
    figure: go.Figure = build_figure(
        cfg,
        outputs.breakpoint_table,
        uirevision=_resolve_uirevision_value(ui_store),
        preview_width=width,
    )
    return [*code, *styles, figure, _render_table(outputs.breakpoint_table), describe_config(cfg)]


@app.callback(
    Output("slider-preview", "min"),
    Output("slider-preview", "max"),
    Output("slider-preview", "value"),
    Input("store-config", "data"),
    State("slider-preview", "value"),
)
def _sync_preview_range(config_data, current):
    if not config_data:
        return dash.no_update, dash.no_update, dash.no_update
    low, high = config_data["min_screen_width"], config_data["max_screen_width"]
    value = current if isinstance(current, (int, float)) else config.PREVIEW_DEFAULT_WIDTH
    return low, high, min(max(value, low), high)


@app.callback(
    Output("preview-readout", "children"),
    Output("preview-text", "style"),
    Input("slider-preview", "value"),
    Input("store-config", "data"),
)
def _render_preview(width, config_data):
    style = {"lineHeight": 1.3, "overflowWrap": "anywhere"}
    if not config_data or not isinstance(width, (int, float)):
        return "", style
    cfg = validate_config(config_data)
    style["fontSize"] = f"{cfg.to_px(compute_value(cfg, width))}px"
    return describe_width(cfg, width), style


@app.callback(
    Output("store-breakpoints", "data"),
    Output("store-editing", "data"),
    Output("bp-form-errors", "children"),
    Output("bp-form-title", "children"),
    Output("input-bp-name", "value"),
    Output("input-bp-width", "value"),
    Output("input-bp-device", "value"),
    Input("btn-bp-save", "n_clicks"),
    Input("btn-bp-cancel", "n_clicks"),
    Input({"type": "bp-edit", "id": ALL}, "n_clicks"),
    Input({"type": "bp-delete", "id": ALL}, "n_clicks"),
    State("input-bp-name", "value"),
    State("input-bp-width", "value"),
    State("input-bp-device", "value"),
    State("store-breakpoints", "data"),
    State("store-editing", "data"),
    State("store-config", "data"),
    State("store-session", "data"),
    State("store-consent", "data"),
    prevent_initial_call=True,
)
def _handle_breakpoints(
    save_clicks,
    cancel_clicks,
    edit_clicks,
    delete_clicks,
    name,
    width,
    device,
    breakpoint_data,
    editing_id,
    config_data,
    session_data,
    consent_data,
):
    ctx = dash.callback_context
    trigger_id = ctx.triggered_id
    triggered_value = ctx.triggered[0]["value"] if ctx.triggered else None
    # Re-rendered table buttons report n_clicks=0; only real clicks count.
    if not triggered_value:
        raise PreventUpdate

    customs = custom_from_store(breakpoint_data)
    cfg = validate_config(config_data) if config_data else None
    cleared = (None, [], "Add breakpoint", "", None, "")

    if trigger_id == "btn-bp-cancel":
        return (dash.no_update, *cleared)

    if isinstance(trigger_id, dict) and trigger_id.get("type") == "bp-delete":
        bp_id = trigger_id["id"]
        _log_if_allowed(consent_data, session_data, "breakpoint_delete", cfg, breakpoint_id=bp_id)
        return (custom_to_store(delete_breakpoint(customs, bp_id)), *cleared)

    if isinstance(trigger_id, dict) and trigger_id.get("type") == "bp-edit":
        bp = find_breakpoint(customs, trigger_id["id"])
        if bp is None:
            raise PreventUpdate
        return dash.no_update, bp.id, [], f"Edit {bp.name}", bp.name, bp.width, bp.device

    data = {"name": name, "width": width, "device": device}
    try:
        if editing_id:
            customs = update_breakpoint(customs, editing_id, data)
            event = "breakpoint_update"
            bp_id = editing_id
        else:
            created = add_breakpoint(data)
            customs.append(created)
            event = "breakpoint_add"
            bp_id = created.id
    except ValidationError as exc:
        keep = [dash.no_update] * 4
        return (dash.no_update, dash.no_update, _error_items(exc.errors), *keep)
    except KeyError:
        # the breakpoint being edited was deleted meanwhile
        return (dash.no_update, *cleared)
    _log_if_allowed(consent_data, session_data, event, cfg, breakpoint_id=bp_id, breakpoint_width=data["width"])
    return (custom_to_store(customs), *cleared)


@app.callback(
    Output("store-ui", "data", allow_duplicate=True),
    Input({"type": "copy-code", "key": ALL}, "n_clicks"),
    State("store-config", "data"),
    State("store-session", "data"),
    State("store-consent", "data"),
    State("store-ui", "data"),
    prevent_initial_call=True,
)
def _log_copy(copy_clicks, config_data, session_data, consent_data, ui_store):
    ctx = dash.callback_context
    if not ctx.triggered or not ctx.triggered[0]["value"]:
        raise PreventUpdate
    cfg = validate_config(config_data) if config_data else None
    _log_if_allowed(consent_data, session_data, "copy", cfg, copy_target=ctx.triggered_id["key"])
    raise PreventUpdate


@app.callback(
    Output("store-consent", "data"),
    Input("btn-consent-accept", "n_clicks"),
    Input("btn-consent-decline", "n_clicks"),
    State("store-consent", "data"),
    State("store-session", "data"),
    prevent_initial_call=True,
)
def _handle_consent_decision(accept_clicks, decline_clicks, consent_data, session_data):
    ctx = dash.callback_context
    if not ctx.triggered:
        return dash.no_update
    data = dict(consent_data) if isinstance(consent_data, dict) else _default_consent_data()
    data["timestamp_utc"] = datetime.now(timezone.utc).isoformat()
    session_id = _get_session_id(session_data)
    if ctx.triggered_id == "btn-consent-accept":
        data["granted"] = True
        data["declined"] = False
        log_event(session_id, build_event_record(session_id, "consent_accepted"))
    else:
        data["granted"] = False
        data["declined"] = True
        close_session(session_id)
    return data


@app.callback(
    Output("consent-modal", "style"),
    Input("store-consent", "data"),
)
def _toggle_consent_modal(consent_data):
    return _modal_overlay_style(not _is_modal_dismissed(consent_data))


@app.callback(
    Output("download-log", "data"),
    Input("btn-download-jsonl", "n_clicks"),
    Input("btn-download-csv", "n_clicks"),
    State("store-session", "data"),
    State("store-consent", "data"),
    prevent_initial_call=True,
)
def _handle_download(jsonl_clicks, csv_clicks, session_data, consent_data):
    ctx = dash.callback_context
    if not ctx.triggered or not ctx.triggered[0]["value"] or not _is_logging_allowed(consent_data):
        return dash.no_update
    session_id = _get_session_id(session_data)
    close_session(session_id)
    path = session_log_path(session_id)
    if ctx.triggered_id == "btn-download-jsonl":
        if not path.exists():
            return dash.no_update
        return dcc.send_file(str(path))
    csv_content = build_csv_content(read_jsonl(path))
    if not csv_content:
        return dash.no_update
    return dcc.send_string(csv_content, filename=f"session_{safe_session_id(session_id)}.csv")


if __name__ == "__main__":
    app.run(debug=True)
