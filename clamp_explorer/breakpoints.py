"""Default device breakpoints merged with user overrides.

Custom breakpoints live in the caller's state (a browser store, a session
dict); every function here takes that list and returns a new one.
"""

from __future__ import annotations

import uuid
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from . import config
from .emitter import format_number
from .interpolation import evaluate
from .models import Breakpoint, BreakpointResult, DeviceCategory, ScalingConfig
from .validation import validate_breakpoint_data

CUSTOM_ID_PREFIX = "custom-"


def _default(slug: str, name: str, width: int, device: str, category: DeviceCategory) -> Breakpoint:
    return Breakpoint(
        id=f"default-{slug}",
        name=name,
        width=width,
        device=device,
        category=category,
        is_default=True,
    )


DEFAULT_BREAKPOINTS: Sequence[Breakpoint] = (
    _default("mobile-s", "Mobile S", 320, "iPhone SE", DeviceCategory.MOBILE),
    _default("mobile-m", "Mobile M", 375, "iPhone 12/13", DeviceCategory.MOBILE),
    _default("mobile-l", "Mobile L", 425, "iPhone 12 Pro Max", DeviceCategory.MOBILE),
    _default("tablet", "Tablet", 768, "iPad", DeviceCategory.TABLET),
    _default("laptop", "Laptop", 1024, "Laptop", DeviceCategory.DESKTOP),
    _default("laptop-l", "Laptop L", 1440, 'MacBook Pro 16"', DeviceCategory.DESKTOP),
    _default("desktop", "Desktop", 1920, "Desktop HD", DeviceCategory.DESKTOP),
    _default("desktop-l", "Desktop L", 2560, "Desktop QHD", DeviceCategory.DESKTOP),
)
_DEFAULTS_BY_ID: Dict[str, Breakpoint] = {bp.id: bp for bp in DEFAULT_BREAKPOINTS}

# Glyph per category; renderers look up here instead of matching strings.
DEVICE_GLYPHS: Dict[DeviceCategory, str] = {
    DeviceCategory.MOBILE: "\U0001F4F1",
    DeviceCategory.TABLET: "\U0001F4DF",
    DeviceCategory.DESKTOP: "\U0001F5A5",
}


def category_for_width(width: int) -> DeviceCategory:
    if width < config.DEVICE_THRESHOLDS["mobile_max"]:
        return DeviceCategory.MOBILE
    if width < config.DEVICE_THRESHOLDS["tablet_max"]:
        return DeviceCategory.TABLET
    return DeviceCategory.DESKTOP


def is_default_id(breakpoint_id: str) -> bool:
    return breakpoint_id in _DEFAULTS_BY_ID


def merge_breakpoints(custom_breakpoints: Iterable[Breakpoint]) -> List[Breakpoint]:
    """Defaults minus overridden entries, plus customs, ordered by width.

    ``sorted`` is stable, so at equal widths defaults stay ahead of customs
    and customs keep their insertion order.
    """
    customs = list(custom_breakpoints)
    overridden = {bp.original_id for bp in customs if bp.original_id}
    visible = [bp for bp in DEFAULT_BREAKPOINTS if bp.id not in overridden]
    return sorted(visible + customs, key=lambda bp: bp.width)


def build_table(cfg: ScalingConfig, custom_breakpoints: Iterable[Breakpoint] = ()) -> List[BreakpointResult]:
    rows: List[BreakpointResult] = []
    for bp in merge_breakpoints(custom_breakpoints):
        value, status = evaluate(cfg, bp.width)
        rows.append(
            BreakpointResult(
                breakpoint=bp,
                computed_value=format_number(value),
                status=status,
                unit=cfg.unit,
            )
        )
    return rows


def _materialize(data: Mapping[str, object], *, breakpoint_id: str, original_id: Optional[str]) -> Breakpoint:
    clean = validate_breakpoint_data(data)
    return Breakpoint(
        id=breakpoint_id,
        name=clean["name"],
        width=clean["width"],
        device=clean["device"],
        category=category_for_width(clean["width"]),
        is_default=False,
        original_id=original_id,
    )


def add_breakpoint(data: Mapping[str, object]) -> Breakpoint:
    """Validate form data and build a new custom breakpoint with a fresh id.

    Raises ``ValidationError`` when a field is invalid.
    """
    return _materialize(data, breakpoint_id=f"{CUSTOM_ID_PREFIX}{uuid.uuid4().hex}", original_id=None)


def find_breakpoint(custom_breakpoints: Iterable[Breakpoint], breakpoint_id: str) -> Optional[Breakpoint]:
    for bp in custom_breakpoints:
        if bp.id == breakpoint_id:
            return bp
    return _DEFAULTS_BY_ID.get(breakpoint_id)


def delete_breakpoint(custom_breakpoints: Iterable[Breakpoint], breakpoint_id: str) -> List[Breakpoint]:
    """Drop a custom breakpoint. Default ids are left alone."""
    return [bp for bp in custom_breakpoints if bp.id != breakpoint_id]


def update_breakpoint(
    custom_breakpoints: Iterable[Breakpoint], breakpoint_id: str, data: Mapping[str, object]
) -> List[Breakpoint]:
    """Edit a breakpoint.

    Custom entries are replaced at their position. Editing a default creates
    an override (``original_id`` set) that hides the default row, or updates
    the existing override if there already is one.
    """
    customs = list(custom_breakpoints)
    if is_default_id(breakpoint_id):
        override_id = f"{CUSTOM_ID_PREFIX}{breakpoint_id}"
        edited = _materialize(data, breakpoint_id=override_id, original_id=breakpoint_id)
        for index, bp in enumerate(customs):
            if bp.original_id == breakpoint_id:
                customs[index] = edited
                return customs
        customs.append(edited)
        return customs

    for index, bp in enumerate(customs):
        if bp.id == breakpoint_id:
            customs[index] = _materialize(data, breakpoint_id=bp.id, original_id=bp.original_id)
            return customs
    raise KeyError(breakpoint_id)


def custom_from_store(raw: Optional[Iterable[Mapping[str, object]]]) -> List[Breakpoint]:
    return [Breakpoint.from_dict(item) for item in (raw or [])]


def custom_to_store(custom_breakpoints: Iterable[Breakpoint]) -> List[Dict[str, object]]:
    return [bp.to_dict() for bp in custom_breakpoints]
