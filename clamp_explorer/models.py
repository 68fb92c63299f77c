"""Value objects shared by the engine and the UI layers."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from . import config

Bezier = Tuple[float, float, float, float]


class OutputUnit(str, Enum):
    PX = "px"
    REM = "rem"


class ScalingFunction(str, Enum):
    LINEAR = "linear"
    EASE_IN = "ease-in"
    EASE_OUT = "ease-out"
    EASE_IN_OUT = "ease-in-out"
    CUSTOM = "custom"


class DeviceCategory(str, Enum):
    MOBILE = "mobile"
    TABLET = "tablet"
    DESKTOP = "desktop"


class BreakpointStatus(str, Enum):
    MIN = "min"
    MAX = "max"
    FLUID = "fluid"


@dataclass(frozen=True)
class ScalingConfig:
    """A validated fluid-scaling setup.

    ``min_size`` and ``max_size`` are expressed in ``output_unit``; screen
    widths are always pixels.
    """

    output_unit: OutputUnit = OutputUnit.PX
    root_font_size: float = 16
    min_size: float = 16.0
    max_size: float = 32.0
    min_screen_width: int = 320
    max_screen_width: int = 1200
    scaling_function: ScalingFunction = ScalingFunction.LINEAR
    custom_bezier: Bezier = config.DEFAULT_FORM_VALUES["custom_bezier"]
    use_container_queries: bool = False
    include_fallback: bool = False
    generate_custom_properties: bool = False
    custom_property_name: str = "fluid-size"

    @property
    def fluid_unit(self) -> str:
        return "cqi" if self.use_container_queries else "vw"

    @property
    def unit(self) -> str:
        return self.output_unit.value

    def to_px(self, value: float) -> float:
        if self.output_unit is OutputUnit.REM:
            return value * self.root_font_size
        return value

    def from_px(self, value: float) -> float:
        if self.output_unit is OutputUnit.REM:
            return value / self.root_font_size
        return value

    def with_output_unit(self, unit: OutputUnit) -> "ScalingConfig":
        """Switch units, converting the sizes so the rendered value stays the same."""
        unit = OutputUnit(unit)
        if unit is self.output_unit:
            return self
        digits = config.UNIT_SWITCH_PRECISION
        min_px, max_px = self.to_px(self.min_size), self.to_px(self.max_size)
        if unit is OutputUnit.REM:
            min_size, max_size = min_px / self.root_font_size, max_px / self.root_font_size
        else:
            min_size, max_size = min_px, max_px
        return replace(
            self,
            output_unit=unit,
            min_size=round(min_size, digits),
            max_size=round(max_size, digits),
        )

    def to_form(self) -> Dict[str, Any]:
        form = asdict(self)
        form["output_unit"] = self.output_unit.value
        form["scaling_function"] = self.scaling_function.value
        form["custom_bezier"] = list(self.custom_bezier)
        return form


@dataclass(frozen=True)
class Breakpoint:
    id: str
    name: str
    width: int
    device: str
    category: DeviceCategory
    is_default: bool = False
    original_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["category"] = self.category.value
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Breakpoint":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            width=int(data["width"]),
            device=str(data["device"]),
            category=DeviceCategory(data["category"]),
            is_default=bool(data.get("is_default", False)),
            original_id=data.get("original_id"),
        )


@dataclass(frozen=True)
class BreakpointResult:
    breakpoint: Breakpoint
    computed_value: str
    status: BreakpointStatus
    unit: str

    def to_row(self) -> Dict[str, Any]:
        row = self.breakpoint.to_dict()
        row.update(
            computed_value=self.computed_value,
            status=self.status.value,
            unit=self.unit,
        )
        return row


@dataclass(frozen=True)
class FluidLine:
    """Linear coefficients in pixel space: ``size_px = slope * width + intercept``."""

    slope: float
    intercept: float


@dataclass(frozen=True)
class CurveSample:
    screen_width: float
    value: float
    status: BreakpointStatus


@dataclass(frozen=True)
class ClampOutputs:
    css_clamp: str = ""
    css_fallback: str = ""
    css_custom_properties: str = ""
    scss_function: str = ""
    css_eased: str = ""
    breakpoint_table: List[BreakpointResult] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "ClampOutputs":
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "css_clamp": self.css_clamp,
            "css_fallback": self.css_fallback,
            "css_custom_properties": self.css_custom_properties,
            "scss_function": self.scss_function,
            "css_eased": self.css_eased,
            "breakpoint_table": [row.to_row() for row in self.breakpoint_table],
        }
