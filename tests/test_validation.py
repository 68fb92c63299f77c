import pytest

from clamp_explorer.models import OutputUnit, ScalingConfig, ScalingFunction
from clamp_explorer.validation import (
    ConfigInvariantViolation,
    ValidationError,
    coerce_bool,
    coerce_float,
    collect_breakpoint_errors,
    collect_config_errors,
    validate_breakpoint_data,
    validate_config,
)


def test_defaults_validate(form_values):
    assert validate_config(form_values) == ScalingConfig()


def test_config_objects_revalidate(rem_config):
    assert validate_config(rem_config) == rem_config


def test_numeric_strings_are_accepted(form_values):
    form_values.update(min_size="1.25", max_size="2.5", output_unit="rem", root_font_size="18")
    cfg = validate_config(form_values)
    assert cfg.output_unit is OutputUnit.REM
    assert cfg.root_font_size == 18
    assert cfg.min_size == 1.25


def test_ordering_only_failures_raise_invariant_violation(form_values):
    form_values.update(min_size=32, max_size=16)
    with pytest.raises(ConfigInvariantViolation) as excinfo:
        validate_config(form_values)
    assert set(excinfo.value.errors) == {"max_size"}


def test_equal_screen_widths_are_rejected(form_values):
    form_values.update(min_screen_width=800, max_screen_width=800)
    with pytest.raises(ConfigInvariantViolation) as excinfo:
        validate_config(form_values)
    assert "max_screen_width" in excinfo.value.errors


def test_mixed_failures_raise_plain_validation_error(form_values):
    form_values.update(min_size=32, max_size=16, root_font_size=7)
    with pytest.raises(ValidationError) as excinfo:
        validate_config(form_values)
    assert not isinstance(excinfo.value, ConfigInvariantViolation)
    assert set(excinfo.value.errors) == {"root_font_size", "max_size"}


@pytest.mark.parametrize(
    "field, value, message",
    [
        ("root_font_size", 7, "Root Font Size (px) should be at least 8"),
        ("root_font_size", 16.5, "Root Font Size (px) must be a whole number"),
        ("min_size", "abc", "Please enter a valid number"),
        ("min_size", None, "Min Size is required"),
        ("min_size", "", "Min Size is required"),
        ("min_size", True, "Please enter a valid number"),
        ("max_size", -1, "Max Size must be positive"),
        ("max_size", 1001, "Max Size should be at most 1000.0"),
        ("min_screen_width", 100, "Min Screen Width (px) should be at least 200"),
        ("max_screen_width", 5000, "Max Screen Width (px) should be at most 4000"),
    ],
)
def test_number_field_errors(form_values, field, value, message):
    form_values[field] = value
    assert collect_config_errors(form_values)[field] == message


def test_unknown_unit_and_function(form_values):
    form_values.update(output_unit="em", scaling_function="bounce")
    errors = collect_config_errors(form_values)
    assert set(errors) == {"output_unit", "scaling_function"}


def test_custom_bezier_is_checked_only_for_custom(form_values):
    form_values["custom_bezier"] = "0.1,1.5,0.3,1"
    assert collect_config_errors(form_values) == {}
    form_values["scaling_function"] = "custom"
    assert "custom_bezier" in collect_config_errors(form_values)
    form_values["custom_bezier"] = "nope"
    assert collect_config_errors(form_values)["custom_bezier"].startswith("Enter four numbers")


def test_custom_bezier_is_parsed(form_values):
    form_values.update(scaling_function="custom", custom_bezier="0.42, 0, 0.58, 1")
    cfg = validate_config(form_values)
    assert cfg.scaling_function is ScalingFunction.CUSTOM
    assert cfg.custom_bezier == (0.42, 0.0, 0.58, 1.0)


@pytest.mark.parametrize("name", ["", "1size", "size_one", "x" * 51])
def test_property_name_rules_when_generating(form_values, name):
    form_values.update(generate_custom_properties=True, custom_property_name=name)
    assert "custom_property_name" in collect_config_errors(form_values)


def test_property_name_ignored_when_not_generating(form_values):
    form_values.update(generate_custom_properties=False, custom_property_name="1size")
    assert collect_config_errors(form_values) == {}


def test_valid_property_name(form_values):
    form_values.update(generate_custom_properties="on", custom_property_name=" heading-2 ")
    cfg = validate_config(form_values)
    assert cfg.generate_custom_properties is True
    assert cfg.custom_property_name == "heading-2"


def test_error_message_summarises_fields(form_values):
    form_values["min_size"] = None
    with pytest.raises(ValueError, match="min_size: Min Size is required"):
        validate_config(form_values)


def test_breakpoint_data_is_cleaned():
    clean = validate_breakpoint_data({"name": " Foldable ", "width": "900", "device": "Galaxy Fold (open)"})
    assert clean == {"name": "Foldable", "width": 900, "device": "Galaxy Fold (open)"}


@pytest.mark.parametrize(
    "data, field",
    [
        ({"name": "x" * 31, "width": 900, "device": "Phone"}, "name"),
        ({"name": "Bad/Name", "width": 900, "device": "Phone"}, "name"),
        ({"name": "Ok", "width": 199, "device": "Phone"}, "width"),
        ({"name": "Ok", "width": 900.5, "device": "Phone"}, "width"),
        ({"name": "Ok", "width": "", "device": "Phone"}, "width"),
        ({"name": "Ok", "width": 900, "device": ""}, "device"),
        ({"name": "Ok", "width": 900, "device": "Phone 16\""}, "device"),
    ],
)
def test_breakpoint_errors(data, field):
    assert field in collect_breakpoint_errors(data)


def test_coercion_helpers():
    assert coerce_float("2.5") == 2.5
    assert coerce_float("inf") is None
    assert coerce_float(False) is None
    assert coerce_bool("Yes") is True
    assert coerce_bool("0") is False
    assert coerce_bool(["fallback"]) is True
    assert coerce_bool([]) is False
