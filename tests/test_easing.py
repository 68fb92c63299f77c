import pytest

from clamp_explorer.easing import (
    cubic_bezier,
    ease,
    ease_in,
    ease_in_out,
    ease_out,
    parse_bezier,
)
from clamp_explorer.models import ScalingFunction


@pytest.mark.parametrize("function", list(ScalingFunction))
def test_curves_fix_both_ends(function):
    assert ease(0.0, function, "0.25,0.1,0.25,1") == pytest.approx(0.0, abs=1e-9)
    assert ease(1.0, function, "0.25,0.1,0.25,1") == pytest.approx(1.0, abs=1e-9)


def test_named_curve_formulas():
    assert ease_in(0.5) == pytest.approx(0.5)
    assert ease_in(0.25) == pytest.approx(0.15625)
    assert ease_out(0.5) == pytest.approx(0.875)
    assert ease_in_out(0.25) == pytest.approx(0.125)
    assert ease_in_out(0.75) == pytest.approx(0.9375)


def test_linear_bezier_is_identity():
    for t in (0.1, 0.33, 0.5, 0.9):
        assert cubic_bezier(t, 0.0, 0.0, 1.0, 1.0) == pytest.approx(t, abs=1e-6)


def test_css_ease_preset_is_known_value():
    # cubic-bezier(0.25, 0.1, 0.25, 1) at t=0.5 is about 0.8024
    assert cubic_bezier(0.5, 0.25, 0.1, 0.25, 1.0) == pytest.approx(0.8024, abs=5e-3)


def test_bezier_is_monotonic():
    values = [cubic_bezier(i / 50, 0.42, 0.0, 0.58, 1.0) for i in range(51)]
    assert values == sorted(values)


@pytest.mark.parametrize("raw", ["", "1,2,3", "a,b,c,d", "1,2,3,4,5", None, "nan,0,1,1"])
def test_malformed_bezier_falls_back_to_identity(raw):
    assert parse_bezier(raw) is None
    assert ease(0.3, ScalingFunction.CUSTOM, raw) == pytest.approx(0.3)


def test_parse_bezier_accepts_sequences():
    assert parse_bezier([0, 0.5, 1, "1"]) == (0.0, 0.5, 1.0, 1.0)
    assert parse_bezier(" 0.1, 0.2 ,0.3,0.4") == (0.1, 0.2, 0.3, 0.4)


def test_unknown_function_name_raises():
    with pytest.raises(ValueError):
        ease(0.5, "bounce")
