from dataclasses import replace

import pytest

from clamp_explorer.emitter import (
    emit,
    emit_clamp,
    emit_eased_segments,
    emit_fallback,
    emit_scss,
    format_number,
    sanitize_property_name,
)
from clamp_explorer.interpolation import fluid_line
from clamp_explorer.models import ScalingFunction


@pytest.mark.parametrize(
    "value, expected",
    [
        (1.5, "1.5"),
        (2.0, "2"),
        (10, "10"),
        (1.23456, "1.235"),
        (-2.5, "-2.5"),
        (0.0004, "0"),
        (-0.0004, "0"),
        (1.818181, "1.818"),
    ],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_px_clamp(px_config):
    assert emit_clamp(px_config, fluid_line(px_config)) == "clamp(16px, calc(1.818vw + 10.182px), 32px)"


def test_rem_clamp(rem_config):
    assert emit_clamp(rem_config, fluid_line(rem_config)) == "clamp(1rem, calc(1.818vw + 0.636rem), 2rem)"


def test_container_query_units(px_config):
    cfg = replace(px_config, use_container_queries=True)
    assert emit_clamp(cfg, fluid_line(cfg)) == "clamp(16px, calc(1.818cqi + 10.182px), 32px)"


def test_optional_blocks_are_empty_when_disabled(px_config):
    code = emit(px_config, fluid_line(px_config))
    assert code["css_fallback"] == ""
    assert code["css_custom_properties"] == ""


def test_optional_blocks_when_enabled(px_config):
    cfg = replace(
        px_config,
        include_fallback=True,
        generate_custom_properties=True,
        custom_property_name="heading-size",
    )
    code = emit(cfg, fluid_line(cfg))
    assert "@supports not (font-size: clamp(1px, 1vw, 2px))" in code["css_fallback"]
    assert "@media (min-width: 320px)" in code["css_fallback"]
    assert "font-size: 32px;" in code["css_fallback"]
    assert f"  --heading-size: {code['css_clamp']};" in code["css_custom_properties"]
    assert "var(--heading-size)" in code["css_custom_properties"]


def test_fallback_uses_container_probe(px_config):
    cfg = replace(px_config, use_container_queries=True)
    assert "clamp(1px, 1cqi, 2px)" in emit_fallback(cfg)


@pytest.mark.parametrize(
    "raw, expected",
    [("my prop!", "myprop"), ("size-2", "size-2"), ("", "fluid-size"), (None, "fluid-size"), ("!!", "fluid-size")],
)
def test_sanitize_property_name(raw, expected):
    assert sanitize_property_name(raw) == expected


def test_scss_px(px_config):
    assert "fluid-clamp(16, 32, 320, 1200, 'px');" in emit_scss(px_config)


def test_scss_rem_passes_root(rem_config):
    assert "fluid-clamp(1, 2, 320, 1200, 'rem', 16);" in emit_scss(rem_config)


def test_eased_segments_empty_for_linear(px_config):
    assert emit_eased_segments(px_config) == ""


def test_eased_segments_one_media_rule_per_segment(px_config):
    cfg = replace(px_config, scaling_function=ScalingFunction.EASE_IN)
    css = emit_eased_segments(cfg, segments=4)
    assert css.count("@media") == 4
    for width in (320, 540, 760, 980):
        assert f"@media (min-width: {width}px)" in css
    # the segment starting at the midpoint begins at the linear midpoint value
    assert "clamp(24px," in css
    assert css.rstrip().endswith("}")
