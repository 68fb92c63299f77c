from dataclasses import replace

import pytest

from clamp_explorer.interpolation import (
    compute_value,
    evaluate,
    fluid_line,
    generate_x_samples,
    progress_at,
    sample_curve,
)
from clamp_explorer.models import BreakpointStatus, ScalingFunction


def test_fluid_line_coefficients(px_config):
    line = fluid_line(px_config)
    assert line.slope == pytest.approx(16 / 880)
    assert line.intercept == pytest.approx(16 - 16 / 880 * 320)


def test_rem_line_is_computed_in_pixels(rem_config, px_config):
    assert fluid_line(rem_config) == fluid_line(px_config)


def test_boundaries_are_exact(eased_configs):
    for cfg in eased_configs:
        assert evaluate(cfg, cfg.min_screen_width) == (cfg.min_size, BreakpointStatus.MIN)
        assert evaluate(cfg, cfg.max_screen_width) == (cfg.max_size, BreakpointStatus.MAX)
        assert evaluate(cfg, 100) == (cfg.min_size, BreakpointStatus.MIN)
        assert evaluate(cfg, 5000) == (cfg.max_size, BreakpointStatus.MAX)


def test_linear_midpoint(px_config, rem_config):
    assert compute_value(px_config, 760) == pytest.approx(24.0)
    assert compute_value(rem_config, 760) == pytest.approx(1.5)
    assert evaluate(px_config, 760)[1] is BreakpointStatus.FLUID


def test_linear_matches_fluid_line(px_config):
    line = fluid_line(px_config)
    for width in (321, 500, 900, 1199):
        assert compute_value(px_config, width) == pytest.approx(line.slope * width + line.intercept)


def test_values_stay_in_range_and_increase(eased_configs):
    for cfg in eased_configs:
        values = [compute_value(cfg, w) for w in range(200, 1400, 10)]
        assert values == sorted(values)
        assert min(values) == cfg.min_size
        assert max(values) == cfg.max_size


def test_ease_in_is_below_linear(px_config):
    eased = replace(px_config, scaling_function=ScalingFunction.EASE_IN)
    assert compute_value(eased, 500) < compute_value(px_config, 500)


def test_progress_is_clamped(px_config):
    assert progress_at(px_config, 0) == 0.0
    assert progress_at(px_config, 2000) == 1.0
    assert progress_at(px_config, 760) == pytest.approx(0.5)


def test_sample_curve_covers_padded_range(px_config):
    samples = list(sample_curve(px_config))
    assert len(samples) >= 100
    assert samples[0].screen_width == pytest.approx(120)
    assert samples[-1].screen_width == pytest.approx(1400)
    assert {s.status for s in samples} == set(BreakpointStatus)


def test_sample_curve_is_restartable(px_config):
    first = list(sample_curve(px_config, count=11))
    second = list(sample_curve(px_config, count=11))
    assert first == second


def test_generate_x_samples():
    assert generate_x_samples(0, 10, 3) == [0, 5, 10]
    assert generate_x_samples(4, 10, 1) == [4]


def test_equal_widths_have_no_line(px_config):
    with pytest.raises(ZeroDivisionError):
        fluid_line(replace(px_config, max_screen_width=320))
