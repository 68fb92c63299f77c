from dataclasses import replace

import pytest

from clamp_explorer import config
from clamp_explorer.models import OutputUnit, ScalingConfig, ScalingFunction


@pytest.fixture
def px_config():
    return ScalingConfig(
        output_unit=OutputUnit.PX,
        root_font_size=16,
        min_size=16.0,
        max_size=32.0,
        min_screen_width=320,
        max_screen_width=1200,
    )


@pytest.fixture
def rem_config():
    return ScalingConfig(
        output_unit=OutputUnit.REM,
        root_font_size=16,
        min_size=1.0,
        max_size=2.0,
        min_screen_width=320,
        max_screen_width=1200,
    )


@pytest.fixture
def eased_configs(px_config):
    return [replace(px_config, scaling_function=fn) for fn in ScalingFunction]


@pytest.fixture
def form_values():
    """Raw form payload as the UI layers submit it."""
    return dict(config.DEFAULT_FORM_VALUES, custom_bezier="0.25,0.1,0.25,1")


@pytest.fixture
def log_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "DATA_DIR", tmp_path)
    return tmp_path
