from clamp_explorer.breakpoints import build_table
from clamp_explorer.graph_engine import build_figure, curve_traces, empty_figure, split_by_status
from clamp_explorer.interpolation import sample_curve
from clamp_explorer.models import BreakpointStatus


def test_split_by_status_groups_are_contiguous(px_config):
    samples = list(sample_curve(px_config))
    groups = split_by_status(samples)
    assert sum(len(g) for g in groups.values()) == len(samples)
    assert max(s.screen_width for s in groups[BreakpointStatus.MIN]) <= 320
    assert min(s.screen_width for s in groups[BreakpointStatus.MAX]) >= 1200


def test_fluid_trace_meets_the_plateaus(px_config):
    traces = curve_traces(px_config, list(sample_curve(px_config)))
    fluid = traces[1]
    assert fluid.x[0] == 320 and fluid.y[0] == 16.0
    assert fluid.x[-1] == 1200 and fluid.y[-1] == 32.0


def test_build_figure(px_config):
    fig = build_figure(px_config, build_table(px_config), uirevision="clamp-3", preview_width=500)
    assert len(fig.data) == 5
    assert fig.data[-1].name == "Breakpoints"
    assert len(fig.data[-1].x) == 8
    assert len(fig.layout.shapes) == 1
    assert fig.layout.uirevision == "clamp-3"
    assert fig.layout.yaxis.title.text == "Value (px)"


def test_build_figure_without_preview(rem_config):
    fig = build_figure(rem_config)
    assert len(fig.layout.shapes) == 0
    assert fig.layout.yaxis.title.text == "Value (rem)"


def test_empty_figure_shows_message():
    fig = empty_figure("nothing here")
    assert fig.layout.annotations[0].text == "nothing here"
    assert len(fig.data) == 0
