import pytest

from nfrender.render_config import (
    ColorValueMapping,
    MappingSource,
    RenderConfig,
    RenderMethod,
)
from nfrender.zoomer_state import ComputationLog, CursorState, ZoomerState


def _method():
    m = ColorValueMapping(0.0, 1.0, MappingSource.MAGNITUDE)
    return RenderMethod(m, m, m)


def test_fps_empty_and_single():
    log = ComputationLog()
    assert log.fps(5) is None
    log.record(3.0)
    assert log.fps(5) is None


def test_fps_equal_times():
    log = ComputationLog()
    log.record(2.0)
    log.record(2.0)
    assert log.fps(5) is None


def test_fps_uniform():
    log = ComputationLog()
    for t in range(10):
        log.record(float(t))
    assert log.fps(3) == pytest.approx(1.0)


def test_fps_window_limits_records():
    log = ComputationLog()
    for t in (0.0, 10.0, 11.0, 12.0):
        log.record(t)
    assert log.fps(2) > log.fps(5)


def test_clear():
    log = ComputationLog()
    log.record(1.0)
    log.record(2.0)
    log.clear()
    assert len(log) == 0
    assert log.fps(5) is None


def test_record_default_timestamp_increases_length():
    log = ComputationLog()
    log.record()
    log.record()
    assert len(log) == 2 * 1


def test_capacity():
    methods = [_method(), _method(), _method()]
    state = ZoomerState(render_config=RenderConfig(methods=methods))
    assert state.render_config_capacity() == len(methods)


def test_cursor_state_and_escape():
    state = ZoomerState()
    assert state.cursor_state is CursorState.NONE
    state.set_cursor_state(CursorState.ERASE_POINT)
    assert state.cursor_state is CursorState.ERASE_POINT
    state.press_escape()
    assert state.cursor_state is CursorState.NONE


def test_window_title():
    state = ZoomerState()
    assert state.window_title() == "Newton fractal zoomer"
    for t in (0.0, 1.0, 2.0):
        state.computation_log.record(t)
    title = state.window_title()
    assert title.startswith("Newton fractal zoomer fps: ")
    assert float(title.rsplit(" ", 1)[1]) == pytest.approx(state.computation_log.fps(5))