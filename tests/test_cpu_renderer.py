import numpy as np
import pytest

from nfrender.colors import render_cpu
from nfrender.cpu_renderer import CpuRenderer, RenderError, compute_max_nearest_index
from nfrender.render_config import (
    ColorValueMapping,
    MappingSource,
    RenderConfig,
    RenderMethod,
)


def _method(value_low=0.0, value_high=1.0):
    return RenderMethod(
        hue=ColorValueMapping(0.0, 0.0),
        saturation=ColorValueMapping(0.0, 0.0),
        value=ColorValueMapping(value_low, value_high, MappingSource.MAGNITUDE),
    )


def _config(n=1, nan=(10, 20, 30), low=0.0, high=1.0):
    return RenderConfig(methods=[_method(low, high) for _ in range(n)], color_for_nan=nan)


def _maps(rows=3, cols=4):
    has = np.ones((rows, cols), dtype=bool)
    nearest = np.zeros((rows, cols), dtype=np.uint8)
    diff = (np.arange(rows * cols, dtype=float) + 1).reshape(rows, cols) * (1 + 1j)
    return has, nearest, diff


def test_max_nearest_index_ignores_pixels_without_value():
    has = np.array([[True, False], [True, True]])
    idx = np.array([[1, 9], [0, 2]], dtype=np.uint8)
    assert compute_max_nearest_index(has, idx) == 2


def test_max_nearest_index_without_values_is_zero():
    has = np.zeros((2, 2), dtype=bool)
    idx = np.full((2, 2), 5, dtype=np.uint8)
    assert compute_max_nearest_index(has, idx) == 0


def test_max_nearest_index_shape_mismatch():
    with pytest.raises(ValueError):
        compute_max_nearest_index(np.zeros((2, 2), bool), np.zeros((2, 3), np.uint8))


def test_pixels_without_value_use_nan_color():
    has, nearest, diff = _maps()
    has[:] = False
    image = np.zeros((3, 4, 3), dtype=np.uint8)
    CpuRenderer().render_maps(_config(nan=(10, 20, 30)), has, nearest, diff, image)
    assert (image == np.array([10, 20, 30], dtype=np.uint8)).all()


def test_too_few_methods_is_an_error():
    has, nearest, diff = _maps()
    nearest[0, 0] = 2
    renderer = CpuRenderer()
    renderer.set_data(has, nearest, diff)
    with pytest.raises(RenderError, match="contains 1 colors, but required 2"):
        renderer.render(_config(1), np.zeros((3, 4, 3), np.uint8))


def test_render_without_data_fails():
    with pytest.raises(RenderError):
        CpuRenderer().render(_config(), np.zeros((3, 4, 3), np.uint8))


def test_reset_clears_data():
    renderer = CpuRenderer()
    renderer.set_data(*_maps())
    renderer.reset()
    with pytest.raises(RenderError):
        renderer.render(_config(), np.zeros((3, 4, 3), np.uint8))


def test_image_size_mismatch():
    renderer = CpuRenderer()
    renderer.set_data(*_maps())
    with pytest.raises(RenderError):
        renderer.render(_config(), np.zeros((2, 4, 3), np.uint8))


def test_data_shape_mismatch():
    has, nearest, diff = _maps()
    with pytest.raises(ValueError):
        CpuRenderer().set_data(has, nearest, diff[:, :2])


def test_magnitude_extremes_map_to_range_ends():
    has, nearest, diff = _maps()
    config = _config()
    image = np.zeros((3, 4, 3), dtype=np.uint8)
    CpuRenderer().render_maps(config, has, nearest, diff, image)
    assert tuple(image[0, 0]) == render_cpu(config, True, 0, 0.0, 0.0)
    assert tuple(image[2, 3]) == render_cpu(config, True, 0, 1.0, 1.0)


def test_constant_mapping_gives_uniform_image():
    has, nearest, diff = _maps()
    config = _config(low=0.5, high=0.5)
    image = np.zeros((3, 4, 3), dtype=np.uint8)
    CpuRenderer().render_maps(config, has, nearest, diff, image)
    expected = render_cpu(config, True, 0, 0.3, 0.7)
    assert all(tuple(px) == expected for px in image.reshape(-1, 3))


def test_skipped_border_is_untouched():
    has, nearest, diff = _maps(5, 6)
    image = np.full((5, 6, 3), 7, dtype=np.uint8)
    CpuRenderer().render_maps(_config(low=1.0, high=1.0), has, nearest, diff, image, 1, 2)
    assert (image[0] == 7).all() and (image[-1] == 7).all()
    assert (image[:, :2] == 7).all() and (image[:, -2:] == 7).all()
    assert not (image[1:4, 2:4] == 7).all()


def test_shallow_data_follows_source_changes():
    has, nearest, diff = _maps()
    renderer = CpuRenderer()
    renderer.set_data(has, nearest, diff, deep_copy=False)
    has[1, 1] = False
    image = np.zeros((3, 4, 3), np.uint8)
    renderer.render(_config(nan=(10, 20, 30)), image)
    assert tuple(image[1, 1]) == (10, 20, 30)


def test_deep_copy_is_independent():
    has, nearest, diff = _maps()
    renderer = CpuRenderer()
    renderer.set_data(has, nearest, diff, deep_copy=True)
    has[1, 1] = False
    image = np.zeros((3, 4, 3), np.uint8)
    renderer.render(_config(nan=(10, 20, 30)), image)
    assert tuple(image[1, 1]) != (10, 20, 30)
    assert renderer.rows == 3 and renderer.cols == 4


def test_threads_do_not_change_result():
    has, nearest, diff = _maps(6, 5)
    config = _config()
    single = np.zeros((6, 5, 3), np.uint8)
    multi = np.zeros((6, 5, 3), np.uint8)
    CpuRenderer().render_maps(config, has, nearest, diff, single)
    renderer = CpuRenderer()
    renderer.set_threads(4)
    assert renderer.threads == 4
    renderer.render_maps(config, has, nearest, diff, multi)
    assert np.array_equal(single, multi)


def test_invalid_thread_count():
    with pytest.raises(ValueError):
        CpuRenderer().set_threads(0)