# nfrender

`nfrender` turns the raw result of a Newton fractal computation into an RGB
image. Each pixel of a computation result carries three things:

* whether the iteration converged (`has_value`),
* the index of the root it converged to (`nearest_idx`),
* the complex difference left at the end of the iteration.

A *render config* tells `nfrender` how to colour the pixels of each root. Hue,
saturation and value are each mapped linearly from either the normalised
magnitude or the normalised angle of the complex difference.

## Installation

```
pip install nfrender
```

`numpy` is the only runtime dependency. To run the test suite:

```
pip install "nfrender[test]"
pytest
```

## Render configs

A render config is a JSON document:

```json
{
  "color_for_nan": [0, 0, 0],
  "point_methods": [
    {
      "hue": {"range": [0, 120], "source": "angle"},
      "saturation": {"range": 1},
      "value": {"range": [0.3, 1], "source": "magnitude"}
    }
  ]
}
```

* `color_for_nan` is an RGB triple with components in `[0, 1]`, used for
  pixels where the iteration did not converge. It is stored as integers
  `0..255` (each component times 255, truncated).
* `point_methods` holds one entry per root.
* `range` is either a pair `[low, high]` or a single number. With a single
  number, `source` may be omitted and defaults to `magnitude`; with a pair it
  is required. `source` is `magnitude` or `angle`.
* Hue must stay within `[0, 360)`, saturation and value within `[0, 1]`.

`//` and `/* */` comments in a JSON file are accepted.

The classes are `RenderConfig` (`methods`, `color_for_nan`), `RenderMethod`
(`hue`, `saturation`, `value`, `map_color`) and `ColorValueMapping` (`low`,
`high`, `source`, `map`), with `MappingSource.MAGNITUDE` and
`MappingSource.ANGLE`. All of them live in `nfrender.render_config`.

Loading:

* `load_render_config(data)` from already decoded JSON,
* `load_render_config_from_stream(stream)` from a text or binary stream,
* `load_render_config_from_file(filename)`.

All three raise `RenderConfigError` with a message that says what is wrong.
`parse_render_method` and `parse_color_value_mapping` handle the single parts.

Saving:

* `save_render_config`, `save_render_method` and `save_mapping` return plain
  dictionaries. A mapping whose two ends are equal is written as a single
  number.
* `serialize_render_config` returns indented JSON text with sorted keys.

The saved `color_for_nan` holds the `0..255` integers. Loading accepts only
`[0, 1]`, so such a document does not load back unless every component is 0 or 1.

### Checking a preset

```
nfrender-check path/to/preset.json
```

If the file cannot be loaded as a render config, this prints the reason and
exits with status 1. Otherwise it exits with status 0. A path that is not an
existing file is reported as a usage error.

## Rendering from Python

```python
import numpy as np
from nfrender.render_config import load_render_config_from_file
from nfrender.cpu_renderer import CpuRenderer, RenderError

config = load_render_config_from_file("plasma.json")

renderer = CpuRenderer(threads=4)
renderer.set_data(has_value, nearest_idx, complex_difference, deep_copy=False)

image = np.zeros((renderer.rows, renderer.cols, 3), dtype=np.uint8)
try:
    renderer.render(config, image, skip_rows=0, skip_cols=0)
except RenderError as err:
    print(f"render failed: {err}")
```

`has_value` is a boolean array, `nearest_idx` an array of root indices and
`complex_difference` a complex array. All three are two-dimensional and of the
same shape.

* Without `deep_copy` the given arrays are referenced. With it they are copied.
* `render` fills the image in place and returns it.
* `render` raises `RenderError` in three cases: the config holds no more
  methods than the largest root index in use, the image shape does not match
  the data, or no data has been set.
* `skip_rows` and `skip_cols` leave a border of that many rows and columns
  untouched. They also exclude that border from normalisation.
* `render_maps` sets the data and renders it in one call.
* `reset` drops the stored data.
* `compute_max_nearest_index(has_value, nearest_index)` gives the largest root
  index among converged pixels.

Single pixels can be coloured with these functions in `nfrender.colors`:

* `render_cpu(config, has_value, nearest_idx, mag, arg)`,
* `render_pixel(methods, color_for_nan, ...)`,
* `hsv_to_rgb(h, s, v)`, which takes hue in degrees,
* `NormalizeOption`, which keeps the running minimum and maximum used for
  normalisation.

### GPU rendering

This package has no GPU backend. `nfrender.gpu.create_gpu_renderer(rows, cols)`
and `nfrender.gpu.create_render_config_gpu()` always raise
`GpuUnavailableError`, so callers can fall back to `CpuRenderer`.

## Other helpers

* **`nfrender.video_task`** parses the `compute`, `render` and `video` tables
  of a video task into `ComputeTask`, `RenderTask`, `VideoTask` and
  `VideoConfig`. The functions are `parse_compute_task`, `parse_render_task`,
  `parse_video_task` and `parse_video_config`, and each takes a mapping such as
  one read with `tomllib`. Missing or mistyped required keys raise `TaskError`.
  `parse_render_task` loads the referenced render JSON file.
  `ComputeTask.need_check_frame` tells whether a frame is listed in
  `no_check_frames`.
* **`nfrender.point_editor`** has `PointSet`, the editable list of roots
  (`add_point`, `erase_point`, `move_point`, `reset`, `current_points`).
  Adding past the config's capacity raises `PointEditError`, and so does
  erasing when two or fewer points remain. `point_to_pixel` places a root on a
  displayed image and returns `None` when it is off screen. `DrawOption` holds
  the marker colours and size.
* **`nfrender.point_model`** has `PointModel`, a table of points with `Column`
  for the real and imaginary parts. Editing the row after the last point
  appends a point. `set_value` returns `False` for text that is not a finite
  number.
* **`nfrender.zoomer_state`** has `ZoomerState`, which keeps a zoomer's
  `CursorState`, settings and window title. `ComputationLog` records
  computation times and estimates frames per second.
* **`nfrender.launcher`** has these functions:
  * `grab_configs` lists the JSON presets of a directory, and raises
    `LauncherError` if the directory is missing.
  * `preset_directories` locates the `compute_presets` and `render_presets`
    directories relative to an executable.
  * `build_launch_arguments` builds the argument list `source --rj render_json
    --scale N`.
  * `needs_mpfr_warning` flags mpfr tasks on Windows.
* **`nfrender.tasks`** has the option sets of a command-line tool:
  `ComputeJob`, `RenderJob`, `LookJob`, `TaskConvertJob`, and `ListJob` with
  `Listable`. It also has `save_data`, which writes the raw bytes of a byte
  string or array to a file.

## What this package does not do

* It does not compute Newton fractals.
* It does not read or write computation archives.
* It does not provide the interactive zoomer window, the preset launcher window
  or video encoding.
* `nfrender.tasks` and `nfrender.video_task` only describe and parse jobs;
  nothing in the package runs them.
* The only command installed is `nfrender-check`.