import json
import os
import tomllib

import pytest

from nfrender.render_config import MappingSource
from nfrender.video_task import (
    TaskError,
    parse_compute_task,
    parse_render_task,
    parse_video_config,
    parse_video_task,
)

COMPUTE_TOML = """
threads = 3
archive_prefix = "frame"
archive_suffix = "-x"
archive_extension = "nfar"
no_check_frames = [2, 5]
"""

VIDEO_TOML = """
product_name = "zoom"
[temp]
video_prefix = "tmp"
video_suffix = ""
[product]
video_prefix = "out"
video_suffix = "-final"
encoder = "x265"
extension = "mkv"
encoder_flags = "-crf 18"
"""

RENDER_JSON = {
    "color_for_nan": [0, 0, 0],
    "point_methods": [
        {
            "hue": {"range": [0, 359], "source": "angle"},
            "saturation": {"range": 1},
            "value": {"range": [0.5, 1], "source": "magnitude"},
        }
    ],
}


def test_parse_compute_task():
    task = parse_compute_task(tomllib.loads(COMPUTE_TOML))
    assert task.threads == 3
    assert (task.archive_prefix, task.archive_suffix, task.archive_extension) == (
        "frame",
        "-x",
        "nfar",
    )
    assert task.no_check_frames == {2, 5}
    assert not task.need_check_frame(2)
    assert task.need_check_frame(3)


def test_compute_threads_default():
    data = tomllib.loads(COMPUTE_TOML)
    del data["threads"]
    assert parse_compute_task(data).threads == (os.cpu_count() or 1)


def test_no_check_frames_must_be_array():
    data = tomllib.loads(COMPUTE_TOML)
    data["no_check_frames"] = 4
    with pytest.raises(TaskError, match="should be array"):
        parse_compute_task(data)


def test_missing_required_key():
    data = tomllib.loads(COMPUTE_TOML)
    del data["archive_prefix"]
    with pytest.raises(TaskError, match="archive_prefix"):
        parse_compute_task(data)


def test_missing_table():
    with pytest.raises(TaskError):
        parse_compute_task(None)


def test_video_config_defaults():
    cfg = parse_video_config({"video_prefix": "a", "video_suffix": "b"})
    assert (cfg.encoder, cfg.extension, cfg.encoder_flags) == ("x264", "mp4", "")


def test_parse_video_task():
    task = parse_video_task(tomllib.loads(VIDEO_TOML))
    assert task.product_name == "zoom"
    assert task.threads == 4
    assert task.ffmpeg_exe == "ffmpeg"
    assert task.temp_config.video_prefix == "tmp"
    assert task.product_config.encoder == "x265"
    assert task.product_config.extension == "mkv"
    assert task.product_config.encoder_flags == "-crf 18"


def test_video_task_needs_product_table():
    data = tomllib.loads(VIDEO_TOML)
    del data["product"]
    with pytest.raises(TaskError):
        parse_video_task(data)


def test_video_task_wrong_type():
    data = tomllib.loads(VIDEO_TOML)
    data["product_name"] = 3
    with pytest.raises(TaskError):
        parse_video_task(data)


def _render_table(path):
    return {
        "image_per_frame": 2,
        "extra_image_num": 1,
        "render_once": True,
        "image_prefix": "img",
        "image_suffix": "",
        "render_json_file": str(path),
    }


def test_parse_render_task(tmp_path):
    path = tmp_path / "render.json"
    path.write_text(json.dumps(RENDER_JSON), encoding="utf-8")
    task = parse_render_task(_render_table(path))
    assert task.image_per_frame == 2
    assert task.extra_image_num == 1
    assert task.render_once is True
    assert task.image_extension == "png"
    assert len(task.render_config.methods) == 1
    assert task.render_config.methods[0].hue.source is MappingSource.ANGLE


def test_render_task_bad_json(tmp_path):
    path = tmp_path / "render.json"
    path.write_text('{"color_for_nan": [0, 0]}', encoding="utf-8")
    with pytest.raises(TaskError, match="Failed to load render json file"):
        parse_render_task(_render_table(path))


def test_render_task_missing_json(tmp_path):
    with pytest.raises(TaskError):
        parse_render_task(_render_table(tmp_path / "absent.json"))