"""Compute, render and video sections of a zoom-video task file."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Mapping

from nfrender.render_config import (
    RenderConfig,
    RenderConfigError,
    load_render_config_from_file,
)

__all__ = [
    "TaskError",
    "ComputeTask",
    "RenderTask",
    "VideoConfig",
    "VideoTask",
    "parse_compute_task",
    "parse_render_task",
    "parse_video_config",
    "parse_video_task",
]


class TaskError(ValueError):
    """Raised when a section of a task file is missing or malformed."""


def _default_threads() -> int:
    return os.cpu_count() or 1


def _matches(value: Any, kind: type) -> bool:
    if kind is bool:
        return isinstance(value, bool)
    if isinstance(value, bool):
        return False
    if kind is float:
        return isinstance(value, (int, float))
    return isinstance(value, kind)


def _convert(value: Any, kind: type) -> Any:
    return float(value) if kind is float else value


def _required(table: Mapping[str, Any], key: str, kind: type) -> Any:
    if key not in table:
        raise TaskError(f'Missing key "{key}"')
    value = table[key]
    if not _matches(value, kind):
        raise TaskError(f'"{key}" should be of type {kind.__name__}, but got {value!r}')
    return _convert(value, kind)


def _optional(table: Mapping[str, Any], key: str, kind: type, default: Any) -> Any:
    value = table.get(key)
    if value is None or not _matches(value, kind):
        return default
    return _convert(value, kind)


def _check_table(table: Any) -> Mapping[str, Any]:
    if table is None:
        raise TaskError("table is missing")
    if not isinstance(table, Mapping):
        raise TaskError(f"expected a table, but got {table!r}")
    return table


@dataclass
class ComputeTask:
    """How archives are computed and named."""

    archive_prefix: str
    archive_suffix: str
    archive_extension: str
    threads: int = field(default_factory=_default_threads)
    no_check_frames: set[int] = field(default_factory=set)

    def need_check_frame(self, frame_id: int) -> bool:
        return frame_id not in self.no_check_frames


@dataclass
class RenderTask:
    """How frames are rendered into images."""

    image_per_frame: int
    extra_image_num: int
    render_once: bool
    image_prefix: str
    image_suffix: str
    render_config: RenderConfig
    threads: int = field(default_factory=_default_threads)
    image_extension: str = "png"


@dataclass
class VideoConfig:
    """Naming and encoding of one kind of video output."""

    video_prefix: str
    video_suffix: str
    encoder_flags: str = ""
    encoder: str = "x264"
    extension: str = "mp4"


@dataclass
class VideoTask:
    """Temporary and final video settings."""

    temp_config: VideoConfig
    product_config: VideoConfig
    product_name: str
    threads: int = 4
    ffmpeg_exe: str = "ffmpeg"


def parse_compute_task(table: Any) -> ComputeTask:
    tbl = _check_table(table)
    task = ComputeTask(
        archive_prefix=_required(tbl, "archive_prefix", str),
        archive_suffix=_required(tbl, "archive_suffix", str),
        archive_extension=_required(tbl, "archive_extension", str),
        threads=_optional(tbl, "threads", int, _default_threads()),
    )
    if "no_check_frames" in tbl:
        frames = tbl["no_check_frames"]
        if not isinstance(frames, list):
            raise TaskError('"no_check_frames" should be array.')
        for frame in frames:
            if not _matches(frame, int):
                raise TaskError(f'"no_check_frames" should hold integers, but got {frame!r}')
            task.no_check_frames.add(frame)
    return task


def parse_render_task(table: Any) -> RenderTask:
    tbl = _check_table(table)
    image_per_frame = _required(tbl, "image_per_frame", int)
    extra_image_num = _required(tbl, "extra_image_num", int)
    threads = _optional(tbl, "threads", int, _default_threads())
    render_once = _required(tbl, "render_once", bool)
    image_prefix = _required(tbl, "image_prefix", str)
    image_suffix = _required(tbl, "image_suffix", str)
    json_file = _required(tbl, "render_json_file", str)
    try:
        config = load_render_config_from_file(json_file)
    except RenderConfigError as exc:
        raise TaskError(
            f'Failed to load render json file "{json_file}" because {exc}'
        ) from exc
    return RenderTask(
        image_per_frame=image_per_frame,
        extra_image_num=extra_image_num,
        render_once=render_once,
        image_prefix=image_prefix,
        image_suffix=image_suffix,
        render_config=config,
        threads=threads,
    )


def parse_video_config(table: Any) -> VideoConfig:
    tbl = _check_table(table)
    return VideoConfig(
        video_prefix=_required(tbl, "video_prefix", str),
        video_suffix=_required(tbl, "video_suffix", str),
        encoder_flags=_optional(tbl, "encoder_flags", str, ""),
        encoder=_optional(tbl, "encoder", str, "x264"),
        extension=_optional(tbl, "extension", str, "mp4"),
    )


def parse_video_task(table: Any) -> VideoTask:
    tbl = _check_table(table)
    temp_config = parse_video_config(tbl.get("temp"))
    product_config = parse_video_config(tbl.get("product"))
    threads = _optional(tbl, "threads", int, 4)
    ffmpeg_exe = _required(tbl, "ffmpeg_exe", str) if "ffmpeg_exe" in tbl else "ffmpeg"
    return VideoTask(
        temp_config=temp_config,
        product_config=product_config,
        product_name=_required(tbl, "product_name", str),
        threads=threads,
        ffmpeg_exe=ffmpeg_exe,
    )