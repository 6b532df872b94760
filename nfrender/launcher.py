"""Preset discovery and argument building for launching the zoomer."""

from __future__ import annotations

import os
from typing import NamedTuple

__all__ = [
    "LauncherError",
    "grab_configs",
    "needs_mpfr_warning",
    "build_launch_arguments",
    "preset_directories",
]

_ARGUMENT_SEPARATOR = "#"


class LauncherError(OSError):
    """Raised when a preset directory cannot be used."""


class PresetDirectories(NamedTuple):
    """Where compute and render presets are looked up."""

    compute: str
    render: str


def grab_configs(dir_path: str | os.PathLike[str]) -> list[tuple[str, str]]:
    """List (filename, path) of every JSON preset in dir_path, ordered by name."""
    directory = os.fspath(dir_path)
    if not os.path.isdir(directory):
        raise LauncherError(f"{directory} doesn't exists.")

    configs = []
    for filename in sorted(os.listdir(directory), key=lambda name: (name.lower(), name)):
        if not filename.endswith(".json"):
            continue
        abs_path = f"{directory}/{filename}"
        if not os.path.exists(abs_path):
            continue
        configs.append((filename, abs_path))
    return configs


def needs_mpfr_warning(compute_src: str, is_windows: bool) -> bool:
    """Whether the user should be warned that the task needs mpfr, unavailable on Windows."""
    return is_windows and "mpfr" in compute_src


def build_launch_arguments(compute_src: str, render_json: str, scale: int) -> list[str]:
    """Command-line arguments for the zoomer: source, render JSON and scale."""
    joined = _ARGUMENT_SEPARATOR.join(
        (compute_src, "--rj", render_json, "--scale", str(scale))
    )
    return joined.split(_ARGUMENT_SEPARATOR)


def preset_directories(executable: str | os.PathLike[str]) -> PresetDirectories:
    """Preset directories located next to the directory holding executable."""
    location = os.path.dirname(os.fspath(executable)) or "."
    return PresetDirectories(
        compute=f"{location}/../compute_presets",
        render=f"{location}/../render_presets",
    )