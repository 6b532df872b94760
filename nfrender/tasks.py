"""Job descriptions of the command-line tool and raw data extraction."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

__all__ = [
    "Listable",
    "ComputeJob",
    "RenderJob",
    "LookJob",
    "TaskConvertJob",
    "ListJob",
    "save_data",
]


def _default_threads() -> int:
    return os.cpu_count() or 1


class Listable(Enum):
    """Items that can be listed."""

    OPENCL_DEVICES = "opencl_devices"


@dataclass
class ComputeJob:
    """Compute a task file into an archive, optionally overriding its settings."""

    filename: str
    archive_filename: str = ""
    row_override: int | None = None
    col_override: int | None = None
    iteration_override: int | None = None
    precision_override: int | None = None
    threads: int = field(default_factory=_default_threads)
    track_memory: bool = False


@dataclass
class RenderJob:
    """Render an archive into an image with a render configuration."""

    archive_file: str | None = None
    render_config_filename: str = ""
    image_filename: str = ""
    use_cpu: bool = False
    skip_rows: int = 0
    skip_cols: int = 0

    def __post_init__(self) -> None:
        if self.skip_rows < 0 or self.skip_cols < 0:
            raise ValueError("skip_rows and skip_cols must not be negative")


@dataclass
class LookJob:
    """Inspect an archive and extract parts of it to files."""

    source_file: str
    load_as_render_mode: bool = False
    show_metainfo: bool = False
    extract_metainfo: str = ""
    extract_has_value: str = ""
    extract_nearest_index: str = ""
    extract_complex_difference: str = ""


@dataclass
class TaskConvertJob:
    """Rewrite a task file with another number format."""

    input_task: str
    object_format: str
    out_file: str


@dataclass
class ListJob:
    """List available items."""

    items: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        valid = {item.value for item in Listable}
        for item in self.items:
            if item not in valid:
                raise ValueError(
                    f"{item!r} is not listable, expected one of {sorted(valid)}"
                )


def save_data(filename: str | os.PathLike[str], data: Any) -> None:
    """Write the raw bytes of data (bytes-like or array) to filename."""
    raw = data.tobytes() if hasattr(data, "tobytes") else bytes(data)
    try:
        with open(filename, "wb") as stream:
            stream.write(raw)
    except OSError as exc:
        raise OSError(f"Failed to create or open {os.fspath(filename)}") from exc