"""GPU rendering entry points; this build has no GPU backend."""

from __future__ import annotations

from typing import NoReturn

__all__ = ["GpuUnavailableError", "create_render_config_gpu", "create_gpu_renderer"]

_DISABLED = "CUDA support is disabled."


class GpuUnavailableError(RuntimeError):
    """Raised when GPU rendering is requested but not available."""


def create_render_config_gpu() -> NoReturn:
    """Create a GPU-side render configuration; always fails in this build."""
    raise GpuUnavailableError(_DISABLED)


def create_gpu_renderer(rows: int, cols: int) -> NoReturn:
    """Create a GPU renderer for a rows x cols image; always fails in this build."""
    raise GpuUnavailableError(_DISABLED)