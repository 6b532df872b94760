"""Colouring of computed Newton fractal maps on the CPU."""

from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import numpy as np

from nfrender.colors import NormalizeOption, render_cpu
from nfrender.render_config import RenderConfig

__all__ = ["RenderError", "CpuRenderer", "compute_max_nearest_index"]


class RenderError(RuntimeError):
    """Raised when the stored data cannot be rendered with a configuration."""


def _check_same_shape(*maps: np.ndarray) -> None:
    shapes = {m.shape for m in maps}
    if len(shapes) != 1:
        raise ValueError(f"All maps must have the same shape, got {sorted(shapes)}")
    (shape,) = shapes
    if len(shape) != 2:
        raise ValueError(f"Maps must be two-dimensional, got shape {shape}")


def compute_max_nearest_index(has_value: Any, nearest_index: Any) -> int:
    """Largest nearest-root index among the pixels that have a value; 0 if none."""
    has = np.asarray(has_value, dtype=bool)
    nearest = np.asarray(nearest_index, dtype=np.uint8)
    _check_same_shape(has, nearest)
    selected = nearest[has]
    return int(selected.max()) if selected.size else 0


def _as_f32(value: float) -> float:
    return float(np.float32(value))


def _span(skip: int, total: int) -> range:
    return range(skip, max(skip, total - skip))


class CpuRenderer:
    """Holds the computed maps of one frame and renders them to RGB images."""

    def __init__(self, threads: int = 1) -> None:
        self._threads = 1
        self.set_threads(threads)
        self._has_value: np.ndarray | None = None
        self._nearest_idx: np.ndarray | None = None
        self._complex_difference: np.ndarray | None = None
        self._magnitude: np.ndarray | None = None
        self._angle: np.ndarray | None = None
        self._nearest_idx_max: int | None = None

    @property
    def threads(self) -> int:
        return self._threads

    def set_threads(self, threads: int) -> None:
        if threads <= 0:
            raise ValueError(f"threads must be positive, got {threads}")
        self._threads = int(threads)

    @property
    def rows(self) -> int:
        return self._require_data().shape[0]

    @property
    def cols(self) -> int:
        return self._require_data().shape[1]

    def _require_data(self) -> np.ndarray:
        if self._has_value is None:
            raise RenderError("No data has been set.")
        return self._has_value

    def set_data(
        self,
        has_value: Any,
        nearest_idx: Any,
        complex_difference: Any,
        deep_copy: bool = False,
    ) -> None:
        """Store the maps; without deep_copy the given arrays are referenced."""
        if deep_copy:
            has = np.array(has_value, dtype=bool, copy=True)
            nearest = np.array(nearest_idx, dtype=np.uint8, copy=True)
            diff = np.array(complex_difference, dtype=np.complex128, copy=True)
        else:
            has = np.asarray(has_value, dtype=bool)
            nearest = np.asarray(nearest_idx, dtype=np.uint8)
            diff = np.asarray(complex_difference, dtype=np.complex128)
        _check_same_shape(has, nearest, diff)

        self._has_value = has
        self._nearest_idx = nearest
        self._complex_difference = diff
        self._magnitude = np.where(has, np.abs(diff), 0.0)
        self._angle = np.where(has, np.angle(diff), 0.0)
        self._nearest_idx_max = compute_max_nearest_index(has, nearest)

    def reset(self) -> None:
        self._has_value = None
        self._nearest_idx = None
        self._complex_difference = None
        self._magnitude = None
        self._angle = None
        self._nearest_idx_max = None

    def render(
        self,
        config: RenderConfig,
        image: np.ndarray,
        skip_rows: int = 0,
        skip_cols: int = 0,
    ) -> np.ndarray:
        """Fill image (rows x cols x 3, uint8) in place, leaving skipped borders untouched."""
        has = self._require_data()
        assert self._magnitude is not None and self._angle is not None
        assert self._nearest_idx is not None and self._nearest_idx_max is not None

        if skip_rows < 0 or skip_cols < 0:
            raise ValueError("skip_rows and skip_cols must not be negative")
        if self._nearest_idx_max >= len(config.methods):
            raise RenderError(
                f"The render config contains {len(config.methods)} colors, "
                f"but required {self._nearest_idx_max}."
            )
        if image.shape[:2] != has.shape:
            raise RenderError("The size of the image and the rendered data mismatch.")

        rows = _span(skip_rows, has.shape[0])
        cols = _span(skip_cols, has.shape[1])
        region = (slice(rows.start, rows.stop), slice(cols.start, cols.stop))
        region_has = has[region]

        mag_opt, arg_opt = NormalizeOption(), NormalizeOption()
        mags = self._magnitude[region][region_has]
        args = self._angle[region][region_has]
        if mags.size:
            mag_opt.min, mag_opt.max = float(mags.min()), float(mags.max())
            arg_opt.min, arg_opt.max = float(args.min()), float(args.max())
        else:
            mag_opt.min = 0.0
            arg_opt.min = 0.0
        mag_opt.max = max(mag_opt.max, math.nextafter(mag_opt.min, 1.0))
        arg_opt.max = max(arg_opt.max, math.nextafter(arg_opt.min, 1.0))

        magnitude, angle, nearest = self._magnitude, self._angle, self._nearest_idx

        def render_row(r: int) -> None:
            for c in cols:
                image[r, c] = render_cpu(
                    config,
                    bool(has[r, c]),
                    int(nearest[r, c]),
                    _as_f32(mag_opt.normalize(float(magnitude[r, c]))),
                    _as_f32(arg_opt.normalize(float(angle[r, c]))),
                )

        if self._threads > 1:
            with ThreadPoolExecutor(max_workers=self._threads) as pool:
                list(pool.map(render_row, rows))
        else:
            for r in rows:
                render_row(r)
        return image

    def render_maps(
        self,
        config: RenderConfig,
        has_value: Any,
        nearest_idx: Any,
        complex_difference: Any,
        image: np.ndarray,
        skip_rows: int = 0,
        skip_cols: int = 0,
    ) -> np.ndarray:
        """Reference the given maps and render them into image."""
        self.set_data(has_value, nearest_idx, complex_difference, deep_copy=False)
        return self.render(config, image, skip_rows, skip_cols)