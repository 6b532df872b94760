"""Per-pixel colouring: normalization and HSV to RGB rendering."""

from __future__ import annotations

import colorsys
import math
from dataclasses import dataclass
from typing import Sequence

from nfrender.render_config import RenderConfig, RenderMethod

__all__ = ["NormalizeOption", "hsv_to_rgb", "render_pixel", "render_cpu"]

Pixel = tuple[int, int, int]


@dataclass
class NormalizeOption:
    """Running minimum and maximum used to map values onto [0, 1]."""

    min: float = math.inf
    max: float = -math.inf

    def normalize(self, value: float) -> float:
        return (value - self.min) / (self.max - self.min)

    def add_data(self, value: float) -> None:
        self.min = min(self.min, value)
        self.max = max(self.max, value)


def hsv_to_rgb(h: float, s: float, v: float) -> tuple[float, float, float]:
    """Convert hue in degrees [0, 360) and saturation/value in [0, 1] to RGB in [0, 1]."""
    return colorsys.hsv_to_rgb(h / 360.0, s, v)


def render_pixel(
    methods: Sequence[RenderMethod],
    color_for_nan: Sequence[int],
    has_value: bool,
    nearest_idx: int,
    mag_normalized: float,
    arg_normalized: float,
) -> Pixel:
    """Colour one pixel with the method of its nearest root."""
    if not has_value:
        r, g, b = color_for_nan
        return (r, g, b)
    if not 0 <= nearest_idx < len(methods):
        raise IndexError(
            f"nearest index {nearest_idx} is out of range for {len(methods)} render methods"
        )
    h, s, v = methods[nearest_idx].map_color(mag_normalized, arg_normalized)
    r, g, b = hsv_to_rgb(h, s, v)
    return (int(255.0 * r), int(255.0 * g), int(255.0 * b))


def render_cpu(
    config: RenderConfig,
    has_value: bool,
    nearest_idx: int,
    mag_normalized: float,
    arg_normalized: float,
) -> Pixel:
    return render_pixel(
        config.methods,
        config.color_for_nan,
        has_value,
        nearest_idx,
        mag_normalized,
        arg_normalized,
    )