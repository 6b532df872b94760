"""Editable set of equation roots and their placement on the displayed image."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence

__all__ = ["PointEditError", "DrawOption", "PointSet", "point_to_pixel"]

MIN_POINTS = 2


class PointEditError(ValueError):
    """Raised when a point cannot be added or erased."""


@dataclass(frozen=True)
class DrawOption:
    """Colours (ARGB) and size in pixels of the marker drawn for each point."""

    background_color: int = 0xFFFFFFFF
    text_color: int = 0xFF000000
    icon_size: int = 10


def _as_complex(value: complex | Sequence[float]) -> complex:
    if isinstance(value, (int, float, complex)):
        return complex(value)
    real, imag = value
    return complex(float(real), float(imag))


class PointSet:
    """Ordered roots of the equation being edited."""

    def __init__(self, points: Iterable[complex] = ()) -> None:
        self._points: list[complex] = [complex(p) for p in points]

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[complex]:
        return iter(self._points)

    def __getitem__(self, index: int) -> complex:
        return self._points[index]

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._points):
            raise IndexError(
                f"point index {index} is out of range for {len(self._points)} points"
            )

    def add_point(self, coordinate: complex | Sequence[float], capacity: int) -> int:
        """Append a point; capacity is the number of methods the render config holds."""
        if len(self._points) + 1 > capacity:
            raise PointEditError(
                "Can not add more points: "
                f"The assigned render config can hold only {capacity} points"
            )
        self._points.append(_as_complex(coordinate))
        return len(self._points) - 1

    def erase_point(self, index: int) -> complex:
        """Remove and return the point at index; at least two points must remain possible."""
        self._check_index(index)
        if len(self._points) <= MIN_POINTS:
            raise PointEditError(
                "Can not erase this point: "
                f"There are only {len(self._points)} points, "
                f"but expected at least {MIN_POINTS} points."
            )
        return self._points.pop(index)

    def move_point(self, index: int, coordinate: complex | Sequence[float]) -> None:
        self._check_index(index)
        self._points[index] = _as_complex(coordinate)

    def reset(self, points: Iterable[complex]) -> None:
        self._points = [complex(p) for p in points]

    def current_points(self) -> list[complex]:
        """A copy of the points in order."""
        return list(self._points)


def point_to_pixel(
    coordinate: complex | Sequence[float],
    center: complex | Sequence[float],
    x_span: float,
    y_span: float,
    width: int,
    height: int,
    icon_size: int = DrawOption().icon_size,
) -> tuple[int, int] | None:
    """Top-left pixel of the marker for coordinate, or None when it is not visible.

    The imaginary axis grows upwards while pixel rows grow downwards.
    """
    if x_span == 0 or y_span == 0:
        return None
    coord = _as_complex(coordinate)
    mid = _as_complex(center)

    x_offset = (coord.real - mid.real) / x_span
    y_offset = (coord.imag - mid.imag) / y_span

    w_pos = int(x_offset * width + width / 2)
    h_pos = int(-y_offset * height + height / 2)

    if w_pos < 0 or w_pos >= width or h_pos < 0 or h_pos >= height:
        return None

    half = icon_size // 2
    return (w_pos - half, h_pos - half)