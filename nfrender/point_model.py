"""Editable table of equation roots: one row per point, real and imaginary columns."""

from __future__ import annotations

import math
from enum import IntEnum
from typing import Iterable

__all__ = ["Column", "PointModel"]

ADD_ROW_MARKER = "+"


class Column(IntEnum):
    """Columns of the point table."""

    REAL = 0
    IMAGINARY = 1


_HEADERS = {
    Column.REAL: "Real part",
    Column.IMAGINARY: "Imaginary part",
}

_DESCRIPTIONS = {
    Column.REAL: "The real part of a point",
    Column.IMAGINARY: "The imaginary part of a point",
}


def _parse_number(text: str) -> float | None:
    """Parse a decimal number the way a numeric table cell accepts it."""
    if "_" in text:
        return None
    try:
        return float(text.strip())
    except ValueError:
        return None


def _format_number(value: float) -> str:
    return f"{value:g}"


class PointModel:
    """Rows of points; one extra row past the end lets a new point be entered."""

    def __init__(self, points: Iterable[complex] = ()) -> None:
        self._points: list[complex] = []
        self.reset_points(points)

    @property
    def points(self) -> list[complex]:
        """A copy of the points in row order."""
        return list(self._points)

    def reset_points(self, points: Iterable[complex]) -> None:
        self._points = [complex(p) for p in points]

    def row_count(self) -> int:
        return len(self._points)

    def column_count(self) -> int:
        return len(Column)

    def header(self, section: int) -> str | None:
        """Horizontal header text of a column, or None for unknown sections."""
        try:
            return _HEADERS[Column(section)]
        except ValueError:
            return None

    def description(self, column: int) -> str | None:
        """Explanatory text of a column, or None for unknown columns."""
        try:
            return _DESCRIPTIONS[Column(column)]
        except ValueError:
            return None

    def display(self, row: int, column: int) -> str | None:
        """Text shown in a cell; the row after the last point shows the add marker."""
        if row < 0 or column < 0:
            return None
        if row >= self.row_count() + 1 or column >= self.column_count():
            return None
        if row >= len(self._points):
            return ADD_ROW_MARKER
        point = self._points[row]
        part = point.real if column == Column.REAL else point.imag
        return _format_number(part)

    def is_selectable(self, row: int) -> bool:
        """Rows holding a point are selectable; the add row is only editable."""
        return 0 <= row < len(self._points)

    def set_value(self, row: int, column: int, text: str) -> bool:
        """Set one part of a point from text; editing the add row appends a point.

        Returns False when the text is not a finite number.
        """
        if not 0 <= row <= len(self._points):
            raise IndexError(f"row {row} is out of range for {len(self._points)} points")
        try:
            col = Column(column)
        except ValueError:
            raise IndexError(f"column {column} is out of range") from None

        value = _parse_number(text)
        if value is None or not math.isfinite(value):
            return False

        if row == len(self._points):
            self._points.append(0j)

        point = self._points[row]
        if col is Column.REAL:
            self._points[row] = complex(value, point.imag)
        else:
            self._points[row] = complex(point.real, value)
        return True