"""Render configuration: colour mappings per root and their JSON form."""

from __future__ import annotations

import argparse
import json
import math
import os
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import IO, Any, Iterable

__all__ = [
    "RenderConfigError",
    "MappingSource",
    "ColorValueMapping",
    "RenderMethod",
    "RenderConfig",
    "parse_color_value_mapping",
    "parse_render_method",
    "load_render_config",
    "load_render_config_from_stream",
    "load_render_config_from_file",
    "save_mapping",
    "save_render_method",
    "save_render_config",
    "serialize_render_config",
    "main",
]

HUE_UPPER_BOUND = math.nextafter(360.0, -1.0)


class RenderConfigError(ValueError):
    """Raised when a render configuration cannot be read or is invalid."""


class MappingSource(Enum):
    """Which normalized quantity drives a colour channel."""

    MAGNITUDE = "magnitude"
    ANGLE = "angle"


@dataclass(frozen=True)
class ColorValueMapping:
    """Linear mapping of a normalized value in [0, 1] onto [low, high]."""

    low: float
    high: float
    source: MappingSource = MappingSource.MAGNITUDE

    def map(self, mag_normalized: float, arg_normalized: float) -> float:
        before = mag_normalized if self.source is MappingSource.MAGNITUDE else arg_normalized
        return before * (self.high - self.low) + self.low


@dataclass(frozen=True)
class RenderMethod:
    """HSV mappings used to colour the pixels converging to one root."""

    hue: ColorValueMapping
    saturation: ColorValueMapping
    value: ColorValueMapping

    def map_color(self, mag_normalized: float, arg_normalized: float) -> tuple[float, float, float]:
        """Return (hue, saturation, value) for the given normalized inputs."""
        return (
            self.hue.map(mag_normalized, arg_normalized),
            self.saturation.map(mag_normalized, arg_normalized),
            self.value.map(mag_normalized, arg_normalized),
        )


@dataclass
class RenderConfig:
    """Render methods, one per root, and the colour of pixels without a result."""

    methods: list[RenderMethod] = field(default_factory=list)
    color_for_nan: tuple[int, int, int] = (0, 0, 0)


def _as_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a number, but got {value!r}")
    return float(value)


def _fmt(number: float) -> str:
    text = repr(float(number))
    return text[:-2] if text.endswith(".0") else text


def parse_color_value_mapping(data: Any) -> ColorValueMapping:
    """Parse one channel mapping: a range (number or pair) and a source."""
    try:
        bounds = data["range"]
        if isinstance(bounds, list):
            if len(bounds) != 2:
                raise RenderConfigError(
                    f"range should be of size 2, but actually {len(bounds)}"
                )
            low, high = _as_float(bounds[0]), _as_float(bounds[1])
            single = False
        else:
            low = high = _as_float(bounds)
            single = True

        if "source" not in data:
            if not single:
                raise RenderConfigError(
                    "The range is not fixed at a single value, so source can not be omitted."
                )
            source_name = "magnitude"
        else:
            source_name = data["source"]
            if not isinstance(source_name, str):
                raise TypeError(f"source should be a string, but got {source_name!r}")
    except (KeyError, TypeError, IndexError) as exc:
        raise RenderConfigError(
            "Exception occurred while parsing color value mapping, detail: " f"{exc}"
        ) from exc

    try:
        source = MappingSource(source_name)
    except ValueError:
        raise RenderConfigError(
            f'Invalid render source option named "{source_name}"'
        ) from None
    return ColorValueMapping(low, high, source)


def _check_range(mapping: ColorValueMapping, lower: float, upper: float) -> None:
    for idx, bound in enumerate((mapping.low, mapping.high)):
        if bound < lower or bound > upper:
            raise RenderConfigError(
                f"The range should be in range [{_fmt(lower)}, {_fmt(upper)}], "
                f"but met {_fmt(bound)} at index {idx}."
            )


_CHANNELS = (
    ("hue", 0.0, HUE_UPPER_BOUND),
    ("saturation", 0.0, 1.0),
    ("value", 0.0, 1.0),
)


def parse_render_method(data: Any) -> RenderMethod:
    """Parse the hue, saturation and value mappings of one render method."""
    channels: dict[str, ColorValueMapping] = {}
    for name, lower, upper in _CHANNELS:
        try:
            raw = data[name]
        except (KeyError, TypeError, IndexError) as exc:
            raise RenderConfigError(
                f"Exception occurred while parsing render method, detail: {exc}"
            ) from exc
        try:
            mapping = parse_color_value_mapping(raw)
        except RenderConfigError as exc:
            raise RenderConfigError(f"Failed to parse {name}, detail: {exc}") from exc
        try:
            _check_range(mapping, lower, upper)
        except RenderConfigError as exc:
            raise RenderConfigError(f"The range of {name} is invalid: {exc}") from exc
        channels[name] = mapping
    return RenderMethod(**channels)


def load_render_config(data: Any) -> RenderConfig:
    """Build a RenderConfig from already decoded JSON data."""
    try:
        nan_values = data["color_for_nan"]
        if not isinstance(nan_values, list):
            raise TypeError("color_for_nan should be an array")
        if len(nan_values) != 3:
            raise RenderConfigError(
                "color_for_nan should be an array with size = 3, but actual size is "
                f"{len(nan_values)}."
            )
        channels = []
        for raw in nan_values:
            val = _as_float(raw)
            if val < 0 or val > 1:
                raise RenderConfigError(f"The rgb value {_fmt(val)} is not in range [0,1]")
            channels.append(int(val * 255))

        methods_data = data["point_methods"]
        if not isinstance(methods_data, list):
            raise TypeError("point_methods should be an array")
        methods = []
        for i, method_data in enumerate(methods_data):
            try:
                methods.append(parse_render_method(method_data))
            except RenderConfigError as exc:
                raise RenderConfigError(
                    f"Failed to parse render method at index {i}, detail: {exc}"
                ) from exc
    except (KeyError, TypeError, IndexError) as exc:
        raise RenderConfigError(
            f"Exception occurred while parsing render config, detail: {exc}"
        ) from exc

    return RenderConfig(methods=methods, color_for_nan=(channels[0], channels[1], channels[2]))


_COMMENT_OR_STRING = re.compile(r'"(?:\\.|[^"\\])*"|//[^\n]*|/\*.*?\*/', re.DOTALL)


def _strip_comments(text: str) -> str:
    def replace(match: re.Match[str]) -> str:
        token = match.group(0)
        if token.startswith('"'):
            return token
        return " "

    return _COMMENT_OR_STRING.sub(replace, text)


def load_render_config_from_stream(stream: IO[Any]) -> RenderConfig:
    """Read JSON (comments allowed) from a text or binary stream."""
    content = stream.read()
    if isinstance(content, bytes):
        content = content.decode("utf-8")
    try:
        data = json.loads(_strip_comments(content))
    except json.JSONDecodeError as exc:
        raise RenderConfigError(
            f"Exception occurred while parsing json, detail: {exc}"
        ) from exc
    return load_render_config(data)


def load_render_config_from_file(filename: str | os.PathLike[str]) -> RenderConfig:
    """Load a render configuration from a JSON file."""
    try:
        stream = open(filename, "r", encoding="utf-8")
    except OSError as exc:
        raise RenderConfigError(f'Failed to open file "{os.fspath(filename)}"') from exc
    with stream:
        return load_render_config_from_stream(stream)


def save_mapping(mapping: ColorValueMapping) -> dict[str, Any]:
    """Encode a channel mapping; an equal range collapses to one number."""
    if mapping.low == mapping.high:
        bounds: Any = mapping.low
    else:
        bounds = [mapping.low, mapping.high]
    return {"range": bounds, "source": mapping.source.value}


def save_render_method(method: RenderMethod) -> dict[str, Any]:
    return {
        "hue": save_mapping(method.hue),
        "saturation": save_mapping(method.saturation),
        "value": save_mapping(method.value),
    }


def save_render_config(config: RenderConfig) -> dict[str, Any]:
    """Encode a render configuration; color_for_nan is written as 0..255 integers."""
    return {
        "point_methods": [save_render_method(m) for m in config.methods],
        "color_for_nan": list(config.color_for_nan),
    }


def serialize_render_config(config: RenderConfig) -> str:
    return json.dumps(save_render_config(config), indent=2, sort_keys=True)


def main(argv: Iterable[str] | None = None) -> int:
    """Check that a render JSON file loads; print the error otherwise."""
    parser = argparse.ArgumentParser(description="Validate a render configuration file.")
    parser.add_argument("render_json")
    args = parser.parse_args(None if argv is None else list(argv))
    if not os.path.isfile(args.render_json):
        parser.error(f"File does not exist: {args.render_json}")
    try:
        load_render_config_from_file(args.render_json)
    except RenderConfigError as exc:
        print(exc)
        return 1
    return 0