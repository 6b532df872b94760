"""Non-graphical state of the interactive zoomer: cursor mode and frame rate."""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from itertools import islice

from nfrender.render_config import RenderConfig

__all__ = ["CursorState", "ComputationLog", "ZoomerState"]

DEFAULT_TITLE = "Newton fractal zoomer"
FPS_STATISTIC_NUM = 5


class CursorState(Enum):
    """What a click on the image does."""

    NONE = "none"
    ADD_POINT = "add_point"
    ERASE_POINT = "erase_point"


class ComputationLog:
    """Timestamps of finished computations, used to estimate frames per second."""

    def __init__(self) -> None:
        self._times: deque[float] = deque()

    def __len__(self) -> int:
        return len(self._times)

    def record(self, timestamp: float | None = None) -> None:
        self._times.append(time.monotonic() if timestamp is None else float(timestamp))

    def clear(self) -> None:
        self._times.clear()

    def fps(self, statistic_num: int) -> float | None:
        """Frame rate over the latest statistic_num + 1 records, or None if undefined."""
        if not self._times:
            return None
        recent = list(islice(reversed(self._times), statistic_num + 1))
        if len(recent) <= 1:
            return None
        latest, oldest = recent[0], recent[-1]
        if latest == oldest:
            return None
        return (len(recent) - 1) / (latest - oldest)


@dataclass
class ZoomerState:
    """Settings and cursor mode of the zoomer."""

    render_config: RenderConfig = field(default_factory=RenderConfig)
    auto_precision: bool = False
    gpu_render: bool = False
    title: str = DEFAULT_TITLE
    cursor_state: CursorState = CursorState.NONE
    computation_log: ComputationLog = field(default_factory=ComputationLog)

    def render_config_capacity(self) -> int:
        """How many points the render configuration can colour."""
        return len(self.render_config.methods)

    def set_cursor_state(self, state: CursorState) -> None:
        self.cursor_state = CursorState(state)

    def press_escape(self) -> None:
        self.cursor_state = CursorState.NONE

    def window_title(self) -> str:
        fps = self.computation_log.fps(FPS_STATISTIC_NUM)
        if fps is None:
            return self.title
        return f"{self.title} fps: {fps:g}"