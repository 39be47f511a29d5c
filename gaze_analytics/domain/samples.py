"""Raw gaze input.

Samples are produced upstream (webcam capture plus a regression model that
estimates screen coordinates) and arrive here already in pixel space.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple


class Point(NamedTuple):
    """Screen position in pixels."""

    x: float
    y: float


@dataclass(frozen=True)
class GazeSample:
    """Single gaze estimate captured at ``t`` (milliseconds)."""

    x: float
    y: float
    t: float

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)
