"""Behavioural primitives derived from a gaze sample stream."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .samples import Point


class ReadingDirection(Enum):
    """Dominant direction of movement across a fixation sequence."""

    LEFT_TO_RIGHT = "left-to-right"
    RIGHT_TO_LEFT = "right-to-left"
    TOP_TO_BOTTOM = "top-to-bottom"
    IRREGULAR = "irregular"


@dataclass(frozen=True)
class Fixation:
    """Temporally contiguous cluster of samples within the fixation radius."""

    centroid: Point
    start_time: float
    end_time: float
    duration_ms: float
    sample_count: int


@dataclass(frozen=True)
class Saccade:
    """Transition between two adjacent fixations."""

    from_fixation_idx: int
    to_fixation_idx: int
    start_point: Point
    end_point: Point
    amplitude_px: float
    velocity_px_per_ms: float
    duration_ms: float
    angle_degrees: float


@dataclass(frozen=True)
class ReadingPattern:
    """Maximal left-to-right run of fixations along one line."""

    fixation_indices: Tuple[int, ...]
    start_time: float
    end_time: float
    duration_ms: float
    fixation_count: int
    average_y: float
    speed_words_per_min: float = 0.0


@dataclass(frozen=True)
class RereadingEvent:
    """A later reading pattern revisiting the line of an earlier one."""

    current_pattern_idx: int
    previous_pattern_idx: int
    vertical_distance_px: float
    time_between_ms: float
    current_y: float
    previous_y: float


@dataclass(frozen=True)
class RegionFocus:
    """Dwell time and fixation count attributed to one grid cell."""

    row: int
    col: int
    total_duration_ms: float
    fixation_count: int
    x: float
    y: float
    width: float
    height: float
    first_visit_time: float
    last_visit_time: float
    # Delay of the first visit after the start of the cycle
    time_to_first_fixation_ms: float = 0.0
    # Fixations per 10,000 square pixels of the cell
    density_per_10k_px2: float = 0.0

    @property
    def region_id(self) -> str:
        return f"r{self.row}c{self.col}"
