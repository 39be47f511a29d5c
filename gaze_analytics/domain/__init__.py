"""Domain models for gaze samples, derived events and per-cycle snapshots."""

from .samples import GazeSample, Point
from .events import (
    Fixation,
    Saccade,
    ReadingPattern,
    RereadingEvent,
    RegionFocus,
    ReadingDirection,
)
from .snapshot import AnalyticsSnapshot, snapshots_to_frame

__all__ = [
    "GazeSample",
    "Point",
    "Fixation",
    "Saccade",
    "ReadingPattern",
    "RereadingEvent",
    "RegionFocus",
    "ReadingDirection",
    "AnalyticsSnapshot",
    "snapshots_to_frame",
]
