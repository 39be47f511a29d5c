# gaze_analytics/__init__.py
"""
Gaze Analytics Package.

Contains:
- Fixation, saccade, reading and rereading detection
- Screen region focus aggregation
- Derived indices (cognitive load, scanpath systematicity, data quality)
- Periodic live scheduler and offline replay
- Plotting (optional, ``plot`` extra)
"""

from .config import AnalyticsConfiguration, InvalidConfigurationError
from .domain import (
    GazeSample,
    Point,
    Fixation,
    Saccade,
    ReadingPattern,
    RereadingEvent,
    RegionFocus,
    ReadingDirection,
    AnalyticsSnapshot,
    snapshots_to_frame,
)
from .engine import AnalyticsEngine
from .runtime import AnalyticsScheduler, SampleBuffer
from .io import OfflineAnalyticsPipeline, SnapshotObserver, read_samples

__version__ = "0.1.0"

__all__ = [
    "AnalyticsConfiguration",
    "InvalidConfigurationError",
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
    "AnalyticsEngine",
    "AnalyticsScheduler",
    "SampleBuffer",
    "OfflineAnalyticsPipeline",
    "SnapshotObserver",
    "read_samples",
]
