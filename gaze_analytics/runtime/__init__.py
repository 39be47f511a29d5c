"""Live session runtime: sample buffer and periodic scheduler."""

from .buffer import SampleBuffer
from .scheduler import AnalyticsScheduler, SchedulerState

__all__ = ["SampleBuffer", "AnalyticsScheduler", "SchedulerState"]
