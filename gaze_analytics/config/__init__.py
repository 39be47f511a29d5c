"""Configuration and constants for gaze analytics."""

from .config import AnalyticsConfiguration, InvalidConfigurationError
from .constants import HeuristicConstants, MetricConstants, ValidationMessages

__all__ = [
    "AnalyticsConfiguration",
    "InvalidConfigurationError",
    "MetricConstants",
    "HeuristicConstants",
    "ValidationMessages",
]
