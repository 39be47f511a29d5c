# gaze_analytics/config/config.py
"""
Configuration for the gaze analytics pipeline.

All thresholds are static for a session: the configuration is frozen and
validated once at construction time. A bad threshold would silently corrupt
every downstream metric, so invalid values are rejected immediately.

Example:
    >>> from gaze_analytics.config import AnalyticsConfiguration
    >>>
    >>> # Defaults
    >>> cfg = AnalyticsConfiguration()
    >>>
    >>> # Tighter fixation clustering, 6x6 region grid
    >>> cfg = AnalyticsConfiguration(
    ...     fixation_radius_px=35.0,
    ...     screen_region_rows=6,
    ...     screen_region_cols=6,
    ... )
    >>>
    >>> # From a JSON file
    >>> cfg = AnalyticsConfiguration.from_json_file("session.json")
"""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .constants import ValidationMessages


class InvalidConfigurationError(ValueError):
    """Raised when a configuration value would make the pipeline meaningless."""


@dataclass(frozen=True)
class AnalyticsConfiguration:
    """
    Thresholds and geometry for one tracking session.
    """

    # Fixation clustering (greedy, centroid distance)
    fixation_radius_px: float = 50.0
    fixation_min_duration_ms: float = 100.0

    # Saccades shorter than this (centroid distance) are not emitted
    saccade_min_distance_px: float = 100.0

    # Reading: a pair "continues reading" when dx > min horizontal distance
    # and |dy| < line height
    reading_line_height_px: float = 40.0
    reading_min_horizontal_distance_px: float = 50.0

    # Re-reading: two patterns match when their mean y differ by less than this
    rereading_vertical_tolerance_px: float = 50.0

    # Region grid over the viewport
    screen_region_rows: int = 4
    screen_region_cols: int = 4
    viewport_width: float = 1920.0
    viewport_height: float = 1080.0

    # Scheduler cadence
    analysis_interval_ms: float = 1000.0

    # Every Nth raw sample is kept in the snapshot's gaze trace
    gaze_point_stride: int = 10

    # Emit a snapshot even when a tick finds the buffer empty
    emit_empty_snapshots: bool = True

    # Optional ring capacity of the sample buffer (None = unbounded)
    max_buffer_samples: Optional[int] = None

    def __post_init__(self) -> None:
        positive = (
            "fixation_radius_px",
            "fixation_min_duration_ms",
            "saccade_min_distance_px",
            "reading_line_height_px",
            "reading_min_horizontal_distance_px",
            "rereading_vertical_tolerance_px",
            "screen_region_rows",
            "screen_region_cols",
            "viewport_width",
            "viewport_height",
            "analysis_interval_ms",
            "gaze_point_stride",
        )
        for name in positive:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidConfigurationError(
                    ValidationMessages.NOT_NUMERIC.format(name=name, value=value)
                )
            if not value > 0:
                raise InvalidConfigurationError(
                    ValidationMessages.NOT_POSITIVE.format(name=name, value=value)
                )

        for name in ("screen_region_rows", "screen_region_cols", "gaze_point_stride"):
            if int(getattr(self, name)) != getattr(self, name):
                raise InvalidConfigurationError(
                    ValidationMessages.NOT_INTEGER.format(name=name, value=getattr(self, name))
                )

        if self.max_buffer_samples is not None and self.max_buffer_samples <= 0:
            raise InvalidConfigurationError(
                ValidationMessages.NOT_POSITIVE.format(
                    name="max_buffer_samples", value=self.max_buffer_samples
                )
            )

    @property
    def region_width(self) -> float:
        return self.viewport_width / self.screen_region_cols

    @property
    def region_height(self) -> float:
        return self.viewport_height / self.screen_region_rows

    @property
    def analysis_interval_seconds(self) -> float:
        return self.analysis_interval_ms / 1000.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "AnalyticsConfiguration":
        """
        Build a configuration from a plain mapping.

        Unknown keys are rejected so that a typo in a session file does not
        silently fall back to a default.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise InvalidConfigurationError(
                ValidationMessages.UNKNOWN_KEYS.format(keys=", ".join(unknown))
            )
        return cls(**dict(values))

    @classmethod
    def from_json_file(cls, path: str | Path) -> "AnalyticsConfiguration":
        with open(path, "r", encoding="utf-8") as fh:
            values = json.load(fh)
        if not isinstance(values, dict):
            raise InvalidConfigurationError(ValidationMessages.NOT_AN_OBJECT.format(path=path))
        return cls.from_dict(values)
