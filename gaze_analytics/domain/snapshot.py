"""Per-cycle aggregate emitted to the downstream consumer."""
from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from datetime import datetime
from enum import Enum
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pandas as pd

from .events import Fixation, ReadingDirection, ReadingPattern, RegionFocus, RereadingEvent, Saccade
from .samples import GazeSample, Point

RegionKey = Tuple[int, int]


@dataclass(frozen=True)
class AnalyticsSnapshot:
    """
    Everything derived from one analysis cycle.

    Counts and averages are always present (zero for an empty cycle); the
    collections hold the full detector output for the cycle.
    """

    cycle_index: int
    # Wall-clock window, supplied by the scheduler or the offline pipeline
    started_at: Optional[datetime]
    ended_at: Optional[datetime]
    first_sample_time: Optional[float]
    last_sample_time: Optional[float]

    # Counts and averages
    sample_count: int
    fixation_count: int
    total_fixation_duration_ms: float
    average_fixation_duration_ms: float
    saccade_count: int
    average_saccade_amplitude_px: float
    average_saccade_velocity_px_per_ms: float
    reading_pattern_count: int
    rereading_event_count: int
    regression_count: int
    regression_rate: float

    # Derived indices
    fixation_saccade_ratio: float
    cognitive_load_index: float
    scanpath_systematicity: float
    reading_direction: ReadingDirection
    smooth_pursuit_detected: bool
    data_quality_score: float
    data_quality_issues: Tuple[str, ...]
    fixation_cluster_count: int

    # Collections
    fixations: Tuple[Fixation, ...] = ()
    saccades: Tuple[Saccade, ...] = ()
    reading_patterns: Tuple[ReadingPattern, ...] = ()
    rereading_events: Tuple[RereadingEvent, ...] = ()
    region_focus: Mapping[RegionKey, RegionFocus] = field(default_factory=dict)
    gaze_points: Tuple[GazeSample, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.sample_count == 0

    def to_dict(self) -> Dict[str, Any]:
        """JSON-compatible representation (datetimes as ISO strings)."""
        out = {f.name: _to_primitive(getattr(self, f.name)) for f in fields(self) if f.name != "region_focus"}
        out["region_focus"] = {
            focus.region_id: _to_primitive(focus)
            for _, focus in sorted(self.region_focus.items())
        }
        return out

    def summary_row(self) -> Dict[str, Any]:
        """Scalar metrics only, one row per cycle."""
        row: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, (tuple, Mapping)):
                continue
            row[f.name] = _to_primitive(value)
        row["data_quality_issues"] = "; ".join(self.data_quality_issues)
        return row


def _to_primitive(value: Any) -> Any:
    if isinstance(value, Point):
        return {"x": value.x, "y": value.y}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_primitive(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, (list, tuple)):
        return [_to_primitive(v) for v in value]
    return value


def snapshots_to_frame(snapshots: Iterable[AnalyticsSnapshot]) -> pd.DataFrame:
    """Flatten snapshots into a DataFrame of per-cycle scalar metrics."""
    rows: List[Dict[str, Any]] = [s.summary_row() for s in snapshots]
    return pd.DataFrame(rows)
