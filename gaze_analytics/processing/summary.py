# gaze_analytics/processing/summary.py
"""Merge detector output into one AnalyticsSnapshot."""

from __future__ import annotations

from datetime import datetime
from statistics import mean
from typing import Mapping, Optional, Sequence, Tuple

from ..config import AnalyticsConfiguration
from ..domain.events import Fixation, ReadingPattern, RegionFocus, RereadingEvent, Saccade
from ..domain.samples import GazeSample
from ..domain.snapshot import AnalyticsSnapshot
from . import indices


class MetricsSummarizer:
    """
    Builds the per-cycle snapshot: counts, averages and derived indices.

    Stateless apart from its configuration; the same inputs always yield
    the same snapshot.
    """

    def __init__(self, cfg: AnalyticsConfiguration) -> None:
        self.cfg = cfg

    def summarize(
        self,
        samples: Sequence[GazeSample],
        fixations: Sequence[Fixation],
        saccades: Sequence[Saccade],
        reading_patterns: Sequence[ReadingPattern],
        rereading_events: Sequence[RereadingEvent],
        region_focus: Mapping[Tuple[int, int], RegionFocus],
        cycle_index: int = 0,
        started_at: Optional[datetime] = None,
        ended_at: Optional[datetime] = None,
    ) -> AnalyticsSnapshot:
        durations = [f.duration_ms for f in fixations]
        total_duration = float(sum(durations))
        avg_duration = total_duration / len(durations) if durations else 0.0
        avg_amplitude = mean(s.amplitude_px for s in saccades) if saccades else 0.0
        avg_velocity = mean(s.velocity_px_per_ms for s in saccades) if saccades else 0.0

        regressions = indices.regression_count(fixations)
        reg_rate = indices.regression_rate(fixations)
        quality = indices.assess_data_quality(samples, fixations)

        stride = int(self.cfg.gaze_point_stride)
        times = [s.t for s in samples]

        return AnalyticsSnapshot(
            cycle_index=cycle_index,
            started_at=started_at,
            ended_at=ended_at,
            first_sample_time=min(times) if times else None,
            last_sample_time=max(times) if times else None,
            sample_count=len(samples),
            fixation_count=len(fixations),
            total_fixation_duration_ms=total_duration,
            average_fixation_duration_ms=avg_duration,
            saccade_count=len(saccades),
            average_saccade_amplitude_px=float(avg_amplitude),
            average_saccade_velocity_px_per_ms=float(avg_velocity),
            reading_pattern_count=len(reading_patterns),
            rereading_event_count=len(rereading_events),
            regression_count=regressions,
            regression_rate=reg_rate,
            fixation_saccade_ratio=indices.fixation_saccade_ratio(len(fixations), len(saccades)),
            cognitive_load_index=indices.cognitive_load_index(avg_duration, reg_rate),
            scanpath_systematicity=indices.scanpath_systematicity(fixations),
            reading_direction=indices.classify_reading_direction(fixations),
            smooth_pursuit_detected=indices.detect_smooth_pursuit(samples),
            data_quality_score=quality.score,
            data_quality_issues=quality.issues,
            fixation_cluster_count=len(indices.cluster_fixations(fixations)),
            fixations=tuple(fixations),
            saccades=tuple(saccades),
            reading_patterns=tuple(reading_patterns),
            rereading_events=tuple(rereading_events),
            region_focus=dict(region_focus),
            gaze_points=tuple(samples[::stride]),
        )
