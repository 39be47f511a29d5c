# gaze_analytics/processing/fixations.py
"""Greedy single-pass fixation clustering."""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

from ..config import AnalyticsConfiguration
from ..domain.events import Fixation
from ..domain.samples import GazeSample, Point


class _Candidate:
    """Fixation under construction."""

    __slots__ = ("x", "y", "start_time", "end_time", "sample_count")

    def __init__(self, sample: GazeSample) -> None:
        self.x = float(sample.x)
        self.y = float(sample.y)
        self.start_time = float(sample.t)
        self.end_time = float(sample.t)
        self.sample_count = 1

    def distance_to(self, sample: GazeSample) -> float:
        return math.hypot(sample.x - self.x, sample.y - self.y)

    def fold(self, sample: GazeSample) -> None:
        # Two-point running average: recent samples weigh more than an
        # arithmetic mean would give them.
        self.x = (self.x + sample.x) / 2.0
        self.y = (self.y + sample.y) / 2.0
        # end_time never moves backwards on out-of-order timestamps
        self.end_time = max(self.end_time, float(sample.t))
        self.sample_count += 1

    @property
    def duration_ms(self) -> float:
        return self.end_time - self.start_time

    def to_fixation(self) -> Fixation:
        return Fixation(
            centroid=Point(self.x, self.y),
            start_time=self.start_time,
            end_time=self.end_time,
            duration_ms=self.duration_ms,
            sample_count=self.sample_count,
        )


def detect_fixations(
    samples: Sequence[GazeSample],
    cfg: AnalyticsConfiguration,
) -> List[Fixation]:
    """
    Cluster chronological samples into fixations.

    A candidate is anchored at the first unclustered sample. Each following
    sample within ``fixation_radius_px`` of the candidate's current centroid
    is folded in; the first sample outside it closes the candidate and
    anchors the next one. A closed candidate (and the final one at stream
    end) is emitted only if it lasted at least ``fixation_min_duration_ms``.

    Args:
        samples: Gaze samples in timestamp order
        cfg: AnalyticsConfiguration

    Returns:
        Fixations in chronological order; empty for an empty input.
    """
    fixations: List[Fixation] = []
    candidate: Optional[_Candidate] = None

    def flush() -> None:
        if candidate is not None and candidate.duration_ms >= cfg.fixation_min_duration_ms:
            fixations.append(candidate.to_fixation())

    for sample in samples:
        if candidate is None:
            candidate = _Candidate(sample)
            continue
        if candidate.distance_to(sample) <= cfg.fixation_radius_px:
            candidate.fold(sample)
        else:
            flush()
            candidate = _Candidate(sample)

    flush()
    return fixations
