# gaze_analytics/processing/reading.py
"""Reading sequences: left-to-right fixation runs along one line."""

from __future__ import annotations

from statistics import mean
from typing import List, Sequence

from ..config import AnalyticsConfiguration, HeuristicConstants, MetricConstants
from ..domain.events import Fixation, ReadingPattern


def continues_reading(
    current: Fixation,
    following: Fixation,
    cfg: AnalyticsConfiguration,
) -> bool:
    """True when ``following`` moves forward along the same text line."""
    dx = following.centroid.x - current.centroid.x
    dy = following.centroid.y - current.centroid.y
    return dx > cfg.reading_min_horizontal_distance_px and abs(dy) < cfg.reading_line_height_px


def estimate_reading_speed(fixations: Sequence[Fixation], duration_ms: float) -> float:
    """
    Words per minute covered by a fixation run.

    Only forward movement counts as read text; one word is assumed to span
    ``AVERAGE_WORD_WIDTH_PX``.
    """
    if len(fixations) < 2 or duration_ms <= 0:
        return 0.0
    forward = 0.0
    for prev, curr in zip(fixations, fixations[1:]):
        dx = curr.centroid.x - prev.centroid.x
        if dx > 0:
            forward += dx
    words = forward / HeuristicConstants.AVERAGE_WORD_WIDTH_PX
    return words / (duration_ms / 60000.0)


def _build_pattern(run: List[int], fixations: Sequence[Fixation]) -> ReadingPattern:
    members = [fixations[i] for i in run]
    start = members[0].start_time
    end = members[-1].end_time
    duration = max(end - start, MetricConstants.MIN_DURATION_MS)
    return ReadingPattern(
        fixation_indices=tuple(run),
        start_time=start,
        end_time=end,
        duration_ms=duration,
        fixation_count=len(run),
        average_y=mean(f.centroid.y for f in members),
        speed_words_per_min=estimate_reading_speed(members, duration),
    )


def detect_reading_patterns(
    fixations: Sequence[Fixation],
    cfg: AnalyticsConfiguration,
) -> List[ReadingPattern]:
    """
    Collect maximal runs of "continuing" fixation pairs.

    A non-continuing pair closes the current run and restarts tracking at
    the fixation that broke it. Runs shorter than three fixations are
    dropped.
    """
    patterns: List[ReadingPattern] = []
    if len(fixations) < MetricConstants.MIN_READING_FIXATIONS:
        return patterns

    run: List[int] = [0]

    def flush() -> None:
        if len(run) >= MetricConstants.MIN_READING_FIXATIONS:
            patterns.append(_build_pattern(run, fixations))

    for i in range(len(fixations) - 1):
        if continues_reading(fixations[i], fixations[i + 1], cfg):
            run.append(i + 1)
        else:
            flush()
            run = [i + 1]
    flush()
    return patterns
