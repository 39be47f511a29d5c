# gaze_analytics/processing/rereading.py
"""Re-reading: later reading patterns on the line of an earlier one."""

from __future__ import annotations

from typing import List, Sequence

from ..config import AnalyticsConfiguration
from ..domain.events import ReadingPattern, RereadingEvent


def detect_rereading(
    patterns: Sequence[ReadingPattern],
    cfg: AnalyticsConfiguration,
) -> List[RereadingEvent]:
    """
    Link every pattern to every earlier pattern on (nearly) the same line.

    All qualifying pairs are emitted, not only the nearest one, so a line
    read three times yields three events (2->1, 3->1, 3->2). The scan is
    quadratic in the pattern count, which stays small within one cycle.
    """
    events: List[RereadingEvent] = []
    for i in range(1, len(patterns)):
        current = patterns[i]
        for j in range(i):
            previous = patterns[j]
            distance = abs(current.average_y - previous.average_y)
            if distance < cfg.rereading_vertical_tolerance_px:
                events.append(
                    RereadingEvent(
                        current_pattern_idx=i,
                        previous_pattern_idx=j,
                        vertical_distance_px=distance,
                        time_between_ms=current.start_time - previous.end_time,
                        current_y=current.average_y,
                        previous_y=previous.average_y,
                    )
                )
    return events
