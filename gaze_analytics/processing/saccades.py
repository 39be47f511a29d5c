# gaze_analytics/processing/saccades.py
"""Saccades between consecutive fixation centroids."""

from __future__ import annotations

import math
from typing import List, Sequence

from ..config import AnalyticsConfiguration, MetricConstants
from ..domain.events import Fixation, Saccade


def saccade_angle_degrees(dx: float, dy: float) -> float:
    """Direction of a displacement in degrees, range (-180, 180]."""
    angle = math.degrees(math.atan2(dy, dx))
    if angle <= -180.0:
        angle += 360.0
    return angle


def detect_saccades(
    fixations: Sequence[Fixation],
    cfg: AnalyticsConfiguration,
) -> List[Saccade]:
    """
    Derive at most one saccade per adjacent fixation pair.

    Pairs whose centroids are closer than ``saccade_min_distance_px`` produce
    nothing. The duration is the gap between the end of the first fixation
    and the start of the second, floored at 1 ms so overlapping or
    out-of-order boundaries cannot yield a zero or negative divisor.
    """
    saccades: List[Saccade] = []
    for i in range(len(fixations) - 1):
        src = fixations[i]
        dst = fixations[i + 1]
        dx = dst.centroid.x - src.centroid.x
        dy = dst.centroid.y - src.centroid.y
        amplitude = math.hypot(dx, dy)
        if amplitude < cfg.saccade_min_distance_px:
            continue

        duration = max(dst.start_time - src.end_time, MetricConstants.MIN_DURATION_MS)
        saccades.append(
            Saccade(
                from_fixation_idx=i,
                to_fixation_idx=i + 1,
                start_point=src.centroid,
                end_point=dst.centroid,
                amplitude_px=amplitude,
                velocity_px_per_ms=amplitude / duration,
                duration_ms=duration,
                angle_degrees=saccade_angle_degrees(dx, dy),
            )
        )
    return saccades
