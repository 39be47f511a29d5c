from typing import List, Sequence, Tuple

import pytest

from gaze_analytics.config import AnalyticsConfiguration
from gaze_analytics.domain.events import Fixation, ReadingPattern
from gaze_analytics.domain.samples import GazeSample, Point


def build_dwell(x: float, y: float, start_ms: float, count: int = 20, step_ms: float = 10.0) -> List[GazeSample]:
    """``count`` samples at a fixed position, ``step_ms`` apart."""
    return [GazeSample(x, y, start_ms + i * step_ms) for i in range(count)]


def build_scanpath(
    positions: Sequence[Tuple[float, float]],
    dwell_ms: float = 150.0,
    gap_ms: float = 30.0,
    step_ms: float = 10.0,
) -> List[GazeSample]:
    """One dwell per position; each dwell spans exactly ``dwell_ms``."""
    samples: List[GazeSample] = []
    t = 0.0
    count = int(dwell_ms / step_ms) + 1
    for x, y in positions:
        samples.extend(build_dwell(x, y, t, count=count, step_ms=step_ms))
        t += dwell_ms + gap_ms
    return samples


def make_fixation(x: float, y: float, start: float = 0.0, duration: float = 200.0) -> Fixation:
    return Fixation(
        centroid=Point(x, y),
        start_time=start,
        end_time=start + duration,
        duration_ms=duration,
        sample_count=max(int(duration / 10.0) + 1, 1),
    )


def make_fixations(positions: Sequence[Tuple[float, float]], duration: float = 200.0, gap: float = 50.0) -> List[Fixation]:
    out = []
    t = 0.0
    for x, y in positions:
        out.append(make_fixation(x, y, start=t, duration=duration))
        t += duration + gap
    return out


def make_pattern(average_y: float, start: float, end: float) -> ReadingPattern:
    return ReadingPattern(
        fixation_indices=(0, 1, 2),
        start_time=start,
        end_time=end,
        duration_ms=end - start,
        fixation_count=3,
        average_y=average_y,
    )


@pytest.fixture
def config() -> AnalyticsConfiguration:
    return AnalyticsConfiguration()


@pytest.fixture
def reading_line_samples() -> List[GazeSample]:
    """Five dwells left to right on y=300, 70 px apart."""
    return build_scanpath([(100, 300), (170, 300), (240, 300), (310, 300), (380, 300)])
