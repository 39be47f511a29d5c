# gaze_analytics/processing/indices.py
"""
Heuristic indices computed from fixations and raw samples.

The contract indices (fixation/saccade ratio, cognitive load, scanpath
systematicity) use the constants in ``MetricConstants``; the remaining
helpers (reading direction, smooth pursuit, data quality, heatmap) use
``HeuristicConstants``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from ..config import HeuristicConstants, MetricConstants
from ..domain.events import Fixation, ReadingDirection
from ..domain.samples import GazeSample


def _centroids(fixations: Sequence[Fixation]) -> np.ndarray:
    if not fixations:
        return np.empty((0, 2), dtype=float)
    return np.array([[f.centroid.x, f.centroid.y] for f in fixations], dtype=float)


def regression_count(fixations: Sequence[Fixation]) -> int:
    """Consecutive transitions that move left (negative horizontal displacement)."""
    pts = _centroids(fixations)
    if len(pts) < 2:
        return 0
    return int(np.count_nonzero(np.diff(pts[:, 0]) < 0))


def regression_rate(fixations: Sequence[Fixation]) -> float:
    """Share of consecutive transitions that are regressions."""
    transitions = len(fixations) - 1
    if transitions < 1:
        return 0.0
    return regression_count(fixations) / transitions


def fixation_saccade_ratio(fixation_count: int, saccade_count: int) -> float:
    return fixation_count / max(saccade_count, 1)


def cognitive_load_index(average_fixation_duration_ms: float, regression_rate_value: float) -> float:
    """
    Weighted combination of fixation duration and regression rate, each
    relative to its baseline (250 ms, 0.1). 1.0 means "at baseline".
    """
    duration_factor = average_fixation_duration_ms / MetricConstants.BASELINE_FIXATION_DURATION_MS
    regression_factor = regression_rate_value / MetricConstants.BASELINE_REGRESSION_RATE
    return (
        MetricConstants.COGNITIVE_LOAD_FIXATION_WEIGHT * duration_factor
        + MetricConstants.COGNITIVE_LOAD_REGRESSION_WEIGHT * regression_factor
    )


def scanpath_systematicity(fixations: Sequence[Fixation]) -> float:
    """
    Share of consecutive displacement pairs pointing the same way.

    For each triple (F[i-2], F[i-1], F[i]) the two displacement vectors are
    compared; the pair is systematic when their cosine similarity exceeds
    0.7. Zero-length vectors never count. The denominator is the number of
    triples, ``fixation_count - 2``.
    """
    pts = _centroids(fixations)
    triples = len(pts) - 2
    if triples < 1:
        return 0.0
    vectors = np.diff(pts, axis=0)
    first, second = vectors[:-1], vectors[1:]
    norms = np.linalg.norm(first, axis=1) * np.linalg.norm(second, axis=1)
    dots = np.einsum("ij,ij->i", first, second)
    valid = norms > 0
    cosines = np.zeros_like(dots)
    cosines[valid] = dots[valid] / norms[valid]
    systematic = np.count_nonzero(valid & (cosines > MetricConstants.SYSTEMATIC_COSINE_THRESHOLD))
    return float(systematic) / triples


def classify_reading_direction(fixations: Sequence[Fixation]) -> ReadingDirection:
    """Dominant movement direction; needs a clear (>60 %) majority."""
    if len(fixations) < HeuristicConstants.MIN_DIRECTION_FIXATIONS:
        return ReadingDirection.IRREGULAR

    deltas = np.diff(_centroids(fixations), axis=0)
    dx, dy = deltas[:, 0], deltas[:, 1]
    horizontal = np.abs(dx) > np.abs(dy)
    total = len(deltas)

    ratios = (
        (ReadingDirection.LEFT_TO_RIGHT, np.count_nonzero(horizontal & (dx > 0)) / total),
        (ReadingDirection.RIGHT_TO_LEFT, np.count_nonzero(horizontal & (dx <= 0)) / total),
        (ReadingDirection.TOP_TO_BOTTOM, np.count_nonzero(~horizontal & (dy > 0)) / total),
    )
    for direction, ratio in ratios:
        if ratio > HeuristicConstants.DOMINANT_DIRECTION_RATIO:
            return direction
    return ReadingDirection.IRREGULAR


def detect_smooth_pursuit(
    samples: Sequence[GazeSample],
    window_size: int = HeuristicConstants.PURSUIT_WINDOW_SAMPLES,
) -> bool:
    """
    True when most fixed-size windows of raw samples move at a steady,
    non-trivial pace (gaze following a moving target).
    """
    windows = len(samples) // window_size
    if windows == 0 or window_size < 2:
        return False

    pts = np.array([[s.x, s.y] for s in samples[: windows * window_size]], dtype=float)
    smooth = 0
    for w in range(windows):
        segment = pts[w * window_size:(w + 1) * window_size]
        steps = np.linalg.norm(np.diff(segment, axis=0), axis=1)
        avg = float(steps.mean())
        var = float(steps.var())
        if var < avg * HeuristicConstants.PURSUIT_VARIANCE_FACTOR and avg > HeuristicConstants.PURSUIT_MIN_MEAN_STEP_PX:
            smooth += 1
    return smooth / windows > HeuristicConstants.PURSUIT_SMOOTH_WINDOW_RATIO


@dataclass(frozen=True)
class DataQuality:
    score: float
    issues: Tuple[str, ...]


def assess_data_quality(
    samples: Sequence[GazeSample],
    fixations: Sequence[Fixation],
) -> DataQuality:
    """Score in [0, 1] plus the list of problems found in one cycle."""
    hc = HeuristicConstants
    issues: List[str] = []
    score = 1.0

    if len(samples) < hc.QUALITY_MIN_SAMPLES:
        issues.append("Insufficient gaze points")
        score -= hc.PENALTY_FEW_SAMPLES

    if len(fixations) < hc.QUALITY_MIN_FIXATIONS:
        issues.append("Too few fixations detected")
        score -= hc.PENALTY_FEW_FIXATIONS

    if samples:
        xs = np.array([s.x for s in samples], dtype=float)
        ys = np.array([s.y for s in samples], dtype=float)
        outside = (xs < 0) | (xs > hc.QUALITY_SCREEN_MAX_X) | (ys < 0) | (ys > hc.QUALITY_SCREEN_MAX_Y)
        if np.count_nonzero(outside) / len(samples) > hc.QUALITY_MAX_OUTLIER_RATIO:
            issues.append("High outlier rate (>10%)")
            score -= hc.PENALTY_OUTLIERS

        times = np.sort(np.array([s.t for s in samples], dtype=float))
        if len(times) > 1 and float(np.diff(times).max()) > hc.QUALITY_MAX_GAP_MS:
            issues.append("Large temporal gaps in data")
            score -= hc.PENALTY_GAPS

    if fixations:
        avg_duration = float(np.mean([f.duration_ms for f in fixations]))
        if avg_duration < hc.QUALITY_MIN_MEAN_FIXATION_MS or avg_duration > hc.QUALITY_MAX_MEAN_FIXATION_MS:
            issues.append("Unusual fixation durations")
            score -= hc.PENALTY_FIXATION_DURATION

    return DataQuality(score=max(0.0, round(score, 10)), issues=tuple(issues))


def fixation_heatmap(
    fixations: Sequence[Fixation],
    width: float,
    height: float,
    cell_px: int = HeuristicConstants.HEATMAP_CELL_PX,
) -> np.ndarray:
    """Fixation counts on a ``cell_px`` grid; fixations off-screen are ignored."""
    cols = int(np.ceil(width / cell_px))
    rows = int(np.ceil(height / cell_px))
    grid = np.zeros((rows, cols), dtype=int)
    for f in fixations:
        col = int(np.floor(f.centroid.x / cell_px))
        row = int(np.floor(f.centroid.y / cell_px))
        if 0 <= row < rows and 0 <= col < cols:
            grid[row, col] += 1
    return grid


def cluster_fixations(
    fixations: Sequence[Fixation],
    distance_threshold: float = HeuristicConstants.CLUSTER_DISTANCE_PX,
) -> List[List[Fixation]]:
    """
    Group fixations that land on the same spot, regardless of when.

    Each unassigned fixation seeds a cluster and claims every later
    unassigned fixation within ``distance_threshold`` of the seed.
    Clusters are ordered by their seed.
    """
    pts = _centroids(fixations)
    assigned = np.zeros(len(pts), dtype=bool)
    clusters: List[List[Fixation]] = []
    for i in range(len(pts)):
        if assigned[i]:
            continue
        near = np.linalg.norm(pts - pts[i], axis=1) <= distance_threshold
        members = np.flatnonzero(near & ~assigned)
        assigned[members] = True
        clusters.append([fixations[j] for j in members])
    return clusters
