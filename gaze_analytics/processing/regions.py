# gaze_analytics/processing/regions.py
"""Dwell time per cell of a fixed grid over the viewport."""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Sequence, Tuple

from ..config import AnalyticsConfiguration, HeuristicConstants
from ..domain.events import Fixation, RegionFocus

RegionKey = Tuple[int, int]


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def region_of(x: float, y: float, cfg: AnalyticsConfiguration) -> RegionKey:
    """Grid cell of a point; points outside the viewport land on the border cells."""
    rows = int(cfg.screen_region_rows)
    cols = int(cfg.screen_region_cols)
    row = _clamp(math.floor(y / cfg.region_height), 0, rows - 1)
    col = _clamp(math.floor(x / cfg.region_width), 0, cols - 1)
    return row, col


def aggregate_region_focus(
    fixations: Sequence[Fixation],
    cfg: AnalyticsConfiguration,
    cycle_start_ms: Optional[float] = None,
) -> Dict[RegionKey, RegionFocus]:
    """
    Accumulate fixation duration and count per (row, col) cell.

    Only cells that received at least one fixation appear in the result.
    ``time_to_first_fixation_ms`` is measured from ``cycle_start_ms``
    (default: the earliest fixation start).
    """
    if cycle_start_ms is None and fixations:
        cycle_start_ms = min(f.start_time for f in fixations)
    area = cfg.region_width * cfg.region_height

    members: Dict[RegionKey, List[Fixation]] = {}
    for fixation in fixations:
        key = region_of(fixation.centroid.x, fixation.centroid.y, cfg)
        members.setdefault(key, []).append(fixation)

    result: Dict[RegionKey, RegionFocus] = {}
    for (row, col), cell in sorted(members.items()):
        first_visit = min(f.start_time for f in cell)
        result[(row, col)] = RegionFocus(
            row=row,
            col=col,
            total_duration_ms=sum(f.duration_ms for f in cell),
            fixation_count=len(cell),
            x=col * cfg.region_width,
            y=row * cfg.region_height,
            width=cfg.region_width,
            height=cfg.region_height,
            first_visit_time=first_visit,
            last_visit_time=max(f.start_time for f in cell),
            time_to_first_fixation_ms=first_visit - cycle_start_ms,
            density_per_10k_px2=len(cell) / area * HeuristicConstants.DENSITY_AREA_PX2,
        )
    return result
