"""Pure detection and summarisation transforms (no I/O, no shared state)."""

from .fixations import detect_fixations
from .saccades import detect_saccades, saccade_angle_degrees
from .reading import detect_reading_patterns, continues_reading, estimate_reading_speed
from .rereading import detect_rereading
from .regions import aggregate_region_focus, region_of
from .indices import (
    regression_count,
    regression_rate,
    fixation_saccade_ratio,
    cognitive_load_index,
    scanpath_systematicity,
    classify_reading_direction,
    detect_smooth_pursuit,
    assess_data_quality,
    fixation_heatmap,
    cluster_fixations,
    DataQuality,
)
from .summary import MetricsSummarizer

__all__ = [
    "detect_fixations",
    "detect_saccades",
    "saccade_angle_degrees",
    "detect_reading_patterns",
    "continues_reading",
    "estimate_reading_speed",
    "detect_rereading",
    "aggregate_region_focus",
    "region_of",
    "regression_count",
    "regression_rate",
    "fixation_saccade_ratio",
    "cognitive_load_index",
    "scanpath_systematicity",
    "classify_reading_direction",
    "detect_smooth_pursuit",
    "assess_data_quality",
    "fixation_heatmap",
    "cluster_fixations",
    "DataQuality",
    "MetricsSummarizer",
]
