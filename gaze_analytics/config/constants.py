# gaze_analytics/config/constants.py
"""Metric and heuristic constants for gaze analytics."""

from __future__ import annotations


class MetricConstants:
    """
    Constants of the derived indices.

    Downstream baselines are computed from these values; changing one is a
    versioned change of the snapshot contract, not a tuning knob.
    """

    # Cognitive load index
    COGNITIVE_LOAD_FIXATION_WEIGHT: float = 0.7
    COGNITIVE_LOAD_REGRESSION_WEIGHT: float = 0.3
    BASELINE_FIXATION_DURATION_MS: float = 250.0
    BASELINE_REGRESSION_RATE: float = 0.1

    # Scanpath systematicity: consecutive displacement vectors count as
    # systematic when their cosine similarity exceeds this (~45 degrees)
    SYSTEMATIC_COSINE_THRESHOLD: float = 0.7

    # Minimum duration used wherever a duration is a divisor (ms)
    MIN_DURATION_MS: float = 1.0

    # Reading patterns need at least this many fixations
    MIN_READING_FIXATIONS: int = 3


class HeuristicConstants:
    """Constants of the supplemental heuristics (direction, speed, quality)."""

    # Reading direction: share of transitions a direction must exceed
    DOMINANT_DIRECTION_RATIO: float = 0.6
    MIN_DIRECTION_FIXATIONS: int = 3

    # Reading speed: assumed average word width (px)
    AVERAGE_WORD_WIDTH_PX: float = 50.0

    # Smooth pursuit
    PURSUIT_WINDOW_SAMPLES: int = 10
    PURSUIT_VARIANCE_FACTOR: float = 0.5
    PURSUIT_MIN_MEAN_STEP_PX: float = 10.0
    PURSUIT_SMOOTH_WINDOW_RATIO: float = 0.6

    # Heatmap cell size (px)
    HEATMAP_CELL_PX: int = 50

    # Region density is reported per this many square pixels
    DENSITY_AREA_PX2: float = 10000.0

    # Spatial fixation clustering: max distance to the cluster seed (px)
    CLUSTER_DISTANCE_PX: float = 50.0

    # Data quality
    QUALITY_MIN_SAMPLES: int = 10
    QUALITY_MIN_FIXATIONS: int = 3
    QUALITY_SCREEN_MAX_X: float = 3840.0
    QUALITY_SCREEN_MAX_Y: float = 2160.0
    QUALITY_MAX_OUTLIER_RATIO: float = 0.1
    QUALITY_MAX_GAP_MS: float = 1000.0
    QUALITY_MIN_MEAN_FIXATION_MS: float = 100.0
    QUALITY_MAX_MEAN_FIXATION_MS: float = 1000.0

    PENALTY_FEW_SAMPLES: float = 0.3
    PENALTY_FEW_FIXATIONS: float = 0.2
    PENALTY_OUTLIERS: float = 0.2
    PENALTY_GAPS: float = 0.15
    PENALTY_FIXATION_DURATION: float = 0.15


class ValidationMessages:
    """Standard validation and error messages."""

    NOT_NUMERIC = "{name} must be a number, got {value!r}"
    NOT_POSITIVE = "{name} must be > 0, got {value!r}"
    NOT_INTEGER = "{name} must be a whole number, got {value!r}"
    UNKNOWN_KEYS = "Unknown configuration keys: {keys}"
    NOT_AN_OBJECT = "Configuration file {path} must contain a JSON object"
    MISSING_COLUMNS = "Gaze file is missing required columns: {columns}"
