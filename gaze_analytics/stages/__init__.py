"""Pipeline stages composing one analysis cycle."""

from .base import AnalysisCycle, IAnalysisStage
from .fixation_detection import FixationDetectionStage
from .saccade_detection import SaccadeDetectionStage
from .reading_detection import ReadingDetectionStage, RereadingDetectionStage
from .region_focus import RegionFocusStage

__all__ = [
    "AnalysisCycle",
    "IAnalysisStage",
    "FixationDetectionStage",
    "SaccadeDetectionStage",
    "ReadingDetectionStage",
    "RereadingDetectionStage",
    "RegionFocusStage",
]
