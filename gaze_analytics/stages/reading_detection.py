"""Reading pattern and re-reading stages."""
from __future__ import annotations

import logging

from .base import AnalysisCycle, IAnalysisStage
from ..config import AnalyticsConfiguration
from ..processing.reading import detect_reading_patterns
from ..processing.rereading import detect_rereading

logger = logging.getLogger(__name__)


class ReadingDetectionStage(IAnalysisStage):
    """Classify fixation runs as reading sequences."""

    def process(self, cycle: AnalysisCycle, config: AnalyticsConfiguration) -> None:
        cycle.reading_patterns = detect_reading_patterns(cycle.fixations, config)
        logger.debug("Detected %s reading patterns", len(cycle.reading_patterns))


class RereadingDetectionStage(IAnalysisStage):
    """Cross-reference reading patterns for revisits. Runs after ReadingDetectionStage."""

    def process(self, cycle: AnalysisCycle, config: AnalyticsConfiguration) -> None:
        cycle.rereading_events = detect_rereading(cycle.reading_patterns, config)
        logger.debug("Detected %s re-reading events", len(cycle.rereading_events))
