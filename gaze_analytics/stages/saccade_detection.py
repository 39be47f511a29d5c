"""Saccade detection stage."""
from __future__ import annotations

import logging

from .base import AnalysisCycle, IAnalysisStage
from ..config import AnalyticsConfiguration
from ..processing.saccades import detect_saccades

logger = logging.getLogger(__name__)


class SaccadeDetectionStage(IAnalysisStage):
    """Derive saccades between adjacent fixations."""

    def process(self, cycle: AnalysisCycle, config: AnalyticsConfiguration) -> None:
        cycle.saccades = detect_saccades(cycle.fixations, config)
        logger.debug("Detected %s saccades", len(cycle.saccades))
