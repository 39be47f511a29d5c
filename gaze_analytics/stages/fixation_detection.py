"""Fixation detection stage (greedy radius clustering)."""
from __future__ import annotations

import logging

from .base import AnalysisCycle, IAnalysisStage
from ..config import AnalyticsConfiguration
from ..processing.fixations import detect_fixations

logger = logging.getLogger(__name__)


class FixationDetectionStage(IAnalysisStage):
    """Cluster the cycle's raw samples into fixations."""

    def process(self, cycle: AnalysisCycle, config: AnalyticsConfiguration) -> None:
        cycle.fixations = detect_fixations(cycle.samples, config)
        logger.debug("Detected %s fixations from %s samples", len(cycle.fixations), len(cycle.samples))
