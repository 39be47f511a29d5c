"""High level analytics orchestration for one cycle."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, List, Optional, Protocol

from .config import AnalyticsConfiguration
from .domain.samples import GazeSample
from .domain.snapshot import AnalyticsSnapshot
from .processing.summary import MetricsSummarizer
from .stages import (
    AnalysisCycle,
    FixationDetectionStage,
    IAnalysisStage,
    ReadingDetectionStage,
    RegionFocusStage,
    RereadingDetectionStage,
    SaccadeDetectionStage,
)

logger = logging.getLogger(__name__)


class IAnalyticsEngine(Protocol):
    """Protocol for running one analysis cycle."""

    def run(
        self,
        samples: Iterable[GazeSample],
        config: AnalyticsConfiguration,
        cycle_index: int = 0,
        started_at: Optional[datetime] = None,
        ended_at: Optional[datetime] = None,
    ) -> AnalyticsSnapshot:
        ...


class AnalyticsEngine(IAnalyticsEngine):
    """Pipeline of detector stages followed by the metrics summarizer.

    Every run recomputes everything from the samples it is given; nothing is
    carried over between runs, so identical input yields identical output.
    """

    def __init__(self, stages: List[IAnalysisStage] | None = None) -> None:
        self.stages: List[IAnalysisStage] = stages or [
            FixationDetectionStage(),
            SaccadeDetectionStage(),
            ReadingDetectionStage(),
            RereadingDetectionStage(),
            RegionFocusStage(),
        ]

    def run(
        self,
        samples: Iterable[GazeSample],
        config: AnalyticsConfiguration,
        cycle_index: int = 0,
        started_at: Optional[datetime] = None,
        ended_at: Optional[datetime] = None,
    ) -> AnalyticsSnapshot:
        cycle = AnalysisCycle(samples=list(samples))
        for stage in self.stages:
            stage.process(cycle, config)

        snapshot = MetricsSummarizer(config).summarize(
            samples=cycle.samples,
            fixations=cycle.fixations,
            saccades=cycle.saccades,
            reading_patterns=cycle.reading_patterns,
            rereading_events=cycle.rereading_events,
            region_focus=cycle.region_focus,
            cycle_index=cycle_index,
            started_at=started_at,
            ended_at=ended_at,
        )
        logger.debug(
            "Cycle %s: %s samples, %s fixations, %s saccades",
            cycle_index,
            snapshot.sample_count,
            snapshot.fixation_count,
            snapshot.saccade_count,
        )
        return snapshot
