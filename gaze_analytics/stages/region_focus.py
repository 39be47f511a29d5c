"""Region focus aggregation stage."""
from __future__ import annotations

from .base import AnalysisCycle, IAnalysisStage
from ..config import AnalyticsConfiguration
from ..processing.regions import aggregate_region_focus


class RegionFocusStage(IAnalysisStage):
    """Bin fixations into the viewport grid."""

    def process(self, cycle: AnalysisCycle, config: AnalyticsConfiguration) -> None:
        cycle_start = min((s.t for s in cycle.samples), default=None)
        cycle.region_focus = aggregate_region_focus(cycle.fixations, config, cycle_start_ms=cycle_start)
