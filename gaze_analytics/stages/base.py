"""Base class for each step of the analytics pipeline."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from ..config import AnalyticsConfiguration
from ..domain.events import Fixation, ReadingPattern, RegionFocus, RereadingEvent, Saccade
from ..domain.samples import GazeSample


@dataclass
class AnalysisCycle:
    """Working set of one cycle.

    Owned exclusively by the engine run that created it; stages fill in
    their output fields in order.
    """

    samples: List[GazeSample]
    fixations: List[Fixation] = field(default_factory=list)
    saccades: List[Saccade] = field(default_factory=list)
    reading_patterns: List[ReadingPattern] = field(default_factory=list)
    rereading_events: List[RereadingEvent] = field(default_factory=list)
    region_focus: Dict[Tuple[int, int], RegionFocus] = field(default_factory=dict)


class IAnalysisStage(ABC):
    """Abstract processing stage.

    Each concrete implementation wraps exactly one detector.
    """

    @abstractmethod
    def process(self, cycle: AnalysisCycle, config: AnalyticsConfiguration) -> None:
        """Fill this stage's output field of ``cycle``."""
        raise NotImplementedError
