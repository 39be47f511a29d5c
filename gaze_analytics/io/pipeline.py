# gaze_analytics/io/pipeline.py
"""Offline replay of recorded gaze samples.

Cuts a recording into consecutive analysis windows of
``analysis_interval_ms`` and runs one engine cycle per window, so a file
produces the same snapshot sequence a live session would have produced.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from ..config import AnalyticsConfiguration
from ..domain.samples import GazeSample
from ..domain.snapshot import AnalyticsSnapshot
from ..engine import AnalyticsEngine, IAnalyticsEngine
from .io import read_samples
from .observers import ObserverRegistry, SnapshotObserver

logger = logging.getLogger(__name__)

Window = Tuple[float, float, List[GazeSample]]


def _ms_to_datetime(ms: float) -> datetime:
    return datetime.fromtimestamp(ms / 1000.0, tz=timezone.utc)


class OfflineAnalyticsPipeline:
    """Replays a recording through the analytics engine with Observer Pattern support.

    Responsibilities:
        - Partition samples into fixed-length windows
        - Run one analysis cycle per window
        - Notify observers of start, snapshots, completion and errors

    Example:
        >>> pipeline = OfflineAnalyticsPipeline(AnalyticsConfiguration(analysis_interval_ms=500))
        >>> pipeline.register_observer(LoggingReporter())
        >>> snapshots = pipeline.run_file("session.tsv")
    """

    def __init__(
        self,
        config: Optional[AnalyticsConfiguration] = None,
        engine: Optional[IAnalyticsEngine] = None,
    ):
        self.config = config or AnalyticsConfiguration()
        self.engine = engine or AnalyticsEngine()
        self._observers = ObserverRegistry()

    def register_observer(self, observer: SnapshotObserver) -> None:
        """
        Register an observer to receive snapshot notifications.

        Args:
            observer: SnapshotObserver instance
        """
        self._observers.register(observer)

    def unregister_observer(self, observer: SnapshotObserver) -> None:
        self._observers.unregister(observer)

    def partition(self, samples: Sequence[GazeSample]) -> List[Window]:
        """
        Split samples into consecutive windows starting at the earliest timestamp.

        Samples keep their input order inside each window. Only occupied
        windows are materialised; when ``emit_empty_snapshots`` is set, each
        gap between two occupied windows becomes a single empty window
        spanning the whole gap, so a stray timestamp cannot blow up the
        number of cycles.

        Returns:
            List of (window_start_ms, window_end_ms, samples) tuples.
        """
        if not samples:
            return []

        interval = self.config.analysis_interval_ms
        origin = min(s.t for s in samples)

        buckets: Dict[int, List[GazeSample]] = {}
        for s in samples:
            buckets.setdefault(int((s.t - origin) // interval), []).append(s)

        windows: List[Window] = []
        previous: Optional[int] = None
        for idx in sorted(buckets):
            if previous is not None and idx - previous > 1 and self.config.emit_empty_snapshots:
                missing = idx - previous - 1
                if missing > 1:
                    logger.warning("Collapsed %s empty windows into one (%.0f ms gap)", missing, missing * interval)
                windows.append((origin + (previous + 1) * interval, origin + idx * interval, []))
            start = origin + idx * interval
            windows.append((start, start + interval, buckets[idx]))
            previous = idx
        return windows

    def run(self, samples: Sequence[GazeSample]) -> List[AnalyticsSnapshot]:
        """
        Run one analysis cycle per window.

        Args:
            samples: Recorded gaze samples (any order)

        Returns:
            Snapshots in window order, cycle_index counting from zero.
        """
        self._observers.notify_start(self.config)

        snapshots: List[AnalyticsSnapshot] = []
        try:
            for start_ms, end_ms, bucket in self.partition(samples):
                snapshot = self.engine.run(
                    bucket,
                    self.config,
                    cycle_index=len(snapshots),
                    started_at=_ms_to_datetime(start_ms),
                    ended_at=_ms_to_datetime(end_ms),
                )
                snapshots.append(snapshot)
                self._observers.notify_snapshot(snapshot)
        except Exception as e:
            logger.error("Offline replay failed after %s cycles: %s", len(snapshots), e)
            self._observers.notify_error(self.config, e)
            raise

        logger.info("Replayed %s samples into %s snapshots", len(samples), len(snapshots))
        self._observers.notify_complete(self.config, len(snapshots))
        return snapshots

    def run_file(self, input_path: str | Path) -> List[AnalyticsSnapshot]:
        """Read a TSV/CSV recording and replay it."""
        samples = read_samples(input_path)
        logger.info("Loaded %s samples from %s", len(samples), input_path)
        return self.run(samples)
