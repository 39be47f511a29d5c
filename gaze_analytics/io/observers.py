# gaze_analytics/io/observers.py
"""
Observer Pattern for delivering snapshots to downstream consumers.

Persistence, batching and transport of snapshots are the consumer's job;
the scheduler and the offline pipeline only notify registered observers.

Example:
    >>> from gaze_analytics.io.observers import LoggingReporter, JsonLinesWriter
    >>> from gaze_analytics.runtime import AnalyticsScheduler
    >>>
    >>> scheduler = AnalyticsScheduler(config)
    >>> scheduler.register_observer(LoggingReporter())
    >>> scheduler.register_observer(JsonLinesWriter("snapshots.jsonl"))
    >>> scheduler.start()
"""
from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, List, Optional

from ..config import AnalyticsConfiguration
from ..domain.snapshot import AnalyticsSnapshot

logger = logging.getLogger(__name__)


class SnapshotObserver(ABC):
    """
    Abstract base class for snapshot consumers.

    Observers are notified when a session starts, once per analysis cycle,
    when the session ends and when a cycle fails.
    """

    @abstractmethod
    def on_start(self, config: AnalyticsConfiguration):
        """
        Called when tracking (or an offline replay) starts.

        Args:
            config: Session configuration
        """
        pass

    @abstractmethod
    def on_snapshot(self, snapshot: AnalyticsSnapshot):
        """
        Called once per completed analysis cycle.

        Args:
            snapshot: Complete, immutable result of the cycle
        """
        pass

    @abstractmethod
    def on_complete(self, config: AnalyticsConfiguration, cycle_count: int):
        """
        Called when tracking stops.

        Args:
            config: Session configuration
            cycle_count: Number of snapshots emitted in the session
        """
        pass

    @abstractmethod
    def on_error(self, config: AnalyticsConfiguration, error: Exception):
        """
        Called when an analysis cycle fails.

        Args:
            config: Session configuration
            error: Exception that occurred
        """
        pass


class CallbackObserver(SnapshotObserver):
    """
    Adapts a plain ``on_snapshot(snapshot)`` callable.

    Example:
        >>> scheduler.register_observer(CallbackObserver(queue.put))
    """

    def __init__(self, callback: Callable[[AnalyticsSnapshot], None]):
        self.callback = callback

    def on_start(self, config: AnalyticsConfiguration):
        pass

    def on_snapshot(self, snapshot: AnalyticsSnapshot):
        self.callback(snapshot)

    def on_complete(self, config: AnalyticsConfiguration, cycle_count: int):
        pass

    def on_error(self, config: AnalyticsConfiguration, error: Exception):
        pass


class LoggingReporter(SnapshotObserver):
    """Logs a one-line summary for each snapshot."""

    def __init__(self, level: int = logging.INFO, skip_empty: bool = False):
        """
        Args:
            level: Log level used for per-snapshot lines
            skip_empty: If True, cycles without samples are not logged
        """
        self.level = level
        self.skip_empty = skip_empty

    def on_start(self, config: AnalyticsConfiguration):
        logger.info(
            "Gaze analytics started: interval=%s ms, grid=%sx%s, viewport=%sx%s",
            config.analysis_interval_ms,
            config.screen_region_rows,
            config.screen_region_cols,
            config.viewport_width,
            config.viewport_height,
        )

    def on_snapshot(self, snapshot: AnalyticsSnapshot):
        if self.skip_empty and snapshot.is_empty:
            return
        logger.log(
            self.level,
            "Cycle %s: samples=%s fixations=%s (avg %.1f ms) saccades=%s reading=%s rereading=%s "
            "load=%.3f systematicity=%.3f quality=%.2f",
            snapshot.cycle_index,
            snapshot.sample_count,
            snapshot.fixation_count,
            snapshot.average_fixation_duration_ms,
            snapshot.saccade_count,
            snapshot.reading_pattern_count,
            snapshot.rereading_event_count,
            snapshot.cognitive_load_index,
            snapshot.scanpath_systematicity,
            snapshot.data_quality_score,
        )

    def on_complete(self, config: AnalyticsConfiguration, cycle_count: int):
        logger.info("Gaze analytics finished after %s cycles", cycle_count)

    def on_error(self, config: AnalyticsConfiguration, error: Exception):
        logger.error("Analysis cycle failed: %s", error)


class JsonLinesWriter(SnapshotObserver):
    """
    Appends each snapshot as one JSON object per line.

    Example:
        >>> writer = JsonLinesWriter("out/snapshots.jsonl")
        >>> pipeline.register_observer(writer)
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.written = 0

    def on_start(self, config: AnalyticsConfiguration):
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def on_snapshot(self, snapshot: AnalyticsSnapshot):
        with open(self.path, "a", encoding="utf-8") as fh:
            fh.write(json.dumps(snapshot.to_dict()) + "\n")
        self.written += 1

    def on_complete(self, config: AnalyticsConfiguration, cycle_count: int):
        logger.info("Wrote %s snapshots to %s", self.written, self.path)

    def on_error(self, config: AnalyticsConfiguration, error: Exception):
        pass


class SnapshotCollector(SnapshotObserver):
    """Keeps every snapshot in memory (tests, offline analysis)."""

    def __init__(self):
        self.snapshots: List[AnalyticsSnapshot] = []
        self.errors: List[Exception] = []
        self.started = False
        self.completed_cycles: Optional[int] = None

    def on_start(self, config: AnalyticsConfiguration):
        self.started = True

    def on_snapshot(self, snapshot: AnalyticsSnapshot):
        self.snapshots.append(snapshot)

    def on_complete(self, config: AnalyticsConfiguration, cycle_count: int):
        self.completed_cycles = cycle_count

    def on_error(self, config: AnalyticsConfiguration, error: Exception):
        self.errors.append(error)


class ObserverRegistry:
    """Registered observers plus failure-isolated notification."""

    def __init__(self):
        self._observers: List[SnapshotObserver] = []

    def register(self, observer: SnapshotObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def unregister(self, observer: SnapshotObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def __len__(self) -> int:
        return len(self._observers)

    def notify_start(self, config: AnalyticsConfiguration) -> None:
        for observer in list(self._observers):
            try:
                observer.on_start(config)
            except Exception:
                logger.warning("Observer %s failed on start", type(observer).__name__, exc_info=True)

    def notify_snapshot(self, snapshot: AnalyticsSnapshot) -> None:
        for observer in list(self._observers):
            try:
                observer.on_snapshot(snapshot)
            except Exception:
                logger.warning("Observer %s failed on snapshot", type(observer).__name__, exc_info=True)

    def notify_complete(self, config: AnalyticsConfiguration, cycle_count: int) -> None:
        for observer in list(self._observers):
            try:
                observer.on_complete(config, cycle_count)
            except Exception:
                logger.warning("Observer %s failed on complete", type(observer).__name__, exc_info=True)

    def notify_error(self, config: AnalyticsConfiguration, error: Exception) -> None:
        for observer in list(self._observers):
            try:
                observer.on_error(config, error)
            except Exception:
                logger.warning("Observer %s failed on error", type(observer).__name__, exc_info=True)
