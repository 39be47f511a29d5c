"""
Analytics Scheduler
Periodically drains the sample buffer, runs one analysis cycle and emits
the resulting snapshot to registered observers.

Usage:
    scheduler = AnalyticsScheduler(config, on_snapshot=send_to_backend)
    scheduler.start()
    # producer thread:
    scheduler.push_sample(x, y, timestamp_ms)
    ...
    scheduler.stop()
"""

import logging
import threading
import time
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from ..config import AnalyticsConfiguration
from ..domain.snapshot import AnalyticsSnapshot
from ..engine import AnalyticsEngine, IAnalyticsEngine
from ..io.observers import CallbackObserver, ObserverRegistry, SnapshotObserver
from .buffer import SampleBuffer

logger = logging.getLogger(__name__)


class SchedulerState(Enum):
    IDLE = "idle"
    ANALYZING = "analyzing"


class AnalyticsScheduler:
    """
    Runs analysis cycles on a fixed period in a single worker thread.

    Responsibilities:
    - Accept samples from the producer at any rate (no backpressure)
    - Swap out the sample buffer once per tick and analyse the detached copy
    - Never run two cycles at once; ticks missed during an overrunning
      cycle are coalesced instead of queued
    - Wait for an in-flight cycle on stop, so every emitted snapshot is complete
    """

    def __init__(
        self,
        config: Optional[AnalyticsConfiguration] = None,
        engine: Optional[IAnalyticsEngine] = None,
        on_snapshot: Optional[Callable[[AnalyticsSnapshot], None]] = None,
    ):
        """
        Initialize the scheduler

        Args:
            config: Session configuration. Defaults to AnalyticsConfiguration().
            engine: Engine used for each cycle. Defaults to AnalyticsEngine().
            on_snapshot: Optional callable receiving each snapshot.
        """
        self.config = config or AnalyticsConfiguration()
        self.engine = engine or AnalyticsEngine()
        self.buffer = SampleBuffer(self.config.max_buffer_samples)

        self._observers = ObserverRegistry()
        if on_snapshot is not None:
            self._observers.register(CallbackObserver(on_snapshot))

        # Threading
        self.is_running = False
        self._worker: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._cycle_lock = threading.Lock()
        self._lifecycle_lock = threading.Lock()
        self._counter_lock = threading.Lock()

        self._state = SchedulerState.IDLE
        self._cycle_count = 0
        self._skipped_ticks = 0
        self._failed_cycles = 0
        self._window_start = datetime.now(timezone.utc)

        logger.info(f"AnalyticsScheduler initialized (interval={self.config.analysis_interval_ms} ms)")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    @property
    def skipped_ticks(self) -> int:
        return self._skipped_ticks

    def register_observer(self, observer: SnapshotObserver):
        self._observers.register(observer)

    def unregister_observer(self, observer: SnapshotObserver):
        self._observers.unregister(observer)

    def push_sample(self, x: float, y: float, timestamp_ms: float):
        """
        Add one gaze sample. Safe to call from the producer thread at any rate.

        Args:
            x: Horizontal gaze position in pixels
            y: Vertical gaze position in pixels
            timestamp_ms: Capture time in milliseconds
        """
        self.buffer.push(x, y, timestamp_ms)

    def start(self):
        """
        Start the periodic worker thread.

        Returns:
            None.
        """
        with self._lifecycle_lock:
            if self.is_running:
                logger.warning("AnalyticsScheduler already running")
                return

            self._stop_event.clear()
            self._window_start = datetime.now(timezone.utc)
            self._observers.notify_start(self.config)

            self._worker = threading.Thread(
                target=self._tick_loop,
                name="GazeAnalytics-Scheduler",
                daemon=True,
            )
            self.is_running = True
            self._worker.start()
            logger.info("✓ AnalyticsScheduler started")

    def stop(self, flush: bool = False):
        """
        Stop the worker thread, waiting for any in-flight cycle to finish.

        Args:
            flush: If True, analyse the samples still in the buffer one last time.

        Returns:
            None.
        """
        with self._lifecycle_lock:
            if not self.is_running:
                return

            logger.info("Stopping AnalyticsScheduler...")
            self._stop_event.set()
            if self._worker is not None and self._worker.is_alive():
                # No timeout: a cycle is never cancelled halfway
                self._worker.join()
            self._worker = None
            self.is_running = False

            # Cycles started through run_cycle() on other threads hold the
            # cycle lock; wait for them before flushing and reporting.
            with self._cycle_lock:
                if flush:
                    self._guarded(self._analyze)

            self._observers.notify_complete(self.config, self._cycle_count)
            logger.info(f"✓ AnalyticsScheduler stopped after {self._cycle_count} cycles")

    def run_cycle(self) -> Optional[AnalyticsSnapshot]:
        """
        Run exactly one analysis cycle on the calling thread.

        Returns:
            The emitted snapshot, or None when the tick was skipped (another
            cycle in progress) or the buffer was empty and empty snapshots
            are disabled.
        """
        if not self._cycle_lock.acquire(blocking=False):
            self._count_skipped(1)
            logger.warning("Analysis cycle already in progress, tick skipped")
            return None

        try:
            return self._analyze()
        finally:
            self._cycle_lock.release()

    def _analyze(self) -> Optional[AnalyticsSnapshot]:
        """One cycle; the caller holds ``_cycle_lock``."""
        try:
            self._state = SchedulerState.ANALYZING
            started_at = self._window_start
            samples = self.buffer.swap()
            ended_at = datetime.now(timezone.utc)
            self._window_start = ended_at

            if not samples and not self.config.emit_empty_snapshots:
                return None

            snapshot = self.engine.run(
                samples,
                self.config,
                cycle_index=self._cycle_count,
                started_at=started_at,
                ended_at=ended_at,
            )
            self._cycle_count += 1
            self._observers.notify_snapshot(snapshot)
            return snapshot
        finally:
            self._state = SchedulerState.IDLE

    def get_status(self) -> dict:
        """
        Return the current scheduler state.

        Returns:
            Dict containing state, running flag, cycle counters and buffer size.
        """
        return {
            'state': self._state.value,
            'is_running': self.is_running,
            'cycles_completed': self._cycle_count,
            'skipped_ticks': self._skipped_ticks,
            'failed_cycles': self._failed_cycles,
            'buffered_samples': len(self.buffer),
            'dropped_samples': self.buffer.dropped_count,
            'observers': len(self._observers),
        }

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    def _guarded(self, cycle) -> Optional[AnalyticsSnapshot]:
        """Run ``cycle``; a failure is logged and reported to observers."""
        try:
            return cycle()
        except Exception as e:
            with self._counter_lock:
                self._failed_cycles += 1
            logger.error(f"Error in analysis cycle: {e}", exc_info=True)
            self._observers.notify_error(self.config, e)
            return None

    def _count_skipped(self, n: int):
        with self._counter_lock:
            self._skipped_ticks += n

    def _tick_loop(self):
        """
        Background thread: one cycle per period, missed periods coalesced.

        Returns:
            None.
        """
        logger.info("Analytics tick loop started")
        interval = self.config.analysis_interval_seconds
        next_deadline = time.monotonic() + interval

        while not self._stop_event.wait(max(0.0, next_deadline - time.monotonic())):
            self._guarded(self.run_cycle)

            next_deadline += interval
            now = time.monotonic()
            if now >= next_deadline:
                missed = int((now - next_deadline) // interval) + 1
                self._count_skipped(missed)
                next_deadline += missed * interval
                logger.warning(f"Analysis cycle overran the period, coalesced {missed} tick(s)")

        logger.info("Analytics tick loop stopped")

    def __enter__(self):
        """Context manager entry - starts the scheduler"""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - stops and flushes"""
        self.stop(flush=True)

    def __repr__(self):
        status = "running" if self.is_running else "stopped"
        return f"<AnalyticsScheduler(status={status}, cycles={self._cycle_count})>"
