"""
Sample buffer shared between the gaze producer and the scheduler.

The buffer is the only mutable state touched from two threads. The lock is
held just long enough to append a sample or to swap the current storage for
an empty one; the detached storage is then processed without any lock.
"""
from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Deque, List, Optional

from ..domain.samples import GazeSample

logger = logging.getLogger(__name__)


class SampleBuffer:
    """Double-buffered store of raw gaze samples for the current cycle."""

    def __init__(self, capacity: Optional[int] = None) -> None:
        """
        Args:
            capacity: Optional maximum number of buffered samples. When full,
                the oldest sample is dropped; the producer is never blocked.
        """
        self._capacity = capacity
        self._lock = threading.Lock()
        self._samples: Deque[GazeSample] = deque(maxlen=capacity)
        self._dropped = 0

    def push(self, x: float, y: float, timestamp_ms: float) -> None:
        self.append(GazeSample(float(x), float(y), float(timestamp_ms)))

    def append(self, sample: GazeSample) -> None:
        with self._lock:
            if self._capacity is not None and len(self._samples) == self._capacity:
                self._dropped += 1
                if self._dropped == 1 or self._dropped % 1000 == 0:
                    logger.warning("Sample buffer full (%s), dropped %s samples so far", self._capacity, self._dropped)
            self._samples.append(sample)

    def swap(self) -> List[GazeSample]:
        """Detach all buffered samples and leave an empty buffer behind."""
        with self._lock:
            detached = self._samples
            self._samples = deque(maxlen=self._capacity)
        return list(detached)

    def clear(self) -> None:
        self.swap()

    @property
    def dropped_count(self) -> int:
        with self._lock:
            return self._dropped

    def __len__(self) -> int:
        with self._lock:
            return len(self._samples)

    def __repr__(self):
        return f"<SampleBuffer(size={len(self)}, capacity={self._capacity})>"
