"""I/O, observers and offline replay."""

from .io import read_samples, samples_from_frame, write_snapshots_jsonl, write_summary_tsv
from .observers import (
    SnapshotObserver,
    CallbackObserver,
    LoggingReporter,
    JsonLinesWriter,
    SnapshotCollector,
    ObserverRegistry,
)
from .pipeline import OfflineAnalyticsPipeline

__all__ = [
    "read_samples",
    "samples_from_frame",
    "write_snapshots_jsonl",
    "write_summary_tsv",
    "SnapshotObserver",
    "CallbackObserver",
    "LoggingReporter",
    "JsonLinesWriter",
    "SnapshotCollector",
    "ObserverRegistry",
    "OfflineAnalyticsPipeline",
]
