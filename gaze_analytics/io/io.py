# gaze_analytics/io/io.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, List

import pandas as pd

from ..config import ValidationMessages
from ..domain.samples import GazeSample
from ..domain.snapshot import AnalyticsSnapshot, snapshots_to_frame

REQUIRED_COLUMNS = ("x", "y", "timestamp_ms")
TIMESTAMP_ALIASES = ("t", "timestamp")


def _separator_for(path: Path) -> str:
    return "," if path.suffix.lower() == ".csv" else "\t"


def read_samples(path: str | Path) -> List[GazeSample]:
    """
    Gaze-Samples aus einer TSV/CSV Datei lesen.

    - ``.csv`` mit Komma, alles andere mit Tab als Separator
    - Spalten ``x``, ``y``, ``timestamp_ms`` (``t`` / ``timestamp`` werden akzeptiert)
    - Zeilen mit fehlenden Werten werden verworfen, die Dateireihenfolge bleibt erhalten
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Gaze file not found: {path}")

    df = pd.read_csv(path, sep=_separator_for(path), low_memory=False)
    return samples_from_frame(df)


def samples_from_frame(df: pd.DataFrame) -> List[GazeSample]:
    """DataFrame mit x/y/timestamp_ms Spalten in GazeSamples umwandeln."""
    if "timestamp_ms" not in df.columns:
        for alias in TIMESTAMP_ALIASES:
            if alias in df.columns:
                df = df.rename(columns={alias: "timestamp_ms"})
                break

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(ValidationMessages.MISSING_COLUMNS.format(columns=", ".join(missing)))

    clean = df.loc[:, list(REQUIRED_COLUMNS)].apply(pd.to_numeric, errors="coerce").dropna()
    return [
        GazeSample(float(x), float(y), float(t))
        for x, y, t in clean.itertuples(index=False, name=None)
    ]


def write_snapshots_jsonl(snapshots: Iterable[AnalyticsSnapshot], path: str | Path) -> None:
    """Snapshots als JSON Lines schreiben (ein Objekt pro Zeile)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as fh:
        for snapshot in snapshots:
            fh.write(json.dumps(snapshot.to_dict()) + "\n")


def write_summary_tsv(snapshots: Iterable[AnalyticsSnapshot], path: str | Path) -> pd.DataFrame:
    """
    Skalare Kennzahlen pro Zyklus als TSV schreiben.

    Returns:
        Das geschriebene DataFrame.
    """
    df = snapshots_to_frame(snapshots)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, sep="\t", index=False)
    return df
