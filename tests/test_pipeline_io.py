import json

import pandas as pd
import pytest

from gaze_analytics import cli
from gaze_analytics.config import AnalyticsConfiguration
from gaze_analytics.domain.samples import GazeSample
from gaze_analytics.io import (
    JsonLinesWriter,
    OfflineAnalyticsPipeline,
    SnapshotCollector,
    read_samples,
    samples_from_frame,
    write_snapshots_jsonl,
    write_summary_tsv,
)

from conftest import build_dwell


def write_recording(path, samples, sep="\t", time_col="timestamp_ms"):
    df = pd.DataFrame(
        {"x": [s.x for s in samples], "y": [s.y for s in samples], time_col: [s.t for s in samples]}
    )
    df.to_csv(path, sep=sep, index=False)
    return path


def test_read_samples_tsv(tmp_path):
    samples = build_dwell(100.0, 200.0, 0.0, count=5)
    path = write_recording(tmp_path / "rec.tsv", samples)
    assert read_samples(path) == samples


def test_read_samples_csv_with_alias(tmp_path):
    samples = build_dwell(100.0, 200.0, 0.0, count=5)
    path = write_recording(tmp_path / "rec.csv", samples, sep=",", time_col="t")
    assert read_samples(path) == samples


def test_read_samples_keeps_file_order_and_drops_incomplete_rows(tmp_path):
    path = tmp_path / "rec.tsv"
    path.write_text("x\ty\ttimestamp_ms\n1\t1\t20\n2\t\t10\n3\t3\t0\n", encoding="utf-8")
    assert read_samples(path) == [GazeSample(1.0, 1.0, 20.0), GazeSample(3.0, 3.0, 0.0)]


def test_read_samples_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_samples(tmp_path / "missing.tsv")

    path = tmp_path / "bad.tsv"
    path.write_text("x\tz\n1\t2\n", encoding="utf-8")
    with pytest.raises(ValueError, match="y, timestamp_ms"):
        read_samples(path)


def test_samples_from_frame_ignores_extra_columns():
    df = pd.DataFrame({"x": [1.0], "y": [2.0], "timestamp": [3.0], "validity": [0]})
    assert samples_from_frame(df) == [GazeSample(1.0, 2.0, 3.0)]


def test_partition_windows():
    cfg = AnalyticsConfiguration(analysis_interval_ms=1000)
    samples = build_dwell(100.0, 100.0, 0.0, count=5) + build_dwell(100.0, 100.0, 2500.0, count=5)
    windows = OfflineAnalyticsPipeline(cfg).partition(samples)

    assert [(start, end, len(b)) for start, end, b in windows] == [
        (0.0, 1000.0, 5),
        (1000.0, 2000.0, 0),
        (2000.0, 3000.0, 5),
    ]

    quiet = OfflineAnalyticsPipeline(AnalyticsConfiguration(emit_empty_snapshots=False))
    assert [len(b) for _, _, b in quiet.partition(samples)] == [5, 5]
    assert OfflineAnalyticsPipeline(cfg).partition([]) == []


def test_partition_collapses_long_gaps():
    cfg = AnalyticsConfiguration(analysis_interval_ms=1000)
    samples = [GazeSample(100.0, 100.0, 0.0)] + [GazeSample(100.0, 100.0, 1.7e9 + i) for i in range(5)]
    windows = OfflineAnalyticsPipeline(cfg).partition(samples)

    assert [(start, end, len(b)) for start, end, b in windows] == [
        (0.0, 1000.0, 1),
        (1000.0, 1.7e9, 0),
        (1.7e9, 1.7e9 + 1000.0, 5),
    ]

    quiet = OfflineAnalyticsPipeline(AnalyticsConfiguration(analysis_interval_ms=1000, emit_empty_snapshots=False))
    assert [len(b) for _, _, b in quiet.partition(samples)] == [1, 5]


def test_pipeline_run_notifies_observers():
    collector = SnapshotCollector()
    pipeline = OfflineAnalyticsPipeline(AnalyticsConfiguration(analysis_interval_ms=500))
    pipeline.register_observer(collector)

    samples = build_dwell(100.0, 100.0, 0.0, count=100)
    snapshots = pipeline.run(samples)

    assert collector.started
    assert collector.snapshots == snapshots
    assert collector.completed_cycles == len(snapshots) == 2
    assert [s.cycle_index for s in snapshots] == [0, 1]
    assert sum(s.sample_count for s in snapshots) == 100
    assert snapshots[0].started_at.timestamp() == pytest.approx(0.0)
    assert snapshots[1].started_at == snapshots[0].ended_at


def test_pipeline_error_is_reported_and_raised():
    class BrokenEngine:
        def run(self, samples, config, **kwargs):
            raise RuntimeError("boom")

    collector = SnapshotCollector()
    pipeline = OfflineAnalyticsPipeline(engine=BrokenEngine())
    pipeline.register_observer(collector)

    with pytest.raises(RuntimeError):
        pipeline.run(build_dwell(1.0, 1.0, 0.0))
    assert len(collector.errors) == 1


def test_writers(tmp_path):
    snapshots = OfflineAnalyticsPipeline().run(build_dwell(100.0, 100.0, 0.0, count=20))

    jsonl = tmp_path / "out" / "snapshots.jsonl"
    write_snapshots_jsonl(snapshots, jsonl)
    lines = jsonl.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0])["fixation_count"] == 1

    tsv = tmp_path / "out" / "summary.tsv"
    df = write_summary_tsv(snapshots, tsv)
    assert pd.read_csv(tsv, sep="\t")["sample_count"].tolist() == [20]
    assert len(df) == 1


def test_json_lines_observer(tmp_path):
    path = tmp_path / "live" / "snapshots.jsonl"
    writer = JsonLinesWriter(path)
    pipeline = OfflineAnalyticsPipeline(AnalyticsConfiguration(analysis_interval_ms=100))
    pipeline.register_observer(writer)
    pipeline.run(build_dwell(100.0, 100.0, 0.0, count=30))

    assert writer.written == 3
    assert len(path.read_text(encoding="utf-8").splitlines()) == 3


def test_cli_replay(tmp_path, capsys):
    samples = build_dwell(100.0, 300.0, 0.0, count=50) + build_dwell(700.0, 300.0, 600.0, count=50)
    src = write_recording(tmp_path / "rec.tsv", samples)
    summary = tmp_path / "summary.tsv"
    jsonl = tmp_path / "snapshots.jsonl"

    code = cli.main(
        [str(src), "--interval", "500", "--summary-tsv", str(summary), "--output-jsonl", str(jsonl), "--log-level", "WARNING"]
    )

    assert code == 0
    df = pd.read_csv(summary, sep="\t")
    assert df["sample_count"].sum() == 100
    assert len(jsonl.read_text(encoding="utf-8").splitlines()) == len(df)
    assert "[Summary]" in capsys.readouterr().out


def test_cli_config_file_and_overrides(tmp_path):
    cfg_path = tmp_path / "session.json"
    cfg_path.write_text(json.dumps({"fixation_radius_px": 30, "analysis_interval_ms": 250}), encoding="utf-8")
    args = cli.build_arg_parser().parse_args(["rec.tsv", "--config", str(cfg_path), "--rows", "6", "--skip-empty"])
    cfg = cli.build_config(args)

    assert cfg.fixation_radius_px == 30
    assert cfg.analysis_interval_ms == 250
    assert cfg.screen_region_rows == 6
    assert cfg.emit_empty_snapshots is False


def test_cli_rejects_invalid_configuration(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["rec.tsv", "--rows", "0"])
    assert exc.value.code == 2
    assert "screen_region_rows" in capsys.readouterr().err
