import copy
import json
import pickle
from datetime import datetime, timezone

import pytest

from gaze_analytics.config import AnalyticsConfiguration
from gaze_analytics.domain import ReadingDirection, snapshots_to_frame
from gaze_analytics.engine import AnalyticsEngine
from gaze_analytics.stages import AnalysisCycle, FixationDetectionStage, IAnalysisStage

from conftest import build_dwell, build_scanpath

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
T1 = datetime(2024, 1, 1, 0, 0, 1, tzinfo=timezone.utc)


def test_constant_gaze_snapshot(config):
    snapshot = AnalyticsEngine().run(build_dwell(100.0, 100.0, 0.0, count=20), config)

    assert snapshot.sample_count == 20
    assert snapshot.fixation_count == 1
    assert snapshot.saccade_count == 0
    assert snapshot.reading_pattern_count == 0
    assert snapshot.average_fixation_duration_ms == pytest.approx(190.0)
    assert snapshot.fixation_saccade_ratio == pytest.approx(1.0)
    assert snapshot.first_sample_time == 0.0
    assert snapshot.last_sample_time == 190.0
    assert len(snapshot.gaze_points) == 2


def test_empty_cycle_snapshot(config):
    snapshot = AnalyticsEngine().run([], config, cycle_index=3, started_at=T0, ended_at=T1)

    assert snapshot.is_empty
    assert snapshot.cycle_index == 3
    assert snapshot.fixation_count == 0
    assert snapshot.average_fixation_duration_ms == 0.0
    assert snapshot.cognitive_load_index == 0.0
    assert snapshot.scanpath_systematicity == 0.0
    assert snapshot.fixation_saccade_ratio == 0.0
    assert snapshot.reading_direction is ReadingDirection.IRREGULAR
    assert snapshot.first_sample_time is None
    assert snapshot.region_focus == {}
    assert snapshot.fixation_cluster_count == 0


def test_reading_session(config, reading_line_samples):
    snapshot = AnalyticsEngine().run(reading_line_samples, config)

    assert snapshot.fixation_count == 5
    # 70 px steps are below the saccade threshold
    assert snapshot.saccade_count == 0
    assert snapshot.reading_pattern_count == 1
    assert snapshot.regression_count == 0
    assert snapshot.reading_direction is ReadingDirection.LEFT_TO_RIGHT
    assert snapshot.scanpath_systematicity == pytest.approx(1.0)
    assert snapshot.fixation_saccade_ratio == pytest.approx(5.0)
    assert snapshot.cognitive_load_index == pytest.approx(0.7 * 150.0 / 250.0)
    assert snapshot.reading_patterns[0].speed_words_per_min > 0
    # 70 px apart, beyond the 50 px clustering distance
    assert snapshot.fixation_cluster_count == 5


def test_cross_module_consistency(config):
    samples = build_scanpath([(100, 100), (700, 150), (1500, 900), (200, 800), (260, 800), (320, 800)])
    snapshot = AnalyticsEngine().run(samples, config)

    n = snapshot.fixation_count
    assert snapshot.saccade_count <= max(n - 1, 0)
    for s in snapshot.saccades:
        assert s.to_fixation_idx == s.from_fixation_idx + 1
        assert s.amplitude_px >= config.saccade_min_distance_px
        assert s.duration_ms >= 1.0
    assert sum(r.fixation_count for r in snapshot.region_focus.values()) == n
    assert sum(r.total_duration_ms for r in snapshot.region_focus.values()) == pytest.approx(
        snapshot.total_fixation_duration_ms
    )
    assert 0.0 <= snapshot.scanpath_systematicity <= 1.0


def test_engine_is_deterministic(config, reading_line_samples):
    engine = AnalyticsEngine()
    first = engine.run(reading_line_samples, config, cycle_index=1)
    second = engine.run(reading_line_samples, config, cycle_index=1)
    assert first == second
    assert first.to_dict() == second.to_dict()
    assert first.started_at is None and first.ended_at is None
    assert first.to_dict()["started_at"] is None


def test_snapshot_pickles_and_deep_copies(config, reading_line_samples):
    snapshot = AnalyticsEngine().run(reading_line_samples, config, started_at=T0, ended_at=T1)

    assert pickle.loads(pickle.dumps(snapshot)) == snapshot
    assert copy.deepcopy(snapshot) == snapshot


def test_snapshot_to_dict_is_json_serialisable(config, reading_line_samples):
    snapshot = AnalyticsEngine().run(reading_line_samples, config, started_at=T0, ended_at=T1)
    payload = json.loads(json.dumps(snapshot.to_dict()))

    assert payload["started_at"] == T0.isoformat()
    assert payload["reading_direction"] == "left-to-right"
    assert payload["fixations"][0]["centroid"] == {"x": 100.0, "y": 300.0}
    assert "r1c0" in payload["region_focus"]


def test_snapshots_to_frame(config, reading_line_samples):
    engine = AnalyticsEngine()
    snapshots = [
        engine.run(reading_line_samples, config, cycle_index=0),
        engine.run([], config, cycle_index=1),
    ]
    df = snapshots_to_frame(snapshots)

    assert list(df["cycle_index"]) == [0, 1]
    assert list(df["fixation_count"]) == [5, 0]
    assert "fixations" not in df.columns
    assert "region_focus" not in df.columns


def test_custom_stage_list(config):
    class CountingStage(IAnalysisStage):
        def __init__(self):
            self.calls = 0

        def process(self, cycle: AnalysisCycle, config: AnalyticsConfiguration) -> None:
            self.calls += 1

    counting = CountingStage()
    engine = AnalyticsEngine(stages=[FixationDetectionStage(), counting])
    snapshot = engine.run(build_dwell(100.0, 100.0, 0.0), config)

    assert counting.calls == 1
    assert snapshot.fixation_count == 1
    assert snapshot.saccade_count == 0
