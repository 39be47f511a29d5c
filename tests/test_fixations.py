import pytest

from gaze_analytics.config import AnalyticsConfiguration
from gaze_analytics.domain.samples import GazeSample
from gaze_analytics.processing import detect_fixations

from conftest import build_dwell, build_scanpath


def test_constant_gaze_yields_single_fixation(config):
    samples = build_dwell(100.0, 100.0, 0.0, count=20)
    fixations = detect_fixations(samples, config)

    assert len(fixations) == 1
    fix = fixations[0]
    assert fix.centroid.x == pytest.approx(100.0)
    assert fix.centroid.y == pytest.approx(100.0)
    assert fix.duration_ms == pytest.approx(190.0)
    assert fix.sample_count == 20


def test_empty_input_gives_no_fixations(config):
    assert detect_fixations([], config) == []


def test_short_cluster_is_discarded(config):
    # 5 samples, 40 ms span < 100 ms
    samples = build_dwell(100.0, 100.0, 0.0, count=5)
    assert detect_fixations(samples, config) == []


def test_duration_matches_boundaries(config):
    samples = build_scanpath([(100, 100), (600, 100), (600, 700)])
    fixations = detect_fixations(samples, config)

    assert len(fixations) == 3
    for fix in fixations:
        assert fix.duration_ms == pytest.approx(fix.end_time - fix.start_time)
        assert fix.duration_ms >= config.fixation_min_duration_ms


def test_fixations_are_chronological_and_disjoint(config):
    samples = build_scanpath([(100, 100), (600, 100), (600, 700), (100, 700)])
    fixations = detect_fixations(samples, config)

    for prev, curr in zip(fixations, fixations[1:]):
        assert prev.end_time <= curr.start_time


def test_sample_outside_radius_closes_candidate(config):
    samples = build_dwell(100.0, 100.0, 0.0, count=15) + build_dwell(300.0, 100.0, 150.0, count=15)
    fixations = detect_fixations(samples, config)

    assert len(fixations) == 2
    assert fixations[0].sample_count == 15
    assert fixations[1].centroid.x == pytest.approx(300.0)


def test_centroid_is_two_point_running_average():
    cfg = AnalyticsConfiguration(fixation_min_duration_ms=1.0)
    samples = [GazeSample(0.0, 0.0, 0.0), GazeSample(20.0, 0.0, 10.0), GazeSample(40.0, 0.0, 20.0)]
    fixations = detect_fixations(samples, cfg)

    # (0 + 20) / 2 = 10, then (10 + 40) / 2 = 25; an arithmetic mean would give 20
    assert fixations[0].centroid.x == pytest.approx(25.0)


def test_out_of_order_timestamps_never_shrink_duration(config):
    samples = [
        GazeSample(100.0, 100.0, 0.0),
        GazeSample(100.0, 100.0, 150.0),
        GazeSample(100.0, 100.0, 50.0),
    ]
    fixations = detect_fixations(samples, config)

    assert len(fixations) == 1
    assert fixations[0].end_time == pytest.approx(150.0)
    assert fixations[0].duration_ms == pytest.approx(150.0)
