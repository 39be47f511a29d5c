import pytest

from gaze_analytics.config import AnalyticsConfiguration
from gaze_analytics.processing import aggregate_region_focus, region_of

from conftest import make_fixation


def test_region_of_grid_cells(config):
    # 4x4 over 1920x1080: cells of 480 x 270
    assert region_of(0, 0, config) == (0, 0)
    assert region_of(479.9, 269.9, config) == (0, 0)
    assert region_of(480, 270, config) == (1, 1)
    assert region_of(1919, 1079, config) == (3, 3)


def test_region_of_clamps_off_screen_points(config):
    assert region_of(-50, -10, config) == (0, 0)
    assert region_of(5000, 5000, config) == (3, 3)
    assert region_of(1920, 1080, config) == (3, 3)


def test_region_focus_conserves_duration_and_count(config):
    fixations = [
        make_fixation(100, 100, start=0, duration=200),
        make_fixation(120, 110, start=300, duration=150),
        make_fixation(1000, 600, start=500, duration=300),
        make_fixation(-20, 2000, start=900, duration=120),
    ]
    focus = aggregate_region_focus(fixations, config)

    assert sum(f.fixation_count for f in focus.values()) == len(fixations)
    assert sum(f.total_duration_ms for f in focus.values()) == pytest.approx(
        sum(f.duration_ms for f in fixations)
    )

    top_left = focus[(0, 0)]
    assert top_left.fixation_count == 2
    assert top_left.total_duration_ms == pytest.approx(350.0)
    assert top_left.first_visit_time == 0
    assert top_left.last_visit_time == 300
    assert top_left.region_id == "r0c0"
    assert (top_left.x, top_left.y, top_left.width, top_left.height) == (0.0, 0.0, 480.0, 270.0)

    assert (3, 0) in focus
    assert focus[(2, 2)].x == pytest.approx(960.0)


def test_region_focus_density_and_time_to_first_fixation(config):
    fixations = [
        make_fixation(100, 100, start=1000, duration=200),
        make_fixation(120, 110, start=1300, duration=150),
        make_fixation(1000, 600, start=1500, duration=300),
    ]
    focus = aggregate_region_focus(fixations, config)

    # 480 x 270 cells hold 12.96 units of 10,000 px^2
    assert focus[(0, 0)].density_per_10k_px2 == pytest.approx(2 / 12.96)
    assert focus[(2, 2)].density_per_10k_px2 == pytest.approx(1 / 12.96)
    assert focus[(0, 0)].time_to_first_fixation_ms == 0.0
    assert focus[(2, 2)].time_to_first_fixation_ms == pytest.approx(500.0)

    anchored = aggregate_region_focus(fixations, config, cycle_start_ms=900.0)
    assert anchored[(0, 0)].time_to_first_fixation_ms == pytest.approx(100.0)
    assert anchored[(2, 2)].time_to_first_fixation_ms == pytest.approx(600.0)


def test_region_focus_only_lists_visited_cells(config):
    assert aggregate_region_focus([], config) == {}
    focus = aggregate_region_focus([make_fixation(100, 100)], config)
    assert list(focus) == [(0, 0)]


def test_custom_grid():
    cfg = AnalyticsConfiguration(screen_region_rows=2, screen_region_cols=3, viewport_width=900, viewport_height=600)
    assert region_of(650, 350, cfg) == (1, 2)
    assert cfg.region_width == pytest.approx(300.0)
    assert cfg.region_height == pytest.approx(300.0)
