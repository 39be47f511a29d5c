# gaze_analytics/cli.py
from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from typing import List, Optional

from .config import AnalyticsConfiguration, InvalidConfigurationError
from .io import (
    LoggingReporter,
    OfflineAnalyticsPipeline,
    write_snapshots_jsonl,
    write_summary_tsv,
)

logger = logging.getLogger(__name__)

# CLI flag -> configuration field
_OVERRIDES = (
    ("fixation_radius", "fixation_radius_px", float),
    ("fixation_min_duration", "fixation_min_duration_ms", float),
    ("saccade_min_distance", "saccade_min_distance_px", float),
    ("reading_line_height", "reading_line_height_px", float),
    ("reading_min_horizontal", "reading_min_horizontal_distance_px", float),
    ("rereading_tolerance", "rereading_vertical_tolerance_px", float),
    ("rows", "screen_region_rows", int),
    ("cols", "screen_region_cols", int),
    ("viewport_width", "viewport_width", float),
    ("viewport_height", "viewport_height", float),
    ("interval", "analysis_interval_ms", float),
    ("gaze_point_stride", "gaze_point_stride", int),
)


def build_arg_parser() -> argparse.ArgumentParser:
    """
    CLI parser for offline replay of a gaze recording.

    Parsing and option descriptions only; no analysis logic.
    """
    parser = argparse.ArgumentParser(
        description=(
            "Replay a recorded gaze stream (x, y, timestamp_ms) through the "
            "gaze analytics engine and emit one snapshot per analysis interval."
        ),
    )
    parser.add_argument(
        "input",
        help="Input TSV/CSV with columns x, y, timestamp_ms (.csv is comma separated, anything else tab).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="JSON file with configuration values. Command line flags override it.",
    )

    # Configuration overrides
    parser.add_argument("--fixation-radius", type=float, default=None, help="Fixation radius in px (default: 50).")
    parser.add_argument(
        "--fixation-min-duration", type=float, default=None, help="Minimum fixation duration in ms (default: 100)."
    )
    parser.add_argument(
        "--saccade-min-distance", type=float, default=None, help="Minimum saccade amplitude in px (default: 100)."
    )
    parser.add_argument(
        "--reading-line-height", type=float, default=None, help="Max vertical drift within a reading line (default: 40)."
    )
    parser.add_argument(
        "--reading-min-horizontal",
        type=float,
        default=None,
        help="Min rightward step between reading fixations in px (default: 50).",
    )
    parser.add_argument(
        "--rereading-tolerance",
        type=float,
        default=None,
        help="Vertical tolerance for rereading in px (default: 50).",
    )
    parser.add_argument("--rows", type=int, default=None, help="Screen region grid rows (default: 4).")
    parser.add_argument("--cols", type=int, default=None, help="Screen region grid columns (default: 4).")
    parser.add_argument("--viewport-width", type=float, default=None, help="Viewport width in px (default: 1920).")
    parser.add_argument("--viewport-height", type=float, default=None, help="Viewport height in px (default: 1080).")
    parser.add_argument("--interval", type=float, default=None, help="Analysis interval in ms (default: 1000).")
    parser.add_argument(
        "--gaze-point-stride",
        type=int,
        default=None,
        help="Keep every n-th raw sample in the snapshot (default: 10).",
    )
    parser.add_argument(
        "--skip-empty",
        action="store_true",
        help="Do not emit snapshots for windows without samples.",
    )

    # Outputs
    parser.add_argument("--output-jsonl", default=None, help="Write all snapshots as JSON Lines.")
    parser.add_argument("--summary-tsv", default=None, help="Write per-cycle scalar metrics as TSV.")
    parser.add_argument(
        "--plot",
        action="store_true",
        help="Show scanpath of the busiest cycle and a fixation heatmap (requires matplotlib).",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO).",
    )
    return parser


def build_config(args: argparse.Namespace) -> AnalyticsConfiguration:
    """Configuration from the optional JSON file plus command line overrides."""
    cfg = AnalyticsConfiguration.from_json_file(args.config) if args.config else AnalyticsConfiguration()

    overrides = {}
    for flag, field_name, cast in _OVERRIDES:
        value = getattr(args, flag)
        if value is not None:
            overrides[field_name] = cast(value)
    if args.skip_empty:
        overrides["emit_empty_snapshots"] = False

    return replace(cfg, **overrides) if overrides else cfg


def main(argv: Optional[List[str]] = None) -> int:
    """
    Orchestrates an offline replay:

      1) build the configuration
      2) replay the input file
      3) optional: write JSON Lines / summary TSV
      4) optional: plot
    """
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        cfg = build_config(args)
    except InvalidConfigurationError as e:
        parser.error(str(e))

    pipeline = OfflineAnalyticsPipeline(cfg)
    pipeline.register_observer(LoggingReporter(level=logging.DEBUG))

    snapshots = pipeline.run_file(args.input)

    if args.output_jsonl:
        write_snapshots_jsonl(snapshots, args.output_jsonl)
        logger.info("Snapshots written to %s", args.output_jsonl)

    if args.summary_tsv:
        write_summary_tsv(snapshots, args.summary_tsv)
        logger.info("Summary written to %s", args.summary_tsv)

    total_fixations = sum(s.fixation_count for s in snapshots)
    total_samples = sum(s.sample_count for s in snapshots)
    print(
        f"[Summary] cycles={len(snapshots)}, samples={total_samples}, "
        f"fixations={total_fixations}, "
        f"saccades={sum(s.saccade_count for s in snapshots)}, "
        f"reading_patterns={sum(s.reading_pattern_count for s in snapshots)}, "
        f"rereading_events={sum(s.rereading_event_count for s in snapshots)}"
    )

    if args.plot and snapshots:
        from .evaluation.plotting import plot_fixation_heatmap, plot_scanpath

        busiest = max(snapshots, key=lambda s: s.fixation_count)
        plot_scanpath(busiest)
        plot_fixation_heatmap(snapshots, cfg)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
