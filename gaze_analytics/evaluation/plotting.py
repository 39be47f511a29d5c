# gaze_analytics/evaluation/plotting.py
from __future__ import annotations

from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from ..config import AnalyticsConfiguration, HeuristicConstants
from ..domain.snapshot import AnalyticsSnapshot
from ..processing.indices import fixation_heatmap


def plot_scanpath(snapshot: AnalyticsSnapshot, show: bool = True, save_path: Optional[str] = None):
    """
    Gaze points, fixations (marker size ~ duration) and saccades of one cycle.

    Screen coordinates: y grows downwards, so the y axis is inverted.
    """
    fig, ax = plt.subplots(figsize=(10, 6))

    if snapshot.gaze_points:
        gx = [p.x for p in snapshot.gaze_points]
        gy = [p.y for p in snapshot.gaze_points]
        ax.plot(gx, gy, ".", color="lightgray", markersize=3, label="gaze")

    if snapshot.fixations:
        fx = [f.centroid.x for f in snapshot.fixations]
        fy = [f.centroid.y for f in snapshot.fixations]
        sizes = [max(f.duration_ms, 1.0) / 2.0 for f in snapshot.fixations]
        ax.plot(fx, fy, "-", color="tab:blue", linewidth=0.8, alpha=0.5)
        ax.scatter(fx, fy, s=sizes, color="tab:blue", alpha=0.6, label="fixations")
        for i, (x, y) in enumerate(zip(fx, fy)):
            ax.annotate(str(i), (x, y), fontsize=8, ha="center", va="center")

    for s in snapshot.saccades:
        ax.annotate(
            "",
            xy=(s.end_point.x, s.end_point.y),
            xytext=(s.start_point.x, s.start_point.y),
            arrowprops=dict(arrowstyle="->", color="tab:red", alpha=0.7),
        )

    ax.invert_yaxis()
    ax.set_xlabel("x [px]")
    ax.set_ylabel("y [px]")
    ax.set_title(
        f"Cycle {snapshot.cycle_index}: {snapshot.fixation_count} fixations, "
        f"{snapshot.saccade_count} saccades, load={snapshot.cognitive_load_index:.2f}"
    )
    ax.legend(loc="upper right")
    fig.tight_layout()

    if save_path:
        fig.savefig(save_path)
    if show:
        plt.show()
    return fig


def plot_region_focus(
    snapshot: AnalyticsSnapshot,
    config: AnalyticsConfiguration,
    show: bool = True,
    save_path: Optional[str] = None,
):
    """Dwell time per screen region as a grid image."""
    grid = np.zeros((config.screen_region_rows, config.screen_region_cols), dtype=float)
    for (row, col), focus in snapshot.region_focus.items():
        grid[row, col] = focus.total_duration_ms

    fig, ax = plt.subplots(figsize=(6, 4))
    im = ax.imshow(grid, cmap="viridis", origin="upper")
    fig.colorbar(im, ax=ax, label="dwell time [ms]")
    ax.set_xticks(range(config.screen_region_cols))
    ax.set_yticks(range(config.screen_region_rows))
    ax.set_xlabel("column")
    ax.set_ylabel("row")
    ax.set_title(f"Region focus (cycle {snapshot.cycle_index})")
    fig.tight_layout()

    if save_path:
        fig.savefig(save_path)
    if show:
        plt.show()
    return fig


def plot_fixation_heatmap(
    snapshots: Sequence[AnalyticsSnapshot],
    config: AnalyticsConfiguration,
    cell_px: int = HeuristicConstants.HEATMAP_CELL_PX,
    show: bool = True,
    save_path: Optional[str] = None,
):
    """Fixation counts over all given cycles on a ``cell_px`` grid."""
    fixations = [f for s in snapshots for f in s.fixations]
    grid = fixation_heatmap(fixations, config.viewport_width, config.viewport_height, cell_px)

    fig, ax = plt.subplots(figsize=(10, 6))
    im = ax.imshow(
        grid,
        cmap="hot",
        origin="upper",
        extent=(0, grid.shape[1] * cell_px, grid.shape[0] * cell_px, 0),
    )
    fig.colorbar(im, ax=ax, label="fixations")
    ax.set_xlabel("x [px]")
    ax.set_ylabel("y [px]")
    ax.set_title(f"Fixation heatmap ({len(fixations)} fixations, {len(snapshots)} cycles)")
    fig.tight_layout()

    if save_path:
        fig.savefig(save_path)
    if show:
        plt.show()
    return fig
