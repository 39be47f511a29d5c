"""Plotting helpers (requires the ``plot`` extra)."""

from .plotting import plot_scanpath, plot_region_focus, plot_fixation_heatmap

__all__ = ["plot_scanpath", "plot_region_focus", "plot_fixation_heatmap"]
