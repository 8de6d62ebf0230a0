"""Utility functions for IBD event generation."""

from ibdgen.utils.visualization import plot_event_distributions, plot_spectrum

__all__ = [
    "plot_spectrum",
    "plot_event_distributions",
]
