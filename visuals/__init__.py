# visuals/__init__.py
"""
Visual helpers for the imgproc filters.
Provides preview figures used by the CLI and batch runner.
"""
from .plots import compare_and_save, plot_intensity_histogram

__all__ = [
    "compare_and_save",
    "plot_intensity_histogram",
]
