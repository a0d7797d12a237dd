"""Visualization utilities for inspection and reporting."""

from .spectrogram import (
    intensity_to_rgba,
    plot_frame_analysis,
    plot_spectrogram,
    save_spectrogram,
)

__all__ = [
    "intensity_to_rgba",
    "plot_frame_analysis",
    "plot_spectrogram",
    "save_spectrogram",
]
