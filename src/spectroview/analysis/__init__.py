"""Spectral analysis on top of STFT results."""

from .grid import SpectrogramGrid, grid_from_magnitudes, log_compress, to_grid
from .peaks import Peak, find_frame_peaks, find_peaks, peak_frequencies, peak_phases

__all__ = [
    "Peak",
    "SpectrogramGrid",
    "find_frame_peaks",
    "find_peaks",
    "grid_from_magnitudes",
    "log_compress",
    "peak_frequencies",
    "peak_phases",
    "to_grid",
]
