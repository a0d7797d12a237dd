"""Plotting utilities for spectrograms and single-frame spectra."""

from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib import colormaps
from matplotlib.figure import Figure

from ..analysis.grid import SpectrogramGrid
from ..errors import InvalidArgument
from ..signal.stft import STFTResult, SampleBuffer


def intensity_to_rgba(grid: SpectrogramGrid, colormap: str = "magma") -> np.ndarray:
    """Map grid intensities to RGBA pixels shaped ``(n_bins, n_frames, 4)``.

    Pixel row ``b`` holds frequency bin ``b`` (DC first).
    """
    try:
        cmap = colormaps[colormap]
    except KeyError as exc:
        raise InvalidArgument(f"Unknown colormap {colormap!r}") from exc
    return cmap(grid.intensity.T)


def plot_spectrogram(
    grid: SpectrogramGrid,
    *,
    colormap: str = "magma",
    fig: Figure | None = None,
) -> Figure:
    """Draw ``grid`` as an image with time and frequency axes."""
    if grid.n_frames == 0:
        raise InvalidArgument("Cannot plot a spectrogram with no frames")
    figure = plt.figure() if fig is None else fig
    figure.clear()
    ax = figure.add_subplot(1, 1, 1)
    extent = (
        0.0,
        grid.n_frames * grid.seconds_per_column,
        0.0,
        grid.n_bins * grid.hz_per_row,
    )
    ax.imshow(
        intensity_to_rgba(grid, colormap),
        origin="lower",
        aspect="auto",
        extent=extent,
        interpolation="nearest",
        rasterized=True,
    )
    ax.set_xlabel("Time [s]")
    ax.set_ylabel("Frequency [Hz]")
    return figure


def plot_frame_analysis(
    buffer: SampleBuffer,
    result: STFTResult | None,
    *,
    fig: Figure | None = None,
) -> Figure:
    """Draw the waveform and, when available, power and phase of one frame.

    The top row shows the waveform in seconds with the analysed region
    shaded. The bottom row shows ``|X|^2`` and the unwrapped phase of bins
    ``[0, N/2)`` against frequency in Hz.
    """
    figure = plt.figure() if fig is None else fig
    figure.clear()
    grid_spec = figure.add_gridspec(2, 2)
    time_ax = figure.add_subplot(grid_spec[0, :])

    time_axis = np.arange(len(buffer)) / buffer.sample_rate
    time_ax.plot(time_axis, buffer.samples, color="tab:blue", linewidth=0.5)
    time_ax.set_xlabel("Time [s]")
    if result is None:
        return figure

    time_ax.axvspan(
        0.0, result.fft_size / buffer.sample_rate, color="tab:green", alpha=0.3
    )

    spectrum = result.frame(0)[: result.fft_size // 2]
    freq_axis = np.arange(spectrum.shape[0]) * result.sample_rate / result.fft_size

    power_ax = figure.add_subplot(grid_spec[1, 0])
    power_ax.plot(freq_axis, np.abs(spectrum) ** 2, color="tab:blue", linewidth=0.5)
    power_ax.set_xlabel("Frequency [Hz]")
    power_ax.set_ylabel("Power")

    phase_ax = figure.add_subplot(grid_spec[1, 1])
    phase_ax.plot(
        freq_axis, np.unwrap(np.angle(spectrum)), color="tab:blue", linewidth=0.5
    )
    phase_ax.set_xlabel("Frequency [Hz]")
    phase_ax.set_ylabel("Phase [rad]")
    return figure


def save_spectrogram(
    grid: SpectrogramGrid,
    path: str | Path,
    *,
    colormap: str = "magma",
    dpi: int = 100,
) -> Path:
    """Render ``grid`` to an image file and return its path."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    figure = plot_spectrogram(grid, colormap=colormap)
    figure.savefig(out, dpi=dpi)
    plt.close(figure)
    return out
