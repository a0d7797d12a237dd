from pathlib import Path

import matplotlib
import numpy as np
import pytest

from spectroview.analysis import grid_from_magnitudes
from spectroview.errors import InvalidArgument
from spectroview.visualization import (
    intensity_to_rgba,
    plot_frame_analysis,
    plot_spectrogram,
    save_spectrogram,
)
from spectroview.signal import SampleBuffer, WindowKind, single_frame


matplotlib.use("Agg")


def _grid(n_frames: int = 6, fft_size: int = 32):
    magnitudes = np.abs(np.random.randn(n_frames, fft_size // 2 + 1))
    return grid_from_magnitudes(magnitudes, fft_size, 8000.0)


def test_intensity_to_rgba_is_frequency_major() -> None:
    grid = _grid()
    rgba = intensity_to_rgba(grid)
    assert rgba.shape == (17, 6, 4)
    with pytest.raises(InvalidArgument):
        intensity_to_rgba(grid, colormap="not-a-colormap")


def test_plot_spectrogram_returns_figure() -> None:
    fig = plot_spectrogram(_grid())
    ax = fig.axes[0]
    assert ax.get_xlabel() == "Time [s]"
    assert ax.get_ylabel() == "Frequency [Hz]"
    with pytest.raises(InvalidArgument):
        plot_spectrogram(_grid(n_frames=0))


def test_plot_frame_analysis_returns_figure() -> None:
    buffer = SampleBuffer(np.random.randn(256), 8000.0)
    fig = plot_frame_analysis(buffer, single_frame(buffer, 64, WindowKind.HANN))
    assert len(fig.axes) == 3


def test_save_spectrogram_writes_file(tmp_path: Path) -> None:
    path = save_spectrogram(_grid(), tmp_path / "out" / "spec.png", dpi=50)
    assert path.exists()
