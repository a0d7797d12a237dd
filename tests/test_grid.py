import numpy as np
import pytest

from spectroview.analysis import grid_from_magnitudes, log_compress, to_grid
from spectroview.errors import InvalidArgument
from spectroview.signal import SampleBuffer, WindowKind, stft


def test_silence_maps_to_zero_grid() -> None:
    result = stft(SampleBuffer(np.zeros(1000), 8000.0), 128, WindowKind.HANN)
    grid = to_grid(result)
    assert grid.intensity.shape == (8, 65)
    assert np.all(np.isfinite(grid.intensity))
    np.testing.assert_array_equal(grid.intensity, 0.0)


def test_intensity_uses_log_compression() -> None:
    rng = np.random.default_rng(0)
    result = stft(SampleBuffer(rng.standard_normal(2048), 16000.0), 256, WindowKind.HAMMING)
    grid = to_grid(result)
    magnitudes = result.magnitudes()
    expected = np.log1p(magnitudes) / np.log1p(magnitudes.max())

    np.testing.assert_allclose(grid.intensity, expected, rtol=1e-12)
    assert grid.intensity.min() >= 0.0
    assert grid.intensity.max() == pytest.approx(1.0)


def test_axis_metadata() -> None:
    result = stft(SampleBuffer(np.ones(1024), 44100.0), 256, WindowKind.HANN)
    grid = to_grid(result)
    assert grid.hz_per_row == pytest.approx(44100.0 / 256)
    assert grid.seconds_per_column == pytest.approx(256 / 44100.0)
    assert grid.n_frames == 4
    assert grid.n_bins == 129
    assert grid.frequencies()[0] == 0.0
    assert grid.frequencies()[-1] == pytest.approx(22050.0)
    np.testing.assert_allclose(grid.times(), np.arange(4) * 256 / 44100.0)


def test_empty_result_gives_empty_grid() -> None:
    result = stft(SampleBuffer(np.zeros(0), 8000.0), 16, WindowKind.HANN)
    grid = to_grid(result)
    assert grid.intensity.shape == (0, 9)


def test_log_compress_with_reference_clamps() -> None:
    values = np.array([0.0, 1.0, 3.0])
    out = log_compress(values, reference=1.0)
    np.testing.assert_allclose(out, [0.0, 1.0, 1.0])
    np.testing.assert_array_equal(log_compress(values, reference=0.0), 0.0)


def test_grid_from_magnitudes_validates_shape() -> None:
    with pytest.raises(InvalidArgument):
        grid_from_magnitudes(np.zeros((2, 8)), 16, 8000.0)
    with pytest.raises(InvalidArgument):
        grid_from_magnitudes(np.zeros((2, 9)), 16, 0.0)
    grid = grid_from_magnitudes(np.ones((2, 9)), 16, 8000.0)
    np.testing.assert_allclose(grid.intensity, 1.0)
    assert not grid.intensity.flags.writeable
