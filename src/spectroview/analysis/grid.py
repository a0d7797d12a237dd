"""Mapping from STFT magnitudes to a renderable intensity grid."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..errors import InvalidArgument
from ..signal.stft import STFTResult


@dataclass(frozen=True)
class SpectrogramGrid:
    """Frame-first intensity grid with axis metadata.

    Attributes
    ----------
    intensity:
        Values in ``[0, 1]`` shaped ``(n_frames, n_bins)``. Column ``b`` of
        the array is frequency row ``b`` of the rendered image.
    hz_per_row:
        Frequency spacing between bins, ``sample_rate / N``.
    seconds_per_column:
        Time spacing between frames, ``N / sample_rate``.
    """

    intensity: np.ndarray
    hz_per_row: float
    seconds_per_column: float

    def __post_init__(self) -> None:
        intensity = np.array(self.intensity, dtype=np.float64)
        if intensity.ndim != 2:
            raise InvalidArgument(
                f"intensity must be 2-D (n_frames, n_bins), got ndim={intensity.ndim}"
            )
        intensity.flags.writeable = False
        object.__setattr__(self, "intensity", intensity)

    @property
    def n_frames(self) -> int:
        return int(self.intensity.shape[0])

    @property
    def n_bins(self) -> int:
        return int(self.intensity.shape[1])

    def frequencies(self) -> np.ndarray:
        """Frequency in Hz of each row (bin)."""
        return np.arange(self.n_bins, dtype=np.float64) * self.hz_per_row

    def times(self) -> np.ndarray:
        """Start time in seconds of each column (frame)."""
        return np.arange(self.n_frames, dtype=np.float64) * self.seconds_per_column


def log_compress(magnitudes: np.ndarray, reference: float | None = None) -> np.ndarray:
    """Compress magnitudes to ``log(1 + m) / log(1 + reference)`` in ``[0, 1]``.

    ``reference`` defaults to the maximum of ``magnitudes``. A zero reference
    (silence) maps everything to zero.
    """
    values = np.asarray(magnitudes, dtype=np.float64)
    if reference is None:
        reference = float(values.max()) if values.size else 0.0
    if reference <= 0.0:
        return np.zeros_like(values)
    return np.clip(np.log1p(values) / np.log1p(reference), 0.0, 1.0)


def grid_from_magnitudes(
    magnitudes: np.ndarray,
    fft_size: int,
    sample_rate: float,
) -> SpectrogramGrid:
    """Build a grid from frame-first magnitudes of bins ``0..N/2``."""
    values = np.asarray(magnitudes, dtype=np.float64)
    if values.ndim != 2 or values.shape[1] != fft_size // 2 + 1:
        raise InvalidArgument(
            f"magnitudes must be shaped (n_frames, {fft_size // 2 + 1}), got {values.shape}"
        )
    if sample_rate <= 0.0:
        raise InvalidArgument(f"sample_rate must be positive, got {sample_rate}")
    return SpectrogramGrid(
        intensity=log_compress(values),
        hz_per_row=sample_rate / fft_size,
        seconds_per_column=fft_size / sample_rate,
    )


def to_grid(result: STFTResult) -> SpectrogramGrid:
    """Convert every frame of ``result`` into display intensities."""
    return grid_from_magnitudes(result.magnitudes(), result.fft_size, result.sample_rate)
