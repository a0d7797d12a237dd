"""Short-time framing and the value types shared by the analysis modules."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math

import numpy as np

from ..errors import InvalidArgument, InvalidWindowKind
from .fft import check_transform_size, transform
from .window import WindowKind, coefficients

LOGGER = logging.getLogger(__name__)


def _read_only(values: np.ndarray) -> np.ndarray:
    values.flags.writeable = False
    return values


@dataclass(frozen=True)
class SampleBuffer:
    """Single-channel waveform with its sampling rate.

    The samples are copied on construction and stored read-only, so a buffer
    handed to another execution context never aliases caller memory.
    """

    samples: np.ndarray
    sample_rate: float

    def __post_init__(self) -> None:
        samples = np.array(self.samples, dtype=np.float64)
        if samples.ndim != 1:
            raise InvalidArgument(
                f"samples must be a 1-D array (single channel), got ndim={samples.ndim}"
            )
        rate = float(self.sample_rate)
        if not math.isfinite(rate) or rate <= 0.0:
            raise InvalidArgument(f"sample_rate must be positive, got {self.sample_rate}")
        object.__setattr__(self, "samples", _read_only(samples))
        object.__setattr__(self, "sample_rate", rate)

    def __len__(self) -> int:
        return int(self.samples.shape[0])

    @property
    def duration_sec(self) -> float:
        return len(self) / self.sample_rate


@dataclass(frozen=True)
class STFTPlan:
    """Framing configuration: transform size and window family."""

    fft_size: int
    window: WindowKind = WindowKind.HANN

    def __post_init__(self) -> None:
        check_transform_size(self.fft_size)
        if not isinstance(self.window, WindowKind):
            raise InvalidWindowKind(f"Expected WindowKind, got {self.window!r}")


@dataclass(frozen=True)
class STFTResult:
    """Ordered spectra of consecutive, non-overlapping frames.

    Attributes
    ----------
    spectra:
        Complex array shaped ``(n_frames, fft_size)``; row order is time order.
    fft_size:
        Transform size ``N``.
    sample_rate:
        Sampling rate of the analysed buffer in Hz.
    window:
        Window family applied to every frame.
    """

    spectra: np.ndarray
    fft_size: int
    sample_rate: float
    window: WindowKind

    def __post_init__(self) -> None:
        spectra = np.array(self.spectra, dtype=np.complex128)
        if spectra.ndim != 2 or spectra.shape[1] != self.fft_size:
            raise InvalidArgument(
                f"spectra must be shaped (n_frames, {self.fft_size}), got {spectra.shape}"
            )
        object.__setattr__(self, "spectra", _read_only(spectra))

    @property
    def n_frames(self) -> int:
        return int(self.spectra.shape[0])

    @property
    def n_bins(self) -> int:
        """Number of non-redundant bins, ``N/2 + 1``."""
        return self.fft_size // 2 + 1

    def frame(self, index: int) -> np.ndarray:
        """Return the complex spectrum of frame ``index``."""
        if not -self.n_frames <= index < self.n_frames:
            raise InvalidArgument(
                f"frame index {index} out of range for {self.n_frames} frames"
            )
        return self.spectra[index]

    def magnitudes(self) -> np.ndarray:
        """Return magnitudes of bins ``[0, N/2]`` shaped ``(n_frames, n_bins)``."""
        return np.abs(self.spectra[:, : self.n_bins])


def frame_count(n_samples: int, fft_size: int) -> int:
    """Return ``ceil(n_samples / fft_size)``."""
    return -(-int(n_samples) // int(fft_size))


def frame_signal(samples: np.ndarray, fft_size: int, n_frames: int) -> np.ndarray:
    """Slice ``samples`` into ``n_frames`` contiguous rows, zero-padding the tail."""
    padded = np.zeros(n_frames * fft_size, dtype=np.float64)
    used = min(samples.shape[0], padded.shape[0])
    padded[:used] = samples[:used]
    return padded.reshape(n_frames, fft_size)


def stft(
    buffer: SampleBuffer,
    fft_size: int,
    window: WindowKind = WindowKind.HANN,
    *,
    max_frames: int | None = None,
) -> STFTResult:
    """Transform every frame of ``buffer``.

    Frame ``f`` covers samples ``[f * N, f * N + N)``; the last frame is
    zero-padded on the right before windowing. ``max_frames`` limits the
    analysis to the leading frames.
    """
    plan = STFTPlan(fft_size=fft_size, window=window)
    n_frames = frame_count(len(buffer), plan.fft_size)
    if max_frames is not None:
        if max_frames < 0:
            raise InvalidArgument(f"max_frames must be non-negative, got {max_frames}")
        n_frames = min(n_frames, max_frames)
    return _analyse(buffer, plan, n_frames)


def _analyse(buffer: SampleBuffer, plan: STFTPlan, n_frames: int) -> STFTResult:
    frames = frame_signal(buffer.samples, plan.fft_size, n_frames)
    frames *= coefficients(plan.window, plan.fft_size)
    spectra = transform(frames)
    LOGGER.debug(
        "STFT: %d samples, fft_size=%d, window=%s -> %d frames",
        len(buffer),
        plan.fft_size,
        plan.window.value,
        n_frames,
    )
    return STFTResult(
        spectra=spectra,
        fft_size=plan.fft_size,
        sample_rate=buffer.sample_rate,
        window=plan.window,
    )


def stft_with_plan(buffer: SampleBuffer, plan: STFTPlan) -> STFTResult:
    """Run :func:`stft` with the settings from ``plan``."""
    return stft(buffer, plan.fft_size, plan.window)


def single_frame(
    buffer: SampleBuffer,
    fft_size: int,
    window: WindowKind = WindowKind.HANN,
) -> STFTResult:
    """Analyse only the leading ``fft_size`` samples of ``buffer``.

    The result always holds exactly one frame; an empty or short buffer is
    zero-padded.
    """
    return _analyse(buffer, STFTPlan(fft_size=fft_size, window=window), 1)
