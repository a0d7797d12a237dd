"""Dominant spectral peak extraction."""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Sequence

import numpy as np

from ..errors import InvalidArgument
from ..signal.fft import check_transform_size
from ..signal.stft import STFTResult


@dataclass(frozen=True)
class Peak:
    """One spectral bin reported as frequency, phase and magnitude."""

    frequency_hz: float
    phase_rad: float
    magnitude: float
    bin: int


def _check_count(k: int) -> int:
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
        raise InvalidArgument(f"Peak count must be an integer, got {k!r}")
    if k < 0:
        raise InvalidArgument(f"Peak count must be non-negative, got {k}")
    return int(k)


def find_peaks(
    spectrum: np.ndarray,
    sample_rate: float,
    k: int,
) -> list[Peak]:
    """Return up to ``k`` bins of ``spectrum`` with the largest magnitude.

    Only bins ``0..N/2`` are eligible. Peaks are sorted by magnitude in
    descending order; equal magnitudes keep ascending bin order so the lower
    frequency wins a tie.

    Parameters
    ----------
    spectrum:
        Complex spectrum of length ``N`` (a power of two).
    sample_rate:
        Sampling rate in Hz used for the bin-to-frequency mapping.
    k:
        Maximum number of peaks. ``0`` yields an empty list.
    """
    count = _check_count(k)
    values = np.asarray(spectrum)
    if values.ndim != 1:
        raise InvalidArgument(f"spectrum must be 1-D, got ndim={values.ndim}")
    n = values.shape[0]
    check_transform_size(n)
    rate = float(sample_rate)
    if not math.isfinite(rate) or rate <= 0.0:
        raise InvalidArgument(f"sample_rate must be positive, got {sample_rate}")
    if count == 0:
        return []

    eligible = values[: n // 2 + 1].astype(np.complex128, copy=False)
    magnitudes = np.abs(eligible)
    order = np.argsort(-magnitudes, kind="stable")[:count]

    bin_width = rate / n
    return [
        Peak(
            frequency_hz=float(index) * bin_width,
            phase_rad=float(np.arctan2(eligible[index].imag, eligible[index].real)),
            magnitude=float(magnitudes[index]),
            bin=int(index),
        )
        for index in order
    ]


def find_frame_peaks(result: STFTResult, k: int, *, frame: int = 0) -> list[Peak]:
    """Apply :func:`find_peaks` to one frame of an STFT result."""
    return find_peaks(result.frame(frame), result.sample_rate, k)


def peak_frequencies(peaks: Sequence[Peak]) -> np.ndarray:
    """Return peak frequencies in Hz, in peak order."""
    return np.array([peak.frequency_hz for peak in peaks], dtype=np.float64)


def peak_phases(peaks: Sequence[Peak], *, unwrap: bool = False) -> np.ndarray:
    """Return peak phases in peak order, optionally unwrapped along that order."""
    phases = np.array([peak.phase_rad for peak in peaks], dtype=np.float64)
    if unwrap and phases.size > 1:
        phases = np.unwrap(phases)
    return phases
