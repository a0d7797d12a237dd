"""Interactive analysis session over one loaded waveform."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path

import numpy as np
from matplotlib.figure import Figure

from .analysis.grid import SpectrogramGrid, to_grid
from .analysis.peaks import Peak, find_peaks, peak_frequencies, peak_phases
from .errors import AnalysisNotReady
from .io import load_audio
from .limits import validate_fft_size
from .signal.stft import STFTResult, SampleBuffer, single_frame, stft
from .signal.window import WindowKind
from .visualization.spectrogram import plot_frame_analysis

LOGGER = logging.getLogger(__name__)


@dataclass
class AnalysisSession:
    """Sample data plus the most recent single-frame analysis.

    Parameters
    ----------
    buffer:
        Waveform under inspection.
    last_result:
        Result of the latest :meth:`run_single_frame` call, ``None`` before
        the first run.
    """

    buffer: SampleBuffer
    last_result: STFTResult | None = None

    @classmethod
    def from_samples(cls, samples: np.ndarray, sample_rate: float) -> "AnalysisSession":
        return cls(SampleBuffer(samples, sample_rate))

    @classmethod
    def from_file(cls, path: str | Path) -> "AnalysisSession":
        return cls(load_audio(path))

    def run_single_frame(self, fft_size: int, window: WindowKind) -> STFTResult:
        """Analyse the leading ``fft_size`` samples and keep the spectrum."""
        validate_fft_size(fft_size, len(self.buffer))
        self.last_result = single_frame(self.buffer, fft_size, window)
        LOGGER.debug("Single-frame analysis: fft_size=%d window=%s", fft_size, window.value)
        return self.last_result

    def run_full(self, fft_size: int, window: WindowKind) -> STFTResult:
        """Analyse the whole buffer; the stored single-frame result is untouched."""
        validate_fft_size(fft_size, len(self.buffer))
        return stft(self.buffer, fft_size, window)

    def spectrogram(self, fft_size: int, window: WindowKind) -> SpectrogramGrid:
        return to_grid(self.run_full(fft_size, window))

    def _require_result(self) -> STFTResult:
        if self.last_result is None:
            raise AnalysisNotReady("run_single_frame() must be called first")
        return self.last_result

    def peaks(self, k: int) -> list[Peak]:
        result = self._require_result()
        return find_peaks(result.frame(0), result.sample_rate, k)

    def peak_frequencies(self, k: int) -> np.ndarray:
        """Frequencies in Hz of the ``k`` strongest bins, strongest first."""
        return peak_frequencies(self.peaks(k))

    def peak_phases(self, k: int, *, unwrap: bool = False) -> np.ndarray:
        """Phases in radians parallel to :meth:`peak_frequencies`."""
        return peak_phases(self.peaks(k), unwrap=unwrap)

    def render(self, fig: Figure | None = None) -> Figure:
        """Paint the waveform and the latest frame analysis onto ``fig``."""
        return plot_frame_analysis(self.buffer, self.last_result, fig=fig)
