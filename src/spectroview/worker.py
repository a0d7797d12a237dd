"""Batch analysis jobs executed off the caller's thread.

A request carries raw samples, a transform size and a window name. The job
function :func:`handle_request` is pure and picklable, so it can run on a
thread or process pool. Each submitted job resolves exactly one
:class:`concurrent.futures.Future`; an optional completion callback is
attached once and released after it fires.
"""

from __future__ import annotations

from concurrent.futures import Executor, Future, ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass
import logging
from typing import Any, Callable, Mapping

import numpy as np

from .analysis.grid import SpectrogramGrid, grid_from_magnitudes
from .errors import (
    InvalidArgument,
    InvalidRequest,
    InvalidTransformSize,
    InvalidWindowKind,
)
from .limits import validate_fft_size
from .signal.stft import SampleBuffer, stft
from .signal.window import parse_window_kind

LOGGER = logging.getLogger(__name__)

CompletionCallback = Callable[["Future[AnalysisResponse]"], None]


@dataclass(frozen=True)
class AnalysisRequest:
    """One full-buffer STFT job.

    The samples are copied into the request so the job never aliases the
    submitter's buffer.
    """

    audio_data: np.ndarray
    size: int
    window_function_name: str

    def __post_init__(self) -> None:
        audio = np.array(self.audio_data, dtype=np.float32)
        if audio.ndim != 1:
            raise InvalidRequest(f"audioData must be 1-D, got ndim={audio.ndim}")
        audio.flags.writeable = False
        object.__setattr__(self, "audio_data", audio)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AnalysisRequest":
        """Decode ``{"audioData", "size", "windowFunctionName"}`` messages."""
        missing = [
            key for key in ("audioData", "size", "windowFunctionName") if key not in data
        ]
        if missing:
            raise InvalidRequest(f"Request is missing keys: {', '.join(missing)}")
        return cls(
            audio_data=np.asarray(data["audioData"]),
            size=data["size"],
            window_function_name=data["windowFunctionName"],
        )


@dataclass(frozen=True)
class AnalysisResponse:
    """Concatenated per-frame magnitudes of bins ``0..size/2``."""

    spectra: np.ndarray
    size: int

    @property
    def bins_per_frame(self) -> int:
        return self.size // 2 + 1

    @property
    def n_frames(self) -> int:
        return int(self.spectra.shape[0]) // self.bins_per_frame

    def frames(self) -> np.ndarray:
        """Magnitudes reshaped to ``(n_frames, size/2 + 1)``."""
        return self.spectra.reshape(-1, self.bins_per_frame)

    def to_grid(self, sample_rate: float) -> SpectrogramGrid:
        return grid_from_magnitudes(self.frames(), self.size, sample_rate)

    def to_mapping(self) -> dict[str, Any]:
        return {"spectra": self.spectra, "size": self.size}


def handle_request(request: AnalysisRequest) -> AnalysisResponse:
    """Validate ``request`` and compute its magnitude spectra."""
    n_samples = int(request.audio_data.shape[0])
    if n_samples == 0:
        raise InvalidRequest("audioData is empty")
    try:
        window = parse_window_kind(request.window_function_name)
        size = validate_fft_size(request.size, n_samples)
    except (InvalidWindowKind, InvalidTransformSize) as exc:
        raise InvalidRequest(str(exc)) from exc

    # Magnitudes do not depend on the sampling rate.
    result = stft(SampleBuffer(request.audio_data, 1.0), size, window)
    spectra = result.magnitudes().astype(np.float32).ravel()
    LOGGER.info(
        "Analysed %d samples into %d frames (size=%d, window=%s)",
        n_samples,
        result.n_frames,
        size,
        window.value,
    )
    return AnalysisResponse(spectra=spectra, size=size)


class _OneShotCallback:
    """Invoke the wrapped callback at most once, then drop it."""

    def __init__(self, callback: CompletionCallback) -> None:
        self._callback: CompletionCallback | None = callback

    def __call__(self, future: "Future[AnalysisResponse]") -> None:
        callback, self._callback = self._callback, None
        if callback is not None:
            callback(future)

    @property
    def fired(self) -> bool:
        return self._callback is None


class AnalysisWorker:
    """Run :func:`handle_request` jobs on a thread or process pool.

    Jobs are independent: a later submission does not cancel or order
    itself after an earlier one. Callers that only care about the latest
    request must discard stale results themselves.
    """

    def __init__(self, *, max_workers: int = 1, use_processes: bool = False) -> None:
        if max_workers < 1:
            raise InvalidArgument(f"max_workers must be >= 1, got {max_workers}")
        executor_cls: type[Executor] = (
            ProcessPoolExecutor if use_processes else ThreadPoolExecutor
        )
        self._executor = executor_cls(max_workers=max_workers)

    def submit(
        self,
        request: AnalysisRequest,
        on_complete: CompletionCallback | None = None,
    ) -> "Future[AnalysisResponse]":
        future = self._executor.submit(handle_request, request)
        if on_complete is not None:
            future.add_done_callback(_OneShotCallback(on_complete))
        return future

    def run(self, request: AnalysisRequest, timeout: float | None = None) -> AnalysisResponse:
        """Submit ``request`` and block until its response is available."""
        return self.submit(request).result(timeout=timeout)

    def close(self, *, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "AnalysisWorker":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
