"""spectroview public API."""

from .analysis import Peak, SpectrogramGrid, find_peaks, to_grid
from .configs import load_yaml, save_yaml
from .errors import (
    AnalysisNotReady,
    InvalidArgument,
    InvalidRequest,
    InvalidTransformSize,
    InvalidWindowKind,
    SpectroviewError,
)
from .logging_utils import JsonlLogger
from .session import AnalysisSession
from .signal import (
    STFTPlan,
    STFTResult,
    SampleBuffer,
    WindowKind,
    coefficients,
    parse_window_kind,
    single_frame,
    stft,
    transform,
)
from .worker import AnalysisRequest, AnalysisResponse, AnalysisWorker, handle_request

__all__ = [
    "AnalysisNotReady",
    "AnalysisRequest",
    "AnalysisResponse",
    "AnalysisSession",
    "AnalysisWorker",
    "InvalidArgument",
    "InvalidRequest",
    "InvalidTransformSize",
    "InvalidWindowKind",
    "JsonlLogger",
    "Peak",
    "STFTPlan",
    "STFTResult",
    "SampleBuffer",
    "SpectroviewError",
    "SpectrogramGrid",
    "WindowKind",
    "coefficients",
    "find_peaks",
    "handle_request",
    "load_yaml",
    "parse_window_kind",
    "save_yaml",
    "single_frame",
    "stft",
    "to_grid",
    "transform",
]
