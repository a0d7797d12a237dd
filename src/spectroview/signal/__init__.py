"""Signal processing primitives: windows, FFT and short-time framing."""

from .fft import (
    MAX_FFT_SIZE,
    check_transform_size,
    inverse_transform,
    is_power_of_two,
    next_power_of_two,
    transform,
)
from .stft import (
    STFTPlan,
    STFTResult,
    SampleBuffer,
    frame_count,
    single_frame,
    stft,
    stft_with_plan,
)
from .window import WindowKind, coefficients, parse_window_kind, window_names

__all__ = [
    "MAX_FFT_SIZE",
    "STFTPlan",
    "STFTResult",
    "SampleBuffer",
    "WindowKind",
    "check_transform_size",
    "coefficients",
    "frame_count",
    "inverse_transform",
    "is_power_of_two",
    "next_power_of_two",
    "parse_window_kind",
    "single_frame",
    "stft",
    "stft_with_plan",
    "transform",
    "window_names",
]
