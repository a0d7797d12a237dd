"""Transform-size bounds enforced at the external interfaces."""

from __future__ import annotations

import logging

import numpy as np

from .errors import InvalidTransformSize
from .signal.fft import MAX_FFT_SIZE, is_power_of_two

LOGGER = logging.getLogger(__name__)


def max_fft_size(n_samples: int) -> int:
    """Largest transform size offered for a buffer of ``n_samples``."""
    return max(min(int(n_samples), MAX_FFT_SIZE), 2)


def validate_fft_size(size: int, n_samples: int) -> int:
    """Reject ``size`` unless it is a power of two in ``[2, max_fft_size]``."""
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
        raise InvalidTransformSize(f"Transform size must be an integer, got {size!r}")
    upper = max_fft_size(n_samples)
    if not is_power_of_two(size) or not 2 <= size <= upper:
        raise InvalidTransformSize(
            f"Transform size must be a power of two in [2, {upper}], got {size}"
        )
    return int(size)


def clamp_fft_size(size: int, n_samples: int) -> int:
    """Round ``size`` down to a power of two inside ``[2, max_fft_size]``."""
    upper = max_fft_size(n_samples)
    bounded = min(max(int(size), 2), upper)
    clamped = 1 << (bounded.bit_length() - 1)
    if clamped != size:
        LOGGER.warning("Transform size %s clamped to %d", size, clamped)
    return clamped
