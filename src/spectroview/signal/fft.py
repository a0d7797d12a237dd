"""Radix-2 fast Fourier transform.

The forward transform follows the unnormalized DFT convention

$$
   X_k = \\sum_{n=0}^{N-1} x_n e^{-2\\pi i k n / N},
$$

so a frame of ``N`` ones yields ``X_0 = N``. Any leading axes are treated as
independent frames, which lets the framer transform a whole stack at once.
"""

from __future__ import annotations

from functools import lru_cache

import numpy as np

from ..errors import InvalidArgument, InvalidTransformSize

MAX_FFT_SIZE = 1 << 16


def is_power_of_two(value: int) -> bool:
    """Return ``True`` when ``value`` is a positive power of two."""
    return value > 0 and (value & (value - 1)) == 0


def next_power_of_two(value: int) -> int:
    """Return the smallest power of two that is ``>= value``."""
    if value <= 1:
        return 1
    return 1 << (int(value) - 1).bit_length()


def check_transform_size(n: int) -> None:
    """Raise :class:`InvalidTransformSize` unless ``n`` is a power of two >= 2."""
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise InvalidTransformSize(f"Transform size must be an integer, got {n!r}")
    if n < 2 or not is_power_of_two(int(n)):
        raise InvalidTransformSize(
            f"Transform size must be a power of two >= 2, got {n}"
        )


@lru_cache(maxsize=32)
def _bit_reversal_permutation(n: int) -> np.ndarray:
    bits = n.bit_length() - 1
    index = np.arange(n, dtype=np.intp)
    reversed_index = np.zeros(n, dtype=np.intp)
    for bit in range(bits):
        reversed_index |= ((index >> bit) & 1) << (bits - 1 - bit)
    reversed_index.flags.writeable = False
    return reversed_index


@lru_cache(maxsize=64)
def _twiddles(span: int) -> np.ndarray:
    half = span // 2
    factors = np.exp(-2j * np.pi * np.arange(half) / span)
    factors.flags.writeable = False
    return factors


def transform(frame: np.ndarray) -> np.ndarray:
    """Compute the DFT of ``frame`` along its last axis.

    Parameters
    ----------
    frame:
        Samples shaped ``(..., N)`` where ``N`` is a power of two >= 2.

    Returns
    -------
    np.ndarray
        Complex spectrum with the same shape as ``frame``. No ``1/N`` scaling
        is applied.
    """
    x = np.asarray(frame)
    if x.ndim == 0:
        raise InvalidArgument("transform expects at least a 1-D frame")
    n = x.shape[-1]
    check_transform_size(n)

    lead = x.shape[:-1]
    # Fancy indexing returns a fresh contiguous buffer, so reshapes below are views.
    out = x.astype(np.complex128, copy=False)[..., _bit_reversal_permutation(n)]

    half = 1
    while half < n:
        span = 2 * half
        blocks = out.reshape(*lead, n // span, span)
        even = blocks[..., :half].copy()
        odd = blocks[..., half:] * _twiddles(span)
        blocks[..., :half] = even + odd
        blocks[..., half:] = even - odd
        half = span
    return out


def inverse_transform(spectrum: np.ndarray) -> np.ndarray:
    """Inverse of :func:`transform`, including the ``1/N`` scaling."""
    values = np.asarray(spectrum, dtype=np.complex128)
    if values.ndim == 0:
        raise InvalidArgument("inverse_transform expects at least a 1-D spectrum")
    n = values.shape[-1]
    return np.conj(transform(np.conj(values))) / n
