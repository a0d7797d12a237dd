"""Window function generation."""

from __future__ import annotations

from enum import Enum

import numpy as np
from scipy.signal import get_window

from ..errors import InvalidArgument, InvalidWindowKind


class WindowKind(Enum):
    """Closed set of supported window families.

    Values are the names accepted at the external interfaces.
    """

    RECTANGLE = "Rectangle"
    HANN = "Hann"
    HAMMING = "Hamming"
    BLACKMAN = "Blackman"


_SCIPY_NAMES: dict[WindowKind, str] = {
    WindowKind.RECTANGLE: "boxcar",
    WindowKind.HANN: "hann",
    WindowKind.HAMMING: "hamming",
    WindowKind.BLACKMAN: "blackman",
}


def window_names() -> list[str]:
    """Return the accepted window names in declaration order."""
    return [kind.value for kind in WindowKind]


def parse_window_kind(name: str) -> WindowKind:
    """Translate an exact, case-sensitive window name into :class:`WindowKind`."""
    if isinstance(name, WindowKind):
        return name
    for kind in WindowKind:
        if kind.value == name:
            return kind
    raise InvalidWindowKind(
        f"Unknown window function {name!r}. Available: {', '.join(window_names())}"
    )


def coefficients(kind: WindowKind, length: int) -> np.ndarray:
    """Return ``length`` symmetric weighting coefficients for ``kind``.

    Hann, Hamming and Blackman use the symmetric ``N - 1`` denominator, e.g.
    Hann is ``0.5 - 0.5 * cos(2 * pi * i / (N - 1))``. Lengths of zero or one
    yield all-ones arrays for every family.
    """
    if not isinstance(kind, WindowKind):
        raise InvalidWindowKind(f"Expected WindowKind, got {kind!r}")
    if length < 0:
        raise InvalidArgument(f"Window length must be non-negative, got {length}")
    if length <= 1:
        return np.ones(length, dtype=np.float64)
    win = get_window(_SCIPY_NAMES[kind], length, fftbins=False)
    return np.asarray(win, dtype=np.float64)
