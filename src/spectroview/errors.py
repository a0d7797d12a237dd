"""Error types raised by the spectral analysis engine and its boundaries."""

from __future__ import annotations


class SpectroviewError(ValueError):
    """Base class for all spectroview errors."""


class InvalidWindowKind(SpectroviewError):
    """Raised when a window family name or value is not recognized."""


class InvalidTransformSize(SpectroviewError):
    """Raised when a transform size is not a power of two or is below 2."""


class InvalidArgument(SpectroviewError):
    """Raised for out-of-domain scalar or array arguments."""


class InvalidRequest(SpectroviewError):
    """Raised by the batch boundary when a request cannot be analysed."""


class AnalysisNotReady(SpectroviewError):
    """Raised when a session is queried before any analysis has run."""
