"""Error kinds raised by the spectrum processing stages.

All stage errors derive from :class:`SpectrumProcessingError`, which is a
``ValueError`` so callers that only care about bad input can catch the
builtin. The batch orchestrator records the ``kind`` of each failure.
"""

from __future__ import annotations


class SpectrumProcessingError(ValueError):
    """Base class for errors raised while processing a sample group."""

    @property
    def kind(self) -> str:
        """Name of the error kind (the exception class name)."""
        return type(self).__name__


class InsufficientDataError(SpectrumProcessingError):
    """No replicate spectra were supplied for averaging."""


class EmptyRangeError(SpectrumProcessingError):
    """Trimming removed every point of the spectrum."""


class WindowTooLargeError(SpectrumProcessingError):
    """Smoothing window is wider than the spectrum."""


class InvalidIterationCountError(SpectrumProcessingError):
    """SNIP baseline removal was asked for fewer than one iteration."""


class ZeroIntensityError(SpectrumProcessingError):
    """Normalization denominator is zero."""
