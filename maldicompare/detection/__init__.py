"""Peak detection for processed spectra."""

from .peak_detector import MADPeakDetector

__all__ = ["MADPeakDetector"]
