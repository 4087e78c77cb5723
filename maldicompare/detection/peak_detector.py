"""MAD-based peak detection for processed MALDI-TOF spectra."""

from __future__ import annotations

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from ..spectrum import Peak, Spectrum

MAD_SCALE = 1.4826  # MAD to std conversion for normal distribution
CHUNK_ELEMENTS = 1 << 20  # window values held in memory per block


class MADPeakDetector:
    """
    Local-maximum peak picking gated by a local signal-to-noise ratio.

    The noise at each point is the median absolute deviation (MAD) of the
    intensities within ``half_window`` points on either side, scaled by
    1.4826 so that it estimates a standard deviation for Gaussian noise.
    A point is reported as a peak when it is strictly higher than both
    immediate neighbours and ``intensity / noise >= snr``.

    Parameters
    ----------
    half_window : int, default=10
        Half-width of the noise estimation window, in points. Windows are
        truncated at the spectrum ends.
    snr : float, default=2.0
        Signal-to-noise threshold.
    noise_floor : float, optional
        Value substituted for a zero noise estimate. If None, the smallest
        positive noise estimate of the spectrum is used (machine epsilon
        if there is none).

    Raises
    ------
    ValueError
        If ``half_window`` is less than 1 or ``snr`` is not positive.

    Examples
    --------
    >>> from maldicompare.detection import MADPeakDetector
    >>> detector = MADPeakDetector(half_window=10, snr=2)
    >>> peaks = detector(processed_spectrum)
    >>> peaks_to_frame(peaks).head()
    """

    def __init__(
        self,
        half_window: int = 10,
        snr: float = 2.0,
        noise_floor: float | None = None,
    ):
        if half_window < 1:
            raise ValueError(f"half_window must be at least 1, got {half_window}.")
        if not snr > 0:
            raise ValueError(f"snr must be positive, got {snr}.")
        if noise_floor is not None and not noise_floor > 0:
            raise ValueError(f"noise_floor must be positive, got {noise_floor}.")
        self.half_window = half_window
        self.snr = snr
        self.noise_floor = noise_floor

    def estimate_noise(self, spectrum: Spectrum) -> np.ndarray:
        """
        Estimate the local noise level at every point.

        Windows are evaluated in blocks of rows, so peak memory stays
        around ``CHUNK_ELEMENTS`` values whatever the window size.

        Parameters
        ----------
        spectrum : Spectrum
            Processed spectrum.

        Returns
        -------
        np.ndarray
            Scaled MAD of each point's window (may contain zeros).
        """
        h = self.half_window
        width = 2 * h + 1
        padded = np.pad(spectrum.intensity, h, constant_values=np.nan)
        windows = sliding_window_view(padded, width)
        mad = np.empty(len(windows))
        rows = max(1, CHUNK_ELEMENTS // width)
        for start in range(0, len(windows), rows):
            block = windows[start : start + rows]
            center = np.nanmedian(block, axis=1, keepdims=True)
            mad[start : start + rows] = np.nanmedian(np.abs(block - center), axis=1)
        return MAD_SCALE * mad

    def _floor(self, noise: np.ndarray) -> float:
        if self.noise_floor is not None:
            return self.noise_floor
        positive = noise[noise > 0]
        if len(positive) == 0:
            return float(np.finfo(float).eps)
        return float(positive.min())

    def __call__(self, spectrum: Spectrum) -> list[Peak]:
        """
        Detect peaks in a spectrum.

        Parameters
        ----------
        spectrum : Spectrum
            Processed spectrum.

        Returns
        -------
        list of Peak
            Peaks ordered by ascending m/z; empty if none pass the
            threshold.
        """
        y = spectrum.intensity
        if len(y) < 3:
            return []

        noise = self.estimate_noise(spectrum)
        noise = np.where(noise > 0, noise, self._floor(noise))
        ratio = y / noise

        is_max = np.zeros(len(y), dtype=bool)
        is_max[1:-1] = (y[1:-1] > y[:-2]) & (y[1:-1] > y[2:])
        idx = np.flatnonzero(is_max & (ratio >= self.snr))

        return [
            Peak(
                mass=float(spectrum.mass[i]),
                intensity=float(y[i]),
                snr=float(ratio[i]),
                index=int(i),
            )
            for i in idx
        ]

    def to_dict(self) -> dict:
        """Serialize detector to a dictionary."""
        return {
            "name": "MADPeakDetector",
            "half_window": self.half_window,
            "snr": self.snr,
            "noise_floor": self.noise_floor,
        }

    def __repr__(self) -> str:
        return f"MADPeakDetector(half_window={self.half_window}, snr={self.snr})"
