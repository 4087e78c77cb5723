"""Savitzky-Golay smoothing with shrinking windows at the spectrum edges."""

from __future__ import annotations

from functools import lru_cache

import numpy as np
from scipy.signal import savgol_coeffs

from ..exceptions import WindowTooLargeError


@lru_cache(maxsize=256)
def _coefficients(half_window: int, polyorder: int) -> np.ndarray:
    """Least-squares coefficients for a centred window of ``2*half_window+1``.

    The polynomial order is capped at ``2*half_window`` so that the
    narrowest windows near the edges still have a unique fit.
    """
    window_length = 2 * half_window + 1
    order = min(polyorder, window_length - 1)
    coeffs = savgol_coeffs(window_length, order, use="dot")
    coeffs.flags.writeable = False
    return coeffs


def savitzky_golay(
    intensity: np.ndarray,
    half_window: int,
    polyorder: int = 2,
) -> np.ndarray:
    """
    Smooth a signal with a Savitzky-Golay filter.

    Points at least ``half_window`` samples away from both ends are
    filtered with the full ``2*half_window+1`` window. Closer to an end
    the window is shrunk symmetrically to the widest centred window that
    fits, and the least-squares fit is recomputed for it; no samples are
    padded or extrapolated. The very first and last points are therefore
    left unchanged.

    Parameters
    ----------
    intensity : np.ndarray
        Signal to smooth.
    half_window : int
        Half-window size (>= 1).
    polyorder : int, default=2
        Polynomial order of the local fit.

    Returns
    -------
    np.ndarray
        Smoothed signal, same length as the input.

    Raises
    ------
    WindowTooLargeError
        If ``2*half_window+1`` exceeds the signal length.
    """
    y = np.asarray(intensity, dtype=float)
    n = len(y)
    window_length = 2 * half_window + 1
    if window_length > n:
        raise WindowTooLargeError(
            f"window length ({window_length}) exceeds data length ({n})."
        )

    out = np.empty(n)
    out[half_window : n - half_window] = np.correlate(
        y, _coefficients(half_window, polyorder), mode="valid"
    )
    for k in range(half_window):
        coeffs = _coefficients(k, polyorder)
        width = 2 * k + 1
        out[k] = coeffs @ y[:width]
        out[n - 1 - k] = coeffs @ y[n - width :]
    return out
