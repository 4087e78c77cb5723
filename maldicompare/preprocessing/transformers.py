"""Individual processing steps for MALDI-TOF spectra.

Each transformer is a callable that takes a :class:`~maldicompare.Spectrum`
and returns a new one; inputs are never modified.

Examples
--------
>>> from maldicompare.preprocessing.transformers import (
...     MzTrimmer, SqrtTransform, SavitzkyGolaySmooth,
...     SNIPBaseline, TICNormalizer,
... )
>>> steps = [MzTrimmer(5000, 10000), SqrtTransform(), SavitzkyGolaySmooth()]
>>> spec = steps[0](raw_spectrum)
"""

from __future__ import annotations

import numpy as np
from pybaselines import Baseline
from scipy.ndimage import median_filter

from ..exceptions import EmptyRangeError, ZeroIntensityError
from ..spectrum import Spectrum
from .baseline import snip_baseline
from .smoothing import savitzky_golay


class MzTrimmer:
    """Trim spectrum to an inclusive m/z range.

    Parameters
    ----------
    mz_min : float, default=5000
        Lower m/z bound in Daltons.
    mz_max : float, default=10000
        Upper m/z bound in Daltons.

    Raises
    ------
    ValueError
        If ``mz_min`` is greater than or equal to ``mz_max``.
    """

    def __init__(self, mz_min: float = 5000, mz_max: float = 10000):
        if mz_min >= mz_max:
            raise ValueError(f"mz_min ({mz_min}) must be less than mz_max ({mz_max}).")
        self.mz_min = mz_min
        self.mz_max = mz_max

    def __call__(self, spectrum: Spectrum) -> Spectrum:
        """Apply m/z trimming to the spectrum.

        Raises
        ------
        EmptyRangeError
            If no point of the spectrum lies inside the range.
        """
        mask = (spectrum.mass >= self.mz_min) & (spectrum.mass <= self.mz_max)
        if not mask.any():
            raise EmptyRangeError(
                f"No points in m/z range [{self.mz_min}, {self.mz_max}] "
                f"(spectrum covers {spectrum.mass[0]:.2f}-{spectrum.mass[-1]:.2f})."
            )
        return Spectrum(spectrum.mass[mask], spectrum.intensity[mask], name=spectrum.name)

    def to_dict(self) -> dict:
        """Serialize transformer to a dictionary."""
        return {
            "name": "MzTrimmer",
            "mz_min": self.mz_min,
            "mz_max": self.mz_max,
        }

    def __repr__(self) -> str:
        return f"MzTrimmer(mz_min={self.mz_min}, mz_max={self.mz_max})"


class SqrtTransform:
    """Variance-stabilizing square root transformation.

    Negative intensities are clamped to zero before taking the root.
    """

    def __call__(self, spectrum: Spectrum) -> Spectrum:
        """Apply square-root transformation to the spectrum."""
        return spectrum.with_intensity(np.sqrt(np.clip(spectrum.intensity, 0, None)))

    def to_dict(self) -> dict:
        """Serialize transformer to a dictionary."""
        return {"name": "SqrtTransform"}

    def __repr__(self) -> str:
        return "SqrtTransform()"


class LogTransform:
    """Log1p intensity transformation (alternative to sqrt).

    Negative intensities are clamped to zero first.
    """

    def __call__(self, spectrum: Spectrum) -> Spectrum:
        """Apply log1p transformation to the spectrum."""
        return spectrum.with_intensity(np.log1p(np.clip(spectrum.intensity, 0, None)))

    def to_dict(self) -> dict:
        """Serialize transformer to a dictionary."""
        return {"name": "LogTransform"}

    def __repr__(self) -> str:
        return "LogTransform()"


class SavitzkyGolaySmooth:
    """Savitzky-Golay smoothing filter.

    Parameters
    ----------
    half_window : int, default=10
        Half-window size; the filter window is ``2*half_window+1`` points.
    polyorder : int, default=2
        Order of the polynomial used to fit the samples.

    Raises
    ------
    ValueError
        If ``half_window`` is less than 1, or if the window is not
        greater than ``polyorder``.
    """

    def __init__(self, half_window: int = 10, polyorder: int = 2):
        if half_window < 1:
            raise ValueError(f"half_window must be at least 1, got {half_window}.")
        if 2 * half_window + 1 <= polyorder:
            raise ValueError(
                f"window length ({2 * half_window + 1}) must be greater than "
                f"polyorder ({polyorder})."
            )
        self.half_window = half_window
        self.polyorder = polyorder

    def __call__(self, spectrum: Spectrum) -> Spectrum:
        """Apply Savitzky-Golay smoothing.

        Raises
        ------
        WindowTooLargeError
            If the window is longer than the spectrum.
        """
        return spectrum.with_intensity(
            savitzky_golay(spectrum.intensity, self.half_window, self.polyorder)
        )

    def to_dict(self) -> dict:
        """Serialize transformer to a dictionary."""
        return {
            "name": "SavitzkyGolaySmooth",
            "half_window": self.half_window,
            "polyorder": self.polyorder,
        }

    def __repr__(self) -> str:
        return (
            f"SavitzkyGolaySmooth(half_window={self.half_window}, "
            f"polyorder={self.polyorder})"
        )


class SNIPBaseline:
    """SNIP (Statistics-sensitive Non-linear Iterative Peak-clipping) baseline correction.

    The estimated baseline is subtracted; the residual is not clipped, so
    intensities may become slightly negative.

    Parameters
    ----------
    iterations : int, default=100
        Number of clipping iterations.
    decreasing : bool, default=False
        Apply clipping distances in decreasing order.
    """

    def __init__(self, iterations: int = 100, decreasing: bool = False):
        self.iterations = iterations
        self.decreasing = decreasing

    def __call__(self, spectrum: Spectrum) -> Spectrum:
        """Apply SNIP baseline correction to the spectrum.

        Raises
        ------
        InvalidIterationCountError
            If ``iterations`` is less than 1.
        """
        bkg = snip_baseline(spectrum.intensity, self.iterations, self.decreasing)
        return spectrum.with_intensity(spectrum.intensity - bkg)

    def to_dict(self) -> dict:
        """Serialize transformer to a dictionary."""
        return {
            "name": "SNIPBaseline",
            "iterations": self.iterations,
            "decreasing": self.decreasing,
        }

    def __repr__(self) -> str:
        return f"SNIPBaseline(iterations={self.iterations}, decreasing={self.decreasing})"


class TopHatBaseline:
    """Morphological top-hat baseline correction.

    Parameters
    ----------
    half_window : int, default=100
        Half-window of the structuring element, in points.
    """

    def __init__(self, half_window: int = 100):
        self.half_window = half_window

    def __call__(self, spectrum: Spectrum) -> Spectrum:
        """Apply top-hat baseline correction to the spectrum."""
        bkg = Baseline(x_data=spectrum.mass.copy()).tophat(
            spectrum.intensity.copy(), half_window=self.half_window
        )[0]
        return spectrum.with_intensity(spectrum.intensity - bkg)

    def to_dict(self) -> dict:
        """Serialize transformer to a dictionary."""
        return {"name": "TopHatBaseline", "half_window": self.half_window}

    def __repr__(self) -> str:
        return f"TopHatBaseline(half_window={self.half_window})"


class MedianBaseline:
    """Running-median baseline correction.

    Parameters
    ----------
    half_window : int, default=100
        Half-window of the running median, in points.
    """

    def __init__(self, half_window: int = 100):
        self.half_window = half_window

    def __call__(self, spectrum: Spectrum) -> Spectrum:
        """Apply running-median baseline correction to the spectrum."""
        bkg = median_filter(
            spectrum.intensity, size=2 * self.half_window + 1, mode="nearest"
        )
        return spectrum.with_intensity(spectrum.intensity - bkg)

    def to_dict(self) -> dict:
        """Serialize transformer to a dictionary."""
        return {"name": "MedianBaseline", "half_window": self.half_window}

    def __repr__(self) -> str:
        return f"MedianBaseline(half_window={self.half_window})"


class TICNormalizer:
    """Total Ion Current normalization (intensities sum to 1)."""

    def __call__(self, spectrum: Spectrum) -> Spectrum:
        """Apply TIC normalization to the spectrum.

        Raises
        ------
        ZeroIntensityError
            If the intensities sum to zero.
        """
        total = spectrum.intensity.sum()
        if total == 0:
            raise ZeroIntensityError(
                "Total ion current is zero; cannot normalize a flat-zero spectrum."
            )
        return spectrum.with_intensity(spectrum.intensity / total)

    def to_dict(self) -> dict:
        """Serialize transformer to a dictionary."""
        return {"name": "TICNormalizer"}

    def __repr__(self) -> str:
        return "TICNormalizer()"


class MedianNormalizer:
    """Normalize intensities by median value."""

    def __call__(self, spectrum: Spectrum) -> Spectrum:
        """Apply median normalization to the spectrum.

        Raises
        ------
        ZeroIntensityError
            If the median intensity is zero.
        """
        median = np.median(spectrum.intensity)
        if median == 0:
            raise ZeroIntensityError("Median intensity is zero; cannot normalize.")
        return spectrum.with_intensity(spectrum.intensity / median)

    def to_dict(self) -> dict:
        """Serialize transformer to a dictionary."""
        return {"name": "MedianNormalizer"}

    def __repr__(self) -> str:
        return "MedianNormalizer()"


# Registry mapping transformer names to classes (for deserialization)
TRANSFORMER_REGISTRY: dict[str, type] = {
    "MzTrimmer": MzTrimmer,
    "SqrtTransform": SqrtTransform,
    "LogTransform": LogTransform,
    "SavitzkyGolaySmooth": SavitzkyGolaySmooth,
    "SNIPBaseline": SNIPBaseline,
    "TopHatBaseline": TopHatBaseline,
    "MedianBaseline": MedianBaseline,
    "TICNormalizer": TICNormalizer,
    "MedianNormalizer": MedianNormalizer,
}
