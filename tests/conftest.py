"""Shared pytest fixtures for maldicompare tests."""
from __future__ import annotations

import numpy as np
import pytest

from maldicompare import Spectrum


def _generate_synthetic_spectrum(
    mz_start: float = 4000,
    mz_end: float = 11000,
    n_points: int = 7001,
    peak_positions: list[float] | None = None,
    peak_heights: list[float] | None = None,
    peak_width: float = 3.0,
    noise_level: float = 10.0,
    baseline_level: float = 500.0,
    random_state: int = 42,
    name: str = "in-memory",
) -> Spectrum:
    """
    Generate a synthetic MALDI-TOF spectrum with known peaks.

    Parameters
    ----------
    mz_start : float
        Start of m/z range.
    mz_end : float
        End of m/z range.
    n_points : int
        Number of data points.
    peak_positions : list of float, optional
        m/z positions of peaks. Defaults to common positions.
    peak_heights : list of float, optional
        Heights of peaks. Defaults to 5000 for all peaks.
    peak_width : float
        Standard deviation of Gaussian peaks.
    noise_level : float
        Standard deviation of Gaussian noise.
    baseline_level : float
        Height of the exponentially decaying baseline at ``mz_start``.
    random_state : int
        Random seed for reproducibility.
    name : str
        Spectrum name.

    Returns
    -------
    Spectrum
        Raw-like spectrum with non-negative intensities.
    """
    rng = np.random.default_rng(random_state)

    mz = np.linspace(mz_start, mz_end, n_points)
    intensity = baseline_level * np.exp(-(mz - mz_start) / 3000)

    if peak_positions is None:
        peak_positions = [5500, 6500, 7500, 8500, 9500]
    if peak_heights is None:
        peak_heights = [5000.0] * len(peak_positions)

    # Add Gaussian peaks
    for pos, height in zip(peak_positions, peak_heights):
        intensity += height * np.exp(-0.5 * ((mz - pos) / peak_width) ** 2)

    # Add noise
    intensity += rng.normal(0, noise_level, len(intensity))
    intensity = np.maximum(intensity, 0)  # Clip negatives

    return Spectrum(mz, intensity, name=name)


@pytest.fixture
def synthetic_spectrum() -> Spectrum:
    """
    Generate a synthetic MALDI-TOF spectrum with known peaks.

    Peaks are at m/z: 5500, 6500, 7500, 8500, 9500
    """
    return _generate_synthetic_spectrum(random_state=42)


@pytest.fixture
def synthetic_replicates() -> list[Spectrum]:
    """Three replicates of the same sample with independent noise."""
    return [
        _generate_synthetic_spectrum(random_state=seed, name=f"rep{seed}")
        for seed in range(3)
    ]


@pytest.fixture
def uniform_spectrum() -> Spectrum:
    """5001 uniformly sampled points over m/z 5000-10000."""
    return _generate_synthetic_spectrum(
        mz_start=5000, mz_end=10000, n_points=5001, random_state=7
    )


def _write_spectrum_txt(path, spectrum: Spectrum, sep: str = "\t") -> None:
    lines = [f"{m}{sep}{i}" for m, i in zip(spectrum.mass, spectrum.intensity)]
    path.write_text("\n".join(lines) + "\n")


@pytest.fixture
def write_spectrum():
    """Return a helper writing a spectrum as a headerless two-column text file."""
    return _write_spectrum_txt
