"""Immutable spectrum and peak containers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

import numpy as np
import pandas as pd


def _frozen_array(values) -> np.ndarray:
    arr = np.array(values, dtype=float)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class Spectrum:
    """
    A mass spectrum as two parallel, read-only arrays.

    Every processing step returns a new ``Spectrum``; the arrays of an
    existing instance are never modified, so intermediate results can be
    kept around and compared safely.

    Parameters
    ----------
    mass : array-like of float
        m/z values, strictly increasing.
    intensity : array-like of float
        Intensities, same length as ``mass``. May be negative (e.g. after
        baseline subtraction).
    name : str, default="in-memory"
        Label carried through processing steps.

    Raises
    ------
    ValueError
        If the arrays are not 1-D, differ in length, are empty, or if
        ``mass`` is not strictly increasing.

    Examples
    --------
    >>> spec = Spectrum([2000.0, 2001.0, 2002.0], [10.0, 25.0, 12.0])
    >>> len(spec)
    3
    >>> spec.to_frame().columns.tolist()
    ['mass', 'intensity']
    """

    mass: np.ndarray
    intensity: np.ndarray
    name: str = field(default="in-memory")

    def __post_init__(self):
        mass = _frozen_array(self.mass)
        intensity = _frozen_array(self.intensity)
        if mass.ndim != 1 or intensity.ndim != 1:
            raise ValueError("mass and intensity must be 1-D arrays.")
        if len(mass) != len(intensity):
            raise ValueError(
                f"mass length ({len(mass)}) does not match "
                f"intensity length ({len(intensity)})."
            )
        if len(mass) == 0:
            raise ValueError("A spectrum must contain at least one point.")
        if np.isnan(mass).any():
            raise ValueError("mass must not contain NaN.")
        if len(mass) > 1 and not np.all(np.diff(mass) > 0):
            raise ValueError("mass must be strictly increasing.")
        object.__setattr__(self, "mass", mass)
        object.__setattr__(self, "intensity", intensity)

    @classmethod
    def from_frame(cls, df: pd.DataFrame, name: str = "in-memory") -> Spectrum:
        """
        Build a spectrum from a DataFrame with ``mass`` and ``intensity`` columns.

        Rows are sorted by mass; repeated mass values keep their first
        occurrence.
        """
        missing = {"mass", "intensity"} - set(df.columns)
        if missing:
            raise ValueError(f"DataFrame is missing columns: {sorted(missing)}")
        df = (
            df[["mass", "intensity"]]
            .sort_values("mass", kind="mergesort")
            .drop_duplicates(subset="mass", keep="first")
        )
        return cls(df["mass"].to_numpy(), df["intensity"].to_numpy(), name=name)

    def to_frame(self) -> pd.DataFrame:
        """Return the spectrum as a DataFrame with ``mass`` and ``intensity``."""
        return pd.DataFrame({"mass": self.mass.copy(), "intensity": self.intensity.copy()})

    def with_intensity(self, intensity: Iterable[float]) -> Spectrum:
        """Return a new spectrum on the same m/z grid with new intensities."""
        return Spectrum(self.mass, intensity, name=self.name)

    @property
    def tic(self) -> float:
        """Total ion current (sum of all intensities)."""
        return float(self.intensity.sum())

    def __len__(self) -> int:
        return len(self.mass)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Spectrum):
            return NotImplemented
        return np.array_equal(self.mass, other.mass) and np.array_equal(
            self.intensity, other.intensity
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"Spectrum(name={self.name!r}, n_points={len(self)}, "
            f"mz_range=({self.mass[0]:.2f}, {self.mass[-1]:.2f}))"
        )


@dataclass(frozen=True)
class Peak:
    """
    A detected peak.

    Attributes
    ----------
    mass : float
        m/z of the peak apex.
    intensity : float
        Intensity at the apex.
    snr : float
        Signal-to-noise ratio at the apex.
    index : int
        Position of the apex in the spectrum it was detected in.
    """

    mass: float
    intensity: float
    snr: float
    index: int


def peaks_to_frame(peaks: Iterable[Peak]) -> pd.DataFrame:
    """Convert peaks to a DataFrame with ``mass``, ``intensity`` and ``snr``."""
    rows = [(p.mass, p.intensity, p.snr) for p in peaks]
    return pd.DataFrame(rows, columns=["mass", "intensity", "snr"])
