"""Technical replicate averaging for MALDI-TOF spectra.

Several acquisitions of the same isolate are combined into a single
spectrum before any further processing. Replicates do not always share
the exact same m/z sampling, so each one is first interpolated onto the
grid of the first replicate.

Examples
--------
>>> from maldicompare.preprocessing.merging import average_replicates
>>> reps = [read_spectrum(p) for p in sorted(Path("strain_1").glob("*.txt"))]
>>> merged = average_replicates(reps, method="mean")
"""

from __future__ import annotations

import numpy as np

from ..config import AVERAGING_METHODS
from ..exceptions import InsufficientDataError
from ..spectrum import Spectrum


def _to_reference_grid(spectra: list[Spectrum]) -> tuple[np.ndarray, np.ndarray]:
    """Interpolate spectra onto the m/z grid of the first one.

    Parameters
    ----------
    spectra : list of Spectrum
        Replicates; the first defines the reference grid.

    Returns
    -------
    reference_mz : np.ndarray
        m/z grid of the first spectrum.
    matrix : np.ndarray
        Intensity matrix of shape ``(n_spectra, len(reference_mz))``.
    """
    reference_mz = spectra[0].mass

    matrix = np.empty((len(spectra), len(reference_mz)))
    for i, s in enumerate(spectra):
        if np.array_equal(s.mass, reference_mz):
            matrix[i] = s.intensity
        else:
            matrix[i] = np.interp(reference_mz, s.mass, s.intensity)

    return reference_mz, matrix


def average_replicates(
    spectra: list[Spectrum],
    method: str = "mean",
    weights: np.ndarray | list[float] | None = None,
) -> Spectrum:
    """Average technical replicates into a single spectrum.

    Parameters
    ----------
    spectra : list of Spectrum
        Replicate spectra of one sample.
    method : str, default="mean"
        Combination strategy:

        - ``"mean"``: arithmetic mean (or weighted mean if ``weights``
          is provided).
        - ``"median"``: element-wise median (``weights`` is ignored).
        - ``"sum"``: element-wise sum (``weights`` is ignored).
    weights : array-like of float, optional
        Per-replicate weights for the ``"mean"`` method. Must have the
        same length as ``spectra``.

    Returns
    -------
    Spectrum
        Averaged spectrum on the m/z grid of the first replicate. A
        single replicate is returned unchanged.

    Raises
    ------
    InsufficientDataError
        If *spectra* is empty.
    ValueError
        If *method* is invalid or *weights* length does not match
        *spectra*.

    Notes
    -----
    Replicates are linearly interpolated onto the first replicate's
    grid; outside a replicate's own m/z range its edge intensity is
    used.
    """
    if len(spectra) == 0:
        raise InsufficientDataError("Cannot average an empty set of spectra.")

    if method not in AVERAGING_METHODS:
        raise ValueError(f"method must be one of {AVERAGING_METHODS}, got {method!r}.")

    if len(spectra) == 1:
        return spectra[0]

    reference_mz, matrix = _to_reference_grid(list(spectra))

    if method == "mean":
        if weights is not None:
            w = np.asarray(weights, dtype=float)
            if len(w) != len(spectra):
                raise ValueError(
                    f"weights length ({len(w)}) must match "
                    f"spectra length ({len(spectra)})."
                )
            merged = np.average(matrix, axis=0, weights=w)
        else:
            merged = np.mean(matrix, axis=0)
    elif method == "median":
        merged = np.median(matrix, axis=0)
    else:
        merged = np.sum(matrix, axis=0)

    return Spectrum(reference_mz, merged, name=spectra[0].name)
