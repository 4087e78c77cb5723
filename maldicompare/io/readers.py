"""File reading utilities for MALDI-TOF spectrum data."""

from __future__ import annotations

import csv
import itertools
from pathlib import Path

import pandas as pd

from ..spectrum import Spectrum


def sniff_delimiter(path: str | Path, sample_lines: int = 10) -> str:
    """
    Detect the delimiter used in a text file.

    Parameters
    ----------
    path : str or Path
        Path to the file to analyze.
    sample_lines : int, default=10
        Number of lines to sample for delimiter detection.

    Returns
    -------
    str
        Detected delimiter character.
    """
    with open(path, "r", newline="") as f:
        lines = list(itertools.islice(f, sample_lines))
    if not lines:
        raise csv.Error("File is empty, cannot detect delimiter")
    dialect = csv.Sniffer().sniff("".join(lines), delimiters=",;\t ")
    return dialect.delimiter


def read_spectrum(path: str | Path) -> Spectrum:
    """
    Read a raw spectrum file.

    Reads txt/csv files with two columns (mass and intensity) and
    automatically detects the delimiter. Lines starting with ``#`` are
    ignored.

    Parameters
    ----------
    path : str or Path
        Path to the spectrum file.

    Returns
    -------
    Spectrum
        Spectrum named after the file stem.

    Examples
    --------
    >>> from maldicompare.io import read_spectrum
    >>> spec = read_spectrum("strain_1/rep1.txt")
    >>> spec.name
    'rep1'
    """
    path = Path(path)
    try:
        delim = sniff_delimiter(path)
    except csv.Error:
        delim = r"\s+"

    df = pd.read_csv(
        path, sep=delim, comment="#", header=None, names=["mass", "intensity"]
    )

    return Spectrum.from_frame(df, name=path.stem)


def read_group(directory: str | Path, pattern: str = "*.txt") -> list[Spectrum]:
    """
    Read all replicate spectra of one sample group.

    Parameters
    ----------
    directory : str or Path
        Directory holding one file per technical replicate.
    pattern : str, default="*.txt"
        Glob pattern selecting the spectrum files.

    Returns
    -------
    list of Spectrum
        Replicates sorted by file name; empty if no file matches.
    """
    return [read_spectrum(p) for p in sorted(Path(directory).glob(pattern))]


def read_groups(
    base_dir: str | Path, pattern: str = "*.txt"
) -> dict[str, list[Spectrum]]:
    """
    Read one sample group per subdirectory of *base_dir*.

    Parameters
    ----------
    base_dir : str or Path
        Directory with one subdirectory per strain.
    pattern : str, default="*.txt"
        Glob pattern selecting the spectrum files.

    Returns
    -------
    dict of str to list of Spectrum
        Replicates keyed by subdirectory name, in sorted order.
    """
    return {
        d.name: read_group(d, pattern)
        for d in sorted(Path(base_dir).iterdir())
        if d.is_dir()
    }
