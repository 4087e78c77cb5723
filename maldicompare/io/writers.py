"""Writing processed results to disk."""

from __future__ import annotations

from pathlib import Path

from ..processing import ProcessingResult
from ..spectrum import peaks_to_frame


def write_result(
    result: ProcessingResult, output_dir: str | Path, group: str
) -> tuple[Path, Path]:
    """
    Write a group's processed spectrum and peak list as tab-separated files.

    Parameters
    ----------
    result : ProcessingResult
        Processed group.
    output_dir : str or Path
        Destination directory (created if missing).
    group : str
        Group identifier used as file name prefix.

    Returns
    -------
    tuple of Path
        Paths of ``<group>_spectrum.tsv`` and ``<group>_peaks.tsv``.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    spectrum_path = output_dir / f"{group}_spectrum.tsv"
    peaks_path = output_dir / f"{group}_peaks.tsv"
    result.spectrum.to_frame().to_csv(spectrum_path, sep="\t", index=False)
    peaks_to_frame(result.peaks).to_csv(peaks_path, sep="\t", index=False)
    return spectrum_path, peaks_path
