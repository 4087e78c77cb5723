"""Per-group processing and batch orchestration.

Each sample group (typically one strain) is a list of raw technical
replicates. A group is averaged, processed and peak-picked on its own;
a failure in one group is recorded and never affects the others.

Examples
--------
>>> from maldicompare import ProcessingConfig, process_groups
>>> batch = process_groups(
...     {"strain_1": reps_1, "strain_2": reps_2},
...     ProcessingConfig(snr_threshold=2, trim_range=(5000, 10000)),
... )
>>> batch.results["strain_1"].peaks[:3]
>>> batch.failures
{}
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Mapping, Sequence

from .config import ProcessingConfig
from .detection.peak_detector import MADPeakDetector
from .preprocessing.pipeline import preprocess
from .preprocessing.preprocessing_pipeline import PreprocessingPipeline
from .spectrum import Peak, Spectrum

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessingResult:
    """
    Outcome of a successfully processed sample group.

    Attributes
    ----------
    spectrum : Spectrum
        Processed (averaged, trimmed, transformed, smoothed,
        baseline-corrected and TIC-normalized) spectrum.
    peaks : tuple of Peak
        Detected peaks, ordered by ascending m/z.
    """

    spectrum: Spectrum
    peaks: tuple[Peak, ...] = ()

    @property
    def processed_spectrum(self) -> Spectrum:
        """Alias of :attr:`spectrum`."""
        return self.spectrum


@dataclass(frozen=True)
class ProcessingFailure:
    """
    Diagnostic record for a sample group that could not be processed.

    Attributes
    ----------
    group : str
        Group identifier.
    kind : str
        Error kind, e.g. ``"EmptyRangeError"``.
    message : str
        Error message.
    """

    group: str
    kind: str
    message: str


@dataclass
class BatchResult:
    """Results and failures of a batch run, keyed by group identifier."""

    results: dict[str, ProcessingResult] = field(default_factory=dict)
    failures: dict[str, ProcessingFailure] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.results)


def process_group(
    spectra: Sequence[Spectrum],
    config: ProcessingConfig | None = None,
) -> ProcessingResult:
    """
    Process the replicates of one sample group and detect its peaks.

    Parameters
    ----------
    spectra : sequence of Spectrum
        Raw technical replicates.
    config : ProcessingConfig, optional
        Processing parameters. If None, uses ``ProcessingConfig()``.

    Returns
    -------
    ProcessingResult
        Processed spectrum and its peaks.

    Raises
    ------
    SpectrumProcessingError
        If any processing step fails.
    """
    if config is None:
        config = ProcessingConfig()
    pipeline = PreprocessingPipeline.from_config(config)
    detector = MADPeakDetector(
        half_window=config.peak_half_window, snr=config.snr_threshold
    )

    processed = preprocess(list(spectra), config, pipeline)
    peaks = detector(processed)
    return ProcessingResult(spectrum=processed, peaks=tuple(peaks))


def _run_group(
    group: str, spectra: Sequence[Spectrum], config: ProcessingConfig
) -> ProcessingResult | ProcessingFailure:
    logger.debug("Processing group %s (%d replicates)", group, len(spectra))
    try:
        result = process_group(spectra, config)
    except Exception as exc:
        failure = ProcessingFailure(
            group=group,
            kind=getattr(exc, "kind", type(exc).__name__),
            message=str(exc),
        )
        logger.warning(
            "Failed to process group %s: %s: %s", group, failure.kind, failure.message
        )
        return failure
    logger.info(
        "Processed group %s: %d points, %d peaks",
        group,
        len(result.spectrum),
        len(result.peaks),
    )
    return result


def process_groups(
    groups: Mapping[str, Sequence[Spectrum]],
    config: ProcessingConfig | None = None,
    n_jobs: int = 1,
) -> BatchResult:
    """
    Process several sample groups independently.

    Parameters
    ----------
    groups : mapping of str to sequence of Spectrum
        Raw replicates per group identifier.
    config : ProcessingConfig, optional
        Processing parameters shared by all groups. If None, uses
        ``ProcessingConfig()``.
    n_jobs : int, default=1
        Number of worker threads. Groups share no state, so they can be
        processed concurrently; results are collected by the calling
        thread.

    Returns
    -------
    BatchResult
        Successful groups in ``results`` and failed ones in ``failures``,
        both in input order. A group never appears in both.

    Raises
    ------
    ValueError
        If ``n_jobs`` is less than 1.
    """
    if n_jobs < 1:
        raise ValueError(f"n_jobs must be at least 1, got {n_jobs}.")
    if config is None:
        config = ProcessingConfig()

    outcomes: dict[str, ProcessingResult | ProcessingFailure] = {}
    if n_jobs == 1 or len(groups) <= 1:
        for group, spectra in groups.items():
            outcomes[group] = _run_group(group, spectra, config)
    else:
        with ThreadPoolExecutor(max_workers=n_jobs) as executor:
            future_map = {
                executor.submit(_run_group, group, spectra, config): group
                for group, spectra in groups.items()
            }
            for future in as_completed(future_map):
                outcomes[future_map[future]] = future.result()

    batch = BatchResult()
    for group in groups:
        outcome = outcomes[group]
        if isinstance(outcome, ProcessingFailure):
            batch.failures[group] = outcome
        else:
            batch.results[group] = outcome
    return batch
