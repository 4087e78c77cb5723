"""Main processing entry point for the replicates of one sample."""

from __future__ import annotations

from ..config import ProcessingConfig
from ..spectrum import Spectrum
from .merging import average_replicates
from .preprocessing_pipeline import PreprocessingPipeline


def preprocess(
    spectra: list[Spectrum],
    config: ProcessingConfig | None = None,
    pipeline: PreprocessingPipeline | None = None,
) -> Spectrum:
    """
    Average technical replicates and run the processing chain on the result.

    By default applies: replicate averaging → m/z trim (5000–10000 Da) →
    sqrt transform → Savitzky-Golay smoothing → SNIP baseline → TIC
    normalization.

    Parameters
    ----------
    spectra : list of Spectrum
        Raw replicate spectra of one sample.
    config : ProcessingConfig, optional
        Processing parameters. If None, uses ``ProcessingConfig()``.
    pipeline : PreprocessingPipeline, optional
        Custom step sequence. If None, built from *config* with
        ``PreprocessingPipeline.from_config()``.

    Returns
    -------
    Spectrum
        Processed spectrum.

    Raises
    ------
    SpectrumProcessingError
        Any error kind raised by the averaging or processing steps.

    See Also
    --------
    PreprocessingPipeline : Composable processing pipeline class.
    average_replicates : Replicate averaging.

    Examples
    --------
    >>> from maldicompare.preprocessing import preprocess
    >>> processed = preprocess([rep1, rep2, rep3])
    """
    if config is None:
        config = ProcessingConfig()
    if pipeline is None:
        pipeline = PreprocessingPipeline.from_config(config)
    averaged = average_replicates(spectra, method=config.averaging_method)
    return pipeline(averaged)
