"""Processing steps for MALDI-TOF spectra."""

from .baseline import snip_baseline
from .merging import average_replicates
from .pipeline import preprocess
from .preprocessing_pipeline import PreprocessingPipeline
from .smoothing import savitzky_golay
from .transformers import (
    LogTransform,
    MedianBaseline,
    MedianNormalizer,
    MzTrimmer,
    SavitzkyGolaySmooth,
    SNIPBaseline,
    SqrtTransform,
    TICNormalizer,
    TopHatBaseline,
)

__all__ = [
    # Pipeline
    "PreprocessingPipeline",
    "preprocess",
    # Merging
    "average_replicates",
    # Kernels
    "savitzky_golay",
    "snip_baseline",
    # Transformers
    "MzTrimmer",
    "SqrtTransform",
    "LogTransform",
    "SavitzkyGolaySmooth",
    "SNIPBaseline",
    "TopHatBaseline",
    "MedianBaseline",
    "TICNormalizer",
    "MedianNormalizer",
]
