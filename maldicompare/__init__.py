from .config import ProcessingConfig
from .detection import MADPeakDetector
from .exceptions import (
    EmptyRangeError,
    InsufficientDataError,
    InvalidIterationCountError,
    SpectrumProcessingError,
    WindowTooLargeError,
    ZeroIntensityError,
)
from .io import read_spectrum
from .preprocessing import PreprocessingPipeline, average_replicates, preprocess
from .processing import (
    BatchResult,
    ProcessingFailure,
    ProcessingResult,
    process_group,
    process_groups,
)
from .spectrum import Peak, Spectrum, peaks_to_frame

__version__ = "0.1.0"

__all__ = [
    "Spectrum",
    "Peak",
    "peaks_to_frame",
    "ProcessingConfig",
    "PreprocessingPipeline",
    "preprocess",
    "average_replicates",
    "MADPeakDetector",
    "process_group",
    "process_groups",
    "ProcessingResult",
    "ProcessingFailure",
    "BatchResult",
    "read_spectrum",
    "SpectrumProcessingError",
    "InsufficientDataError",
    "EmptyRangeError",
    "WindowTooLargeError",
    "InvalidIterationCountError",
    "ZeroIntensityError",
    "__version__",
]
