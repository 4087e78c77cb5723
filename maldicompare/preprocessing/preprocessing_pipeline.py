"""Composable processing pipeline for MALDI-TOF spectra.

Similar to :class:`sklearn.pipeline.Pipeline` but designed for
:class:`~maldicompare.Spectrum` values.

Examples
--------
>>> from maldicompare.preprocessing import PreprocessingPipeline
>>> from maldicompare.preprocessing.transformers import *
>>>
>>> # Default pipeline (standard strain comparison)
>>> pipe = PreprocessingPipeline.default()
>>> processed = pipe(averaged_spectrum)
>>>
>>> # Custom pipeline
>>> pipe = PreprocessingPipeline([
...     ("trim", MzTrimmer(mz_min=2000, mz_max=20000)),
...     ("log", LogTransform()),
...     ("smooth", SavitzkyGolaySmooth(half_window=5)),
...     ("baseline", TopHatBaseline(half_window=50)),
...     ("norm", TICNormalizer()),
... ])
>>> processed = pipe(averaged_spectrum)
"""

from __future__ import annotations

from ..config import ProcessingConfig
from ..spectrum import Spectrum
from .transformers import (
    TRANSFORMER_REGISTRY,
    MzTrimmer,
    SavitzkyGolaySmooth,
    SNIPBaseline,
    SqrtTransform,
    TICNormalizer,
)


class PreprocessingPipeline:
    """Composable pipeline of processing steps for MALDI-TOF spectra.

    Parameters
    ----------
    steps : list of (str, transformer) tuples
        Named processing steps. Each transformer must be callable,
        accepting and returning a :class:`~maldicompare.Spectrum`.

    Examples
    --------
    >>> pipe = PreprocessingPipeline.default()
    >>> processed = pipe(spectrum)
    """

    def __init__(self, steps: list[tuple[str, object]]):
        self.steps = list(steps)

    def __call__(self, spectrum: Spectrum) -> Spectrum:
        """Apply all steps sequentially.

        Parameters
        ----------
        spectrum : Spectrum
            Averaged raw spectrum.

        Returns
        -------
        Spectrum
            Processed spectrum.
        """
        for _name, step in self.steps:
            spectrum = step(spectrum)
        return spectrum

    @classmethod
    def default(cls) -> PreprocessingPipeline:
        """Return the standard pipeline built from a default configuration.

        Steps: m/z trim (5000-10000 Da) → sqrt transform → Savitzky-Golay
        smoothing → SNIP baseline → TIC normalization.

        Returns
        -------
        PreprocessingPipeline
            Default pipeline instance.
        """
        return cls.from_config(ProcessingConfig())

    @classmethod
    def from_config(cls, config: ProcessingConfig) -> PreprocessingPipeline:
        """Build the standard step sequence from a configuration.

        Parameters
        ----------
        config : ProcessingConfig
            Processing parameters.

        Returns
        -------
        PreprocessingPipeline
            Pipeline with steps ``trim``, ``sqrt``, ``smooth``,
            ``baseline`` and ``normalize``.
        """
        mz_min, mz_max = config.trim_range
        return cls(
            [
                ("trim", MzTrimmer(mz_min=mz_min, mz_max=mz_max)),
                ("sqrt", SqrtTransform()),
                ("smooth", SavitzkyGolaySmooth(half_window=config.smoothing_half_window)),
                ("baseline", SNIPBaseline(iterations=config.baseline_iterations)),
                ("normalize", TICNormalizer()),
            ]
        )

    def get_step(self, name: str) -> object:
        """Look up a step by its name.

        Raises
        ------
        KeyError
            If the pipeline has no step called *name*.
        """
        by_name = dict(self.steps)
        if name not in by_name:
            raise KeyError(f"No step named {name!r}; pipeline has {self.step_names}")
        return by_name[name]

    @property
    def step_names(self) -> list[str]:
        """Names of the steps, in execution order."""
        return [step_name for step_name, _step in self.steps]

    def to_dict(self) -> dict:
        """Serialize the pipeline to a dictionary.

        Each step is stored as its transformer's ``to_dict()`` output plus
        a ``step_name`` entry.
        """
        serialized = []
        for step_name, step in self.steps:
            entry = step.to_dict()
            entry["step_name"] = step_name
            serialized.append(entry)
        return {"steps": serialized}

    @classmethod
    def from_dict(cls, d: dict) -> PreprocessingPipeline:
        """Rebuild a pipeline serialized with :meth:`to_dict`.

        Raises
        ------
        KeyError
            If a step names a transformer missing from the registry.
        """
        rebuilt = []
        for entry in d["steps"]:
            params = dict(entry)
            step_name = params.pop("step_name")
            transformer_cls = TRANSFORMER_REGISTRY[params.pop("name")]
            rebuilt.append((step_name, transformer_cls(**params)))
        return cls(rebuilt)

    def __repr__(self) -> str:
        inner = ", ".join(f"{name}={step!r}" for name, step in self.steps)
        return f"PreprocessingPipeline({inner})"

    def __len__(self) -> int:
        return len(self.steps)
