"""Processing configuration."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path

AVERAGING_METHODS = ("mean", "median", "sum")


@dataclass(frozen=True)
class ProcessingConfig:
    """
    Parameters of the spectrum processing chain.

    A single immutable value handed to the orchestrator and threaded into
    every processing step. Defaults reproduce the standard strain
    comparison setup (sqrt transform, Savitzky-Golay smoothing with a
    half-window of 10, 100 SNIP iterations, TIC normalization, MAD peak
    picking at SNR 2 over 5000-10000 Da).

    Parameters
    ----------
    snr_threshold : float, default=2.0
        Minimum signal-to-noise ratio for a local maximum to be reported
        as a peak. Must be positive.
    smoothing_half_window : int, default=10
        Half-window ``h`` of the Savitzky-Golay filter (window ``2h+1``).
    baseline_iterations : int, default=100
        Number of SNIP clipping iterations.
    trim_range : tuple of (float, float), default=(5000.0, 10000.0)
        Inclusive m/z interval kept for analysis.
    noise_half_window : int or None, default=None
        Half-window of the local MAD noise estimate used for peak
        detection. ``None`` reuses ``smoothing_half_window``.
    averaging_method : str, default="mean"
        How technical replicates are combined: ``"mean"``, ``"median"``
        or ``"sum"``.

    Raises
    ------
    ValueError
        If ``snr_threshold`` is not positive, ``trim_range`` is not an
        increasing pair, or ``averaging_method`` is unknown.

    Notes
    -----
    ``smoothing_half_window`` and ``baseline_iterations`` are validated by
    the steps that use them, so that a bad value is reported per sample
    group instead of aborting a batch.
    """

    snr_threshold: float = 2.0
    smoothing_half_window: int = 10
    baseline_iterations: int = 100
    trim_range: tuple[float, float] = (5000.0, 10000.0)
    noise_half_window: int | None = None
    averaging_method: str = "mean"

    def __post_init__(self):
        if not self.snr_threshold > 0:
            raise ValueError(
                f"snr_threshold must be positive, got {self.snr_threshold}."
            )
        try:
            lo, hi = (float(v) for v in self.trim_range)
        except (TypeError, ValueError):
            raise ValueError(
                f"trim_range must be a pair of numbers, got {self.trim_range!r}."
            ) from None
        if lo >= hi:
            raise ValueError(
                f"trim_range lower bound ({lo}) must be less than upper bound ({hi})."
            )
        object.__setattr__(self, "trim_range", (lo, hi))
        if self.averaging_method not in AVERAGING_METHODS:
            raise ValueError(
                f"averaging_method must be one of {AVERAGING_METHODS}, "
                f"got {self.averaging_method!r}."
            )

    @property
    def peak_half_window(self) -> int:
        """Half-window used for the peak detector's noise estimate."""
        if self.noise_half_window is None:
            return self.smoothing_half_window
        return self.noise_half_window

    def to_dict(self) -> dict:
        """Serialize the configuration to a plain dictionary."""
        d = asdict(self)
        d["trim_range"] = list(self.trim_range)
        return d

    @classmethod
    def from_dict(cls, d: dict) -> ProcessingConfig:
        """
        Build a configuration from a dictionary.

        Raises
        ------
        ValueError
            If the dictionary contains unknown keys.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(d) - known
        if unknown:
            raise ValueError(
                f"Unknown configuration options: {sorted(unknown)}. "
                f"Recognized: {sorted(known)}"
            )
        kwargs = dict(d)
        if "trim_range" in kwargs:
            kwargs["trim_range"] = tuple(kwargs["trim_range"])
        return cls(**kwargs)

    def to_json(self, path: str | Path) -> None:
        """Save the configuration to a JSON file."""
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_json(cls, path: str | Path) -> ProcessingConfig:
        """Load a configuration from a JSON file."""
        with open(path) as f:
            return cls.from_dict(json.load(f))

    @classmethod
    def from_yaml(cls, path: str | Path) -> ProcessingConfig:
        """
        Load a configuration from a YAML file.

        Requires ``pyyaml`` to be installed.
        """
        import yaml

        with open(path) as f:
            return cls.from_dict(yaml.safe_load(f) or {})

    @classmethod
    def from_file(cls, path: str | Path) -> ProcessingConfig:
        """Load a configuration from a ``.json``, ``.yaml`` or ``.yml`` file."""
        if Path(path).suffix in (".yaml", ".yml"):
            return cls.from_yaml(path)
        return cls.from_json(path)

    def to_yaml(self, path: str | Path) -> None:
        """
        Save the configuration to a YAML file.

        Requires ``pyyaml`` to be installed.
        """
        import yaml

        with open(path, "w") as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False)
