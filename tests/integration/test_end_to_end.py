"""End-to-end integration tests for group processing and file I/O."""

import numpy as np
import pytest

from maldicompare import ProcessingConfig, Spectrum, process_groups
from maldicompare.io import read_groups, write_result


def _make_spectrum(seed: int = 42, peaks=(5500, 7000, 8500)) -> Spectrum:
    """Synthetic spectrum on 5001 uniform points over 5000-10000 Da."""
    rng = np.random.default_rng(seed)
    mz = np.linspace(5000, 10000, 5001)
    intensity = 300 * np.exp(-(mz - 5000) / 2000)
    for pos in peaks:
        intensity += 2000 * np.exp(-0.5 * ((mz - pos) / 4.0) ** 2)
    intensity += rng.normal(0, 5.0, len(intensity))
    return Spectrum(mz, np.maximum(intensity, 0))


@pytest.mark.slow
class TestEndToEnd:
    """Integration tests combining averaging, processing and detection."""

    def test_two_groups_default_config(self):
        groups = {
            "strain_1": [_make_spectrum(seed) for seed in range(3)],
            "strain_2": [_make_spectrum(seed, peaks=(6000, 9000)) for seed in (10, 11)],
        }
        batch = process_groups(groups, ProcessingConfig())

        assert batch.failures == {}
        for group, result in batch.results.items():
            spectrum = result.spectrum
            assert abs(spectrum.intensity.sum() - 1.0) <= 1e-9
            assert spectrum.mass.min() >= 5000
            assert spectrum.mass.max() <= 10000
            assert len(spectrum) == 5001
            for peak in result.peaks:
                assert 5000 <= peak.mass <= 10000
                assert peak.snr >= 2.0
            masses = [p.mass for p in result.peaks]
            assert masses == sorted(masses)

    def test_two_single_replicate_groups(self):
        """One replicate per group over 5001 points through the default config."""
        groups = {
            "strain_1": [_make_spectrum(1)],
            "strain_2": [_make_spectrum(2, peaks=(6000, 9000))],
        }
        batch = process_groups(groups, ProcessingConfig())

        assert list(batch.results) == ["strain_1", "strain_2"]
        assert batch.failures == {}
        for result in batch.results.values():
            spectrum = result.spectrum
            assert abs(spectrum.intensity.sum() - 1.0) <= 1e-9
            assert not ((spectrum.mass < 5000) | (spectrum.mass > 10000)).any()

    def test_injected_peaks_recovered(self):
        cfg = ProcessingConfig(snr_threshold=5, noise_half_window=150)
        batch = process_groups({"strain_1": [_make_spectrum(s) for s in range(3)]}, cfg)

        peak_mz = np.array([p.mass for p in batch.results["strain_1"].peaks])
        for expected in (5500, 7000, 8500):
            assert np.abs(peak_mz - expected).min() <= 3

    def test_empty_group_alongside_valid(self):
        batch = process_groups({"empty": [], "valid": [_make_spectrum()]})

        assert "empty" not in batch.results
        assert batch.failures["empty"].kind == "InsufficientDataError"
        assert abs(batch.results["valid"].spectrum.intensity.sum() - 1.0) <= 1e-9

    def test_files_to_results(self, tmp_path, write_spectrum):
        base = tmp_path / "spectra"
        for group, seeds in {"strain_a": (1, 2), "strain_b": (3,)}.items():
            (base / group).mkdir(parents=True)
            for seed in seeds:
                write_spectrum(base / group / f"rep{seed}.txt", _make_spectrum(seed))

        groups = read_groups(base)
        batch = process_groups(groups, n_jobs=2)
        written = [write_result(r, tmp_path / "out", g) for g, r in batch.results.items()]

        assert list(batch.results) == ["strain_a", "strain_b"]
        assert all(p.exists() for pair in written for p in pair)
