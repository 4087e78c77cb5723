"""Unit tests for ProcessingConfig."""

import dataclasses
import json

import pytest

from maldicompare import ProcessingConfig


class TestProcessingConfigDefaults:
    """Tests for default values and validation."""

    def test_defaults(self):
        cfg = ProcessingConfig()
        assert cfg.snr_threshold == 2.0
        assert cfg.smoothing_half_window == 10
        assert cfg.baseline_iterations == 100
        assert cfg.trim_range == (5000.0, 10000.0)
        assert cfg.averaging_method == "mean"

    def test_is_immutable(self):
        cfg = ProcessingConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.snr_threshold = 5.0

    def test_trim_range_coerced_to_float_tuple(self):
        cfg = ProcessingConfig(trim_range=[2000, 20000])
        assert cfg.trim_range == (2000.0, 20000.0)
        assert isinstance(cfg.trim_range, tuple)

    @pytest.mark.parametrize("snr", [0, -1.0])
    def test_non_positive_snr_raises(self, snr):
        with pytest.raises(ValueError, match="snr_threshold must be positive"):
            ProcessingConfig(snr_threshold=snr)

    def test_inverted_trim_range_raises(self):
        with pytest.raises(ValueError, match="must be less than"):
            ProcessingConfig(trim_range=(10000, 5000))

    def test_malformed_trim_range_raises(self):
        with pytest.raises(ValueError, match="pair of numbers"):
            ProcessingConfig(trim_range=(1, 2, 3))

    def test_unknown_averaging_method_raises(self):
        with pytest.raises(ValueError, match="averaging_method"):
            ProcessingConfig(averaging_method="mode")

    def test_iterations_not_validated_eagerly(self):
        """Iteration count is checked by the baseline step, per group."""
        cfg = ProcessingConfig(baseline_iterations=0)
        assert cfg.baseline_iterations == 0

    def test_peak_half_window_defaults_to_smoothing(self):
        assert ProcessingConfig(smoothing_half_window=7).peak_half_window == 7
        cfg = ProcessingConfig(smoothing_half_window=7, noise_half_window=50)
        assert cfg.peak_half_window == 50


class TestProcessingConfigSerialization:
    """Tests for dict/JSON/YAML serialization."""

    def test_dict_roundtrip(self):
        cfg = ProcessingConfig(snr_threshold=3.5, trim_range=(2000, 20000))
        assert ProcessingConfig.from_dict(cfg.to_dict()) == cfg

    def test_to_dict_is_json_compatible(self):
        d = ProcessingConfig().to_dict()
        assert d["trim_range"] == [5000.0, 10000.0]
        json.dumps(d)

    def test_from_dict_partial(self):
        cfg = ProcessingConfig.from_dict({"baseline_iterations": 40})
        assert cfg.baseline_iterations == 40
        assert cfg.snr_threshold == 2.0

    def test_from_dict_unknown_key_raises(self):
        with pytest.raises(ValueError, match="Unknown configuration options"):
            ProcessingConfig.from_dict({"halfWindowSize": 10})

    def test_json_roundtrip(self, tmp_path):
        path = tmp_path / "config.json"
        cfg = ProcessingConfig(smoothing_half_window=5)
        cfg.to_json(path)
        assert ProcessingConfig.from_file(path) == cfg

    def test_yaml_roundtrip(self, tmp_path):
        pytest.importorskip("yaml")
        path = tmp_path / "config.yaml"
        cfg = ProcessingConfig(snr_threshold=4.0, noise_half_window=25)
        cfg.to_yaml(path)
        assert ProcessingConfig.from_file(path) == cfg

    def test_from_yaml_file(self, tmp_path):
        pytest.importorskip("yaml")
        path = tmp_path / "config.yml"
        path.write_text("snr_threshold: 3\ntrim_range: [4000, 12000]\n")
        cfg = ProcessingConfig.from_yaml(path)
        assert cfg.snr_threshold == 3
        assert cfg.trim_range == (4000.0, 12000.0)
