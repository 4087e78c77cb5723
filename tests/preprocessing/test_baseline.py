"""Unit tests for the SNIP baseline kernel."""

import numpy as np
import pytest

from maldicompare import InvalidIterationCountError
from maldicompare.preprocessing import snip_baseline
from maldicompare.preprocessing.baseline import inverse_lls, lls


def _peak_and_plateau(n=1000):
    """Zero background with a sharp peak at 100 and a broad plateau 300-700."""
    x = np.arange(n, dtype=float)
    y = 100.0 * np.exp(-0.5 * ((x - 100) / 2.0) ** 2)
    y[300:701] += 50.0
    return y


class TestLLS:
    """Tests for the log-log-square-root operator."""

    def test_inverse_roundtrip(self):
        y = np.array([0.0, 1.0, 10.0, 1e4, 1e6])
        np.testing.assert_allclose(inverse_lls(lls(y)), y, rtol=1e-9, atol=1e-9)

    def test_small_negative_follows_formula(self):
        y = np.array([-0.5, -0.99])
        expected = np.log(np.log(np.sqrt(y + 1) + 1) + 1)
        np.testing.assert_allclose(lls(y), expected)
        np.testing.assert_allclose(inverse_lls(lls(y)), y, atol=1e-9)

    def test_below_minus_one_clamped(self):
        assert lls(np.array([-5.0]))[0] == lls(np.array([-1.0]))[0] == 0.0


class TestSnipBaseline:
    """Tests for snip_baseline."""

    def test_baseline_below_signal(self, synthetic_spectrum):
        y = synthetic_spectrum.intensity
        bkg = snip_baseline(y, 50)
        assert np.all(bkg <= y + 1e-9)

    def test_constant_signal_is_all_baseline(self):
        y = np.full(300, 42.0)
        np.testing.assert_allclose(snip_baseline(y, 20), y, rtol=1e-9)

    def test_all_zero(self):
        np.testing.assert_allclose(snip_baseline(np.zeros(100), 10), 0, atol=1e-12)

    def test_broad_plateau_reduced_more_than_sharp_peak(self):
        """Clipping erodes the plateau from its edges inwards; the narrow peak is kept."""
        y = _peak_and_plateau()
        residual = y - snip_baseline(y, 40)

        peak_reduction = (y[100] - residual[100]) / y[100]
        plateau_reduction = (y[500] - residual[500]) / y[500]
        assert peak_reduction < 0.01
        assert plateau_reduction > 0.2
        assert peak_reduction < plateau_reduction

    def test_more_iterations_erode_wider_features(self):
        y = _peak_and_plateau()
        narrow = snip_baseline(y, 40)
        wide = snip_baseline(y, 300)
        # At k=300 the plateau centre is clipped towards the zero background
        assert wide[500] < narrow[500]

    def test_edges_left_untouched_in_first_pass(self):
        """Points without neighbours on both sides keep their value."""
        y = np.array([5.0, 0.0, 0.0, 0.0, 5.0])
        bkg = snip_baseline(y, 1)
        assert bkg[0] == pytest.approx(5.0)
        assert bkg[-1] == pytest.approx(5.0)

    def test_iterations_beyond_length_are_skipped(self):
        y = np.array([1.0, 10.0, 1.0])
        bkg = snip_baseline(y, 100)
        assert bkg[1] == pytest.approx(1.0)

    def test_decreasing_order(self):
        y = _peak_and_plateau()
        bkg = snip_baseline(y, 40, decreasing=True)
        assert bkg.shape == y.shape
        assert np.all(bkg <= y + 1e-9)

    def test_does_not_modify_input(self):
        y = _peak_and_plateau()
        original = y.copy()
        snip_baseline(y, 40)
        np.testing.assert_array_equal(y, original)

    @pytest.mark.parametrize("k", [0, -3])
    def test_invalid_iterations_raise(self, k):
        with pytest.raises(InvalidIterationCountError, match="at least 1"):
            snip_baseline(np.ones(10), k)
