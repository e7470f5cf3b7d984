"""Tests for AR(1), Ornstein-Uhlenbeck, exponential and Gaussian correlations."""

from __future__ import annotations

import numpy as np
import pytest

from pycovstruct.structures import (
    ar1_corr,
    exp_corr,
    gau_corr,
    lag_matrix,
    ou_corr,
    pairwise_distance,
)


class TestDistances:
    def test_lag_matrix(self):
        np.testing.assert_array_equal(
            lag_matrix(3), [[0.0, 1.0, 2.0], [1.0, 0.0, 1.0], [2.0, 1.0, 0.0]]
        )

    def test_pairwise_distance(self):
        coords = np.array([[0.0, 0.0], [3.0, 4.0]])
        np.testing.assert_allclose(pairwise_distance(coords), [[0.0, 5.0], [5.0, 0.0]])
        np.testing.assert_allclose(
            pairwise_distance(coords, squared=True), [[0.0, 25.0], [25.0, 0.0]]
        )


class TestAR1:
    def test_scenario_n6(self):
        corr = ar1_corr(np.log(1 / 0.7), 6)
        np.testing.assert_allclose(corr[0, 1], 0.7, rtol=1e-12)
        np.testing.assert_allclose(corr[0, 2], 0.49, rtol=1e-12)
        np.testing.assert_allclose(corr[0, 5], 0.16807, rtol=1e-12)
        np.testing.assert_allclose(corr[5, 0], corr[0, 5])
        np.testing.assert_array_equal(np.diag(corr), np.ones(6))

    def test_positive_decay_in_unit_interval(self):
        corr = ar1_corr(0.01, 5)
        off = corr[~np.eye(5, dtype=bool)]
        assert np.all(off > 0) and np.all(off < 1)

    def test_nonpositive_decay_breaks_psd(self):
        corr = ar1_corr(-0.2, 4)
        assert corr[0, 1] > 1.0
        assert np.linalg.eigvalsh(corr)[0] < 0


class TestOrnsteinUhlenbeck:
    @pytest.mark.parametrize("theta_ar1", [0.05, np.log(1 / 0.7), 2.0])
    def test_matches_ar1_on_integer_times(self, theta_ar1):
        times = np.arange(6.0)
        np.testing.assert_allclose(
            ou_corr(np.log(theta_ar1), times), ar1_corr(theta_ar1, 6), rtol=1e-12
        )

    def test_irregular_times(self):
        times = np.array([0.0, 0.5, 2.0])
        rate = 0.8
        corr = ou_corr(np.log(rate), times)
        np.testing.assert_allclose(corr[0, 1], np.exp(-rate * 0.5))
        np.testing.assert_allclose(corr[1, 2], np.exp(-rate * 1.5))
        assert np.all(corr > 0)


class TestSpatial:
    def test_exponential(self, grid_coords):
        rate = 1.3
        corr = exp_corr(np.log(rate), grid_coords)
        d = np.linalg.norm(grid_coords[0] - grid_coords[4])
        np.testing.assert_allclose(corr[0, 4], np.exp(-rate * d))
        assert np.linalg.eigvalsh(corr)[0] > 0

    def test_exponential_1d_equals_ou(self):
        times = np.array([0.0, 1.2, 3.5, 4.0])
        np.testing.assert_allclose(
            exp_corr(0.3, times.reshape(-1, 1)), ou_corr(0.3, times), rtol=1e-14
        )

    def test_gaussian(self, grid_coords):
        rate = 0.7
        corr = gau_corr(np.log(rate), grid_coords)
        d2 = np.sum((grid_coords[1] - grid_coords[5]) ** 2)
        np.testing.assert_allclose(corr[1, 5], np.exp(-rate * d2))
        np.testing.assert_array_equal(np.diag(corr), np.ones(6))

    def test_gaussian_flatter_near_origin(self):
        coords = np.array([[0.0], [0.1]])
        assert gau_corr(0.0, coords)[0, 1] > exp_corr(0.0, coords)[0, 1]
