"""Tests for natural-parameter to theta conversion."""

from __future__ import annotations

import numpy as np
import pytest

from pycovstruct import (
    CovStructControl,
    CovStructSpec,
    DimensionMismatch,
    build_cov,
    to_theta,
)


class TestToTheta:
    def test_ar1(self):
        theta = to_theta("ar1", 2.0, 0.7)
        np.testing.assert_allclose(theta, [np.log(2.0), -np.log(0.7)])

    def test_ar1_broadcast_sd(self):
        np.testing.assert_allclose(to_theta("ar1", [1.5, 1.5, 1.5], 0.3, n=3)[0], np.log(1.5))

    def test_homogeneous_sd_must_be_shared(self):
        with pytest.raises(ValueError):
            to_theta("exp", [1.0, 2.0], 0.5)

    def test_matern(self):
        np.testing.assert_allclose(to_theta("mat", 1.0, 2.0, 1.5), [0.0, np.log(2.0), np.log(1.5)])

    @pytest.mark.parametrize("kind", ["ou", "exp", "gau"])
    def test_rate(self, kind):
        np.testing.assert_allclose(to_theta(kind, 1.0, 0.25), [0.0, np.log(0.25)])

    def test_diag(self):
        np.testing.assert_allclose(to_theta("diag", [1.0, np.e]), [0.0, 1.0])

    def test_cs_round_trip(self):
        spec = CovStructSpec("cs", 3)
        res = build_cov(to_theta("cs", [1.0, 2.0, 0.5], -0.3), spec)
        np.testing.assert_allclose(res.sd, [1.0, 2.0, 0.5])
        np.testing.assert_allclose(res.corr[0, 2], -0.3, rtol=1e-12)

    def test_toep_round_trip(self):
        spec = CovStructSpec("toep", 4)
        res = build_cov(to_theta("toep", np.ones(4), [0.5, 0.25, 0.1]), spec)
        np.testing.assert_allclose(np.diagonal(res.corr, 1), np.full(3, 0.5))
        np.testing.assert_allclose(np.diagonal(res.corr, 3), [0.1])

    @pytest.mark.parametrize("order", ["row", "column"])
    def test_us_round_trip(self, corr_4x4, order):
        theta = to_theta("us", [1.0, 2.0, 3.0, 4.0], corr_4x4, fill_order=order)
        res = build_cov(theta, CovStructSpec("us", 4), control=CovStructControl(us_fill_order=order))
        np.testing.assert_allclose(res.corr, corr_4x4, atol=1e-12)

    def test_us_shape_checked(self, corr_3x3):
        with pytest.raises(DimensionMismatch):
            to_theta("us", np.ones(4), corr_3x3)

    def test_n_checked(self):
        with pytest.raises(DimensionMismatch):
            to_theta("cs", np.ones(3), 0.1, n=4)

    def test_parameter_count(self):
        with pytest.raises(TypeError):
            to_theta("mat", 1.0, 2.0)
        with pytest.raises(TypeError):
            to_theta("diag", [1.0], 0.5)

    @pytest.mark.parametrize("args", [("ar1", 0.0, 0.5), ("ar1", 1.0, -0.5), ("mat", 1.0, 1.0, 0.0)])
    def test_non_positive(self, args):
        with pytest.raises(ValueError):
            to_theta(*args)

    def test_correlation_out_of_range(self):
        with pytest.raises(ValueError):
            to_theta("cs", np.ones(2), 1.0)
