"""Tests for structure kinds and the parameter-count oracle."""

from __future__ import annotations

import numpy as np
import pytest

from pycovstruct import DimensionMismatch
from pycovstruct.structures import CovKind, check_theta, n_theta, requires_coordinates


class TestCovKindParse:
    @pytest.mark.parametrize("tag", ["us", "toep", "cs", "diag", "ar1", "ou", "exp", "gau", "mat"])
    def test_short_tags(self, tag):
        assert CovKind.parse(tag).value == tag

    def test_case_insensitive(self):
        assert CovKind.parse("AR1") is CovKind.AR1
        assert CovKind.parse(" Toep ") is CovKind.TOEP

    @pytest.mark.parametrize(
        "alias, kind",
        [
            ("unstructured", CovKind.US),
            ("toeplitz", CovKind.TOEP),
            ("compound_symmetry", CovKind.CS),
            ("compound-symmetry", CovKind.CS),
            ("diagonal", CovKind.DIAG),
            ("ornstein_uhlenbeck", CovKind.OU),
            ("exponential", CovKind.EXP),
            ("gaussian", CovKind.GAU),
            ("matern", CovKind.MAT),
        ],
    )
    def test_aliases(self, alias, kind):
        assert CovKind.parse(alias) is kind

    def test_member_passthrough(self):
        assert CovKind.parse(CovKind.MAT) is CovKind.MAT

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown covariance structure"):
            CovKind.parse("spherical")

    def test_non_string(self):
        with pytest.raises(ValueError):
            CovKind.parse(3)

    def test_heterogeneous(self):
        assert CovKind.US.heterogeneous
        assert CovKind.DIAG.heterogeneous
        assert not CovKind.AR1.heterogeneous
        assert not CovKind.MAT.heterogeneous


class TestNTheta:
    @pytest.mark.parametrize("n", [1, 2, 3, 6, 10])
    def test_closed_forms(self, n):
        assert n_theta("us", n) == n * (n + 1) // 2
        assert n_theta("toep", n) == 2 * n - 1
        assert n_theta("cs", n) == n + 1
        assert n_theta("diag", n) == n
        assert n_theta("ar1", n) == 2
        assert n_theta("ou", n) == 2
        assert n_theta("exp", n) == 2
        assert n_theta("gau", n) == 2
        assert n_theta("mat", n) == 3

    @pytest.mark.parametrize("n", [0, -1, 2.5])
    def test_invalid_n(self, n):
        with pytest.raises(ValueError):
            n_theta("us", n)

    def test_requires_coordinates(self):
        assert [k.value for k in CovKind if requires_coordinates(k)] == ["ou", "exp", "gau", "mat"]


class TestCheckTheta:
    @pytest.mark.parametrize("kind", list(CovKind))
    @pytest.mark.parametrize("n", [1, 3, 5])
    def test_exact_length_accepted(self, kind, n):
        theta = check_theta(np.zeros(n_theta(kind, n)), kind, n)
        assert theta.dtype == np.float64
        assert theta.shape == (n_theta(kind, n),)

    @pytest.mark.parametrize("kind", list(CovKind))
    @pytest.mark.parametrize("delta", [-1, 1])
    def test_wrong_length_rejected(self, kind, delta):
        n = 4
        expected = n_theta(kind, n)
        with pytest.raises(DimensionMismatch) as excinfo:
            check_theta(np.zeros(expected + delta), kind, n)
        assert excinfo.value.expected == expected
        assert excinfo.value.actual == expected + delta
        assert excinfo.value.kind == kind.value

    def test_two_dimensional_rejected(self):
        with pytest.raises(DimensionMismatch):
            check_theta(np.zeros((1, 2)), "ar1", 3)

    def test_dimension_mismatch_is_value_error(self):
        with pytest.raises(ValueError):
            check_theta([0.0], "ar1", 3)

    def test_returns_copy(self):
        theta = np.zeros(2)
        out = check_theta(theta, "ar1", 3)
        out[0] = 5.0
        assert theta[0] == 0.0
