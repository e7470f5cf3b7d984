"""Tests for coordinate factors and level-name encoding."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from pycovstruct import (
    CoordinateFactor,
    InvalidCoordinateEncoding,
    decode_levels,
    encode_coords,
    num_factor,
)


class TestEncodeDecode:
    def test_encode(self):
        assert encode_coords([[1, 2], [0.5, -3]]) == ["(1.0,2.0)", "(0.5,-3.0)"]

    def test_encode_1d(self):
        assert encode_coords([0.25, 4]) == ["(0.25)", "(4.0)"]

    def test_exact_floats_survive(self):
        coords = np.array([[0.1, 1.0 / 3.0], [np.pi, -1e-300]])
        np.testing.assert_array_equal(decode_levels(encode_coords(coords)), coords)

    def test_round_trip_is_bitwise(self, rng):
        m = 500
        mantissa = rng.uniform(1.0, 10.0, size=(m, 3))
        exponent = rng.integers(-300, 301, size=(m, 3))
        sign = rng.choice([-1.0, 1.0], size=(m, 3))
        coords = sign * mantissa * 10.0 ** exponent.astype(float)
        edge = np.array([
            [5e-324, -2.2e-310, -0.0],
            [np.finfo(float).max, -np.finfo(float).tiny, 0.0],
            [0.1, 1.0 / 3.0, -1e-300],
        ])
        coords = np.vstack([coords, edge])
        decoded = decode_levels(encode_coords(coords))
        np.testing.assert_array_equal(decoded.view(np.int64), coords.view(np.int64))

    def test_decode_whitespace(self):
        np.testing.assert_array_equal(decode_levels([" ( 1 , 2.5 ) "]), [[1.0, 2.5]])

    def test_decode_generator(self):
        out = decode_levels(lv for lv in ["(1.0)", "(2.0)"])
        np.testing.assert_array_equal(out, [[1.0], [2.0]])

    def test_encode_rejects_non_finite(self):
        with pytest.raises(ValueError):
            encode_coords([[np.nan, 1.0]])

    @pytest.mark.parametrize(
        "level",
        [
            "1.0,2.0", "(1.0,abc)", "()", "(1.0,2.0", "(inf,0.0)", "(nan)", 3.0,
            "(1_0)", "(0x1p3)", "(\uff11.0)", "(1e999)", "(1.0,,2.0)",
        ],
    )
    def test_malformed(self, level):
        with pytest.raises(InvalidCoordinateEncoding) as info:
            decode_levels([level])
        assert info.value.level == level

    def test_mixed_dimensions(self):
        with pytest.raises(InvalidCoordinateEncoding):
            decode_levels(["(1.0,2.0)", "(3.0)"])

    def test_empty(self):
        with pytest.raises(InvalidCoordinateEncoding):
            decode_levels([])

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            decode_levels(["oops"])


class TestNumFactor:
    def test_levels_sorted_and_deduplicated(self):
        f = num_factor([2, 1, 2, 1], [0, 5, 0, 5])
        assert f.levels == ["(1.0,5.0)", "(2.0,0.0)"]
        np.testing.assert_array_equal(f.codes, [1, 0, 1, 0])
        assert f.n_levels == 2
        assert f.ndim == 2
        assert len(f) == 4

    def test_sorted_numerically(self):
        f = num_factor([10.0, 2.0, -1.0])
        np.testing.assert_array_equal(f.coords()[:, 0], [-1.0, 2.0, 10.0])

    def test_negative_zero_merges(self):
        f = num_factor([0.0, -0.0, 1.0])
        assert f.levels == ["(0.0)", "(1.0)"]
        np.testing.assert_array_equal(f.codes[:2], [0, 0])

    def test_coords_read_only(self):
        f = num_factor([1.0, 2.0])
        with pytest.raises(ValueError):
            f.coords()[0, 0] = 5.0

    def test_observation_coords(self):
        f = num_factor([3.0, 1.0, 3.0], [0.5, 0.5, 0.5])
        np.testing.assert_array_equal(
            f.observation_coords(), [[3.0, 0.5], [1.0, 0.5], [3.0, 0.5]]
        )

    def test_ordered_categorical(self):
        s = num_factor([1.0, 2.0]).to_series(name="site")
        assert isinstance(s.dtype, pd.CategoricalDtype)
        assert s.cat.ordered
        assert s.name == "site"

    def test_unequal_lengths(self):
        with pytest.raises(ValueError):
            num_factor([1.0, 2.0], [1.0])

    def test_no_columns(self):
        with pytest.raises(ValueError):
            num_factor()

    def test_non_finite(self):
        with pytest.raises(ValueError):
            num_factor([1.0, np.inf])

    def test_from_coords(self):
        f = CoordinateFactor.from_coords([1.0, 0.0])
        assert f.levels == num_factor([1.0, 0.0]).levels


class TestCoordinateFactor:
    def test_from_categorical(self):
        values = pd.Categorical(["(1.0,2.0)", "(0.0,0.0)", "(1.0,2.0)"])
        f = CoordinateFactor(values)
        np.testing.assert_array_equal(f.coords(), decode_levels(f.levels))

    def test_from_plain_list(self):
        f = CoordinateFactor(["(2.0)", "(1.0)"])
        assert f.n_levels == 2

    def test_bad_category(self):
        with pytest.raises(InvalidCoordinateEncoding):
            CoordinateFactor(pd.Categorical(["a", "b"]))

    def test_repr(self):
        assert "n_levels=2" in repr(num_factor([1.0, 2.0, 2.0]))
