"""Encode coordinate tuples as factor levels and decode them back.

A level name is the parenthesised, comma-separated list of coordinates,
e.g. ``"(1.0,2.5)"``. Numbers are written with Python's shortest
round-trip ``repr`` so decoding gives back bit-identical floats.
"""

from __future__ import annotations

import math
import re
from typing import Iterable

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from pycovstruct._exceptions import InvalidCoordinateEncoding

# decimal or exponent notation as written by repr(float); no "_", "inf" or "nan"
_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def _as_coord_matrix(coords) -> NDArray:
    coords = np.asarray(coords, dtype=np.float64)
    if coords.ndim == 1:
        coords = coords.reshape(-1, 1)
    if coords.ndim != 2 or coords.shape[1] == 0:
        raise ValueError(f"coords must have shape (m, d) with d >= 1, got {coords.shape}")
    if not np.all(np.isfinite(coords)):
        raise ValueError("Coordinates must be finite")
    return coords


def encode_coords(coords) -> list[str]:
    """Encode each coordinate row as a level name.

    Parameters
    ----------
    coords : array_like, shape (m, d) or (m,)
        Finite coordinates, one row per level.

    Returns
    -------
    levels : list of str

    Examples
    --------
    >>> encode_coords([[1, 2], [0.5, -3]])
    ['(1.0,2.0)', '(0.5,-3.0)']
    """
    coords = _as_coord_matrix(coords)
    return ["(" + ",".join(repr(float(x)) for x in row) + ")" for row in coords]


def _decode_one(level) -> list[float]:
    if not isinstance(level, str):
        raise InvalidCoordinateEncoding(
            f"Level must be a string, got {type(level).__name__}", level=level
        )
    text = level.strip()
    if len(text) < 3 or text[0] != "(" or text[-1] != ")":
        raise InvalidCoordinateEncoding(
            f"Level {level!r} is not of the form '(x1,x2,...)'", level=level
        )
    values = []
    for part in text[1:-1].split(","):
        part = part.strip()
        if not _NUMBER.fullmatch(part):
            raise InvalidCoordinateEncoding(
                f"Level {level!r} has a non-numeric coordinate {part!r}", level=level
            )
        value = float(part)
        if not math.isfinite(value):
            raise InvalidCoordinateEncoding(
                f"Level {level!r} has a non-finite coordinate", level=level
            )
        values.append(value)
    return values


def decode_levels(levels: Iterable[str]) -> NDArray:
    """Decode level names into a coordinate matrix.

    Parameters
    ----------
    levels : iterable of str

    Returns
    -------
    coords : ndarray, shape (m, d)

    Raises
    ------
    InvalidCoordinateEncoding
        If a level is malformed or levels disagree on the number of
        coordinates.

    Examples
    --------
    >>> decode_levels(["(1.0,2.0)", "(0.5,-3.0)"])
    array([[ 1. ,  2. ],
           [ 0.5, -3. ]])
    """
    levels = list(levels)
    rows = [_decode_one(lv) for lv in levels]
    if not rows:
        raise InvalidCoordinateEncoding("No levels to decode")
    d = len(rows[0])
    for lv, row in zip(levels, rows):
        if len(row) != d:
            raise InvalidCoordinateEncoding(
                f"Levels mix {d} and {len(row)} coordinates", level=lv
            )
    return np.array(rows, dtype=np.float64)


class CoordinateFactor:
    """Categorical grouping factor whose levels are coordinate tuples.

    Categories are ordered by coordinate (first column first); that order
    is the order of the random-effect dimension for spatial and temporal
    structures.

    Parameters
    ----------
    values : pandas.Categorical
        Observations, with categories that decode to coordinates.
    """

    def __init__(self, values: pd.Categorical):
        if not isinstance(values, pd.Categorical):
            values = pd.Categorical(values)
        self._coords = decode_levels(list(values.categories))
        self._coords.flags.writeable = False
        self.values = values

    @classmethod
    def from_coords(cls, *columns) -> "CoordinateFactor":
        """Build from one coordinate column per dimension (see :func:`num_factor`)."""
        return num_factor(*columns)

    @property
    def levels(self) -> list[str]:
        return list(self.values.categories)

    @property
    def codes(self) -> NDArray:
        """Level index of each observation."""
        return np.asarray(self.values.codes)

    @property
    def n_levels(self) -> int:
        return len(self.values.categories)

    @property
    def ndim(self) -> int:
        return self._coords.shape[1]

    def coords(self) -> NDArray:
        """Coordinates of the levels, shape (n_levels, ndim), read-only."""
        return self._coords

    def observation_coords(self) -> NDArray:
        """Coordinates of each observation, shape (len(self), ndim)."""
        return self._coords[self.codes]

    def to_series(self, name: str | None = None) -> pd.Series:
        return pd.Series(self.values, name=name)

    def __len__(self) -> int:
        return len(self.values)

    def __repr__(self) -> str:
        return f"CoordinateFactor(n_obs={len(self)}, n_levels={self.n_levels}, ndim={self.ndim})"


def num_factor(*columns) -> CoordinateFactor:
    """Combine coordinate columns into a coordinate factor.

    Parameters
    ----------
    *columns : array_like
        One 1-D array per coordinate dimension, all the same length (one
        entry per observation).

    Returns
    -------
    factor : CoordinateFactor

    Examples
    --------
    >>> f = num_factor([2, 1, 2], [0, 5, 0])
    >>> f.levels
    ['(1.0,5.0)', '(2.0,0.0)']
    >>> f.codes
    array([1, 0, 1], dtype=int8)
    """
    if not columns:
        raise ValueError("num_factor needs at least one coordinate column")
    cols = [np.ravel(np.asarray(c, dtype=np.float64)) for c in columns]
    lengths = {len(c) for c in cols}
    if len(lengths) != 1:
        raise ValueError(f"Coordinate columns differ in length: {sorted(lengths)}")
    # + 0.0 maps -0.0 to 0.0 so equal coordinates share one level name
    coords = _as_coord_matrix(np.column_stack(cols)) + 0.0
    unique = np.unique(coords, axis=0)
    categories = encode_coords(unique)
    values = pd.Categorical(encode_coords(coords), categories=categories, ordered=True)
    return CoordinateFactor(values)
