"""Structure kinds and the parameter-count oracle."""

from __future__ import annotations

from enum import Enum

import numpy as np
from numpy.typing import NDArray

from pycovstruct._exceptions import DimensionMismatch


class CovKind(str, Enum):
    """Closed set of covariance structures, valued by their formula tag."""

    US = "us"
    TOEP = "toep"
    CS = "cs"
    DIAG = "diag"
    AR1 = "ar1"
    OU = "ou"
    EXP = "exp"
    GAU = "gau"
    MAT = "mat"

    @classmethod
    def parse(cls, tag: "CovKind | str") -> "CovKind":
        """Resolve a member, a short tag or a long alias to a CovKind.

        Examples
        --------
        >>> CovKind.parse("AR1")
        <CovKind.AR1: 'ar1'>
        >>> CovKind.parse("compound_symmetry")
        <CovKind.CS: 'cs'>
        """
        if isinstance(tag, cls):
            return tag
        if not isinstance(tag, str):
            raise ValueError(f"Unknown covariance structure: {tag!r}")
        key = tag.strip().lower().replace("-", "_").replace(" ", "_")
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            valid = ", ".join(repr(k.value) for k in cls)
            raise ValueError(
                f"Unknown covariance structure: {tag!r}. Use one of {valid}."
            ) from None

    @property
    def heterogeneous(self) -> bool:
        """True if every level carries its own standard deviation."""
        return self in _HETEROGENEOUS


_ALIASES = {
    "unstructured": "us",
    "toeplitz": "toep",
    "compound_symmetry": "cs",
    "compsymm": "cs",
    "diagonal": "diag",
    "ornstein_uhlenbeck": "ou",
    "exponential": "exp",
    "gaussian": "gau",
    "matern": "mat",
}

_HETEROGENEOUS = frozenset({CovKind.US, CovKind.TOEP, CovKind.CS, CovKind.DIAG})
_COORDINATE_KINDS = frozenset({CovKind.OU, CovKind.EXP, CovKind.GAU, CovKind.MAT})


def n_theta(kind: CovKind | str, n: int) -> int:
    """Number of unconstrained parameters for a structure of dimension n.

    Parameters
    ----------
    kind : CovKind or str
        Structure kind or tag.
    n : int
        Number of random-effect levels within a group.

    Returns
    -------
    count : int

    Examples
    --------
    >>> n_theta("us", 3)
    6
    >>> n_theta("toep", 4)
    7
    """
    kind = CovKind.parse(kind)
    if int(n) != n or n < 1:
        raise ValueError(f"Dimension n must be a positive integer, got {n!r}")
    n = int(n)
    if kind is CovKind.US:
        return n * (n + 1) // 2
    if kind is CovKind.TOEP:
        return 2 * n - 1
    if kind is CovKind.CS:
        return n + 1
    if kind is CovKind.DIAG:
        return n
    if kind is CovKind.MAT:
        return 3
    # ar1, ou, exp, gau
    return 2


def requires_coordinates(kind: CovKind | str) -> bool:
    """True for structures whose correlation depends on level coordinates."""
    return CovKind.parse(kind) in _COORDINATE_KINDS


def check_theta(theta, kind: CovKind | str, n: int) -> NDArray:
    """Validate a parameter vector's length for (kind, n).

    Returns
    -------
    theta : ndarray, shape (n_theta(kind, n),)
        Float64 copy of the input.

    Raises
    ------
    DimensionMismatch
        If the length differs from :func:`n_theta`.
    """
    kind = CovKind.parse(kind)
    expected = n_theta(kind, n)
    arr = np.array(theta, dtype=np.float64)
    if arr.ndim != 1:
        raise DimensionMismatch(
            f"theta must be 1-dimensional, got shape {arr.shape}",
            kind=kind.value, expected=expected, actual=arr.size,
        )
    if arr.shape[0] != expected:
        raise DimensionMismatch(
            f"{kind.value} structure with n={n} needs {expected} parameters, "
            f"got {arr.shape[0]}",
            kind=kind.value, expected=expected, actual=arr.shape[0],
        )
    return arr
