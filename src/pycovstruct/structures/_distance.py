"""Pairwise lags and distances between random-effect levels."""

from __future__ import annotations

from numpy.typing import NDArray

from pycovstruct.backend._array_api import get_backend


def lag_matrix(n: int, *, xp=None) -> NDArray:
    """Integer lags ``|i - j|`` between positions ``0..n-1``."""
    if xp is None:
        xp = get_backend()
    idx = xp.arange(n, dtype=xp.float64)
    return xp.abs(xp.reshape(idx, (n, 1)) - xp.reshape(idx, (1, n)))


def pairwise_distance(coords: NDArray, *, squared: bool = False, xp=None) -> NDArray:
    """Euclidean distance matrix between coordinate rows.

    Parameters
    ----------
    coords : ndarray, shape (n, d)
    squared : bool
        Return squared distances.
    xp : backend, optional

    Returns
    -------
    dist : ndarray, shape (n, n)
    """
    if xp is None:
        xp = get_backend()
    coords = xp.array(coords, dtype=xp.float64)
    n, d = coords.shape[0], coords.shape[1]
    diff = xp.reshape(coords, (n, 1, d)) - xp.reshape(coords, (1, n, d))
    sq = xp.sum(diff * diff, axis=2)
    if squared:
        return sq
    return xp.sqrt(sq)
