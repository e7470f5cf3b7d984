"""Correlation matrices with one parameter per band: Toeplitz, compound
symmetry and diagonal.

Bands are squashed independently into (-1, 1). Nothing ties them together,
so a Toeplitz or compound-symmetry matrix can fail to be positive
semi-definite; callers get the matrix back and decide what to do with it.
"""

from __future__ import annotations

from numpy.typing import NDArray

from pycovstruct.backend._array_api import array_namespace, get_backend
from pycovstruct.structures._squash import squash
from pycovstruct.vecup._vec_ops import matdupdiagonefull, upper_indices


def toep_corr(theta_bands: NDArray, n: int, *, xp=None) -> NDArray:
    """Toeplitz correlation: lag k takes ``squash(theta_bands[k-1])``.

    Parameters
    ----------
    theta_bands : ndarray, shape (n-1,)
        One unconstrained parameter per off-diagonal band.
    n : int
        Matrix dimension.
    xp : backend, optional

    Returns
    -------
    corr : ndarray, shape (n, n)
    """
    if xp is None:
        xp = array_namespace(theta_bands)
    bands = squash(theta_bands, xp=xp)
    idx = upper_indices(n)
    # row-based strict upper triangle, entry (i, j) on band j - i
    r = xp.zeros((len(idx),), dtype=xp.float64)
    for k, (i, j) in enumerate(idx):
        r[k] = bands[j - i - 1]
    return matdupdiagonefull(r, xp=xp)


def cs_corr(theta_rho: NDArray, n: int, *, xp=None) -> NDArray:
    """Compound-symmetry correlation: one shared off-diagonal value.

    ``rho = squash(theta_rho[0])``. The result is positive semi-definite
    iff ``rho >= -1/(n-1)``; see :func:`cs_lower_bound`.
    """
    if xp is None:
        xp = array_namespace(theta_rho)
    rho = squash(xp.reshape(xp.array(theta_rho, dtype=xp.float64), (1,)), xp=xp)[0]
    ones = xp.ones((n,), dtype=xp.float64)
    return (1.0 - rho) * xp.eye(n, dtype=xp.float64) + rho * xp.outer(ones, ones)


def cs_lower_bound(n: int) -> float:
    """Smallest common correlation giving a PSD n x n compound-symmetry matrix.

    The eigenvalues of (1-rho) I + rho 11' are 1 + (n-1) rho (once) and
    1 - rho (n-1 times).
    """
    if n < 2:
        return -1.0
    return -1.0 / (n - 1)


def diag_corr(n: int, *, xp=None) -> NDArray:
    """Identity correlation for independent levels."""
    if xp is None:
        xp = get_backend()
    return xp.eye(n, dtype=xp.float64)
