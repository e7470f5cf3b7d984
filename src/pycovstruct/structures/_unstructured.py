"""Unstructured correlation via a unit-diagonal Cholesky-style factor.

The ``n*(n-1)//2`` correlation parameters fill the strict upper triangle of
a unit upper-triangular matrix C. The Gram matrix L = C'C is positive
semi-definite for any real input, so rescaling it to unit diagonal always
yields a valid correlation matrix; no constrained optimization over the
correlation manifold is needed.
"""

from __future__ import annotations

import numpy as np
import scipy.linalg
from numpy.typing import NDArray

from pycovstruct.backend._array_api import array_namespace
from pycovstruct.utils._validation import check_square
from pycovstruct.vecup._vec_ops import FillOrder, fill_unit_upper, vecndup


def us_corr(
    theta_corr: NDArray, n: int, *, fill_order: FillOrder = "row", xp=None
) -> NDArray:
    """Build an unstructured correlation matrix from unconstrained parameters.

    Parameters
    ----------
    theta_corr : ndarray, shape (n*(n-1)//2,)
        Correlation parameters (theta without the leading n log-sds).
    n : int
        Dimension of the correlation matrix.
    fill_order : {"row", "column"}
        Order in which ``theta_corr`` fills the strict upper triangle of C.
    xp : backend, optional
        Array backend.

    Returns
    -------
    corr : ndarray, shape (n, n)
        Symmetric correlation matrix with exactly unit diagonal.

    Examples
    --------
    >>> us_corr(np.zeros(3), 3)
    array([[1., 0., 0.],
           [0., 1., 0.],
           [0., 0., 1.]])
    >>> us_corr(np.array([1.0]), 2)   # 1 / sqrt(2)
    array([[1.        , 0.70710678],
           [0.70710678, 1.        ]])
    """
    if xp is None:
        xp = array_namespace(theta_corr)

    C = fill_unit_upper(theta_corr, n, order=fill_order, xp=xp)
    L = xp.matmul(xp.transpose(C), C)

    # diag(L) >= 1 because C has a unit diagonal, so the scale is finite
    scale = 1.0 / xp.sqrt(xp.diagonal(L))
    corr = L * xp.outer(scale, scale)

    # Exact symmetry and unit diagonal
    corr = 0.5 * (corr + xp.transpose(corr))
    for i in range(n):
        corr[i, i] = 1.0
    return corr


def us_theta(corr: NDArray, *, fill_order: FillOrder = "row") -> NDArray:
    """Recover unstructured correlation parameters from a correlation matrix.

    Inverse of :func:`us_corr` for positive-definite input: with the upper
    Cholesky factor U of ``corr``, C = U diag(1/diag(U)) is unit
    upper-triangular and C'C is a diagonal rescaling of ``corr``.

    Parameters
    ----------
    corr : ndarray, shape (n, n)
        Positive-definite correlation matrix.
    fill_order : {"row", "column"}

    Returns
    -------
    theta_corr : ndarray, shape (n*(n-1)//2,)
    """
    corr = np.asarray(corr, dtype=np.float64)
    check_square(corr, "corr")
    U = scipy.linalg.cholesky(corr, lower=False)
    C = U / np.diag(U)[np.newaxis, :]
    return vecndup(C, order=fill_order)
