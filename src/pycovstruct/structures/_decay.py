"""Correlations that decay with lag or distance: AR(1), Ornstein-Uhlenbeck,
spatial exponential and spatial Gaussian.

Each takes the single decay parameter theta[1]; the homogeneous standard
deviation exp(theta[0]) is applied by the caller.
"""

from __future__ import annotations

from numpy.typing import NDArray

from pycovstruct.backend._array_api import array_namespace
from pycovstruct.structures._distance import lag_matrix, pairwise_distance


def _scalar(theta, xp):
    return xp.reshape(xp.array(theta, dtype=xp.float64), (1,))[0]


def ar1_corr(theta_decay, n: int, *, xp=None) -> NDArray:
    """AR(1) correlation on equally spaced positions.

    ``corr[i, j] = exp(-theta_decay) ** |i - j|``. For ``theta_decay <= 0``
    the base is at least one and the matrix is generally not positive
    semi-definite.

    Examples
    --------
    >>> ar1_corr(np.log(1 / 0.7), 3)
    array([[1.  , 0.7 , 0.49],
           [0.7 , 1.  , 0.7 ],
           [0.49, 0.7 , 1.  ]])
    """
    if xp is None:
        xp = array_namespace(theta_decay)
    t = _scalar(theta_decay, xp)
    return xp.exp(-t * lag_matrix(n, xp=xp))


def ou_corr(theta_decay, times: NDArray, *, xp=None) -> NDArray:
    """Ornstein-Uhlenbeck correlation on irregular 1-D times.

    ``corr[i, j] = exp(-exp(theta_decay) * |t_i - t_j|)``. On integer times
    this matches :func:`ar1_corr` at the same decay rate, i.e. with
    ``theta_ar1 = exp(theta_ou)``.
    """
    if xp is None:
        xp = array_namespace(theta_decay, times)
    rate = xp.exp(_scalar(theta_decay, xp))
    times = xp.reshape(xp.array(times, dtype=xp.float64), (-1, 1))
    return xp.exp(-rate * pairwise_distance(times, xp=xp))


def exp_corr(theta_decay, coords: NDArray, *, xp=None) -> NDArray:
    """Spatial exponential correlation over Euclidean distance.

    ``corr[i, j] = exp(-exp(theta_decay) * d_ij)``.
    """
    if xp is None:
        xp = array_namespace(theta_decay, coords)
    rate = xp.exp(_scalar(theta_decay, xp))
    return xp.exp(-rate * pairwise_distance(coords, xp=xp))


def gau_corr(theta_decay, coords: NDArray, *, xp=None) -> NDArray:
    """Spatial Gaussian correlation over squared Euclidean distance.

    ``corr[i, j] = exp(-exp(theta_decay) * d_ij ** 2)``.
    """
    if xp is None:
        xp = array_namespace(theta_decay, coords)
    rate = xp.exp(_scalar(theta_decay, xp))
    return xp.exp(-rate * pairwise_distance(coords, squared=True, xp=xp))
