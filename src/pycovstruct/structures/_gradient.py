"""Jacobian of the covariance matrix with respect to theta.

Rows index theta, columns index the row-based upper triangle of the
covariance matrix (the :func:`~pycovstruct.vecup.vecdup` order), matching
the layout optimizers use to chain through covariance parameters.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pycovstruct._control import CovStructControl
from pycovstruct.backend._array_api import get_backend
from pycovstruct.structures._dispatch import build_cov_array
from pycovstruct.structures._kinds import check_theta
from pycovstruct.structures._spec import CovStructSpec
from pycovstruct.vecup._vec_ops import vecdup


def grad_cov_theta(
    theta: NDArray,
    spec: CovStructSpec,
    *,
    eps: float = 1e-7,
    control: CovStructControl | None = None,
) -> NDArray:
    """Central finite-difference Jacobian of vecdup(cov) w.r.t. theta.

    Parameters
    ----------
    theta : ndarray, shape (spec.n_theta,)
    spec : CovStructSpec
    eps : float
        Perturbation size.
    control : CovStructControl, optional
        Only ``us_fill_order`` is used.

    Returns
    -------
    jac : ndarray, shape (spec.n_theta, n*(n+1)//2)
    """
    xp = get_backend("numpy")
    theta = check_theta(theta, spec.kind, spec.n)
    n_cov = spec.n * (spec.n + 1) // 2
    jac = np.zeros((theta.shape[0], n_cov), dtype=np.float64)

    for p in range(theta.shape[0]):
        theta_plus = theta.copy()
        theta_plus[p] += eps
        plus_vec = vecdup(build_cov_array(theta_plus, spec, control=control, xp=xp), xp=xp)

        theta_minus = theta.copy()
        theta_minus[p] -= eps
        minus_vec = vecdup(build_cov_array(theta_minus, spec, control=control, xp=xp), xp=xp)

        jac[p] = (plus_vec - minus_vec) / (2.0 * eps)

    return jac
