"""Multivariate normal log-density of random effects.

For m groups with random effects b_g ~ N(0, Sigma(theta)):

    log p = -1/2 * sum_g [ n log(2 pi) + log|Sigma| + b_g' Sigma^{-1} b_g ]

evaluated through the Cholesky factor of Sigma.
"""

from __future__ import annotations

import logging
import math
import warnings

import numpy as np
from numpy.typing import NDArray

from pycovstruct._control import CovStructControl
from pycovstruct._exceptions import DimensionMismatch, NaNFunctionEvaluationWarning
from pycovstruct.backend._array_api import array_namespace
from pycovstruct.structures._dispatch import build_cov_array
from pycovstruct.structures._spec import CovStructSpec

logger = logging.getLogger(__name__)

_LOG_2PI = math.log(2.0 * math.pi)


def mvn_logdensity(
    b: NDArray,
    theta: NDArray,
    spec: CovStructSpec,
    *,
    control: CovStructControl | None = None,
    xp=None,
):
    """Sum of N(0, Sigma(theta)) log-densities over groups.

    Parameters
    ----------
    b : ndarray, shape (n,) or (m, n)
        Random effects, one row per group.
    theta : ndarray, shape (spec.n_theta,)
    spec : CovStructSpec
    control : CovStructControl, optional
    xp : backend, optional
        Inferred from ``theta`` and ``b``.

    Returns
    -------
    logdens : float or scalar tensor
        ``nan`` when Sigma is not positive definite; a
        NaNFunctionEvaluationWarning is emitted instead of raising.
    """
    if xp is None:
        xp = array_namespace(theta, b)
    if control is None:
        control = CovStructControl()

    b = xp.array(b, dtype=xp.float64)
    if b.ndim == 1:
        b = xp.reshape(b, (1, -1))
    if b.ndim != 2 or b.shape[1] != spec.n:
        raise DimensionMismatch(
            f"Random effects must have {spec.n} columns, got shape {tuple(b.shape)}",
            kind=spec.kind.value, expected=spec.n, actual=b.shape[-1],
        )
    m = b.shape[0]

    cov = build_cov_array(theta, spec, control=control, xp=xp)
    try:
        L = xp.cholesky(cov)
        if not np.all(np.isfinite(xp.to_numpy(L))):
            raise np.linalg.LinAlgError("non-finite Cholesky factor")
    except (np.linalg.LinAlgError, RuntimeError, ValueError) as exc:
        logger.debug("Cholesky failed for %s structure: %s", spec.kind.value, exc)
        msg = (
            f"NA/NaN function evaluation: {spec.kind.value} covariance is not "
            "positive definite"
        )
        if control.warn:
            warnings.warn(NaNFunctionEvaluationWarning(msg), stacklevel=2)
        return float("nan")

    z = xp.solve_triangular(L, xp.transpose(b))
    logdet = 2.0 * xp.sum(xp.log(xp.diagonal(L)))
    return -0.5 * (m * spec.n * _LOG_2PI + m * logdet + xp.sum(z * z))
