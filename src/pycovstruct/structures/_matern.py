"""Matern correlation family.

    rho(d) = 2^(1-kappa) / Gamma(kappa) * (d/phi)^kappa * K_kappa(d/phi)

with range ``phi = exp(theta[1])`` and smoothness ``kappa = exp(theta[2])``.
kappa = 0.5 gives exp(-d/phi); kappa -> inf approaches the Gaussian shape.
The Bessel function is evaluated on the host with SciPy, so torch inputs
come back as tensors without a gradient path.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy.special import gammaln, kve

from pycovstruct.backend._array_api import array_namespace
from pycovstruct.structures._distance import pairwise_distance


def _log_kv_large_order(nu: float, x: NDArray) -> NDArray:
    """log K_nu(x) from the uniform asymptotic expansion in the order.

    With ``z = x / nu``, ``s = sqrt(1 + z^2)`` and ``t = 1 / s``:

        K_nu(nu z) ~ sqrt(pi / (2 nu)) exp(-nu eta) / sqrt(s) * sum_k (-1)^k u_k(t) / nu^k

    where ``eta = s + log(z / (1 + s))``. Terms through ``u_3`` are kept;
    the relative error is O(nu^-4) uniformly in x.
    """
    z = x / nu
    s = np.sqrt(1.0 + z * z)
    t = 1.0 / s
    t2 = t * t
    eta = s + np.log(z / (1.0 + s))
    u1 = t * (3.0 - 5.0 * t2) / 24.0
    u2 = t2 * (81.0 - 462.0 * t2 + 385.0 * t2**2) / 1152.0
    u3 = t**3 * (30375.0 - 369603.0 * t2 + 765765.0 * t2**2 - 425425.0 * t2**3) / 414720.0
    series = 1.0 - u1 / nu + u2 / nu**2 - u3 / nu**3
    return 0.5 * np.log(np.pi / (2.0 * nu)) - nu * eta - 0.5 * np.log(s) + np.log(series)


def matern_correlation(d: NDArray, phi: float, kappa: float) -> NDArray:
    """Evaluate the Matern correlation function at distances ``d``.

    Computed in log space with the exponentially scaled Bessel function
    ``kve(kappa, u) = kv(kappa, u) * exp(u)`` to stay finite for large u.
    Where ``kve`` overflows (small u, large kappa) the log of the Bessel
    function comes from the large-order expansion for ``kappa >= 1`` and
    from the small-argument limit ``Gamma(kappa) / 2 * (2 / u)^kappa``
    otherwise.

    Parameters
    ----------
    d : array_like
        Non-negative distances.
    phi : float
        Range (> 0).
    kappa : float
        Smoothness (> 0).

    Returns
    -------
    rho : ndarray
        Same shape as ``d``; exactly 1 where ``d == 0``.
    """
    if phi <= 0 or kappa <= 0:
        raise ValueError(f"phi and kappa must be positive, got phi={phi}, kappa={kappa}")
    d = np.asarray(d, dtype=np.float64)
    u = d / phi
    rho = np.ones_like(u)
    pos = u > 0
    up = u[pos]
    with np.errstate(divide="ignore", over="ignore", under="ignore"):
        log_kve = np.log(kve(kappa, up))
        over = ~np.isfinite(log_kve)
        if np.any(over):
            u_over = up[over]
            if kappa >= 1.0:
                log_kv = _log_kv_large_order(kappa, u_over)
            else:
                log_kv = gammaln(kappa) - np.log(2.0) + kappa * np.log(2.0 / u_over)
            log_kve[over] = log_kv + u_over
        log_rho = (
            (1.0 - kappa) * np.log(2.0)
            - gammaln(kappa)
            + kappa * np.log(up)
            + log_kve
            - up
        )
    # rounding in the large log terms can push rho a hair above 1
    rho[pos] = np.minimum(np.exp(log_rho), 1.0)
    return rho


def mat_corr(theta_range, theta_shape, coords: NDArray, *, xp=None) -> NDArray:
    """Spatial Matern correlation over Euclidean distance.

    Parameters
    ----------
    theta_range : float
        Log-range, ``phi = exp(theta_range)``.
    theta_shape : float
        Log-smoothness, ``kappa = exp(theta_shape)``.
    coords : ndarray, shape (n, d)
    xp : backend, optional

    Returns
    -------
    corr : ndarray, shape (n, n)
    """
    if xp is None:
        xp = array_namespace(theta_range, coords)
    phi = float(np.exp(np.ravel(xp.to_numpy(theta_range))[0]))
    kappa = float(np.exp(np.ravel(xp.to_numpy(theta_shape))[0]))
    dist = xp.to_numpy(pairwise_distance(coords, xp=xp))
    return xp.array(matern_correlation(dist, phi, kappa), dtype=xp.float64)
