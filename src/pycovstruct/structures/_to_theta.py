"""Natural parameters to unconstrained theta, one rule per kind.

Inverse of the transforms in this package. Useful for seeding an
optimizer from interpretable values and for building test cases at exact
correlation values.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pycovstruct._exceptions import DimensionMismatch
from pycovstruct.structures._kinds import CovKind, check_theta
from pycovstruct.structures._squash import unsquash
from pycovstruct.structures._unstructured import us_theta
from pycovstruct.vecup._vec_ops import FillOrder


def _log_positive(x, name: str) -> NDArray:
    x = np.asarray(x, dtype=np.float64)
    if np.any(x <= 0):
        raise ValueError(f"{name} must be positive, got {x}")
    return np.log(x)


def _homogeneous_sd(sd) -> float:
    sd = np.ravel(np.asarray(sd, dtype=np.float64))
    if sd.size == 0 or not np.all(sd == sd[0]):
        raise ValueError(f"This structure has a single standard deviation, got {sd}")
    return float(sd[0])


def to_theta(
    kind: CovKind | str,
    sd,
    *params,
    n: int | None = None,
    fill_order: FillOrder = "row",
) -> NDArray:
    """Convert standard deviations and natural parameters to theta.

    Parameters by kind (after ``sd``):

    ========  ==================================================
    us        ``corr``: (n, n) positive-definite correlation matrix
    toep      ``bands``: n-1 correlations in (-1, 1), lag 1 first
    cs        ``rho``: common correlation in (-1, 1)
    diag      (none)
    ar1       ``phi``: lag-1 correlation, ``phi > 0``
    ou        ``rate``: decay rate per unit distance, ``> 0``
    exp       ``rate``
    gau       ``rate``: per unit squared distance
    mat       ``phi`` (range, > 0), ``kappa`` (smoothness, > 0)
    ========  ==================================================

    ``sd`` is a length-n vector for us/toep/cs/diag and a scalar otherwise.

    Parameters
    ----------
    kind : CovKind or str
    sd : float or array_like
    *params
        Natural parameters listed above.
    n : int, optional
        Dimension; inferred from ``sd`` for heterogeneous kinds and
        checked when given.
    fill_order : {"row", "column"}
        Unstructured fill order.

    Returns
    -------
    theta : ndarray

    Examples
    --------
    >>> to_theta("ar1", 1.0, 0.7)
    array([0.        , 0.35667494])
    >>> to_theta("cs", [1.0, 1.0, 1.0], 0.0)
    array([0., 0., 0., 0.])
    """
    kind = CovKind.parse(kind)
    expected_params = {
        CovKind.US: 1, CovKind.TOEP: 1, CovKind.CS: 1, CovKind.DIAG: 0,
        CovKind.AR1: 1, CovKind.OU: 1, CovKind.EXP: 1, CovKind.GAU: 1,
        CovKind.MAT: 2,
    }[kind]
    if len(params) != expected_params:
        raise TypeError(
            f"{kind.value} takes {expected_params} parameter(s) after sd, "
            f"got {len(params)}"
        )

    if kind.heterogeneous:
        log_sd = np.ravel(_log_positive(sd, "sd"))
        if n is not None and log_sd.shape[0] != n:
            raise DimensionMismatch(
                f"Got {log_sd.shape[0]} standard deviations, expected {n}",
                kind=kind.value, expected=n, actual=log_sd.shape[0],
            )
        n = log_sd.shape[0]

        if kind is CovKind.US:
            corr = np.asarray(params[0], dtype=np.float64)
            if corr.shape != (n, n):
                raise DimensionMismatch(
                    f"corr must have shape ({n}, {n}), got {corr.shape}",
                    kind=kind.value, expected=n, actual=corr.shape[0] if corr.ndim else 0,
                )
            rest = us_theta(corr, fill_order=fill_order)
        elif kind is CovKind.TOEP:
            rest = unsquash(np.ravel(np.asarray(params[0], dtype=np.float64)))
        elif kind is CovKind.CS:
            rest = np.atleast_1d(unsquash(params[0]))
        else:
            rest = np.zeros(0)
        theta = np.concatenate([log_sd, rest])
    else:
        if n is None:
            n = 1
        log_sd = float(_log_positive(_homogeneous_sd(sd), "sd"))
        if kind is CovKind.AR1:
            rest = [-float(_log_positive(params[0], "phi"))]
        elif kind is CovKind.MAT:
            rest = [
                float(_log_positive(params[0], "phi")),
                float(_log_positive(params[1], "kappa")),
            ]
        else:
            rest = [float(_log_positive(params[0], "rate"))]
        theta = np.array([log_sd] + rest, dtype=np.float64)

    return check_theta(theta, kind, n)
