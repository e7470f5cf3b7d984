"""Dispatch from structure kind to transform, and the public builders.

Each kind maps to one explicit pure function in a closed table. The
builders validate the parameter length, assemble sd / corr / cov, and run
the diagnostic checks. Diagnostics are warnings: the computed matrix is
always returned, even when it is not positive semi-definite, so the caller
(typically an optimizer) decides whether to reject the step.
"""

from __future__ import annotations

import logging
import warnings
from functools import cached_property
from typing import Callable

import numpy as np
from numpy.typing import NDArray

from pycovstruct._control import CovStructControl
from pycovstruct._exceptions import (
    CovStructWarning,
    NaNFunctionEvaluationWarning,
    NonPositiveDefiniteResult,
    ValueOutOfRangeWarning,
)
from pycovstruct.backend._array_api import array_namespace, get_backend
from pycovstruct.structures._banded import cs_corr, diag_corr, toep_corr
from pycovstruct.structures._decay import ar1_corr, exp_corr, gau_corr, ou_corr
from pycovstruct.structures._kinds import CovKind, check_theta
from pycovstruct.structures._matern import mat_corr
from pycovstruct.structures._result import CovStructResult
from pycovstruct.structures._spec import CovStructSpec
from pycovstruct.structures._unstructured import us_corr
from pycovstruct.utils._validation import min_eigenvalue

logger = logging.getLogger(__name__)


def _us(theta, spec, control, xp):
    return us_corr(theta[spec.n:], spec.n, fill_order=control.us_fill_order, xp=xp)


def _toep(theta, spec, control, xp):
    return toep_corr(theta[spec.n:], spec.n, xp=xp)


def _cs(theta, spec, control, xp):
    return cs_corr(theta[spec.n:], spec.n, xp=xp)


def _diag(theta, spec, control, xp):
    return diag_corr(spec.n, xp=xp)


def _ar1(theta, spec, control, xp):
    return ar1_corr(theta[1], spec.n, xp=xp)


def _ou(theta, spec, control, xp):
    return ou_corr(theta[1], spec.coords[:, 0], xp=xp)


def _exp(theta, spec, control, xp):
    return exp_corr(theta[1], spec.coords, xp=xp)


def _gau(theta, spec, control, xp):
    return gau_corr(theta[1], spec.coords, xp=xp)


def _mat(theta, spec, control, xp):
    return mat_corr(theta[1], theta[2], spec.coords, xp=xp)


_CORR_BUILDERS: dict[CovKind, Callable] = {
    CovKind.US: _us,
    CovKind.TOEP: _toep,
    CovKind.CS: _cs,
    CovKind.DIAG: _diag,
    CovKind.AR1: _ar1,
    CovKind.OU: _ou,
    CovKind.EXP: _exp,
    CovKind.GAU: _gau,
    CovKind.MAT: _mat,
}


def _sd(theta, spec: CovStructSpec, xp):
    if spec.kind.heterogeneous:
        return xp.exp(theta[: spec.n])
    return xp.exp(theta[0]) * xp.ones((spec.n,), dtype=xp.float64)


def _report(warning: CovStructWarning, control: CovStructControl) -> None:
    logger.debug("%s: %s", type(warning).__name__, warning)
    if control.warn:
        warnings.warn(warning, stacklevel=3)


def _prepare(theta, spec, control, xp):
    if xp is None:
        xp = array_namespace(theta)
    if control is None:
        control = CovStructControl()
    if xp.name == "numpy":
        theta = check_theta(theta, spec.kind, spec.n)
    else:
        theta = xp.array(theta, dtype=xp.float64)
        check_theta(xp.to_numpy(theta), spec.kind, spec.n)
    return theta, control, xp


def build_corr(
    theta: NDArray,
    spec: CovStructSpec,
    *,
    control: CovStructControl | None = None,
    xp=None,
) -> NDArray:
    """Correlation matrix for a full parameter vector, without diagnostics.

    Parameters
    ----------
    theta : ndarray, shape (spec.n_theta,)
        Full parameter vector (log-sds first).
    spec : CovStructSpec
    control : CovStructControl, optional
    xp : backend, optional
        Inferred from ``theta``; torch tensors stay tensors.

    Returns
    -------
    corr : ndarray, shape (n, n)

    Raises
    ------
    DimensionMismatch
        If ``len(theta) != spec.n_theta``.
    """
    theta, control, xp = _prepare(theta, spec, control, xp)
    return _CORR_BUILDERS[spec.kind](theta, spec, control, xp)


def build_cov_array(
    theta: NDArray,
    spec: CovStructSpec,
    *,
    control: CovStructControl | None = None,
    xp=None,
) -> NDArray:
    """Covariance matrix ``diag(sd) corr diag(sd)`` in the input's backend.

    Skips the diagnostic checks; this is the entry point for inner loops
    that evaluate many parameter vectors.
    """
    theta, control, xp = _prepare(theta, spec, control, xp)
    corr = _CORR_BUILDERS[spec.kind](theta, spec, control, xp)
    sd = _sd(theta, spec, xp)
    return corr * xp.outer(sd, sd)


def build_cov(
    theta: NDArray,
    spec: CovStructSpec,
    *,
    control: CovStructControl | None = None,
) -> CovStructResult:
    """Build the covariance matrix for ``theta`` and check it.

    Parameters
    ----------
    theta : array_like, shape (spec.n_theta,)
        Unconstrained parameter vector.
    spec : CovStructSpec
        Structure kind, dimension and coordinates.
    control : CovStructControl, optional
        Check and reporting options.

    Returns
    -------
    result : CovStructResult
        Read-only sd, corr and cov (NumPy arrays).

    Raises
    ------
    DimensionMismatch
        If ``len(theta) != spec.n_theta``.

    Warns
    -----
    ValueOutOfRangeWarning
        Entries of theta beyond ``control.log_range`` in absolute value.
    NaNFunctionEvaluationWarning
        The correlation matrix contains non-finite values.
    NonPositiveDefiniteResult
        The correlation matrix has an eigenvalue below ``-control.psd_tol``.
    """
    if control is None:
        control = CovStructControl()
    xp = get_backend("numpy")
    theta = check_theta(np.asarray(array_namespace(theta).to_numpy(theta)), spec.kind, spec.n)

    far = [int(i) for i in np.flatnonzero(~(np.abs(theta) <= control.log_range))]
    if far:
        _report(
            ValueOutOfRangeWarning(
                f"value out of range: theta{far} exceeds |{control.log_range}| "
                f"for {spec.kind.value} structure",
                indices=far,
            ),
            control,
        )

    corr = _CORR_BUILDERS[spec.kind](theta, spec, control, xp)
    sd = _sd(theta, spec, xp)
    cov = corr * np.outer(sd, sd)

    min_eig = float("nan")
    is_psd = True
    if not np.all(np.isfinite(corr)):
        is_psd = False
        _report(
            NaNFunctionEvaluationWarning(
                f"NA/NaN function evaluation: {spec.kind.value} correlation "
                "matrix has non-finite entries"
            ),
            control,
        )
    elif control.check_psd:
        min_eig = min_eigenvalue(corr)
        is_psd = min_eig >= -control.psd_tol
        logger.debug("%s n=%d min eigenvalue %.3g", spec.kind.value, spec.n, min_eig)
        if not is_psd:
            _report(
                NonPositiveDefiniteResult(
                    f"{spec.kind.value} correlation matrix is not positive "
                    f"semi-definite (min eigenvalue {min_eig:.3g})",
                    kind=spec.kind.value,
                    min_eigenvalue=min_eig,
                ),
                control,
            )

    if control.verbose >= 1:
        status = "PSD" if is_psd else "not PSD"
        print(f"  {spec.kind.value}: n={spec.n}, n_theta={len(theta)}, {status}")

    return CovStructResult(
        kind=spec.kind,
        sd=sd,
        corr=corr,
        cov=cov,
        min_eigenvalue=min_eig,
        is_psd=is_psd,
        levels=spec.level_names,
    )


class CovarianceStructure:
    """A structure spec bound to a fixed parameter vector.

    Theta is copied and frozen; the covariance is computed on first access
    and the same read-only snapshot is returned afterwards.

    Parameters
    ----------
    spec : CovStructSpec
    theta : array_like, shape (spec.n_theta,)
    control : CovStructControl, optional

    Examples
    --------
    >>> spec = CovStructSpec("ar1", 6)
    >>> cs = CovarianceStructure(spec, [0.0, np.log(1 / 0.7)])
    >>> round(cs.corr[0, 1], 3)
    0.7
    """

    def __init__(
        self,
        spec: CovStructSpec,
        theta,
        *,
        control: CovStructControl | None = None,
    ):
        theta = check_theta(theta, spec.kind, spec.n)
        theta.flags.writeable = False
        self.spec = spec
        self._theta = theta
        self.control = control or CovStructControl()

    @classmethod
    def from_natural(
        cls,
        spec: CovStructSpec,
        sd,
        *params,
        control: CovStructControl | None = None,
    ) -> "CovarianceStructure":
        """Construct from standard deviations and natural parameters.

        See :func:`pycovstruct.structures.to_theta` for the parameters each
        kind takes.
        """
        from pycovstruct.structures._to_theta import to_theta

        fill_order = (control or CovStructControl()).us_fill_order
        theta = to_theta(spec.kind, sd, *params, n=spec.n, fill_order=fill_order)
        return cls(spec, theta, control=control)

    @property
    def theta(self) -> NDArray:
        return self._theta

    @property
    def kind(self) -> CovKind:
        return self.spec.kind

    @cached_property
    def result(self) -> CovStructResult:
        return build_cov(self._theta, self.spec, control=self.control)

    @property
    def cov(self) -> NDArray:
        return self.result.cov

    @property
    def corr(self) -> NDArray:
        return self.result.corr

    @property
    def sd(self) -> NDArray:
        return self.result.sd

    def sd_corr(self) -> tuple[NDArray, NDArray]:
        """Read-only (sd, corr) pair for reporting."""
        return self.result.sd_corr()

    def __repr__(self) -> str:
        return (
            f"CovarianceStructure(kind={self.spec.kind.value!r}, n={self.spec.n}, "
            f"theta={np.array2string(self._theta, precision=4)})"
        )
