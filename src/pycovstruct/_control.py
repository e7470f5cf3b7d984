"""Control structure for covariance construction.

Collects the options that change how structures are built and checked,
in the same spirit as a model control struct: one dataclass passed as
``control=`` wherever a structure is built.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass
class CovStructControl:
    """Options for building structured covariance matrices.

    Attributes
    ----------
    check_psd : bool
        If True, compute the smallest eigenvalue of each correlation matrix
        and warn with NonPositiveDefiniteResult when it is negative.
    psd_tol : float
        Eigenvalues down to ``-psd_tol`` are treated as zero.
    us_fill_order : {"row", "column"}
        Order in which unstructured correlation parameters fill the strict
        upper triangle of the unit-diagonal factor.
    warn : bool
        If False, diagnostics are only logged, never emitted as warnings.
    log_range : float
        Absolute log-scale values beyond this trigger ValueOutOfRangeWarning.
    verbose : int
        0=silent, 1=one-line summary per build.
    """

    check_psd: bool = True
    psd_tol: float = 1e-10
    us_fill_order: Literal["row", "column"] = "row"
    warn: bool = True
    log_range: float = 700.0
    verbose: int = 0

    def __post_init__(self):
        if self.us_fill_order not in ("row", "column"):
            raise ValueError(
                f"us_fill_order must be 'row' or 'column', got {self.us_fill_order!r}"
            )
        if self.psd_tol < 0:
            raise ValueError(f"psd_tol must be non-negative, got {self.psd_tol}")
