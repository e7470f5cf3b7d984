"""Immutable snapshot of a constructed covariance matrix."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from pycovstruct.structures._kinds import CovKind


def _readonly(a: NDArray) -> NDArray:
    a = np.array(a, dtype=np.float64)
    a.flags.writeable = False
    return a


@dataclass(frozen=True, eq=False)
class CovStructResult:
    """Covariance matrix decomposed into standard deviations and correlations.

    Attributes
    ----------
    kind : CovKind
        Structure the matrix was built from.
    sd : ndarray, shape (n,)
        Marginal standard deviations.
    corr : ndarray, shape (n, n)
        Correlation matrix (unit diagonal).
    cov : ndarray, shape (n, n)
        ``diag(sd) @ corr @ diag(sd)``.
    min_eigenvalue : float
        Smallest eigenvalue of ``corr`` (nan when not computed).
    is_psd : bool
        Whether ``corr`` passed the PSD check (True when not computed).
    levels : list of str
        Level names for display.

    All arrays are read-only.
    """

    kind: CovKind
    sd: NDArray
    corr: NDArray
    cov: NDArray
    min_eigenvalue: float
    is_psd: bool
    levels: list[str]

    def __post_init__(self):
        object.__setattr__(self, "sd", _readonly(self.sd))
        object.__setattr__(self, "corr", _readonly(self.corr))
        object.__setattr__(self, "cov", _readonly(self.cov))

    @property
    def n(self) -> int:
        return self.sd.shape[0]

    def sd_corr(self) -> tuple[NDArray, NDArray]:
        """Return the (standard deviation vector, correlation matrix) pair."""
        return self.sd, self.corr

    def to_frame(self) -> pd.DataFrame:
        """Tabulate standard deviations and correlations by level."""
        df = pd.DataFrame(self.corr, index=self.levels, columns=self.levels)
        df.insert(0, "sd", self.sd)
        return df

    def summary(self, digits: int = 3) -> str:
        """Format standard deviations and the lower-triangular correlations.

        Parameters
        ----------
        digits : int
            Decimal places.

        Returns
        -------
        text : str
        """
        width = max(8, digits + 4)
        name_w = max(len(lv) for lv in self.levels) if self.levels else 1
        lines = [f"  Covariance structure: {self.kind.value} (n={self.n})"]
        header = f"  {'':<{name_w}}  {'Std.Dev.':>{width}}  Corr"
        lines.append(header)
        for i, lv in enumerate(self.levels):
            row = f"  {lv:<{name_w}}  {self.sd[i]:>{width}.{digits}f}"
            if i > 0:
                row += "  " + " ".join(
                    f"{self.corr[i, j]:>{width}.{digits}f}" for j in range(i)
                )
            lines.append(row)
        if not self.is_psd:
            lines.append(
                f"  warning: correlation matrix is not positive semi-definite "
                f"(min eigenvalue {self.min_eigenvalue:.3g})"
            )
        return "\n".join(lines)
