"""Bijections between the real line and the open interval (-1, 1)."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pycovstruct.backend._array_api import array_namespace


def squash(x: NDArray, *, xp=None) -> NDArray:
    """Map unconstrained reals into (-1, 1) via ``x / sqrt(1 + x^2)``."""
    if xp is None:
        xp = array_namespace(x)
    x = xp.array(x, dtype=xp.float64)
    return x / xp.sqrt(1.0 + x * x)


def unsquash(r) -> NDArray:
    """Inverse of :func:`squash`: ``r / sqrt(1 - r^2)``.

    Raises ValueError outside the open interval (-1, 1).
    """
    r = np.asarray(r, dtype=np.float64)
    if np.any(np.abs(r) >= 1.0):
        raise ValueError(f"Correlations must lie strictly inside (-1, 1), got {r}")
    return r / np.sqrt(1.0 - r * r)
