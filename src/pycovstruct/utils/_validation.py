"""Input validation utilities."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def check_symmetric(A: NDArray, tol: float = 1e-10) -> bool:
    """Check if a matrix is symmetric within tolerance."""
    A = np.asarray(A)
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        return False
    return np.allclose(A, A.T, atol=tol)


def min_eigenvalue(A: NDArray) -> float:
    """Smallest eigenvalue of a symmetric matrix."""
    A = np.asarray(A, dtype=np.float64)
    check_square(A)
    if A.shape[0] == 0:
        return float("inf")
    return float(np.linalg.eigvalsh(A)[0])


def check_positive_definite(A: NDArray) -> bool:
    """Check if a matrix is positive definite via eigenvalues."""
    if not check_symmetric(A):
        return False
    return min_eigenvalue(A) > 0


def check_psd(A: NDArray, tol: float = 1e-10) -> bool:
    """Check if a matrix is positive semi-definite (eigenvalues >= -tol)."""
    if not check_symmetric(A):
        return False
    return min_eigenvalue(A) >= -tol


def check_2d(A: NDArray, name: str = "A") -> None:
    """Raise ValueError if A is not 2-dimensional."""
    if A.ndim != 2:
        raise ValueError(f"{name} must be 2-dimensional, got shape {A.shape}")


def check_square(A: NDArray, name: str = "A") -> None:
    """Raise ValueError if A is not square."""
    check_2d(A, name)
    if A.shape[0] != A.shape[1]:
        raise ValueError(f"{name} must be square, got shape {A.shape}")
