"""NumPy + SciPy backend implementation."""

from __future__ import annotations

import numpy as np
import scipy.linalg


class NumpyBackend:
    """Backend wrapping NumPy + SciPy for array operations."""

    name = "numpy"
    float64 = np.float64
    int64 = np.int64

    # --- Array creation ---
    @staticmethod
    def array(data, dtype=None):
        return np.array(data, dtype=dtype)

    @staticmethod
    def zeros(shape, dtype=np.float64):
        return np.zeros(shape, dtype=dtype)

    @staticmethod
    def ones(shape, dtype=np.float64):
        return np.ones(shape, dtype=dtype)

    @staticmethod
    def eye(n, dtype=np.float64):
        return np.eye(n, dtype=dtype)

    @staticmethod
    def arange(start, stop=None, step=1, dtype=np.float64):
        if stop is None:
            return np.arange(start, dtype=dtype)
        return np.arange(start, stop, step, dtype=dtype)

    # --- Array manipulation ---
    @staticmethod
    def reshape(a, shape):
        return np.reshape(a, shape)

    @staticmethod
    def diagonal(a, offset=0):
        return np.diagonal(a, offset=offset)

    # --- Math operations ---
    @staticmethod
    def sqrt(x):
        return np.sqrt(x)

    @staticmethod
    def exp(x):
        return np.exp(x)

    @staticmethod
    def log(x):
        return np.log(x)

    @staticmethod
    def abs(x):
        return np.abs(x)

    @staticmethod
    def sum(a, axis=None, keepdims=False):
        return np.sum(a, axis=axis, keepdims=keepdims)

    # --- Linear algebra ---
    @staticmethod
    def matmul(a, b):
        return a @ b

    @staticmethod
    def outer(a, b):
        return np.outer(a, b)

    @staticmethod
    def transpose(a):
        return a.T

    @staticmethod
    def cholesky(A):
        return scipy.linalg.cholesky(A, lower=True)

    @staticmethod
    def solve_triangular(L, b):
        """Solve ``L x = b`` for lower-triangular ``L``."""
        return scipy.linalg.solve_triangular(L, b, lower=True)

    # --- Conversion ---
    @staticmethod
    def to_numpy(x):
        return np.asarray(x)
