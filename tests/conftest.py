"""Shared test fixtures for pycovstruct."""

from __future__ import annotations

import numpy as np
import pytest

from pycovstruct.backend import get_backend, set_backend


@pytest.fixture(autouse=True)
def _reset_backend(monkeypatch):
    """Keep every test on the default numpy backend."""
    monkeypatch.delenv("PYCOVSTRUCT_BACKEND", raising=False)
    set_backend(None)
    yield
    set_backend(None)


@pytest.fixture
def xp_numpy():
    """NumPy backend fixture."""
    return get_backend("numpy")


@pytest.fixture
def xp_torch():
    """PyTorch backend fixture (skips if torch not installed)."""
    pytest.importorskip("torch")
    return get_backend("torch")


@pytest.fixture
def rng():
    return np.random.default_rng(20240518)


@pytest.fixture
def sym_3x3():
    """3x3 symmetric test matrix."""
    return np.array([[1.0, 2.0, 3.0],
                     [2.0, 4.0, 5.0],
                     [3.0, 5.0, 6.0]])


@pytest.fixture
def corr_3x3():
    """3x3 positive-definite correlation matrix."""
    return np.array([[1.0, 0.6, 0.3],
                     [0.6, 1.0, 0.5],
                     [0.3, 0.5, 1.0]])


@pytest.fixture
def corr_4x4():
    """4x4 positive-definite correlation matrix (fill orders differ at n=4)."""
    return np.array([[1.0, 0.5, 0.2, -0.1],
                     [0.5, 1.0, 0.4, 0.1],
                     [0.2, 0.4, 1.0, 0.3],
                     [-0.1, 0.1, 0.3, 1.0]])


@pytest.fixture
def grid_coords():
    """Six points on a 2 x 3 grid."""
    xs, ys = np.meshgrid([0.0, 1.0, 2.0], [0.0, 1.5])
    return np.column_stack([xs.ravel(), ys.ravel()])
