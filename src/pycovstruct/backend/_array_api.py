"""Backend abstraction: select NumPy or PyTorch array operations.

The default backend is ``"numpy"`` unless the ``PYCOVSTRUCT_BACKEND``
environment variable names another one. :func:`set_backend` overrides both.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Literal

import numpy as np

BackendName = Literal["numpy", "torch"]

_VALID_BACKENDS = ("numpy", "torch")
_ENV_VAR = "PYCOVSTRUCT_BACKEND"

# None means "no programmatic override"; fall back to the environment.
_backend_override: BackendName | None = None

# Cached backend instances
_backends: dict[str, Any] = {}

logger = logging.getLogger(__name__)


def _default_backend_name() -> BackendName:
    if _backend_override is not None:
        return _backend_override
    env = os.environ.get(_ENV_VAR, "").strip().lower()
    if env in _VALID_BACKENDS:
        return env  # type: ignore[return-value]
    if env:
        logger.debug("Ignoring unknown %s=%r", _ENV_VAR, env)
    return "numpy"


def get_backend(name: BackendName | None = None) -> Any:
    """Return a backend namespace providing array operations.

    Parameters
    ----------
    name : {"numpy", "torch"} or None
        Backend name. If None, returns the current default backend.

    Returns
    -------
    backend : NumpyBackend or TorchBackend
        Object exposing array creation/manipulation functions.
    """
    if name is None:
        name = _default_backend_name()

    if name not in _backends:
        if name == "numpy":
            from pycovstruct.backend._numpy_backend import NumpyBackend
            _backends[name] = NumpyBackend()
        elif name == "torch":
            from pycovstruct.backend._torch_backend import TorchBackend
            _backends[name] = TorchBackend()
        else:
            raise ValueError(f"Unknown backend: {name!r}. Use 'numpy' or 'torch'.")

    return _backends[name]


def set_backend(name: BackendName | None) -> None:
    """Set the default backend globally.

    Parameters
    ----------
    name : {"numpy", "torch"} or None
        Backend to use by default when ``xp`` is not provided. ``None``
        clears the override so ``PYCOVSTRUCT_BACKEND`` applies again.
    """
    global _backend_override
    if name is not None and name not in _VALID_BACKENDS:
        raise ValueError(f"Unknown backend: {name!r}. Use 'numpy' or 'torch'.")
    _backend_override = name


def array_namespace(*arrays: Any) -> Any:
    """Infer the backend from the input arrays.

    If any array is a PyTorch tensor, returns the torch backend.
    NumPy arrays select the numpy backend; plain Python sequences fall
    through to the default.
    """
    for arr in arrays:
        if arr is None:
            continue
        cls_name = type(arr).__module__
        if cls_name.startswith("torch"):
            return get_backend("torch")
        if isinstance(arr, np.ndarray):
            return get_backend("numpy")

    return get_backend()
