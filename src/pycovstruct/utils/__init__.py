"""Utility functions."""

from pycovstruct.utils._validation import (
    check_positive_definite,
    check_psd,
    check_symmetric,
    min_eigenvalue,
)

__all__ = ["check_symmetric", "check_positive_definite", "check_psd", "min_eigenvalue"]
