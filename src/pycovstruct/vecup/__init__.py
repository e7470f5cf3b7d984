"""Row-based vectorization of symmetric and triangular matrices."""

from pycovstruct.vecup._vec_ops import (
    fill_unit_upper,
    matdupdiagonefull,
    triangular_size,
    upper_indices,
    vecdup,
    vecndup,
)

__all__ = [
    "vecdup",
    "vecndup",
    "matdupdiagonefull",
    "fill_unit_upper",
    "upper_indices",
    "triangular_size",
]
