"""Vectorization helpers for symmetric and unit-triangular matrices.

Row-based arrangement is the default: vectorization proceeds row by row
over the upper triangle. Column-major order over the same upper triangle
is available where an engine stores the triangle that way.
"""

from __future__ import annotations

import math
from typing import Literal

from numpy.typing import NDArray

from pycovstruct.backend._array_api import array_namespace

FillOrder = Literal["row", "column"]


def upper_indices(
    n: int, *, diagonal: bool = False, order: FillOrder = "row"
) -> list[tuple[int, int]]:
    """List (i, j) positions of the upper triangle in the given order.

    Parameters
    ----------
    n : int
        Matrix dimension.
    diagonal : bool
        Include the diagonal.
    order : {"row", "column"}
        ``"row"`` walks row 0 left to right, then row 1, ...;
        ``"column"`` walks column 0 top to bottom, then column 1, ...

    Examples
    --------
    >>> upper_indices(4, order="row")
    [(0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3)]
    >>> upper_indices(4, order="column")
    [(0, 1), (0, 2), (1, 2), (0, 3), (1, 3), (2, 3)]

    The two orders coincide for ``n <= 3`` when the diagonal is excluded.
    """
    offset = 0 if diagonal else 1
    if order == "row":
        return [(i, j) for i in range(n) for j in range(i + offset, n)]
    if order == "column":
        return [(i, j) for j in range(n) for i in range(j + 1 - offset)]
    raise ValueError(f"order must be 'row' or 'column', got {order!r}")


def triangular_size(length: int, *, diagonal: bool) -> int:
    """Recover the matrix dimension from a triangle's element count.

    Raises ValueError if ``length`` is not a triangular number.
    """
    if diagonal:
        # P*(P+1)/2 = length
        P = int(round((-1.0 + math.sqrt(1.0 + 8.0 * length)) / 2.0))
        ok = P * (P + 1) // 2 == length
    else:
        # P*(P-1)/2 = length
        P = int(round((1.0 + math.sqrt(1.0 + 8.0 * length)) / 2.0))
        ok = P * (P - 1) // 2 == length
    if not ok:
        raise ValueError(f"Input length {length} is not a triangular number")
    return P


def vecdup(r: NDArray, *, xp=None) -> NDArray:
    """Extract upper triangular elements (including diagonal) row-by-row.

    Examples
    --------
    >>> vecdup(np.array([[1,2,3],[2,4,5],[3,5,6]]))
    array([1., 2., 3., 4., 5., 6.])
    """
    if xp is None:
        xp = array_namespace(r)
    r = xp.array(r, dtype=xp.float64)
    idx = upper_indices(r.shape[0], diagonal=True)
    w = xp.zeros((len(idx),), dtype=xp.float64)
    for k, (i, j) in enumerate(idx):
        w[k] = r[i, j]
    return w


def vecndup(r: NDArray, *, order: FillOrder = "row", xp=None) -> NDArray:
    """Extract strict upper triangular elements in the given order.

    Examples
    --------
    >>> vecndup(np.array([[1,2,3],[2,4,5],[3,5,6]]))
    array([2., 3., 5.])
    """
    if xp is None:
        xp = array_namespace(r)
    r = xp.array(r, dtype=xp.float64)
    idx = upper_indices(r.shape[0], order=order)
    w = xp.zeros((len(idx),), dtype=xp.float64)
    for k, (i, j) in enumerate(idx):
        w[k] = r[i, j]
    return w


def matdupdiagonefull(r: NDArray, *, xp=None) -> NDArray:
    """Convert off-diagonal elements to a symmetric matrix with unit diagonal.

    Examples
    --------
    >>> matdupdiagonefull(np.array([0.6, 0.5, 0.5]))
    array([[1. , 0.6, 0.5],
           [0.6, 1. , 0.5],
           [0.5, 0.5, 1. ]])
    """
    if xp is None:
        xp = array_namespace(r)
    r = xp.array(r, dtype=xp.float64)
    P = triangular_size(len(r), diagonal=False)
    w = xp.eye(P, dtype=xp.float64)
    for k, (i, j) in enumerate(upper_indices(P)):
        w[i, j] = r[k]
        w[j, i] = r[k]
    return w


def fill_unit_upper(
    r: NDArray, n: int, *, order: FillOrder = "row", xp=None
) -> NDArray:
    """Build an upper-triangular matrix with unit diagonal from its strict
    upper elements.

    Parameters
    ----------
    r : ndarray, shape (n*(n-1)//2,)
        Strict upper triangular elements.
    n : int
        Matrix dimension.
    order : {"row", "column"}
        Order in which ``r`` fills the strict upper triangle.
    xp : backend, optional

    Returns
    -------
    C : ndarray, shape (n, n)
        Unit upper-triangular matrix; the lower triangle is zero.

    Examples
    --------
    >>> fill_unit_upper(np.array([1.0, 2.0, 3.0]), 3)
    array([[1., 1., 2.],
           [0., 1., 3.],
           [0., 0., 1.]])
    >>> fill_unit_upper(np.arange(1.0, 7.0), 4, order="column")
    array([[1., 1., 2., 4.],
           [0., 1., 3., 5.],
           [0., 0., 1., 6.],
           [0., 0., 0., 1.]])
    """
    if xp is None:
        xp = array_namespace(r)
    r = xp.array(r, dtype=xp.float64)
    idx = upper_indices(n, order=order)
    if len(r) != len(idx):
        raise ValueError(
            f"Expected {len(idx)} elements for a {n}x{n} strict upper triangle, "
            f"got {len(r)}"
        )
    C = xp.eye(n, dtype=xp.float64)
    for k, (i, j) in enumerate(idx):
        C[i, j] = r[k]
    return C
