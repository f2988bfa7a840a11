"""
Elimination kernels for determinant and inverse.

Both routines run on a private float64 working copy and use partial
pivoting: the pivot for column i is the row at or below i with the
largest absolute value in that column (first such row on ties).

The asymmetry on near-zero pivots is intentional: a singular matrix has
a determinant of exactly 0.0, but no inverse.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import NDArray

from densematrix.core.compute.tolerances import PIVOT_TOLERANCE
from densematrix.core.exceptions import SingularMatrixError


def _pivot_row(work: NDArray[np.float64], i: int) -> tuple[int, float]:
    """Row index and magnitude of the largest |work[k, i]| for k >= i."""
    column = np.abs(work[i:, i])
    offset = int(np.argmax(column))
    return i + offset, float(column[offset])


def lu_determinant(
    data: NDArray[np.floating[Any]],
    tol: float = PIVOT_TOLERANCE,
) -> float:
    """
    Determinant via LU decomposition with partial pivoting.

    Reduces a copy of data to upper-triangular form, counting row swaps.
    The determinant is the diagonal product, negated for an odd number
    of swaps.

    Parameters
    ----------
    data : ndarray, shape (n, n)
        Square matrix. Not modified.
    tol : float
        Pivot magnitude below which the matrix is treated as singular.

    Returns
    -------
    float
        The determinant; exactly 0.0 when a pivot falls below tol.
    """
    lu = np.array(data, dtype=np.float64, copy=True)
    n = lu.shape[0]
    swaps = 0

    for i in range(n):
        pivot, magnitude = _pivot_row(lu, i)
        if magnitude < tol:
            return 0.0

        if pivot != i:
            lu[[i, pivot]] = lu[[pivot, i]]
            swaps += 1

        if i + 1 < n:
            factors = lu[i + 1:, i] / lu[i, i]
            lu[i + 1:, i:] -= np.outer(factors, lu[i, i:])

    sign = -1.0 if swaps % 2 else 1.0
    return sign * float(np.prod(np.diag(lu)))


def gauss_jordan_inverse(
    data: NDArray[np.floating[Any]],
    tol: float = PIVOT_TOLERANCE,
) -> NDArray[np.float64]:
    """
    Inverse via Gauss-Jordan elimination on [A | I].

    A working copy of A and an identity of the same size receive the same
    row operations: swap in the pivot row, normalize it, then clear the
    pivot column from every other row. When A has become I, the second
    matrix holds the inverse.

    Parameters
    ----------
    data : ndarray, shape (n, n)
        Square matrix. Not modified.
    tol : float
        Pivot magnitude below which the matrix is treated as singular.

    Returns
    -------
    ndarray, shape (n, n)

    Raises
    ------
    SingularMatrixError
        If no pivot candidate in some column reaches tol.
    """
    a = np.array(data, dtype=np.float64, copy=True)
    n = a.shape[0]
    inv = np.eye(n, dtype=np.float64)

    for i in range(n):
        pivot, magnitude = _pivot_row(a, i)
        if magnitude < tol:
            raise SingularMatrixError(
                f"Singular matrix: largest pivot candidate in column {i} is "
                f"{magnitude:.3e}, below tolerance {tol:.1e}",
                pivot_index=i,
                pivot_magnitude=magnitude,
                tolerance=tol,
            )

        if pivot != i:
            a[[i, pivot]] = a[[pivot, i]]
            inv[[i, pivot]] = inv[[pivot, i]]

        pivot_value = a[i, i]
        a[i] /= pivot_value
        inv[i] /= pivot_value

        factors = a[:, i].copy()
        factors[i] = 0.0
        a -= np.outer(factors, a[i])
        inv -= np.outer(factors, inv[i])

    return inv
