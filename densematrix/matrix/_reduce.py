"""
Reductions and comparisons.

Sums and means are defined for vector-shaped matrices only; trace needs
a square matrix. Equality is absolute-tolerance per element.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import NDArray

from densematrix.core.compute.tolerances import EQUALITY_TOLERANCE
from densematrix.core.exceptions import DivisionByZeroError
from densematrix.core.validation import check_square, check_vector


def check_zero_power(
    data: NDArray[np.floating[Any]],
    exponent: float,
    operation: str,
) -> None:
    """
    Reject raising a zero element to a non-positive exponent.

    Raises
    ------
    DivisionByZeroError
        If exponent <= 0 and any element is exactly zero.
    """
    if exponent <= 0 and np.any(data == 0):
        raise DivisionByZeroError(
            f"{operation}: division by zero, 0 raised to non-positive power {exponent:g}",
            operation=operation,
            exponent=exponent,
        )


def vector_sum(
    data: NDArray[np.floating[Any]],
    power: float | None = None,
) -> float:
    """
    Sum of a row or column vector, optionally of each element to a power.

    Raises
    ------
    ShapeError
        If data is not (1 x k) or (k x 1).
    DivisionByZeroError
        If power <= 0 and an element is zero.
    """
    check_vector(data.shape, "Sum")
    if power is None:
        return float(np.sum(data))

    check_zero_power(data, power, "sum")
    with np.errstate(invalid='ignore'):
        return float(np.sum(np.power(data, power)))


def vector_mean(data: NDArray[np.floating[Any]]) -> float:
    """Mean of a row or column vector."""
    check_vector(data.shape, "Mean")
    return float(np.sum(data)) / data.size


def trace(data: NDArray[np.floating[Any]]) -> float:
    """Sum of the main diagonal of a square matrix."""
    check_square(data.shape, "Trace")
    return float(np.trace(data))


def allclose_abs(
    left: NDArray[np.floating[Any]],
    right: NDArray[np.floating[Any]],
    epsilon: float = EQUALITY_TOLERANCE,
) -> bool:
    """
    True when shapes match and every |left - right| <= epsilon.

    NaN never compares within tolerance, so arrays holding NaN are not
    equal to anything, themselves included.
    """
    if left.shape != right.shape:
        return False
    with np.errstate(invalid='ignore'):
        return bool(np.all(np.abs(left - right) <= epsilon))
