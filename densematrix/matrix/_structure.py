"""
Structural kernels: insertion, stacking and submatrix extraction.

Each function validates its arguments against the operand shape first,
then builds a new array. Operands are never modified.

Extraction spans are inclusive at both ends: (start, end) covers
indices start, start + 1, ..., end.
"""

from __future__ import annotations

import numbers
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from densematrix.core.exceptions import ShapeError
from densematrix.core.validation import (
    check_array,
    check_insert_index,
    check_length,
    check_span,
    format_shape,
)


def _line(values: ArrayLike | float, length: int, name: str) -> NDArray[np.float64]:
    """A row/column of `length` values from explicit values or a constant."""
    if isinstance(values, numbers.Real):
        return np.full(length, float(values), dtype=np.float64)
    line = check_array(values, name)
    check_length(line, length, name)
    return line


def insert_row(
    data: NDArray[np.float64],
    values: ArrayLike | float,
    index: int,
) -> NDArray[np.float64]:
    """Copy of data with a row inserted before position index."""
    n_rows, n_cols = data.shape
    row = _line(values, n_cols, "row")
    index = check_insert_index(index, n_rows, "row")
    return np.insert(data, index, row, axis=0)


def insert_col(
    data: NDArray[np.float64],
    values: ArrayLike | float,
    index: int,
) -> NDArray[np.float64]:
    """Copy of data with a column inserted before position index."""
    n_rows, n_cols = data.shape
    col = _line(values, n_rows, "column")
    index = check_insert_index(index, n_cols, "column")
    return np.insert(data, index, col, axis=1)


def hstack(left: NDArray[np.float64], right: NDArray[np.float64]) -> NDArray[np.float64]:
    """Rows of left followed by rows of right, side by side."""
    if left.shape[0] != right.shape[0]:
        raise ShapeError(
            "Horizontal stack requires the same number of rows: "
            f"{format_shape(left.shape)} vs {format_shape(right.shape)}"
        )
    return np.hstack((left, right))


def vstack(top: NDArray[np.float64], bottom: NDArray[np.float64]) -> NDArray[np.float64]:
    """Rows of top followed by the rows of bottom."""
    if top.shape[1] != bottom.shape[1]:
        raise ShapeError(
            "Vertical stack requires the same number of columns: "
            f"{format_shape(top.shape)} vs {format_shape(bottom.shape)}"
        )
    return np.vstack((top, bottom))


def extract(
    data: NDArray[np.float64],
    rows: Any,
    cols: Any,
) -> NDArray[np.float64]:
    """
    Copy of the block data[r0..r1, c0..c1], both spans inclusive.

    Raises
    ------
    MatrixIndexError
        If a bound is outside the matrix or a span starts after it ends.
    """
    r0, r1 = check_span(rows, data.shape[0], "rows")
    c0, c1 = check_span(cols, data.shape[1], "cols")
    return data[r0:r1 + 1, c0:c1 + 1].copy()
