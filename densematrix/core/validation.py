"""
Input validation utilities for densematrix.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except float64 conversion of numeric data)
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter or operation names included in all error messages
"""

import numbers
import operator
from typing import Any, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from densematrix.core.exceptions import (
    MatrixIndexError,
    ShapeError,
    ValidationError,
)


def format_shape(shape: tuple[int, ...]) -> str:
    """Render a shape as '(r x c)' for error messages."""
    return "(" + "x".join(str(d) for d in shape) + ")"


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.float64]:
    """
    Validate and convert input to an owned float64 numpy array.

    Accepts any array-like and copies it into a new float64 array. Rejects
    inputs that result in object dtype (indicating mixed types or ragged
    data), non-numeric dtypes, and complex values.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray of dtype float64 that shares no memory with the input

    Raises:
        ValidationError: If input cannot be converted to a real numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(
            f"{name}: complex dtype {result.dtype}, expected real numeric data"
        )

    return np.array(result, dtype=np.float64, order='C', copy=True)


def check_2d(array: NDArray[Any], name: str) -> None:
    """
    Verify array is 2-dimensional.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ShapeError: If array is not 2D
    """
    if array.ndim != 2:
        raise ShapeError(
            f"{name}: expected 2D array, got {array.ndim}D with shape {array.shape}"
        )


def check_rows(rows: Any, name: str) -> list[Sequence[Any]]:
    """
    Verify input is a non-empty sequence of equally long rows.

    Every row is scanned, so a ragged row anywhere is reported with its
    position and length.

    Args:
        rows: Candidate sequence of row sequences
        name: Parameter name for error messages

    Returns:
        The rows as a list

    Raises:
        ValidationError: If rows is not iterable
        ShapeError: If rows is empty, a row is not 1D, or row lengths differ
    """
    if isinstance(rows, (str, bytes)):
        raise ValidationError(
            f"{name}: expected a sequence of rows, got {type(rows).__name__}"
        )
    try:
        rows = list(rows)
    except TypeError as e:
        raise ValidationError(
            f"{name}: expected a sequence of rows, got {type(rows).__name__}"
        ) from e

    if len(rows) == 0:
        raise ShapeError(f"{name}: matrix is empty, expected at least one row")

    width = None
    for i, row in enumerate(rows):
        try:
            ndim = np.ndim(row)
        except ValueError as e:
            raise ShapeError(f"{name}: row {i} is not a flat sequence: {e}") from e
        if ndim != 1:
            raise ShapeError(
                f"{name}: row {i} must be a 1D sequence of scalars, got ndim={ndim}"
            )
        if width is None:
            width = len(row)
        elif len(row) != width:
            raise ShapeError(
                f"{name}: inconsistent row sizes, row 0 has {width} values "
                f"but row {i} has {len(row)}"
            )

    return rows


def check_nonempty(shape: tuple[int, int], name: str) -> None:
    """
    Verify a matrix shape has at least one row and one column.

    Raises:
        ShapeError: If either dimension is zero
    """
    if shape[0] == 0 or shape[1] == 0:
        raise ShapeError(
            f"{name}: matrix cannot have zero dimensions, got {format_shape(shape)}"
        )


def check_positive_dimension(value: Any, name: str) -> int:
    """
    Verify value is an integer dimension of at least 1.

    Args:
        value: Candidate dimension
        name: Parameter name for error messages

    Returns:
        The dimension as int

    Raises:
        ValidationError: If value is not an integer
        ShapeError: If value is less than 1
    """
    try:
        dim = operator.index(value)
    except TypeError as e:
        raise ValidationError(
            f"{name}: expected an integer dimension, got {type(value).__name__}"
        ) from e

    if dim < 1:
        raise ShapeError(f"{name}: dimension must be >= 1, got {dim}")
    return dim


def check_scalar(value: Any, name: str) -> float:
    """
    Verify value is a real scalar and return it as float.

    Raises:
        ValidationError: If value is not a real number
    """
    if not isinstance(value, numbers.Real):
        raise ValidationError(
            f"{name}: expected a real scalar, got {type(value).__name__}"
        )
    return float(value)


def check_index(index: Any, bound: int, name: str) -> int:
    """
    Verify 0 <= index < bound.

    Negative indices are rejected rather than wrapped.

    Args:
        index: Candidate index
        bound: Exclusive upper bound (the dimension size)
        name: Index name for error messages ('row', 'col', ...)

    Returns:
        The index as int

    Raises:
        ValidationError: If index is not an integer
        MatrixIndexError: If index is outside [0, bound)
    """
    try:
        idx = operator.index(index)
    except TypeError as e:
        raise ValidationError(
            f"{name}: expected an integer index, got {type(index).__name__}"
        ) from e

    if idx < 0 or idx >= bound:
        raise MatrixIndexError(
            f"{name} index {idx} out of range [0, {bound})",
            index=idx,
            bound=bound,
        )
    return idx


def check_insert_index(index: Any, bound: int, name: str) -> int:
    """
    Verify 0 <= index <= bound, the valid positions for an insertion.

    Inserting at bound appends.

    Raises:
        ValidationError: If index is not an integer
        MatrixIndexError: If index is outside [0, bound]
    """
    try:
        idx = operator.index(index)
    except TypeError as e:
        raise ValidationError(
            f"{name}: expected an integer index, got {type(index).__name__}"
        ) from e

    if idx < 0 or idx > bound:
        raise MatrixIndexError(
            f"{name} insertion index {idx} out of range [0, {bound}]",
            index=idx,
            bound=bound + 1,
        )
    return idx


def check_span(span: Any, bound: int, name: str) -> tuple[int, int]:
    """
    Verify span is an inclusive (start, end) pair inside [0, bound).

    Args:
        span: Two-element (start, end) pair, both ends inclusive
        bound: Exclusive upper bound (the dimension size)
        name: Span name for error messages ('rows', 'cols')

    Returns:
        (start, end) as ints

    Raises:
        ValidationError: If span is not a pair of integers
        MatrixIndexError: If either end is out of range or start > end
    """
    try:
        start, end = span
    except (TypeError, ValueError) as e:
        raise ValidationError(
            f"{name}: expected a (start, end) pair, got {span!r}"
        ) from e

    start = check_index(start, bound, f"{name} start")
    end = check_index(end, bound, f"{name} end")
    if start > end:
        raise MatrixIndexError(
            f"{name}: start {start} is greater than end {end}",
            index=start,
            bound=end + 1,
        )
    return start, end


def check_length(values: NDArray[Any], expected: int, name: str) -> None:
    """
    Verify a 1D array has exactly the expected number of values.

    Raises:
        ShapeError: If values is not 1D or its length differs from expected
    """
    if values.ndim != 1:
        raise ShapeError(
            f"{name}: expected a 1D sequence, got {values.ndim}D with shape {values.shape}"
        )
    if values.shape[0] != expected:
        raise ShapeError(
            f"{name}: expected {expected} values, got {values.shape[0]}"
        )


def check_same_shape(
    left: tuple[int, int],
    right: tuple[int, int],
    operation: str,
) -> None:
    """
    Verify two matrices have identical shapes.

    Raises:
        ShapeError: If the shapes differ, reporting both
    """
    if left != right:
        raise ShapeError(
            f"{operation}: matrix dimensions do not match: "
            f"{format_shape(left)} vs {format_shape(right)}"
        )


def check_square(shape: tuple[int, int], operation: str) -> None:
    """
    Verify a matrix is square.

    Raises:
        ShapeError: If rows != cols
    """
    if shape[0] != shape[1]:
        raise ShapeError(
            f"{operation} is only defined for square matrices, got {format_shape(shape)}"
        )


def check_vector(shape: tuple[int, int], operation: str) -> None:
    """
    Verify a matrix is a row vector (1, k) or a column vector (k, 1).

    Raises:
        ShapeError: If the matrix has more than one row and more than one column
    """
    if shape[0] != 1 and shape[1] != 1:
        raise ShapeError(
            f"{operation} can only be calculated for (k x 1) or (1 x k) matrices, "
            f"got {format_shape(shape)}"
        )
