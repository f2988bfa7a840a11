"""
Matrix: dense two-dimensional float64 value type.

Wraps an owned, rectangular float64 array with at least one row and one
column. Every operation except element assignment and row shuffling
returns a new Matrix and leaves its operands untouched.

Construction:
    Matrix([[1, 2], [3, 4]])
    Matrix.identity(3)
    Matrix.constant_matrix(2, 3, 0.5)
"""

from __future__ import annotations

import numbers
from typing import Any, Callable, Iterator
import numpy as np
from numpy.typing import ArrayLike, NDArray

from densematrix.core.compute.tolerances import EQUALITY_TOLERANCE
from densematrix.core.exceptions import DivisionByZeroError, ShapeError, ValidationError
from densematrix.core.protocols import ExecutionBackend
from densematrix.core.validation import (
    check_2d,
    check_array,
    check_index,
    check_nonempty,
    check_positive_dimension,
    check_rows,
    check_same_shape,
    check_scalar,
    check_square,
    format_shape,
)
from densematrix.matrix import _linalg, _reduce, _shuffle, _structure
from densematrix.matrix.solvers import BackendChoice, get_backend


def _is_scalar(value: Any) -> bool:
    return isinstance(value, numbers.Real)


def _from_trusted(data: NDArray[np.float64]) -> Matrix:
    """
    Wrap an array the caller guarantees is rectangular and owned.

    Skips the row scan of the public constructor but still refuses a
    zero-sized result.
    """
    check_nonempty(data.shape, "result")
    matrix = Matrix.__new__(Matrix)
    matrix._data = data
    return matrix


class Matrix:
    """
    Dense matrix of float64 values.

    Parameters
    ----------
    rows : sequence of sequences, 2D ndarray, or Matrix
        Row data. Copied into storage owned by the new Matrix.

    Raises
    ------
    ShapeError
        If there are no rows, no columns, or rows differ in length.
    ValidationError
        If the data is not real and numeric.
    """

    __slots__ = ('_data',)

    # Let numpy defer to our reflected operators instead of broadcasting.
    __array_ufunc__ = None

    # Mutable with value equality.
    __hash__ = None

    def __init__(self, rows: ArrayLike | Matrix):
        if isinstance(rows, Matrix):
            data = rows._data.copy()
        elif isinstance(rows, np.ndarray):
            data = check_array(rows, "rows")
            check_2d(data, "rows")
        else:
            data = check_array(check_rows(rows, "rows"), "rows")
        check_nonempty(data.shape, "rows")
        self._data: NDArray[np.float64] = data

    @classmethod
    def identity(cls, n: int) -> Matrix:
        """n x n matrix with ones on the diagonal and zeros elsewhere."""
        dim = check_positive_dimension(n, "n")
        return _from_trusted(np.eye(dim, dtype=np.float64))

    @classmethod
    def constant_matrix(cls, rows: int, cols: int, value: float) -> Matrix:
        """
        rows x cols matrix with every element equal to value.

        Raises
        ------
        ShapeError
            If rows or cols is zero.
        """
        n_rows = check_positive_dimension(rows, "rows")
        n_cols = check_positive_dimension(cols, "cols")
        fill = check_scalar(value, "value")
        return _from_trusted(np.full((n_rows, n_cols), fill, dtype=np.float64))

    # ──────────────────────────────────────────────────────────────────
    # Shape and element access
    # ──────────────────────────────────────────────────────────────────

    @property
    def shape(self) -> tuple[int, int]:
        """(n_rows, n_cols)."""
        return (int(self._data.shape[0]), int(self._data.shape[1]))

    @property
    def n_rows(self) -> int:
        return int(self._data.shape[0])

    @property
    def n_cols(self) -> int:
        return int(self._data.shape[1])

    @property
    def size(self) -> int:
        """Total number of elements."""
        return int(self._data.size)

    def get(self, row: int, col: int) -> float:
        """Element at (row, col)."""
        i = check_index(row, self.n_rows, "row")
        j = check_index(col, self.n_cols, "col")
        return float(self._data[i, j])

    def set(self, row: int, col: int, value: float) -> None:
        """Assign the element at (row, col) in place."""
        i = check_index(row, self.n_rows, "row")
        j = check_index(col, self.n_cols, "col")
        self._data[i, j] = check_scalar(value, "value")

    def _split_key(self, key: Any) -> tuple[Any, Any]:
        if not isinstance(key, tuple) or len(key) != 2:
            raise ValidationError(
                f"Matrix indices must be a (row, col) pair, got {key!r}"
            )
        return key

    def __getitem__(self, key: tuple[int, int]) -> float:
        return self.get(*self._split_key(key))

    def __setitem__(self, key: tuple[int, int], value: float) -> None:
        self.set(*self._split_key(key), value)

    def __iter__(self) -> Iterator[list[float]]:
        for row in self._data:
            yield row.tolist()

    # ──────────────────────────────────────────────────────────────────
    # Conversion
    # ──────────────────────────────────────────────────────────────────

    def copy(self) -> Matrix:
        """Independent copy with its own storage."""
        return _from_trusted(self._data.copy())

    def __copy__(self) -> Matrix:
        return self.copy()

    def __deepcopy__(self, memo: dict) -> Matrix:
        return self.copy()

    def to_list(self) -> list[list[float]]:
        """Rows as nested Python lists. Modifying them does not affect the matrix."""
        return self._data.tolist()

    def to_numpy(self) -> NDArray[np.float64]:
        """Copy of the data as a 2D float64 array."""
        return self._data.copy()

    def __array__(self, dtype: Any = None, copy: bool | None = None) -> NDArray[Any]:
        return np.array(self._data, dtype=dtype, copy=True)

    def __repr__(self) -> str:
        return f"Matrix(shape={self.shape})"

    def __str__(self) -> str:
        lines = ["["]
        last = self.n_rows - 1
        for i, row in enumerate(self._data):
            body = ", ".join(f"{v:g}" for v in row)
            lines.append(f"  [{body}]" + ("," if i < last else ""))
        lines.append("]")
        return "\n".join(lines)

    # ──────────────────────────────────────────────────────────────────
    # Elementwise arithmetic
    # ──────────────────────────────────────────────────────────────────

    def _map(
        self,
        shape: tuple[int, int],
        kernel: Callable[[slice], NDArray[np.float64]],
        backend: BackendChoice | ExecutionBackend,
    ) -> Matrix:
        out = np.empty(shape, dtype=np.float64)
        get_backend(backend, out.size).fill(out, kernel)
        return _from_trusted(out)

    def add(
        self,
        other: Matrix | float,
        *,
        backend: BackendChoice | ExecutionBackend = 'auto',
    ) -> Matrix:
        """
        Elementwise sum with a same-shaped matrix, or a scalar added to every element.

        Raises
        ------
        ShapeError
            If other is a Matrix of a different shape.
        """
        a = self._data
        if isinstance(other, Matrix):
            check_same_shape(self.shape, other.shape, "Addition")
            b = other._data
            return self._map(self.shape, lambda rows: a[rows] + b[rows], backend)
        k = check_scalar(other, "scalar")
        return self._map(self.shape, lambda rows: a[rows] + k, backend)

    def subtract(
        self,
        other: Matrix | float,
        *,
        backend: BackendChoice | ExecutionBackend = 'auto',
    ) -> Matrix:
        """
        Elementwise difference with a same-shaped matrix, or a scalar
        subtracted from every element.
        """
        a = self._data
        if isinstance(other, Matrix):
            check_same_shape(self.shape, other.shape, "Subtraction")
            b = other._data
            return self._map(self.shape, lambda rows: a[rows] - b[rows], backend)
        k = check_scalar(other, "scalar")
        return self._map(self.shape, lambda rows: a[rows] - k, backend)

    def rsubtract(
        self,
        scalar: float,
        *,
        backend: BackendChoice | ExecutionBackend = 'auto',
    ) -> Matrix:
        """scalar - self, element by element."""
        a = self._data
        k = check_scalar(scalar, "scalar")
        return self._map(self.shape, lambda rows: k - a[rows], backend)

    def multiply(
        self,
        other: Matrix | float,
        *,
        backend: BackendChoice | ExecutionBackend = 'auto',
    ) -> Matrix:
        """
        Matrix product with another matrix, or scaling by a scalar.

        For (m x n) times (n x p) the result is (m x p) with
        result[i, j] = sum over k of self[i, k] * other[k, j].

        Raises
        ------
        ShapeError
            If self has a different number of columns than other has rows.
        """
        a = self._data
        if isinstance(other, Matrix):
            if self.n_cols != other.n_rows:
                raise ShapeError(
                    "Incorrect dimensions: for (m x n) times (p x r), n must equal p. "
                    f"Given: {format_shape(self.shape)} and {format_shape(other.shape)}"
                )
            b = other._data
            return self._map(
                (self.n_rows, other.n_cols), lambda rows: a[rows] @ b, backend
            )
        k = check_scalar(other, "scalar")
        return self._map(self.shape, lambda rows: a[rows] * k, backend)

    def divide(
        self,
        scalar: float,
        *,
        backend: BackendChoice | ExecutionBackend = 'auto',
    ) -> Matrix:
        """
        Every element divided by scalar.

        Raises
        ------
        DivisionByZeroError
            If scalar is exactly zero.
        """
        k = check_scalar(scalar, "scalar")
        if k == 0:
            raise DivisionByZeroError("Division by zero", operation="divide")
        return self.multiply(1 / k, backend=backend)

    def power(
        self,
        exponent: float,
        *,
        backend: BackendChoice | ExecutionBackend = 'auto',
    ) -> Matrix:
        """
        Every element raised to exponent.

        Raises
        ------
        DivisionByZeroError
            If exponent <= 0 and any element is zero.
        """
        p = check_scalar(exponent, "exponent")
        if p == 1:
            return self.copy()
        _reduce.check_zero_power(self._data, p, "power")
        a = self._data

        def kernel(rows: slice) -> NDArray[np.float64]:
            with np.errstate(invalid='ignore'):
                return np.power(a[rows], p)

        return self._map(self.shape, kernel, backend)

    def __add__(self, other: Any) -> Matrix:
        if isinstance(other, Matrix) or _is_scalar(other):
            return self.add(other)
        return NotImplemented

    def __radd__(self, other: Any) -> Matrix:
        if _is_scalar(other):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other: Any) -> Matrix:
        if isinstance(other, Matrix) or _is_scalar(other):
            return self.subtract(other)
        return NotImplemented

    def __rsub__(self, other: Any) -> Matrix:
        if _is_scalar(other):
            return self.rsubtract(other)
        return NotImplemented

    def __mul__(self, other: Any) -> Matrix:
        if isinstance(other, Matrix) or _is_scalar(other):
            return self.multiply(other)
        return NotImplemented

    def __rmul__(self, other: Any) -> Matrix:
        if _is_scalar(other):
            return self.multiply(other)
        return NotImplemented

    def __matmul__(self, other: Any) -> Matrix:
        if isinstance(other, Matrix):
            return self.multiply(other)
        return NotImplemented

    def __truediv__(self, other: Any) -> Matrix:
        if _is_scalar(other):
            return self.divide(other)
        return NotImplemented

    def __pow__(self, other: Any) -> Matrix:
        if _is_scalar(other):
            return self.power(other)
        return NotImplemented

    # ──────────────────────────────────────────────────────────────────
    # Linear algebra
    # ──────────────────────────────────────────────────────────────────

    def determinant(self) -> float:
        """
        Determinant by LU decomposition with partial pivoting.

        Returns exactly 0.0 for a numerically singular matrix.

        Raises
        ------
        ShapeError
            If the matrix is not square.
        """
        check_square(self.shape, "Determinant")
        return _linalg.lu_determinant(self._data)

    def inverse(self) -> Matrix:
        """
        Inverse by Gauss-Jordan elimination with partial pivoting.

        Raises
        ------
        ShapeError
            If the matrix is not square.
        SingularMatrixError
            If a pivot falls below the singularity tolerance.
        """
        check_square(self.shape, "Inverse")
        return _from_trusted(_linalg.gauss_jordan_inverse(self._data))

    # ──────────────────────────────────────────────────────────────────
    # Structural transforms
    # ──────────────────────────────────────────────────────────────────

    def transpose(
        self,
        *,
        backend: BackendChoice | ExecutionBackend = 'auto',
    ) -> Matrix:
        """(n_cols x n_rows) matrix with result[j, i] == self[i, j]."""
        a = self._data
        return self._map(
            (self.n_cols, self.n_rows), lambda rows: a[:, rows].T, backend
        )

    @property
    def T(self) -> Matrix:
        return self.transpose()

    def insert_row(self, values: ArrayLike | float, index: int) -> Matrix:
        """
        Copy with a row inserted before position index.

        values is either n_cols explicit values or one constant repeated
        across the row. index == n_rows appends.
        """
        return _from_trusted(_structure.insert_row(self._data, values, index))

    def insert_col(self, values: ArrayLike | float, index: int) -> Matrix:
        """Copy with a column inserted before position index; see insert_row."""
        return _from_trusted(_structure.insert_col(self._data, values, index))

    def hstack(self, other: Matrix) -> Matrix:
        """self and other side by side; row counts must match."""
        return _from_trusted(_structure.hstack(self._data, _as_matrix(other)._data))

    def vstack(self, other: Matrix) -> Matrix:
        """Rows of other appended below self; column counts must match."""
        return _from_trusted(_structure.vstack(self._data, _as_matrix(other)._data))

    def extract_matrix(
        self,
        rows: tuple[int, int],
        cols: tuple[int, int],
    ) -> Matrix:
        """
        Submatrix covering rows[0]..rows[1] and cols[0]..cols[1].

        Both spans are inclusive at both ends.

        Raises
        ------
        MatrixIndexError
            If a bound is out of range or a span starts after it ends.
        """
        return _from_trusted(_structure.extract(self._data, rows, cols))

    def extract_row(self, index: int) -> Matrix:
        """Row index as a (1 x n_cols) matrix."""
        i = check_index(index, self.n_rows, "row")
        return self.extract_matrix((i, i), (0, self.n_cols - 1))

    def extract_col(self, index: int) -> Matrix:
        """Column index as a (n_rows x 1) matrix."""
        j = check_index(index, self.n_cols, "col")
        return self.extract_matrix((0, self.n_rows - 1), (j, j))

    # ──────────────────────────────────────────────────────────────────
    # Reductions
    # ──────────────────────────────────────────────────────────────────

    def sum(self, power: float | None = None) -> float:
        """
        Sum of a row or column vector.

        With power, each element is raised to power before summing.

        Raises
        ------
        ShapeError
            If the matrix is not vector-shaped.
        DivisionByZeroError
            If power <= 0 and an element is zero.
        """
        if power is not None:
            power = check_scalar(power, "power")
        return _reduce.vector_sum(self._data, power)

    def mean(self) -> float:
        """Mean of a row or column vector."""
        return _reduce.vector_mean(self._data)

    def trace(self) -> float:
        """Sum of the diagonal of a square matrix."""
        return _reduce.trace(self._data)

    def equals(self, other: Matrix, epsilon: float = EQUALITY_TOLERANCE) -> bool:
        """
        True when shapes match and no pair of elements differs by more than epsilon.
        """
        eps = check_scalar(epsilon, "epsilon")
        return _reduce.allclose_abs(self._data, _as_matrix(other)._data, eps)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.equals(other)

    def __ne__(self, other: Any) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return not self.equals(other)

    # ──────────────────────────────────────────────────────────────────
    # Row permutation
    # ──────────────────────────────────────────────────────────────────

    def shuffle_rows(
        self,
        seed: int | None = None,
        *,
        rng: np.random.Generator | None = None,
    ) -> None:
        """
        Reorder whole rows in place with a random permutation.

        The same seed on the same starting rows always yields the same
        order. Without seed or rng, entropy is drawn from the OS once.
        """
        generator = _shuffle.resolve_rng(seed, rng)
        _shuffle.shuffle_rows(self._data, generator)


def _as_matrix(value: Any) -> Matrix:
    if not isinstance(value, Matrix):
        raise ValidationError(
            f"other: expected Matrix, got {type(value).__name__}"
        )
    return value
