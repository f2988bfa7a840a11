"""
densematrix: dense numeric matrices for Python.

A small linear algebra value type: shape-checked construction,
elementwise and matrix arithmetic, LU determinant, Gauss-Jordan inverse,
stacking and slicing, vector reductions and seeded row shuffling. Large
elementwise work can be split across threads.

Submodules:
    matrix: The Matrix type and its execution backends
    core: Exceptions, validators, tolerances
"""

__version__ = "0.6.1"

from densematrix.matrix import Matrix
from densematrix.core.exceptions import (
    DenseMatrixError,
    ValidationError,
    ShapeError,
    MatrixIndexError,
    NumericalError,
    SingularMatrixError,
    DivisionByZeroError,
)

identity = Matrix.identity
constant_matrix = Matrix.constant_matrix

__all__ = [
    "__version__",
    "Matrix",
    "identity",
    "constant_matrix",
    "DenseMatrixError",
    "ValidationError",
    "ShapeError",
    "MatrixIndexError",
    "NumericalError",
    "SingularMatrixError",
    "DivisionByZeroError",
]
