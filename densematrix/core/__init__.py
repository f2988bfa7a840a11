"""
Core infrastructure for densematrix.

This module provides the shared abstractions the Matrix type is built on.

Key components:
    protocols: ExecutionBackend protocol
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Tolerances and thresholds
"""

from densematrix.core.protocols import ExecutionBackend, RowKernel
from densematrix.core.exceptions import (
    DenseMatrixError,
    ValidationError,
    ShapeError,
    MatrixIndexError,
    NumericalError,
    SingularMatrixError,
    DivisionByZeroError,
)

__all__ = [
    # Protocols
    "ExecutionBackend",
    "RowKernel",
    # Exceptions
    "DenseMatrixError",
    "ValidationError",
    "ShapeError",
    "MatrixIndexError",
    "NumericalError",
    "SingularMatrixError",
    "DivisionByZeroError",
]
