"""
Dense matrix module.

Public API:
    Matrix                    - dense float64 matrix value type
    Matrix.identity(n)        - n x n identity
    Matrix.constant_matrix()  - constant-filled matrix
    get_backend()             - execution backend selection
"""

from densematrix.matrix.matrix import Matrix
from densematrix.matrix.solvers import BackendChoice, get_backend
from densematrix.matrix.backends import SerialBackend, ThreadedBackend

__all__ = [
    "Matrix",
    "BackendChoice",
    "get_backend",
    "SerialBackend",
    "ThreadedBackend",
]
