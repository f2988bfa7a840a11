"""
Exception hierarchy for densematrix.

All exceptions inherit from DenseMatrixError to allow catching any
library-specific error. Shape and index failures live under
ValidationError; failures that only surface during computation live
under NumericalError.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class DenseMatrixError(Exception):
    """Base exception for all densematrix errors."""
    pass


class ValidationError(DenseMatrixError):
    """
    Input validation failed.

    Raised when user-provided inputs cannot be interpreted, e.g. non-numeric
    data or an operand that is neither a Matrix nor a real scalar.
    """
    pass


class ShapeError(ValidationError):
    """
    Matrix dimensions are incorrect or inconsistent.

    Raised when operand shapes don't match, when a square matrix is
    required, when a zero-sized matrix is requested, or when rows have
    inconsistent lengths.
    """
    pass


class MatrixIndexError(ShapeError, IndexError):
    """
    Index outside the valid range.

    Subclasses both ShapeError and the builtin IndexError so callers can
    catch whichever fits their code.

    Attributes:
        index: The offending index
        bound: The exclusive upper bound that was violated
    """

    def __init__(
        self,
        message: str,
        index: int | None = None,
        bound: int | None = None,
    ):
        super().__init__(message)
        self.index = index
        self.bound = bound


class NumericalError(DenseMatrixError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when inversion finds no pivot whose magnitude reaches the
    singularity tolerance.

    Attributes:
        pivot_index: Column being eliminated when the failure occurred
        pivot_magnitude: Largest candidate pivot magnitude in that column
        tolerance: Threshold the pivot magnitude fell below
    """

    def __init__(
        self,
        message: str,
        pivot_index: int | None = None,
        pivot_magnitude: float | None = None,
        tolerance: float | None = None,
    ):
        super().__init__(message)
        self.pivot_index = pivot_index
        self.pivot_magnitude = pivot_magnitude
        self.tolerance = tolerance


class DivisionByZeroError(NumericalError, ZeroDivisionError):
    """
    Division by exactly zero, directly or through a power.

    Raised for scalar division by zero and for raising a zero element to
    a non-positive exponent. Also a builtin ZeroDivisionError.

    Attributes:
        operation: Name of the operation that failed ('divide', 'power', 'sum')
        exponent: Exponent involved, for power-based failures
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        exponent: float | None = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.exponent = exponent
