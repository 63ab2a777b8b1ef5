"""
Exception hierarchy for PyOLS.

All exceptions inherit from PyOLSError so callers can catch any
library-specific error with one clause. The command-line tools are the only
place these are caught and turned into exit statuses.
"""


class PyOLSError(Exception):
    """Base exception for all PyOLS errors."""


class ValidationError(PyOLSError):
    """Arguments or input data were rejected before any computation ran."""


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions, when flat
    values don't fill the requested shape, or when a function receives
    fewer inputs than it needs.
    """


class DimensionMismatchError(DimensionError):
    """
    Operand shapes are incompatible for a binary matrix operation.

    Attributes:
        left_shape: Shape of the left operand (rows, columns)
        right_shape: Shape of the right operand, if there is one
        operation: Name of the operation ('multiply', 'invert', 'predict', ...)
    """

    def __init__(
        self,
        message: str,
        left_shape: tuple[int, int] | None = None,
        right_shape: tuple[int, int] | None = None,
        operation: str | None = None,
    ):
        super().__init__(message)
        self.left_shape = left_shape
        self.right_shape = right_shape
        self.operation = operation


class MalformedInputError(ValidationError):
    """
    A learning file does not parse as the declared table shape.

    Attributes:
        path: File the data came from, if known
        position: Zero-based index of the offending token, if known
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
        position: int | None = None,
    ):
        super().__init__(message)
        self.path = path
        self.position = position


class NumericalError(PyOLSError):
    """The input was well formed but the arithmetic could not proceed."""


class SingularMatrixError(NumericalError):
    """
    Matrix is singular.

    Raised when Gauss-Jordan elimination finds a column with no nonzero
    pivot candidate.

    Attributes:
        matrix_name: Label of the matrix, e.g. "X'X"
        condition_number: Estimated condition number, if available
        rank: Number of pivots found before elimination stopped
        expected_rank: Expected rank (the matrix order)
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank


class UsageError(PyOLSError):
    """
    A command-line tool was invoked with missing or invalid arguments.

    Attributes:
        prog: Program name, if known
    """

    def __init__(self, message: str, prog: str | None = None):
        super().__init__(message)
        self.prog = prog


class NearSingularWarning(UserWarning):
    """Gauss-Jordan accepted a pivot that is tiny relative to the matrix scale."""
