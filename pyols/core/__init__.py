"""
Core infrastructure for PyOLS.

Shared abstractions used by the regression pipeline, the data generator and
the command-line tools.

Key components:
    matrix: Immutable dense Matrix (transpose, multiply, invert)
    datasource: Learning-file ingestion and prediction emission
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, tolerances, linear algebra kernels
"""

from pyols.core.protocols import Backend
from pyols.core.result import Result
from pyols.core.matrix import Matrix
from pyols.core.datasource import LearningTable, DEFAULT_DATA_FILE, write_matrix
from pyols.core.exceptions import (
    PyOLSError,
    ValidationError,
    DimensionError,
    DimensionMismatchError,
    MalformedInputError,
    NumericalError,
    SingularMatrixError,
    UsageError,
    NearSingularWarning,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    # Data
    "Matrix",
    "LearningTable",
    "DEFAULT_DATA_FILE",
    "write_matrix",
    # Exceptions
    "PyOLSError",
    "ValidationError",
    "DimensionError",
    "DimensionMismatchError",
    "MalformedInputError",
    "NumericalError",
    "SingularMatrixError",
    "UsageError",
    "NearSingularWarning",
]
