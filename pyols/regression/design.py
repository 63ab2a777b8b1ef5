"""
Regression Design.

Design holds the design matrix X and the response matrix Y as Matrix
objects, already validated and dimensionally consistent. It knows it is
building a regression; the learning table it may come from doesn't.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike

from pyols.core.exceptions import DimensionError, DimensionMismatchError
from pyols.core.matrix import Matrix
from pyols.core.validation import check_array

if TYPE_CHECKING:
    from pyols.core.datasource import LearningTable


@dataclass(frozen=True)
class RegressionDesign:
    """
    Regression design specification.

    Immutable after construction.

    Construction:
        RegressionDesign.build(X, Y)                  # X already has the ones column
        RegressionDesign.build(X, Y, intercept=True)  # ones column prepended
        RegressionDesign.from_table(table)            # learning file, intercept added
    """
    _X: Matrix
    _Y: Matrix
    _has_intercept: bool = False

    @classmethod
    def build(
        cls,
        X: Matrix | ArrayLike,
        Y: Matrix | ArrayLike,
        *,
        intercept: bool = False,
    ) -> RegressionDesign:
        """
        Build and validate a design.

        Args:
            X: Design matrix (n x p). 1-D input is treated as one column.
            Y: Response matrix (n x q). 1-D input is treated as one column.
            intercept: If True, prepend a column of ones to X

        Raises:
            DimensionMismatchError: If X and Y have different row counts
            ValidationError: If inputs are non-numeric or non-finite
        """
        X_mat = as_matrix(X, 'X')
        Y_mat = as_matrix(Y, 'Y')

        if intercept:
            X_mat = add_intercept(X_mat)

        if X_mat.rows != Y_mat.rows:
            raise DimensionMismatchError(
                f"X has {X_mat.rows} rows but Y has {Y_mat.rows}; "
                f"every observation needs both inputs and targets",
                left_shape=X_mat.shape,
                right_shape=Y_mat.shape,
                operation='fit',
            )

        return cls(_X=X_mat, _Y=Y_mat, _has_intercept=intercept)

    @classmethod
    def from_table(cls, table: 'LearningTable') -> RegressionDesign:
        """Build the design for a learning table's training rows."""
        return cls.build(table.inputs, table.outputs, intercept=True)

    # === Properties ===

    @property
    def X(self) -> Matrix:
        """Design matrix (n x p)."""
        return self._X

    @property
    def Y(self) -> Matrix:
        """Response matrix (n x q)."""
        return self._Y

    @property
    def n(self) -> int:
        """Number of observations."""
        return self._X.rows

    @property
    def p(self) -> int:
        """Number of design columns, intercept included."""
        return self._X.columns

    @property
    def q(self) -> int:
        """Number of outputs."""
        return self._Y.columns

    @property
    def has_intercept(self) -> bool:
        """True if the leading ones column was added by this design."""
        return self._has_intercept

    @property
    def metadata(self) -> dict[str, Any]:
        return {'n': self.n, 'p': self.p, 'q': self.q, 'has_intercept': self.has_intercept}


def as_matrix(value: Matrix | ArrayLike, name: str) -> Matrix:
    """
    Coerce a Matrix or array-like to a Matrix.

    1-D input becomes a single column; anything beyond 2-D is rejected.
    """
    if isinstance(value, Matrix):
        return value
    array = check_array(value, name)
    if array.ndim == 1:
        array = array.reshape(-1, 1)
    if array.ndim != 2:
        raise DimensionError(
            f"{name}: expected 1D or 2D array, got {array.ndim}D with shape {array.shape}"
        )
    return Matrix.from_array(array)


def add_intercept(inputs: Matrix | ArrayLike) -> Matrix:
    """Return a new matrix with a leading column of ones."""
    data = as_matrix(inputs, 'inputs').to_array()
    ones = np.ones((data.shape[0], 1), dtype=np.float64)
    return Matrix.from_array(np.hstack([ones, data]))
