"""
Solver dispatch for regression.

This module provides fit() and predict() (public API), backend selection,
and fit_table() which runs the whole learning-file pipeline.
"""

import logging
from typing import Literal
from numpy.typing import ArrayLike

from pyols.core.datasource import LearningTable
from pyols.core.exceptions import DimensionMismatchError
from pyols.core.matrix import Matrix
from pyols.regression.design import RegressionDesign, add_intercept, as_matrix
from pyols.regression.solution import RegressionSolution
from pyols.regression.backends.cpu import CPUNormalEquationsBackend

logger = logging.getLogger(__name__)


# Type alias for backend selection
BackendChoice = Literal['auto', 'cpu', 'cpu_gauss_jordan']


def fit(
    X: Matrix | ArrayLike,
    Y: Matrix | ArrayLike,
    *,
    intercept: bool = False,
    backend: BackendChoice = 'auto',
) -> RegressionSolution:
    """
    Fit a multivariate linear regression model.

    Solves the ordinary least squares problem column by column of Y:
        min_B ||Y - XB||²
    through the normal equations B = (X'X)⁻¹ X'Y.

    Args:
        X: Design matrix (n x p), a Matrix or any 2-D array-like
        Y: Response matrix (n x q); 1-D input is one output column
        intercept: If True, prepend a column of ones to X
        backend: Computational backend to use:
            - 'auto' / 'cpu' / 'cpu_gauss_jordan': normal equations with
              Gauss-Jordan inversion

    Returns:
        RegressionSolution with coefficient matrix B and diagnostics

    Raises:
        ValidationError: If inputs are non-numeric or non-finite
        DimensionMismatchError: If X and Y have different row counts
        SingularMatrixError: If X'X is singular

    Example:
        >>> X = [[1, 1], [1, 2], [1, 3]]
        >>> Y = [[2], [4], [6]]
        >>> result = fit(X, Y)
        >>> result.coefficients.to_list()   # intercept ~0, slope ~2
        >>> result.predict([[1, 4]]).to_list()  # ~8
    """
    # === Construct Design ===
    # This is the boundary - validate here, trust everywhere else
    design = RegressionDesign.build(X, Y, intercept=intercept)

    # === Select Backend ===
    backend_impl = _get_backend(backend)

    # === Solve ===
    result = backend_impl.solve(design)
    logger.info(
        "Fitted %dx%d coefficients from %d observations with %s",
        design.p, design.q, design.n, backend_impl.name,
    )

    # === Wrap and Return ===
    return RegressionSolution(_result=result, _design=design)


def predict(
    X_new: Matrix | ArrayLike,
    B: Matrix | RegressionSolution,
) -> Matrix:
    """
    Apply a coefficient matrix to new design rows: X_new · B.

    Args:
        X_new: New design rows (m x p), with the same columns as the
            training design (including the ones column)
        B: Coefficient matrix (p x q), or a RegressionSolution

    Returns:
        Predictions (m x q)

    Raises:
        DimensionMismatchError: If X_new.columns != B.rows
    """
    coefficients = B.coefficients if isinstance(B, RegressionSolution) else as_matrix(B, 'B')
    X_mat = as_matrix(X_new, 'X_new')
    if X_mat.columns != coefficients.rows:
        raise DimensionMismatchError(
            f"Cannot predict: new inputs have {X_mat.columns} design columns but the "
            f"model has {coefficients.rows} coefficient rows",
            left_shape=X_mat.shape,
            right_shape=coefficients.shape,
            operation='predict',
        )
    return X_mat.multiply(coefficients)


def fit_table(
    table: LearningTable,
    *,
    backend: BackendChoice = 'auto',
) -> tuple[RegressionSolution, Matrix]:
    """
    Run the learning-file pipeline: fit on the training rows, then predict
    the prediction rows. Both phases get their own intercept-augmented matrix.

    Returns:
        (solution, predictions) where predictions is prediction_count x output_count
    """
    solution = fit(table.inputs, table.outputs, intercept=True, backend=backend)
    predictions = predict(add_intercept(table.prediction_inputs), solution)
    return solution, predictions


def _get_backend(choice: BackendChoice) -> CPUNormalEquationsBackend:
    """
    Select and instantiate the appropriate backend.

    Raises:
        ValueError: If unknown backend specified
    """
    if choice in ('auto', 'cpu', 'cpu_gauss_jordan'):
        return CPUNormalEquationsBackend()
    raise ValueError(f"Unknown backend: {choice!r}")
