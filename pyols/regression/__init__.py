"""
Multivariate linear regression by ordinary least squares.

Public API:
    fit(X, Y, ...) -> RegressionSolution
    predict(X_new, B) -> Matrix
    fit_table(table) -> (RegressionSolution, Matrix)

fit() handles:
    - Input validation
    - Design construction
    - Backend selection
    - Result wrapping

Example:
    >>> from pyols.regression import fit, predict
    >>> result = fit(X, Y, intercept=True)
    >>> print(result.coefficients)
    >>> print(result.summary())
"""

from pyols.regression.design import RegressionDesign, add_intercept
from pyols.regression.solution import RegressionSolution, RegressionParams
from pyols.regression.solvers import fit, predict, fit_table

__all__ = [
    "fit",
    "predict",
    "fit_table",
    "add_intercept",
    "RegressionDesign",
    "RegressionSolution",
    "RegressionParams",
]
