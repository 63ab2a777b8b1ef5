"""
What a regression fit produces.

RegressionParams is the raw payload a backend computes; RegressionSolution
wraps it with the design and derives goodness of fit and coefficient
inference from it on demand.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import stats

from pyols.core.matrix import Matrix
from pyols.core.result import Result

if TYPE_CHECKING:
    from pyols.regression.design import RegressionDesign


@dataclass(frozen=True)
class RegressionParams:
    """
    Parameter payload for multivariate OLS.

    This is the immutable data computed by backends. Per-output statistics
    are arrays of length q, one entry per column of Y.
    """
    coefficients: Matrix
    xtx_inverse: Matrix
    fitted_values: Matrix
    residuals: Matrix
    rss: NDArray[np.floating[Any]]
    tss: NDArray[np.floating[Any]]
    rank: int
    df_residual: int


@dataclass
class RegressionSolution:
    """
    Fitted multivariate OLS model.

    Wraps the backend Result and provides accessors for the coefficient
    matrix B, goodness of fit per output, and coefficient inference.
    """
    _result: Result[RegressionParams]
    _design: 'RegressionDesign'

    # Cached computations
    _standard_errors: NDArray[np.floating[Any]] | None = None

    @property
    def coefficients(self) -> Matrix:
        """B, shape (p x q)."""
        return self._result.params.coefficients

    @property
    def xtx_inverse(self) -> Matrix:
        """(X'X)⁻¹ from the fit."""
        return self._result.params.xtx_inverse

    @property
    def fitted_values(self) -> Matrix:
        return self._result.params.fitted_values

    @property
    def residuals(self) -> Matrix:
        return self._result.params.residuals

    @property
    def rss(self) -> NDArray[np.floating[Any]]:
        return self._result.params.rss

    @property
    def tss(self) -> NDArray[np.floating[Any]]:
        return self._result.params.tss

    @property
    def r_squared(self) -> NDArray[np.floating[Any]]:
        """Coefficient of determination per output."""
        rss, tss = self.rss, self.tss
        with np.errstate(divide='ignore', invalid='ignore'):
            r2 = 1.0 - rss / tss
        # A constant target is either fitted exactly or not at all
        return np.where(tss == 0, np.where(rss == 0, 1.0, 0.0), r2)

    @property
    def residual_std_error(self) -> NDArray[np.floating[Any]]:
        df = self.df_residual
        if df <= 0:
            return np.zeros_like(self.rss)
        return np.sqrt(self.rss / df)

    @property
    def standard_errors(self) -> NDArray[np.floating[Any]]:
        """
        Standard errors of coefficients, shape (p x q).

        Computed column by column as SE(B[:, j]) = sqrt(σ²_j diag((X'X)⁻¹)).
        NaN when there are no residual degrees of freedom.
        """
        if self._standard_errors is not None:
            return self._standard_errors

        p, q = self.coefficients.shape
        df = self.df_residual
        if df <= 0:
            self._standard_errors = np.full((p, q), np.nan, dtype=np.float64)
            return self._standard_errors

        sigma_sq = self.rss / df
        diag = np.diag(self.xtx_inverse.to_array())
        # Rounding can push tiny diagonal entries below zero
        self._standard_errors = np.sqrt(np.outer(np.clip(diag, 0.0, None), sigma_sq))
        return self._standard_errors

    @property
    def t_statistics(self) -> NDArray[np.floating[Any]]:
        """t-statistics for coefficients, shape (p x q)."""
        se = self.standard_errors
        with np.errstate(divide='ignore', invalid='ignore'):
            t = self.coefficients.to_array() / se
        return np.where(np.isfinite(t), t, np.nan)

    @property
    def p_values(self) -> NDArray[np.floating[Any]]:
        """Two-sided p-values from Student's t with df_residual degrees of freedom."""
        t = self.t_statistics
        if self.df_residual <= 0:
            return np.full_like(t, np.nan)
        return 2.0 * stats.t.sf(np.abs(t), self.df_residual)

    @property
    def rank(self) -> int:
        return self._result.params.rank

    @property
    def df_residual(self) -> int:
        return self._result.params.df_residual

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def predict(self, X_new: Matrix | ArrayLike) -> Matrix:
        """Apply the fitted coefficients to new design rows."""
        from pyols.regression.solvers import predict
        return predict(X_new, self.coefficients)

    def summary(self) -> str:
        """Generate a per-output coefficient table."""
        lines = [
            "Multivariate OLS Results",
            "=" * 68,
            f"Observations: {self._design.n}",
            f"Design columns: {self._design.p}"
            + (" (intercept added)" if self._design.has_intercept else ""),
            f"Outputs: {self._design.q}",
            f"Residual DF: {self.df_residual}",
        ]

        coefs = self.coefficients.to_array()
        se, t, pv = self.standard_errors, self.t_statistics, self.p_values
        r2, rse = self.r_squared, self.residual_std_error

        for j in range(coefs.shape[1]):
            lines += [
                "",
                f"Output {j}: R-squared {r2[j]:.6f}, Residual Std. Error {rse[j]:.6f}",
                "-" * 68,
                f"{'Term':<10} {'Estimate':>14} {'Std.Error':>12} {'t value':>10} {'Pr(>|t|)':>12}",
                "-" * 68,
            ]
            for i in range(coefs.shape[0]):
                term = "(Intercept)" if i == 0 and self._design.has_intercept else f"x[{i}]"
                se_str = f"{se[i, j]:12.6f}" if not np.isnan(se[i, j]) else f"{'NA':>12}"
                t_str = f"{t[i, j]:10.3f}" if not np.isnan(t[i, j]) else f"{'NA':>10}"
                p_str = f"{pv[i, j]:12.4g}" if not np.isnan(pv[i, j]) else f"{'NA':>12}"
                lines.append(f"{term:<10} {coefs[i, j]:14.6f} {se_str} {t_str} {p_str}")

        lines.append("-" * 68)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        for message in self.warnings:
            lines.append(f"Warning: {message}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"RegressionSolution(n={self._design.n}, p={self._design.p}, "
            f"q={self._design.q}, df_residual={self.df_residual})"
        )
