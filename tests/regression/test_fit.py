"""
Tests for regression fit().

Tests the complete pipeline: Design construction, backend selection,
and solution properties.
"""

import warnings

import pytest
import numpy as np

from pyols.core.compute.tolerances import CPU_FP64_NORMAL_EQUATIONS
from pyols.core.exceptions import (
    DimensionMismatchError,
    NearSingularWarning,
    SingularMatrixError,
    ValidationError,
)
from pyols.core.matrix import Matrix
from pyols.regression import fit, RegressionDesign, RegressionSolution

TOL = CPU_FP64_NORMAL_EQUATIONS


class TestFitBasic:
    """Basic fit() functionality tests."""

    def test_fit_from_arrays(self, noiseless_regression_data):
        X, Y, _ = noiseless_regression_data
        result = fit(X, Y)
        assert isinstance(result, RegressionSolution)
        assert result.coefficients.shape == (4, 2)

    def test_fit_from_matrices(self, noiseless_regression_data):
        X, Y, B_true = noiseless_regression_data
        result = fit(Matrix.from_array(X), Matrix.from_array(Y))
        np.testing.assert_allclose(
            result.coefficients.to_array(), B_true, rtol=TOL.rtol, atol=TOL.atol
        )

    def test_recovers_noiseless_coefficients(self, noiseless_regression_data):
        X, Y, B_true = noiseless_regression_data
        result = fit(X, Y)
        np.testing.assert_allclose(
            result.coefficients.to_array(), B_true, rtol=TOL.rtol, atol=TOL.atol
        )

    def test_matches_lstsq(self, noisy_regression_data):
        x, y = noisy_regression_data
        result = fit(x, y, intercept=True)
        X = np.column_stack([np.ones(len(x)), x])
        expected, *_ = np.linalg.lstsq(X, y, rcond=None)
        np.testing.assert_allclose(
            result.coefficients.to_array().ravel(), expected, rtol=TOL.rtol, atol=TOL.atol
        )

    def test_line_through_origin(self):
        # y = 2x: intercept 0, slope 2
        result = fit([[1.0], [2.0], [3.0]], [2.0, 4.0, 6.0], intercept=True)
        B = result.coefficients
        assert B.shape == (2, 1)
        assert B[0, 0] == pytest.approx(0.0, abs=1e-10)
        assert B[1, 0] == pytest.approx(2.0)

    def test_1d_y_becomes_single_column(self, noisy_regression_data):
        x, y = noisy_regression_data
        result = fit(x, y, intercept=True)
        assert result.fitted_values.shape == (len(y), 1)

    def test_multi_output_columns_independent(self, noiseless_regression_data):
        X, Y, _ = noiseless_regression_data
        both = fit(X, Y).coefficients.to_array()
        first = fit(X, Y[:, 0]).coefficients.to_array()
        np.testing.assert_allclose(both[:, [0]], first, rtol=TOL.rtol, atol=TOL.atol)

    def test_intercept_flag_equals_explicit_column(self, noisy_regression_data):
        x, y = noisy_regression_data
        implicit = fit(x, y, intercept=True).coefficients
        explicit = fit(np.column_stack([np.ones(len(x)), x]), y).coefficients
        assert implicit.allclose(explicit)


class TestFitProperties:
    """Test derived properties of RegressionSolution."""

    def test_fitted_plus_residuals_equals_y(self, noisy_regression_data):
        x, y = noisy_regression_data
        result = fit(x, y, intercept=True)
        total = result.fitted_values.to_array() + result.residuals.to_array()
        np.testing.assert_allclose(total.ravel(), y, atol=1e-10)

    def test_residuals_sum_to_near_zero_with_intercept(self, noisy_regression_data):
        x, y = noisy_regression_data
        result = fit(x, y, intercept=True)
        assert abs(result.residuals.to_array().sum()) < 1e-8

    def test_rss_matches_residuals(self, noisy_regression_data):
        x, y = noisy_regression_data
        result = fit(x, y, intercept=True)
        r = result.residuals.to_array()[:, 0]
        assert result.rss[0] == pytest.approx(float(r @ r), rel=1e-12)

    def test_r_squared_near_one_for_low_noise(self, noisy_regression_data):
        x, y = noisy_regression_data
        result = fit(x, y, intercept=True)
        assert 0.99 < result.r_squared[0] <= 1.0

    def test_perfect_fit_r_squared(self, noiseless_regression_data):
        X, Y, _ = noiseless_regression_data
        np.testing.assert_allclose(fit(X, Y).r_squared, [1.0, 1.0], atol=1e-10)

    def test_constant_target_r_squared(self):
        result = fit([[1.0], [2.0], [3.0]], [5.0, 5.0, 5.0], intercept=True)
        assert result.tss[0] == 0.0
        assert result.r_squared[0] in (0.0, 1.0)

    def test_df_residual(self, noisy_regression_data):
        x, y = noisy_regression_data
        result = fit(x, y, intercept=True)
        assert result.df_residual == len(y) - 3
        assert result.rank == 3

    def test_standard_errors_match_formula(self, noisy_regression_data):
        x, y = noisy_regression_data
        result = fit(x, y, intercept=True)
        X = np.column_stack([np.ones(len(x)), x])
        sigma_sq = result.rss[0] / result.df_residual
        expected = np.sqrt(sigma_sq * np.diag(np.linalg.inv(X.T @ X)))
        np.testing.assert_allclose(result.standard_errors[:, 0], expected, rtol=1e-8)

    def test_p_values_in_zero_one(self, noisy_regression_data):
        x, y = noisy_regression_data
        pv = fit(x, y, intercept=True).p_values
        assert np.all(pv >= 0.0)
        assert np.all(pv <= 1.0)

    def test_strong_effects_are_significant(self, noisy_regression_data):
        x, y = noisy_regression_data
        pv = fit(x, y, intercept=True).p_values
        assert np.all(pv[1:, 0] < 1e-10)

    def test_no_residual_df_gives_nan_inference(self):
        result = fit([[1.0], [2.0]], [1.0, 3.0], intercept=True)
        assert result.df_residual == 0
        assert np.all(np.isnan(result.standard_errors))
        assert np.all(np.isnan(result.p_values))

    def test_xtx_inverse(self, noiseless_regression_data):
        X, Y, _ = noiseless_regression_data
        result = fit(X, Y)
        np.testing.assert_allclose(
            result.xtx_inverse.to_array(), np.linalg.inv(X.T @ X), rtol=1e-8
        )

    def test_info_and_timing(self, noiseless_regression_data):
        X, Y, _ = noiseless_regression_data
        result = fit(X, Y)
        assert result.backend_name == 'cpu_gauss_jordan'
        assert result.info['method'] == 'normal_equations'
        assert result.info['n'] == 50
        assert {'gram', 'invert', 'solve', 'total_seconds'} <= set(result.timing)

    def test_summary_runs(self, noisy_regression_data):
        x, y = noisy_regression_data
        s = fit(x, y, intercept=True).summary()
        assert "R-squared" in s
        assert "Pr(>|t|)" in s
        assert "(Intercept)" in s
        assert "Backend: cpu_gauss_jordan" in s

    def test_repr(self, noiseless_regression_data):
        X, Y, _ = noiseless_regression_data
        assert repr(fit(X, Y)) == "RegressionSolution(n=50, p=4, q=2, df_residual=46)"


class TestFitErrors:

    def test_row_mismatch(self):
        with pytest.raises(DimensionMismatchError, match="X has 3 rows but Y has 2") as exc_info:
            fit(np.ones((3, 2)), np.ones((2, 1)))
        assert exc_info.value.operation == 'fit'

    def test_collinear_columns_singular(self):
        x = np.array([1.0, 2.0, 3.0, 4.0])
        X = np.column_stack([np.ones(4), x, 2.0 * x])
        with pytest.raises(SingularMatrixError) as exc_info:
            fit(X, x)
        assert exc_info.value.matrix_name == "X'X"

    def test_zero_column_singular(self):
        X = np.column_stack([np.ones(3), np.zeros(3)])
        with pytest.raises(SingularMatrixError, match="X'X is singular"):
            fit(X, [1.0, 2.0, 3.0])

    def test_too_few_rows_singular(self):
        # One observation cannot pin down intercept and slope
        with pytest.raises(SingularMatrixError):
            fit([[0.0]], [1.0], intercept=True)

    def test_non_finite(self):
        with pytest.raises(ValidationError, match="non-finite"):
            fit([[1.0], [np.inf]], [1.0, 2.0])

    def test_3d_rejected(self):
        with pytest.raises(ValidationError, match="expected 1D or 2D"):
            fit(np.ones((2, 2, 2)), [1.0, 2.0])

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown backend"):
            fit([[1.0], [2.0]], [1.0, 2.0], backend='gpu')

    def test_near_singular_warning_recorded(self):
        x = np.array([1.0, 2.0, 3.0])
        X = np.column_stack([x, x + 1e-6 * np.array([1.0, -1.0, 0.5])])
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always')
            result = fit(X, x)
        assert any(issubclass(w.category, NearSingularWarning) for w in caught)
        assert any("nearly singular" in w for w in result.warnings)


class TestDesign:

    def test_build_with_intercept(self):
        design = RegressionDesign.build([[2.0], [3.0]], [1.0, 2.0], intercept=True)
        assert design.X.to_list() == [[1.0, 2.0], [1.0, 3.0]]
        assert design.has_intercept
        assert (design.n, design.p, design.q) == (2, 2, 1)

    def test_build_keeps_matrix_instances(self):
        X = Matrix(2, 1, [1.0, 2.0])
        Y = Matrix(2, 1, [3.0, 4.0])
        design = RegressionDesign.build(X, Y)
        assert design.X is X
        assert design.Y is Y


class TestBackend:

    def test_satisfies_protocol(self):
        from pyols.core.protocols import Backend
        from pyols.regression.backends import CPUNormalEquationsBackend
        assert isinstance(CPUNormalEquationsBackend(), Backend)

    def test_solve_returns_result(self):
        from pyols.regression.backends import CPUNormalEquationsBackend
        design = RegressionDesign.build([[1.0], [2.0], [3.0]], [2.0, 4.0, 6.0], intercept=True)
        result = CPUNormalEquationsBackend().solve(design)
        assert result.backend_name == 'cpu_gauss_jordan'
        assert result.params.rank == 2
        assert result.params.df_residual == 1
        assert result.warnings == ()
