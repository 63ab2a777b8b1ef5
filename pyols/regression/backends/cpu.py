"""
CPU backend for multivariate OLS via the normal equations.

Solves B = (X'X)⁻¹ X'Y with the Matrix primitives: transpose, multiply,
and Gauss-Jordan inversion with partial pivoting.
"""

import logging
import warnings
from typing import Any
import numpy as np

from pyols.core.matrix import Matrix
from pyols.core.result import Result
from pyols.core.compute.timing import Timer
from pyols.regression.design import RegressionDesign
from pyols.regression.solution import RegressionParams

logger = logging.getLogger(__name__)


class CPUNormalEquationsBackend:
    """
    CPU backend using the normal equations.

    Implements the Backend protocol for RegressionDesign -> RegressionParams.
    """

    @property
    def name(self) -> str:
        return 'cpu_gauss_jordan'

    def solve(self, design: RegressionDesign) -> Result[RegressionParams]:
        """
        Solve OLS via the normal equations.

        Algorithm:
            1. Form X'X
            2. Invert it by Gauss-Jordan elimination
            3. B = (X'X)⁻¹ X'Y
            4. Compute fitted values, residuals, and per-output sums of squares

        Args:
            design: Validated regression design

        Returns:
            Result containing RegressionParams

        Raises:
            SingularMatrixError: If X'X is singular
        """
        timer = Timer()
        timer.start()

        X, Y = design.X, design.Y
        n, p = design.n, design.p
        logger.debug("Solving normal equations: n=%d, p=%d, q=%d", n, p, design.q)

        # === Normal Equations ===
        with timer.section('gram'):
            Xt = X.transpose()
            XtX = Xt.multiply(X)

        with timer.section('invert'):
            with warnings.catch_warnings(record=True) as caught:
                warnings.simplefilter('always')
                XtX_inv = XtX.invert(name="X'X")

        with timer.section('solve'):
            B = XtX_inv.multiply(Xt).multiply(Y)

        # === Residuals and Fitted Values ===
        with timer.section('residuals'):
            fitted_values = X.multiply(B)
            Y_arr = Y.to_array()
            residual_arr = Y_arr - fitted_values.to_array()
            residuals = Matrix.from_array(residual_arr)

        # === Summary Statistics ===
        with timer.section('statistics'):
            rss = np.sum(residual_arr ** 2, axis=0)
            if n:
                tss = np.sum((Y_arr - Y_arr.mean(axis=0)) ** 2, axis=0)
            else:
                tss = np.zeros(design.q, dtype=np.float64)

        timer.stop()

        # Re-issue so callers' warning filters still apply
        warn_list = []
        for record in caught:
            warn_list.append(str(record.message))
            warnings.warn(record.message, record.category, stacklevel=3)

        params = RegressionParams(
            coefficients=B,
            xtx_inverse=XtX_inv,
            fitted_values=fitted_values,
            residuals=residuals,
            rss=rss,
            tss=tss,
            rank=p,
            df_residual=n - p,
        )

        info: dict[str, Any] = {
            'method': 'normal_equations',
            'rank': p,
            **design.metadata,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warn_list),
        )
