"""
Gauss-Jordan matrix inversion with partial pivoting.

This is the kernel behind Matrix.invert(). It works on raw float64 arrays
and returns a structured result so callers can report pivots and
conditioning alongside the inverse.

Algorithm:
    1. C = copy of A, I = identity of the same order
    2. Forward elimination: for each column k, pick the row at or below k
       with the largest |C[i, k]| (first occurrence wins ties), swap it into
       row k of both C and I, then clear column k below the diagonal
    3. Backward elimination: from the last row up, clear the entries right
       of the diagonal using the already-normalised rows beneath, then
       divide the row by its diagonal
    4. I now holds A⁻¹

The zero-pivot test is exact. A column whose candidates are all exactly
zero makes A singular and raises SingularMatrixError.
"""

import warnings
from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pyols.core.exceptions import (
    DimensionMismatchError,
    NearSingularWarning,
    SingularMatrixError,
)
from pyols.core.compute.tolerances import NEAR_SINGULAR_RTOL


@dataclass(frozen=True)
class InversionResult:
    """
    Result of Gauss-Jordan inversion.

    Attributes:
        inverse: A⁻¹ (n x n)
        pivot_rows: For each column k, the row index (in the partially
            eliminated matrix) that was swapped into position k
        swaps: Number of row interchanges performed
        min_abs_pivot: Smallest |pivot| accepted during forward elimination
        condition_number: 1-norm condition estimate ||A||₁ ||A⁻¹||₁
    """
    inverse: NDArray[np.floating[Any]]
    pivot_rows: tuple[int, ...]
    swaps: int
    min_abs_pivot: float
    condition_number: float


def gauss_jordan_inverse(
    A: NDArray[np.floating[Any]],
    name: str | None = None,
) -> InversionResult:
    """
    Invert a square matrix by Gauss-Jordan elimination with partial pivoting.

    Args:
        A: Square matrix (n x n). Not modified.
        name: Matrix description used in error and warning messages

    Returns:
        InversionResult with the inverse and pivot diagnostics

    Raises:
        DimensionMismatchError: If A is not square
        SingularMatrixError: If some column has no nonzero pivot candidate
    """
    label = name or 'matrix'
    title = label[:1].upper() + label[1:]
    n_rows, n_cols = A.shape
    if n_rows != n_cols:
        raise DimensionMismatchError(
            f"Cannot invert {label}: expected a square matrix, got {n_rows}x{n_cols}",
            left_shape=(n_rows, n_cols),
            operation='invert',
        )

    n = n_rows
    work = np.array(A, dtype=np.float64, copy=True)
    inverse = np.eye(n, dtype=np.float64)
    pivot_rows: list[int] = []
    swaps = 0

    # === Forward elimination ===
    for k in range(n):
        # np.argmax returns the first maximum, so ties keep the upper row
        i_max = k + int(np.argmax(np.abs(work[k:, k])))

        if work[i_max, k] == 0.0:
            raise SingularMatrixError(
                f"{title} is singular: no nonzero pivot in column {k} "
                f"(rank={k}, expected={n})",
                matrix_name=name,
                rank=k,
                expected_rank=n,
            )

        if i_max != k:
            work[[k, i_max]] = work[[i_max, k]]
            inverse[[k, i_max]] = inverse[[i_max, k]]
            swaps += 1
        pivot_rows.append(i_max)

        factors = work[k + 1:, k] / work[k, k]
        work[k + 1:] -= np.outer(factors, work[k])
        inverse[k + 1:] -= np.outer(factors, inverse[k])
        # Exact zeros below the pivot, whatever the rounding left behind
        work[k + 1:, k] = 0.0

    pivots = np.abs(np.diag(work))
    min_abs_pivot = float(pivots.min()) if n else 0.0

    # === Backward elimination ===
    for i in range(n - 1, -1, -1):
        # Rows below i are unit rows by now, so one product clears the tail
        coeffs = work[i, i + 1:].copy()
        inverse[i] -= coeffs @ inverse[i + 1:]
        work[i] -= coeffs @ work[i + 1:]

        diagonal = work[i, i]
        inverse[i] /= diagonal
        work[i] /= diagonal

    if n:
        condition_number = float(
            np.linalg.norm(A, ord=1) * np.linalg.norm(inverse, ord=1)
        )
    else:
        condition_number = 1.0

    scale = float(np.max(np.abs(A))) if n else 0.0
    if n and min_abs_pivot < NEAR_SINGULAR_RTOL * scale:
        warnings.warn(
            f"{title} is nearly singular: smallest pivot {min_abs_pivot:.3e} "
            f"against largest entry {scale:.3e} (condition number ~{condition_number:.3e}). "
            f"The inverse may be inaccurate.",
            NearSingularWarning,
            stacklevel=3,
        )

    return InversionResult(
        inverse=inverse,
        pivot_rows=tuple(pivot_rows),
        swaps=swaps,
        min_abs_pivot=min_abs_pivot,
        condition_number=condition_number,
    )
