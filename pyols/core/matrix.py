"""
Dense two-dimensional matrix.

Matrix is the value type the regression pipeline is written in. It owns a
read-only float64 array, and every operation (transpose, multiply, invert)
returns a new Matrix. Nothing is ever mutated in place and no two Matrix
instances share a buffer.

Usage:
    >>> A = Matrix(2, 2, [4.0, 7.0, 2.0, 6.0])
    >>> A.invert().multiply(A).allclose(Matrix.identity(2))
    True
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import Any, TextIO
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyols.core.exceptions import DimensionError, DimensionMismatchError
from pyols.core.validation import (
    check_2d,
    check_array,
    check_finite,
    check_non_negative_int,
)
from pyols.core.compute.linalg.gauss_jordan import gauss_jordan_inverse
from pyols.core.compute.tolerances import CPU_FP64


class Matrix:
    """
    Immutable dense matrix of float64 values, rows x columns.

    Construction:
        Matrix.empty()                      # 0 x 0
        Matrix(rows, columns)               # zero-filled
        Matrix(rows, columns, values)       # row-major flat values, copied
        Matrix.from_rows([[1, 2], [3, 4]])  # nested rows
        Matrix.from_array(ndarray)          # any 2-D array-like, copied
        Matrix.identity(n)
    """

    __slots__ = ('_data',)

    def __init__(
        self,
        rows: int,
        columns: int,
        values: ArrayLike | None = None,
    ):
        rows = check_non_negative_int(rows, 'rows')
        columns = check_non_negative_int(columns, 'columns')

        if values is None:
            data = np.zeros((rows, columns), dtype=np.float64)
        else:
            flat = check_array(values, 'values').ravel()
            if flat.size != rows * columns:
                raise DimensionError(
                    f"values: expected {rows * columns} entries for a {rows}x{columns} "
                    f"matrix, got {flat.size}"
                )
            check_finite(flat, 'values')
            data = flat.reshape(rows, columns).copy()

        data.setflags(write=False)
        self._data = data

    # === Alternate constructors ===

    @classmethod
    def _wrap(cls, data: NDArray[np.floating[Any]]) -> Matrix:
        """Adopt an array the caller no longer references. No validation."""
        matrix = cls.__new__(cls)
        data.setflags(write=False)
        matrix._data = data
        return matrix

    @classmethod
    def empty(cls) -> Matrix:
        """A 0 x 0 matrix."""
        return cls(0, 0)

    @classmethod
    def identity(cls, n: int) -> Matrix:
        """The n x n identity matrix."""
        n = check_non_negative_int(n, 'n')
        return cls._wrap(np.eye(n, dtype=np.float64))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> Matrix:
        """
        Build from a sequence of equal-length rows.

        With no rows the result is 0 x 0, or 0 x k when the input carries a
        width (a (0, k) array).

        Raises:
            DimensionError: If rows have different lengths
        """
        if len(rows) == 0:
            shape = np.shape(rows)
            return cls(0, shape[1] if len(shape) == 2 else 0)
        try:
            widths = {len(row) for row in rows}
        except TypeError as e:
            raise DimensionError(f"rows: expected a sequence of rows: {e}") from e
        if len(widths) > 1:
            raise DimensionError(
                f"rows: every row must have the same length, got lengths {sorted(widths)}"
            )
        return cls.from_array(rows)

    @classmethod
    def from_array(cls, array: ArrayLike) -> Matrix:
        """
        Build from a 2-D array-like. The data is copied.

        Raises:
            DimensionError: If the input is not 2-D
            ValidationError: If the input is non-numeric or non-finite
        """
        data = check_array(array, 'array')
        check_2d(data, 'array')
        check_finite(data, 'array')
        return cls._wrap(np.array(data, dtype=np.float64, copy=True))

    # === Properties ===

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def columns(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return (self.rows, self.columns)

    @property
    def is_square(self) -> bool:
        return self.rows == self.columns

    def __getitem__(self, index: tuple[int, int]) -> float:
        i, j = index
        return float(self._data[i, j])

    def to_array(self) -> NDArray[np.float64]:
        """Return a writable copy of the values."""
        return self._data.copy()

    def to_list(self) -> list[list[float]]:
        return self._data.tolist()

    # === Operations ===

    def transpose(self) -> Matrix:
        """Return the transpose, shape (columns, rows)."""
        return Matrix._wrap(self._data.T.copy())

    def multiply(self, other: Matrix) -> Matrix:
        """
        Return the matrix product self · other.

        result[i, j] = Σ_k self[i, k] * other[k, j], shape
        (self.rows, other.columns).

        Raises:
            DimensionMismatchError: If self.columns != other.rows
        """
        if self.columns != other.rows:
            raise DimensionMismatchError(
                f"Cannot multiply {self.rows}x{self.columns} by "
                f"{other.rows}x{other.columns}: left has {self.columns} columns, "
                f"right has {other.rows} rows",
                left_shape=self.shape,
                right_shape=other.shape,
                operation='multiply',
            )
        return Matrix._wrap(self._data @ other._data)

    def __matmul__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.multiply(other)

    def invert(self, name: str | None = None) -> Matrix:
        """
        Return the inverse via Gauss-Jordan elimination with partial pivoting.

        Args:
            name: Optional description of this matrix for error messages

        Raises:
            DimensionMismatchError: If the matrix is not square
            SingularMatrixError: If the matrix is singular
        """
        result = gauss_jordan_inverse(self._data, name=name)
        return Matrix._wrap(result.inverse)

    # === Comparison ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None  # type: ignore[assignment]

    def allclose(
        self,
        other: Matrix,
        rtol: float = CPU_FP64.rtol,
        atol: float = CPU_FP64.atol,
    ) -> bool:
        """Shapes match and values agree within tolerance."""
        return self.shape == other.shape and bool(
            np.allclose(self._data, other._data, rtol=rtol, atol=atol)
        )

    # === Output ===

    def format(self) -> str:
        """One line per row, values in %g form separated by single spaces."""
        return "".join(
            " ".join(f"{value:g}" for value in row) + "\n"
            for row in self._data
        )

    def print(self, file: TextIO | None = None) -> None:
        """Write format() to file (default: sys.stdout)."""
        sink = sys.stdout if file is None else file
        sink.write(self.format())

    def __repr__(self) -> str:
        return f"Matrix({self.rows}x{self.columns}, {self._data.tolist()!r})"
