"""
Argument checks shared by Matrix, the regression design and the generator.

Each check raises on the first problem it finds and names the offending
argument in the message. Nothing is repaired on the caller's behalf.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pyols.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.float64]:
    """
    Convert an array-like to float64.

    Integer and boolean input is promoted; strings, objects, complex
    numbers and ragged nesting are refused.

    Raises:
        DimensionError: If nested sequences are ragged
        ValidationError: If input cannot be converted to a numeric array
    """
    try:
        result = np.asarray(array)
    except ValueError as e:
        # numpy refuses inhomogeneous nesting outright
        raise DimensionError(f"{name}: rows have inconsistent lengths: {e}") from e
    except TypeError as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not (np.issubdtype(result.dtype, np.number) or result.dtype == np.bool_):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(f"{name}: complex values are not supported")

    return result.astype(np.float64, copy=False)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """Raise ValidationError with NaN and Inf counts if any value is non-finite."""
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_non_negative_int(value: Any, name: str) -> int:
    """
    Verify a size argument is a non-negative integer.

    Returns:
        The value as a plain int

    Raises:
        ValidationError: If value is not an integer or is negative
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValidationError(f"{name}: expected an integer, got {value!r}")
    if value < 0:
        raise ValidationError(f"{name}: must be non-negative, got {value}")
    return int(value)

