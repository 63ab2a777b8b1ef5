"""
Grid enumeration and training-data generation.

Every coordinate of an input vector ranges over min, min + step, ..., up to
and including max. Values are computed as min + i * step from an integer
count, so repeated addition never drifts past the upper bound.
"""

import itertools
import logging
import math
from collections.abc import Iterable, Iterator
from typing import Any, TextIO
import numpy as np
from numpy.typing import NDArray

from pyols.core.exceptions import DimensionError, ValidationError
from pyols.core.validation import check_non_negative_int
from pyols.core.compute.tolerances import GRID_RTOL
from pyols.generator.functions import TargetFunction

logger = logging.getLogger(__name__)


def grid_axis(minimum: float, maximum: float, step: float) -> NDArray[np.float64]:
    """
    Values along one grid axis, upper bound inclusive.

    count = floor((maximum - minimum) / step) + 1, empty when maximum < minimum.
    No value exceeds maximum by more than a few ulps of rounding.

    Raises:
        ValidationError: If step is not positive or a bound is not finite
    """
    for name, value in (('minimum', minimum), ('maximum', maximum), ('step', step)):
        if not math.isfinite(value):
            raise ValidationError(f"{name}: must be finite, got {value}")
    if step <= 0:
        raise ValidationError(f"step: must be positive, got {step}")
    if maximum < minimum:
        return np.empty(0, dtype=np.float64)

    count = math.floor((maximum - minimum) / step + GRID_RTOL) + 1
    # The slack may admit a point past maximum; keep only rounding overshoot
    limit = maximum + 4 * float(np.spacing(max(abs(minimum), abs(maximum))))
    while count > 1 and minimum + (count - 1) * step > limit:
        count -= 1
    return minimum + np.arange(count, dtype=np.float64) * step


def iter_grid(
    input_count: int,
    minimum: float,
    maximum: float,
    step: float,
) -> Iterator[tuple[float, ...]]:
    """
    Yield every input vector on the grid, the last coordinate varying fastest.

    With input_count == 0 a single empty vector is produced.
    """
    input_count = check_non_negative_int(input_count, 'input_count')
    axis = grid_axis(minimum, maximum, step).tolist()
    return itertools.product(axis, repeat=input_count)


def resolve_functions(functions: Iterable[Any], input_count: int) -> list[TargetFunction]:
    """
    Parse function indices and check each one's arity against input_count.

    Raises:
        ValidationError: If an index is unknown or no functions are given
        DimensionError: If a function needs more inputs than input_count
    """
    resolved = [TargetFunction.parse(f) for f in functions]
    if not resolved:
        raise ValidationError("functions: at least one function index is required")
    for function in resolved:
        if function.arity > input_count:
            raise DimensionError(
                f"function {int(function)} ({function.name.lower()}) needs "
                f"{function.arity} inputs, but input_count is {input_count}"
            )
    return resolved


def iter_rows(
    input_count: int,
    minimum: float,
    maximum: float,
    step: float,
    functions: Iterable[Any],
) -> Iterator[tuple[float, ...]]:
    """
    Yield training rows one grid point at a time.

    Each row is the input vector followed by one output per function. All
    arguments are checked before the first row is produced; the grid itself
    is never held in memory.

    Raises:
        ValidationError: If a bound, the step or a function index is invalid
        DimensionError: If a function needs more inputs than input_count
    """
    input_count = check_non_negative_int(input_count, 'input_count')
    targets = resolve_functions(functions, input_count)
    points = iter_grid(input_count, minimum, maximum, step)
    return (
        inputs + tuple(f.evaluate(inputs) for f in targets)
        for inputs in points
    )


def generate(
    input_count: int,
    minimum: float,
    maximum: float,
    step: float,
    functions: Iterable[Any],
) -> NDArray[np.float64]:
    """
    Build the training rows for a grid in memory.

    Returns:
        Array of shape (grid_points, input_count + len(functions))
    """
    functions = list(functions)
    rows = list(iter_rows(input_count, minimum, maximum, step, functions))
    logger.info("Generated %d rows for %d inputs", len(rows), input_count)
    if not rows:
        return np.empty((0, input_count + len(functions)), dtype=np.float64)
    return np.array(rows, dtype=np.float64)


def write_rows(rows: Iterable[Iterable[float]], file: TextIO) -> int:
    """
    Write rows one per line, values in %g form separated by single spaces.

    rows may be an array or any iterable, such as iter_rows(); each row is
    written as soon as it is produced.

    Returns:
        Number of rows written
    """
    written = 0
    for row in rows:
        file.write(" ".join(f"{value:g}" for value in row) + "\n")
        written += 1
    return written
