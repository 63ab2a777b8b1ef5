"""
Training-data generator.

Enumerates a uniform grid of input vectors and evaluates fixed target
functions on each, producing rows a learning file can be assembled from.

Public API:
    generate(input_count, minimum, maximum, step, functions) -> ndarray
    iter_rows(input_count, minimum, maximum, step, functions) -> row iterator
    write_rows(rows, file)
    grid_axis, iter_grid, TargetFunction
"""

from pyols.generator.functions import TargetFunction
from pyols.generator.grid import (
    generate,
    grid_axis,
    iter_grid,
    iter_rows,
    resolve_functions,
    write_rows,
)

__all__ = [
    "TargetFunction",
    "generate",
    "grid_axis",
    "iter_grid",
    "iter_rows",
    "resolve_functions",
    "write_rows",
]
