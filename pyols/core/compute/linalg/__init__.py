"""
Linear algebra kernels for PyOLS.

Kernels operate on raw float64 NumPy arrays, return structured result
dataclasses, and raise immediately with clear messages. The Matrix type
wraps them; regression code never calls them directly.

Submodules:
    gauss_jordan: Matrix inversion by Gauss-Jordan elimination with
        partial pivoting
"""

from pyols.core.compute.linalg.gauss_jordan import (
    InversionResult,
    gauss_jordan_inverse,
)

__all__ = [
    "InversionResult",
    "gauss_jordan_inverse",
]
