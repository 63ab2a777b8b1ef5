"""
Shared compute infrastructure for PyOLS.

Timing utilities, tolerance tiers and linear algebra kernels shared by the
Matrix type and the regression backend.

Submodules:
    timing: Execution timing utilities
    tolerances: Tolerance tiers and numerical thresholds
    linalg: Linear algebra kernels (Gauss-Jordan inversion)
"""

from pyols.core.compute.timing import Timer, timed

__all__ = [
    "Timer",
    "timed",
]
