"""
Regression backends.

Available backends:
    CPUNormalEquationsBackend: normal equations solved with Gauss-Jordan inversion
"""

from pyols.regression.backends.cpu import CPUNormalEquationsBackend

__all__ = [
    "CPUNormalEquationsBackend",
]
