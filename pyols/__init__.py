"""
PyOLS: multivariate ordinary least squares on a small dense matrix engine.

Submodules:
    core: Matrix (transpose, multiply, Gauss-Jordan invert), learning-file
        ingestion, exceptions
    regression: fit / predict by the normal equations
    generator: grid-based training data for known target functions
    cli: pyols-learn and pyols-learngen entry points
"""

__version__ = "0.1.0"

from pyols import core
from pyols import regression
from pyols import generator
from pyols.core.matrix import Matrix
from pyols.regression import fit, predict

__all__ = [
    "__version__",
    "core",
    "regression",
    "generator",
    "Matrix",
    "fit",
    "predict",
]
