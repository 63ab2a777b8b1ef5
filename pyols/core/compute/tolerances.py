"""
Tolerance tiers and numerical thresholds.

The Gauss-Jordan pivot test is exact (a pivot is rejected only when it is
exactly zero); the thresholds here drive diagnostics and comparisons, never
the elimination itself.

Used by the linear algebra kernel, the grid generator, and the test suite.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Well-conditioned double precision results
CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_fp64',
    description='CPU double precision, well-conditioned',
)

# Normal equations square the condition number of X, so round-trips through
# X'X lose roughly twice as many digits as the data carries.
CPU_FP64_NORMAL_EQUATIONS = ToleranceTier(
    rtol=1e-8,
    atol=1e-9,
    name='cpu_fp64_normal_equations',
    description='CPU double precision, solved through X\'X',
)

# A pivot smaller than this fraction of the largest absolute entry triggers
# NearSingularWarning. Roughly sqrt(eps) * 1e-2.
NEAR_SINGULAR_RTOL = float(np.sqrt(np.finfo(np.float64).eps)) * 1e-2

# Slack added to (max - min) / step before flooring, so that 0.3 / 0.1
# (2.9999999999999996) still counts three steps.
GRID_RTOL = 1e-9

