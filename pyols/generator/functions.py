"""
Target functions for generated training data.

Each function is addressed by a stable integer index (the index the
generator's command line takes) and declares how many inputs it reads.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import IntEnum
from typing import Any

from pyols.core.exceptions import DimensionError, ValidationError


class TargetFunction(IntEnum):
    """The closed set of analytic functions the generator can evaluate."""

    IDENTITY = 0
    INCREMENT = 1
    DOUBLE = 2
    SQUARE = 3
    SUM2 = 4
    PRODUCT2 = 5
    SUM3 = 6
    WEIGHTED_SUM5 = 7

    @classmethod
    def parse(cls, value: Any) -> TargetFunction:
        """
        Look up a function by index.

        Raises:
            ValidationError: If value is not an integer in 0..7
        """
        try:
            index = int(value)
        except (TypeError, ValueError):
            raise ValidationError(f"function index must be an integer, got {value!r}") from None
        if isinstance(value, float) and value != index:
            raise ValidationError(f"function index must be an integer, got {value!r}")
        try:
            return cls(index)
        except ValueError:
            raise ValidationError(
                f"function index must be between 0 and {len(cls) - 1}, got {index}"
            ) from None

    @property
    def arity(self) -> int:
        """Number of leading inputs the function reads."""
        return _ARITY[self]

    def evaluate(self, inputs: Sequence[float]) -> float:
        """
        Evaluate on the leading `arity` inputs; extra inputs are ignored.

        Raises:
            DimensionError: If fewer than `arity` inputs are given
        """
        if len(inputs) < self.arity:
            raise DimensionError(
                f"{self.name.lower()} needs {self.arity} inputs, got {len(inputs)}"
            )
        return float(_FORMULAS[self](inputs))


_ARITY = {
    TargetFunction.IDENTITY: 1,
    TargetFunction.INCREMENT: 1,
    TargetFunction.DOUBLE: 1,
    TargetFunction.SQUARE: 1,
    TargetFunction.SUM2: 2,
    TargetFunction.PRODUCT2: 2,
    TargetFunction.SUM3: 3,
    TargetFunction.WEIGHTED_SUM5: 5,
}

_FORMULAS = {
    TargetFunction.IDENTITY: lambda x: x[0],
    TargetFunction.INCREMENT: lambda x: x[0] + 1,
    TargetFunction.DOUBLE: lambda x: 2 * x[0],
    TargetFunction.SQUARE: lambda x: x[0] * x[0],
    TargetFunction.SUM2: lambda x: x[0] + x[1],
    TargetFunction.PRODUCT2: lambda x: x[0] * x[1],
    TargetFunction.SUM3: lambda x: x[0] + x[1] + x[2],
    TargetFunction.WEIGHTED_SUM5: lambda x: x[0] + 2 * x[1] + 3 * x[2] + 4 * x[3] + 5 * x[4],
}
