"""
Result envelope returned by backends.

A backend hands back its payload together with what it learned along the
way: solver metadata, per-stage timing, and any non-fatal numerical
warnings. Solution classes (RegressionSolution) wrap the envelope and
expose the payload under domain names.
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable backend output.

    Attributes:
        params: Backend payload, e.g. RegressionParams
        info: Solver metadata ('method', 'rank', design dimensions)
        timing: Seconds per stage plus 'total_seconds'; None when untimed
        backend_name: Name of the backend that produced the payload
        warnings: Messages of warnings raised while solving, in order
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        return any(substring in message for message in self.warnings)
