"""
Wall-clock timing for backend stages.

The regression backend splits a solve into stages (gram, invert, solve,
residuals, statistics) and reports how long each took, next to the total.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Stage timer.

    start() and stop() bracket the whole run; section(name) brackets one
    stage and may be re-entered, in which case its durations add up.

        timer = Timer()
        timer.start()
        with timer.section('gram'):
            XtX = Xt.multiply(X)
        timer.stop()
        timer.result()   # {'total_seconds': ..., 'gram': ...}
    """

    def __init__(self):
        self._stages: dict[str, float] = {}
        self._began: float | None = None
        self._elapsed: float | None = None

    def start(self) -> None:
        self._began = time.perf_counter()
        self._elapsed = None

    def stop(self) -> None:
        if self._began is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._elapsed = time.perf_counter() - self._began

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        entered = time.perf_counter()
        try:
            yield
        finally:
            self._stages[name] = (
                self._stages.get(name, 0.0) + time.perf_counter() - entered
            )

    def result(self) -> dict[str, float]:
        """
        Total and per-stage durations in seconds.

        Raises:
            RuntimeError: If the timer has not been stopped
        """
        if self._elapsed is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._elapsed, **self._stages}


@contextmanager
def timed() -> Iterator[Timer]:
    """Time a block; the timer is stopped on exit, even on error."""
    timer = Timer()
    timer.start()
    try:
        yield timer
    finally:
        timer.stop()
