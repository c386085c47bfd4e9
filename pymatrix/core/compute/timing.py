"""
Wall-clock timing for multi-stage computations.

A Timer measures one overall span plus any number of named sections
inside it. The linsolve backends time 'decomposition', 'substitution'
and 'residual' this way and store the breakdown in Result.timing.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Overall span with named, accumulating sections.

    Usage:
        with Timer() as timer:
            with timer.section('decomposition'):
                lu = A.lu_decomposition
            with timer.section('substitution'):
                X = lu.solve(B)

        timer.result()
        # {'total_seconds': 0.05, 'decomposition': 0.03, 'substitution': 0.02}

    start() and stop() are available for spans that do not fit a with
    block.
    """

    def __init__(self) -> None:
        self._began: float | None = None
        self._total: float | None = None
        self._sections: dict[str, float] = {}

    def start(self) -> 'Timer':
        self._began = time.perf_counter()
        self._total = None
        return self

    def stop(self) -> None:
        if self._began is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._began

    def __enter__(self) -> 'Timer':
        return self.start()

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """
        Time the enclosed block under name.

        Re-entering a section adds to its total. Sections are not checked
        against each other or against the overall span.
        """
        began = time.perf_counter()
        try:
            yield
        finally:
            self._sections[name] = self._sections.get(name, 0.0) + (time.perf_counter() - began)

    def result(self) -> dict[str, float]:
        """
        Timing breakdown: 'total_seconds' followed by each section.

        Raises:
            RuntimeError: If the overall span has not been stopped
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._total, **self._sections}
