"""
Write-once memoization for immutable objects.

Matrices and decompositions never change after construction, so anything
derived from them can be computed once and kept for the lifetime of the
owner. MemoCache guards each slot with a lock: concurrent first requests
compute the value once, and every caller receives the same object.
"""

import threading
from typing import Any, Callable, TypeVar

T = TypeVar('T')


class MemoCache:
    """
    Lock-guarded, write-once cache of derived values.

    Usage:
        self._memo = MemoCache()

        @property
        def inverse(self) -> Matrix:
            return self._memo.get('inverse', self._compute_inverse)

    A factory that raises leaves the slot empty, so the same error is
    raised again on the next request.
    """

    __slots__ = ('_values', '_lock')

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}
        self._lock = threading.RLock()

    def get(self, key: str, factory: Callable[[], T]) -> T:
        """
        Return the cached value for key, computing it on first request.

        Args:
            key: Slot name
            factory: Zero-argument callable producing the value

        Returns:
            The memoized value
        """
        try:
            return self._values[key]
        except KeyError:
            pass

        with self._lock:
            if key not in self._values:
                self._values[key] = factory()
            return self._values[key]

    def __contains__(self, key: str) -> bool:
        return key in self._values
