"""Identifier generation for food entries."""

import time
from collections.abc import Callable
from dataclasses import dataclass

IdFactory = Callable[[], int]


@dataclass
class MonotonicIdFactory:
    """Nanosecond timestamp ids that never repeat within a process."""

    clock: Callable[[], int] = time.time_ns
    _last: int = 0

    def __call__(self) -> int:
        candidate = self.clock()
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return candidate

    def observe(self, existing_id: int) -> None:
        """Make sure future ids are greater than an already stored id."""
        self._last = max(self._last, existing_id)
