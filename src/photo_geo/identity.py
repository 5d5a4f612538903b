"""Identity allocation for newly created located items."""

import threading


class IdAllocator:
    """
    Process-wide, monotonically increasing item ids.

    Safe to share between threads. Pass one instance to everything that
    creates LocatedItems instead of relying on a module-level counter.
    """

    def __init__(self, start: int = 1):
        self._next = start
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            value = self._next
            self._next += 1
            return value

    def reserve(self, count: int) -> list[int]:
        """Allocate ``count`` consecutive ids in one step."""
        if count < 0:
            raise ValueError("count must be non-negative")
        with self._lock:
            first = self._next
            self._next += count
        return list(range(first, first + count))

    def observe(self, used_id: int) -> None:
        """Move the counter past an id assigned elsewhere (e.g. loaded from a file)."""
        with self._lock:
            if used_id >= self._next:
                self._next = used_id + 1

    @property
    def peek(self) -> int:
        """The id the next call would return."""
        with self._lock:
            return self._next
