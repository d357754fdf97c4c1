from __future__ import annotations

import threading


class SeedLatch:
    """One-time guard per collection: only the first claimer writes the default set.

    A failed seed releases its claim so a later empty snapshot can retry.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._claimed: set[str] = set()

    def claim(self, collection: str) -> bool:
        with self._lock:
            if collection in self._claimed:
                return False
            self._claimed.add(collection)
            return True

    def release(self, collection: str) -> None:
        with self._lock:
            self._claimed.discard(collection)

    def is_claimed(self, collection: str) -> bool:
        with self._lock:
            return collection in self._claimed
