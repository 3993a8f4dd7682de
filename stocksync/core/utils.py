"""
Utility functions for the application.
"""
import asyncio
from collections import defaultdict
from contextlib import asynccontextmanager
from typing import Any, Dict, Hashable


def coerce_quantity(value: Any) -> int:
    """Coerce a stock value to a non-negative integer (None and junk become 0)."""
    try:
        quantity = int(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(0, quantity)


class KeyedLock:
    """
    One asyncio.Lock per key.

    Serialises read-modify-write sequences on the same product within a
    single process. Locks are dropped once nobody holds or waits on them.
    """

    def __init__(self):
        self._locks: Dict[Hashable, asyncio.Lock] = {}
        self._waiters: Dict[Hashable, int] = defaultdict(int)

    @asynccontextmanager
    async def hold(self, key: Hashable):
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._waiters[key] += 1
        try:
            async with lock:
                yield
        finally:
            self._waiters[key] -= 1
            if self._waiters[key] == 0:
                del self._waiters[key]
                self._locks.pop(key, None)

    def __len__(self) -> int:
        return len(self._locks)
