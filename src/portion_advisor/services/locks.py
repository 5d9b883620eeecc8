"""Per-key asyncio locks."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field


@dataclass
class KeyedLocks:
    """Serializes work on the same key within one event loop.

    A lock exists only while some task holds or waits for it, so the map stays
    bounded by the number of keys in flight and no lock outlives the loop that
    used it.
    """

    _locks: dict[str, asyncio.Lock] = field(default_factory=dict)
    _holders: dict[str, int] = field(default_factory=dict)

    @asynccontextmanager
    async def lock_for(self, key: str) -> AsyncIterator[None]:
        """Hold the lock for a key, creating it on first use."""
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._holders[key] = self._holders.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._holders[key] -= 1
            if self._holders[key] == 0:
                del self._holders[key]
                del self._locks[key]

    def __len__(self) -> int:
        return len(self._locks)
