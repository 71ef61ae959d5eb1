"""Single-slot in-memory cache with a fixed time-to-live."""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

V = TypeVar('V')
logger = logging.getLogger('ffadvisor.cache')


@dataclass
class CacheEntry(Generic[V]):
    value: V
    stored_at: float


class TTLCache(Generic[V]):
    """
    Holds one value until it is older than ``ttl`` seconds.

    The clock is injected so expiry can be tested without sleeping. One
    instance is created per process and handed to whoever needs it; there
    is no module-level cache state.

    Example:
        cache = TTLCache(ttl=3600)
        players = cache.get_or_load(client.fetch_players)
    """

    def __init__(self, ttl: float, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entry: Optional[CacheEntry[V]] = None

    def get(self) -> Optional[V]:
        """Return the cached value, or None when empty or expired."""
        if self._entry is None:
            return None
        age = self._clock() - self._entry.stored_at
        if age >= self.ttl:
            logger.debug(f'Cache entry expired ({age:.0f}s old, ttl {self.ttl}s)')
            self._entry = None
            return None
        return self._entry.value

    def set(self, value: V) -> None:
        self._entry = CacheEntry(value=value, stored_at=self._clock())

    def get_or_load(self, loader: Callable[[], V]) -> V:
        """Return the cached value, calling ``loader`` to refill it when stale."""
        cached = self.get()
        if cached is not None:
            logger.debug('Cache hit')
            return cached
        value = loader()
        self.set(value)
        return value

    def clear(self) -> None:
        self._entry = None

    @property
    def is_fresh(self) -> bool:
        return self.get() is not None

    def __repr__(self) -> str:
        state: Any = 'empty' if self._entry is None else f'stored_at={self._entry.stored_at}'
        return f'TTLCache(ttl={self.ttl}, {state})'
