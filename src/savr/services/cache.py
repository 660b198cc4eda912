"""Key-value cache for product database lookups."""

from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol


class Cache(Protocol):
    """Cache interface for lookup results."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a value for ``ttl_seconds``."""


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class InMemoryCache(Cache):
    """Process-local cache with expiry and a bounded size."""

    max_entries: int = 512
    clock: Callable[[], datetime] = _utcnow
    _entries: OrderedDict[str, tuple[object, datetime]] = field(
        default_factory=OrderedDict
    )

    def get(self, key: str) -> object | None:
        """Return a cached value if it hasn't expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self.clock() >= expires_at:
            del self._entries[key]
            return None
        self._entries.move_to_end(key)
        return value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a value, evicting the least recently used entry when full."""
        self._entries[key] = (value, self.clock() + timedelta(seconds=ttl_seconds))
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
