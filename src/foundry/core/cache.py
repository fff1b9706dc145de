"""
Explicit cache objects.

Lookups that are expensive to repeat (an external parameter catalog, a
parsed settings file) are cached in an object that is handed to whoever
needs it, never in module-level state. The owner decides the invalidation
policy: a maximum age, a content validator, or an explicit ``invalidate()``.

Manifesto:
    Ambient static caches keyed by credentials or file paths make behavior
    depend on import order and on whatever ran before. Passing the cache
    in makes the dependency visible and lets tests start from empty.

Examples:
    >>> cache = InMemoryCache(max_size=100, default_ttl_seconds=60)
    >>> cache.set("catalog:electrical", entries)
    >>> cache.get("catalog:electrical") is entries
    True

Tags:
    cache, ttl, lru, foundry

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import time
from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class CacheBackend(Protocol):
    """Structural contract for cache backends."""

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None when missing or expired."""
        ...

    def set(self, key: str, value: Any, *, ttl_seconds: int | None = None) -> None:
        """Store a value with an optional time-to-live."""
        ...

    def delete(self, key: str) -> None:
        """Remove a key if present."""
        ...

    def exists(self, key: str) -> bool:
        """Whether the key is present and not expired."""
        ...

    def clear(self) -> None:
        """Remove all keys."""
        ...


class InMemoryCache:
    """Bounded in-memory cache with TTL and an optional content validator.

    Uses LRU eviction when ``max_size`` is reached. A ``validator`` is called
    with each value on read; a value it rejects is evicted and treated as a
    miss.

    Attributes:
        max_size: Maximum number of keys before LRU eviction.
        default_ttl_seconds: Default TTL for keys (``None`` → no expiry).

    Example:
        cache = InMemoryCache(max_size=500, default_ttl_seconds=1800)
        cache.set("catalog", entries, ttl_seconds=3600)
        entries = cache.get("catalog")
    """

    def __init__(
        self,
        *,
        max_size: int = 10_000,
        default_ttl_seconds: int | None = 3600,
        validator: Callable[[Any], bool] | None = None,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize in-memory cache.

        Args:
            max_size: Maximum number of keys (LRU eviction after).
            default_ttl_seconds: Default TTL for all keys (``None`` → no expiry).
            validator: Optional predicate; values failing it are evicted on read.
            clock: Time source, overridable in tests.
        """
        self._store: dict[str, tuple[Any, float | None]] = {}
        self._access_order: list[str] = []
        self._max_size = max_size
        self._default_ttl = default_ttl_seconds
        self._validator = validator
        self._clock = clock

    def _expired(self, expires_at: float | None) -> bool:
        return expires_at is not None and self._clock() > expires_at

    def get(self, key: str) -> Any | None:
        """Retrieve a value by key."""
        if key not in self._store:
            return None

        value, expires_at = self._store[key]

        if self._expired(expires_at):
            self.delete(key)
            return None

        if self._validator is not None and not self._validator(value):
            self.delete(key)
            return None

        # Update LRU order
        if key in self._access_order:
            self._access_order.remove(key)
        self._access_order.append(key)

        return value

    def set(self, key: str, value: Any, *, ttl_seconds: int | None = None) -> None:
        """Store a value with optional TTL."""
        ttl = ttl_seconds if ttl_seconds is not None else self._default_ttl
        expires_at = (self._clock() + ttl) if ttl else None

        # Evict LRU if at capacity
        if key not in self._store and len(self._store) >= self._max_size:
            if self._access_order:
                lru_key = self._access_order.pop(0)
                self._store.pop(lru_key, None)

        self._store[key] = (value, expires_at)

        if key in self._access_order:
            self._access_order.remove(key)
        self._access_order.append(key)

    def delete(self, key: str) -> None:
        """Remove a key from the cache."""
        self._store.pop(key, None)
        if key in self._access_order:
            self._access_order.remove(key)

    def exists(self, key: str) -> bool:
        """Check if key exists and is not expired."""
        if key not in self._store:
            return False

        _, expires_at = self._store[key]
        if self._expired(expires_at):
            self.delete(key)
            return False

        return True

    def clear(self) -> None:
        """Remove all keys."""
        self._store.clear()
        self._access_order.clear()

    def size(self) -> int:
        """Return current number of cached keys."""
        return len(self._store)


__all__ = ["CacheBackend", "InMemoryCache"]
