"""
Expiring key-value stores backing the credential cache.

Two backends satisfy the ExpiringStore protocol:

- MemoryStore: process-local dict guarded by a lock, never blocks on I/O
- RedisStore: shared Redis instance for multi-process deployments

Both write a batch of keys with one absolute deadline, so entries written
together also expire together.
"""

import logging
import threading
import time
from typing import Callable, Dict, Mapping, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)


class ExpiringStore(Protocol):
    """Protocol for key-value stores with per-entry expiration."""

    # True when calls perform network I/O and must stay off the event loop
    io_bound: bool

    def get(self, key: str) -> Optional[str]:
        """Return the live value for key, or None if absent or expired."""
        ...

    def set_many(self, mapping: Mapping[str, str], ttl_seconds: int) -> None:
        """Write every pair with the same deadline in one atomic step."""
        ...

    def delete(self, *keys: str) -> int:
        """Remove keys, returning how many were live."""
        ...

    def purge_expired(self) -> int:
        """Drop expired entries, returning how many were dropped."""
        ...


class MemoryStore:
    """
    Thread-safe in-memory store with lazy expiration.

    Entries are kept as (value, deadline) pairs. Expired entries are
    treated as absent on read and dropped at that point; purge_expired()
    sweeps the rest.
    """

    io_bound = False

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """
        Initialize empty store.

        Args:
            clock: Monotonic time source in seconds (injectable for tests)
        """
        self._entries: Dict[str, Tuple[str, float]] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, deadline = entry
            if deadline <= self._clock():
                del self._entries[key]
                return None
            return value

    def set_many(self, mapping: Mapping[str, str], ttl_seconds: int) -> None:
        with self._lock:
            deadline = self._clock() + ttl_seconds
            for key, value in mapping.items():
                self._entries[key] = (value, deadline)

    def delete(self, *keys: str) -> int:
        removed = 0
        with self._lock:
            now = self._clock()
            for key in keys:
                entry = self._entries.pop(key, None)
                if entry is not None and entry[1] > now:
                    removed += 1
        return removed

    def purge_expired(self) -> int:
        with self._lock:
            now = self._clock()
            expired = [key for key, (_, deadline) in self._entries.items() if deadline <= now]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.debug(f"Purged {len(expired)} expired cache entries")
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class RedisStore:
    """
    Redis-backed store for deployments running several broker processes.

    Expiration is delegated to Redis, so purge_expired() has nothing to do.
    """

    io_bound = True

    def __init__(self, redis_client, namespace: str = "sensegate:"):
        """
        Initialize Redis store.

        Args:
            redis_client: Synchronous Redis client created with decode_responses=True
            namespace: Prefix applied to every key
        """
        self.redis = redis_client
        self.namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self.namespace}{key}"

    def get(self, key: str) -> Optional[str]:
        value = self.redis.get(self._key(key))
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    def set_many(self, mapping: Mapping[str, str], ttl_seconds: int) -> None:
        # MULTI/EXEC so no reader sees half of the batch
        pipe = self.redis.pipeline(transaction=True)
        for key, value in mapping.items():
            pipe.setex(self._key(key), ttl_seconds, value)
        pipe.execute()

    def delete(self, *keys: str) -> int:
        if not keys:
            return 0
        return self.redis.delete(*(self._key(key) for key in keys))

    def purge_expired(self) -> int:
        return 0


__all__ = ["ExpiringStore", "MemoryStore", "RedisStore"]
