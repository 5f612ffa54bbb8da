"""
gateway/core/cache.py
═══════════════════════════════════════════════════════════════════════════
Bounded in-memory response cache.
  • One CacheStore per app, built in create_app() → app.state.cache
  • Every entry carries its own expiry; expired entries read as MISSING
    and are dropped on that read (lazy expiry, sweeper is optional)
  • Capacity bound: inserting a new key while full evicts the oldest
    insertion first (FIFO)
  • All access goes through a threading lock → atomic replace, never partial
═══════════════════════════════════════════════════════════════════════════
"""

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Optional

log = logging.getLogger("cache")


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


# Returned by CacheStore.get() for keys that were never set or have expired.
MISSING: Any = _Missing()


@dataclass(frozen=True)
class CacheEntry:
    key:         str
    value:       Any
    inserted_at: float
    expires_at:  float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class CacheStore:
    """Key → value map bounded by both entry count and per-entry TTL."""

    def __init__(
        self,
        capacity: int = 100,
        default_ttl: float = 300,
        clock: Callable[[], float] = time.monotonic,
    ):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        if default_ttl < 0:
            raise ValueError(f"default_ttl must be >= 0, got {default_ttl}")

        self.capacity    = capacity
        self.default_ttl = default_ttl
        self._clock      = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock       = threading.Lock()

        self._hits        = 0
        self._misses      = 0
        self._evictions   = 0
        self._expirations = 0

    def get(self, key: str) -> Any:
        """Return the cached value, or MISSING if absent or expired."""
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return MISSING
            if entry.is_expired(now):
                del self._entries[key]
                self._expirations += 1
                self._misses += 1
                return MISSING
            self._hits += 1
            return entry.value

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """
        Store value under key for ttl seconds (default_ttl when None).
        An existing key is replaced and becomes the newest insertion.
        """
        if ttl is None:
            ttl = self.default_ttl
        now   = self._clock()
        entry = CacheEntry(key=key, value=value, inserted_at=now, expires_at=now + ttl)

        with self._lock:
            if key in self._entries:
                self._entries[key] = entry
                self._entries.move_to_end(key)
                return
            if len(self._entries) >= self.capacity:
                evicted, _ = self._entries.popitem(last=False)
                self._evictions += 1
                log.debug(f"Evicted {evicted} (capacity {self.capacity})")
            self._entries[key] = entry

    def purge_expired(self) -> int:
        """Physically drop every expired entry. Returns how many were removed."""
        now = self._clock()
        with self._lock:
            stale = [k for k, e in self._entries.items() if e.is_expired(now)]
            for k in stale:
                del self._entries[k]
            self._expirations += len(stale)
        return len(stale)

    def stats(self) -> dict:
        with self._lock:
            return {
                "size":        len(self._entries),
                "capacity":    self.capacity,
                "default_ttl": self.default_ttl,
                "hits":        self._hits,
                "misses":      self._misses,
                "evictions":   self._evictions,
                "expirations": self._expirations,
            }

    def summary(self) -> dict:
        """Metadata only — safe to expose in /health."""
        now = self._clock()
        with self._lock:
            return {
                k: {
                    "age_s":        round(now - e.inserted_at, 1),
                    "expires_in_s": round(max(e.expires_at - now, 0.0), 1),
                }
                for k, e in self._entries.items()
                if not e.is_expired(now)
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
