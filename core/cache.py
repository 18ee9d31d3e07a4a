# core/cache.py
"""
Short-lived result cache keyed by identity.

Entries live for CACHE_TTL_SECONDS from the time they were written and are
expired lazily: a stale entry is simply reported as absent. MemoryCache is
per process, so separate worker processes each keep their own copy and may
fetch the same profile independently. Use the sqlite backend (or another
object with the same get/put methods) when entries must be shared.
"""
import copy
import os
import threading
import time
from typing import Any, Callable, Dict, Optional, Protocol

from .models import CacheEntry
from .logger import get_logger

logger = get_logger(__name__)

CACHE_TTL_SECONDS = 30
CACHE_BACKEND = os.getenv("CACHE_BACKEND", "memory").strip().lower()


class ResultCache(Protocol):
    def get(self, identity: str) -> Optional[CacheEntry]: ...

    def put(self, identity: str, payload: Dict[str, Any]) -> CacheEntry: ...


class MemoryCache:
    def __init__(self, ttl: float = CACHE_TTL_SECONDS, clock: Callable[[], float] = time.time):
        self.ttl = ttl
        self.clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, identity: str) -> Optional[CacheEntry]:
        with self._lock:
            entry = self._entries.get(identity)
        if entry is None:
            return None
        age = self.clock() - entry.timestamp
        if age >= self.ttl:
            logger.debug("Cache entry for %s is stale (%.1fs old).", identity, age)
            return None
        # Hand out copies so callers cannot edit the stored payload
        return CacheEntry(entry.identity, entry.timestamp, copy.deepcopy(entry.payload))

    def put(self, identity: str, payload: Dict[str, Any]) -> CacheEntry:
        entry = CacheEntry(identity=identity, timestamp=self.clock(), payload=copy.deepcopy(payload))
        with self._lock:
            self._entries[identity] = entry
        return CacheEntry(identity, entry.timestamp, payload)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def make_cache(backend: str = CACHE_BACKEND, ttl: float = CACHE_TTL_SECONDS) -> ResultCache:
    if backend == "sqlite":
        from .storage import SqliteCache

        logger.info("Using sqlite result cache (ttl=%ss).", ttl)
        return SqliteCache(ttl=ttl)
    if backend != "memory":
        logger.warning("Unknown CACHE_BACKEND '%s'; falling back to memory.", backend)
    return MemoryCache(ttl=ttl)
