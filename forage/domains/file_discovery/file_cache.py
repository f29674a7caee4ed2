"""
Dedup caches deciding whether a discovered path is new.

The scan loop only ever calls ``contains`` and ``add``; it never asks a cache to
forget a path. Eviction, if any, belongs to the cache implementation.
"""
import asyncio
import logging
import time
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import TYPE_CHECKING, Callable, Dict, Set

from forage.core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from forage.config import Settings


class FileCache(ABC):
    """Abstract membership store for file paths already handed to a watcher."""

    @abstractmethod
    async def contains(self, file_path: str) -> bool:
        """Return True if the path is already known."""
        pass

    @abstractmethod
    async def add(self, file_path: str) -> None:
        """Record the path as known. Adding a known path is not an error."""
        pass


class MemoryFileCache(FileCache):
    """
    Unbounded in-memory set of paths.

    Safe for concurrent use by any number of tasks on one event loop: neither
    operation suspends, so a check and an insert never interleave. Not safe to
    share across threads or event loops. Entries are never evicted, so memory
    grows with the number of distinct paths seen during the process lifetime.
    """

    def __init__(self) -> None:
        self._paths: Set[str] = set()

    async def contains(self, file_path: str) -> bool:
        return file_path in self._paths

    async def add(self, file_path: str) -> None:
        self._paths.add(file_path)

    def __len__(self) -> int:
        return len(self._paths)


class BoundedFileCache(FileCache):
    """
    Size-bounded cache that evicts the oldest inserted path when full.

    An evicted path is reported unknown again, so a file that is still present
    in the scanned directory will be dispatched a second time. Operations are
    serialised with an asyncio.Lock and are safe for concurrent tasks on one
    event loop.
    """

    def __init__(self, max_entries: int) -> None:
        if max_entries <= 0:
            raise ConfigurationError(f"max_entries must be positive, got {max_entries}")
        self.max_entries = max_entries
        self._paths: "OrderedDict[str, None]" = OrderedDict()
        self._lock = asyncio.Lock()

    async def contains(self, file_path: str) -> bool:
        async with self._lock:
            return file_path in self._paths

    async def add(self, file_path: str) -> None:
        async with self._lock:
            if file_path in self._paths:
                return
            self._paths[file_path] = None
            while len(self._paths) > self.max_entries:
                evicted, _ = self._paths.popitem(last=False)
                logging.debug(f"Evicted {evicted} from bounded file cache")

    def __len__(self) -> int:
        return len(self._paths)


class ExpiringFileCache(FileCache):
    """
    Time-bounded cache whose entries expire ``ttl_seconds`` after being added.

    Expired entries are purged lazily on lookup. Re-adding a known path does not
    refresh its expiry. Safe for concurrent tasks on one event loop.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        if ttl_seconds <= 0:
            raise ConfigurationError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._added_at: Dict[str, float] = {}
        self._lock = asyncio.Lock()

    async def contains(self, file_path: str) -> bool:
        async with self._lock:
            added_at = self._added_at.get(file_path)
            if added_at is None:
                return False
            if self._clock() - added_at >= self.ttl_seconds:
                del self._added_at[file_path]
                logging.debug(f"Expired {file_path} from file cache")
                return False
            return True

    async def add(self, file_path: str) -> None:
        async with self._lock:
            self._added_at.setdefault(file_path, self._clock())

    def __len__(self) -> int:
        return len(self._added_at)


def create_file_cache(settings: "Settings") -> FileCache:
    """Build the cache backend named by ``settings.cache_backend``."""
    backend = settings.cache_backend.lower()
    if backend == "memory":
        return MemoryFileCache()
    if backend == "bounded":
        return BoundedFileCache(settings.cache_max_entries)
    if backend == "expiring":
        return ExpiringFileCache(settings.cache_ttl_seconds)
    raise ConfigurationError(f"Unknown cache backend: {settings.cache_backend}")
