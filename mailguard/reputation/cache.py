"""Time-bounded memoization of domain classifications."""

import logging
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

from .threat import ThreatCategory

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300.0


@dataclass
class CacheRecord:
    """Cached classification for one domain."""

    classification: Optional[ThreatCategory]
    created_at: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        return now - self.created_at > self.ttl


@dataclass(frozen=True)
class CacheLookup:
    """Cache hit. classification is None for a domain cached as clean."""

    classification: Optional[ThreatCategory]


class ReputationCache(ABC):
    """Abstract store of domain -> classification."""

    @abstractmethod
    def get(self, key: str) -> Optional[CacheLookup]:
        """Return the live record for key, or None on miss."""
        pass

    @abstractmethod
    def set(self, key: str, classification: Optional[ThreatCategory]) -> None:
        """Insert or overwrite the record for key."""
        pass

    @abstractmethod
    def cleanup(self) -> int:
        """Remove expired records, returning how many were removed."""
        pass

    @abstractmethod
    def size(self) -> int:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass


class InMemoryReputationCache(ReputationCache):
    """
    Thread-safe in-process cache.

    A single lock guards the whole map and is held only for the duration
    of one call. Expired records are dropped lazily by get() or in bulk
    by cleanup(); nothing sweeps in the background.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize cache.

        Args:
            ttl: Seconds a record stays live
            clock: Monotonic time source in seconds
        """
        self.ttl = ttl
        self._clock = clock
        self._records: dict[str, CacheRecord] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[CacheLookup]:
        with self._lock:
            record = self._records.get(key)
            if record is None:
                return None

            if record.is_expired(self._clock()):
                del self._records[key]
                logger.debug(f"Evicted expired cache record: {key}")
                return None

            return CacheLookup(record.classification)

    def set(self, key: str, classification: Optional[ThreatCategory]) -> None:
        record = CacheRecord(
            classification=classification,
            created_at=self._clock(),
            ttl=self.ttl,
        )
        with self._lock:
            self._records[key] = record

    def cleanup(self) -> int:
        with self._lock:
            now = self._clock()
            expired = [k for k, r in self._records.items() if r.is_expired(now)]
            for key in expired:
                del self._records[key]

        if expired:
            logger.debug(f"Removed {len(expired)} expired cache records")
        return len(expired)

    def size(self) -> int:
        with self._lock:
            return len(self._records)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()


class NullReputationCache(ReputationCache):
    """Cache used when caching is disabled. Always misses."""

    def get(self, key: str) -> Optional[CacheLookup]:
        return None

    def set(self, key: str, classification: Optional[ThreatCategory]) -> None:
        pass

    def cleanup(self) -> int:
        return 0

    def size(self) -> int:
        return 0

    def clear(self) -> None:
        pass


def build_cache(enable_cache: bool, ttl: float = DEFAULT_TTL_SECONDS) -> ReputationCache:
    """Select the cache implementation for a detector configuration."""
    if enable_cache:
        return InMemoryReputationCache(ttl=ttl)
    return NullReputationCache()
