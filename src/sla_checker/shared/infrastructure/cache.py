"""
Expiring Cache
==============

Thread-safe in-memory key/value cache where every entry expires a fixed
TTL after it was written. Expiry is checked lazily on read; there is no
background sweeper.
"""

import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Generic, Optional, Tuple, TypeVar

from sla_checker.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """A cached value and the instant after which it is stale."""
    value: T
    expiry: datetime


class ExpiringCache(Generic[T]):
    """
    Generic cache mapping string keys to values of type T.

    All entries share the TTL given at construction. A single lock guards
    the whole mapping, so operations serialize.
    """

    def __init__(
        self,
        ttl: timedelta,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self._ttl = ttl
        self._clock = clock or _utc_now
        self._data: Dict[str, CacheEntry[T]] = {}
        self._lock = threading.Lock()

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def get(self, key: str) -> Tuple[Optional[T], bool]:
        """
        Look up a key.

        Returns:
            (value, True) when a live entry exists, otherwise (None, False)
        """
        with self._lock:
            entry = self._data.get(key)
            if entry is None or self._clock() > entry.expiry:
                logger.debug("Cache miss", extra={"cache_key": key})
                return None, False
            logger.debug("Cache hit", extra={"cache_key": key})
            return entry.value, True

    def set(self, key: str, value: T) -> None:
        """Store a value, resetting its expiry to now + ttl."""
        with self._lock:
            self._data[key] = CacheEntry(value=value, expiry=self._clock() + self._ttl)

    def delete(self, key: str) -> None:
        """Remove a key if present."""
        with self._lock:
            self._data.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
