import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass

from ip_locator.clients.base import BaseGeoProviderClient
from ip_locator.logger import logger
from ip_locator.models.common import GeoLocation
from ip_locator.normalizer import normalize

DEFAULT_FRESHNESS_WINDOW_SECONDS = 300.0


@dataclass(frozen=True)
class CacheEntry:
    """A successful lookup and the clock reading taken when it was stored."""

    location: GeoLocation
    inserted_at: float


class LookupCache:
    """Time-bounded memoization of successful geolocation lookups, keyed by the exact IP string.

    - A hit is an entry younger than `freshness_window`; it is returned without a provider call.
    - A miss (or an expired entry) fetches and normalizes; only a success is stored.
    - Failures propagate untouched and are never stored, so the next call retries.

    The store is guarded by a lock that is never held across the provider call.
    Two concurrent misses on the same key may therefore both fetch; the later
    write wins.
    """

    def __init__(
        self,
        client: BaseGeoProviderClient,
        freshness_window: float = DEFAULT_FRESHNESS_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        max_entries: int | None = None,
    ) -> None:
        if freshness_window <= 0:
            raise ValueError("freshness_window must be positive")
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be at least 1")

        self._client = client
        self._freshness_window = freshness_window
        self._clock = clock
        self._max_entries = max_entries
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def freshness_window(self) -> float:
        return self._freshness_window

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    async def get_or_fetch(self, ip: str) -> GeoLocation:
        """Return the geolocation for `ip`, from memory when fresh, otherwise from the provider.

        Raises TransportError, DecodeError or ProviderRejectedError.
        """
        cached = self._get_fresh(ip)
        if cached is not None:
            logger.debug(f"Geolocation cache hit ip={ip!r}")
            return cached

        logger.debug(f"Geolocation cache miss ip={ip!r}")
        raw = await self._client.fetch(ip)
        location = normalize(raw)
        self._store(ip, location)
        return location

    def _is_fresh(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.inserted_at < self._freshness_window

    def _get_fresh(self, key: str) -> GeoLocation | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._is_fresh(entry, self._clock()):
                return entry.location
            # Lazily drop the stale entry; a failed refetch must not resurrect it.
            del self._entries[key]
            return None

    def _store(self, key: str, location: GeoLocation) -> None:
        with self._lock:
            self._entries[key] = CacheEntry(location=location, inserted_at=self._clock())
            self._entries.move_to_end(key)
            if self._max_entries is not None and len(self._entries) > self._max_entries:
                self._evict()

    def _evict(self) -> None:
        # Caller holds the lock.
        now = self._clock()
        for key in [k for k, entry in self._entries.items() if not self._is_fresh(entry, now)]:
            del self._entries[key]
        while len(self._entries) > self._max_entries:
            key, _ = self._entries.popitem(last=False)
            logger.debug(f"Geolocation cache full, evicted ip={key!r}")
