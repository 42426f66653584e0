"""
Refresh policy for one cache slot.
"""
import threading
import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Tuple

from devfeed.upstreams.base import UpstreamAdapter

from .core import CacheSlot, CacheSource, utcnow
from .coalescer import RequestCoalescer

logger = logging.getLogger("cache.coordinator")


class RefreshCoordinator:
    """
    Serves a slot's data while fresh and refetches it once stale.

    - Fresh slot: cached data is returned, no upstream call
    - Stale or empty slot: the adapter is called; on success the slot is
      replaced with the result stamped at fetch completion time
    - Failed fetch: the slot is left as it was and the error propagates.
      Stale data is never served in place of a failed refresh.
    """

    def __init__(
        self,
        slot: CacheSlot,
        adapter: UpstreamAdapter,
        clock: Callable[[], datetime] = utcnow,
        coalescer: Optional[RequestCoalescer] = None,
    ):
        """
        Args:
            slot: The cache slot this coordinator owns
            adapter: Upstream adapter bound to the slot
            clock: Source of the current time
            coalescer: Shares one refresh between concurrent stale reads;
                None lets every stale read fetch on its own
        """
        self.slot = slot
        self.adapter = adapter
        self._clock = clock
        self._coalescer = coalescer

        self._stats_lock = threading.Lock()
        self._stats = {
            "hits_fresh": 0,
            "misses": 0,
            "refresh_failures": 0,
        }

    @property
    def key(self) -> str:
        return self.slot.kind.value

    def get(self) -> Any:
        """Return the resource's data, refreshing it if stale."""
        data, _ = self.get_with_source()
        return data

    def get_with_source(self) -> Tuple[Any, CacheSource]:
        """
        Return the resource's data and where it came from.

        Raises:
            FetchError: The refresh failed (slot untouched)
            TimeoutError: A coalesced refresh did not finish in time
        """
        now = self._clock()
        if self.slot.is_fresh(now):
            snapshot = self.slot.read()
            logger.debug(
                f"CACHE HIT (fresh): {self.key} "
                f"[age={self.slot.age_seconds(now):.1f}s]"
            )
            self._bump("hits_fresh")
            return snapshot.data, CacheSource.FRESH

        if self.slot.read().is_empty:
            logger.info(f"CACHE MISS: {self.key}")
        else:
            logger.info(
                f"CACHE EXPIRED: {self.key} [age={self.slot.age_seconds(now):.1f}s]"
            )
        self._bump("misses")

        if self._coalescer is not None:
            data = self._coalescer.get_or_fetch(self.key, self._refresh)
        else:
            data = self._refresh()
        return data, CacheSource.UPSTREAM

    def _refresh(self) -> Any:
        """Fetch from upstream and store the result."""
        try:
            data = self.adapter.fetch()
        except Exception as e:
            self._bump("refresh_failures")
            logger.warning(f"Refresh failed for {self.key}, cache left untouched: {e}")
            raise
        self.slot.replace(data, self._clock())
        logger.info(f"Fetched new {self.key} data")
        return data

    def _bump(self, counter: str) -> None:
        with self._stats_lock:
            self._stats[counter] += 1

    def get_stats(self) -> Dict[str, Any]:
        """Slot state plus hit/miss counters."""
        with self._stats_lock:
            counters = dict(self._stats)
        total = counters["hits_fresh"] + counters["misses"]
        hit_rate = (counters["hits_fresh"] / total * 100) if total > 0 else 0
        return {
            **self.slot.describe(self._clock()),
            **counters,
            "hit_rate_percent": round(hit_rate, 1),
        }
