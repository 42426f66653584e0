"""
Single-flight refreshes for the feed slots.

A slot that goes stale under load is refetched once: the first reader runs
the adapter, readers arriving meanwhile block until it finishes and get the
same records or the same FetchError.
"""
import threading
import time
import logging
from typing import Dict, Optional, Callable, Any
from dataclasses import dataclass, field

logger = logging.getLogger("cache.coalescer")


@dataclass
class InFlightRefresh:
    """Outcome holder for one running refresh of a slot."""
    done: threading.Event = field(default_factory=threading.Event)
    records: Optional[Any] = None
    error: Optional[BaseException] = None
    started_at: float = field(default_factory=time.time)
    waiters: int = 0


class RequestCoalescer:
    """
    Runs at most one refresh per slot key at a time.

    Keys are resource names ("hackathons", "news", "contests"). The entry for
    a key is removed before its waiters are woken, so a read that arrives
    after a failed refresh starts a new one instead of reusing the error.
    """

    def __init__(self, timeout: float = 30.0):
        """
        Args:
            timeout: Seconds a waiting reader blocks before giving up
        """
        self._in_flight: Dict[str, InFlightRefresh] = {}
        self._lock = threading.Lock()
        self._timeout = timeout

    def get_or_fetch(self, key: str, fetch_fn: Callable[[], Any]) -> Any:
        """
        Run `fetch_fn` for `key`, or wait for the refresh already running.

        Raises:
            TimeoutError: The running refresh outlasted the timeout
            Exception: Whatever the refresh raised, in every waiting reader
        """
        with self._lock:
            refresh = self._in_flight.get(key)
            leader = refresh is None
            if leader:
                refresh = InFlightRefresh()
                self._in_flight[key] = refresh
                logger.debug(f"Refreshing {key}")
            else:
                refresh.waiters += 1
                logger.debug(f"Joining running refresh of {key} ({refresh.waiters} waiting)")

        if leader:
            try:
                refresh.records = fetch_fn()
            except Exception as e:
                refresh.error = e
            finally:
                with self._lock:
                    self._in_flight.pop(key, None)
                refresh.done.set()
        elif not refresh.done.wait(timeout=self._timeout):
            logger.error(f"Gave up waiting for {key} refresh after {self._timeout}s")
            raise TimeoutError(f"Refresh for {key} timed out after {self._timeout}s")

        if refresh.error is not None:
            raise refresh.error
        return refresh.records

    @property
    def active_requests(self) -> int:
        """Slots with a refresh currently running."""
        with self._lock:
            return len(self._in_flight)

    def get_stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "active_requests": len(self._in_flight),
                "active_keys": list(self._in_flight.keys()),
            }
