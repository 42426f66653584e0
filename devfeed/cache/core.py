"""
Core cache data structures.
"""
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


class ResourceKind(Enum):
    """Upstream resources served through a cache slot."""
    HACKATHONS = "hackathons"
    NEWS = "news"
    CONTESTS = "contests"


class CacheSource(Enum):
    """Where the data returned by a read came from."""
    FRESH = "fresh"       # Within TTL
    UPSTREAM = "upstream" # Fetched from the upstream source


def utcnow() -> datetime:
    """Timezone-aware current time, the default clock."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CacheSnapshot:
    """
    The (data, last_updated_at) pair held by a slot.

    Both fields are either set or None together.
    """
    data: Any = None
    last_updated_at: Optional[datetime] = None

    @property
    def is_empty(self) -> bool:
        return self.last_updated_at is None


_EMPTY = CacheSnapshot()


class CacheSlot:
    """
    Single-entry cache for one resource.

    The snapshot is swapped as one reference, so a reader sees either the
    full old pair or the full new pair.
    """

    def __init__(self, kind: ResourceKind, ttl_seconds: int):
        self.kind = kind
        self.ttl_seconds = ttl_seconds
        self._snapshot = _EMPTY
        self._lock = threading.Lock()

    def read(self) -> CacheSnapshot:
        """Current snapshot, regardless of freshness."""
        with self._lock:
            return self._snapshot

    def replace(self, data: Any, now: datetime) -> CacheSnapshot:
        """Store new data fetched at `now`."""
        snapshot = CacheSnapshot(data=data, last_updated_at=now)
        with self._lock:
            self._snapshot = snapshot
        return snapshot

    def age_seconds(self, now: datetime) -> Optional[float]:
        """Seconds since the last successful fetch, None if never fetched."""
        snapshot = self.read()
        if snapshot.is_empty:
            return None
        return (now - snapshot.last_updated_at).total_seconds()

    def is_fresh(self, now: datetime) -> bool:
        """True if data is present and younger than the TTL."""
        age = self.age_seconds(now)
        return age is not None and age < self.ttl_seconds

    def describe(self, now: datetime) -> dict:
        """Slot state for the stats endpoint."""
        snapshot = self.read()
        age = self.age_seconds(now)
        return {
            "has_data": not snapshot.is_empty,
            "last_updated_at": (
                snapshot.last_updated_at.isoformat() if snapshot.last_updated_at else None
            ),
            "age_seconds": round(age, 1) if age is not None else None,
            "ttl_seconds": self.ttl_seconds,
            "fresh": age is not None and age < self.ttl_seconds,
        }

    def __repr__(self):
        return f"<CacheSlot(kind='{self.kind.value}', ttl={self.ttl_seconds})>"
