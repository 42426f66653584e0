"""
Feed context: the cache slots, adapters and coordinators owned by one app.

Built once per application and handed to the routes, so every test can
start from empty slots and fake adapters.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Optional

import requests

from config.settings import Settings, settings as default_settings
from devfeed.cache import (
    CacheSlot,
    RefreshCoordinator,
    RequestCoalescer,
    ResourceKind,
    get_ttl_config,
    utcnow,
)
from devfeed.upstreams import (
    ContestAdapter,
    HackathonAdapter,
    HttpFetcher,
    NewsAdapter,
    UpstreamAdapter,
)

logger = logging.getLogger("devfeed.context")


@dataclass
class FeedContext:
    """One coordinator per resource kind."""
    coordinators: Dict[ResourceKind, RefreshCoordinator] = field(default_factory=dict)
    coalescer: Optional[RequestCoalescer] = None

    def coordinator(self, kind: ResourceKind) -> RefreshCoordinator:
        return self.coordinators[kind]

    def get(self, kind: ResourceKind) -> Any:
        """Read a resource through its coordinator."""
        return self.coordinators[kind].get()

    def get_stats(self) -> Dict[str, Any]:
        stats: Dict[str, Any] = {
            kind.value: coordinator.get_stats()
            for kind, coordinator in self.coordinators.items()
        }
        if self.coalescer is not None:
            stats["coalescer"] = self.coalescer.get_stats()
        return stats


def build_default_adapters(
    settings: Settings,
    session: Optional[requests.Session] = None,
) -> Dict[ResourceKind, UpstreamAdapter]:
    """Real upstream adapters sharing one HTTP session."""
    session = session or requests.Session()

    def fetcher(name: str) -> HttpFetcher:
        return HttpFetcher(
            name,
            session=session,
            timeout=settings.upstream_timeout_seconds,
            attempts=settings.upstream_retry_attempts,
        )

    return {
        ResourceKind.HACKATHONS: HackathonAdapter(
            http=fetcher("hackathons"),
            url=settings.hackathons_url,
            referer=settings.hackathons_referer,
        ),
        ResourceKind.NEWS: NewsAdapter(http=fetcher("news"), url=settings.news_url),
        ResourceKind.CONTESTS: ContestAdapter(http=fetcher("contests"), url=settings.contests_url),
    }


def build_feed_context(
    settings: Optional[Settings] = None,
    adapters: Optional[Dict[ResourceKind, UpstreamAdapter]] = None,
    clock: Callable[[], datetime] = utcnow,
    session: Optional[requests.Session] = None,
) -> FeedContext:
    """
    Create empty slots and bind each to its adapter.

    Args:
        settings: TTLs, upstream URLs and coalescing options
        adapters: Replacement adapters by kind; missing kinds get the real ones
        clock: Source of the current time for every coordinator
        session: HTTP session for the real adapters
    """
    settings = settings or default_settings
    bound = build_default_adapters(settings, session)
    bound.update(adapters or {})

    coalescer = None
    if settings.coalesce_refreshes:
        coalescer = RequestCoalescer(timeout=settings.coalesce_timeout_seconds)

    context = FeedContext(coalescer=coalescer)
    for kind, ttl in get_ttl_config(settings).items():
        context.coordinators[kind] = RefreshCoordinator(
            slot=CacheSlot(kind, ttl),
            adapter=bound[kind],
            clock=clock,
            coalescer=coalescer,
        )
        logger.debug(f"Bound {kind.value} slot (ttl={ttl}s)")

    return context
