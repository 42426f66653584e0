"""
TTL configuration per resource.
"""
from typing import Dict, Optional

from config.settings import Settings, settings as default_settings

from .core import ResourceKind


def get_ttl_config(settings: Optional[Settings] = None) -> Dict[ResourceKind, int]:
    """
    Cache windows in seconds for every resource.

    Defaults: hackathons 1 hour, news 10 minutes, contests 1 hour.
    """
    settings = settings or default_settings
    return {
        ResourceKind.HACKATHONS: settings.hackathons_ttl_seconds,
        ResourceKind.NEWS: settings.news_ttl_seconds,
        ResourceKind.CONTESTS: settings.contests_ttl_seconds,
    }


def get_ttl_for_resource(
    kind: ResourceKind,
    settings: Optional[Settings] = None,
) -> int:
    """
    Get the cache window for a resource.

    Args:
        kind: The resource
        settings: Settings to read from (defaults to the global ones)

    Returns:
        TTL in seconds
    """
    return get_ttl_config(settings)[kind]
