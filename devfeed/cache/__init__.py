"""
Per-resource cache slots with TTL-driven refresh and request coalescing.
"""
from .core import CacheSlot, CacheSnapshot, CacheSource, ResourceKind, utcnow
from .ttl_policies import get_ttl_config, get_ttl_for_resource
from .coalescer import RequestCoalescer
from .coordinator import RefreshCoordinator

__all__ = [
    # Core types
    "CacheSlot",
    "CacheSnapshot",
    "CacheSource",
    "ResourceKind",
    "utcnow",
    # TTL policies
    "get_ttl_config",
    "get_ttl_for_resource",
    # Coalescing
    "RequestCoalescer",
    # Refresh policy
    "RefreshCoordinator",
]
