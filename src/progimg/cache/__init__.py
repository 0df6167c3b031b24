"""Cache subsystem — JSON-file metadata cache with dirty tracking."""

from progimg.cache.keys import canonical_key, strip_query
from progimg.cache.stats import CacheStats
from progimg.cache.store import MetadataCache

__all__ = [
    "CacheStats",
    "MetadataCache",
    "canonical_key",
    "strip_query",
]
