"""Error handling — exception hierarchy for fail-soft image enrichment."""

from progimg.errors.exceptions import (
    CacheError,
    ConfigError,
    MetadataFetchError,
    ProgImgError,
)

__all__ = [
    "ProgImgError",
    "MetadataFetchError",
    "CacheError",
    "ConfigError",
]
