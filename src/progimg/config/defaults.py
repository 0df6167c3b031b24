"""Package-level default configuration values."""

from __future__ import annotations

from typing import Any

# Progressive enrichment
DEFAULT_PROGRESSIVE_ENABLE = True
DEFAULT_SRCSET_WIDTHS = [400, 600, 800, 1200, 2000, 3000]
DEFAULT_SIZES: str | None = None

# Lazy loading
DEFAULT_LAZY_ENABLE = True
DEFAULT_LAZY_SKIP_FIRST = 2

# Eligibility
DEFAULT_SUPPORTED_DOMAINS: list[str] = []
DEFAULT_IGNORE_FORMATS = ["svg", "gif", "ico"]
DEFAULT_DEV_MODE = False

# Cache (None = caching disabled)
DEFAULT_CACHE_PATH: str | None = None

# Remote image service
DEFAULT_DIMENSIONS_QUERY = "fmt=info"
DEFAULT_PLACEHOLDER_QUERY = "fmt=thumbhash"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_WEBP_QUALITY = 80

# Concurrency
DEFAULT_MAX_CONCURRENCY = 8

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "progressive_enable": DEFAULT_PROGRESSIVE_ENABLE,
        "srcset_widths": list(DEFAULT_SRCSET_WIDTHS),
        "sizes": DEFAULT_SIZES,
        "lazy_enable": DEFAULT_LAZY_ENABLE,
        "lazy_skip_first": DEFAULT_LAZY_SKIP_FIRST,
        "supported_domains": list(DEFAULT_SUPPORTED_DOMAINS),
        "ignore_formats": list(DEFAULT_IGNORE_FORMATS),
        "dev_mode": DEFAULT_DEV_MODE,
        "cache_path": DEFAULT_CACHE_PATH,
        "dimensions_query": DEFAULT_DIMENSIONS_QUERY,
        "placeholder_query": DEFAULT_PLACEHOLDER_QUERY,
        "timeout": DEFAULT_TIMEOUT,
        "max_attempts": DEFAULT_MAX_ATTEMPTS,
        "webp_quality": DEFAULT_WEBP_QUALITY,
        "max_concurrency": DEFAULT_MAX_CONCURRENCY,
        "log_level": DEFAULT_LOG_LEVEL,
    }
