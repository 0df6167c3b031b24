"""Eligibility gate: decides which image references get enriched."""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from progimg.config.schema import ImageOptions

_NETWORK_SCHEMES = {"http", "https"}


def is_eligible(url: str | None, options: ImageOptions) -> bool:
    """Return True when ``url`` should enter the enrichment path."""
    if not options.enabled or not url:
        return False
    if not is_remote(url):
        return False
    if not is_supported_domain(url, options.supported_domains):
        return False
    return not should_ignore_format(url, options.ignore_formats)


def is_remote(url: str) -> bool:
    """Absolute URL with a network scheme and a host."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return parts.scheme.lower() in _NETWORK_SCHEMES and bool(parts.hostname)


def is_supported_domain(url: str, patterns: list[str]) -> bool:
    """Match the hostname against allow-patterns; ``*`` matches any substring.

    An empty pattern list allows every host.
    """
    if not patterns:
        return True
    try:
        hostname = urlsplit(url).hostname
    except ValueError:
        return False
    if not hostname:
        return False
    return any(_domain_regex(pattern).fullmatch(hostname) for pattern in patterns)


def should_ignore_format(url: str, formats: list[str]) -> bool:
    """True when the URL path ends with one of ``formats`` (case-insensitive)."""
    try:
        path = urlsplit(url).path.lower()
    except ValueError:
        return False
    return any(path.endswith(f".{fmt.lower().lstrip('.')}") for fmt in formats if fmt)


def _domain_regex(pattern: str) -> re.Pattern[str]:
    escaped = ".*".join(re.escape(part) for part in pattern.strip().split("*"))
    return re.compile(escaped, re.IGNORECASE)
