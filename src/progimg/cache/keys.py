"""Cache key canonicalization for remote image URLs."""

from __future__ import annotations

from urllib.parse import unquote, urlsplit, urlunsplit


def strip_query(url: str) -> str:
    """Return the URL without its query string and fragment."""
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


def canonical_key(url: str) -> str:
    """Canonical cache key: query-stripped, percent-decoded URL.

    Two references to the same asset that differ only in query parameters
    (e.g. CDN resize hints) or in percent-encoding share one entry.
    """
    return unquote(strip_query(url.strip()))
