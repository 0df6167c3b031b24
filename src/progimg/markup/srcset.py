"""Responsive ``srcset`` descriptor generation."""

from __future__ import annotations

from collections.abc import Iterable


def srcset_widths(original_width: int, candidate_widths: Iterable[int]) -> list[int]:
    """Candidates below the original width plus the original, ascending and unique."""
    widths = {w for w in candidate_widths if w < original_width}
    widths.add(original_width)
    return sorted(widths)


def width_variant_url(url: str, width: int) -> str:
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}w={width}"


def build_srcset(url: str, original_width: int, candidate_widths: Iterable[int]) -> str:
    """Build a ``srcset`` value; the original width always maps to the bare URL."""
    entries = []
    for width in srcset_widths(original_width, candidate_widths):
        variant = url if width == original_width else width_variant_url(url, width)
        entries.append(f"{variant} {width}w")
    return ", ".join(entries)
