"""Reference filters — eligibility checks before any remote call."""

from progimg.filters.eligibility import (
    is_eligible,
    is_remote,
    is_supported_domain,
    should_ignore_format,
)

__all__ = [
    "is_eligible",
    "is_remote",
    "is_supported_domain",
    "should_ignore_format",
]
