"""Custom exception hierarchy for progimg."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class ProgImgError(Exception):
    """Base exception for all progimg errors."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


class MetadataFetchError(ProgImgError):
    """The remote image service could not deliver usable metadata.

    Examples: non-2xx status, malformed body, undecodable placeholder.
    Raised inside the provider and converted to an absent result there.
    """

    def __init__(
        self,
        message: str = "",
        url: str = "",
        http_status: int | None = None,
        reason: str = "bad_response",
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.http_status = http_status
        self.reason = reason
        self.original = original


class CacheError(ProgImgError):
    """Reading or writing the cache file failed."""

    def __init__(
        self,
        message: str = "",
        path: Path | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.original = original


class ConfigError(ProgImgError):
    """An options file is missing required structure or holds invalid values."""

    def __init__(self, message: str = "", path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path
