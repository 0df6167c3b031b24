"""Async client for the remote image metadata service."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

import httpx
from pydantic import ValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from progimg.cache.keys import strip_query
from progimg.config.schema import ProviderOptions
from progimg.errors.exceptions import MetadataFetchError
from progimg.provider.placeholder import is_data_uri, thumbhash_to_data_url
from progimg.types import Dimensions

logger = logging.getLogger(__name__)

PlaceholderDecoder = Callable[[str, int], str]

# Field names the service may use for pixel dimensions, in lookup order
_WIDTH_FIELDS = ("ImageWidth", "width")
_HEIGHT_FIELDS = ("ImageHeight", "height")


class MetadataProvider:
    """Fetches dimensions and placeholders for remote images.

    Every public fetch fails soft: errors are logged and reported as ``None``.
    """

    def __init__(
        self,
        options: ProviderOptions | None = None,
        client: httpx.AsyncClient | None = None,
        placeholder_decoder: PlaceholderDecoder = thumbhash_to_data_url,
    ) -> None:
        self._options = options or ProviderOptions()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=self._options.timeout, follow_redirects=True
        )
        self._decode_placeholder = placeholder_decoder

    async def fetch_metadata(self, url: str) -> tuple[Dimensions | None, str | None]:
        """Fetch dimensions and placeholder concurrently; neither cancels the other."""
        dimensions, placeholder = await asyncio.gather(
            self.fetch_dimensions(url),
            self.fetch_placeholder(url),
            return_exceptions=True,
        )
        if isinstance(dimensions, BaseException):
            logger.error("Unexpected dimension error for %s: %r", url, dimensions)
            dimensions = None
        if isinstance(placeholder, BaseException):
            logger.error("Unexpected placeholder error for %s: %r", url, placeholder)
            placeholder = None
        return dimensions, placeholder

    async def fetch_dimensions(self, url: str) -> Dimensions | None:
        try:
            response = await self._request(url, self._options.dimensions_query)
            return _parse_dimensions(response, url)
        except MetadataFetchError as e:
            logger.warning("Dimension lookup failed for %s: %s", url, e.message)
            return None

    async def fetch_placeholder(self, url: str) -> str | None:
        try:
            response = await self._request(url, self._options.placeholder_query)
            return self._parse_placeholder(response, url)
        except MetadataFetchError as e:
            logger.warning("Placeholder lookup failed for %s: %s", url, e.message)
            return None

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> MetadataProvider:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @staticmethod
    def service_url(url: str, query: str) -> str:
        """Service endpoint for ``url``: canonical URL plus the request query."""
        base = strip_query(url)
        return f"{base}?{query}" if query else base

    async def _request(self, url: str, query: str) -> httpx.Response:
        service_url = self.service_url(url, query)
        try:
            async for attempt in AsyncRetrying(
                retry=retry_if_exception_type(httpx.TransportError),
                wait=wait_exponential(multiplier=1, min=1, max=10),
                stop=stop_after_attempt(self._options.max_attempts),
                reraise=True,
            ):
                with attempt:
                    response = await self._client.get(service_url)
        except httpx.HTTPError as e:
            raise MetadataFetchError(
                f"{type(e).__name__}: {e}", url=url, reason="transport", original=e
            ) from e

        if not response.is_success:
            raise MetadataFetchError(
                f"HTTP {response.status_code}: {response.reason_phrase}",
                url=url,
                http_status=response.status_code,
                reason="http_status",
            )
        return response

    def _parse_placeholder(self, response: httpx.Response, url: str) -> str:
        payload = response.text.strip()
        if not payload:
            raise MetadataFetchError("empty placeholder body", url=url, reason="malformed")
        if is_data_uri(payload):
            return payload
        try:
            return self._decode_placeholder(payload, self._options.webp_quality)
        except Exception as e:
            raise MetadataFetchError(
                f"cannot decode placeholder: {e}", url=url, reason="decode", original=e
            ) from e


def _parse_dimensions(response: httpx.Response, url: str) -> Dimensions:
    try:
        data = response.json()
    except ValueError as e:
        raise MetadataFetchError(
            "dimension body is not JSON", url=url, reason="malformed", original=e
        ) from e
    if not isinstance(data, dict):
        raise MetadataFetchError("dimension body is not an object", url=url, reason="malformed")

    width = _first_int(data, _WIDTH_FIELDS)
    height = _first_int(data, _HEIGHT_FIELDS)
    if width is None or height is None:
        raise MetadataFetchError("missing integer width/height", url=url, reason="malformed")
    try:
        return Dimensions(width=width, height=height)
    except ValidationError as e:
        raise MetadataFetchError(
            f"invalid dimensions {width}x{height}", url=url, reason="malformed", original=e
        ) from e


def _first_int(data: dict[str, Any], fields: tuple[str, ...]) -> int | None:
    for field in fields:
        value = data.get(field)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None
