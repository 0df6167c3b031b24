"""Image pipeline — gate, cache-aside lookup, concurrent fetch, markup."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import Any

from progimg.cache.stats import CacheStats
from progimg.cache.store import MetadataCache
from progimg.config.schema import ImageOptions, resolve_options
from progimg.filters.eligibility import is_eligible
from progimg.markup.builder import build_markup
from progimg.markup.descriptor import parse_descriptor
from progimg.markup.srcset import build_srcset
from progimg.provider.client import MetadataProvider
from progimg.types import ImageMetadata, ImageReference

logger = logging.getLogger(__name__)

DefaultRenderer = Callable[[ImageReference], str]


class ImagePipeline:
    """Turns image references into progressive-loading HTML.

    ``transform`` is the hook handed to the host renderer: it returns the
    replacement markup, or ``None`` when the host should keep its own default
    rendering. Call ``start()`` before and ``shutdown()`` after a run (or use
    ``async with``) so the cache is loaded once and flushed once.
    """

    def __init__(
        self,
        options: ImageOptions | dict[str, Any] | None = None,
        provider: MetadataProvider | None = None,
        cache: MetadataCache | None = None,
    ) -> None:
        self._options = resolve_options(options)
        self._provider = provider or MetadataProvider(self._options.provider)
        if cache is None and self._options.cache_path:
            cache = MetadataCache(self._options.cache_path)
        self._cache = cache
        self._image_count = 0
        self._started = False
        self._start_lock = asyncio.Lock()

    @property
    def options(self) -> ImageOptions:
        return self._options

    @property
    def cache(self) -> MetadataCache | None:
        return self._cache

    @property
    def stats(self) -> CacheStats | None:
        return self._cache.stats() if self._cache else None

    @property
    def image_count(self) -> int:
        """Number of enriched images emitted since the last counter reset."""
        return self._image_count

    async def start(self) -> None:
        """Load the cache once; later calls return immediately."""
        if self._started:
            return
        async with self._start_lock:
            if self._started:
                return
            if self._cache is not None:
                await self._cache.load()
            self._started = True

    async def shutdown(self) -> None:
        """Flush the cache (best effort) and release the HTTP client."""
        try:
            if self._cache is not None:
                saved = await self._cache.save()
                if not saved:
                    logger.warning("Cache changes were not persisted; they will be refetched")
                stats = self._cache.stats()
                logger.info(
                    "Cache: %d entries, %d hits, %d misses (%.1f%% hit rate)",
                    stats.entries,
                    stats.hits,
                    stats.misses,
                    stats.hit_rate * 100,
                )
        finally:
            await self._provider.close()

    async def __aenter__(self) -> ImagePipeline:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.shutdown()

    def reset_counter(self) -> None:
        """Restart lazy-load numbering for a new document."""
        self._image_count = 0

    async def resolve(self, reference: ImageReference) -> ImageMetadata | None:
        """Metadata for an eligible reference, or None for default rendering."""
        url = reference.url
        if not is_eligible(url, self._options):
            logger.debug("Skipping ineligible image %s", url)
            return None

        await self.start()

        if self._cache is not None:
            cached = self._cache.get(url)
            if cached is not None:
                logger.debug("Cache hit for %s", url)
                return cached

        dimensions, placeholder = await self._provider.fetch_metadata(url)
        if dimensions is None:
            return None

        metadata = ImageMetadata(
            width=dimensions.width,
            height=dimensions.height,
            placeholder=placeholder or "",
        )
        if self._cache is not None and metadata.has_placeholder:
            self._cache.set(url, metadata)
        return metadata

    async def transform(self, reference: ImageReference) -> str | None:
        metadata = await self.resolve(reference)
        if metadata is None:
            return None
        return self._assemble(reference, metadata)

    async def render(self, reference: ImageReference, default: DefaultRenderer) -> str:
        markup = await self.transform(reference)
        return markup if markup is not None else default(reference)

    async def render_all(
        self,
        references: Sequence[ImageReference],
        default: DefaultRenderer,
    ) -> list[str]:
        """Render a document's references; output is positional.

        Lookups run concurrently (bounded by ``max_concurrency``); markup is
        then assembled in input order so lazy-load numbering is deterministic.
        """
        await self.start()
        semaphore = asyncio.Semaphore(self._options.max_concurrency)

        async def worker(reference: ImageReference) -> ImageMetadata | None:
            async with semaphore:
                return await self.resolve(reference)

        results = await asyncio.gather(
            *(worker(ref) for ref in references), return_exceptions=True
        )

        rendered: list[str] = []
        for reference, result in zip(references, results, strict=True):
            if isinstance(result, BaseException):
                logger.error("Image %s failed: %r", reference.url, result)
                result = None
            if result is None:
                rendered.append(default(reference))
            else:
                rendered.append(self._assemble(reference, result))
        return rendered

    def _assemble(self, reference: ImageReference, metadata: ImageMetadata) -> str:
        self._image_count += 1
        descriptor = parse_descriptor(reference.alt)
        srcset = build_srcset(
            reference.url, metadata.width, self._options.progressive.srcset_widths
        )
        return build_markup(
            descriptor,
            reference.url,
            metadata,
            srcset,
            self._options,
            self._image_count,
        )
