"""Persisted metadata cache backed by a single JSON file."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from progimg.cache.keys import canonical_key
from progimg.cache.stats import CacheStats
from progimg.errors.exceptions import CacheError
from progimg.types import ImageMetadata

logger = logging.getLogger(__name__)


class MetadataCache:
    """In-memory map of canonical URL -> ImageMetadata with a JSON snapshot.

    The in-memory map is authoritative for the lifetime of the process. The
    file is rewritten by ``save()`` only when the map changed since the last
    load or save. ``get``/``set`` never suspend; ``load``/``save`` do their
    file I/O in a worker thread.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._entries: dict[str, ImageMetadata] = {}
        self._dirty = False
        self._loaded = False
        self._load_lock = asyncio.Lock()
        self._hits = 0
        self._misses = 0

    @property
    def path(self) -> Path:
        return self._path

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def loaded(self) -> bool:
        return self._loaded

    async def load(self) -> None:
        """Hydrate from disk once. Missing or corrupt files yield an empty cache."""
        if self._loaded:
            return
        async with self._load_lock:
            if self._loaded:
                return
            try:
                raw = await asyncio.to_thread(self._read_file)
            except CacheError as e:
                logger.info("%s; starting with an empty cache", e.message)
                raw = {}
            self._entries = _parse_entries(raw, self._path)
            self._dirty = False
            self._loaded = True
            logger.info("Cache loaded from %s with %d items", self._path, len(self._entries))

    async def save(self) -> bool:
        """Write the snapshot if dirty. Returns False when the write failed."""
        if not self._dirty:
            logger.debug("No cache changes to save")
            return True

        payload = {key: meta.model_dump() for key, meta in self._entries.items()}
        try:
            await asyncio.to_thread(self._write_file, payload)
        except CacheError as e:
            logger.error("%s", e.message)
            return False

        self._dirty = False
        logger.info("Cache saved to %s (%d items)", self._path, len(payload))
        return True

    def get(self, key: str) -> ImageMetadata | None:
        entry = self._entries.get(canonical_key(key))
        if entry is not None:
            self._hits += 1
            return entry
        self._misses += 1
        return None

    def set(self, key: str, value: ImageMetadata) -> bool:
        """Store ``value``; returns True only when the stored value changed."""
        canonical = canonical_key(key)
        current = self._entries.get(canonical)
        if current is not None and current.model_dump_json() == value.model_dump_json():
            return False
        self._entries[canonical] = value
        self._dirty = True
        return True

    def items(self) -> list[tuple[str, ImageMetadata]]:
        """Snapshot of stored entries; does not touch hit/miss counters."""
        return list(self._entries.items())

    def clear(self) -> None:
        if self._entries:
            self._entries.clear()
            self._dirty = True

    def stats(self) -> CacheStats:
        return CacheStats(
            entries=len(self._entries),
            dirty=self._dirty,
            hits=self._hits,
            misses=self._misses,
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and canonical_key(key) in self._entries

    def _read_file(self) -> Any:
        if not self._path.is_file():
            raise CacheError(f"Cache file {self._path} not found", path=self._path)
        try:
            content = self._path.read_text(encoding="utf-8")
            return json.loads(content or "{}")
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CacheError(
                f"Failed to read cache file {self._path}: {e}", path=self._path, original=e
            ) from e

    def _write_file(self, payload: dict[str, Any]) -> None:
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
            tmp_path.replace(self._path)
        except OSError as e:
            raise CacheError(
                f"Failed to save cache file {self._path}: {e}", path=self._path, original=e
            ) from e


def _parse_entries(raw: Any, path: Path) -> dict[str, ImageMetadata]:
    if not isinstance(raw, dict):
        logger.warning("Cache file %s is not a JSON object, ignoring", path)
        return {}

    entries: dict[str, ImageMetadata] = {}
    for key, value in raw.items():
        try:
            entries[canonical_key(key)] = ImageMetadata.model_validate(value)
        except ValidationError:
            logger.warning("Dropping invalid cache entry for %s", key)
    return entries
