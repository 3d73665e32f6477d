"""Verse index service: lazily loaded, memoized per-version indexes."""

import asyncio
import functools
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import structlog

from app.core.config import settings
from app.models.verse import VerseHit, VersionState, VersionStatus
from app.services.bible.exceptions import MissingSourceError, VersionLoadError
from app.services.bible.history import SearchHistory
from app.services.bible.sources import TranslationFetcher, builtin_location, parse_translation
from app.services.bible.verse_index import VerseIndex

logger = structlog.get_logger(__name__)

CUSTOM_VERSION = "custom"

# Index construction and free-text scoring are CPU bound; keep them off the event loop
_executor = ThreadPoolExecutor(max_workers=4)


@dataclass
class VersionSlot:
    """Load state of one version.

    ``index`` is what queries see. While a reload is in flight the previous
    index stays visible until the new one is swapped in.
    """

    state: VersionState = VersionState.NOT_LOADED
    index: VerseIndex | None = None
    task: asyncio.Task | None = None
    error: str | None = None
    generation: int = 0


class BibleSearchService:
    """Owns one searchable index per Bible version."""

    def __init__(
        self,
        fetcher: TranslationFetcher | None = None,
        history: SearchHistory | None = None,
    ):
        """Initialize the service."""
        self._fetcher = fetcher or TranslationFetcher()
        self._history = history
        self._slots: dict[str, VersionSlot] = {}
        self._custom_sources: dict[str, str] = {}

    @property
    def history(self) -> SearchHistory:
        """Get the search history, creating it if needed."""
        if self._history is None:
            self._history = SearchHistory()
        return self._history

    async def load_version(self, version: str, source_url: str | None = None) -> VerseIndex:
        """Load and index a version, or join the load already in flight.

        Args:
            version: Version key, e.g. "kjv" or a custom source name
            source_url: Explicit document location (custom versions)

        Returns:
            The ready index

        Raises:
            VersionLoadError: If the document cannot be fetched or parsed
        """
        slot = self._slots.setdefault(version, VersionSlot())
        if slot.index is not None:
            return slot.index

        task = slot.task
        if task is None:
            task = self._start_load(version, slot, source_url)
        else:
            logger.debug("bible_version_load_joined", version=version)

        # One caller giving up must not cancel the load shared with the others
        return await asyncio.shield(task)

    def _start_load(self, version: str, slot: VersionSlot, source_url: str | None) -> asyncio.Task:
        slot.generation += 1
        slot.state = VersionState.LOADING
        slot.error = None
        slot.task = asyncio.ensure_future(self._load(version, slot, slot.generation, source_url))
        slot.task.add_done_callback(functools.partial(self._load_done, version, slot, slot.generation))
        return slot.task

    def _load_done(self, version: str, slot: VersionSlot, generation: int, task: asyncio.Task) -> None:
        # A cancelled task may never have entered _load, so its cleanup runs here
        if not task.cancelled() or slot.generation != generation or slot.task is not task:
            return
        slot.task = None
        slot.error = "load cancelled"
        slot.state = VersionState.READY if slot.index is not None else VersionState.FAILED
        logger.warning("bible_version_load_cancelled", version=version)

    def _resolve_location(self, version: str, source_url: str | None) -> str:
        url = source_url or self._custom_sources.get(version)
        if url:
            return url
        if version == CUSTOM_VERSION:
            raise MissingSourceError(version)
        return builtin_location(version)

    async def _load(
        self,
        version: str,
        slot: VersionSlot,
        generation: int,
        source_url: str | None,
    ) -> VerseIndex:
        started = time.perf_counter()
        try:
            location = self._resolve_location(version, source_url)
            payload = await self._fetcher.fetch(location, version=version)
            books = parse_translation(version, payload)

            loop = asyncio.get_event_loop()
            index = await loop.run_in_executor(_executor, VerseIndex.from_translation, version, books)
        except Exception as e:
            if slot.generation == generation:
                slot.task = None
                slot.error = str(e)
                slot.state = VersionState.READY if slot.index is not None else VersionState.FAILED
            logger.error("bible_version_load_failed", version=version, error=str(e))
            if isinstance(e, VersionLoadError):
                raise
            raise VersionLoadError(version, str(e)) from e

        if slot.generation != generation:
            # Superseded by a re-registration; never install a stale index
            logger.info("bible_version_load_discarded", version=version, generation=generation)
            return index

        slot.index = index
        slot.task = None
        slot.state = VersionState.READY
        logger.info(
            "bible_version_loaded",
            version=version,
            verses=len(index),
            books=len(index.books),
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return index

    async def search(
        self,
        query: str,
        version: str | None = None,
        limit: int | None = None,
        threshold: float | None = None,
    ) -> list[VerseHit]:
        """Search one version, loading it first if needed.

        Args:
            query: A reference such as "John 3:16-18" or free text
            version: Version key (defaults to settings)
            limit: Maximum number of hits
            threshold: Minimum relevance score for free-text hits

        Returns:
            Hits in canonical (book, chapter, verse) order
        """
        version = version or settings.default_bible_version
        index = await self.load_version(version)

        loop = asyncio.get_event_loop()
        hits = await loop.run_in_executor(
            _executor,
            functools.partial(
                index.search,
                query,
                limit=limit if limit is not None else settings.search_default_limit,
                threshold=threshold if threshold is not None else settings.search_default_threshold,
                tolerance=settings.search_tolerance,
            ),
        )
        logger.debug("bible_search_completed", version=version, query=query[:50], hits=len(hits))
        return hits

    async def register_custom_source(self, name: str, url: str) -> bool:
        """Register or replace a custom source and rebuild its index from scratch."""
        self._custom_sources[name] = url
        slot = self._slots.setdefault(name, VersionSlot())
        if slot.task is not None:
            logger.info("bible_version_load_invalidated", version=name)

        logger.info("custom_source_registered", version=name, url=url)
        task = self._start_load(name, slot, url)
        await asyncio.shield(task)
        return True

    def has_custom_source(self, name: str = CUSTOM_VERSION) -> bool:
        """Check if a custom source is registered under ``name``."""
        return name in self._custom_sources

    def version_status(self, version: str) -> VersionStatus:
        """Get the load status of a version."""
        slot = self._slots.get(version)
        if slot is None:
            return VersionStatus(version=version, state=VersionState.NOT_LOADED)
        return VersionStatus(
            version=version,
            state=slot.state,
            verse_count=len(slot.index) if slot.index is not None else 0,
            error=slot.error,
        )

    def loaded_versions(self) -> list[str]:
        """Versions with a visible index."""
        return [v for v, slot in self._slots.items() if slot.index is not None]

    def get_search_history(self, client_id: str | None = None) -> list[str]:
        """Get a client's recent search terms, most recent first."""
        return self.history.get(client_id)

    def save_search_to_history(self, term: str, client_id: str | None = None) -> None:
        """Save a submitted search term to a client's history."""
        self.history.save(term, client_id)


# Global instance
bible_search = BibleSearchService()
