"""Unified search across Bible verses, sermons and personal notes."""

import asyncio
import time
from collections.abc import Awaitable, Callable

import structlog

from app.core.config import settings
from app.db.mongodb import mongodb
from app.db.repositories.note import NoteRepository
from app.db.repositories.sermon import SermonRepository
from app.models.note import Note
from app.models.search import SearchResult, SearchResultType, UnifiedSearchResults
from app.models.sermon import SermonSummary
from app.services.bible.search_service import BibleSearchService, bible_search

logger = structlog.get_logger(__name__)

SermonLoader = Callable[[], Awaitable[list[SermonSummary]]]
NoteLoader = Callable[[str], Awaitable[list[Note]]]


class SermonCache:
    """Time-boxed cache of recent sermon summaries.

    Refreshed only when older than its TTL. The staleness check and the
    refresh run under one lock so concurrent callers share a single fetch.
    """

    def __init__(
        self,
        loader: SermonLoader,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._loader = loader
        self._clock = clock
        self.ttl_seconds = ttl_seconds
        self._sermons: list[SermonSummary] | None = None
        self._fetched_at = 0.0
        self._lock = asyncio.Lock()

    async def get(self) -> list[SermonSummary]:
        """Return cached sermons, refreshing them if stale."""
        async with self._lock:
            now = self._clock()
            if self._sermons is not None and now - self._fetched_at < self.ttl_seconds:
                return self._sermons

            sermons = await self._loader()
            self._sermons = sermons
            self._fetched_at = now
            logger.info("sermon_cache_refreshed", count=len(sermons))
            return sermons


async def _load_recent_sermons() -> list[SermonSummary]:
    return await SermonRepository(mongodb.db).list_recent(limit=settings.sermon_page_size)


async def _load_user_notes(user_id: str) -> list[Note]:
    return await NoteRepository(mongodb.db).list_for_user(user_id, limit=settings.notes_page_size)


class UnifiedSearchService:
    """Fans one query out to verses, sermons and notes and shapes the results."""

    def __init__(
        self,
        bible: BibleSearchService | None = None,
        sermon_loader: SermonLoader | None = None,
        note_loader: NoteLoader | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the service.

        Args:
            bible: Verse index service (defaults to the global instance)
            sermon_loader: Fetches recent sermons (defaults to MongoDB)
            note_loader: Fetches a user's recent notes (defaults to MongoDB)
            clock: Monotonic clock used for the sermon cache TTL
        """
        self._bible = bible if bible is not None else bible_search
        self._note_loader = note_loader or _load_user_notes
        self._sermon_cache = SermonCache(
            sermon_loader or _load_recent_sermons,
            ttl_seconds=settings.sermon_cache_ttl_seconds,
            clock=clock,
        )

    async def search(
        self,
        term: str,
        user_id: str | None = None,
        version: str | None = None,
    ) -> UnifiedSearchResults:
        """Search all categories concurrently.

        A failure in one category is logged and yields an empty list for
        that category only.

        Args:
            term: Raw query typed by the user
            user_id: Owner of the notes to search; notes are skipped without it
            version: Bible version key (defaults to settings)

        Returns:
            Results grouped into bible, sermons and notes
        """
        term = (term or "").strip()
        if not term:
            return UnifiedSearchResults()

        version = version or settings.default_bible_version
        started = time.perf_counter()

        bible, sermons, notes = await asyncio.gather(
            self._guard("bible", self.search_bible(term, version)),
            self._guard("sermons", self.search_sermons(term)),
            self._guard("notes", self.search_notes(term, user_id)),
        )

        logger.info(
            "unified_search_completed",
            term=term[:50],
            version=version,
            bible=len(bible),
            sermons=len(sermons),
            notes=len(notes),
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return UnifiedSearchResults(bible=bible, sermons=sermons, notes=notes)

    async def _guard(
        self,
        category: str,
        branch: Awaitable[list[SearchResult]],
    ) -> list[SearchResult]:
        try:
            return await branch
        except Exception as e:
            logger.error("unified_search_branch_failed", category=category, error=str(e))
            return []

    async def search_bible(self, term: str, version: str) -> list[SearchResult]:
        """Top verse hits shaped as search results."""
        hits = await self._bible.search(term, version, limit=settings.unified_bible_limit)
        return [
            SearchResult(
                id=f"{h.book}-{h.chapter}-{h.verse}",
                type=SearchResultType.BIBLE,
                title=h.reference,
                subtitle=h.text,
                description=h.text,
                metadata=h.model_dump(),
                score=h.score,
            )
            for h in hits
        ]

    async def search_sermons(self, term: str) -> list[SearchResult]:
        """Cached sermons whose title, summary or outline contains the term."""
        sermons = await self._sermon_cache.get()
        needle = term.lower()

        matches = [
            s
            for s in sermons
            if needle in s.title.lower()
            or (s.summary and needle in s.summary.lower())
            or any(needle in o.lower() for o in s.outline)
        ]
        return [
            SearchResult(
                id=s.id,
                type=SearchResultType.SERMON,
                title=s.title,
                subtitle=s.display_date,
                description=s.summary,
                metadata=s.model_dump(mode="json"),
            )
            for s in matches[: settings.unified_sermon_limit]
        ]

    async def search_notes(self, term: str, user_id: str | None) -> list[SearchResult]:
        """The user's recent notes whose title or content contains the term."""
        if not user_id:
            return []

        notes = await self._note_loader(user_id)
        needle = term.lower()

        results = []
        for note in notes:
            title = note.title or "Untitled Note"
            content = note.content or ""
            if needle not in title.lower() and needle not in content.lower():
                continue
            results.append(
                SearchResult(
                    id=note.id,
                    type=SearchResultType.NOTE,
                    title=title,
                    subtitle="Personal Note",
                    description=content[: settings.note_snippet_length] or None,
                    # Full content stays out of suggestion payloads
                    metadata=note.model_dump(mode="json", exclude={"content"}),
                )
            )
            if len(results) >= settings.unified_notes_limit:
                break
        return results


# Global instance
unified_search = UnifiedSearchService()
