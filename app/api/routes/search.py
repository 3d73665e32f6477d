"""Unified search API routes."""

from fastapi import APIRouter, Query

import structlog

from app.core.logging import bind_search_context
from app.models.search import HistoryEntryRequest, UnifiedSearchResults
from app.services.bible import bible_search
from app.services.search import unified_search

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/api", tags=["search"])


@router.get("/search", response_model=UnifiedSearchResults)
async def search_everything(
    q: str = Query(default="", max_length=200, description="Search term or scripture reference"),
    user_id: str | None = Query(default=None, description="Include this user's notes"),
    version: str | None = Query(default=None, description="Bible version key"),
    record: bool = Query(default=False, description="Save the term to search history"),
) -> UnifiedSearchResults:
    """Search verses, sermons and personal notes at once.

    Each category is capped and fails independently: an unreachable notes
    store yields no notes but still returns verses and sermons.
    """
    bind_search_context(query=q, version=version, user_id=user_id)
    if record:
        bible_search.save_search_to_history(q, client_id=user_id)
    return await unified_search.search(q, user_id=user_id, version=version)


@router.get("/search/history")
async def get_search_history(
    user_id: str | None = Query(default=None, description="Owner of the history list"),
) -> list[str]:
    """A user's most recent distinct search terms, newest first."""
    return bible_search.get_search_history(client_id=user_id)


@router.post("/search/history")
async def save_search_history(request: HistoryEntryRequest) -> list[str]:
    """Save a submitted search term and return the updated history."""
    bible_search.save_search_to_history(request.term, client_id=request.user_id)
    return bible_search.get_search_history(client_id=request.user_id)
