"""Bible verse search API routes."""

from typing import Any

from fastapi import APIRouter, HTTPException, Query, status

import structlog

from app.core.logging import bind_search_context
from app.models.verse import CustomSourceRequest, VerseHit, VersionStatus
from app.services.bible import bible_search
from app.services.bible.exceptions import MissingSourceError, VersionLoadError

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/api/bible", tags=["bible"])


def _load_failed(error: VersionLoadError) -> HTTPException:
    if isinstance(error, MissingSourceError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(error))


@router.get("/{version}/search", response_model=list[VerseHit])
async def search_verses(
    version: str,
    q: str = Query(..., min_length=1, max_length=200, examples=["John 3:16-18", "love"]),
    limit: int = Query(default=50, ge=1, le=500),
    threshold: float = Query(default=0.0, ge=0.0),
) -> list[VerseHit]:
    """Search one version by reference or free text.

    Results are always in Bible order, even for keyword matches.
    """
    bind_search_context(query=q, version=version)
    try:
        return await bible_search.search(q, version, limit=limit, threshold=threshold)
    except VersionLoadError as e:
        raise _load_failed(e) from e


@router.get("/{version}/status", response_model=VersionStatus)
async def get_version_status(version: str) -> VersionStatus:
    """Load state of a version index."""
    return bible_search.version_status(version)


@router.post("/sources")
async def register_custom_source(request: CustomSourceRequest) -> dict[str, Any]:
    """Register (or replace) a custom translation source and index it."""
    try:
        await bible_search.register_custom_source(request.name, request.url)
    except VersionLoadError as e:
        raise _load_failed(e) from e

    return {
        "message": "Source registered",
        "status": bible_search.version_status(request.name),
    }
