"""Pydantic models for unified search results."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class SearchResultType(str, Enum):
    """Categories of unified search results."""

    BIBLE = "bible"
    SERMON = "sermon"
    NOTE = "note"


class SearchResult(BaseModel):
    """Uniform result envelope shown in the search box."""

    id: str
    type: SearchResultType
    title: str
    subtitle: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    score: Optional[float] = None


class UnifiedSearchResults(BaseModel):
    """Categorized results of one unified search."""

    bible: list[SearchResult] = Field(default_factory=list)
    sermons: list[SearchResult] = Field(default_factory=list)
    notes: list[SearchResult] = Field(default_factory=list)


class HistoryEntryRequest(BaseModel):
    """Request to save a submitted search term."""

    term: str = Field(..., max_length=200)
    user_id: Optional[str] = Field(default=None, description="Owner of the history list")
