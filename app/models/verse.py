"""Pydantic models for indexed verses."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class VerseRecord(BaseModel):
    """One indexed (book, chapter, verse) unit of one version."""

    book: str = Field(..., description="Canonical book name")
    chapter: int = Field(..., ge=1)
    verse: int = Field(..., ge=1)
    text: str
    version: str = Field(..., description="Translation key, e.g. kjv")

    model_config = {"frozen": True}

    @property
    def reference(self) -> str:
        """Human readable reference, e.g. John 3:16."""
        return f"{self.book} {self.chapter}:{self.verse}"


class VerseHit(VerseRecord):
    """A verse returned from a search."""

    score: float = 1.0


class VersionState(str, Enum):
    """Load states of a version index."""

    NOT_LOADED = "not_loaded"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class VersionStatus(BaseModel):
    """Load status of one version."""

    version: str
    state: VersionState
    verse_count: int = 0
    error: Optional[str] = None


class CustomSourceRequest(BaseModel):
    """Request to register a custom translation source."""

    name: str = Field(default="custom", min_length=1, max_length=64)
    url: str = Field(..., min_length=1)
