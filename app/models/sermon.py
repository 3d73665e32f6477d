"""Pydantic models for sermon summaries."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class SermonSummary(BaseModel):
    """Sermon metadata used by the search box."""

    id: str = Field(..., description="Sermon document ID")
    title: str = ""
    summary: Optional[str] = None
    outline: list[str] = Field(default_factory=list)
    date: Optional[datetime | str] = None
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None

    @property
    def display_date(self) -> Optional[str]:
        """Date formatted for a result subtitle."""
        if self.date is None:
            return None
        if isinstance(self.date, str):
            return self.date
        return self.date.date().isoformat()
