"""Pydantic models for personal notes."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class Note(BaseModel):
    """A user's personal note."""

    id: str
    user_id: str
    title: Optional[str] = None
    content: Optional[str] = None
    updated_at: Optional[datetime] = None
