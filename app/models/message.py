"""Pydantic models for chat message search."""

from pydantic import BaseModel


class MessageDocument(BaseModel):
    """A chat message as stored in the message index."""

    id: str
    content: str
    author_name: str = "User"
    author_id: str
    conversation_id: str
    timestamp: int  # epoch millis


class SearchMessageResult(MessageDocument):
    """A chat message returned from a search."""

    score: float
