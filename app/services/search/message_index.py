"""In-memory search over chat messages."""

import time
from datetime import datetime
from typing import Any

import structlog

from app.models.message import MessageDocument, SearchMessageResult
from app.services.bible.text_index import TextIndex

logger = structlog.get_logger(__name__)


def _timestamp_millis(value: Any) -> int:
    """Normalize epoch millis, datetimes and {"seconds": ...} stamps to epoch millis."""
    if isinstance(value, bool):
        value = None
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, datetime):
        return int(value.timestamp() * 1000)
    if isinstance(value, dict) and isinstance(value.get("seconds"), (int, float)):
        return int(value["seconds"] * 1000)
    return int(time.time() * 1000)


class MessageSearchService:
    """Stemmed, typo-tolerant search over indexed chat messages."""

    def __init__(self):
        """Initialize an empty index."""
        self._documents: list[MessageDocument] = []
        self._index: TextIndex | None = None

    def index_messages(self, messages: list[dict[str, Any]]) -> int:
        """Add messages to the index.

        Args:
            messages: Raw message dicts with id, content, authorId,
                conversationId and optional authorName/timestamp

        Returns:
            Number of messages now indexed
        """
        for message in messages:
            self._documents.append(
                MessageDocument(
                    id=str(message["id"]),
                    content=message.get("content") or "",
                    author_name=message.get("author_name") or message.get("authorName") or "User",
                    author_id=str(message.get("author_id") or message.get("authorId") or ""),
                    conversation_id=str(message.get("conversation_id") or message.get("conversationId") or ""),
                    timestamp=_timestamp_millis(message.get("timestamp")),
                )
            )

        # TextIndex is immutable; rebuilding is cheap at chat-history scale
        self._index = TextIndex(
            [{"content": d.content, "author_name": d.author_name} for d in self._documents],
            boosts={"content": 1.0, "author_name": 1.0},
        )
        logger.info("messages_indexed", added=len(messages), total=len(self._documents))
        return len(self._documents)

    def search(
        self,
        term: str,
        conversation_id: str | None = None,
        limit: int = 20,
    ) -> list[SearchMessageResult]:
        """Search indexed messages, best match first."""
        if self._index is None:
            return []

        allowed = None
        if conversation_id:
            allowed = {
                i for i, d in enumerate(self._documents) if d.conversation_id == conversation_id
            }

        hits = self._index.search(term, limit=limit, allowed=allowed)
        return [
            SearchMessageResult(**self._documents[doc_id].model_dump(), score=score)
            for doc_id, score in hits
        ]

    def clear(self) -> None:
        """Drop all indexed messages."""
        self._documents = []
        self._index = None


# Global instance
message_index = MessageSearchService()
