"""Note repository for MongoDB reads."""

from motor.motor_asyncio import AsyncIOMotorDatabase
import structlog

from app.core.config import settings
from app.models.note import Note

logger = structlog.get_logger(__name__)


class NoteRepository:
    """Read-only access to users' personal notes in MongoDB."""

    def __init__(self, db: AsyncIOMotorDatabase):
        """Initialize with MongoDB database."""
        self.collection = db[settings.notes_collection]

    async def list_for_user(self, user_id: str, limit: int = 50) -> list[Note]:
        """List a bounded page of one user's most recently updated notes."""
        if not user_id:
            return []

        cursor = (
            self.collection.find({"user_id": user_id})
            .sort("updated_at", -1)
            .limit(limit)
        )
        docs = await cursor.to_list(length=limit)
        logger.debug("notes_listed", user_id=user_id, count=len(docs))
        return [
            Note(
                id=str(doc["_id"]),
                user_id=doc["user_id"],
                title=doc.get("title"),
                content=doc.get("content"),
                updated_at=doc.get("updated_at"),
            )
            for doc in docs
        ]
