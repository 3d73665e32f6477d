"""Sermon repository for MongoDB reads."""

from motor.motor_asyncio import AsyncIOMotorDatabase
import structlog

from app.core.config import settings
from app.models.sermon import SermonSummary

logger = structlog.get_logger(__name__)

# Transcripts are large and never needed for search suggestions
_SUMMARY_PROJECTION = {"transcript": 0}


class SermonRepository:
    """Read-only access to sermon summaries in MongoDB."""

    def __init__(self, db: AsyncIOMotorDatabase):
        """Initialize with MongoDB database."""
        self.collection = db[settings.sermons_collection]

    async def list_recent(self, limit: int = 100) -> list[SermonSummary]:
        """List the most recent sermons, newest first."""
        cursor = (
            self.collection.find({}, _SUMMARY_PROJECTION)
            .sort("date", -1)
            .limit(limit)
        )
        docs = await cursor.to_list(length=limit)
        sermons = [
            SermonSummary(
                id=str(doc.pop("_id")),
                title=doc.get("title") or "",
                summary=doc.get("summary"),
                outline=[o for o in doc.get("outline") or [] if isinstance(o, str)],
                date=doc.get("date"),
                video_url=doc.get("video_url"),
                thumbnail_url=doc.get("thumbnail_url"),
            )
            for doc in docs
        ]
        logger.debug("sermons_listed", count=len(sermons))
        return sermons
