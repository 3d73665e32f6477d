"""Search services for the church app search box."""

from app.services.search.message_index import message_index
from app.services.search.unified_search import unified_search

__all__ = ["message_index", "unified_search"]
