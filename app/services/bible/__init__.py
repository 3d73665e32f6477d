"""Bible verse indexing and search."""

from app.services.bible.canon import CANONICAL_BOOKS, book_order, canonical_sort_key
from app.services.bible.reference import ReferenceKind, ScriptureReference, parse_reference
from app.services.bible.search_service import BibleSearchService, bible_search
from app.services.bible.verse_index import VerseIndex

__all__ = [
    "BibleSearchService",
    "CANONICAL_BOOKS",
    "ReferenceKind",
    "ScriptureReference",
    "VerseIndex",
    "bible_search",
    "book_order",
    "canonical_sort_key",
    "parse_reference",
]
