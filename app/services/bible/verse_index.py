"""In-memory verse index for one Bible version."""

from collections.abc import Iterable, Mapping, Sequence

import structlog
from rapidfuzz import fuzz, process

from app.core.config import settings
from app.models.verse import VerseHit, VerseRecord
from app.services.bible.canon import book_order, canonical_sort_key
from app.services.bible.reference import ScriptureReference, parse_reference
from app.services.bible.sources import TranslationBook
from app.services.bible.text_index import TextIndex

logger = structlog.get_logger(__name__)


def _normalize_book(name: str) -> str:
    return "".join(ch for ch in name.lower() if ch.isalnum())


# Words that occur inside book names but never abbreviate one
_SUBSTRING_STOPWORDS = frozenset({"the", "and", "her", "his", "for", "not", "you", "all"})
_MIN_SUBSTRING_KEY = 3


class VerseIndex:
    """Searchable, read-only collection of the verses of one version.

    Answers reference queries (``John 3:16``, ``John 3:16-18``,
    ``Proverbs 1:6-5:2``) by exact chapter/verse filtering, and anything
    else by stemmed, typo-tolerant relevance search over verse text and book
    names. Results are always returned in canonical reading order.
    """

    def __init__(
        self,
        version: str,
        records: Iterable[VerseRecord],
        book_boost: float | None = None,
        abbreviations: Mapping[str, str] | None = None,
    ):
        self.version = version

        unique: dict[tuple[str, int, int], VerseRecord] = {}
        for record in records:
            unique[(record.book, record.chapter, record.verse)] = record
        self.records: list[VerseRecord] = sorted(unique.values(), key=canonical_sort_key)

        self._by_book: dict[str, list[VerseRecord]] = {}
        for record in self.records:
            self._by_book.setdefault(record.book, []).append(record)
        self._book_keys = {_normalize_book(book): book for book in self._by_book}
        self._abbrev_keys = {
            _normalize_book(abbrev): book
            for abbrev, book in (abbreviations or {}).items()
            if abbrev and book in self._by_book
        }

        self._text = TextIndex(
            [{"text": r.text, "book": r.book} for r in self.records],
            boosts={
                "text": 1.0,
                "book": settings.book_boost if book_boost is None else book_boost,
            },
        )

    @classmethod
    def from_translation(cls, version: str, books: Sequence[TranslationBook]) -> "VerseIndex":
        """Flatten a translation document into verse records and index them."""
        records = [
            VerseRecord(
                book=book.name,
                chapter=chapter_index + 1,
                verse=verse_index + 1,
                text=text,
                version=version,
            )
            for book in books
            for chapter_index, verses in enumerate(book.chapters)
            for verse_index, text in enumerate(verses)
        ]
        abbreviations = {book.abbrev: book.name for book in books if book.abbrev}
        return cls(version, records, abbreviations=abbreviations)

    def __len__(self) -> int:
        return len(self.records)

    @property
    def books(self) -> list[str]:
        """Book names in canonical order."""
        return list(self._by_book)

    def match_book(self, name: str) -> str | None:
        """Resolve a typed, partial or abbreviated book name to a book of this index."""
        key = _normalize_book(name)
        if not key:
            return None
        if key in self._book_keys:
            return self._book_keys[key]
        if key in self._abbrev_keys:
            return self._abbrev_keys[key]

        # Prefer the earliest book in the canon when several match
        for matches in (
            [b for k, b in self._book_keys.items() if k.startswith(key)],
            self._substring_matches(key),
        ):
            if matches:
                return min(matches, key=book_order)

        best = process.extractOne(
            key,
            self._book_keys.keys(),
            scorer=fuzz.ratio,
            score_cutoff=settings.book_match_cutoff,
        )
        if best is None:
            return None
        return self._book_keys[best[0]]

    def _substring_matches(self, key: str) -> list[str]:
        if len(key) < _MIN_SUBSTRING_KEY or key in _SUBSTRING_STOPWORDS:
            return []
        return [b for k, b in self._book_keys.items() if key in k]

    def lookup(self, reference: ScriptureReference, limit: int | None = None) -> list[VerseHit]:
        """Verses inside a reference, or an empty list when the book is unknown."""
        book = self.match_book(reference.book)
        if book is None:
            return []
        hits = [
            VerseHit(**record.model_dump(), score=1.0)
            for record in self._by_book[book]
            if reference.contains(record.chapter, record.verse)
        ]
        return hits[:limit] if limit is not None else hits

    def search_text(
        self,
        query: str,
        limit: int,
        threshold: float = 0.0,
        tolerance: int = 1,
    ) -> list[VerseHit]:
        """Relevance search; the best ``limit`` hits are returned in canonical order."""
        ranked = self._text.search(query, limit=limit, tolerance=tolerance, threshold=threshold)
        hits = [
            VerseHit(**self.records[doc_id].model_dump(), score=score)
            for doc_id, score in ranked
        ]
        hits.sort(key=canonical_sort_key)
        return hits

    def search(
        self,
        query: str,
        limit: int = 50,
        threshold: float = 0.0,
        tolerance: int = 1,
    ) -> list[VerseHit]:
        """Answer a reference or free-text query in canonical order."""
        query = query.strip()
        if not query:
            return []

        reference = parse_reference(query)
        if reference is not None and self.match_book(reference.book) is not None:
            logger.debug(
                "verse_reference_lookup",
                version=self.version,
                kind=reference.kind.value,
                book=reference.book,
            )
            return self.lookup(reference, limit=limit)

        return self.search_text(query, limit=limit, threshold=threshold, tolerance=tolerance)
