"""Pytest configuration and fixtures."""

import asyncio
from collections import Counter
from typing import Any

import pytest

from app.services.bible.exceptions import VersionLoadError
from app.services.bible.history import MemoryStorage, SearchHistory
from app.services.bible.search_service import BibleSearchService
from app.services.bible.sources import builtin_location, parse_translation
from app.services.bible.verse_index import VerseIndex


def _filler(book: str, chapter: int, count: int) -> list[str]:
    return [f"Filler for {book} chapter {chapter} verse {v}" for v in range(1, count + 1)]


def build_translation() -> list[dict[str, Any]]:
    """A small translation document in the source JSON format."""
    john_3 = _filler("John", 3, 36)
    john_3[15] = "For God so loved the world, that he gave his only begotten Son."
    john_3[16] = "For God sent not his Son into the world to condemn the world."
    john_3[17] = "He that believeth on him is not condemned."

    return [
        # Deliberately out of canonical order
        {
            "name": "Revelation",
            "abbrev": "re",
            "chapters": [
                _filler("Revelation", 1, 3),
                [
                    "Unto the angel of the church of Ephesus write.",
                    "I know thy works, and thy labour, and thy patience.",
                    "And hast borne, and hast patience.",
                    "Nevertheless I have somewhat against thee, because thou hast left thy first love.",
                ],
            ],
        },
        {
            "name": "Genesis",
            "abbrev": "gn",
            "chapters": [
                [
                    "In the beginning God created the heaven and the earth.",
                    "And the earth was without form, and void.",
                    "And God said, Let there be light: and there was light.",
                ],
                [
                    "Thus the heavens and the earth were finished.",
                    "And Jacob loved Rachel, and served seven years for her.",
                ],
            ],
        },
        {
            "name": "Proverbs",
            "chapters": [
                _filler("Proverbs", 1, 6),
                _filler("Proverbs", 2, 3),
                _filler("Proverbs", 3, 3),
                _filler("Proverbs", 4, 3),
                _filler("Proverbs", 5, 23),
            ],
        },
        {
            "name": "John",
            "abbrev": "jo",
            "chapters": [_filler("John", 1, 3), _filler("John", 2, 2), john_3],
        },
        {
            "name": "1 John",
            "chapters": [
                _filler("1 John", 1, 2),
                _filler("1 John", 2, 2),
                _filler("1 John", 3, 2),
                [
                    "Beloved, let us love one another.",
                    "Hereby know ye the Spirit of God.",
                    "Ye are of God, little children.",
                    "They are of the world.",
                    "We are of God.",
                    "Beloved, let us love one another: for love is of God.",
                    "And every one that loveth is born of God.",
                    "He that loveth not knoweth not God; for God is love.",
                ],
            ],
        },
    ]


class FakeFetcher:
    """Stands in for TranslationFetcher, serving documents from memory.

    Each fetch yields to the event loop so concurrent callers interleave.
    A location can be gated on an asyncio.Event to hold a load in flight.
    """

    def __init__(self, documents: dict[str, Any]):
        self.documents = documents
        self.calls: Counter[str] = Counter()
        self.gates: dict[str, asyncio.Event] = {}
        self.failures: dict[str, int] = {}

    async def fetch(self, location: str, version: str = "") -> Any:
        self.calls[location] += 1
        await asyncio.sleep(0)
        if location in self.gates:
            await self.gates[location].wait()
        if self.failures.get(location, 0) > 0:
            self.failures[location] -= 1
            raise VersionLoadError(version, "source unreachable")
        if location not in self.documents:
            raise VersionLoadError(version, f"version {version} not found")
        return self.documents[location]


@pytest.fixture
def translation() -> list[dict[str, Any]]:
    """Raw translation document."""
    return build_translation()


@pytest.fixture
def verse_index(translation: list[dict[str, Any]]) -> VerseIndex:
    """Index over the test translation."""
    return VerseIndex.from_translation("test", parse_translation("test", translation))


@pytest.fixture
def fetcher(translation: list[dict[str, Any]]) -> FakeFetcher:
    """Fetcher serving the test translation under the built-in location of "test"."""
    return FakeFetcher({builtin_location("test"): translation})


@pytest.fixture
def history() -> SearchHistory:
    """Search history backed by memory."""
    return SearchHistory(MemoryStorage())


@pytest.fixture
def bible_service(fetcher: FakeFetcher, history: SearchHistory) -> BibleSearchService:
    """Bible search service reading from the fake fetcher."""
    return BibleSearchService(fetcher=fetcher, history=history)


@pytest.fixture
def fetcher_factory() -> type[FakeFetcher]:
    """Build fake fetchers over arbitrary documents."""
    return FakeFetcher
