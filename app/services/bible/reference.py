"""Scripture reference parsing.

Recognizes three shorthand syntaxes, tried in this order:

- cross-chapter range: ``Proverbs 1:6-5:2``
- same-chapter range: ``John 3:16-18``
- single reference: ``John 3`` or ``John 3:16``

Anything else is not a reference and is searched as free text.
"""

import re
from dataclasses import dataclass
from enum import Enum

# Optional leading numeral ("1 John", "2Kings"), then a name starting with a letter
_BOOK = r"(?P<book>(?:[1-3]\s*)?[^\W\d_][\w .']*?)"
_DASH = r"\s*[-–—]\s*"

_CROSS_CHAPTER = re.compile(
    rf"^{_BOOK}\s*(?P<c1>\d+)\s*:\s*(?P<v1>\d+){_DASH}(?P<c2>\d+)\s*:\s*(?P<v2>\d+)$"
)
_SAME_CHAPTER = re.compile(
    rf"^{_BOOK}\s*(?P<c>\d+)\s*:\s*(?P<v1>\d+){_DASH}(?P<v2>\d+)$"
)
_SINGLE = re.compile(rf"^{_BOOK}\s*(?P<c>\d+)(?:\s*:\s*(?P<v>\d+))?$")


class ReferenceKind(str, Enum):
    """Reference grammars, in matching priority order."""

    CROSS_CHAPTER_RANGE = "cross_chapter_range"
    CHAPTER_RANGE = "chapter_range"
    SINGLE = "single"


@dataclass(frozen=True)
class ScriptureReference:
    """A parsed reference. A verse bound of None means the whole chapter."""

    kind: ReferenceKind
    book: str
    start_chapter: int
    start_verse: int | None
    end_chapter: int
    end_verse: int | None

    def contains(self, chapter: int, verse: int) -> bool:
        """Whether a chapter/verse falls inside this reference."""
        if chapter < self.start_chapter or chapter > self.end_chapter:
            return False
        if chapter == self.start_chapter and self.start_verse is not None and verse < self.start_verse:
            return False
        if chapter == self.end_chapter and self.end_verse is not None and verse > self.end_verse:
            return False
        return True


def parse_reference(query: str) -> ScriptureReference | None:
    """Parse a query as a scripture reference, or return None for free text."""
    query = query.strip()
    if not query:
        return None

    match = _CROSS_CHAPTER.match(query)
    if match:
        return ScriptureReference(
            kind=ReferenceKind.CROSS_CHAPTER_RANGE,
            book=match.group("book").strip(),
            start_chapter=int(match.group("c1")),
            start_verse=int(match.group("v1")),
            end_chapter=int(match.group("c2")),
            end_verse=int(match.group("v2")),
        )

    match = _SAME_CHAPTER.match(query)
    if match:
        chapter = int(match.group("c"))
        return ScriptureReference(
            kind=ReferenceKind.CHAPTER_RANGE,
            book=match.group("book").strip(),
            start_chapter=chapter,
            start_verse=int(match.group("v1")),
            end_chapter=chapter,
            end_verse=int(match.group("v2")),
        )

    match = _SINGLE.match(query)
    if match:
        chapter = int(match.group("c"))
        verse = int(match.group("v")) if match.group("v") else None
        return ScriptureReference(
            kind=ReferenceKind.SINGLE,
            book=match.group("book").strip(),
            start_chapter=chapter,
            start_verse=verse,
            end_chapter=chapter,
            end_verse=verse,
        )

    return None
