"""Canonical book order used to sort verses in reading order."""

from typing import Protocol

# Protestant canon, Genesis through Revelation.
CANONICAL_BOOKS: tuple[str, ...] = (
    # Old Testament
    "Genesis", "Exodus", "Leviticus", "Numbers", "Deuteronomy",
    "Joshua", "Judges", "Ruth", "1 Samuel", "2 Samuel",
    "1 Kings", "2 Kings", "1 Chronicles", "2 Chronicles", "Ezra",
    "Nehemiah", "Esther", "Job", "Psalms", "Proverbs",
    "Ecclesiastes", "Song of Solomon", "Isaiah", "Jeremiah", "Lamentations",
    "Ezekiel", "Daniel", "Hosea", "Joel", "Amos",
    "Obadiah", "Jonah", "Micah", "Nahum", "Habakkuk",
    "Zephaniah", "Haggai", "Zechariah", "Malachi",
    # New Testament
    "Matthew", "Mark", "Luke", "John", "Acts",
    "Romans", "1 Corinthians", "2 Corinthians", "Galatians", "Ephesians",
    "Philippians", "Colossians", "1 Thessalonians", "2 Thessalonians", "1 Timothy",
    "2 Timothy", "Titus", "Philemon", "Hebrews", "James",
    "1 Peter", "2 Peter", "1 John", "2 John", "3 John",
    "Jude", "Revelation",
)

UNKNOWN_BOOK_ORDER = 999

_ORDER: dict[str, int] = {name: index for index, name in enumerate(CANONICAL_BOOKS)}


class _Addressable(Protocol):
    book: str
    chapter: int
    verse: int


def book_order(name: str) -> int:
    """Return the canonical position of a book, or 999 when it is not in the canon."""
    return _ORDER.get(name, UNKNOWN_BOOK_ORDER)


def canonical_sort_key(item: _Addressable) -> tuple[int, int, int]:
    """Sort key placing verses in (book, chapter, verse) reading order."""
    return (book_order(item.book), item.chapter, item.verse)
