"""Tests for scripture reference parsing."""

import pytest

from app.services.bible.canon import CANONICAL_BOOKS, UNKNOWN_BOOK_ORDER, book_order
from app.services.bible.reference import ReferenceKind, parse_reference


def test_cross_chapter_range() -> None:
    """Test parsing a range spanning chapters."""
    ref = parse_reference("Proverbs 1:6-5:2")

    assert ref is not None
    assert ref.kind == ReferenceKind.CROSS_CHAPTER_RANGE
    assert ref.book == "Proverbs"
    assert (ref.start_chapter, ref.start_verse) == (1, 6)
    assert (ref.end_chapter, ref.end_verse) == (5, 2)


def test_same_chapter_range() -> None:
    """Test parsing a verse range within one chapter."""
    ref = parse_reference("  John 3:16-18 ")

    assert ref is not None
    assert ref.kind == ReferenceKind.CHAPTER_RANGE
    assert ref.book == "John"
    assert (ref.start_chapter, ref.start_verse, ref.end_chapter, ref.end_verse) == (3, 16, 3, 18)


def test_single_verse_and_whole_chapter() -> None:
    """Test parsing single verses and whole chapters."""
    verse = parse_reference("John 3:16")
    chapter = parse_reference("John 3")

    assert verse is not None and verse.kind == ReferenceKind.SINGLE
    assert (verse.start_verse, verse.end_verse) == (16, 16)
    assert chapter is not None and chapter.kind == ReferenceKind.SINGLE
    assert chapter.start_verse is None and chapter.end_verse is None


@pytest.mark.parametrize(
    "query,book",
    [
        ("1 John 4:8", "1 John"),
        ("2Kings 2:11", "2Kings"),
        ("Song of Solomon 2:1", "Song of Solomon"),
        ("Prov 3:5–6", "Prov"),
    ],
)
def test_book_names(query: str, book: str) -> None:
    """Test numbered, multi-word and abbreviated book names."""
    ref = parse_reference(query)

    assert ref is not None
    assert ref.book == book


@pytest.mark.parametrize("query", ["", "   ", "love one another", "3:16", "2 3", "John", "John 3:16-"])
def test_free_text_is_not_a_reference(query: str) -> None:
    """Test that non-references fall through to free text."""
    assert parse_reference(query) is None


def test_contains_cross_chapter_bounds() -> None:
    """Test range inclusion at start, middle and end chapters."""
    ref = parse_reference("Proverbs 1:6-5:2")
    assert ref is not None

    assert not ref.contains(1, 5)
    assert ref.contains(1, 6)
    assert ref.contains(1, 33)
    assert ref.contains(3, 1)
    assert ref.contains(5, 2)
    assert not ref.contains(5, 3)
    assert not ref.contains(6, 1)


def test_contains_whole_chapter() -> None:
    """Test that a chapter reference includes every verse of that chapter only."""
    ref = parse_reference("Psalm 23")
    assert ref is not None

    assert ref.contains(23, 1)
    assert ref.contains(23, 6)
    assert not ref.contains(22, 31)


def test_book_order() -> None:
    """Test canonical ordering and the unknown-book fallback."""
    assert len(CANONICAL_BOOKS) == 66
    assert book_order("Genesis") == 0
    assert book_order("Revelation") == 65
    assert book_order("Matthew") > book_order("Malachi")
    assert book_order("Tobit") == UNKNOWN_BOOK_ORDER
