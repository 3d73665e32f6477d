"""Tests for the in-memory verse index."""

from app.models.verse import VerseRecord
from app.services.bible.canon import canonical_sort_key
from app.services.bible.verse_index import VerseIndex


def _refs(hits) -> list[tuple[str, int, int]]:
    return [(h.book, h.chapter, h.verse) for h in hits]


def _is_canonical(hits) -> bool:
    keys = [canonical_sort_key(h) for h in hits]
    return keys == sorted(keys)


def test_flattens_translation(verse_index: VerseIndex) -> None:
    """Test chapter and verse numbering from the nested arrays."""
    assert len(verse_index) == 3 + 4 + 3 + 2 + 6 + 3 + 3 + 3 + 23 + 3 + 2 + 36 + 2 + 2 + 2 + 8
    assert verse_index.books == ["Genesis", "Proverbs", "John", "1 John", "Revelation"]

    first = verse_index.records[0]
    assert (first.book, first.chapter, first.verse) == ("Genesis", 1, 1)
    assert first.version == "test"


def test_single_reference(verse_index: VerseIndex) -> None:
    """Test that John 3:16 returns exactly that verse."""
    hits = verse_index.search("John 3:16")

    assert _refs(hits) == [("John", 3, 16)]
    assert hits[0].text.startswith("For God so loved the world")
    assert hits[0].score == 1.0


def test_whole_chapter_reference(verse_index: VerseIndex) -> None:
    """Test that a chapter reference returns the chapter in order."""
    hits = verse_index.search("John 3")

    assert len(hits) == 36
    assert [h.verse for h in hits] == list(range(1, 37))


def test_same_chapter_range_is_inclusive(verse_index: VerseIndex) -> None:
    """Test that John 3:16-18 returns verses 16 through 18 only."""
    hits = verse_index.search("John 3:16-18")

    assert _refs(hits) == [("John", 3, 16), ("John", 3, 17), ("John", 3, 18)]


def test_cross_chapter_range(verse_index: VerseIndex) -> None:
    """Test a range that starts and ends mid-chapter."""
    hits = verse_index.search("Proverbs 1:6-5:2")
    refs = _refs(hits)

    assert refs[0] == ("Proverbs", 1, 6)
    assert refs[-1] == ("Proverbs", 5, 2)
    for chapter in (2, 3, 4):
        assert [v for b, c, v in refs if c == chapter] == [1, 2, 3]
    assert ("Proverbs", 1, 5) not in refs
    assert ("Proverbs", 5, 3) not in refs
    assert len(refs) == 1 + 9 + 2


def test_numbered_book_is_not_confused(verse_index: VerseIndex) -> None:
    """Test that John and 1 John resolve to different books."""
    assert _refs(verse_index.search("1 John 4:8")) == [("1 John", 4, 8)]
    assert _refs(verse_index.search("John 1:1")) == [("John", 1, 1)]


def test_abbreviated_book_names(verse_index: VerseIndex) -> None:
    """Test prefix, substring and fuzzy book matching."""
    assert verse_index.match_book("Prov") == "Proverbs"
    assert verse_index.match_book("gen") == "Genesis"
    assert verse_index.match_book("velation") == "Revelation"
    assert verse_index.match_book("1 Jn") == "1 John"
    assert verse_index.match_book("Hezekiah") is None

    assert _refs(verse_index.search("Gen 2:2")) == [("Genesis", 2, 2)]


def test_reference_to_missing_verse_is_empty(verse_index: VerseIndex) -> None:
    """Test that a valid book with an absent verse returns nothing."""
    assert verse_index.search("Genesis 9:1") == []


def test_unknown_book_falls_back_to_free_text(verse_index: VerseIndex) -> None:
    """Test that an unmatched reference never raises."""
    hits = verse_index.search("Hezekiah 3:1")

    assert all(h.book != "Hezekiah" for h in hits)
    assert _is_canonical(hits)


def test_free_text_is_canonically_ordered(verse_index: VerseIndex) -> None:
    """Test that keyword hits read in Bible order, not by score."""
    hits = verse_index.search("love")
    books = [h.book for h in hits]

    assert "Genesis" in books
    assert "Revelation" in books
    assert books.index("Genesis") < books.index("Revelation")
    assert _is_canonical(hits)


def test_free_text_keeps_scores(verse_index: VerseIndex) -> None:
    """Test that free-text hits carry their relevance scores."""
    hits = verse_index.search("begotten")

    assert _refs(hits) == [("John", 3, 16)]
    assert hits[0].score > 0


def test_free_text_stemming_and_typos(verse_index: VerseIndex) -> None:
    """Test stemmed and one-edit matches."""
    stemmed = _refs(verse_index.search("condemning"))
    typo = _refs(verse_index.search("begoten"))

    assert ("John", 3, 17) in stemmed
    assert ("John", 3, 18) in stemmed
    assert typo == [("John", 3, 16)]


def test_free_text_limit_keeps_best_hits(verse_index: VerseIndex) -> None:
    """Test that the limit selects by relevance before canonical sorting."""
    hits = verse_index.search("love", limit=2)

    assert len(hits) == 2
    assert _is_canonical(hits)


def test_blank_query(verse_index: VerseIndex) -> None:
    """Test that blank queries return nothing."""
    assert verse_index.search("   ") == []


def test_duplicate_verses_keep_last() -> None:
    """Test that (book, chapter, verse) stays unique within a version."""
    index = VerseIndex(
        "dup",
        [
            VerseRecord(book="Ruth", chapter=1, verse=1, text="first", version="dup"),
            VerseRecord(book="Ruth", chapter=1, verse=1, text="second", version="dup"),
        ],
    )

    assert len(index) == 1
    assert index.search("Ruth 1:1")[0].text == "second"


def test_unknown_books_sort_last() -> None:
    """Test that apocryphal books trail the canon."""
    index = VerseIndex(
        "apoc",
        [
            VerseRecord(book="Tobit", chapter=1, verse=1, text="a righteous man", version="apoc"),
            VerseRecord(book="Jude", chapter=1, verse=1, text="a righteous servant", version="apoc"),
        ],
    )

    assert [h.book for h in index.search("righteous")] == ["Jude", "Tobit"]


def test_translation_abbreviations_resolve_books(verse_index: VerseIndex) -> None:
    """Test that a book's abbreviation from the source document is a valid name."""
    assert verse_index.match_book("gn") == "Genesis"
    assert verse_index.match_book("Gn") == "Genesis"

    assert _refs(verse_index.search("Gn 1:1")) == [("Genesis", 1, 1)]


def test_explicit_abbreviations() -> None:
    """Test abbreviations passed directly, ignoring books the index lacks."""
    index = VerseIndex(
        "abbr",
        [
            VerseRecord(book="John", chapter=3, verse=1, text="a ruler of the Jews", version="abbr"),
            VerseRecord(book="1 Samuel", chapter=3, verse=1, text="the word was precious", version="abbr"),
        ],
        abbreviations={"jn": "John", "ex": "Exodus"},
    )

    assert _refs(index.search("Jn 3:1")) == [("John", 3, 1)]
    assert index.match_book("ex") is None


def test_short_common_words_are_not_books() -> None:
    """Test that words like "in" and "the" do not match inside book names."""
    index = VerseIndex(
        "words",
        [
            VerseRecord(book="1 Kings", chapter=1, verse=1, text="king David was old", version="words"),
            VerseRecord(book="Esther", chapter=1, verse=1, text="in the days of Ahasuerus", version="words"),
        ],
    )

    assert index.match_book("in") is None
    assert index.match_book("the") is None
    assert index.match_book("sther") == "Esther"
    assert index.match_book("kings") == "1 Kings"
