"""Tests for chat message search."""

from datetime import datetime, UTC

from app.services.search.message_index import MessageSearchService

MESSAGES = [
    {"id": "m1", "content": "Please add my mother to the prayer list", "authorId": "a1",
     "authorName": "Ruth", "conversationId": "c1", "timestamp": 1700000000000},
    {"id": "m2", "content": "Praying for your mother this week", "authorId": "a2",
     "conversationId": "c2", "timestamp": {"seconds": 1700000100}},
    {"id": "m3", "content": "Potluck on Sunday after service", "author_id": "a3",
     "author_name": "Boaz", "conversation_id": "c1",
     "timestamp": datetime(2024, 1, 1, tzinfo=UTC)},
]


def test_search_before_indexing_is_empty() -> None:
    """Test that an empty index returns nothing."""
    assert MessageSearchService().search("prayer") == []


def test_index_and_search() -> None:
    """Test stemmed matching across conversations."""
    service = MessageSearchService()
    assert service.index_messages(MESSAGES) == 3

    hits = service.search("pray")

    assert {h.id for h in hits} == {"m1", "m2"}
    assert all(h.score is not None for h in hits)


def test_typo_tolerance() -> None:
    """Test that a one-letter typo still matches."""
    service = MessageSearchService()
    service.index_messages(MESSAGES)

    assert [h.id for h in service.search("potluk")] == ["m3"]


def test_author_name_is_searchable() -> None:
    """Test matching on the author name field."""
    service = MessageSearchService()
    service.index_messages(MESSAGES)

    assert [h.id for h in service.search("Boaz")] == ["m3"]


def test_conversation_filter() -> None:
    """Test restricting results to one conversation."""
    service = MessageSearchService()
    service.index_messages(MESSAGES)

    hits = service.search("mother", conversation_id="c2")

    assert [h.id for h in hits] == ["m2"]
    assert hits[0].author_name == "User"


def test_timestamps_are_normalized() -> None:
    """Test epoch millis, {seconds} and datetime timestamps."""
    service = MessageSearchService()
    service.index_messages(MESSAGES)

    by_id = {h.id: h for h in service.search("mother potluck")}

    assert by_id["m1"].timestamp == 1700000000000
    assert by_id["m2"].timestamp == 1700000100000
    assert by_id["m3"].timestamp == 1704067200000


def test_clear() -> None:
    """Test that clearing drops all messages."""
    service = MessageSearchService()
    service.index_messages(MESSAGES)
    service.clear()

    assert service.search("mother") == []
