import uuid
from datetime import timezone

import pytest

from readlater.models import DELETED, Feed, FeedType, Item


def test_feed_type_from_stored_value():
    assert FeedType("url") is FeedType.URL
    assert FeedType("text") is FeedType.TEXT


def test_feed_type_rejects_unknown_value():
    with pytest.raises(ValueError):
        FeedType("video")


def test_feed_type_compares_as_string():
    assert FeedType("text") == "text"
    assert FeedType("url").value == "url"


def test_feed_defaults():
    feed = Feed("Reading")
    assert feed.feed_type is FeedType.URL
    assert (feed.description, feed.author, feed.email) == ("", "", "")


def test_feeds_with_same_fields_are_equal():
    feed = Feed("a", "d", "x", "x@example.com", FeedType.TEXT)
    assert (
        feed.title,
        feed.description,
        feed.author,
        feed.email,
        feed.feed_type,
    ) == ("a", "d", "x", "x@example.com", FeedType.TEXT)
    assert feed == Feed("a", "d", "x", "x@example.com", FeedType.TEXT)
    assert not feed == Feed("a", "d", "x", "x@example.com", FeedType.URL)


def test_items_get_distinct_ids():
    first, second = Item("Default"), Item("Default")
    assert isinstance(first.id, uuid.UUID)
    assert first.id != second.id
    assert first.created.tzinfo is timezone.utc


def test_item_is_deleted():
    assert Item("Default", title=DELETED).is_deleted
    assert not Item("Default", title="Something").is_deleted