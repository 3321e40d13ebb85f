import sqlite3
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from readlater.models import DELETED, Feed, FeedType, Item
from readlater.storage import (
    DEFAULT_FEED,
    FeedNotFoundError,
    History,
    MigrationError,
    migrate,
    open_database,
)


@pytest.fixture
def history(tmp_path):
    with History(tmp_path / "test.db") as h:
        yield h


def _item(feed_title, **kwargs):
    created = datetime(2023, 5, 1, 12, 30, 15, 123456, tzinfo=timezone(timedelta(hours=3)))
    fields = dict(title="Title", created=created, url="http://example.com", text="Body")
    fields.update(kwargs)
    return Item(feed_title, **fields)


def test_new_database_has_default_feed(history):
    assert history.get_feeds() == [
        Feed("Default", "", "ReadLaterRSS", "-", FeedType.URL)
    ]
    assert history.get_feed("Default") == DEFAULT_FEED
    assert history.get_feed("Default").description == "Automatically created feed"


def test_missing_feed(history):
    with pytest.raises(FeedNotFoundError, match="No such feed: nothing"):
        history.get_feed("nothing")


def test_add_feed_round_trip(history):
    feed = Feed("Notes", "my notes", "me", "me@example.com", FeedType.TEXT)
    history.add_feed(feed)
    assert history.get_feed("Notes") == feed
    assert [f.title for f in history.get_feeds()] == ["Default", "Notes"]


def test_duplicate_feed_rejected(history):
    with pytest.raises(sqlite3.IntegrityError):
        history.add_feed(Feed("Default"))


def test_item_round_trip(history):
    feed = history.get_feed("Default")
    item = _item(feed.title)
    history.add_item(item)
    assert history.get_items(feed) == [item]


def test_items_are_kept_per_feed(history):
    history.add_feed(Feed("Other", feed_type=FeedType.TEXT))
    first = _item("Default")
    second = _item("Other", title="Second")
    history.add_item(first)
    history.add_item(second)
    assert history.get_items(Feed("Default")) == [first]
    assert history.get_items(Feed("Other")) == [second]


def test_duplicate_item_id_rejected(history):
    item = _item("Default")
    history.add_item(item)
    with pytest.raises(sqlite3.IntegrityError):
        history.add_item(_item("Default", id=item.id))


def test_delete_item_blanks_it(history):
    item = _item("Default")
    keep = _item("Default", title="Keep")
    history.add_item(item)
    history.add_item(keep)
    history.delete_item(Item("Default", id=item.id))
    stored = history.get_items(Feed("Default"))
    assert len(stored) == 2
    assert (stored[0].id, stored[0].title, stored[0].url, stored[0].text) == (
        item.id,
        DELETED,
        "",
        "",
    )
    assert stored[0].is_deleted
    assert stored[1] == keep


def test_delete_feed_removes_items(history):
    feed = Feed("Gone", feed_type=FeedType.TEXT)
    history.add_feed(feed)
    history.add_item(_item("Gone"))
    history.delete_feed(feed)
    with pytest.raises(FeedNotFoundError):
        history.get_feed("Gone")
    assert history.get_items(feed) == []


def test_reopening_keeps_data(tmp_path):
    path = tmp_path / "keep.db"
    item = _item("Default", id=uuid.uuid4())
    with History(path) as h:
        h.add_feed(Feed("Extra"))
        h.add_item(item)
    with History(path) as h:
        assert [f.title for f in h.get_feeds()] == ["Default", "Extra"]
        assert h.get_items(Feed("Default")) == [item]


def test_migrate_replaces_unversioned_schema():
    conn = sqlite3.connect(":memory:")
    conn.execute("create table junk(x)")
    migrate(conn)
    tables = {name for (name,) in conn.execute("select name from sqlite_master where type='table'")}
    assert tables == {"feed", "item", "meta"}
    assert conn.execute("select version from meta").fetchone() == (1,)
    conn.close()


def test_migrate_twice_is_harmless():
    conn = sqlite3.connect(":memory:")
    migrate(conn)
    conn.execute("insert into feed(title, feedType) values('Extra', 'text')")
    conn.commit()
    migrate(conn)
    assert conn.execute("select count(*) from feed").fetchone() == (2,)
    conn.close()


def test_newer_schema_rejected(tmp_path):
    path = tmp_path / "future.db"
    conn = sqlite3.connect(path)
    conn.execute("create table meta(version int)")
    conn.execute("insert into meta(version) values(2)")
    conn.commit()
    conn.close()
    with pytest.raises(MigrationError):
        open_database(path)


def test_empty_meta_rejected():
    conn = sqlite3.connect(":memory:")
    conn.execute("create table meta(version int)")
    with pytest.raises(MigrationError):
        migrate(conn)
    conn.close()


def test_invalid_feed_type_rejected_by_schema(history):
    conn = open_database(":memory:")
    with pytest.raises(sqlite3.IntegrityError):
        conn.execute("insert into feed(title, feedType) values('Bad', 'video')")
    conn.close()


def test_closed_history_refuses_work(tmp_path):
    h = History(tmp_path / "closed.db")
    h.close()
    with pytest.raises(sqlite3.ProgrammingError):
        h.get_feeds()