"""SQLite storage of feeds and their items."""

from __future__ import annotations

import logging
import sqlite3
import uuid
from datetime import datetime
from pathlib import Path

from .models import DELETED, Feed, FeedType, Item

DB_FILE = "ReadLaterRSS.db"
SCHEMA_VERSION = 1

DEFAULT_FEED = Feed(
    title="Default",
    description="Automatically created feed",
    author="ReadLaterRSS",
    email="-",
    feed_type=FeedType.URL,
)

_log = logging.getLogger(__name__)


class FeedNotFoundError(LookupError):
    """No feed has the requested title."""


class MigrationError(RuntimeError):
    """The database schema cannot be brought to the expected version."""


def _schema_version(conn: sqlite3.Connection) -> int:
    try:
        row = conn.execute("select version from meta").fetchone()
    except sqlite3.OperationalError as exc:
        if "no such table: meta" in str(exc):
            return 0
        raise
    if row is None:
        raise MigrationError("meta table holds no version")
    return int(row[0])


def _insert_feed(conn: sqlite3.Connection, feed: Feed) -> None:
    conn.execute(
        "insert into feed(title, description, author, email, feedType) values(?, ?, ?, ?, ?)",
        (feed.title, feed.description, feed.author, feed.email, FeedType(feed.feed_type).value),
    )


def migrate(conn: sqlite3.Connection) -> None:
    """Create the schema from scratch unless the database is already on the current version."""
    version = _schema_version(conn)
    if version == SCHEMA_VERSION:
        _log.info("Not migrating, as already on version=%d", version)
        return
    if version > SCHEMA_VERSION:
        raise MigrationError(f"Expected version <= {SCHEMA_VERSION}, got {version}")

    _log.info("Migrating: creating new db from scratch")
    tables = [
        name
        for (name,) in conn.execute("select name from sqlite_master where type='table'")
        if not name.startswith("sqlite_")
    ]
    for name in tables:
        quoted = name.replace('"', '""')
        conn.execute(f'drop table "{quoted}"')
    conn.execute(
        "create table feed(title unique, description, author, email, "
        "feedType check(feedType in ('url','text')))"
    )
    _insert_feed(conn, DEFAULT_FEED)
    conn.execute(
        "create table item(feedTitle not null, id unique not null, title, "
        "created timestamp not null, url, text)"
    )
    conn.execute("create table meta(version int)")
    conn.execute("insert into meta(version) values(?)", (SCHEMA_VERSION,))
    conn.commit()


def open_database(path: str | Path = DB_FILE) -> sqlite3.Connection:
    """Open the database at path and migrate it to the current schema."""
    conn = sqlite3.connect(str(path), check_same_thread=False)
    try:
        migrate(conn)
    except BaseException:
        conn.close()
        raise
    return conn


class History:
    """Feeds and items kept in an SQLite database."""

    def __init__(self, database: str | Path = DB_FILE) -> None:
        self._conn = open_database(database)

    def __enter__(self) -> History:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying connection."""
        self._conn.close()

    def add_feed(self, feed: Feed) -> None:
        """Store a new feed; a duplicate title raises sqlite3.IntegrityError."""
        with self._conn:
            _insert_feed(self._conn, feed)

    def delete_feed(self, feed: Feed) -> None:
        """Remove a feed together with all of its items."""
        with self._conn:
            self._conn.execute("delete from item where feedTitle=?", (feed.title,))
            self._conn.execute("delete from feed where title=?", (feed.title,))

    def get_feed(self, title: str) -> Feed:
        """The feed with the given title."""
        row = self._conn.execute(
            "select description, author, email, feedType from feed where title=?", (title,)
        ).fetchone()
        if row is None:
            raise FeedNotFoundError(f"No such feed: {title}")
        description, author, email, feed_type = row
        return Feed(title, description, author, email, FeedType(feed_type))

    def get_feeds(self) -> list[Feed]:
        """All feeds in creation order, without their descriptions."""
        rows = self._conn.execute(
            "select title, author, email, feedType from feed order by rowid"
        )
        return [
            Feed(title=title, author=author, email=email, feed_type=FeedType(feed_type))
            for title, author, email, feed_type in rows
        ]

    def add_item(self, item: Item) -> None:
        """Store a new item."""
        with self._conn:
            self._conn.execute(
                "insert into item(feedTitle, id, title, created, url, text) "
                "values(?, ?, ?, ?, ?, ?)",
                (
                    item.feed_title,
                    str(item.id),
                    item.title,
                    item.created.isoformat(),
                    item.url,
                    item.text,
                ),
            )

    def delete_item(self, item: Item) -> None:
        """Blank out an item instead of removing it, so feed readers do not mistake it for an expired one."""
        with self._conn:
            self._conn.execute(
                "update item set title=?, url='', text='' where id=?",
                (DELETED, str(item.id)),
            )

    def get_items(self, feed: Feed) -> list[Item]:
        """All items of a feed in the order they were saved."""
        rows = self._conn.execute(
            "select id, title, created, url, text from item where feedTitle=? order by rowid",
            (feed.title,),
        )
        return [
            Item(
                feed_title=feed.title,
                id=uuid.UUID(item_id),
                title=title,
                created=datetime.fromisoformat(created),
                url=url,
                text=text,
            )
            for item_id, title, created, url, text in rows
        ]