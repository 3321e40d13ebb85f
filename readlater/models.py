"""Feeds and the items saved into them."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

DELETED = "[deleted]"


class FeedType(str, Enum):
    URL = "url"
    TEXT = "text"


@dataclass
class Feed:
    title: str
    description: str = ""
    author: str = ""
    email: str = ""
    feed_type: FeedType = FeedType.URL


@dataclass
class Item:
    feed_title: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    title: str = ""
    created: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    url: str = ""
    text: str = ""