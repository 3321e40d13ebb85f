"""RSS 2.0 documents built from feed items."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from datetime import datetime
from email.utils import format_datetime

_XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>'


def _person(name: str, email: str) -> str:
    if email:
        return f"{email} ({name})"
    return name


def _sub(parent: ET.Element, tag: str, text: str) -> ET.Element:
    element = ET.SubElement(parent, tag)
    element.text = text
    return element


@dataclass
class RssItem:
    """One ``<item>`` of an RSS channel."""

    id: str
    title: str
    description: str
    created: datetime | None = None
    link: str = ""
    author_name: str = ""
    author_email: str = ""


def _item_element(item: RssItem) -> ET.Element:
    element = ET.Element("item")
    _sub(element, "title", item.title)
    _sub(element, "link", item.link)
    _sub(element, "description", item.description)
    author = _person(item.author_name, item.author_email)
    if author:
        _sub(element, "author", author)
    if item.id:
        _sub(element, "guid", item.id)
    if item.created is not None:
        _sub(element, "pubDate", format_datetime(item.created))
    return element


@dataclass
class RssFeed:
    """An RSS channel with its items."""

    title: str
    link: str = ""
    description: str = ""
    author_name: str = ""
    author_email: str = ""
    created: datetime | None = None
    items: list[RssItem] = field(default_factory=list)

    def to_rss(self) -> str:
        """Serialise the channel as an RSS 2.0 document."""
        root = ET.Element("rss", version="2.0")
        channel = ET.SubElement(root, "channel")
        _sub(channel, "title", self.title)
        _sub(channel, "link", self.link)
        _sub(channel, "description", self.description)
        if self.author_name or self.author_email:
            _sub(channel, "managingEditor", f"{self.author_email} ({self.author_name})")
        if self.created is not None:
            _sub(channel, "pubDate", format_datetime(self.created))
        for item in self.items:
            channel.append(_item_element(item))
        ET.indent(root, space="  ")
        return _XML_HEADER + ET.tostring(root, encoding="unicode")