"""Turning saved items into RSS items."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable
from urllib.parse import urlsplit

import requests
from bs4 import BeautifulSoup

from .models import DELETED, Item
from .rss import RssItem
from .translator import TranslationError, Translator
from .util import remove_paragraph_breaks, replace_dots_in_deutsch_dates, split_on_sentences


@dataclass
class Preview:
    name: str = ""
    title: str = ""
    description: str = ""


@dataclass
class Document:
    body: str
    preview: Preview


def _meta(soup: BeautifulSoup, *keys: str) -> str:
    for key in keys:
        for tag in soup.find_all("meta"):
            name = (tag.get("property") or tag.get("name") or "").lower()
            content = (tag.get("content") or "").strip()
            if name == key and content:
                return content
    return ""


def scrape(url: str, max_redirects: int = 3) -> Document:
    """Fetch a page, following at most max_redirects redirects, and read its preview."""
    with requests.Session() as session:
        session.max_redirects = max_redirects
        response = session.get(url, timeout=30)
        response.raise_for_status()
    soup = BeautifulSoup(response.text, "html.parser")
    title = _meta(soup, "og:title")
    if not title and soup.title is not None and soup.title.string:
        title = soup.title.string.strip()
    preview = Preview(
        name=_meta(soup, "og:site_name") or (urlsplit(response.url or url).hostname or ""),
        title=title,
        description=_meta(soup, "og:description", "description"),
    )
    return Document(body=response.text, preview=preview)


class TextToRssPipe:
    """Publishes texts with a translation after every sentence."""

    def __init__(self, translator=None, error_message: str = "Translator unreachable.") -> None:
        self.translator = translator if translator is not None else Translator()
        self.error_message = error_message

    def pipe(self, item: Item) -> RssItem:
        return RssItem(
            id=str(item.id), title=item.title, description=self.get_text(item), created=item.created
        )

    def get_text(self, item: Item) -> str:
        """The item's text with each sentence followed by its struck-out translation."""
        try:
            translated = self.translator.translate(remove_paragraph_breaks(item.text))
        except TranslationError:
            return f"{item.text}<br><br><em>[{self.error_message}]</em>"
        text = replace_dots_in_deutsch_dates(item.text)
        text_sentences = split_on_sentences(text)
        translated_sentences = split_on_sentences(translated)
        if len(text_sentences) != len(translated_sentences):
            return f"{text}<br><br><strike>[{translated}]</strike>"
        for old, translation in zip(text_sentences, translated_sentences):
            new = f"{old} <strike>[{translation}]</strike>"
            for end in (".", "?", "!", "<br>"):
                text = text.replace(old + end, new + end, 1)
        return text


class UrlToRssPipe:
    """Publishes links, described by the pages they point to."""

    def __init__(self, scraper: Callable[[str, int], Document] = scrape) -> None:
        self._scraper = scraper
        self.cache: dict[str, Document] = {}

    def pipe(self, item: Item) -> RssItem:
        if item.title == DELETED:
            return RssItem(
                id=str(item.id), title=DELETED, description=item.text,
                created=item.created, link=item.url, author_name=DELETED,
            )
        doc = self.get_doc(item)
        return RssItem(
            id=str(item.id), title=doc.preview.title, description=self.get_description(item),
            created=item.created, link=item.url, author_name=doc.preview.name,
        )

    def get_doc(self, item: Item) -> Document:
        """The page behind the item's link, fetched once and then cached."""
        if item.url not in self.cache:
            self.cache[item.url] = self._scraper(item.url, 3)
        return self.cache[item.url]

    def get_description(self, item: Item) -> str:
        page = self.get_doc(item).preview.description
        if not page and not item.text:
            return f'No description provided, please follow <a href="{item.url}">the link</a>.'
        if not item.text:
            return page
        if not page:
            return item.text
        return f"{item.text}<br><br>{page}"