"""The web application: saving, exploring and publishing feeds."""

from __future__ import annotations

import logging
import sqlite3
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from html import escape
from http.cookies import SimpleCookie
from urllib.parse import parse_qs, quote

from .models import DELETED, Feed, FeedType, Item
from .pipes import TextToRssPipe, UrlToRssPipe
from .rss import RssFeed
from .storage import FeedNotFoundError, History
from .util import convert_line_breaks, without

_log = logging.getLogger(__name__)

_HTML = "text/html; charset=utf-8"
_XML = "text/xml; charset=utf-8"

_URL_FORM = (
    '<form method="post"><input name="url" required>'
    '<input type="checkbox" name="describe"><textarea name="context"></textarea>'
    '<button type="submit">Save</button></form>'
)
_TEXT_FORM = (
    '<form method="post"><input name="title" required>'
    '<textarea name="text" required></textarea><button type="submit">Save</button></form>'
)


def _parse(qs: str) -> dict[str, list[str]]:
    return parse_qs(qs, keep_blank_values=True)


def _query(environ) -> dict[str, str]:
    return {key: values[0] for key, values in _parse(environ.get("QUERY_STRING", "")).items()}


def _cookies(environ) -> dict[str, str]:
    return {name: m.value for name, m in SimpleCookie(environ.get("HTTP_COOKIE", "")).items()}


def _form(environ) -> dict[str, list[str]]:
    length = int(environ.get("CONTENT_LENGTH") or 0)
    body = environ["wsgi.input"].read(length) if length > 0 else b""
    form = _parse(body.decode("utf-8"))
    for key, values in _parse(environ.get("QUERY_STRING", "")).items():
        form.setdefault(key, []).extend(values)
    return form


def _field(form, name: str) -> str:
    if not form.get(name):
        raise ValueError(f"missing form field: {name}")
    return form[name][0]


def _link(path: str, feed: Feed) -> str:
    return escape(f"{path}?feed={quote(feed.title, safe='')}")


def _layout(selected: Feed, selector, content: str) -> str:
    title = escape(selected.title)
    nav = " | ".join(
        f'<a href="{_link(path, selected)}">{path[1:].capitalize()}</a>'
        for path in ("/save", "/explore", "/rss", "/feeds")
    )
    others = "".join(
        f'<li><a href="{_link("/", feed)}">{escape(feed.title)}</a></li>' for feed in selector
    )
    return (
        f'<!DOCTYPE html>\n<html><head><meta charset="utf-8"><title>{title}</title></head>\n'
        f"<body><h1>{title}</h1><nav>{nav}</nav><ul>{others}</ul>\n{content}\n</body></html>\n"
    )


class Handler:
    """A WSGI application serving the pages and the RSS of the stored feeds."""

    def __init__(self, root_url: str, history: History, pipes=None) -> None:
        self.root_url = root_url
        self.history = history
        self.pipes = dict(pipes or {FeedType.URL: UrlToRssPipe(), FeedType.TEXT: TextToRssPipe()})
        self._routes = {
            "/save": (self.save, _HTML),
            "/explore": (self.explore, _HTML),
            "/rss": (self.rss, _XML),
            "/feeds": (self.feeds, _HTML),
        }

    def selected_feed(self, query, cookies) -> Feed:
        """The feed named in the query, else in the cookie, else the first one stored."""
        if query.get("feed"):
            return self.history.get_feed(query["feed"])
        cookie = cookies.get("feed")
        if cookie is not None:
            return self.history.get_feed(cookie)
        feeds = self.history.get_feeds()
        if feeds:
            return feeds[0]
        raise FeedNotFoundError("No feed selected")

    def _feed_for(self, environ) -> Feed:
        return self.selected_feed(_query(environ), _cookies(environ))

    def _render_page(self, environ, content: str) -> str:
        selected = self._feed_for(environ)
        return _layout(selected, without(self.history.get_feeds(), selected), content)

    def index(self, request) -> str:
        return self._render_page(request, "<p>Save now, read later in any RSS reader.</p>")

    def _store(self, environ, item: Item) -> str:
        try:
            self.history.add_item(item)
            message = "Done!"
        except sqlite3.Error as exc:
            message = str(exc)
        return self._render_page(environ, f"<p>{escape(message)}</p>")

    def save(self, request) -> str:
        """The save form of the selected feed, or the result of submitting it."""
        feed = self._feed_for(request)
        is_url = feed.feed_type == FeedType.URL
        if request.get("REQUEST_METHOD", "GET") == "GET":
            return self._render_page(request, _URL_FORM if is_url else _TEXT_FORM)
        form = _form(request)
        if not is_url:
            text = convert_line_breaks(_field(form, "text"))
            item = Item(feed_title=feed.title, title=_field(form, "title"), text=text)
            return self._store(request, item)
        url = _field(form, "url")
        if not url.startswith(("http://", "https://")):
            url = "http://" + url
        text = convert_line_breaks(_field(form, "context")) if form.get("describe") else ""
        item = Item(feed_title=feed.title, title="[untitled]", url=url, text=text)
        rss_item = self.pipes[feed.feed_type].pipe(item)
        item.title, item.text = rss_item.title, rss_item.description
        return self._store(request, item)

    def explore(self, request) -> str:
        """List the feed's items, or blank out the one named by ``delete``."""
        query = _query(request)
        feed = self.selected_feed(query, _cookies(request))
        if "delete" in query:
            item_id = uuid.UUID(query["delete"])
            self.history.delete_item(Item(feed_title=feed.title, id=item_id))
            return ""
        articles = []
        for item in self.history.get_items(feed):
            if item.title == DELETED:
                continue
            item = replace(
                item,
                text=item.text.replace("<strike>", "<span class='blured'>")
                .replace("</strike>", "</span>"),
            )
            heading = escape(item.title)
            if item.url:
                heading = f'<a href="{escape(item.url)}">{heading}</a>'
            delete = _link("/explore", feed) + f"&amp;delete={item.id}"
            articles.append(
                f'<article><h2>{heading}</h2><p>{item.text}</p><a href="{delete}">Delete</a></article>'
            )
        return self._render_page(request, "\n".join(articles))

    def rss(self, request) -> str:
        """The selected feed as an RSS document."""
        feed = self._feed_for(request)
        pipe = self.pipes[feed.feed_type]
        return RssFeed(
            title=feed.title,
            link=self.root_url + "/rss",
            description=feed.description,
            author_name=feed.author,
            author_email=feed.email,
            created=datetime.now(timezone.utc),
            items=[pipe.pipe(item) for item in self.history.get_items(feed)],
        ).to_rss()

    def feeds(self, request) -> str:
        """The list of all feeds."""
        rows = "".join(
            f"<tr><td>{escape(f.title)}</td><td>{escape(f.author)}</td>"
            f"<td>{escape(f.email)}</td><td>{FeedType(f.feed_type).value}</td></tr>"
            for f in self.history.get_feeds()
        )
        return self._render_page(request, f"<table>{rows}</table>")

    def __call__(self, environ, start_response) -> list[bytes]:
        route, content_type = self._routes.get(environ.get("PATH_INFO") or "/", (self.index, _HTML))
        try:
            body = route(environ)
        except Exception as exc:
            _log.error("%s", exc)
            body, content_type = str(exc), "text/plain; charset=utf-8"
        payload = body.encode("utf-8")
        start_response(
            "200 OK", [("Content-Type", content_type), ("Content-Length", str(len(payload)))]
        )
        return [payload]