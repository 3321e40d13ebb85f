"""Text helpers for turning form input into feed markup."""

from __future__ import annotations

import re
from typing import Iterable

from .models import Feed

_SENTENCE_BREAK = re.compile(
    r"(?:(?:[.?!]|\.{3})(?:[\t\n\f\r ]|<br>|\Z)+|<br>+|\Z)"
)

_DEUTSCH_DATE = re.compile(
    r"([0-9]?[0-9])\. ?"
    r"(Januar|Februar|März|April|Mai|Juni|Juli|August|September|Oktober|November|Dezember)"
)


def convert_line_breaks(s: str) -> str:
    """Trim the text, normalise non-breaking spaces and turn line breaks into <br>."""
    s = s.strip()
    s = s.replace("\u00a0", " ")
    s = s.replace("\r\n", "<br>")
    s = s.replace("\r", "<br>")
    return s.replace("\n", "<br>")


def remove_paragraph_breaks(s: str) -> str:
    """Turn every <br> into a sentence end."""
    return s.replace("<br>", ". ")


def split_on_sentences(text: str) -> list[str]:
    """Split text on sentence ends and <br> tags, dropping empty pieces."""
    return [piece for piece in _SENTENCE_BREAK.split(text) if piece]


def replace_dots_in_deutsch_dates(text: str) -> str:
    """Drop the ordinal dot in German dates such as "3. Mai" so it does not end a sentence."""
    return _DEUTSCH_DATE.sub(r"\1 \2", text)


def without(items: Iterable[Feed], item: Feed) -> list[Feed]:
    """All feeds whose title differs from the given feed's."""
    return [it for it in items if it.title != item.title]