from __future__ import annotations

import re
from typing import Iterable, List, Sequence, Tuple

_ENTITIES: Tuple[Tuple[str, str], ...] = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&ndash;", "–"),
    ("&mdash;", "—"),
    ("&nbsp;", " "),
)

_SUBLIST_RE = re.compile(r"<ul[^>]*>([\s\S]*?)</ul>")
_LIST_ITEM_RE = re.compile(r"<li[^>]*>([\s\S]*?)</li>")
_TAG_RE = re.compile(r"<[^>]*?>")
_WHITESPACE_RE = re.compile(r"\s+")
_DOUBLE_BULLET_RE = re.compile(r"•\s*•")
_INTRO_BULLET_RE = re.compile(r":\s*•\s*")
_SPACE_BEFORE_COLON_RE = re.compile(r"\s+:")
_SPACE_BEFORE_PERIOD_RE = re.compile(r"\s+\.")


def decode_entities(text: str) -> str:
    for entity, literal in _ENTITIES:
        text = text.replace(entity, literal)
    return text


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def strip_tags(html: str) -> str:
    return _TAG_RE.sub("", html)


def clean_text(html: str) -> str:
    """Strip markup from a short fragment such as a title or link label."""
    return collapse_whitespace(decode_entities(strip_tags(html)))


def clean_html(html: str) -> str:
    """Flatten an item fragment into one line of prose.

    Nested lists survive as inline markers: a ``<ul>`` becomes ``": "``
    followed by its entries, each ``<li>`` becomes ``"• "``.
    """
    text = _SUBLIST_RE.sub(lambda match: f": {match.group(1)}", html)
    text = _LIST_ITEM_RE.sub(lambda match: f"• {match.group(1)} ", text)
    text = decode_entities(strip_tags(text))
    text = _WHITESPACE_RE.sub(" ", text)
    text = _DOUBLE_BULLET_RE.sub("•", text)
    text = _INTRO_BULLET_RE.sub(": ", text)
    text = _SPACE_BEFORE_COLON_RE.sub(":", text)
    text = _SPACE_BEFORE_PERIOD_RE.sub(".", text)
    return text.strip()


def append_annotations(text: str, annotations: Sequence[str]) -> str:
    if not annotations:
        return text
    return f"{text} [{', '.join(annotations)}]"


def unique(values: Iterable[str]) -> List[str]:
    """Drop repeated strings, keeping the first occurrence."""
    seen: set[str] = set()
    ordered: List[str] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        ordered.append(value)
    return ordered
