from __future__ import annotations

from datetime import datetime, timedelta
import logging
import re
from typing import List, Optional, Tuple

from ..cleaning import append_annotations, clean_html, clean_text, unique
from ..models import Category, Extraction, Feed, FeedItem
from .base import BaseProvider

logger = logging.getLogger(__name__)

_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_CONTENT_RE = re.compile(r'<div class="current-events-content description">([\s\S]*?)</div>')
_HEADING_OPEN = "<p><b>"
_HEADING_CLOSE = "</b>"
_PARAGRAPH_CLOSE = "</p>"
_LI_TAG_RE = re.compile(r"<(/?)li\b[^>]*>")
_EXTERNAL_LINK_RE = re.compile(r'<a\s+[^>]*?class="external[^>]*?href="([^"]*)"[^>]*>(.*?)</a>')
_LINK_RE = re.compile(r'<a\s+(?:[^>]*?\s+)?href="([^"]*)"[^>]*>(.*?)</a>')

UNCATEGORIZED = "Uncategorized"


class WikiNewsProvider(BaseProvider):
    """Daily digest of the Wikipedia "Current events" portal.

    The portal page for a day is complete once the day is over, so the
    provider reads yesterday's page and keeps it for the rest of today.
    """

    name = "wikinews"
    ORIGIN = "https://en.wikipedia.org"
    PORTAL_PATH = "/wiki/Portal:Current_events/{year}_{month}_{day}"

    def __init__(self, *args, origin: Optional[str] = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._origin = (origin or self.ORIGIN).rstrip("/")

    def source_url(self, now: datetime) -> str:
        subject = self._subject_day(now)
        return self._origin + self.PORTAL_PATH.format(
            year=subject.year, month=_MONTHS[subject.month - 1], day=subject.day
        )

    def subject_date(self, now: datetime) -> str:
        subject = self._subject_day(now)
        return f"{_MONTHS[subject.month - 1]} {subject.day}, {subject.year}"

    def _subject_day(self, now: datetime) -> datetime:
        return now.astimezone(self._tz) - timedelta(days=1)

    def render_text(self, feed: Feed) -> str:
        blocks = []
        for category in feed.categories:
            lines = [category.title]
            lines.extend(f"  - {item.text}" for item in category.items)
            blocks.append("\n".join(lines))
        return f"Wikipedia Current Events ({feed.date})\n\n" + "\n\n".join(blocks)

    def extract(self, html: str) -> Extraction:
        try:
            return self._extract_categories(html)
        except Exception:
            logger.exception("Unexpected error while parsing current events markup")
            return Extraction.degraded("Parsing Error", "Error while parsing the news content")

    def _extract_categories(self, html: str) -> Extraction:
        content = _CONTENT_RE.search(html)
        if content is None:
            return Extraction.degraded("Error", "No news content sections found in the HTML")

        sections = content.group(0).split(_HEADING_OPEN)
        if len(sections) <= 1:
            return Extraction.degraded(UNCATEGORIZED, "No categories found in content")

        categories: List[Category] = []
        if sections[0].strip():
            items = self._extract_items(sections[0], UNCATEGORIZED)
            if items:
                categories.append(Category(title=UNCATEGORIZED, items=items))

        for section in sections[1:]:
            title_end = section.find(_HEADING_CLOSE)
            if title_end == -1:
                continue
            body_start = section.find(_PARAGRAPH_CLOSE)
            if body_start == -1:
                continue
            title = clean_text(section[:title_end])
            items = self._extract_items(section[body_start + len(_PARAGRAPH_CLOSE):], title)
            if items:
                categories.append(Category(title=title, items=items))

        if not categories:
            return Extraction.degraded(UNCATEGORIZED, "No news items could be parsed from the source")
        return Extraction(categories=categories)

    def _extract_items(self, html: str, title: str) -> List[FeedItem]:
        try:
            items: List[FeedItem] = []
            for fragment in list_fragments(html):
                if not fragment.strip():
                    continue
                text, annotations = self._fold_links(fragment)
                text = append_annotations(clean_html(text), annotations).strip()
                if text:
                    items.append(FeedItem(text=text))
            if not items:
                plain = clean_html(html)
                if plain:
                    items.append(FeedItem(text=plain))
            return items
        except Exception:
            logger.exception("Error extracting items from category %r", title)
            return [FeedItem(text="Error parsing items")]

    def _fold_links(self, html: str) -> Tuple[str, List[str]]:
        """Remove anchors from ``html``, returning the remaining markup and ``Label (url)`` notes."""
        external: List[str] = []
        annotations: List[str] = []

        def drop_external(match: re.Match) -> str:
            href, label = match.group(1), clean_text(match.group(2))
            if href:
                external.append(f"{label or 'Source'} ({href})")
            return ""

        def keep_label(match: re.Match) -> str:
            href, inner = match.group(1), match.group(2)
            label = clean_text(inner)
            if href and label:
                annotations.append(f"{label} ({self._absolute(href)})")
            return inner

        html = _EXTERNAL_LINK_RE.sub(drop_external, html)
        html = _LINK_RE.sub(keep_label, html)
        return html, unique(annotations + external)

    def _absolute(self, href: str) -> str:
        if href.startswith("//"):
            return "https:" + href
        if href.startswith("/"):
            return self._origin + href
        return href


def list_fragments(html: str) -> List[str]:
    """Return the inner markup of each top-level ``<li>`` in ``html``.

    Nested list items stay inside their parent's fragment. An item left
    open at the end of the markup runs to the end.
    """
    fragments: List[str] = []
    depth = 0
    start = 0
    for match in _LI_TAG_RE.finditer(html):
        if match.group(1):
            if depth == 0:
                continue
            depth -= 1
            if depth == 0:
                fragments.append(html[start:match.start()])
        else:
            if depth == 0:
                start = match.end()
            depth += 1
    if depth > 0:
        fragments.append(html[start:])
    return fragments
