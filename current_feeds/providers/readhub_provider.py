from __future__ import annotations

from datetime import datetime
import re
from typing import List

from ..cleaning import clean_text
from ..models import Category, Extraction, Feed, FeedItem
from .base import BaseProvider

_TOPIC_LINK_RE = re.compile(r'<a\s+[^>]*?href="(/topic/[^"]+)"[^>]*?>([^<]+)</a>')


class ReadhubProvider(BaseProvider):
    """Hot topics from the Readhub daily page, refreshed on a fixed interval."""

    name = "readhub"
    ORIGIN = "https://readhub.cn"
    DAILY_URL = ORIGIN + "/daily"
    CATEGORY_TITLE = "热门话题"
    TIP = "万物之中，希望至美"

    def source_url(self, now: datetime) -> str:
        return self.DAILY_URL

    def subject_date(self, now: datetime) -> str:
        local = now.astimezone(self._tz)
        return f"{local.year}/{local.month}/{local.day}"

    @property
    def tip(self) -> str:
        return self.TIP

    def extract(self, html: str) -> Extraction:
        items: List[FeedItem] = []
        seen: set[str] = set()
        for match in _TOPIC_LINK_RE.finditer(html):
            link = self.ORIGIN + match.group(1)
            title = clean_text(match.group(2))
            if not title or link in seen:
                continue
            seen.add(link)
            items.append(FeedItem(text=title, link=link))
        if not items:
            return Extraction.degraded("Uncategorized", "No topics could be parsed from the source")
        return Extraction(categories=[Category(title=self.CATEGORY_TITLE, items=items)])

    def render_text(self, feed: Feed) -> str:
        items = [item for category in feed.categories for item in category.items]
        lines = "\n".join(f"{idx}. {item.text}" for idx, item in enumerate(items, start=1))
        text = f"Readhub {self.CATEGORY_TITLE}（{feed.date}）\n\n{lines}"
        if feed.tip:
            text += f"\n\n【微语】{feed.tip}"
        return text
