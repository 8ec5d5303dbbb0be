from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock
from zoneinfo import ZoneInfo

import pytest

os.environ.setdefault("FEEDS_TIMEZONE", "UTC")

from current_feeds.cache import DailyPolicy, DurationPolicy
from current_feeds.providers.readhub_provider import ReadhubProvider
from current_feeds.providers.wikinews_provider import WikiNewsProvider

UTC = ZoneInfo("UTC")

PORTAL_HTML = """
<html><body>
<div class="current-events-content description">
<p><b>Armed conflicts and attacks</b></p>
<ul>
<li><a href="/wiki/War_in_Example" title="War in Example">War in Example</a>
<ul>
<li>Forces capture the town of <a href="/wiki/Sampletown">Sampletown</a>. <a rel="nofollow" class="external text" href="https://news.example.com/a">(Reuters)</a></li>
</ul>
</li>
</ul>
<p><b>Science &amp; technology</b></p>
<ul>
<li>A probe lands on &quot;Mars&quot; &ndash; first time. <a class="external text" href="https://bbc.example/b">(BBC)</a></li>
</ul>
</div>
</body></html>
"""

READHUB_HTML = """
<div class="daily">
<a class="topic" href="/topic/8abc">Chip makers expand &amp; hire</a>
<a href="/topic/8abc">Chip makers expand &amp; hire</a>
<a href="/topic/9def">Rail link opens</a>
<a href="/news/1">Not a topic</a>
</div>
"""


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def make_response(status: int = 200, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.text = text
    return response


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 10, 17, 8, 0, tzinfo=timezone.utc))


@pytest.fixture
def session():
    mock = MagicMock()
    mock.get.return_value = make_response(200, PORTAL_HTML)
    return mock


@pytest.fixture
def wikinews(session, clock):
    return WikiNewsProvider(DailyPolicy(UTC), UTC, session=session, clock=clock)


@pytest.fixture
def readhub(clock):
    mock = MagicMock()
    mock.get.return_value = make_response(200, READHUB_HTML)
    return ReadhubProvider(DurationPolicy(timedelta(minutes=30)), UTC, session=mock, clock=clock)
