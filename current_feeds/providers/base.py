from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone, tzinfo
import logging
from typing import Callable, Optional

import requests

from ..cache import CacheEntry, CachePolicy
from ..models import Extraction, Feed

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FetchFailure(RuntimeError):
    """The upstream page could not be retrieved and there is nothing cached to serve."""

    def __init__(self, message: str, url: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class BaseProvider(ABC):
    """Fetches one upstream page, extracts a feed from it and caches the result.

    Subclasses supply the source URL, the extraction and the text digest;
    the cache and fallback handling live here so every feed behaves the same.
    """

    name: str = ""

    def __init__(
        self,
        policy: CachePolicy,
        tz: tzinfo,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = 10.0,
        clock: Clock = utc_now,
    ) -> None:
        self._policy = policy
        self._tz = tz
        self._session = session or requests.Session()
        self._timeout = timeout
        self._clock = clock
        self._cache: Optional[CacheEntry] = None

    @property
    def cached(self) -> Optional[CacheEntry]:
        return self._cache

    def fetch(self) -> Feed:
        now = self._clock()
        entry = self._cache
        if entry is not None and self._policy.is_fresh(entry, now):
            logger.debug("%s cache hit (key=%s)", self.name, entry.key)
            return entry.feed

        url = self.source_url(now)
        try:
            html = self._download(url)
            feed = self._build_feed(html, url, now)
        except FetchFailure as exc:
            logger.warning("%s fetch failed for %s: %s", self.name, url, exc)
            if entry is not None:
                return entry.feed
            raise
        except Exception as exc:
            logger.exception("%s extraction failed for %s", self.name, url)
            if entry is not None:
                return entry.feed
            raise FetchFailure(f"Could not build {self.name} feed", url=url) from exc

        self._store(CacheEntry(feed=feed, key=self._policy.key_for(now)))
        return feed

    def _store(self, entry: CacheEntry) -> None:
        logger.debug("%s cache stored (key=%s)", self.name, entry.key)
        self._cache = entry

    def _download(self, url: str) -> str:
        try:
            response = self._session.get(url, timeout=self._timeout)
        except requests.RequestException as exc:
            raise FetchFailure(f"Request to {url} failed: {exc}", url=url) from exc
        if not 200 <= response.status_code < 300:
            raise FetchFailure(
                f"Unexpected status {response.status_code} from {url}",
                url=url,
                status=response.status_code,
            )
        return response.text

    def _build_feed(self, html: str, url: str, now: datetime) -> Feed:
        extraction = self.extract(html)
        if not extraction.ok:
            logger.warning("%s extraction degraded for %s: %s", self.name, url, extraction.problem)
        local = now.astimezone(self._tz)
        return Feed(
            date=self.subject_date(now),
            categories=extraction.categories,
            source_url=url,
            updated=local.strftime("%Y-%m-%d %H:%M:%S"),
            updated_at=int(now.timestamp() * 1000),
            tip=self.tip,
        )

    @property
    def tip(self) -> Optional[str]:
        return None

    @abstractmethod
    def source_url(self, now: datetime) -> str:
        """Return the upstream URL to fetch for a request made at ``now``."""

    @abstractmethod
    def subject_date(self, now: datetime) -> str:
        """Return the human date of the content fetched at ``now``."""

    @abstractmethod
    def extract(self, html: str) -> Extraction:
        """Turn upstream markup into at least one category; never raises."""

    @abstractmethod
    def render_text(self, feed: Feed) -> str:
        """Return the plain-text digest of ``feed``."""
