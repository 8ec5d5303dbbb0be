"""Single-slot feed cache and the policies that decide when it goes stale."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Union

from .models import Feed

CacheKey = Union[str, datetime]


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """The last stored feed together with the key it was stored under."""

    feed: Feed
    key: CacheKey


class CachePolicy(ABC):
    """Decides whether a stored entry can still answer a request made at ``now``."""

    @abstractmethod
    def key_for(self, now: datetime) -> CacheKey:
        """Return the key a feed fetched at ``now`` is stored under."""

    @abstractmethod
    def is_fresh(self, entry: CacheEntry, now: datetime) -> bool:
        """Return ``True`` when ``entry`` may be served without refetching."""


class DailyPolicy(CachePolicy):
    """Valid for the rest of the calendar day the feed was fetched on."""

    def __init__(self, tz: tzinfo) -> None:
        self._tz = tz

    def key_for(self, now: datetime) -> str:
        return now.astimezone(self._tz).strftime("%Y-%m-%d")

    def is_fresh(self, entry: CacheEntry, now: datetime) -> bool:
        return entry.key == self.key_for(now)


class DurationPolicy(CachePolicy):
    """Valid for a fixed window after the fetch, regardless of the calendar."""

    def __init__(self, window: timedelta) -> None:
        if window <= timedelta(0):
            raise ValueError("Cache window must be positive")
        self._window = window

    @property
    def window(self) -> timedelta:
        return self._window

    def key_for(self, now: datetime) -> datetime:
        return now

    def is_fresh(self, entry: CacheEntry, now: datetime) -> bool:
        if not isinstance(entry.key, datetime):
            return False
        # A clock that moved backwards leaves a negative age, which still counts as fresh.
        return now - entry.key < self._window
