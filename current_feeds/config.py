from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


@dataclass(slots=True)
class FeedConfig:
    """Runtime configuration for the feed service."""

    host: str = "0.0.0.0"
    port: int = 4399
    debug: bool = False
    encoding_param_name: str = "encoding"
    timezone: str = "Asia/Shanghai"
    readhub_cache_minutes: int = 30
    request_timeout: Optional[float] = 10.0
    user_agent: str = "current-feeds/0.1"

    @classmethod
    def from_env(cls) -> "FeedConfig":
        import os

        config = cls(
            host=os.getenv("HOST") or "0.0.0.0",
            port=_parse_int("PORT", os.getenv("PORT"), default=4399),
            debug=bool(os.getenv("DEBUG")),
            encoding_param_name=os.getenv("ENCODING_PARAM_NAME") or "encoding",
            timezone=os.getenv("FEEDS_TIMEZONE") or "Asia/Shanghai",
            readhub_cache_minutes=_parse_int(
                "READHUB_CACHE_MINUTES", os.getenv("READHUB_CACHE_MINUTES"), default=30
            ),
            request_timeout=_parse_timeout(os.getenv("FEEDS_REQUEST_TIMEOUT"), default=10.0),
            user_agent=os.getenv("FEEDS_USER_AGENT") or "current-feeds/0.1",
        )
        config.tzinfo()
        return config

    def tzinfo(self) -> ZoneInfo:
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone: {self.timezone!r}") from None


def _parse_int(name: str, value: Optional[str], default: int) -> int:
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer if set") from None


def _parse_timeout(value: Optional[str], default: Optional[float]) -> Optional[float]:
    if value is None or value.strip() == "":
        return default
    try:
        parsed = float(value)
    except ValueError:
        raise ValueError("FEEDS_REQUEST_TIMEOUT must be a number if set") from None
    if parsed <= 0:
        return None
    return parsed
