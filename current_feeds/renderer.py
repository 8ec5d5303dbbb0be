from __future__ import annotations

from enum import Enum
import json
from typing import Callable, Optional

from .models import Feed


class Encoding(str, Enum):
    TEXT = "text"
    JSON = "json"

    @classmethod
    def resolve(cls, value: Optional[str]) -> "Encoding":
        """Map a request value to an encoding; anything unrecognised means JSON."""
        if value:
            normalized = value.strip().lower()
            for encoding in cls:
                if encoding.value == normalized:
                    return encoding
        return cls.JSON


MIMETYPES = {
    Encoding.TEXT: "text/plain; charset=utf-8",
    Encoding.JSON: "application/json",
}


def render(feed: Feed, encoding: Encoding, text_renderer: Callable[[Feed], str]) -> str:
    if encoding is Encoding.TEXT:
        return text_renderer(feed)
    return json.dumps(feed.to_dict(), ensure_ascii=False)
