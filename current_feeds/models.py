from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True, slots=True)
class FeedItem:
    """One news entry; ``text`` already carries any folded annotations."""

    text: str
    link: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        data = {"text": self.text}
        if self.link:
            data["link"] = self.link
        return data


@dataclass(frozen=True, slots=True)
class Category:
    """A titled group of items, kept in source order."""

    title: str
    items: List[FeedItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {"title": self.title, "items": [item.to_dict() for item in self.items]}


@dataclass(frozen=True, slots=True)
class Feed:
    """Structured result of one successful upstream fetch."""

    date: str
    categories: List[Category]
    source_url: str
    updated: str
    updated_at: int
    tip: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = {
            "date": self.date,
            "news": [category.to_dict() for category in self.categories],
            "source_url": self.source_url,
            "updated": self.updated,
            "updated_at": self.updated_at,
        }
        if self.tip:
            data["tip"] = self.tip
        return data


def synthetic_category(title: str, message: str) -> List[Category]:
    """Wrap a diagnostic message as the only category of a feed."""
    return [Category(title=title, items=[FeedItem(text=message)])]


@dataclass(frozen=True, slots=True)
class Extraction:
    """Categories pulled from markup, plus what went wrong when they are synthetic."""

    categories: List[Category]
    problem: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.problem is None

    @classmethod
    def degraded(cls, title: str, message: str) -> "Extraction":
        return cls(categories=synthetic_category(title, message), problem=message)
