"""Directory data models.

Created: 2026-03-02

These models define:
- Link (one bookmark, documented as a TypedDict; never validated)
- Directory (the single persisted record: links + category labels)
- Ok / Recovered (outcome of operations that fall back to defaults)
- The built-in seed directory returned when the store is empty

Design notes:
- Links stay plain JSON values. The store does not check their shape, so a
  directory may legitimately contain entries that are not objects
- Top-level fields other than links/categories ride along in ``extra`` so a
  read-merge-write never drops them
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Generic, TypedDict, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Link(TypedDict, total=False):
    """A bookmark entry as written by the admin editor."""

    name: str
    url: str
    icon: str
    category: str
    description: str
    url_intranet: str  # alternate destination for the intranet toggle


@dataclass
class Directory:
    """The persisted record.

    ``categories`` maps category key -> display label; its insertion order is
    the default display order on the homepage.
    """

    links: list[Any] = field(default_factory=list)
    categories: dict[str, Any] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping: links, categories, then any extra fields."""
        data: dict[str, Any] = {"links": self.links, "categories": self.categories}
        for key, value in self.extra.items():
            data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Directory:
        """Build a well-formed Directory from a merged top-level mapping.

        A ``links`` that is not a list or ``categories`` that is not an object
        is replaced by an empty container.
        """
        links = data.get("links")
        if not isinstance(links, list):
            logger.warning("Directory 'links' is %s, using []", type(links).__name__)
            links = []
        categories = data.get("categories")
        if not isinstance(categories, dict):
            logger.warning(
                "Directory 'categories' is %s, using {}", type(categories).__name__
            )
            categories = {}
        extra = {k: v for k, v in data.items() if k not in ("links", "categories")}
        return cls(links=links, categories=categories, extra=extra)


@dataclass
class Ok(Generic[T]):
    """The operation produced its value without falling back."""

    value: T

    @property
    def recovered(self) -> bool:
        return False


@dataclass
class Recovered(Generic[T]):
    """The operation fell back to ``value`` after ``error``."""

    value: T
    error: BaseException | None = None
    reason: str = ""

    @property
    def recovered(self) -> bool:
        return True


Outcome = Ok[T] | Recovered[T]


# ============================================================================
# Seed data
# ============================================================================

_DEFAULT_LINKS: list[Link] = [
    {
        "name": "Bilibili",
        "url": "https://www.bilibili.com",
        "icon": "📺",
        "category": "media",
        "description": "Video sharing with live comments",
    },
    {
        "name": "Tencent Video",
        "url": "https://v.qq.com",
        "icon": "🎬",
        "category": "media",
        "description": "Online video streaming platform",
        "url_intranet": "",
    },
    {
        "name": "WeRead",
        "url": "https://weread.qq.com",
        "icon": "📖",
        "category": "books",
        "description": "Read deeply, start now",
    },
    {
        "name": "Zhihu",
        "url": "https://www.zhihu.com",
        "icon": "🧠",
        "category": "books",
        "description": "Questions and answers",
    },
    {
        "name": "GitHub",
        "url": "https://github.com",
        "icon": "💻",
        "category": "dev",
        "description": "Code hosting and collaboration",
    },
    {
        "name": "Alibaba Cloud",
        "url": "https://www.aliyun.com",
        "icon": "☁️",
        "category": "tools",
        "description": "Cloud computing services",
    },
]

_DEFAULT_CATEGORIES: dict[str, str] = {
    "media": "🎬 Media",
    "books": "📚 Books",
    "tools": "🛠️ Tools",
    "dev": "💻 Development",
}


def default_directory() -> Directory:
    """A fresh copy of the built-in directory (safe to mutate)."""
    return Directory(
        links=copy.deepcopy(_DEFAULT_LINKS),
        categories=dict(_DEFAULT_CATEGORIES),
    )
