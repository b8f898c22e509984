# Category grouping - derives homepage sections from a Directory.
# Created: 2026-03-05

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from linkboard.directory.models import Directory

UNCATEGORIZED = "_uncategorized"
UNCATEGORIZED_LABEL = "Other"


@dataclass
class CategoryGroup:
    key: str
    label: str
    links: list[Mapping[str, Any]] = field(default_factory=list)
    defined: bool = True  # key exists in Directory.categories


def category_key(link: Mapping[str, Any]) -> str:
    """Group key for *link*; a missing or empty category is uncategorized."""
    category = link.get("category")
    if not category or not isinstance(category, str):
        return UNCATEGORIZED
    return category


def group_links(directory: Directory, *, include_empty: bool = False) -> list[CategoryGroup]:
    """Group links by category, in display order.

    Order: keys of ``directory.categories`` first (mapping order), then keys
    that appear only on links, in first-seen order. Entries that are not
    objects are skipped. Defined categories without links are kept only when
    *include_empty* is set.
    """
    buckets: dict[str, list[Mapping[str, Any]]] = {}
    for link in directory.links:
        if not isinstance(link, Mapping):
            continue
        buckets.setdefault(category_key(link), []).append(link)

    groups: list[CategoryGroup] = []
    for key, label in directory.categories.items():
        items = buckets.get(key, [])
        if items or include_empty:
            groups.append(CategoryGroup(key=key, label=_label(label, key), links=items))

    for key, items in buckets.items():
        if key in directory.categories:
            continue
        label = UNCATEGORIZED_LABEL if key == UNCATEGORIZED else key
        groups.append(CategoryGroup(key=key, label=label, links=items, defined=False))

    return groups


def _label(label: Any, key: str) -> str:
    if isinstance(label, str) and label:
        return label
    return key
