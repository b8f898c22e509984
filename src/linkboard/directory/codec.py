# Persisted-shape codec - decodes raw store values and write payloads into a
# tagged union, then merges them onto a base Directory.
# Created: 2026-03-03
#
# Shapes:
#   LegacyLinks        bare JSON array (oldest format: links only)
#   DirectoryDocument  JSON object (current format, possibly partial)
#   Unrecognized       any other JSON value

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from linkboard.directory.models import Directory


@dataclass(frozen=True)
class LegacyLinks:
    links: list[Any]


@dataclass(frozen=True)
class DirectoryDocument:
    fields: dict[str, Any]


@dataclass(frozen=True)
class Unrecognized:
    value: Any


PersistedShape = LegacyLinks | DirectoryDocument | Unrecognized


def classify(value: Any) -> PersistedShape:
    """Tag an already-parsed JSON value with its shape."""
    if isinstance(value, list):
        return LegacyLinks(value)
    if isinstance(value, dict):
        return DirectoryDocument(value)
    return Unrecognized(value)


def decode(raw: str) -> PersistedShape:
    """Parse a raw store value. Raises ``json.JSONDecodeError`` on bad JSON."""
    return classify(json.loads(raw))


def merge(base: Directory, shape: PersistedShape) -> Directory:
    """Apply *shape* on top of *base* without mutating either.

    A list replaces ``links`` only. An object is merged at the top level:
    each field it carries replaces the base field wholesale (no deep merge).
    Unrecognized values leave the base untouched.
    """
    if isinstance(shape, LegacyLinks):
        merged = base.to_dict()
        merged["links"] = shape.links
        return Directory.from_dict(merged)
    if isinstance(shape, DirectoryDocument):
        return Directory.from_dict({**base.to_dict(), **shape.fields})
    return Directory.from_dict(base.to_dict())


def encode(directory: Directory) -> str:
    """Serialize for storage."""
    return json.dumps(directory.to_dict(), ensure_ascii=False)
