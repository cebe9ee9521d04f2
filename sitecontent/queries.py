"""Pure helpers for ordering and filtering validated entries."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Sequence

from .content import CollectionType, ContentEntry

_UNDATED = datetime.min.replace(tzinfo=timezone.utc)


def sort_by_date_descending(entries: Iterable[ContentEntry]) -> list[ContentEntry]:
    """Return entries newest first; ties and undated entries keep their input order.

    Undated entries (possible in docs) sort after every dated one.
    """
    return sorted(entries, key=_sort_key, reverse=True)


def filter_by_tag(entries: Iterable[ContentEntry], tag: str) -> list[ContentEntry]:
    return [entry for entry in entries if tag in entry.tags]


def filter_by_collection(
    entries: Iterable[ContentEntry],
    collection: CollectionType | str,
) -> list[ContentEntry]:
    kind = CollectionType(collection)
    return [entry for entry in entries if entry.collection is kind]


def featured(entries: Iterable[ContentEntry]) -> list[ContentEntry]:
    return [entry for entry in entries if entry.featured]


def take(entries: Sequence[ContentEntry], limit: int | None) -> list[ContentEntry]:
    if limit is None:
        return list(entries)
    if limit < 0:
        raise ValueError("limit must not be negative")
    return list(entries[:limit])


def _sort_key(entry: ContentEntry) -> tuple[bool, datetime]:
    if entry.date is None:
        return (False, _UNDATED)
    return (True, entry.date)
