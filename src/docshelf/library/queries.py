"""Read-only queries over an already scanned collection."""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List, Sequence

from docshelf.discovery.models import DocumentRecord

from .categories import extensions_for

DEFAULT_RECENT_LIMIT = 10


def filter_by_category(records: Iterable[DocumentRecord], category: str) -> List[DocumentRecord]:
    """Return records whose extension belongs to ``category``.

    ``All`` and unknown categories leave the collection unfiltered.
    """
    extensions = extensions_for(category)
    if extensions is None:
        return list(records)
    return [record for record in records if record.extension_tag.lower() in extensions]


def filter_by_name(records: Iterable[DocumentRecord], query: str) -> List[DocumentRecord]:
    """Return records whose display name contains ``query``, ignoring case."""
    needle = query.strip().lower()
    if not needle:
        return list(records)
    return [record for record in records if needle in record.display_name.lower()]


def favorites(records: Iterable[DocumentRecord]) -> List[DocumentRecord]:
    return [record for record in records if record.is_favorite]


def favorite_identifiers(records: Iterable[DocumentRecord]) -> set[str]:
    return {record.identifier for record in records if record.is_favorite}


def most_recent(
    records: Iterable[DocumentRecord], limit: int = DEFAULT_RECENT_LIMIT
) -> List[DocumentRecord]:
    """Return the ``limit`` most recently modified records, newest first."""
    if limit <= 0:
        return []
    ordered = sorted(records, key=lambda item: item.last_modified_at, reverse=True)
    return ordered[:limit]


def total_bytes(records: Iterable[DocumentRecord]) -> int:
    return sum(record.byte_size for record in records)


def count_by_extension(records: Sequence[DocumentRecord]) -> Dict[str, int]:
    """Return document counts keyed by extension tag, most common first."""
    counts = Counter(record.extension_tag for record in records)
    return dict(counts.most_common())


__all__ = [
    "DEFAULT_RECENT_LIMIT",
    "count_by_extension",
    "favorite_identifiers",
    "favorites",
    "filter_by_category",
    "filter_by_name",
    "most_recent",
    "total_bytes",
]
