"""Fixed mapping from browse categories to extension tags."""

from __future__ import annotations

from typing import Dict, FrozenSet, Optional

ALL_CATEGORY = "All"

CATEGORY_EXTENSIONS: Dict[str, FrozenSet[str]] = {
    "PDF": frozenset({"pdf"}),
    "DOC": frozenset({"doc", "docx"}),
    "PPT": frozenset({"ppt", "pptx"}),
    "XLS": frozenset({"xls", "xlsx"}),
    "TXT": frozenset({"txt", "rtf"}),
    "EPUB": frozenset({"epub"}),
    "Images": frozenset({"jpg", "jpeg", "png", "gif", "bmp", "webp"}),
}

_LOOKUP = {name.lower(): name for name in CATEGORY_EXTENSIONS}


def canonical_category(name: str) -> Optional[str]:
    """Return the canonical spelling of ``name`` or None when it is not a known category."""
    return _LOOKUP.get(name.strip().lower())


def extensions_for(name: str) -> Optional[FrozenSet[str]]:
    """Return extension tags for a category; None means "no restriction"."""
    canonical = canonical_category(name)
    if canonical is None:
        return None
    return CATEGORY_EXTENSIONS[canonical]


def category_for(tag: str) -> Optional[str]:
    """Return the category owning an extension tag."""
    for name, extensions in CATEGORY_EXTENSIONS.items():
        if tag.lower() in extensions:
            return name
    return None


def category_names() -> list[str]:
    return [ALL_CATEGORY, *CATEGORY_EXTENSIONS]


__all__ = [
    "ALL_CATEGORY",
    "CATEGORY_EXTENSIONS",
    "canonical_category",
    "category_for",
    "category_names",
    "extensions_for",
]
