"""Extension allow-lists and tag derivation."""

from __future__ import annotations

from typing import Optional

from docshelf.config.models import DEFAULT_DOCUMENT_EXTENSIONS, DEFAULT_IMAGE_EXTENSIONS

DOCUMENT_EXTENSIONS = frozenset(DEFAULT_DOCUMENT_EXTENSIONS)
IMAGE_EXTENSIONS = frozenset(DEFAULT_IMAGE_EXTENSIONS)


def extension_tag(filename: str) -> Optional[str]:
    """Return the lower-cased text after the last dot, or None when absent.

    Args:
        filename: Final path segment of a file.

    Returns:
        Optional[str]: Extension tag, or None for names without a usable extension.
    """
    _, dot, tail = filename.rpartition(".")
    if not dot or not tail:
        return None
    return tail.lower()


__all__ = ["DOCUMENT_EXTENSIONS", "IMAGE_EXTENSIONS", "extension_tag"]
