"""Data models produced by document discovery."""

from __future__ import annotations

import hashlib
from datetime import datetime

from pydantic import BaseModel


def document_identifier(absolute_path: str) -> str:
    """Return a stable identifier for a document path.

    Args:
        absolute_path: Absolute filesystem path of the document.

    Returns:
        str: First 16 hex digits of the SHA-1 digest of the path.
    """
    return hashlib.sha1(absolute_path.encode("utf-8")).hexdigest()[:16]


class DocumentRecord(BaseModel):
    """Metadata describing one discovered document or image."""

    identifier: str
    display_name: str
    absolute_path: str
    extension_tag: str
    byte_size: int
    last_modified_at: datetime
    last_accessed_at: datetime
    is_favorite: bool = False


__all__ = ["DocumentRecord", "document_identifier"]
