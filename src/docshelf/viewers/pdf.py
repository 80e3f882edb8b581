"""PDF rendering using PyMuPDF (fitz)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List

import fitz  # PyMuPDF

from .errors import ViewerError
from .models import DocumentPreview
from .text import clip

LOGGER = logging.getLogger(__name__)


def render_pdf(path: Path, *, max_chars: int = 0, **_: Any) -> DocumentPreview:
    try:
        doc = fitz.open(path)
    except Exception as exc:
        raise ViewerError(f"Failed to open PDF {path}: {exc}") from exc

    pages: List[str] = []
    try:
        page_count = len(doc)
        title = (doc.metadata or {}).get("title") or path.name
        for index in range(page_count):
            try:
                text = doc[index].get_text() or ""
            except Exception as exc:  # pragma: no cover - damaged page
                LOGGER.warning("Failed to read page %s in %s: %s", index, path, exc)
                continue
            if text.strip():
                pages.append(text.strip())
    finally:
        doc.close()

    text, truncated = clip("\n\n".join(pages), max_chars)
    return DocumentPreview(
        path=path,
        kind="pdf",
        title=title,
        text=text,
        metadata={"page_count": str(page_count)},
        truncated=truncated,
    )


__all__ = ["render_pdf"]
