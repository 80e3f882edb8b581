"""DOCX rendering using python-docx."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from docx import Document

from .errors import ViewerError
from .models import DocumentPreview
from .text import clip


def render_word(path: Path, *, max_chars: int = 0, **_: Any) -> DocumentPreview:
    try:
        document = Document(str(path))
    except Exception as exc:
        raise ViewerError(f"Error loading Word document {path}: {exc}") from exc

    paragraphs = [para.text for para in document.paragraphs if para.text.strip()]
    for table in document.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells]
            if any(cells):
                paragraphs.append("\t".join(cells))

    title = document.core_properties.title or path.name
    text, truncated = clip("\n".join(paragraphs), max_chars)
    return DocumentPreview(
        path=path,
        kind="word",
        title=title,
        text=text,
        metadata={
            "paragraph_count": str(len(document.paragraphs)),
            "table_count": str(len(document.tables)),
        },
        truncated=truncated,
    )


__all__ = ["render_word"]
