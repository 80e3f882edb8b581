"""Format-specific document viewers."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict

from docshelf.discovery.extensions import IMAGE_EXTENSIONS, extension_tag

from .errors import UnsupportedFormatError, ViewerError
from .image import render_image
from .models import (
    CellValue,
    DocumentPreview,
    EmptyCell,
    NumberCell,
    SheetPreview,
    TextCell,
)
from .pdf import render_pdf
from .spreadsheet import render_spreadsheet
from .text import render_text
from .word import render_word

Renderer = Callable[..., DocumentPreview]

RENDERERS: Dict[str, Renderer] = {
    "pdf": render_pdf,
    "docx": render_word,
    "xlsx": render_spreadsheet,
    "txt": render_text,
    "rtf": render_text,
    **{tag: render_image for tag in IMAGE_EXTENSIONS},
}


def render_document(path: Path, *, max_chars: int = 0, max_rows: int = 0) -> DocumentPreview:
    """Render ``path`` with the viewer registered for its extension.

    Args:
        path: File to render.
        max_chars: Cap on extracted text; 0 keeps everything.
        max_rows: Cap on rows per worksheet; 0 keeps everything.

    Returns:
        DocumentPreview: Renderable content for the document.

    Raises:
        UnsupportedFormatError: If no viewer handles the extension.
        ViewerError: If the file is missing or cannot be decoded.
    """
    tag = extension_tag(path.name)
    renderer = RENDERERS.get(tag or "")
    if renderer is None:
        raise UnsupportedFormatError(f"No viewer available for {path.name}")
    if not path.is_file():
        raise ViewerError(f"File not found: {path}")
    return renderer(path, max_chars=max_chars, max_rows=max_rows)


__all__ = [
    "CellValue",
    "DocumentPreview",
    "EmptyCell",
    "NumberCell",
    "RENDERERS",
    "SheetPreview",
    "TextCell",
    "UnsupportedFormatError",
    "ViewerError",
    "render_document",
]
