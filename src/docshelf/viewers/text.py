"""Plain text rendering."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .errors import ViewerError
from .models import DocumentPreview


def clip(text: str, max_chars: int) -> tuple[str, bool]:
    """Return ``text`` capped to ``max_chars`` (0 disables the cap) and a truncation flag."""
    if max_chars > 0 and len(text) > max_chars:
        return text[:max_chars], True
    return text, False


def render_text(path: Path, *, max_chars: int = 0, **_: Any) -> DocumentPreview:
    try:
        with path.open("r", encoding="utf-8", errors="replace") as fh:
            raw = fh.read(max_chars + 1) if max_chars > 0 else fh.read()
    except OSError as exc:
        raise ViewerError(f"Error reading {path}: {exc}") from exc

    text, truncated = clip(raw, max_chars)
    return DocumentPreview(
        path=path,
        kind="text",
        title=path.name,
        text=text,
        metadata={
            "sampled_characters": str(len(text)),
            "sampled_lines": str(text.count("\n") + 1 if text else 0),
        },
        truncated=truncated,
    )


__all__ = ["clip", "render_text"]
