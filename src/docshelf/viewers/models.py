"""Preview payloads produced by the document viewers."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class TextCell:
    """Spreadsheet cell holding text."""

    value: str

    def display(self) -> str:
        return self.value


@dataclass(frozen=True)
class NumberCell:
    """Spreadsheet cell holding a number; integral values render without a fraction."""

    value: Union[int, float]

    def display(self) -> str:
        if isinstance(self.value, float) and self.value.is_integer():
            return str(int(self.value))
        return str(self.value)


@dataclass(frozen=True)
class EmptyCell:
    """Spreadsheet cell with no value."""

    def display(self) -> str:
        return ""


CellValue = Union[TextCell, NumberCell, EmptyCell]


@dataclass
class SheetPreview:
    """Rows of one worksheet, with fully empty rows removed."""

    name: str
    rows: List[List[CellValue]] = field(default_factory=list)
    truncated: bool = False

    def display_rows(self) -> List[List[str]]:
        return [[cell.display() for cell in row] for row in self.rows]

    @property
    def column_count(self) -> int:
        return max((len(row) for row in self.rows), default=0)


@dataclass
class DocumentPreview:
    """Renderable content for a single document.

    Attributes:
        path: Source file.
        kind: Viewer that produced the preview (pdf, word, spreadsheet, text, image).
        title: Title shown for the document.
        text: Extracted text, when the format carries text.
        sheets: Worksheets for spreadsheet previews.
        metadata: Format-specific details such as page count or image size.
        truncated: Whether ``text`` was shortened to the configured limit.
    """

    path: Path
    kind: str
    title: str
    text: Optional[str] = None
    sheets: List[SheetPreview] = field(default_factory=list)
    metadata: Dict[str, str] = field(default_factory=dict)
    truncated: bool = False

    def as_dict(self) -> Dict[str, Any]:
        """Return a JSON-ready representation with cells already converted to strings."""
        return {
            "path": str(self.path),
            "kind": self.kind,
            "title": self.title,
            "text": self.text,
            "truncated": self.truncated,
            "metadata": dict(self.metadata),
            "sheets": [
                {
                    "name": sheet.name,
                    "rows": sheet.display_rows(),
                    "truncated": sheet.truncated,
                }
                for sheet in self.sheets
            ],
        }


__all__ = [
    "CellValue",
    "DocumentPreview",
    "EmptyCell",
    "NumberCell",
    "SheetPreview",
    "TextCell",
]
