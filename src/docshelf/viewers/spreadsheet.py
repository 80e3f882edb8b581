"""XLSX rendering through openpyxl."""

from __future__ import annotations

import logging
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Iterable, List

from openpyxl import load_workbook

from .errors import ViewerError
from .models import CellValue, DocumentPreview, EmptyCell, NumberCell, SheetPreview, TextCell

LOGGER = logging.getLogger(__name__)


def to_cell(value: Any) -> CellValue:
    """Convert a raw openpyxl value into a tagged cell."""
    if value is None:
        return EmptyCell()
    if isinstance(value, bool):
        return TextCell("TRUE" if value else "FALSE")
    if isinstance(value, (int, float)):
        return NumberCell(value)
    if isinstance(value, (datetime, date, time)):
        return TextCell(value.isoformat())
    text = str(value)
    return TextCell(text) if text else EmptyCell()


def sheet_rows(
    raw_rows: Iterable[Iterable[Any]], max_rows: int = 0
) -> tuple[List[List[CellValue]], bool]:
    """Return non-empty rows as tagged cells and whether ``max_rows`` cut the sheet short."""
    rows: List[List[CellValue]] = []
    for raw in raw_rows:
        cells = [to_cell(value) for value in raw]
        if not any(cell.display() for cell in cells):
            continue
        if max_rows and len(rows) >= max_rows:
            return rows, True
        rows.append(cells)
    return rows, False


def render_spreadsheet(path: Path, *, max_rows: int = 0, **_: Any) -> DocumentPreview:
    try:
        workbook = load_workbook(path, read_only=True, data_only=True)
    except Exception as exc:
        raise ViewerError(f"Error loading spreadsheet {path}: {exc}") from exc

    sheets: List[SheetPreview] = []
    try:
        for worksheet in workbook.worksheets:
            rows, truncated = sheet_rows(worksheet.iter_rows(values_only=True), max_rows)
            sheets.append(SheetPreview(name=worksheet.title, rows=rows, truncated=truncated))
    finally:
        workbook.close()

    LOGGER.debug("Loaded %d sheets from %s", len(sheets), path)
    return DocumentPreview(
        path=path,
        kind="spreadsheet",
        title=path.name,
        sheets=sheets,
        metadata={"sheet_count": str(len(sheets))},
        truncated=any(sheet.truncated for sheet in sheets),
    )


__all__ = ["render_spreadsheet", "sheet_rows", "to_cell"]
