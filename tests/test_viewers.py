"""Tests covering the format-specific viewers."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import docx
import fitz
import pytest
from openpyxl import Workbook
from PIL import Image

from docshelf.viewers import (
    EmptyCell,
    NumberCell,
    TextCell,
    UnsupportedFormatError,
    ViewerError,
    render_document,
)
from docshelf.viewers.spreadsheet import sheet_rows, to_cell


def test_to_cell_tags_values() -> None:
    assert to_cell(None) == EmptyCell()
    assert to_cell("") == EmptyCell()
    assert to_cell("abc") == TextCell("abc")
    assert to_cell(True) == TextCell("TRUE")
    assert to_cell(4.0).display() == "4"
    assert to_cell(2.5).display() == "2.5"
    assert to_cell(datetime(2024, 1, 2, 3, 4)).display() == "2024-01-02T03:04:00"
    assert isinstance(to_cell(7), NumberCell)


def test_sheet_rows_drops_empty_rows_and_caps() -> None:
    raw = [("a", 1), (None, ""), ("b", 2), ("c", 3)]

    rows, truncated = sheet_rows(raw, max_rows=2)

    assert [[cell.display() for cell in row] for row in rows] == [["a", "1"], ["b", "2"]]
    assert truncated is True


def test_render_spreadsheet(tmp_path: Path) -> None:
    path = tmp_path / "budget.xlsx"
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Q1"
    sheet.append(["Item", "Cost"])
    sheet.append(["Paper", 12.0])
    sheet.append(["Ink", 3.25])
    workbook.create_sheet("Empty")
    workbook.save(path)

    preview = render_document(path)

    assert preview.kind == "spreadsheet"
    assert [sheet.name for sheet in preview.sheets] == ["Q1", "Empty"]
    assert preview.sheets[0].display_rows() == [["Item", "Cost"], ["Paper", "12"], ["Ink", "3.25"]]
    assert preview.sheets[1].rows == []
    assert preview.as_dict()["sheets"][0]["rows"][1] == ["Paper", "12"]


def test_render_word(tmp_path: Path) -> None:
    path = tmp_path / "letter.docx"
    document = docx.Document()
    document.add_paragraph("Dear reader,")
    document.add_paragraph("")
    table = document.add_table(rows=1, cols=2)
    table.cell(0, 0).text = "left"
    table.cell(0, 1).text = "right"
    document.save(str(path))

    preview = render_document(path)

    assert preview.kind == "word"
    assert preview.text is not None
    assert "Dear reader," in preview.text
    assert "left\tright" in preview.text
    assert preview.metadata["table_count"] == "1"


def test_render_pdf(tmp_path: Path) -> None:
    path = tmp_path / "paper.pdf"
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), "Hello from page one")
    doc.new_page()
    doc.save(str(path))
    doc.close()

    preview = render_document(path)

    assert preview.kind == "pdf"
    assert preview.metadata["page_count"] == "2"
    assert preview.text is not None and "Hello from page one" in preview.text


def test_render_text_truncates(tmp_path: Path) -> None:
    path = tmp_path / "notes.txt"
    path.write_text("line one\nline two\n", encoding="utf-8")

    preview = render_document(path, max_chars=8)

    assert preview.text == "line one"
    assert preview.truncated is True


def test_render_image(tmp_path: Path) -> None:
    path = tmp_path / "photo.png"
    Image.new("RGB", (32, 16), color="red").save(path)

    preview = render_document(path)

    assert preview.kind == "image"
    assert preview.metadata["image_width"] == "32"
    assert preview.metadata["image_height"] == "16"
    assert preview.text is None


def test_unsupported_and_broken_files(tmp_path: Path) -> None:
    legacy = tmp_path / "old.doc"
    legacy.write_bytes(b"binary")
    broken = tmp_path / "broken.xlsx"
    broken.write_bytes(b"not a zip file")

    with pytest.raises(UnsupportedFormatError):
        render_document(legacy)
    with pytest.raises(ViewerError):
        render_document(broken)
    with pytest.raises(ViewerError):
        render_document(tmp_path / "missing.pdf")
