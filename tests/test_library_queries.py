"""Tests for derived queries and display helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from docshelf.discovery import DocumentRecord, document_identifier
from docshelf.library import (
    category_for,
    count_by_extension,
    favorite_identifiers,
    favorites,
    file_icon,
    filter_by_category,
    filter_by_name,
    format_file_size,
    format_time_ago,
    most_recent,
    total_bytes,
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _record(
    name: str, *, age_days: int = 0, size: int = 2048, favorite: bool = False
) -> DocumentRecord:
    path = f"/docs/{name}"
    moment = NOW - timedelta(days=age_days)
    return DocumentRecord(
        identifier=document_identifier(path),
        display_name=name,
        absolute_path=path,
        extension_tag=name.rsplit(".", 1)[-1].lower(),
        byte_size=size,
        last_modified_at=moment,
        last_accessed_at=moment,
        is_favorite=favorite,
    )


def test_doc_category_returns_word_documents_only() -> None:
    records = [_record("a.doc"), _record("b.docx"), _record("c.pdf")]

    result = filter_by_category(records, "DOC")

    assert [record.display_name for record in result] == ["a.doc", "b.docx"]


def test_category_lookup_is_case_insensitive_and_unknown_returns_all() -> None:
    records = [_record("a.png"), _record("b.webp"), _record("c.txt")]

    assert [r.display_name for r in filter_by_category(records, "images")] == ["a.png", "b.webp"]
    assert len(filter_by_category(records, "All")) == 3
    assert len(filter_by_category(records, "Spreadsheets?")) == 3
    assert category_for("RTF") == "TXT"
    assert category_for("zip") is None


def test_filter_by_name_is_case_insensitive_substring() -> None:
    records = [_record("Quarterly Report.pdf"), _record("notes.txt")]

    assert [r.display_name for r in filter_by_name(records, "report")] == ["Quarterly Report.pdf"]
    assert len(filter_by_name(records, "  ")) == 2


def test_favorites_partition() -> None:
    records = [_record("a.pdf", favorite=True), _record("b.pdf")]

    assert [r.display_name for r in favorites(records)] == ["a.pdf"]
    assert favorite_identifiers(records) == {records[0].identifier}


def test_most_recent_limits_and_orders() -> None:
    records = [_record("old.pdf", age_days=30), _record("new.pdf"), _record("mid.pdf", age_days=2)]

    assert [r.display_name for r in most_recent(records, 2)] == ["new.pdf", "mid.pdf"]
    assert most_recent(records, 0) == []


def test_statistics() -> None:
    records = [_record("a.pdf", size=100), _record("b.pdf", size=50), _record("c.png", size=1)]

    assert total_bytes(records) == 151
    assert count_by_extension(records) == {"pdf": 2, "png": 1}


@pytest.mark.parametrize(
    ("size", "expected"),
    [(0, "0 B"), (512, "512.0 B"), (1024, "1.0 KB"), (1536, "1.5 KB"), (1024**2, "1.0 MB")],
)
def test_format_file_size(size: int, expected: str) -> None:
    assert format_file_size(size) == expected


@pytest.mark.parametrize(
    ("delta", "expected"),
    [
        (timedelta(minutes=5), "5m ago"),
        (timedelta(hours=3), "3h ago"),
        (timedelta(days=2), "2d ago"),
        (timedelta(days=15), "2w ago"),
        (timedelta(days=45), "17/4/2024"),
    ],
)
def test_format_time_ago(delta: timedelta, expected: str) -> None:
    assert format_time_ago(NOW - delta, now=NOW) == expected


def test_file_icon_defaults() -> None:
    assert file_icon("PDF") == "📄"
    assert file_icon("zip") == "📋"
