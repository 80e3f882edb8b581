"""Tests for the observable document library."""

from __future__ import annotations

from pathlib import Path

import pytest

from docshelf.discovery import DocumentDiscoveryService
from docshelf.library import (
    DocumentLibrary,
    DocumentNotFoundError,
    LibraryChange,
    LibraryEvent,
    UnsupportedDocumentError,
    favorite_identifiers,
)
from docshelf.state import FavoritesRepository


def _library(tmp_path: Path) -> tuple[DocumentLibrary, Path]:
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "report.pdf").write_bytes(b"x" * 4096)
    (docs / "sheet.xlsx").write_bytes(b"x" * 4096)
    (docs / "photo.png").write_bytes(b"x" * 10)
    library = DocumentLibrary(
        DocumentDiscoveryService([docs]),
        FavoritesRepository(tmp_path / "state" / "favorites.json"),
        import_dir=tmp_path / "imports",
        recent_limit=2,
    )
    return library, docs


def test_load_emits_loading_then_loaded(tmp_path: Path) -> None:
    library, _ = _library(tmp_path)
    events: list[LibraryEvent] = []
    library.subscribe(lambda change: events.append(change.event))

    records = library.load()

    assert len(records) == 3
    assert events == [LibraryEvent.LOADING, LibraryEvent.LOADED]
    assert library.is_loading is False


def test_toggle_favorite_updates_subset_and_persists(tmp_path: Path) -> None:
    library, _ = _library(tmp_path)
    library.load()
    target = library.records[0]
    changes: list[LibraryChange] = []
    library.subscribe(changes.append)

    assert library.toggle_favorite(target.identifier) is True

    assert favorite_identifiers(library.records) == {target.identifier}
    assert changes[-1].event is LibraryEvent.FAVORITES_CHANGED
    assert changes[-1].record is not None and changes[-1].record.identifier == target.identifier

    reloaded = DocumentLibrary(
        DocumentDiscoveryService([tmp_path / "docs"]),
        FavoritesRepository(tmp_path / "state" / "favorites.json"),
    )
    reloaded.load()
    assert [record.identifier for record in reloaded.favorites()] == [target.identifier]


def test_toggle_unknown_identifier_raises(tmp_path: Path) -> None:
    library, _ = _library(tmp_path)
    library.load()

    with pytest.raises(DocumentNotFoundError):
        library.toggle_favorite("missing")


def test_failing_listener_does_not_block_others(tmp_path: Path) -> None:
    library, _ = _library(tmp_path)
    received: list[LibraryEvent] = []

    def _broken(change: LibraryChange) -> None:
        raise RuntimeError("boom")

    library.subscribe(_broken)
    library.subscribe(lambda change: received.append(change.event))

    library.load()

    assert received == [LibraryEvent.LOADING, LibraryEvent.LOADED]


def test_unsubscribe_stops_notifications(tmp_path: Path) -> None:
    library, _ = _library(tmp_path)
    received: list[LibraryEvent] = []
    unsubscribe = library.subscribe(lambda change: received.append(change.event))

    unsubscribe()
    library.set_query("report")

    assert received == []


def test_query_and_category_views(tmp_path: Path) -> None:
    library, docs = _library(tmp_path)
    library.load()

    library.set_query("SHEET")

    assert [record.display_name for record in library.search_results] == ["sheet.xlsx"]
    assert [record.display_name for record in library.by_category("Images")] == ["photo.png"]
    assert len(library.recent()) == 2
    assert library.total_bytes() == 4096 * 2 + 10
    assert library.find_by_path(docs / "report.pdf") is not None


def test_import_file_copies_and_prepends(tmp_path: Path) -> None:
    library, _ = _library(tmp_path)
    library.load()
    source = tmp_path / "camera.JPG"
    source.write_bytes(b"jpeg-bytes")
    events: list[LibraryEvent] = []
    library.subscribe(lambda change: events.append(change.event))

    record = library.import_file(source)

    assert record.display_name.startswith("imported_")
    assert record.extension_tag == "jpg"
    assert Path(record.absolute_path).parent == tmp_path / "imports"
    assert Path(record.absolute_path).read_bytes() == b"jpeg-bytes"
    assert library.records[0].identifier == record.identifier
    assert events == [LibraryEvent.DOCUMENT_ADDED]


def test_import_rejects_unsupported_types(tmp_path: Path) -> None:
    library, _ = _library(tmp_path)
    source = tmp_path / "archive.zip"
    source.write_bytes(b"zip")

    with pytest.raises(UnsupportedDocumentError):
        library.import_file(source)


def test_refresh_picks_up_new_files_and_keeps_favorites(tmp_path: Path) -> None:
    library, docs = _library(tmp_path)
    library.load()
    kept = library.records[0]
    library.toggle_favorite(kept.identifier)
    (docs / "later.txt").write_bytes(b"x" * 2048)

    library.refresh()

    assert len(library.records) == 4
    assert library.get(kept.identifier).is_favorite is True
