"""Caller-owned document library with change notifications."""

from __future__ import annotations

import enum
import logging
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from docshelf.discovery import DocumentDiscoveryService, DocumentRecord, build_record, extension_tag
from docshelf.state import FavoritesRepository, StateError

from . import queries
from .errors import DocumentNotFoundError, LibraryError, UnsupportedDocumentError

LOGGER = logging.getLogger(__name__)


class LibraryEvent(enum.Enum):
    """Kinds of change announced to library listeners."""

    LOADING = "loading"
    LOADED = "loaded"
    FAVORITES_CHANGED = "favorites_changed"
    QUERY_CHANGED = "query_changed"
    DOCUMENT_ADDED = "document_added"


@dataclass(slots=True)
class LibraryChange:
    """Notification delivered to listeners.

    Attributes:
        event: What changed.
        library: Library that emitted the change.
        record: Record concerned by the change, when there is a single one.
    """

    event: LibraryEvent
    library: "DocumentLibrary"
    record: Optional[DocumentRecord] = None


Listener = Callable[[LibraryChange], None]


class DocumentLibrary:
    """Hold the latest scan result and apply favorites, search and imports to it."""

    def __init__(
        self,
        service: DocumentDiscoveryService,
        favorites: FavoritesRepository,
        *,
        import_dir: Path | None = None,
        recent_limit: int = queries.DEFAULT_RECENT_LIMIT,
    ) -> None:
        """Initialize the library.

        Args:
            service: Discovery service used by ``load``.
            favorites: Repository persisting favorite identifiers.
            import_dir: Directory receiving files added through ``import_file``.
            recent_limit: Number of documents returned by ``recent``.
        """
        self._service = service
        self._favorites = favorites
        self._import_dir = import_dir.expanduser() if import_dir else None
        self._recent_limit = recent_limit
        self._records: List[DocumentRecord] = []
        self._listeners: List[Listener] = []
        self._query = ""
        self._loading = False

    @property
    def records(self) -> List[DocumentRecord]:
        return list(self._records)

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def query(self) -> str:
        return self._query

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def load(self) -> List[DocumentRecord]:
        """Scan for documents, overlay persisted favorites and notify listeners."""
        self._loading = True
        self._emit(LibraryEvent.LOADING)
        try:
            if not self._service.request_access():
                LOGGER.warning("Storage access not granted; results may be incomplete.")
            records = self._service.scan()
            favorite_ids = self._load_favorites()
            for record in records:
                record.is_favorite = record.identifier in favorite_ids
            self._records = records
        finally:
            self._loading = False
        self._emit(LibraryEvent.LOADED)
        return self.records

    refresh = load

    def toggle_favorite(self, identifier: str) -> bool:
        """Flip favorite status for a loaded document and persist the change.

        Args:
            identifier: Identifier of a record in the current result.

        Returns:
            bool: New favorite status.

        Raises:
            DocumentNotFoundError: If no loaded record has ``identifier``.
        """
        record = self.get(identifier)
        record.is_favorite = self._favorites.toggle(identifier)
        self._emit(LibraryEvent.FAVORITES_CHANGED, record)
        return record.is_favorite

    def get(self, identifier: str) -> DocumentRecord:
        for record in self._records:
            if record.identifier == identifier:
                return record
        raise DocumentNotFoundError(f"No document with identifier {identifier!r}")

    def find_by_path(self, path: Path) -> Optional[DocumentRecord]:
        target = str(path.expanduser().resolve())
        for record in self._records:
            if str(Path(record.absolute_path).resolve()) == target:
                return record
        return None

    def set_query(self, text: str) -> None:
        self._query = text
        self._emit(LibraryEvent.QUERY_CHANGED)

    @property
    def search_results(self) -> List[DocumentRecord]:
        return queries.filter_by_name(self._records, self._query)

    def by_category(self, category: str) -> List[DocumentRecord]:
        return queries.filter_by_category(self._records, category)

    def recent(self, limit: int | None = None) -> List[DocumentRecord]:
        return queries.most_recent(self._records, self._recent_limit if limit is None else limit)

    def favorites(self) -> List[DocumentRecord]:
        return queries.favorites(self._records)

    def total_bytes(self) -> int:
        return queries.total_bytes(self._records)

    def import_file(self, source: Path) -> DocumentRecord:
        """Copy ``source`` into the import directory and add it to the library.

        Args:
            source: File to import.

        Returns:
            DocumentRecord: Record describing the imported copy.

        Raises:
            UnsupportedDocumentError: If the extension is not an accepted type.
            LibraryError: If no import directory is configured.
        """
        tag = extension_tag(source.name)
        accepted = self._service.document_extensions | self._service.image_extensions
        if tag is None or tag not in accepted:
            raise UnsupportedDocumentError(f"Cannot import {source.name}: unsupported file type.")
        if self._import_dir is None:
            raise LibraryError("No import directory configured.")

        self._import_dir.mkdir(parents=True, exist_ok=True)
        target = self._import_dir / f"imported_{int(time.time() * 1000)}.{tag}"
        counter = 1
        while target.exists():
            target = self._import_dir / f"imported_{int(time.time() * 1000)}-{counter}.{tag}"
            counter += 1
        shutil.copy2(source, target)

        record = build_record(target)
        self._records.insert(0, record)
        LOGGER.info("Imported %s as %s", source, target)
        self._emit(LibraryEvent.DOCUMENT_ADDED, record)
        return record

    def _load_favorites(self) -> set[str]:
        try:
            return self._favorites.load()
        except StateError as exc:
            LOGGER.error("Error loading favorites: %s", exc)
            return set()

    def _emit(self, event: LibraryEvent, record: DocumentRecord | None = None) -> None:
        change = LibraryChange(event=event, library=self, record=record)
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                LOGGER.exception("Library listener failed for %s", event.value)


__all__ = ["DocumentLibrary", "LibraryChange", "LibraryEvent", "Listener"]
