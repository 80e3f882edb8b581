"""Flat, best-effort discovery of documents in well-known directories."""

from __future__ import annotations

import logging
import os
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from docshelf.config.models import DiscoverySettings

from .extensions import DOCUMENT_EXTENSIONS, IMAGE_EXTENSIONS, extension_tag
from .models import DocumentRecord, document_identifier

LOGGER = logging.getLogger(__name__)


class DocumentDiscoveryService:
    """List candidate directories without recursion and collect document records."""

    def __init__(
        self,
        primary_dirs: Iterable[str | Path],
        *,
        broad_root: str | Path | None = None,
        document_extensions: Iterable[str] = DOCUMENT_EXTENSIONS,
        image_extensions: Iterable[str] = IMAGE_EXTENSIONS,
        min_document_size_bytes: int = 1024,
    ) -> None:
        """Initialize the service.

        Args:
            primary_dirs: Directories listed first, in order.
            broad_root: Optional top-level directory listed after the primary set.
            document_extensions: Extension tags accepted as documents.
            image_extensions: Extension tags accepted as images.
            min_document_size_bytes: Documents below this size are ignored.
        """
        self.primary_dirs = [Path(item).expanduser() for item in primary_dirs]
        self.broad_root = Path(broad_root).expanduser() if broad_root else None
        self.document_extensions = frozenset(tag.lower() for tag in document_extensions)
        self.image_extensions = frozenset(tag.lower() for tag in image_extensions)
        self.min_document_size_bytes = min_document_size_bytes

    @classmethod
    def from_config(cls, settings: DiscoverySettings) -> "DocumentDiscoveryService":
        """Build a service from discovery settings."""
        return cls(
            settings.primary_dirs,
            broad_root=settings.broad_root,
            document_extensions=settings.document_extensions,
            image_extensions=settings.image_extensions,
            min_document_size_bytes=settings.min_document_size_bytes,
        )

    @property
    def candidate_dirs(self) -> List[Path]:
        """Return directories in scan order."""
        dirs = list(self.primary_dirs)
        if self.broad_root is not None:
            dirs.append(self.broad_root)
        return dirs

    def request_access(self) -> bool:
        """Return True when at least one candidate directory can be listed."""
        for directory in self.candidate_dirs:
            try:
                if directory.is_dir() and os.access(directory, os.R_OK | os.X_OK):
                    return True
            except OSError as exc:
                LOGGER.debug("Cannot probe %s: %s", directory, exc)
        LOGGER.warning(
            "No readable document directories among %d candidates.", len(self.candidate_dirs)
        )
        return False

    def scan(self) -> List[DocumentRecord]:
        """Return deduplicated records ordered by modification time, newest first.

        Per-directory and per-file failures are logged and skipped, so the
        result may be partial but the call itself does not fail.
        """
        found: List[DocumentRecord] = []
        for directory in self.candidate_dirs:
            LOGGER.debug("Scanning %s", directory)
            found.extend(self._scan_directory(directory))

        unique = {record.absolute_path: record for record in found}
        records = sorted(unique.values(), key=lambda item: item.last_modified_at, reverse=True)

        LOGGER.info("Scan completed with %d documents.", len(records))
        if LOGGER.isEnabledFor(logging.DEBUG):
            breakdown = Counter(record.extension_tag.upper() for record in records)
            for tag, count in sorted(breakdown.items()):
                LOGGER.debug("%s: %d files", tag, count)
        return records

    def _scan_directory(self, directory: Path) -> List[DocumentRecord]:
        records: List[DocumentRecord] = []
        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    record = self._process_entry(entry)
                    if record is not None:
                        records.append(record)
        except (FileNotFoundError, NotADirectoryError):
            LOGGER.debug("Skipping missing directory %s", directory)
        except OSError as exc:
            LOGGER.warning("Cannot access directory %s: %s", directory, exc)
        return records

    def _process_entry(self, entry: os.DirEntry) -> Optional[DocumentRecord]:
        try:
            if not entry.is_file(follow_symlinks=False):
                return None
            tag = extension_tag(entry.name)
            if tag is None:
                return None
            image = tag in self.image_extensions
            if not image and tag not in self.document_extensions:
                return None

            stat = entry.stat(follow_symlinks=False)
            if not image and stat.st_size < self.min_document_size_bytes:
                LOGGER.debug("Skipping small file %s (%d bytes)", entry.name, stat.st_size)
                return None

            return _make_record(os.path.abspath(entry.path), entry.name, tag, stat)
        except (OSError, OverflowError, ValueError) as exc:
            LOGGER.warning("Error processing file %s: %s", entry.path, exc)
            return None


def build_record(path: Path) -> DocumentRecord:
    """Return a record for a single file, regardless of allow-lists.

    Raises:
        OSError: If the file cannot be stat-ed.
        ValueError: If the name has no extension.
    """
    tag = extension_tag(path.name)
    if tag is None:
        raise ValueError(f"{path} has no file extension")
    return _make_record(os.path.abspath(path), path.name, tag, path.stat())


def _make_record(absolute_path: str, name: str, tag: str, stat: os.stat_result) -> DocumentRecord:
    return DocumentRecord(
        identifier=document_identifier(absolute_path),
        display_name=name,
        absolute_path=absolute_path,
        extension_tag=tag,
        byte_size=stat.st_size,
        last_modified_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
        last_accessed_at=datetime.fromtimestamp(stat.st_atime, tz=timezone.utc),
    )


__all__ = ["DocumentDiscoveryService", "build_record"]
