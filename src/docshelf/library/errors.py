"""Library errors."""


class LibraryError(Exception):
    """Base exception for document library operations."""


class DocumentNotFoundError(LibraryError):
    """Raised when an identifier does not match any loaded document."""


class UnsupportedDocumentError(LibraryError):
    """Raised when a file cannot be added because its extension is not accepted."""
