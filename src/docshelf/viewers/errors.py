"""Viewer errors."""


class ViewerError(Exception):
    """Raised when a document cannot be rendered."""


class UnsupportedFormatError(ViewerError):
    """Raised when no viewer handles the document's extension."""
