"""Document library state, derived queries and display helpers."""

from .categories import ALL_CATEGORY, CATEGORY_EXTENSIONS, category_for, category_names
from .errors import DocumentNotFoundError, LibraryError, UnsupportedDocumentError
from .formatting import file_icon, format_file_size, format_time_ago
from .queries import (
    count_by_extension,
    favorite_identifiers,
    favorites,
    filter_by_category,
    filter_by_name,
    most_recent,
    total_bytes,
)
from .service import DocumentLibrary, LibraryChange, LibraryEvent

__all__ = [
    "ALL_CATEGORY",
    "CATEGORY_EXTENSIONS",
    "DocumentLibrary",
    "DocumentNotFoundError",
    "LibraryChange",
    "LibraryError",
    "LibraryEvent",
    "UnsupportedDocumentError",
    "category_for",
    "category_names",
    "count_by_extension",
    "favorite_identifiers",
    "favorites",
    "file_icon",
    "filter_by_category",
    "filter_by_name",
    "format_file_size",
    "format_time_ago",
    "most_recent",
    "total_bytes",
]
