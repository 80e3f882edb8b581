"""Document discovery for docshelf."""

from .extensions import DOCUMENT_EXTENSIONS, IMAGE_EXTENSIONS, extension_tag
from .models import DocumentRecord, document_identifier
from .scanner import DocumentDiscoveryService, build_record

__all__ = [
    "DocumentDiscoveryService",
    "DocumentRecord",
    "DOCUMENT_EXTENSIONS",
    "IMAGE_EXTENSIONS",
    "build_record",
    "document_identifier",
    "extension_tag",
]
