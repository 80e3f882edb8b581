"""Configuration models describing docshelf settings."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_PRIMARY_DIRS = [
    "/storage/emulated/0/Download",
    "/storage/emulated/0/Documents",
    "/storage/emulated/0/WhatsApp/Media/WhatsApp Documents",
    "/storage/emulated/0/Telegram/Telegram Documents",
]
DEFAULT_BROAD_ROOT = "/storage/emulated/0"
DEFAULT_DOCUMENT_EXTENSIONS = [
    "pdf",
    "doc",
    "docx",
    "txt",
    "ppt",
    "pptx",
    "xls",
    "xlsx",
    "rtf",
    "epub",
]
DEFAULT_IMAGE_EXTENSIONS = ["jpg", "jpeg", "png", "gif", "bmp", "webp"]


class DocshelfBaseModel(BaseModel):
    """Shared configuration for docshelf Pydantic models."""

    model_config = ConfigDict(extra="forbid")


class DiscoverySettings(DocshelfBaseModel):
    """Settings that drive the flat document scan.

    Attributes:
        primary_dirs: Directories listed first, in order, without recursion.
        broad_root: Top-level directory listed last; ``None`` disables it.
        document_extensions: Extension tags accepted as documents.
        image_extensions: Extension tags accepted as images.
        min_document_size_bytes: Size floor applied to documents only.
    """

    primary_dirs: List[str] = Field(default_factory=lambda: list(DEFAULT_PRIMARY_DIRS))
    broad_root: Optional[str] = DEFAULT_BROAD_ROOT
    document_extensions: List[str] = Field(
        default_factory=lambda: list(DEFAULT_DOCUMENT_EXTENSIONS)
    )
    image_extensions: List[str] = Field(default_factory=lambda: list(DEFAULT_IMAGE_EXTENSIONS))
    min_document_size_bytes: int = Field(default=1024, ge=0)

    @field_validator("document_extensions", "image_extensions")
    @classmethod
    def _normalize_extensions(cls, value: List[str]) -> List[str]:
        return [item.strip().lstrip(".").lower() for item in value if item.strip()]


class LibrarySettings(DocshelfBaseModel):
    """Settings for the in-memory document library.

    Attributes:
        recent_limit: Number of documents shown as recent.
        favorites_path: JSON file storing favorite identifiers.
        import_dir: Directory receiving imported files.
    """

    recent_limit: int = Field(default=10, ge=0)
    favorites_path: str = "~/.docshelf/favorites.json"
    import_dir: str = "~/.docshelf/imports"


class ViewerSettings(DocshelfBaseModel):
    """Limits applied when rendering previews.

    Attributes:
        max_chars: Maximum characters of extracted text kept in a preview.
        max_rows: Maximum spreadsheet rows kept per sheet.
    """

    max_chars: int = Field(default=20_000, ge=0)
    max_rows: int = Field(default=200, ge=0)


class LoggingSettings(DocshelfBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
    """

    level: str = "WARNING"


class CLIOptions(DocshelfBaseModel):
    """CLI behavior defaults.

    Attributes:
        quiet_default: Whether commands suppress non-error output by default.
    """

    quiet_default: bool = False


class DocshelfConfig(DocshelfBaseModel):
    """Top-level configuration struct for docshelf.

    Attributes:
        discovery: Scan settings.
        library: Library and persistence settings.
        viewer: Preview rendering limits.
        logging: Logging configuration.
        cli: CLI presentation defaults.
    """

    discovery: DiscoverySettings = Field(default_factory=DiscoverySettings)
    library: LibrarySettings = Field(default_factory=LibrarySettings)
    viewer: ViewerSettings = Field(default_factory=ViewerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLIOptions = Field(default_factory=CLIOptions)


__all__ = [
    "DocshelfBaseModel",
    "DiscoverySettings",
    "LibrarySettings",
    "ViewerSettings",
    "LoggingSettings",
    "CLIOptions",
    "DocshelfConfig",
    "DEFAULT_PRIMARY_DIRS",
    "DEFAULT_BROAD_ROOT",
    "DEFAULT_DOCUMENT_EXTENSIONS",
    "DEFAULT_IMAGE_EXTENSIONS",
]
