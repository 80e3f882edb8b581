"""Image metadata previews using Pillow."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from PIL import Image, UnidentifiedImageError

from .errors import ViewerError
from .models import DocumentPreview


def render_image(path: Path, **_: Any) -> DocumentPreview:
    try:
        with Image.open(path) as img:
            width, height = img.size
            metadata = {
                "image_width": str(width),
                "image_height": str(height),
                "image_mode": img.mode,
            }
            if img.format:
                metadata["image_format"] = img.format
    except (OSError, UnidentifiedImageError) as exc:
        raise ViewerError(f"Error loading image {path}: {exc}") from exc

    return DocumentPreview(path=path, kind="image", title=path.name, metadata=metadata)


__all__ = ["render_image"]
