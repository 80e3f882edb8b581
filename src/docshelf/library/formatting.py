"""Human-readable formatting for document listings."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

_SIZE_SUFFIXES = ("B", "KB", "MB", "GB")

_ICONS = {
    "pdf": "📄",
    "doc": "📝",
    "docx": "📝",
    "ppt": "📊",
    "pptx": "📊",
    "xls": "📈",
    "xlsx": "📈",
    "txt": "📃",
    "rtf": "📃",
    "epub": "📖",
    "jpg": "🖼️",
    "jpeg": "🖼️",
    "png": "🖼️",
    "gif": "🖼️",
    "bmp": "🖼️",
    "webp": "🖼️",
}
_DEFAULT_ICON = "📋"


def format_file_size(size: int) -> str:
    """Return ``size`` bytes as a one-decimal value with a B/KB/MB/GB suffix."""
    if size <= 0:
        return "0 B"
    value = float(size)
    exponent = 0
    while value >= 1024 and exponent < len(_SIZE_SUFFIXES) - 1:
        value /= 1024
        exponent += 1
    return f"{value:.1f} {_SIZE_SUFFIXES[exponent]}"


def format_time_ago(moment: datetime, now: Optional[datetime] = None) -> str:
    """Return a compact relative age such as ``5m ago`` or a D/M/YYYY date past 30 days.

    Args:
        moment: Timestamp to describe; naive values are treated as UTC.
        now: Reference time, defaults to the current UTC time.

    Returns:
        str: Relative description of ``moment``.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    reference = now or datetime.now(timezone.utc)
    if reference.tzinfo is None:
        reference = reference.replace(tzinfo=timezone.utc)

    delta = reference - moment
    minutes = int(delta.total_seconds() // 60)
    if minutes < 60:
        return f"{max(minutes, 0)}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    days = delta.days
    if days < 7:
        return f"{days}d ago"
    if days < 30:
        return f"{days // 7}w ago"
    return f"{moment.day}/{moment.month}/{moment.year}"


def file_icon(tag: str) -> str:
    return _ICONS.get(tag.lower(), _DEFAULT_ICON)


__all__ = ["file_icon", "format_file_size", "format_time_ago"]
