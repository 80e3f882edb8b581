"""Persisted state models."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, Field


class FavoritesState(BaseModel):
    """Favorite document identifiers stored between sessions."""

    identifiers: List[str] = Field(default_factory=list)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


__all__ = ["FavoritesState"]
