"""Persistence helpers for favorite documents."""

from __future__ import annotations

import json
import os
import tempfile
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Set

from pydantic import ValidationError

from .errors import StateError
from .models import FavoritesState

DEFAULT_FAVORITES_PATH = Path("~/.docshelf/favorites.json")


class FavoritesRepository:
    """Manage the persisted set of favorite document identifiers."""

    def __init__(self, path: Path | None = None) -> None:
        """Initialize the repository.

        Args:
            path: JSON file holding the favorites state.
        """
        self._path = (path or DEFAULT_FAVORITES_PATH).expanduser()
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        """Return the resolved favorites file path."""
        return self._path

    def load(self) -> Set[str]:
        """Return the stored favorite identifiers.

        Returns:
            Set[str]: Identifiers marked as favorite; empty when nothing is stored.

        Raises:
            StateError: If the stored data cannot be parsed.
        """
        return set(self._read().identifiers)

    def save(self, identifiers: Iterable[str]) -> None:
        """Replace the stored favorites with ``identifiers``.

        Args:
            identifiers: Identifiers to persist.
        """
        with self._lock:
            self._write(identifiers)

    def toggle(self, identifier: str) -> bool:
        """Flip favorite membership for ``identifier`` in one read-modify-write.

        Args:
            identifier: Document identifier to toggle.

        Returns:
            bool: True when the identifier is a favorite after the call.
        """
        with self._lock:
            current = set(self._read().identifiers)
            if identifier in current:
                current.discard(identifier)
                favorite = False
            else:
                current.add(identifier)
                favorite = True
            self._write(current)
        return favorite

    def _read(self) -> FavoritesState:
        if not self._path.exists():
            return FavoritesState()
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            return FavoritesState.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as exc:
            raise StateError(f"Invalid favorites data in {self._path}: {exc}") from exc

    def _write(self, identifiers: Iterable[str]) -> None:
        state = FavoritesState(
            identifiers=sorted(set(identifiers)),
            updated_at=datetime.now(timezone.utc),
        )
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=".favorites-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(state.model_dump(mode="json"), handle, indent=2)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


__all__ = [
    "FavoritesRepository",
    "FavoritesState",
    "StateError",
    "DEFAULT_FAVORITES_PATH",
]
