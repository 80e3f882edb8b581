"""Favorites repository tests."""

from __future__ import annotations

import json
import threading
from pathlib import Path

import pytest

from docshelf.state import FavoritesRepository, StateError


def test_load_without_file_returns_empty_set(tmp_path: Path) -> None:
    repo = FavoritesRepository(tmp_path / "favorites.json")

    assert repo.load() == set()


def test_save_and_load_round_trip(tmp_path: Path) -> None:
    """Ensure saved identifiers are returned by a fresh repository."""
    path = tmp_path / "nested" / "favorites.json"
    FavoritesRepository(path).save(["b", "a", "a"])

    assert FavoritesRepository(path).load() == {"a", "b"}
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["identifiers"] == ["a", "b"]
    assert "updated_at" in payload


def test_toggle_adds_then_removes(tmp_path: Path) -> None:
    repo = FavoritesRepository(tmp_path / "favorites.json")

    assert repo.toggle("doc-1") is True
    assert repo.load() == {"doc-1"}
    assert repo.toggle("doc-1") is False
    assert repo.load() == set()


def test_concurrent_toggles_do_not_lose_updates(tmp_path: Path) -> None:
    repo = FavoritesRepository(tmp_path / "favorites.json")
    identifiers = [f"doc-{index}" for index in range(20)]

    threads = [threading.Thread(target=repo.toggle, args=(item,)) for item in identifiers]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert repo.load() == set(identifiers)


def test_invalid_payload_raises_state_error(tmp_path: Path) -> None:
    path = tmp_path / "favorites.json"
    path.write_text("not json", encoding="utf-8")

    with pytest.raises(StateError):
        FavoritesRepository(path).load()
