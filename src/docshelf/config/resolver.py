"""Layer configuration sources into a validated `DocshelfConfig`."""

from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
from typing import Any, Optional

from pydantic import ValidationError

from .exceptions import ConfigError
from .models import DocshelfConfig


def resolve_with_precedence(
    *,
    defaults: DocshelfConfig,
    file_overrides: Optional[Mapping[str, Any]] = None,
    env_overrides: Optional[Mapping[str, Any]] = None,
    cli_overrides: Optional[Mapping[str, Any]] = None,
) -> DocshelfConfig:
    """Apply overrides on top of ``defaults``; later sources win.

    Keys may be nested mappings or dotted paths such as ``discovery.broad_root``.

    Raises:
        ConfigError: If a source is malformed or the merged values fail validation.
    """
    layers = (
        ("File", file_overrides),
        ("Environment", env_overrides),
        ("CLI", cli_overrides),
    )
    merged = defaults.model_dump(mode="python")
    for label, source in layers:
        if source is not None:
            _merge_into(merged, _expand(source, label), label)

    try:
        return DocshelfConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration values: {exc}") from exc


def _expand(source: Mapping[str, Any], label: str) -> dict[str, Any]:
    """Turn dotted keys into nested dictionaries."""
    if not isinstance(source, Mapping):
        raise ConfigError(f"{label} overrides must be a mapping.")

    tree: dict[str, Any] = {}
    for key, value in source.items():
        if not isinstance(key, str):
            raise ConfigError(f"{label} override keys must be strings.")
        *parents, leaf = key.split(".")
        if isinstance(value, Mapping):
            value = _expand(value, label)
        branch: dict[str, Any] = {leaf: value}
        for parent in reversed(parents):
            branch = {parent: branch}
        _merge_into(tree, branch, label)
    return tree


def _merge_into(
    target: dict[str, Any],
    overrides: Mapping[str, Any],
    label: str,
    prefix: tuple[str, ...] = (),
) -> None:
    for key, value in overrides.items():
        current = target.get(key)
        if isinstance(value, Mapping):
            if current is None:
                current = target[key] = {}
            elif not isinstance(current, dict):
                dotted = ".".join((*prefix, key))
                raise ConfigError(f"{label} override for {dotted} conflicts with existing value.")
            _merge_into(current, value, label, (*prefix, key))
        else:
            target[key] = deepcopy(value)


__all__ = ["resolve_with_precedence"]
