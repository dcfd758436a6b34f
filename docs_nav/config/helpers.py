"""Utility helpers shared by the docs_nav configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from docs_nav.errors import NavigationConfigError
from docs_nav.metadata import optional_text
from docs_nav.ordering import SortMode


def _normalize_extensions(value: str | list[object] | None) -> tuple[str, ...] | None:
    """Normalize extension definitions into lower-case, dot-prefixed suffixes."""
    if value is None:
        return None
    if isinstance(value, str):
        candidates: list[object] = [value]
    elif isinstance(value, list):
        candidates = value
    else:
        msg = "'content_extensions' must be a string or a list of strings."
        raise NavigationConfigError(msg)
    normalized: list[str] = []
    for candidate in candidates:
        text = optional_text(candidate)
        if not text:
            continue
        suffix = text.lower() if text.startswith(".") else f".{text.lower()}"
        if suffix not in normalized:
            normalized.append(suffix)
    if not normalized:
        msg = "'content_extensions' must name at least one extension."
        raise NavigationConfigError(msg)
    return tuple(normalized)


def _resolve_root(value: object | None, base_dir: Path | None) -> Path | None:
    """Return the content root, anchoring relative paths at ``base_dir``."""
    text = optional_text(value)
    if text is None:
        return None
    path = Path(text).expanduser()
    if base_dir is not None and not path.is_absolute():
        return base_dir / path
    return path


def _parse_sort_mode(payload: typ.Mapping[str, typ.Any], key: str) -> SortMode | None:
    """Return the sort mode stored under ``key``, or None when unset."""
    raw = optional_text(payload.get(key))
    if raw is None:
        return None
    try:
        return SortMode.parse(raw)
    except ValueError as exc:
        msg = f"Invalid '{key}': {exc}"
        raise NavigationConfigError(msg) from exc


__all__ = ["_normalize_extensions", "_parse_sort_mode", "_resolve_root"]
