"""Typed dataclasses describing docs_nav configuration structures."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from docs_nav._constants import (
    CONTENT_EXTENSIONS,
    DEFAULT_CONTENT_ROOT,
    INDEX_NAME,
    SIDECAR_NAME,
)
from docs_nav.errors import NavigationConfigError
from docs_nav.ordering import SortMode


@dc.dataclass(slots=True)
class NavigationConfig:
    """Where the content lives and how its files are recognised.

    Attributes
    ----------
    content_root : Path
        Directory walked for content files and sidecars.
    content_extensions : tuple[str, ...]
        Lower-case filename suffixes treated as content (``.mdx`` by default).
    sidecar_name : str
        Filename of the per-directory ordering override file.
    index_name : str
        Stem whose files collapse onto their parent directory's slug.
    default_sort : SortMode
        Mode used by section listings when the caller does not choose one.
    adjacency_sort : SortMode
        Recorded for callers that pass it through; previous/next always follows
        the sidebar order.
    """

    content_root: Path = Path(DEFAULT_CONTENT_ROOT)
    content_extensions: tuple[str, ...] = CONTENT_EXTENSIONS
    sidecar_name: str = SIDECAR_NAME
    index_name: str = INDEX_NAME
    default_sort: SortMode = SortMode.ORDER
    adjacency_sort: SortMode = SortMode.SECTION

    def __post_init__(self) -> None:
        if not self.content_extensions:
            msg = "At least one content extension must be configured."
            raise NavigationConfigError(msg)
        if not self.sidecar_name:
            msg = "The sidecar filename must not be empty."
            raise NavigationConfigError(msg)

    def is_content_file(self, name: str) -> bool:
        """Return ``True`` when ``name`` is a content file (never the sidecar)."""
        if name == self.sidecar_name:
            return False
        return self.content_extension(name) is not None

    def content_extension(self, name: str) -> str | None:
        lowered = name.lower()
        for extension in self.content_extensions:
            if lowered.endswith(extension) and len(name) > len(extension):
                return extension
        return None

    def strip_extension(self, name: str) -> str:
        """Return ``name`` without its content extension, if it has one."""
        extension = self.content_extension(name)
        if extension is None:
            return name
        return name[: -len(extension)]


__all__ = ["NavigationConfig", "NavigationConfigError"]
