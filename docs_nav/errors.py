"""Exception taxonomy for content indexing.

Most of these never escape a public entry point: the loader, sidecar resolver,
and flattener catch them at the level of a single file or directory and record
an :class:`~docs_nav.report.IndexWarning` instead. :class:`NavigationConfigError`
is the exception; configuration problems are raised to the caller.
"""

from __future__ import annotations

from pathlib import Path


class NavigationError(Exception):
    """Base class for errors raised while indexing a content source."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class SourceUnavailable(NavigationError):
    """Raised when the content root or a sub-directory cannot be listed."""


class MetadataParseError(NavigationError):
    """Raised when front matter or a sidecar file cannot be parsed."""


class DuplicateSlug(NavigationError):
    """Raised when two content units resolve to the same slug."""


class NotFound(NavigationError):
    """Raised when a slug is not present in the flattened sequence."""


class NavigationConfigError(ValueError):
    """Raised when the navigation configuration is invalid or incomplete."""


__all__ = [
    "DuplicateSlug",
    "MetadataParseError",
    "NavigationConfigError",
    "NavigationError",
    "NotFound",
    "SourceUnavailable",
]
