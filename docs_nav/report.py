"""Warnings and build reports for degraded-but-successful index builds.

Every component that tolerates a malformed file or a missing directory records
what it skipped on a :class:`BuildReport` instead of raising. Callers get the
report alongside the value through :class:`Outcome`, so tests can assert on a
degraded build without capturing log output.

Example
-------
>>> report = BuildReport()
>>> _ = report.warn(WarningKind.SOURCE_UNAVAILABLE, "missing", path=None)
>>> report.degraded
True
>>> report.kinds()
[<WarningKind.SOURCE_UNAVAILABLE: 'source-unavailable'>]
"""

from __future__ import annotations

import dataclasses as dc
import enum
import logging
import typing as typ

from .errors import (
    DuplicateSlug,
    MetadataParseError,
    NavigationError,
    NotFound,
    SourceUnavailable,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

T = typ.TypeVar("T")


class WarningKind(enum.StrEnum):
    """Category of a recoverable indexing problem."""

    SOURCE_UNAVAILABLE = "source-unavailable"
    METADATA_PARSE_ERROR = "metadata-parse-error"
    DUPLICATE_SLUG = "duplicate-slug"
    NOT_FOUND = "not-found"
    BUILD_FAILED = "build-failed"


_ERROR_KINDS: dict[type[NavigationError], WarningKind] = {
    SourceUnavailable: WarningKind.SOURCE_UNAVAILABLE,
    MetadataParseError: WarningKind.METADATA_PARSE_ERROR,
    DuplicateSlug: WarningKind.DUPLICATE_SLUG,
    NotFound: WarningKind.NOT_FOUND,
}


@dc.dataclass(frozen=True, slots=True)
class IndexWarning:
    """A single recoverable problem encountered during an index build.

    Attributes
    ----------
    kind : WarningKind
        Category of the problem.
    message : str
        Human readable description.
    path : Path or None
        File or directory the problem relates to, when known.
    """

    kind: WarningKind
    message: str
    path: Path | None = None

    @classmethod
    def from_error(cls, error: NavigationError) -> IndexWarning:
        """Convert a contained :class:`NavigationError` into a warning."""
        kind = _ERROR_KINDS.get(type(error), WarningKind.BUILD_FAILED)
        return cls(kind=kind, message=str(error), path=error.path)

    def to_dict(self) -> dict[str, str | None]:
        return {
            "kind": str(self.kind),
            "message": self.message,
            "path": self.path.as_posix() if self.path else None,
        }


@dc.dataclass(slots=True)
class BuildReport:
    """Ordered collection of warnings produced by one index build."""

    warnings: list[IndexWarning] = dc.field(default_factory=list)

    @property
    def degraded(self) -> bool:
        """Return ``True`` when anything was skipped or ignored."""
        return bool(self.warnings)

    def add(self, warning: IndexWarning) -> IndexWarning:
        """Append ``warning`` and log it at WARNING level."""
        self.warnings.append(warning)
        if warning.path is not None:
            logger.warning("%s: %s", warning.path, warning.message)
        else:
            logger.warning("%s", warning.message)
        return warning

    def warn(
        self, kind: WarningKind, message: str, *, path: Path | None = None
    ) -> IndexWarning:
        """Record a new warning of ``kind``."""
        return self.add(IndexWarning(kind=kind, message=message, path=path))

    def record(self, error: NavigationError) -> IndexWarning:
        """Record a contained exception as a warning."""
        return self.add(IndexWarning.from_error(error))

    def extend(self, other: BuildReport) -> None:
        """Merge warnings from ``other`` without logging or duplicating them."""
        for warning in other.warnings:
            if warning not in self.warnings:
                self.warnings.append(warning)

    def kinds(self) -> list[WarningKind]:
        return [warning.kind for warning in self.warnings]


@dc.dataclass(slots=True)
class Outcome(typ.Generic[T]):
    """A value paired with the report of how it was produced."""

    value: T
    report: BuildReport = dc.field(default_factory=BuildReport)

    @property
    def degraded(self) -> bool:
        return self.report.degraded


__all__ = ["BuildReport", "IndexWarning", "Outcome", "WarningKind"]
