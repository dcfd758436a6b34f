"""Engine facade tying the loader, tree builder, flattener, and aggregator together.

:class:`NavigationIndex` is what the presentation layer talks to. Every entry
point performs an independent traversal of the content source with a fresh
sidecar resolver, records what it had to skip on :attr:`NavigationIndex.last_report`,
and never raises for content problems: a broken build degrades to empty
results.

Pass an :class:`IndexCache` to reuse the loaded units and flattened sequence
across calls within one render cycle; call :meth:`IndexCache.invalidate` to
force the next call to re-read the filesystem.

Example
-------
>>> from pathlib import Path
>>> from docs_nav.config import NavigationConfig
>>> from docs_nav.index import IndexCache, NavigationIndex
>>> index = NavigationIndex(NavigationConfig(Path("src/content")), cache=IndexCache())  # doctest: +SKIP
>>> pair = index.adjacent("guides/setup")  # doctest: +SKIP
>>> pair.previous.slug, pair.next.slug  # doctest: +SKIP
('guides', 'guides/deploy')
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from .content import ContentLoader, ContentUnit
from .errors import NavigationError
from .navigation import NavigationNode, NavigationTreeBuilder
from .ordering import SortMode
from .report import BuildReport, WarningKind
from .sections import Section, SectionAggregator
from .sidebar import Adjacency, AdjacencyResolver, SidebarFlattener
from .sidecar import SidecarResolver

if typ.TYPE_CHECKING:
    from .config import NavigationConfig

logger = logging.getLogger(__name__)

T = typ.TypeVar("T")


@dc.dataclass(slots=True)
class IndexCache:
    """Explicit, caller-owned cache of the most recent build.

    Attributes
    ----------
    units : list[ContentUnit] or None
        Units from the last load, or ``None`` when nothing is cached.
    flattened : list[ContentUnit] or None
        Sidebar sequence from the last flatten.
    report : BuildReport
        Warnings raised while producing the cached values.
    """

    units: list[ContentUnit] | None = None
    flattened: list[ContentUnit] | None = None
    report: BuildReport = dc.field(default_factory=BuildReport)

    def invalidate(self) -> None:
        """Drop every cached value."""
        self.units = None
        self.flattened = None
        self.report = BuildReport()


class NavigationIndex:
    """Ordered structural views over one content source."""

    def __init__(
        self, config: NavigationConfig, *, cache: IndexCache | None = None
    ) -> None:
        self.config = config
        self.cache = cache
        self.last_report = BuildReport()

    def units(self) -> list[ContentUnit]:
        """Return every content unit in traversal order."""
        report = BuildReport()
        try:
            return list(self._load_units(SidecarResolver(self.config), report))
        except (NavigationError, OSError) as exc:
            return self._failed(report, exc, [])
        finally:
            self.last_report = report

    def build_tree(self) -> list[NavigationNode]:
        """Return the sorted navigation tree for the sidebar widget."""
        report = BuildReport()
        try:
            outcome = NavigationTreeBuilder(self.config).build()
            report.extend(outcome.report)
            return outcome.value
        except (NavigationError, OSError) as exc:
            return self._failed(report, exc, [])
        finally:
            self.last_report = report

    def flatten(self) -> list[ContentUnit]:
        """Return every unit in on-screen sidebar order."""
        report = BuildReport()
        try:
            return list(self._flattened(SidecarResolver(self.config), report))
        except (NavigationError, OSError) as exc:
            return self._failed(report, exc, [])
        finally:
            self.last_report = report

    def adjacent(self, slug: str) -> Adjacency:
        """Return the previous and next units around ``slug`` in the sidebar.

        Unknown slugs, and builds that fail outright, yield an
        :class:`Adjacency` with both sides ``None``.
        """
        report = BuildReport()
        try:
            sequence = self._flattened(SidecarResolver(self.config), report)
            return AdjacencyResolver(sequence).adjacent(slug, report=report)
        except (NavigationError, OSError) as exc:
            return self._failed(report, exc, Adjacency())
        finally:
            self.last_report = report

    def sections(self, mode: SortMode | str | None = None) -> list[Section]:
        """Return ``(section, units)`` groups ordered for section-index pages.

        Raises
        ------
        ValueError
            If ``mode`` names no known sort mode.
        """
        resolved = SortMode.parse(mode) if mode is not None else None
        report = BuildReport()
        try:
            sidecars = SidecarResolver(self.config)
            units = self._load_units(sidecars, report)
            outcome = SectionAggregator(self.config, sidecars=sidecars).aggregate(
                units, resolved
            )
            report.extend(outcome.report)
            return outcome.value
        except (NavigationError, OSError) as exc:
            return self._failed(report, exc, [])
        finally:
            self.last_report = report

    def palette_entries(self) -> list[dict[str, typ.Any]]:
        """Return command-palette records in sidebar order."""
        entries: list[dict[str, typ.Any]] = []
        for unit in self.flatten():
            entry = {
                "slug": unit.slug,
                "title": unit.title,
                "section": unit.section,
                "keywords": unit.keywords,
                "summary": unit.summary,
            }
            entries.append(
                {key: value for key, value in entry.items() if value is not None}
            )
        return entries

    def _load_units(
        self, sidecars: SidecarResolver, report: BuildReport
    ) -> list[ContentUnit]:
        if self.cache is not None and self.cache.units is not None:
            report.extend(self.cache.report)
            return self.cache.units
        outcome = ContentLoader(self.config, sidecars=sidecars).load()
        report.extend(outcome.report)
        if self.cache is not None:
            self.cache.units = outcome.value
            self.cache.report.extend(outcome.report)
        return outcome.value

    def _flattened(
        self, sidecars: SidecarResolver, report: BuildReport
    ) -> list[ContentUnit]:
        if self.cache is not None and self.cache.flattened is not None:
            report.extend(self.cache.report)
            return self.cache.flattened
        units = self._load_units(sidecars, report)
        outcome = SidebarFlattener(self.config, sidecars=sidecars).flatten(units)
        report.extend(outcome.report)
        if self.cache is not None:
            self.cache.flattened = outcome.value
            self.cache.report.extend(outcome.report)
        return outcome.value

    def _failed(self, report: BuildReport, exc: Exception, empty: T) -> T:
        report.warn(
            WarningKind.BUILD_FAILED,
            f"Navigation build failed: {exc}",
            path=getattr(exc, "path", None),
        )
        logger.debug("navigation build failed", exc_info=exc)
        return empty


__all__ = ["IndexCache", "NavigationIndex"]
