"""Reconstruct the linear sidebar order and answer previous/next queries.

The navigation tree alone does not say how loose top-level pages interleave
with whole sections, so this module rebuilds the exact top-to-bottom sequence a
reader scrolls through:

1. top-level pages that are not section indexes, by root sidecar order then
   title;
2. sections, by root sidecar order then name;
3. within a section, the unlabeled group (the section index and direct
   children) first, then named sub-folders by the section sidecar's
   ``folders`` mapping then name;
4. within each group, pages by the governing sidecar's ``pages`` mapping,
   then the unit's own order, then title.

Sidecar problems never abort the reconstruction; the affected ordering falls
back to the next rule and a warning is recorded.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import typing as typ

from ._constants import SEGMENT_SEPARATOR, UNLABELED_FOLDER
from .errors import NotFound
from .metadata import Order
from .ordering import SortKey, sort_by
from .report import BuildReport, Outcome
from .sidecar import SidecarFile, SidecarResolver

if typ.TYPE_CHECKING:
    from .config import NavigationConfig
    from .content import ContentUnit

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class Adjacency:
    """Neighbours of one unit in the flattened sidebar sequence."""

    previous: ContentUnit | None = None
    next: ContentUnit | None = None

    def to_dict(self) -> dict[str, dict[str, typ.Any] | None]:
        return {
            "previous": self.previous.to_dict() if self.previous else None,
            "next": self.next.to_dict() if self.next else None,
        }


def find_section_indexes(
    units: cabc.Sequence[ContentUnit], root_sidecar: SidecarFile | None
) -> set[str]:
    """Return the slugs of top-level units that act as a section landing page.

    A top-level unit is a section index when the root sidecar's ``pages``
    object has a key for its slug, whatever the value, and at least one other
    unit lives below it.
    """
    if root_sidecar is None or not root_sidecar.page_names:
        return set()
    candidates = {
        unit.slug
        for unit in units
        if unit.is_top_level and unit.slug in root_sidecar.page_names
    }
    return {
        slug
        for slug in candidates
        if any(unit.slug.startswith(f"{slug}{SEGMENT_SEPARATOR}") for unit in units)
    }


class SidebarFlattener:
    """Produce the single ordered sequence rendered by the sidebar."""

    def __init__(
        self, config: NavigationConfig, *, sidecars: SidecarResolver | None = None
    ) -> None:
        self.config = config
        self.sidecars = sidecars or SidecarResolver(config)

    def flatten(self, units: cabc.Sequence[ContentUnit]) -> Outcome[list[ContentUnit]]:
        """Return ``units`` in on-screen sidebar order.

        Parameters
        ----------
        units : Sequence[ContentUnit]
            Every unit of the content source, typically from
            :meth:`docs_nav.content.ContentLoader.load`.

        Returns
        -------
        Outcome[list[ContentUnit]]
            The flattened sequence, containing each input unit exactly once,
            and the warnings raised by sidecars consulted along the way.
        """
        report = BuildReport()
        root_sidecar = self.sidecars.resolve(self.config.content_root, report)
        section_indexes = find_section_indexes(units, root_sidecar)

        top_level = [
            unit
            for unit in units
            if unit.is_top_level and unit.slug not in section_indexes
        ]
        ordered = sort_by(
            top_level,
            lambda unit: SortKey(
                orders=(self._page_order(root_sidecar, unit.slug, unit),),
                text=unit.title,
                tiebreak=unit.slug,
            ),
        )

        sections = self._group_sections(units, section_indexes)
        section_names = sort_by(
            sections,
            lambda name: SortKey(
                orders=(root_sidecar.page_order(name) if root_sidecar else None,),
                text=name,
                tiebreak=name,
            ),
        )
        for name in section_names:
            ordered.extend(self._flatten_section(name, sections[name], report))
        return Outcome(value=ordered, report=report)

    def _group_sections(
        self, units: cabc.Sequence[ContentUnit], section_indexes: set[str]
    ) -> dict[str, list[ContentUnit]]:
        sections: dict[str, list[ContentUnit]] = {}
        for unit in units:
            if unit.is_top_level and unit.slug not in section_indexes:
                continue
            sections.setdefault(unit.section, []).append(unit)
        return sections

    def _flatten_section(
        self, section: str, units: list[ContentUnit], report: BuildReport
    ) -> list[ContentUnit]:
        section_dir = self.config.content_root / section
        section_sidecar = self.sidecars.resolve(section_dir, report)

        folders: dict[str, list[ContentUnit]] = {}
        for unit in units:
            if unit.slug == section or unit.depth == 2:
                folder = UNLABELED_FOLDER
            else:
                folder = unit.segments[1]
            folders.setdefault(folder, []).append(unit)

        folder_names = sort_by(
            folders,
            lambda folder: SortKey(
                group=(0 if folder == UNLABELED_FOLDER else 1,),
                orders=(
                    section_sidecar.folder_order(folder) if section_sidecar else None,
                ),
                text=folder,
                tiebreak=folder,
            ),
        )

        ordered: list[ContentUnit] = []
        for folder in folder_names:
            if folder == UNLABELED_FOLDER:
                governing = section_sidecar
            else:
                governing = self.sidecars.resolve(section_dir / folder, report)
            ordered.extend(
                sort_by(
                    folders[folder],
                    lambda unit, sidecar=governing: self._page_key(
                        unit, section, sidecar
                    ),
                )
            )
        logger.debug(
            "section %s: %d units in %d groups", section, len(ordered), len(folders)
        )
        return ordered

    def _page_key(
        self, unit: ContentUnit, section: str, sidecar: SidecarFile | None
    ) -> SortKey:
        name = self.config.index_name if unit.slug == section else unit.name
        return SortKey(
            orders=(self._page_order(sidecar, name, unit), unit.explicit_order),
            text=unit.title,
            tiebreak=unit.slug,
        )

    def _page_order(
        self, sidecar: SidecarFile | None, name: str, unit: ContentUnit
    ) -> Order | None:
        """Look ``name`` up in ``sidecar.pages`` with and without the extension."""
        if sidecar is None:
            return None
        extension = self.config.content_extension(unit.source_name) or ""
        return sidecar.page_order(f"{name}{extension}", name)


class AdjacencyResolver:
    """Answer previous/next queries against a flattened sequence."""

    def __init__(self, sequence: cabc.Sequence[ContentUnit]) -> None:
        self.sequence = list(sequence)
        self._positions: dict[str, int] = {}
        for position, unit in enumerate(self.sequence):
            self._positions.setdefault(unit.slug, position)

    def position(self, slug: str) -> int:
        """Return the index of ``slug`` in the sequence.

        Raises
        ------
        NotFound
            If no unit in the sequence has ``slug``.
        """
        try:
            return self._positions[slug]
        except KeyError as exc:
            msg = f"Slug '{slug}' is not part of the sidebar."
            raise NotFound(msg) from exc

    def adjacent(self, slug: str, *, report: BuildReport | None = None) -> Adjacency:
        """Return the units immediately before and after ``slug``.

        Either side is ``None`` at the edges of the sequence; both are ``None``
        for an unknown slug, which is also recorded on ``report`` when given.
        """
        try:
            position = self.position(slug)
        except NotFound as exc:
            if report is not None:
                report.record(exc)
            return Adjacency()
        previous = self.sequence[position - 1] if position > 0 else None
        following = (
            self.sequence[position + 1]
            if position < len(self.sequence) - 1
            else None
        )
        return Adjacency(previous=previous, next=following)


__all__ = [
    "Adjacency",
    "AdjacencyResolver",
    "SidebarFlattener",
    "find_section_indexes",
]
