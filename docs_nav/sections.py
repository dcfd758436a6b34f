"""Group content units by their top-level path segment."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

from .metadata import Order
from .ordering import SortKey, SortMode, sort_by, sort_units
from .report import BuildReport, Outcome
from .sidecar import SidecarResolver

if typ.TYPE_CHECKING:
    from .config import NavigationConfig
    from .content import ContentUnit


@dc.dataclass(slots=True)
class Section:
    """A first-segment grouping of content units.

    Attributes
    ----------
    name : str
        Top-level path segment shared by every unit in the group.
    units : list[ContentUnit]
        Members, ordered by the requested sort mode.
    order : int, float or None
        Position from the root sidecar, when it names this section.
    """

    name: str
    units: list[ContentUnit]
    order: Order | None = None

    @property
    def index(self) -> ContentUnit | None:
        """Return the unit whose slug is the section name, if any."""
        return next((unit for unit in self.units if unit.slug == self.name), None)

    def to_dict(self) -> dict[str, typ.Any]:
        return {
            "section": self.name,
            "units": [unit.to_dict() for unit in self.units],
        }


class SectionAggregator:
    """Build the ordered list of sections for section-index pages."""

    def __init__(
        self, config: NavigationConfig, *, sidecars: SidecarResolver | None = None
    ) -> None:
        self.config = config
        self.sidecars = sidecars or SidecarResolver(config)

    def aggregate(
        self,
        units: cabc.Sequence[ContentUnit],
        mode: SortMode | str | None = None,
    ) -> Outcome[list[Section]]:
        """Return sections ordered by the root sidecar, then by name.

        Parameters
        ----------
        units : Sequence[ContentUnit]
            Units to group; an empty sequence yields no sections.
        mode : SortMode or str, optional
            Ordering applied inside each section. Defaults to the configured
            ``default_sort``.

        Raises
        ------
        ValueError
            If ``mode`` names no known sort mode.

        Notes
        -----
        Sections are positioned by the root sidecar's ``sections`` mapping,
        then alphabetically. The root ``pages`` mapping is not consulted, so
        this listing can order sections differently from the sidebar, which
        places them by ``pages``.
        """
        resolved = (
            SortMode.parse(mode) if mode is not None else self.config.default_sort
        )
        report = BuildReport()
        if not units:
            return Outcome(value=[], report=report)
        root_sidecar = self.sidecars.resolve(self.config.content_root, report)

        groups: dict[str, list[ContentUnit]] = {}
        for unit in units:
            groups.setdefault(unit.section, []).append(unit)

        sections = [
            Section(
                name=name,
                units=sort_units(members, resolved),
                order=root_sidecar.section_order(name) if root_sidecar else None,
            )
            for name, members in groups.items()
        ]
        ordered = sort_by(
            sections,
            lambda section: SortKey(
                orders=(section.order,), text=section.name, tiebreak=section.name
            ),
        )
        return Outcome(value=ordered, report=report)


__all__ = ["Section", "SectionAggregator"]
