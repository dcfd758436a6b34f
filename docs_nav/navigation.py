"""Build the hierarchical sidebar tree from the content directory.

Each directory becomes a :class:`NavigationComposite` and each content file a
:class:`NavigationLeaf`. Order values are attached at every level from the
sidecar files, and every sibling list is sorted with the shared cascade from
:mod:`docs_nav.ordering`, so leaves always precede composites.

Example
-------
>>> from pathlib import Path
>>> from docs_nav.config import NavigationConfig
>>> from docs_nav.navigation import NavigationTreeBuilder
>>> tree = NavigationTreeBuilder(NavigationConfig(Path("src/content"))).build()  # doctest: +SKIP
>>> [node.to_dict() for node in tree.value]  # doctest: +SKIP
[{'slug': 'introduction', 'title': 'Introduction', 'order': 1}, ...]
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from .content import ContentLoader, ContentUnit, list_directory
from .errors import DuplicateSlug, MetadataParseError, SourceUnavailable
from .metadata import Order
from .ordering import sort_nodes
from .report import BuildReport, Outcome
from .sidecar import SidecarFile, SidecarResolver

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .config import NavigationConfig

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class NavigationLeaf:
    """A navigation entry backed by a single content unit."""

    slug: str
    title: str
    order: Order | None = None
    nav_tag: str | None = None
    nav_label: str | None = None
    nav_icon: str | None = None
    nav_tag_variant: str | None = None
    keywords: typ.Any = None
    unit: ContentUnit | None = dc.field(default=None, repr=False, compare=False)

    @property
    def is_composite(self) -> bool:
        return False

    def to_dict(self) -> dict[str, typ.Any]:
        payload: dict[str, typ.Any] = {
            "slug": self.slug,
            "title": self.title,
            "navTag": self.nav_tag,
            "navLabel": self.nav_label,
            "navIcon": self.nav_icon,
            "navTagVariant": self.nav_tag_variant,
            "keywords": self.keywords,
            "order": self.order,
        }
        return {key: value for key, value in payload.items() if value is not None}


@dc.dataclass(slots=True)
class NavigationComposite:
    """A navigation group backed by a directory.

    ``slug`` is the directory's own name, so it is unique among siblings only;
    leaves keep their full content slug.
    """

    slug: str
    title: str
    order: Order | None = None
    children: list[NavigationNode] = dc.field(default_factory=list)

    @property
    def is_composite(self) -> bool:
        return True

    def to_dict(self) -> dict[str, typ.Any]:
        payload: dict[str, typ.Any] = {"slug": self.slug, "title": self.title}
        if self.order is not None:
            payload["order"] = self.order
        payload["children"] = [child.to_dict() for child in self.children]
        return payload

    def walk(self) -> cabc.Iterator[NavigationNode]:
        """Yield every descendant node, depth first, in sidebar order."""
        for child in self.children:
            yield child
            if isinstance(child, NavigationComposite):
                yield from child.walk()


NavigationNode = NavigationLeaf | NavigationComposite


class NavigationTreeBuilder:
    """Recursively compose the navigation tree for a content root."""

    def __init__(
        self,
        config: NavigationConfig,
        *,
        sidecars: SidecarResolver | None = None,
        loader: ContentLoader | None = None,
    ) -> None:
        self.config = config
        self.sidecars = sidecars or SidecarResolver(config)
        self.loader = loader or ContentLoader(config, sidecars=self.sidecars)

    def build(self) -> Outcome[list[NavigationNode]]:
        """Return the sorted top-level nodes of the content tree.

        Returns
        -------
        Outcome[list[NavigationNode]]
            Top-level siblings (each composite carrying its sorted children)
            plus the warnings collected while reading files and sidecars. A
            missing content root yields an empty list.
        """
        report = BuildReport()
        root = self.config.content_root
        if not root.is_dir():
            report.record(
                SourceUnavailable("Content root does not exist.", path=root)
            )
            return Outcome(value=[], report=report)
        seen: dict[str, Path] = {}
        sidecar = self.sidecars.resolve(root, report)
        nodes = self._build_directory(root, sidecar, seen, report)
        logger.debug("built navigation tree with %d leaves", len(seen))
        return Outcome(value=nodes, report=report)

    def _build_directory(
        self,
        directory: Path,
        sidecar: SidecarFile | None,
        seen: dict[str, Path],
        report: BuildReport,
    ) -> list[NavigationNode]:
        try:
            entries = list_directory(directory)
        except SourceUnavailable as exc:
            report.record(exc)
            return []
        nodes: list[NavigationNode] = []
        for entry in entries:
            if entry.name == self.config.sidecar_name:
                continue
            if entry.is_dir():
                nodes.append(self._build_composite(entry, sidecar, seen, report))
            elif entry.is_file() and self.config.is_content_file(entry.name):
                leaf = self._build_leaf(entry, sidecar, seen, report)
                if leaf is not None:
                    nodes.append(leaf)
        return sort_nodes(nodes)

    def _build_composite(
        self,
        directory: Path,
        parent_sidecar: SidecarFile | None,
        seen: dict[str, Path],
        report: BuildReport,
    ) -> NavigationComposite:
        own_sidecar = self.sidecars.resolve(directory, report)
        children = self._build_directory(directory, own_sidecar, seen, report)
        order = parent_sidecar.page_order(directory.name) if parent_sidecar else None
        if order is None and own_sidecar is not None:
            order = own_sidecar.order
        title = (own_sidecar.title if own_sidecar else None) or directory.name
        return NavigationComposite(
            slug=directory.name,
            title=title,
            order=order,
            children=children,
        )

    def _build_leaf(
        self,
        path: Path,
        sidecar: SidecarFile | None,
        seen: dict[str, Path],
        report: BuildReport,
    ) -> NavigationLeaf | None:
        try:
            unit = self.loader.load_unit(path)
        except MetadataParseError as exc:
            report.record(exc)
            return None
        if unit.slug in seen:
            msg = (
                f"Slug '{unit.slug}' already provided by "
                f"'{seen[unit.slug].as_posix()}'; skipping this file."
            )
            report.record(DuplicateSlug(msg, path=path))
            return None
        seen[unit.slug] = path

        order = None
        if sidecar is not None:
            order = sidecar.page_order(
                path.name, self.config.strip_extension(path.name)
            )
        if order is None:
            order = unit.explicit_order
        return NavigationLeaf(
            slug=unit.slug,
            title=unit.title,
            order=order,
            nav_tag=unit.nav_tag,
            nav_label=unit.nav_label,
            nav_icon=unit.nav_icon,
            nav_tag_variant=unit.nav_tag_variant,
            keywords=unit.keywords,
            unit=unit,
        )


__all__ = [
    "NavigationComposite",
    "NavigationLeaf",
    "NavigationNode",
    "NavigationTreeBuilder",
]
