"""Discover content units and their metadata under a content root.

The loader walks every directory below ``NavigationConfig.content_root``, reads
each content file's front matter, and produces one :class:`ContentUnit` per
file. Unreadable directories and malformed documents are recorded on the build
report and skipped; the remaining files still load.

Example
-------
>>> from pathlib import Path
>>> from docs_nav.config import NavigationConfig
>>> from docs_nav.content import ContentLoader
>>> outcome = ContentLoader(NavigationConfig(Path("src/content"))).load()  # doctest: +SKIP
>>> [unit.slug for unit in outcome.value]  # doctest: +SKIP
['getting-started', 'guides', 'guides/setup']
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import logging
import typing as typ

from ._constants import SEGMENT_SEPARATOR
from .errors import DuplicateSlug, MetadataParseError, SourceUnavailable
from .frontmatter import parse_front_matter
from .metadata import Order, coerce_order, optional_text
from .report import BuildReport, Outcome
from .sidecar import SidecarFile, SidecarResolver

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import NavigationConfig

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class ContentUnit:
    """One addressable document contributing a navigation entry.

    Attributes
    ----------
    slug : str
        ``/``-joined path relative to the content root, extension removed and
        a terminal ``index`` segment collapsed onto its parent.
    title : str
        Front-matter title, or the file stem (the directory name for index
        files) when absent.
    source_path : Path
        File the unit was read from.
    explicit_order : int, float or None
        Front-matter ``order``, else the enclosing sidecar's ``pages`` entry.
    nav_tag, nav_label, nav_icon, nav_tag_variant, keywords
        Display metadata passed through to the presentation layer.
    summary, github, image, updated_at
        Presentation metadata the engine does not interpret, except that
        ``updated_at`` backs the ``date`` sort mode.
    body : str
        Document body after the front matter.
    metadata : dict[str, Any]
        The complete front-matter mapping.
    """

    slug: str
    title: str
    source_path: Path
    explicit_order: Order | None = None
    nav_tag: str | None = None
    nav_label: str | None = None
    nav_icon: str | None = None
    nav_tag_variant: str | None = None
    keywords: typ.Any = None
    summary: str | None = None
    github: str | None = None
    image: str | None = None
    updated_at: typ.Any = None
    body: str = ""
    metadata: dict[str, typ.Any] = dc.field(default_factory=dict)

    @property
    def source_name(self) -> str:
        return self.source_path.name

    @property
    def segments(self) -> list[str]:
        return self.slug.split(SEGMENT_SEPARATOR)

    @property
    def section(self) -> str:
        """Top-level path segment the unit is grouped under."""
        return self.segments[0]

    @property
    def name(self) -> str:
        """Last path segment of the slug."""
        return self.segments[-1]

    @property
    def depth(self) -> int:
        return len(self.segments)

    @property
    def is_top_level(self) -> bool:
        return SEGMENT_SEPARATOR not in self.slug

    def to_dict(self, *, include_body: bool = False) -> dict[str, typ.Any]:
        """Return the presentation shape of this unit, omitting absent fields."""
        payload: dict[str, typ.Any] = {
            "slug": self.slug,
            "title": self.title,
            "order": self.explicit_order,
            "navTag": self.nav_tag,
            "navLabel": self.nav_label,
            "navIcon": self.nav_icon,
            "navTagVariant": self.nav_tag_variant,
            "keywords": self.keywords,
            "summary": self.summary,
            "github": self.github,
            "image": self.image,
            "updatedAt": _format_timestamp(self.updated_at),
        }
        if include_body:
            payload["body"] = self.body
        return {key: value for key, value in payload.items() if value is not None}


def _format_timestamp(value: object) -> str | None:
    if isinstance(value, dt.date):
        return value.isoformat()
    return optional_text(value)


def _first_text(metadata: typ.Mapping[str, typ.Any], *keys: str) -> str | None:
    for key in keys:
        text = optional_text(metadata.get(key))
        if text is not None:
            return text
    return None


def list_directory(directory: Path) -> list[Path]:
    """Return the entries of ``directory`` sorted by name.

    Both the content loader and the tree builder walk directories in this
    order, so they agree on which file wins a slug collision.

    Raises
    ------
    SourceUnavailable
        If ``directory`` cannot be listed.
    """
    try:
        return sorted(directory.iterdir(), key=lambda entry: entry.name)
    except OSError as exc:
        msg = f"Unable to list directory: {exc}"
        raise SourceUnavailable(msg, path=directory) from exc


class ContentLoader:
    """Walk a content root and build :class:`ContentUnit` records."""

    def __init__(
        self, config: NavigationConfig, *, sidecars: SidecarResolver | None = None
    ) -> None:
        """Initialize the loader.

        Parameters
        ----------
        config : NavigationConfig
            Content root and file recognition rules.
        sidecars : SidecarResolver, optional
            Resolver shared with other components of the same build; a private
            one is created when omitted.
        """
        self.config = config
        self.sidecars = sidecars or SidecarResolver(config)

    def load(self) -> Outcome[list[ContentUnit]]:
        """Return every content unit under the content root.

        Units appear in traversal order (entries sorted by name, depth first).
        When two files resolve to the same slug the first one wins and the
        later one is reported as a ``DUPLICATE_SLUG`` warning.
        """
        report = BuildReport()
        root = self.config.content_root
        if not root.is_dir():
            report.record(
                SourceUnavailable("Content root does not exist.", path=root)
            )
            return Outcome(value=[], report=report)
        units: dict[str, ContentUnit] = {}
        self._walk(root, units, report)
        logger.debug("loaded %d content units from %s", len(units), root)
        return Outcome(value=list(units.values()), report=report)

    def _walk(
        self, directory: Path, units: dict[str, ContentUnit], report: BuildReport
    ) -> None:
        try:
            entries = list_directory(directory)
        except SourceUnavailable as exc:
            report.record(exc)
            return
        sidecar = self.sidecars.resolve(directory, report)
        for entry in entries:
            if entry.is_dir():
                self._walk(entry, units, report)
            elif entry.is_file() and self.config.is_content_file(entry.name):
                try:
                    unit = self.load_unit(entry, sidecar=sidecar)
                except MetadataParseError as exc:
                    report.record(exc)
                    continue
                self._register(unit, units, report)

    def _register(
        self, unit: ContentUnit, units: dict[str, ContentUnit], report: BuildReport
    ) -> None:
        existing = units.get(unit.slug)
        if existing is None:
            units[unit.slug] = unit
            return
        msg = (
            f"Slug '{unit.slug}' already provided by "
            f"'{existing.source_path.as_posix()}'; skipping this file."
        )
        report.record(DuplicateSlug(msg, path=unit.source_path))

    def slug_for(self, path: Path) -> str:
        """Return the slug of the content file at ``path``.

        >>> from pathlib import Path
        >>> from docs_nav.config import NavigationConfig
        >>> loader = ContentLoader(NavigationConfig(content_root=Path("content")))
        >>> loader.slug_for(Path("content/guides/setup.mdx"))
        'guides/setup'
        >>> loader.slug_for(Path("content/guides/index.mdx"))
        'guides'
        """
        parts = list(path.relative_to(self.config.content_root).parts)
        parts[-1] = self.config.strip_extension(parts[-1])
        if len(parts) > 1 and parts[-1] == self.config.index_name:
            parts.pop()
        return SEGMENT_SEPARATOR.join(parts)

    def _fallback_title(self, path: Path) -> str:
        stem = self.config.strip_extension(path.name)
        if stem == self.config.index_name and path.parent != self.config.content_root:
            return path.parent.name
        return stem

    def load_unit(
        self, path: Path, *, sidecar: SidecarFile | None = None
    ) -> ContentUnit:
        """Read the content file at ``path`` into a :class:`ContentUnit`.

        Parameters
        ----------
        path : Path
            Content file below the content root.
        sidecar : SidecarFile, optional
            Sidecar of the file's directory, consulted for ``pages`` order when
            the front matter has none.

        Raises
        ------
        MetadataParseError
            If the file cannot be read or its front matter is malformed.
        """
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"Unable to read content file: {exc}"
            raise MetadataParseError(msg, path=path) from exc
        parsed = parse_front_matter(text, source=path)
        metadata = parsed.metadata

        order = coerce_order(metadata.get("order"))
        if order is None and sidecar is not None:
            order = sidecar.page_order(
                path.name, self.config.strip_extension(path.name)
            )

        return ContentUnit(
            slug=self.slug_for(path),
            title=optional_text(metadata.get("title")) or self._fallback_title(path),
            source_path=path,
            explicit_order=order,
            nav_tag=_first_text(metadata, "navTag", "tag"),
            nav_label=_first_text(metadata, "navLabel", "tagLabel"),
            nav_icon=optional_text(metadata.get("navIcon")),
            nav_tag_variant=optional_text(metadata.get("navTagVariant")),
            keywords=metadata.get("keywords"),
            summary=optional_text(metadata.get("summary")),
            github=optional_text(metadata.get("github")),
            image=optional_text(metadata.get("image")),
            updated_at=metadata.get("updatedAt"),
            body=parsed.body,
            metadata=metadata,
        )


__all__ = ["ContentLoader", "ContentUnit", "list_directory"]
