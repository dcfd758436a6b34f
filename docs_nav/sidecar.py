"""Read per-directory ``meta.json`` ordering overrides.

A sidecar file can rename its directory (``title``), place the directory among
its siblings (``order``), and order the directory's children (``pages`` for
files and sub-directories, ``folders`` for sub-directories when reconstructing
the sidebar sequence). The root sidecar may also carry a ``sections`` mapping
used by section listings.

Sidecars are optional and advisory: a missing file and a malformed file both
resolve to ``None``, the latter with a recorded warning, and callers treat
``None`` exactly like "no overrides".

Example
-------
>>> import json, tempfile
>>> from pathlib import Path
>>> from docs_nav.config import NavigationConfig
>>> root = Path(tempfile.mkdtemp())
>>> _ = (root / "meta.json").write_text(json.dumps({"pages": {"intro": 1}}))
>>> sidecar = SidecarResolver(NavigationConfig(content_root=root)).load(root).value
>>> sidecar.page_order("intro.mdx", "intro")
1
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import msgspec
import msgspec.json as msgspec_json

from .errors import MetadataParseError
from .metadata import Order, coerce_order, coerce_order_mapping, optional_text
from .report import BuildReport, Outcome, WarningKind

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import NavigationConfig


@dc.dataclass(frozen=True, slots=True)
class SidecarFile:
    """Decoded overrides for one directory.

    Attributes
    ----------
    path : Path
        Location of the sidecar file.
    title : str or None
        Display title for the directory itself.
    order : int, float or None
        The directory's own order, used when its parent sidecar has no entry
        for it.
    pages : Mapping[str, int | float]
        Child name (with or without extension) to order.
    folders : Mapping[str, int | float]
        Sub-directory name to order within a sidebar section.
    sections : Mapping[str, int | float]
        Section name to order; only meaningful in the root sidecar.
    page_names : frozenset[str]
        Every key of the raw ``pages`` object, including entries dropped from
        ``pages`` for having a non-numeric value.
    """

    path: Path
    title: str | None = None
    order: Order | None = None
    pages: typ.Mapping[str, Order] = dc.field(default_factory=dict)
    folders: typ.Mapping[str, Order] = dc.field(default_factory=dict)
    sections: typ.Mapping[str, Order] = dc.field(default_factory=dict)
    page_names: frozenset[str] = frozenset()

    def page_order(self, *names: str) -> Order | None:
        """Return the ``pages`` entry for the first of ``names`` that has one."""
        for name in names:
            if name in self.pages:
                return self.pages[name]
        return None

    def folder_order(self, name: str) -> Order | None:
        return self.folders.get(name)

    def section_order(self, name: str) -> Order | None:
        """Return the root ``sections`` entry for ``name``."""
        return self.sections.get(name)


def _order_mapping(
    payload: typ.Mapping[str, typ.Any], key: str, path: Path, report: BuildReport
) -> dict[str, Order]:
    """Return the numeric mapping under ``key``, warning about ignored data."""
    raw = payload.get(key)
    if raw is None:
        return {}
    mapping = coerce_order_mapping(raw)
    if mapping is None:
        report.warn(
            WarningKind.METADATA_PARSE_ERROR,
            f"Ignoring '{key}': expected an object mapping names to numbers.",
            path=path,
        )
        return {}
    dropped = sorted(str(name) for name in raw if str(name) not in mapping)
    if dropped:
        report.warn(
            WarningKind.METADATA_PARSE_ERROR,
            f"Ignoring non-numeric '{key}' entries: {', '.join(dropped)}.",
            path=path,
        )
    return mapping


def _mapping_keys(value: object) -> frozenset[str]:
    if not isinstance(value, typ.Mapping):
        return frozenset()
    return frozenset(str(key) for key in value)


def read_sidecar(path: Path, report: BuildReport) -> SidecarFile:
    """Decode the sidecar at ``path``.

    Field-level problems (a non-numeric ``order``, a ``pages`` value that is
    not an object) drop that field and add a warning to ``report``; the rest
    of the file is kept.

    Raises
    ------
    MetadataParseError
        If the file cannot be read, is not valid JSON, or is not an object.
    """
    try:
        data = path.read_bytes()
    except OSError as exc:
        msg = f"Unable to read sidecar: {exc}"
        raise MetadataParseError(msg, path=path) from exc
    try:
        payload = msgspec_json.decode(data)
    except msgspec.DecodeError as exc:
        msg = f"Invalid sidecar JSON: {exc}"
        raise MetadataParseError(msg, path=path) from exc
    if not isinstance(payload, dict):
        msg = f"Sidecar must be a JSON object, got {type(payload).__name__}."
        raise MetadataParseError(msg, path=path)

    order = coerce_order(payload.get("order"))
    if order is None and payload.get("order") is not None:
        report.warn(
            WarningKind.METADATA_PARSE_ERROR,
            f"Ignoring non-numeric 'order': {payload['order']!r}.",
            path=path,
        )
    title = payload.get("title")
    return SidecarFile(
        path=path,
        title=optional_text(title) if isinstance(title, str) else None,
        order=order,
        pages=_order_mapping(payload, "pages", path, report),
        folders=_order_mapping(payload, "folders", path, report),
        sections=_order_mapping(payload, "sections", path, report),
        page_names=_mapping_keys(payload.get("pages")),
    )


class SidecarResolver:
    """Load sidecars by directory, memoising results for one index build."""

    def __init__(self, config: NavigationConfig) -> None:
        self.config = config
        self._memo: dict[Path, Outcome[SidecarFile | None]] = {}

    def load(self, directory: Path) -> Outcome[SidecarFile | None]:
        """Return the sidecar for ``directory`` with any warnings it produced.

        Absence yields ``None`` with a clean report; a parse failure yields
        ``None`` with a ``METADATA_PARSE_ERROR`` warning.
        """
        cached = self._memo.get(directory)
        if cached is not None:
            return cached
        outcome: Outcome[SidecarFile | None] = Outcome(value=None)
        path = directory / self.config.sidecar_name
        if path.is_file():
            try:
                outcome.value = read_sidecar(path, outcome.report)
            except MetadataParseError as exc:
                outcome.report.record(exc)
        self._memo[directory] = outcome
        return outcome

    def resolve(self, directory: Path, report: BuildReport) -> SidecarFile | None:
        """Return the sidecar for ``directory``, merging warnings into ``report``."""
        outcome = self.load(directory)
        report.extend(outcome.report)
        return outcome.value

    def invalidate(self) -> None:
        """Forget every memoised sidecar so the next lookup re-reads disk."""
        self._memo.clear()


__all__ = ["SidecarFile", "SidecarResolver", "read_sidecar"]
