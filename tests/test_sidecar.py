"""Unit tests for sidecar resolution."""

from __future__ import annotations

import typing as typ

from docs_nav.report import BuildReport, WarningKind
from docs_nav.sidecar import SidecarResolver

if typ.TYPE_CHECKING:
    from conftest import ContentTree


def test_absent_sidecar_resolves_to_none(content_tree: ContentTree) -> None:
    outcome = SidecarResolver(content_tree.config()).load(content_tree.root)
    assert outcome.value is None
    assert not outcome.degraded, "absence should not produce warnings"


def test_sidecar_fields_are_decoded(content_tree: ContentTree) -> None:
    content_tree.sidecar(
        "guides",
        {
            "title": "Guides",
            "order": 3,
            "pages": {"intro.mdx": 1, "setup": 2},
            "folders": {"advanced": 1},
            "sections": {"guides": 9},
        },
    )
    sidecar = SidecarResolver(content_tree.config()).load(
        content_tree.root / "guides"
    ).value
    assert sidecar is not None
    assert sidecar.title == "Guides"
    assert sidecar.order == 3
    assert sidecar.page_order("intro.mdx", "intro") == 1
    assert sidecar.page_order("setup.mdx", "setup") == 2, (
        "lookups should fall back to the extension-less key"
    )
    assert sidecar.page_order("missing.mdx", "missing") is None
    assert sidecar.folder_order("advanced") == 1
    assert sidecar.section_order("guides") == 9


def test_page_names_keep_non_numeric_entries(content_tree: ContentTree) -> None:
    content_tree.sidecar("", {"pages": {"intro": 1, "pwa-plus": "first"}})
    outcome = SidecarResolver(content_tree.config()).load(content_tree.root)
    sidecar = outcome.value
    assert sidecar is not None
    assert dict(sidecar.pages) == {"intro": 1}
    assert sidecar.page_names == frozenset({"intro", "pwa-plus"})
    assert outcome.report.kinds() == [WarningKind.METADATA_PARSE_ERROR]


def test_section_order_ignores_pages(content_tree: ContentTree) -> None:
    content_tree.sidecar("", {"pages": {"guides": 2}, "sections": {"intro": 1}})
    sidecar = SidecarResolver(content_tree.config()).load(content_tree.root).value
    assert sidecar is not None
    assert sidecar.section_order("guides") is None
    assert sidecar.section_order("intro") == 1
    assert sidecar.section_order("other") is None


def test_invalid_json_is_treated_as_absent(content_tree: ContentTree) -> None:
    """Syntax errors resolve to None and record a parse warning."""
    path = content_tree.raw("meta.json", "{ not json")
    outcome = SidecarResolver(content_tree.config()).load(content_tree.root)
    assert outcome.value is None
    assert outcome.report.kinds() == [WarningKind.METADATA_PARSE_ERROR]
    assert outcome.report.warnings[0].path == path


def test_non_object_payload_is_treated_as_absent(content_tree: ContentTree) -> None:
    content_tree.raw("meta.json", "[1, 2, 3]")
    outcome = SidecarResolver(content_tree.config()).load(content_tree.root)
    assert outcome.value is None
    assert outcome.report.kinds() == [WarningKind.METADATA_PARSE_ERROR]


def test_ill_typed_fields_are_dropped_individually(content_tree: ContentTree) -> None:
    """A bad field should not discard the rest of the sidecar."""
    content_tree.sidecar(
        "",
        {
            "title": 42,
            "order": "soon",
            "pages": "intro",
            "folders": {"a": 1, "b": "later"},
        },
    )
    outcome = SidecarResolver(content_tree.config()).load(content_tree.root)
    sidecar = outcome.value
    assert sidecar is not None
    assert sidecar.title is None
    assert sidecar.order is None
    assert dict(sidecar.pages) == {}
    assert sidecar.page_names == frozenset()
    assert dict(sidecar.folders) == {"a": 1}
    assert outcome.report.kinds() == [WarningKind.METADATA_PARSE_ERROR] * 3


def test_resolver_memoises_until_invalidated(content_tree: ContentTree) -> None:
    content_tree.sidecar("", {"order": 1})
    resolver = SidecarResolver(content_tree.config())
    first = resolver.load(content_tree.root).value
    content_tree.sidecar("", {"order": 2})
    assert resolver.load(content_tree.root).value is first, (
        "a resolver should not re-read disk within one build"
    )
    resolver.invalidate()
    refreshed = resolver.load(content_tree.root).value
    assert refreshed is not None
    assert refreshed.order == 2


def test_resolve_merges_warnings_once(content_tree: ContentTree) -> None:
    content_tree.raw("meta.json", "{")
    resolver = SidecarResolver(content_tree.config())
    report = BuildReport()
    assert resolver.resolve(content_tree.root, report) is None
    assert resolver.resolve(content_tree.root, report) is None
    assert len(report.warnings) == 1, "repeat lookups should not duplicate warnings"
