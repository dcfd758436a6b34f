"""Unit tests for the content unit loader.

These tests build small content trees under ``tmp_path`` and check slug
derivation, metadata extraction, order precedence, and the loader's tolerance
for missing directories, malformed documents, and colliding slugs.
"""

from __future__ import annotations

import typing as typ

import pytest

from docs_nav.config import NavigationConfig
from docs_nav.content import ContentLoader, list_directory
from docs_nav.errors import SourceUnavailable
from docs_nav.report import WarningKind

if typ.TYPE_CHECKING:
    from pathlib import Path

    from conftest import ContentTree


def _by_slug(tree: ContentTree) -> dict[str, typ.Any]:
    outcome = ContentLoader(tree.config()).load()
    return {unit.slug: unit for unit in outcome.value}


def test_index_files_collapse_onto_parent(content_tree: ContentTree) -> None:
    """``foo/index.mdx`` should produce slug ``foo``, not ``foo/index``."""
    content_tree.page("foo/index.mdx", title="Foo")
    content_tree.page("foo/bar/index.mdx")
    content_tree.page("index.mdx", title="Home")
    units = _by_slug(content_tree)
    assert sorted(units) == ["foo", "foo/bar", "index"], (
        f"unexpected slugs {sorted(units)!r}"
    )


def test_title_falls_back_to_file_or_directory_name(
    content_tree: ContentTree,
) -> None:
    content_tree.page("guides/getting-started.mdx", order=1)
    content_tree.page("guides/index.mdx", order=2)
    units = _by_slug(content_tree)
    assert units["guides/getting-started"].title == "getting-started"
    assert units["guides"].title == "guides", (
        "index files without a title should use their directory name"
    )


def test_display_metadata_is_passed_through(content_tree: ContentTree) -> None:
    content_tree.page(
        "cli.mdx",
        title="CLI",
        navTag="New",
        navLabel="beta",
        navIcon="terminal",
        navTagVariant="brand",
        keywords=["shell", "commands"],
        summary="Command reference.",
        github="https://github.com/example/cli",
        updatedAt="2024-02-02",
        image="/images/cli.png",
        body="# CLI\n",
    )
    unit = _by_slug(content_tree)["cli"]
    assert unit.nav_tag == "New"
    assert unit.nav_label == "beta"
    assert unit.nav_icon == "terminal"
    assert unit.nav_tag_variant == "brand"
    assert unit.keywords == ["shell", "commands"]
    assert unit.summary == "Command reference."
    assert unit.github == "https://github.com/example/cli"
    assert unit.updated_at == "2024-02-02"
    assert unit.image == "/images/cli.png"
    assert unit.body == "# CLI\n"
    assert unit.metadata["title"] == "CLI"


def test_tag_aliases_feed_nav_tag_and_label(content_tree: ContentTree) -> None:
    """``tag``/``tagLabel`` should be accepted as spellings of the nav fields."""
    content_tree.page("alias.mdx", title="Alias", tag="Beta", tagLabel="soon")
    unit = _by_slug(content_tree)["alias"]
    assert (unit.nav_tag, unit.nav_label) == ("Beta", "soon")


def test_front_matter_order_beats_sidecar_order(content_tree: ContentTree) -> None:
    content_tree.sidecar("", {"pages": {"a": 5, "b.mdx": 7, "c": "x"}})
    content_tree.page("a.mdx", title="A", order=1)
    content_tree.page("b.mdx", title="B")
    content_tree.page("c.mdx", title="C")
    content_tree.page("d.mdx", title="D", order="3")
    units = _by_slug(content_tree)
    assert units["a"].explicit_order == 1, "front matter order should win"
    assert units["b"].explicit_order == 7, "sidecar filename key should apply"
    assert units["c"].explicit_order is None, "non-numeric sidecar entries are ignored"
    assert units["d"].explicit_order == 3, "numeric strings should be coerced"


def test_only_recognised_extensions_are_loaded(content_tree: ContentTree) -> None:
    content_tree.page("keep.mdx", title="Keep")
    content_tree.page("notes.md", title="Notes")
    content_tree.raw("image.png", "binary-ish")
    content_tree.sidecar("", {"pages": {}})
    units = _by_slug(content_tree)
    assert list(units) == ["keep"]


def test_configured_extensions_are_respected(content_tree: ContentTree) -> None:
    content_tree.page("keep.mdx", title="Keep")
    content_tree.page("notes.md", title="Notes")
    config = NavigationConfig(
        content_root=content_tree.root, content_extensions=(".mdx", ".md")
    )
    slugs = sorted(unit.slug for unit in ContentLoader(config).load().value)
    assert slugs == ["keep", "notes"]


def test_missing_root_yields_empty_result(tmp_path: Path) -> None:
    """A missing content root is reported, not raised."""
    outcome = ContentLoader(NavigationConfig(content_root=tmp_path / "nope")).load()
    assert outcome.value == []
    assert outcome.report.kinds() == [WarningKind.SOURCE_UNAVAILABLE]


def test_malformed_file_is_skipped_with_warning(content_tree: ContentTree) -> None:
    content_tree.page("good.mdx", title="Good")
    broken = content_tree.raw("broken.mdx", "---\ntitle: [oops\n---\nBody\n")
    outcome = ContentLoader(content_tree.config()).load()
    assert [unit.slug for unit in outcome.value] == ["good"]
    assert outcome.report.kinds() == [WarningKind.METADATA_PARSE_ERROR]
    assert outcome.report.warnings[0].path == broken


def test_impossible_date_skips_only_that_file(content_tree: ContentTree) -> None:
    content_tree.page("good.mdx", title="Good")
    bad = content_tree.raw("bad.mdx", "---\ntitle: Bad\nupdatedAt: 2024-02-30\n---\n")
    outcome = ContentLoader(content_tree.config()).load()
    assert [unit.slug for unit in outcome.value] == ["good"]
    assert outcome.report.kinds() == [WarningKind.METADATA_PARSE_ERROR]
    assert outcome.report.warnings[0].path == bad


def test_undecodable_file_is_skipped(content_tree: ContentTree) -> None:
    content_tree.page("good.mdx", title="Good")
    (content_tree.root / "binary.mdx").write_bytes(b"\xff\xfe\x00bad")
    outcome = ContentLoader(content_tree.config()).load()
    assert [unit.slug for unit in outcome.value] == ["good"]
    assert outcome.report.kinds() == [WarningKind.METADATA_PARSE_ERROR]


def test_duplicate_slug_keeps_first_in_traversal_order(
    content_tree: ContentTree,
) -> None:
    """``foo/index.mdx`` is visited before ``foo.mdx`` and therefore wins."""
    content_tree.page("foo/index.mdx", title="From directory")
    dropped = content_tree.page("foo.mdx", title="From file")
    outcome = ContentLoader(content_tree.config()).load()
    assert [unit.title for unit in outcome.value] == ["From directory"]
    assert outcome.report.kinds() == [WarningKind.DUPLICATE_SLUG]
    assert outcome.report.warnings[0].path == dropped


def test_load_is_deterministic(docs_site: ContentTree) -> None:
    first = [unit.slug for unit in ContentLoader(docs_site.config()).load().value]
    second = [unit.slug for unit in ContentLoader(docs_site.config()).load().value]
    assert first == second


def test_unit_path_helpers(docs_site: ContentTree) -> None:
    unit = _by_slug(docs_site)["guides/basics/alpha"]
    assert unit.section == "guides"
    assert unit.name == "alpha"
    assert unit.depth == 3
    assert not unit.is_top_level
    assert unit.source_name == "alpha.mdx"


def test_to_dict_omits_absent_fields(docs_site: ContentTree) -> None:
    unit = _by_slug(docs_site)["changelog"]
    assert unit.to_dict() == {
        "slug": "changelog",
        "title": "Changelog",
        "order": 4,
        "updatedAt": "2024-03-01",
    }


def test_list_directory_sorts_entries_by_name(content_tree: ContentTree) -> None:
    content_tree.page("guides.mdx")
    content_tree.page("guides/setup.mdx")
    content_tree.page("about.mdx")
    names = [entry.name for entry in list_directory(content_tree.root)]
    assert names == ["about.mdx", "guides", "guides.mdx"]


def test_list_directory_raises_for_missing_directory(tmp_path: Path) -> None:
    missing = tmp_path / "absent"
    with pytest.raises(SourceUnavailable) as excinfo:
        list_directory(missing)
    assert excinfo.value.path == missing
