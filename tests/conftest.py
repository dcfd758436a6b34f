"""Shared fixtures for building throwaway content trees.

Tests describe a content source declaratively through :class:`ContentTree`,
which writes ``.mdx`` files with JSON-flavoured YAML front matter and
``meta.json`` sidecars beneath a per-test temporary directory.
"""

from __future__ import annotations

import json
import typing as typ
from pathlib import Path

import pytest

from docs_nav.config import NavigationConfig


class ContentTree:
    """Write content files and sidecars under ``root``."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def page(
        self, relative: str, *, body: str = "Body.\n", **front: typ.Any
    ) -> Path:
        """Write a content file whose front matter holds ``front``."""
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if front:
            header = "".join(
                f"{key}: {json.dumps(value)}\n" for key, value in front.items()
            )
            text = f"---\n{header}---\n{body}"
        else:
            text = body
        path.write_text(text, encoding="utf-8")
        return path

    def raw(self, relative: str, text: str) -> Path:
        """Write ``text`` verbatim, for malformed fixtures."""
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    def sidecar(self, relative_dir: str, payload: typ.Mapping[str, typ.Any]) -> Path:
        """Write ``payload`` as the ``meta.json`` of ``relative_dir``."""
        return self.raw(f"{relative_dir}/meta.json".lstrip("/"), json.dumps(payload))

    def config(self) -> NavigationConfig:
        return NavigationConfig(content_root=self.root)


@pytest.fixture
def content_tree(tmp_path: Path) -> ContentTree:
    """Return an empty content tree rooted at ``tmp_path / 'content'``."""
    return ContentTree(tmp_path / "content")


@pytest.fixture
def docs_site(content_tree: ContentTree) -> ContentTree:
    """Populate a representative site with loose pages, sections, and folders.

    The expected sidebar order is::

        introduction, changelog, faq,
        pwa-plus, pwa-plus/billing, pwa-plus/setup,
        guides, guides/deploy, guides/writing,
        guides/advanced/tuning, guides/basics/zeta, guides/basics/alpha
    """
    tree = content_tree
    tree.sidecar(
        "",
        {"pages": {"introduction": 1, "pwa-plus": 2, "guides": 3, "changelog.mdx": 4}},
    )
    tree.page("introduction.mdx", title="Introduction")
    tree.page("changelog.mdx", title="Changelog", updatedAt="2024-03-01")
    tree.page("faq.mdx", title="FAQ", keywords="questions, help")
    tree.page("pwa-plus.mdx", title="PWA Plus", summary="Progressive web apps.")
    tree.page("pwa-plus/setup.mdx", title="Setup")
    tree.page("pwa-plus/billing.mdx", title="Billing", tag="New", tagLabel="beta")
    tree.sidecar(
        "guides",
        {
            "title": "All Guides",
            "pages": {"index": 1, "deploy": 2},
            "folders": {"advanced": 1, "basics": 2},
        },
    )
    tree.page("guides/index.mdx", title="Guides")
    tree.page("guides/deploy.mdx", title="Deploy")
    tree.page("guides/writing.mdx", title="Writing")
    tree.sidecar("guides/basics", {"pages": {"zeta": 1}})
    tree.page("guides/basics/alpha.mdx", title="Alpha")
    tree.page("guides/basics/zeta.mdx", title="Zeta")
    tree.page("guides/advanced/tuning.mdx", title="Tuning")
    tree.raw("guides/advanced/diagram.png", "not content")
    return tree


DOCS_SITE_ORDER = [
    "introduction",
    "changelog",
    "faq",
    "pwa-plus",
    "pwa-plus/billing",
    "pwa-plus/setup",
    "guides",
    "guides/deploy",
    "guides/writing",
    "guides/advanced/tuning",
    "guides/basics/zeta",
    "guides/basics/alpha",
]


@pytest.fixture
def docs_site_order() -> list[str]:
    """Return the slugs of ``docs_site`` in expected sidebar order."""
    return list(DOCS_SITE_ORDER)
