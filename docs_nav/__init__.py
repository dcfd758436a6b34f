"""Derive documentation-site navigation from a directory of content files.

This package discovers ``.mdx`` content units and per-directory ``meta.json``
sidecars, then exposes the ordered views a documentation site needs: the
sidebar tree, the flattened sidebar sequence, previous/next links, section
listings, and command-palette records.

Exports
-------
- ``NavigationIndex``: engine facade used by presentation code.
- ``IndexCache``: explicit cache object for reuse within one render cycle.
- ``NavigationConfig`` and ``load_navigation_config``: configuration.
- ``app`` / ``main``: the ``docs-nav`` Cyclopts CLI.

Examples
--------
>>> from pathlib import Path
>>> from docs_nav import NavigationConfig, NavigationIndex
>>> index = NavigationIndex(NavigationConfig(content_root=Path("src/content")))
>>> [unit.slug for unit in index.flatten()]  # doctest: +SKIP
['introduction', 'guides', 'guides/setup']
"""

from __future__ import annotations

from .cli import app, main
from .config import NavigationConfig, load_navigation_config
from .index import IndexCache, NavigationIndex
from .ordering import SortMode

__all__ = [
    "IndexCache",
    "NavigationConfig",
    "NavigationIndex",
    "SortMode",
    "app",
    "load_navigation_config",
    "main",
]
