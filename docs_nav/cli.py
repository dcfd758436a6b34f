"""Cyclopts CLI entrypoint for inspecting documentation navigation.

The ``docs-nav`` console script defined here builds the navigation index for a
content directory and prints one structural view as JSON: the sidebar tree,
the flattened sidebar sequence, the previous/next pair for a page, the section
listing, or the command-palette records. Warnings about skipped files and
malformed sidecars are logged to stderr and repeated in the ``warnings`` array
of the output.

Examples
--------
Print the navigation tree using ``config/navigation.yaml``:

>>> from docs_nav.cli import main
>>> main()  # doctest: +SKIP

Find the neighbours of a page in another content root:

>>> from docs_nav.cli import app
>>> app(["adjacent", "guides/setup", "--content-root", "docs"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
import msgspec.json as msgspec_json
from cyclopts import App, Parameter

from .config import resolve_navigation_config
from .index import NavigationIndex
from .ordering import SortMode

app = App(name="docs-nav", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path | None,
    Parameter(help="Path to navigation config", env_var="INPUT_CONFIG"),
]
ContentRootOption = typ.Annotated[
    Path | None,
    Parameter(help="Override the content root", env_var="INPUT_CONTENT_ROOT"),
]
VerboseOption = typ.Annotated[bool, Parameter(help="Log debug output to stderr")]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _build_index(
    config: Path | None, content_root: Path | None, verbose: bool
) -> NavigationIndex:
    """Configure logging and construct an index for one command invocation."""
    _configure_logging(verbose)
    navigation_config = resolve_navigation_config(
        config_path=config, content_root=content_root
    )
    return NavigationIndex(navigation_config)


def _emit(index: NavigationIndex, result: object) -> None:
    """Print ``result`` and the index's warnings as a JSON document."""
    payload = {
        "result": result,
        "warnings": [warning.to_dict() for warning in index.last_report.warnings],
    }
    print(msgspec_json.encode(payload).decode("utf-8"))


@app.command(help="Print the sorted navigation tree.")
def tree(
    *,
    config: ConfigOption = None,
    content_root: ContentRootOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print the navigation tree as nested JSON nodes.

    Parameters
    ----------
    config : Path or None, optional
        Navigation config file; defaults to ``config/navigation.yaml`` when it
        exists (overridable via ``INPUT_CONFIG``).
    content_root : Path or None, optional
        Content directory overriding the configured one.
    verbose : bool, optional
        Emit debug logging on stderr.
    """
    index = _build_index(config, content_root, verbose)
    nodes = index.build_tree()
    _emit(index, [node.to_dict() for node in nodes])


@app.command(help="Print every page in sidebar order.")
def flatten(
    *,
    config: ConfigOption = None,
    content_root: ContentRootOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print the flattened sidebar sequence."""
    index = _build_index(config, content_root, verbose)
    units = index.flatten()
    _emit(index, [unit.to_dict() for unit in units])


@app.command(help="Print the previous and next pages around SLUG.")
def adjacent(
    slug: typ.Annotated[str, Parameter(help="Slug of the current page")],
    *,
    config: ConfigOption = None,
    content_root: ContentRootOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print ``{"previous": ..., "next": ...}`` for ``slug``.

    Unknown slugs print both neighbours as ``null`` and add a ``not-found``
    warning rather than failing.
    """
    index = _build_index(config, content_root, verbose)
    pair = index.adjacent(slug)
    _emit(index, pair.to_dict())


@app.command(help="Print pages grouped by top-level section.")
def sections(
    *,
    sort: typ.Annotated[
        SortMode | None,
        Parameter(
            help="Ordering inside each section (order, alphabetical, date, section)"
        ),
    ] = None,
    config: ConfigOption = None,
    content_root: ContentRootOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print the section listing, ordered by the root sidecar then by name."""
    index = _build_index(config, content_root, verbose)
    groups = index.sections(sort)
    _emit(index, [group.to_dict() for group in groups])


@app.command(help="Print command-palette records in sidebar order.")
def palette(
    *,
    config: ConfigOption = None,
    content_root: ContentRootOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print the records used to populate the command palette."""
    index = _build_index(config, content_root, verbose)
    _emit(index, index.palette_entries())


def main() -> None:
    """Invoke the Cyclopts application that powers the ``docs-nav`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
