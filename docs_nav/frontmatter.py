r"""Split content files into a YAML front-matter mapping and a body.

Content files open with a ``---`` delimited YAML block carrying navigation
metadata (``title``, ``order``, ``navTag`` and friends) followed by the prose
body, which this package treats as opaque.

Example
-------
>>> from docs_nav.frontmatter import parse_front_matter
>>> parsed = parse_front_matter("---\ntitle: Setup\norder: 2\n---\nBody text\n")
>>> parsed.metadata["title"], parsed.metadata["order"]
('Setup', 2)
>>> parsed.body
'Body text\n'
"""

from __future__ import annotations

import dataclasses as dc
import io
import re
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import MetadataParseError

if typ.TYPE_CHECKING:
    from pathlib import Path

FRONT_MATTER_PATTERN = re.compile(
    r"\A\ufeff?---[ \t]*\r?\n(.*?)(?:\r?\n)?^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


@dc.dataclass(slots=True)
class FrontMatter:
    """Parsed metadata block and the remaining document body.

    Attributes
    ----------
    metadata : dict[str, Any]
        Mapping decoded from the YAML header; empty when the file has none.
    body : str
        Everything after the closing delimiter.
    """

    metadata: dict[str, typ.Any]
    body: str


def _load_yaml(block: str) -> object:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    return loader.load(io.StringIO(block))


def parse_front_matter(text: str, *, source: Path | None = None) -> FrontMatter:
    """Return the front-matter mapping and body of ``text``.

    Parameters
    ----------
    text : str
        Full content of a content file.
    source : Path, optional
        File the text came from; attached to raised errors for reporting.

    Returns
    -------
    FrontMatter
        Metadata and body. Files without an opening ``---`` line, or without
        a closing delimiter, have empty metadata and the whole text as body.

    Raises
    ------
    MetadataParseError
        If the header is not valid YAML, holds a value the YAML constructor
        rejects (such as the date ``2024-02-30``), or does not decode to a
        mapping.
    """
    match = FRONT_MATTER_PATTERN.match(text)
    if not match:
        return FrontMatter(metadata={}, body=text)

    body = text[match.end() :]
    try:
        loaded = _load_yaml(match.group(1))
    except (YAMLError, ValueError) as exc:
        msg = f"Invalid front matter: {exc}"
        raise MetadataParseError(msg, path=source) from exc
    if loaded is None:
        return FrontMatter(metadata={}, body=body)
    if not isinstance(loaded, dict):
        msg = f"Front matter must be a mapping, got {type(loaded).__name__}."
        raise MetadataParseError(msg, path=source)
    metadata = {str(key): value for key, value in loaded.items()}
    return FrontMatter(metadata=metadata, body=body)


__all__ = ["FRONT_MATTER_PATTERN", "FrontMatter", "parse_front_matter"]
