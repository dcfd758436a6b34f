"""Load navigation configuration YAML into typed dataclasses."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from docs_nav.metadata import optional_text

from .helpers import _normalize_extensions, _parse_sort_mode, _resolve_root
from .models import NavigationConfig

DEFAULT_CONFIG = Path("config/navigation.yaml")


def load_navigation_config(path: Path) -> NavigationConfig:
    """Load the YAML configuration describing the content source.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/navigation.yaml``).

    Returns
    -------
    NavigationConfig
        Parsed configuration. A relative ``content_root`` is resolved against
        the directory holding ``path``.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    NavigationConfigError
        If a field holds an invalid value (for example, an unknown sort mode).
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from docs_nav.config import load_navigation_config
    >>> config = load_navigation_config(Path("config/navigation.yaml"))  # doctest: +SKIP
    >>> config.sidecar_name  # doctest: +SKIP
    'meta.json'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    return build_navigation_config(raw, base_dir=path.parent)


def build_navigation_config(
    payload: typ.Mapping[str, typ.Any], *, base_dir: Path | None = None
) -> NavigationConfig:
    """Build a :class:`NavigationConfig` from a mapping, applying defaults."""
    base = NavigationConfig()
    content_root = _resolve_root(payload.get("content_root"), base_dir)
    extensions = _normalize_extensions(payload.get("content_extensions"))
    default_sort = _parse_sort_mode(payload, "default_sort")
    adjacency_sort = _parse_sort_mode(payload, "adjacency_sort")
    return NavigationConfig(
        content_root=content_root or base.content_root,
        content_extensions=extensions or base.content_extensions,
        sidecar_name=optional_text(payload.get("sidecar_name")) or base.sidecar_name,
        index_name=optional_text(payload.get("index_name")) or base.index_name,
        default_sort=default_sort or base.default_sort,
        adjacency_sort=adjacency_sort or base.adjacency_sort,
    )


def resolve_navigation_config(
    *, config_path: Path | None = None, content_root: Path | None = None
) -> NavigationConfig:
    """Return the effective configuration for a CLI or library invocation.

    An explicit ``config_path`` must exist. Without one, ``DEFAULT_CONFIG`` is
    used when present and built-in defaults otherwise. ``content_root``
    overrides whatever the file says.
    """
    if config_path is not None:
        config = load_navigation_config(config_path)
    elif DEFAULT_CONFIG.exists():
        config = load_navigation_config(DEFAULT_CONFIG)
    else:
        config = NavigationConfig()
    if content_root is not None:
        config = dc.replace(config, content_root=content_root)
    return config


__all__ = [
    "DEFAULT_CONFIG",
    "build_navigation_config",
    "load_navigation_config",
    "resolve_navigation_config",
]
