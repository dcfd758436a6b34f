"""Load and validate navigation configuration YAML for docs_nav builds.

This subpackage parses the project's ``navigation.yaml`` file, applies
defaults, and produces a :class:`NavigationConfig` that the loader, tree
builder, and flattener consume. The primary entry point is
:func:`load_navigation_config`.

Examples
--------
>>> from pathlib import Path
>>> from docs_nav.config import load_navigation_config
>>> config = load_navigation_config(Path("config/navigation.yaml"))  # doctest: +SKIP
>>> config.content_root  # doctest: +SKIP
PosixPath('config/../src/content')
"""

from .loader import (
    DEFAULT_CONFIG,
    build_navigation_config,
    load_navigation_config,
    resolve_navigation_config,
)
from .models import NavigationConfig, NavigationConfigError

__all__ = [
    "DEFAULT_CONFIG",
    "NavigationConfig",
    "NavigationConfigError",
    "build_navigation_config",
    "load_navigation_config",
    "resolve_navigation_config",
]
