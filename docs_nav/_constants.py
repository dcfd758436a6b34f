"""Common literal values used across docs_nav.

These constants keep filenames and path conventions centralized so the loader,
tree builder, flattener, and tests can import the same values without drifting.
Intended for internal use within the docs_nav package.

Examples
--------
>>> from docs_nav import _constants
>>> _constants.SIDECAR_NAME
'meta.json'
>>> _constants.SEGMENT_SEPARATOR.join(["guides", "setup"])
'guides/setup'
"""

SIDECAR_NAME = "meta.json"
INDEX_NAME = "index"
CONTENT_EXTENSIONS = (".mdx",)
DEFAULT_CONTENT_ROOT = "src/content"
SEGMENT_SEPARATOR = "/"
UNLABELED_FOLDER = ""
