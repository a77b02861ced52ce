"""yarn-shrinkwrap core package.

Converts a yarn.lock plus an installed node_modules tree into an npm v1
lockfile (npm-shrinkwrap.json).
"""

from .config import ShrinkwrapOptions
from .core import generate_shrinkwrap, render_lockfile, write_lockfile
from .formatter import format_tree

__all__ = [
    "ShrinkwrapOptions",
    "format_tree",
    "generate_shrinkwrap",
    "render_lockfile",
    "write_lockfile",
]
