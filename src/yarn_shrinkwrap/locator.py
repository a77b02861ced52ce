"""Upward filesystem searches for installed packages and lockfiles.

Node resolves ``require("x")`` by looking for ``node_modules/x`` in the
requiring directory and then in every ancestor. The lookups here follow the
same walk. ``require.resolve`` itself is not a usable stand-in: it fails for
packages that do not export ``package.json`` and for names that collide with
Node built-ins.
"""

from __future__ import annotations

import errno
import os
from pathlib import Path

from .errors import PackageNotFoundError

MANIFEST_NAME = "package.json"

_ABSENT = {errno.ENOENT, errno.ENOTDIR}


def file_exists(path: Path) -> bool:
    """Return True if ``path`` exists; errors other than absence propagate."""
    try:
        path.stat()
    except OSError as exc:
        if exc.errno in _ABSENT:
            return False
        raise
    return True


def locate_package_dir(name: str, start_dir: Path) -> Path:
    """Find ``<dir>/node_modules/<name>`` from ``start_dir`` upwards.

    Scoped names (``@scope/name``) join as two path segments.
    """
    prev: Path | None = None
    directory = Path(os.path.abspath(start_dir))
    while directory != prev:
        candidate = directory / "node_modules" / name
        if file_exists(candidate / MANIFEST_NAME):
            return candidate
        prev = directory
        directory = directory.parent  # Path("/").parent == Path("/")

    raise PackageNotFoundError(name, start_dir)


def locate_file_upward(file_name: str, start_dir: Path) -> Path:
    """Return the nearest ``<dir>/<file_name>`` at or above ``start_dir``."""
    start = Path(os.path.abspath(start_dir))
    directory = start
    while not file_exists(directory / file_name):
        parent = directory.parent
        if parent == directory:
            raise PackageNotFoundError(file_name, start)
        directory = parent

    return directory / file_name
