"""Shrinkwrap generation entrypoint.

Locate yarn.lock upwards from the package.json, parse it, walk node_modules
into an npm v1 lockfile tree, optionally hoist it and optionally write it.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .builder import build_lock_file
from .config import ShrinkwrapOptions
from .hoisting import hoist_dependencies
from .locator import locate_file_upward
from .models import LockFile
from .parsers import package_json, parse_lockfile

logger = logging.getLogger(__name__)

YARN_LOCK_NAME = "yarn.lock"


def generate_shrinkwrap(options: ShrinkwrapOptions) -> LockFile:
    """Build the lockfile for ``options.manifest_path``.

    Returns the lockfile; it is only written to disk when
    ``options.output_path`` is set. Nothing is written if any step fails.
    """
    manifest_path = Path(options.manifest_path)
    manifest_dir = manifest_path.parent

    yarn_lock = locate_file_upward(YARN_LOCK_NAME, manifest_dir)
    logger.info("Using %s", yarn_lock)
    lock_index = parse_lockfile(yarn_lock)
    manifest = package_json.load(manifest_path)

    lock = build_lock_file(manifest, lock_index, manifest_dir)
    logger.info(
        "Resolved %d direct dependencies of %s", len(lock.dependencies), manifest.name
    )

    if options.hoist:
        hoist_dependencies(lock.dependencies)

    if options.output_path is not None:
        write_lockfile(lock, options.output_path)

    return lock


def render_lockfile(lock: LockFile) -> str:
    """Serialize ``lock`` as 2-space indented JSON."""
    return json.dumps(lock.to_dict(), indent=2, ensure_ascii=False)


def write_lockfile(lock: LockFile, path: Path) -> None:
    Path(path).write_text(render_lockfile(lock), encoding="utf-8")
    logger.info("Wrote %s", path)
