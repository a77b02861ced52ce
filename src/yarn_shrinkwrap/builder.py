"""Build the nested npm lockfile tree from yarn.lock and node_modules.

Two sources are cross-checked for every dependency: the installed package
directory (found the way Node would find it) and the yarn lock index. Packages
present in the index carry yarn's version, integrity and tarball URL; packages
missing from it are workspace links and take their version from their own
package.json.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .errors import DependencyCycleError, IdentityMismatchError
from .locator import MANIFEST_NAME, locate_package_dir
from .models import LockEntry, LockFile, LockIndex, Manifest, lock_key
from .parsers import package_json

logger = logging.getLogger(__name__)


@dataclass
class _Frame:
    """Dependencies of one package still waiting to be resolved."""

    pending: Iterator[tuple[str, str]]
    directory: Path
    result: dict[str, LockEntry] = field(default_factory=dict)
    owner: LockEntry | None = None
    ancestry: tuple[tuple[str, Path], ...] = ()


def build_lock_file(root_manifest: Manifest, lock_index: LockIndex, root_dir: Path) -> LockFile:
    """Return the lockfile for ``root_manifest`` installed under ``root_dir``."""
    return LockFile(
        name=root_manifest.name,
        version=root_manifest.version,
        dependencies=resolve_dependencies(root_manifest.dependencies, lock_index, root_dir),
    )


def resolve_dependencies(
    deps: Mapping[str, str],
    lock_index: LockIndex,
    directory: Path,
) -> dict[str, LockEntry]:
    """Resolve ``deps`` as seen from ``directory`` into lockfile entries.

    The walk is depth-first and keeps declaration order. Every occurrence of a
    package gets its own node. Any missing package, identity mismatch or
    cycle aborts the whole walk.
    """
    # Monorepo packages are usually symlinked; resolve from real paths.
    root = _Frame(pending=iter(deps.items()), directory=Path(directory).resolve())
    stack = [root]

    while stack:
        frame = stack[-1]
        item = next(frame.pending, None)
        if item is None:
            stack.pop()
            if frame.owner is not None and frame.result:
                frame.owner.dependencies = frame.result
            continue

        name, version_range = item
        dep_dir = locate_package_dir(name, frame.directory)
        manifest = package_json.load(dep_dir / MANIFEST_NAME)
        if manifest.name != name:
            raise IdentityMismatchError(name, manifest.name, frame.directory, dep_dir)

        real_dir = dep_dir.resolve()
        identity = (name, real_dir)
        if identity in frame.ancestry:
            start = frame.ancestry.index(identity)
            raise DependencyCycleError([n for n, _ in frame.ancestry[start:]] + [name])

        entry = _make_entry(name, version_range, manifest, lock_index, dep_dir)
        frame.result[name] = entry
        if manifest.dependencies:
            stack.append(
                _Frame(
                    pending=iter(manifest.dependencies.items()),
                    directory=real_dir,
                    owner=entry,
                    ancestry=frame.ancestry + (identity,),
                )
            )

    return root.result


def _make_entry(
    name: str,
    version_range: str,
    manifest: Manifest,
    lock_index: LockIndex,
    dep_dir: Path,
) -> LockEntry:
    requires = dict(manifest.dependencies) or None
    locked = lock_index.get(lock_key(name, version_range))
    if locked is not None:
        logger.debug("%s@%s -> %s (%s)", name, version_range, locked.version, dep_dir)
        return LockEntry(
            version=locked.version,
            integrity=locked.integrity,
            resolved=locked.resolved,
            requires=requires,
        )

    logger.debug(
        "%s@%s is not in yarn.lock; using workspace version %s from %s",
        name,
        version_range,
        manifest.version,
        dep_dir,
    )
    return LockEntry(version=manifest.version, requires=requires)
