"""Hoist lockfile dependencies in place.

npm resolves a package by looking in the requiring node's ``dependencies``
and then in each enclosing scope up to the root, the lockfile equivalent of
walking up ``node_modules`` directories. Hoisting rewrites the tree so that
fewer copies are nested, without changing what any node resolves to:

1. A nested package is removed when the enclosing scopes already resolve its
   name to the same artifact (version, integrity and resolved URL).
2. A nested package moves one scope up when that scope has no package of the
   same name, nothing else in that scope would start resolving to it instead
   of a different artifact further up, and every requirement of its own
   subtree that is satisfied outside the subtree still resolves to the same
   artifact from the new position.

Passes repeat until nothing changes. Only exact artifact identity is
compared; no version ranges are evaluated.
"""

from __future__ import annotations

import logging
from typing import TypeAlias

from .models import LockEntry

logger = logging.getLogger(__name__)

Scope: TypeAlias = dict[str, LockEntry]


def hoist_dependencies(dependencies: Scope) -> None:
    """Hoist the top-level ``dependencies`` mapping of a lockfile in place."""
    passes = 0
    while _hoist_pass(dependencies):
        passes += 1
    _drop_empty(dependencies)
    logger.debug("Hoisting settled after %d changing pass(es)", passes)


def resolve(name: str, chain: list[Scope]) -> LockEntry | None:
    """Return what ``name`` resolves to from the innermost scope of ``chain``."""
    for scope in reversed(chain):
        entry = scope.get(name)
        if entry is not None:
            return entry
    return None


def _frames(dependencies: Scope) -> list[tuple[list[Scope], LockEntry | None]]:
    """List every scope with its chain from the root, parents before children."""
    frames: list[tuple[list[Scope], LockEntry | None]] = []
    stack: list[tuple[list[Scope], LockEntry | None]] = [([dependencies], None)]
    while stack:
        chain, owner = stack.pop()
        frames.append((chain, owner))
        for entry in chain[-1].values():
            if entry.dependencies:
                stack.append((chain + [entry.dependencies], entry))
    return frames


def _hoist_pass(dependencies: Scope) -> bool:
    changed = False
    # Children first, so a package can climb through several scopes per pass.
    for chain, owner in reversed(_frames(dependencies)):
        scope = chain[-1]
        for parent in list(scope.values()):
            nested = parent.dependencies
            if not nested:
                continue
            for name, entry in list(nested.items()):
                if _dedupe(name, entry, chain, nested):
                    changed = True
                elif _promote(name, entry, chain, owner, parent):
                    changed = True
    return changed


def _dedupe(name: str, entry: LockEntry, chain: list[Scope], nested: Scope) -> bool:
    above = resolve(name, chain)
    if above is None or not above.same_package(entry):
        return False
    del nested[name]
    return True


def _promote(
    name: str,
    entry: LockEntry,
    chain: list[Scope],
    owner: LockEntry | None,
    parent: LockEntry,
) -> bool:
    scope = chain[-1]
    nested = parent.dependencies
    if nested is None or name in scope:
        return False
    if _shadows_inherited(name, entry, chain, owner, parent):
        return False
    if _breaks_escaping(name, entry, chain, nested):
        return False

    del nested[name]
    scope[name] = entry
    return True


def _shadows_inherited(
    name: str,
    entry: LockEntry,
    chain: list[Scope],
    owner: LockEntry | None,
    parent: LockEntry,
) -> bool:
    """True if placing ``entry`` in ``chain[-1]`` changes what another node sees."""
    inherited = resolve(name, chain[:-1])
    if inherited is None or inherited.same_package(entry):
        return False
    if owner is not None and owner.requires and name in owner.requires:
        return True

    stack = [node for node in chain[-1].values() if node is not parent]
    while stack:
        node = stack.pop()
        if node.dependencies and name in node.dependencies:
            continue
        if node.requires and name in node.requires:
            return True
        if node.dependencies:
            stack.extend(node.dependencies.values())
    return False


def _breaks_escaping(name: str, entry: LockEntry, chain: list[Scope], nested: Scope) -> bool:
    """True if moving ``entry`` out of ``nested`` changes its subtree's outside lookups."""
    for required in _escaping_requirements(entry):
        if required == name:
            continue
        before = resolve(required, chain + [nested])
        if before is None:
            continue
        after = resolve(required, chain)
        if after is None or not (after is before or after.same_package(before)):
            return True
    return False


def _escaping_requirements(entry: LockEntry) -> set[str]:
    """Names required inside ``entry``'s subtree but not provided by it."""
    escaping: set[str] = set()
    stack: list[tuple[LockEntry, frozenset[str]]] = [(entry, frozenset())]
    while stack:
        node, visible = stack.pop()
        local = visible | frozenset(node.dependencies or ())
        for required in node.requires or ():
            if required not in local:
                escaping.add(required)
        for child in (node.dependencies or {}).values():
            stack.append((child, local))
    return escaping


def _drop_empty(dependencies: Scope) -> None:
    stack = list(dependencies.values())
    while stack:
        node = stack.pop()
        if not node.dependencies:
            node.dependencies = None
            continue
        stack.extend(node.dependencies.values())
