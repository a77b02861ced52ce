"""Structural checks on a finished lockfile tree."""

from __future__ import annotations

from .hoisting import resolve
from .models import LockEntry, LockFile


def find_unresolved_requirements(lock: LockFile) -> list[str]:
    """Return a message for every ``requires`` name no enclosing scope provides.

    Only presence is checked. Version ranges are not evaluated.
    """
    problems: list[str] = []
    stack: list[tuple[list[str], LockEntry, list[dict[str, LockEntry]]]] = [
        ([name], entry, [lock.dependencies]) for name, entry in reversed(lock.dependencies.items())
    ]
    while stack:
        path, node, chain = stack.pop()
        scopes = chain + [node.dependencies] if node.dependencies else chain
        for required in node.requires or {}:
            if resolve(required, scopes) is None:
                problems.append(f"{' -> '.join(path)} requires '{required}', which is not in the tree")
        for name, child in reversed(list((node.dependencies or {}).items())):
            stack.append((path + [name], child, scopes))

    return problems
