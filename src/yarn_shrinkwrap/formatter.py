"""Human-readable rendering of a lockfile tree."""

from __future__ import annotations

from .models import LockEntry, LockFile


def format_tree(entry: LockEntry | LockFile) -> str:
    """Return one ``a -> b -> c @ version`` line per package, depth first.

    The node passed in is the root and produces no line of its own.
    """
    lines: list[str] = []
    stack: list[tuple[list[str], LockEntry | LockFile]] = [([], entry)]
    while stack:
        names, node = stack.pop()
        if names:
            lines.append(f"{' -> '.join(names)} @ {node.version}")
        children = node.dependencies or {}
        for name, child in reversed(list(children.items())):
            stack.append((names + [name], child))

    return "\n".join(lines)
