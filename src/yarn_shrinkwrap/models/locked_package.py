"""Yarn lock index model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True)
class LockedPackage:
    """A package as resolved by yarn for one or more ``name@range`` keys."""

    version: str
    integrity: str | None = None
    resolved: str | None = None


LockIndex: TypeAlias = dict[str, LockedPackage]


def lock_key(name: str, version_range: str) -> str:
    return f"{name}@{version_range}"
