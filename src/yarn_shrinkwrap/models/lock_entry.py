"""npm v1 lockfile tree model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

LOCKFILE_VERSION = 1


@dataclass
class LockEntry:
    """One node of the nested lockfile tree.

    ``requires`` and ``dependencies`` are ``None`` unless non-empty so that the
    serialized form leaves them out for leaf packages.
    """

    version: str | None
    integrity: str | None = None
    resolved: str | None = None
    requires: dict[str, str] | None = None
    dependencies: dict[str, LockEntry] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"version": self.version}
        if self.integrity is not None:
            data["integrity"] = self.integrity
        if self.resolved is not None:
            data["resolved"] = self.resolved
        if self.requires:
            data["requires"] = dict(self.requires)
        if self.dependencies:
            data["dependencies"] = {
                name: entry.to_dict() for name, entry in self.dependencies.items()
            }
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LockEntry:
        deps = data.get("dependencies") or {}
        return cls(
            version=data.get("version"),
            integrity=data.get("integrity"),
            resolved=data.get("resolved"),
            requires=dict(data["requires"]) if data.get("requires") else None,
            dependencies={name: cls.from_dict(sub) for name, sub in deps.items()} or None,
        )

    def same_package(self, other: LockEntry) -> bool:
        """Return True when both nodes describe the same resolved artifact."""
        return (
            self.version == other.version
            and self.integrity == other.integrity
            and self.resolved == other.resolved
        )


@dataclass
class LockFile:
    """Root of an npm v1 lockfile."""

    name: str | None
    version: str | None
    dependencies: dict[str, LockEntry]

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.name is not None:
            data["name"] = self.name
        if self.version is not None:
            data["version"] = self.version
        data["lockfileVersion"] = LOCKFILE_VERSION
        data["requires"] = True
        data["dependencies"] = {name: entry.to_dict() for name, entry in self.dependencies.items()}
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LockFile:
        deps = data.get("dependencies") or {}
        return cls(
            name=data.get("name"),
            version=data.get("version"),
            dependencies={name: LockEntry.from_dict(sub) for name, sub in deps.items()},
        )
