"""Package manifest model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Manifest:
    """The fields of a package.json that take part in lockfile generation."""

    name: str | None
    version: str | None
    dependencies: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Manifest:
        deps = data.get("dependencies") or {}
        return cls(
            name=data.get("name"),
            version=data.get("version"),
            dependencies={str(name): str(selector) for name, selector in deps.items()},
        )
