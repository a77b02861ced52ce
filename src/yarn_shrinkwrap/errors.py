"""Exception hierarchy for shrinkwrap generation.

Every failure is fatal: callers either get a complete lockfile or one of
these errors. Manifest read and JSON decoding failures are not wrapped and
surface as ``OSError`` / ``json.JSONDecodeError``.
"""

from __future__ import annotations

from pathlib import Path


class ShrinkwrapError(RuntimeError):
    """Base error for failures while generating a lockfile."""


class PackageNotFoundError(ShrinkwrapError):
    """Raised when an upward search reaches the filesystem root without a match."""

    def __init__(self, name: str, start: Path | str) -> None:
        super().__init__(f"Did not find '{name}' upwards of '{start}'")
        self.name = name
        self.start = Path(start)


class IdentityMismatchError(ShrinkwrapError):
    """Raised when an installed manifest does not carry the requested name."""

    def __init__(self, requested: str, found: str | None, requester: Path, installed: Path) -> None:
        super().__init__(
            f"Looking for '{requested}' from {requester}, but found '{found}' in {installed}"
        )
        self.requested = requested
        self.found = found
        self.requester = requester
        self.installed = installed


class DependencyCycleError(ShrinkwrapError):
    """Raised when a package is reached again through its own dependencies."""

    def __init__(self, chain: list[str]) -> None:
        super().__init__("Dependency cycle detected: " + " -> ".join(chain))
        self.chain = chain


class LockfileParseError(ShrinkwrapError):
    """Raised when a yarn.lock file cannot be parsed."""

    def __init__(self, message: str, line: int | None = None) -> None:
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)
        self.line = line


class ConfigError(ShrinkwrapError):
    """Raised when shrinkwrap options are missing or invalid."""


class SchemaValidationError(ShrinkwrapError):
    """Raised when a generated lockfile does not match the lockfile schema."""


class ManifestError(ShrinkwrapError):
    """Raised when a package.json does not have the expected shape."""

    def __init__(self, path: Path, problem: str) -> None:
        super().__init__(f"Invalid manifest {path}: {problem}")
        self.path = Path(path)
