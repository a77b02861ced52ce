"""Options for a shrinkwrap run.

Options come from keyword arguments, from a JSON document using the keys
``manifestPath``, ``outputPath`` and ``hoist``, or both (see the CLI). When
``hoist`` is not given explicitly, the ``YARN_SHRINKWRAP_HOIST`` environment
variable decides, and hoisting is on if that is unset.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .errors import ConfigError

HOIST_ENV_VAR = "YARN_SHRINKWRAP_HOIST"

_TRUTHY = {"1", "true", "yes", "y"}
_FALSY = {"0", "false", "no", "n"}


def default_hoist() -> bool:
    """Return the hoisting default, honouring ``YARN_SHRINKWRAP_HOIST``."""
    raw = os.environ.get(HOIST_ENV_VAR, "").strip().lower()
    if not raw:
        return True
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    raise ConfigError(f"Invalid {HOIST_ENV_VAR} value: '{raw}'")


@dataclass(slots=True, frozen=True)
class ShrinkwrapOptions:
    """Inputs of :func:`yarn_shrinkwrap.core.generate_shrinkwrap`."""

    manifest_path: Path
    output_path: Path | None = None
    hoist: bool = True

    @classmethod
    def create(
        cls,
        manifest_path: Path | str,
        output_path: Path | str | None = None,
        hoist: bool | None = None,
    ) -> ShrinkwrapOptions:
        return cls(
            manifest_path=Path(manifest_path),
            output_path=Path(output_path) if output_path is not None else None,
            hoist=default_hoist() if hoist is None else hoist,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ShrinkwrapOptions:
        """Create options from a dictionary, validating every field."""
        manifest_path = data.get("manifestPath")
        if not manifest_path or not isinstance(manifest_path, str):
            raise ConfigError("Missing required 'manifestPath' field")

        output_path = data.get("outputPath")
        if output_path is not None and (not isinstance(output_path, str) or not output_path):
            raise ConfigError("Invalid 'outputPath' field (must be a non-empty string)")

        hoist = data.get("hoist")
        if hoist is not None and not isinstance(hoist, bool):
            raise ConfigError("Invalid 'hoist' field (must be boolean)")

        unknown = sorted(set(data) - {"manifestPath", "outputPath", "hoist"})
        if unknown:
            raise ConfigError(f"Unknown option(s): {', '.join(unknown)}")

        return cls.create(manifest_path, output_path, hoist)


def load_options(path: Path | str) -> ShrinkwrapOptions:
    """Load options from a JSON file.

    Relative paths inside the file are taken relative to the file itself.

    Raises:
        ConfigError: If the file cannot be read or contains invalid data.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object")

    options = ShrinkwrapOptions.from_dict(data)
    base = config_path.parent
    return ShrinkwrapOptions(
        manifest_path=base / options.manifest_path,
        output_path=base / options.output_path if options.output_path is not None else None,
        hoist=options.hoist,
    )
