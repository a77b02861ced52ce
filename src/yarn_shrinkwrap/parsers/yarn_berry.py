"""Parse Yarn Berry (v2+) yarn.lock files into a lock index."""

from __future__ import annotations

import yaml

from ..errors import LockfileParseError
from ..models import LockedPackage, LockIndex

# Descriptors with these protocols point at local sources, never the registry.
LOCAL_PROTOCOLS = {"workspace", "link", "portal", "file"}


def parse_text(text: str) -> LockIndex:
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise LockfileParseError(f"Invalid Berry lockfile: {exc}") from exc
    if not isinstance(data, dict):
        raise LockfileParseError("Berry lockfile must be a mapping")

    index: LockIndex = {}
    for header, meta in data.items():
        if header == "__metadata" or not isinstance(meta, dict):
            continue
        version = meta.get("version")
        if version is None:
            raise LockfileParseError(f"Entry '{header}' has no version")
        resolution = meta.get("resolution")
        package = LockedPackage(
            version=str(version),
            resolved=str(resolution) if resolution is not None else None,
        )

        for descriptor in str(header).split(","):
            descriptor = descriptor.strip()
            if not descriptor:
                continue
            name, selector = _split_descriptor(descriptor)
            protocol = selector.split(":", 1)[0] if ":" in selector else None
            if protocol in LOCAL_PROTOCOLS:
                continue
            index[f"{name}@{selector}"] = package
            if protocol == "npm":
                # package.json ranges carry no protocol; yarn adds "npm:" itself.
                index[f"{name}@{selector[4:]}"] = package

    return index


def _split_descriptor(descriptor: str) -> tuple[str, str]:
    # Keys look like "name@npm:^1.0.0" or "@scope/name@npm:^1.0.0"
    try:
        idx = descriptor.index("@", 1)
    except ValueError as exc:
        raise LockfileParseError(f"Invalid descriptor '{descriptor}'") from exc
    return descriptor[:idx], descriptor[idx + 1 :]
