"""Parsers for package manifests and yarn lockfiles."""

from __future__ import annotations

import re
from pathlib import Path

from ..models import LockIndex
from . import yarn_berry, yarn_lock

_BERRY_MARKER = re.compile(r"^__metadata:", re.MULTILINE)


def parse_lockfile(path: Path) -> LockIndex:
    """Parse a yarn.lock of either the classic (v1) or Berry (v2+) flavour."""
    text = path.read_text(encoding="utf-8")
    if _BERRY_MARKER.search(text):
        return yarn_berry.parse_text(text)
    return yarn_lock.parse_text(text)


__all__ = ["parse_lockfile", "yarn_berry", "yarn_lock"]
