"""Data models for manifests, the yarn lock index and npm lockfile trees."""

from __future__ import annotations

from .lock_entry import LockEntry, LockFile, LOCKFILE_VERSION
from .locked_package import LockedPackage, LockIndex, lock_key
from .manifest import Manifest

__all__ = [
    "LOCKFILE_VERSION",
    "LockEntry",
    "LockFile",
    "LockIndex",
    "LockedPackage",
    "Manifest",
    "lock_key",
]
