"""Validation of generated lockfile documents."""

from .lockfile import check_lockfile, validate_lockfile

__all__ = ["check_lockfile", "validate_lockfile"]
