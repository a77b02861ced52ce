"""Parse classic (v1) yarn.lock files into a lock index.

The format is an indentation-based key/value text::

    "@scope/pkg@^1.0.0", "@scope/pkg@^1.1.0":
      version "1.2.0"
      resolved "https://registry.yarnpkg.com/@scope/pkg/-/pkg-1.2.0.tgz#abc"
      integrity sha512-...
      dependencies:
        left-pad "^1.0.0"

Every comma-separated header key maps to the same resolved package.
"""

from __future__ import annotations

import json
from typing import Any

from ..errors import LockfileParseError
from ..models import LockedPackage, LockIndex

_CONFLICT_MARKERS = ("<<<<<<<", "=======", ">>>>>>>")
_INDENT = 2


def parse_text(text: str) -> LockIndex:
    index: LockIndex = {}
    for keys, fields, lineno in _parse_entries(text):
        version = fields.get("version")
        if not isinstance(version, str):
            raise LockfileParseError(f"Entry '{keys[0]}' has no version", lineno)
        integrity = fields.get("integrity")
        resolved = fields.get("resolved")
        package = LockedPackage(
            version=version,
            integrity=integrity if isinstance(integrity, str) else None,
            resolved=resolved if isinstance(resolved, str) else None,
        )
        for key in keys:
            index[key] = package

    return index


def _parse_entries(text: str) -> list[tuple[list[str], dict[str, Any], int]]:
    entries: list[tuple[list[str], dict[str, Any], int]] = []
    stack: list[dict[str, Any]] = []

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.rstrip()
        if not line or line.lstrip().startswith("#"):
            continue
        if line.startswith(_CONFLICT_MARKERS):
            raise LockfileParseError("Merge conflict markers found", lineno)
        if "\t" in line[: len(line) - len(line.lstrip())]:
            raise LockfileParseError("Tabs are not allowed for indentation", lineno)

        content = line.lstrip(" ")
        indent = len(line) - len(content)
        if indent % _INDENT:
            raise LockfileParseError("Indentation is not a multiple of two", lineno)
        level = indent // _INDENT

        if level == 0:
            if not content.endswith(":"):
                raise LockfileParseError(f"Expected an entry header, got '{content}'", lineno)
            keys = _split_keys(content[:-1], lineno)
            fields: dict[str, Any] = {}
            entries.append((keys, fields, lineno))
            stack = [fields]
            continue

        if level > len(stack):
            raise LockfileParseError("Unexpected indentation", lineno)
        del stack[level:]

        if content.endswith(":"):
            key = _unquote(content[:-1], lineno)
            nested: dict[str, Any] = {}
            stack[-1][key] = nested
            stack.append(nested)
            continue

        key, rest = _read_token(content, lineno)
        value = rest.strip()
        if not value:
            raise LockfileParseError(f"Missing value for '{key}'", lineno)
        if value.startswith('"'):
            stack[-1][key] = _unquote(value, lineno)
        else:
            stack[-1][key] = _coerce(value)

    return entries


def _read_token(content: str, lineno: int) -> tuple[str, str]:
    """Split a leading (possibly quoted) token off ``content``."""
    if content.startswith('"'):
        end = 1
        while end < len(content):
            if content[end] == "\\":
                end += 2
                continue
            if content[end] == '"':
                break
            end += 1
        else:
            raise LockfileParseError("Unterminated string", lineno)
        return _unquote(content[: end + 1], lineno), content[end + 1 :]

    token, _, rest = content.partition(" ")
    return token, rest


def _split_keys(header: str, lineno: int) -> list[str]:
    keys: list[str] = []
    rest = header.strip()
    while rest:
        key, rest = _read_token(rest, lineno)
        # Unquoted keys were split on a space; a trailing comma belongs to the list.
        key = key.rstrip(",")
        if key:
            keys.append(key)
        rest = rest.strip().lstrip(",").strip()
    if not keys:
        raise LockfileParseError("Entry header without keys", lineno)
    return keys


def _unquote(token: str, lineno: int) -> str:
    token = token.strip()
    if len(token) >= 2 and token.startswith('"') and token.endswith('"'):
        try:
            return json.loads(token)
        except json.JSONDecodeError as exc:
            raise LockfileParseError(f"Invalid string {token}: {exc.msg}", lineno) from exc
    return token


def _coerce(value: str) -> Any:
    if value == "true":
        return True
    if value == "false":
        return False
    return value
