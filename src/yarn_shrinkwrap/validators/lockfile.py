"""Check npm v1 lockfiles: schema conformance, then requirement resolution.

``yarn-shrinkwrap-validate --input npm-shrinkwrap.json`` fails when the file
does not match the bundled schema or when some ``requires`` entry names a
package that no enclosing ``dependencies`` scope provides.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from ..errors import SchemaValidationError
from ..models import LockFile
from ..verify import find_unresolved_requirements

DEFAULT_SCHEMA = Path(__file__).resolve().parents[1] / "schemas" / "npm-lockfile-v1.schema.json"


def validate_lockfile(document: dict[str, Any], schema_path: Path = DEFAULT_SCHEMA) -> None:
    """Raise :class:`SchemaValidationError` if ``document`` is not a valid lockfile.

    The message lists one ``- <pointer>: <problem>`` line per schema error.
    """
    schema = json.loads(Path(schema_path).read_text(encoding="utf-8"))
    errors = sorted(
        Draft202012Validator(schema).iter_errors(document), key=lambda e: list(e.path)
    )
    if not errors:
        return

    lines = [""]
    for error in errors:
        pointer = "/".join(str(p) for p in error.path) or "<root>"
        lines.append(f"- {pointer}: {error.message}")
    raise SchemaValidationError("\n".join(lines))


def check_lockfile(
    path: Path, schema_path: Path = DEFAULT_SCHEMA, verify: bool = True
) -> list[str]:
    """Validate the lockfile at ``path`` and return its unresolved requirements.

    Schema errors raise; requirement problems are returned so callers can
    report all of them.
    """
    document = json.loads(Path(path).read_text(encoding="utf-8"))
    validate_lockfile(document, schema_path)
    if not verify:
        return []
    return find_unresolved_requirements(LockFile.from_dict(document))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="yarn-shrinkwrap-validate", description=__doc__)
    parser.add_argument(
        "--input",
        type=Path,
        default=Path("npm-shrinkwrap.json"),
        help="Lockfile to check (default: ./npm-shrinkwrap.json)",
    )
    parser.add_argument("--schema", type=Path, default=DEFAULT_SCHEMA, help="JSON schema to use")
    parser.add_argument(
        "--schema-only",
        dest="verify",
        action="store_false",
        help="Skip the requirement resolution check",
    )
    args = parser.parse_args(argv)

    try:
        problems = check_lockfile(args.input, args.schema, verify=args.verify)
    except OSError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as exc:
        print(f"ERROR: Failed to read JSON: {exc}", file=sys.stderr)
        return 1
    except SchemaValidationError as exc:
        print(f"ERROR: Lockfile failed validation:{exc}", file=sys.stderr)
        return 1

    for problem in problems:
        print(f"ERROR: {problem}", file=sys.stderr)
    if problems:
        return 1

    print(f"Lockfile {args.input} is valid")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
