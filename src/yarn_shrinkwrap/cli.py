"""Command line entrypoint.

Usage:
  yarn-shrinkwrap [package.json] [-o npm-shrinkwrap.json] [--no-hoist]
                  [--config options.json] [--print-tree] [--no-validate]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import ShrinkwrapOptions, load_options
from .core import generate_shrinkwrap, render_lockfile, write_lockfile
from .errors import ShrinkwrapError
from .formatter import format_tree
from .validators import validate_lockfile
from .verify import find_unresolved_requirements

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="yarn-shrinkwrap",
        description="Generate an npm v1 lockfile from yarn.lock and node_modules.",
    )
    parser.add_argument(
        "manifest",
        nargs="?",
        type=Path,
        default=None,
        help="package.json to start from (default: ./package.json)",
    )
    parser.add_argument("-o", "--output", type=Path, default=None, help="File to write")
    parser.add_argument(
        "--no-hoist",
        dest="hoist",
        action="store_false",
        default=None,
        help="Keep every dependency nested under the package that requires it",
    )
    parser.add_argument("--config", type=Path, default=None, help="JSON options file")
    parser.add_argument(
        "--print-tree", action="store_true", help="Print the dependency tree instead of JSON"
    )
    parser.add_argument(
        "--no-validate",
        dest="validate",
        action="store_false",
        help="Skip schema validation of the generated lockfile",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def _build_options(args: argparse.Namespace) -> ShrinkwrapOptions:
    if args.config is not None:
        base = load_options(args.config)
        return ShrinkwrapOptions(
            manifest_path=args.manifest or base.manifest_path,
            output_path=args.output or base.output_path,
            hoist=base.hoist if args.hoist is None else args.hoist,
        )
    return ShrinkwrapOptions.create(
        args.manifest or Path("package.json"), args.output, args.hoist
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        options = _build_options(args)
        # Written only after validation below.
        lock = generate_shrinkwrap(
            ShrinkwrapOptions(manifest_path=options.manifest_path, hoist=options.hoist)
        )
        if args.validate:
            validate_lockfile(lock.to_dict())
        for problem in find_unresolved_requirements(lock):
            logger.warning(problem)
        if options.output_path is not None:
            write_lockfile(lock, options.output_path)
    except ShrinkwrapError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as exc:
        print(f"ERROR: Failed to read JSON: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    if args.print_tree:
        print(format_tree(lock))
    elif options.output_path is None:
        print(render_lockfile(lock))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
