"""
Tests for the Yarn Berry (v2+) lockfile parser.
"""

import pytest

from yarn_shrinkwrap.errors import LockfileParseError
from yarn_shrinkwrap.parsers import parse_lockfile
from yarn_shrinkwrap.parsers.yarn_berry import parse_text

BERRY_LOCK = """\
# This file is generated by running "yarn install" inside your project.
# Manual changes might be lost - proceed with caution!

__metadata:
  version: 6
  cacheKey: 8

"@scope/util@npm:^2.0.0":
  version: 2.1.0
  resolution: "@scope/util@npm:2.1.0"
  checksum: 0f3a
  languageName: node
  linkType: hard

"left-pad@npm:^1.0.0, left-pad@npm:^1.1.0":
  version: 1.3.0
  resolution: "left-pad@npm:1.3.0"
  checksum: 4a2b
  languageName: node
  linkType: hard

"my-lib@workspace:packages/my-lib":
  version: 0.0.0-use.local
  resolution: "my-lib@workspace:packages/my-lib"
  languageName: unknown
  linkType: soft
"""


def test_npm_descriptors_index_by_plain_range():
    index = parse_text(BERRY_LOCK)

    assert index["left-pad@^1.0.0"] is index["left-pad@npm:^1.0.0"]
    assert index["left-pad@^1.1.0"].version == "1.3.0"
    assert index["left-pad@^1.0.0"].resolved == "left-pad@npm:1.3.0"
    assert index["left-pad@^1.0.0"].integrity is None


def test_scoped_descriptor():
    index = parse_text(BERRY_LOCK)

    assert index["@scope/util@^2.0.0"].version == "2.1.0"


def test_workspace_descriptors_are_skipped():
    index = parse_text(BERRY_LOCK)

    assert not [key for key in index if key.startswith("my-lib@")]
    assert "__metadata" not in index


def test_invalid_yaml_is_rejected():
    with pytest.raises(LockfileParseError):
        parse_text("__metadata:\n  version: [\n")


def test_parse_lockfile_detects_berry(tmp_path):
    path = tmp_path / "yarn.lock"
    path.write_text(BERRY_LOCK, encoding="utf-8")

    assert parse_lockfile(path)["@scope/util@npm:^2.0.0"].version == "2.1.0"
