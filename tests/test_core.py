"""
End-to-end tests for shrinkwrap generation.
"""

import json

import pytest

from yarn_shrinkwrap.config import ShrinkwrapOptions
from yarn_shrinkwrap.core import generate_shrinkwrap, render_lockfile
from yarn_shrinkwrap.errors import PackageNotFoundError

LEFT_PAD_EXPECTED = {
    "name": "root",
    "version": "1.0.0",
    "lockfileVersion": 1,
    "requires": True,
    "dependencies": {
        "left-pad": {
            "version": "1.0.0",
            "integrity": "sha512-abc",
            "resolved": "https://example/left-pad-1.0.0.tgz",
        }
    },
}

NESTED_LOCK = """\
# yarn lockfile v1


a@^1.0.0:
  version "1.0.0"
  resolved "https://example/a-1.0.0.tgz"
  integrity sha512-a1
  dependencies:
    b "^1.0.0"

b@^1.0.0:
  version "1.0.0"
  resolved "https://example/b-1.0.0.tgz"
  integrity sha512-b1
"""


def _nested_project(project, install):
    manifest = project({"a": "^1.0.0"})
    (project.root / "yarn.lock").write_text(NESTED_LOCK, encoding="utf-8")
    install(project.root, "a", "1.0.0", {"b": "^1.0.0"})
    install(project.root, "b", "1.0.0")
    return manifest


def test_left_pad_end_to_end(left_pad_project):
    lock = generate_shrinkwrap(ShrinkwrapOptions(manifest_path=left_pad_project))

    assert lock.to_dict() == LEFT_PAD_EXPECTED


def test_output_is_written_as_indented_json(left_pad_project, tmp_path):
    output = tmp_path / "npm-shrinkwrap.json"

    lock = generate_shrinkwrap(
        ShrinkwrapOptions(manifest_path=left_pad_project, output_path=output)
    )

    text = output.read_text(encoding="utf-8")
    assert json.loads(text) == LEFT_PAD_EXPECTED
    assert text == json.dumps(LEFT_PAD_EXPECTED, indent=2)
    assert text == render_lockfile(lock)


def test_no_output_path_writes_nothing(left_pad_project, project):
    before = sorted(p.name for p in project.root.iterdir())

    generate_shrinkwrap(ShrinkwrapOptions(manifest_path=left_pad_project))

    assert sorted(p.name for p in project.root.iterdir()) == before


def test_rerun_is_byte_identical(project, install, tmp_path):
    manifest = _nested_project(project, install)
    first, second = tmp_path / "first.json", tmp_path / "second.json"

    generate_shrinkwrap(ShrinkwrapOptions(manifest_path=manifest, output_path=first))
    generate_shrinkwrap(ShrinkwrapOptions(manifest_path=manifest, output_path=second))

    assert first.read_bytes() == second.read_bytes()


def test_hoist_flag(project, install):
    manifest = _nested_project(project, install)

    hoisted = generate_shrinkwrap(ShrinkwrapOptions(manifest_path=manifest, hoist=True))
    nested = generate_shrinkwrap(ShrinkwrapOptions(manifest_path=manifest, hoist=False))

    assert list(hoisted.dependencies) == ["a", "b"]
    assert hoisted.dependencies["a"].to_dict() == {
        "version": "1.0.0",
        "integrity": "sha512-a1",
        "resolved": "https://example/a-1.0.0.tgz",
        "requires": {"b": "^1.0.0"},
    }
    assert list(nested.dependencies) == ["a"]
    assert list(nested.dependencies["a"].dependencies) == ["b"]


def test_yarn_lock_found_in_ancestor(tmp_path, install):
    (tmp_path / "yarn.lock").write_text(NESTED_LOCK, encoding="utf-8")
    pkg = tmp_path / "packages" / "app"
    pkg.mkdir(parents=True)
    (pkg / "package.json").write_text(
        json.dumps({"name": "app", "version": "0.0.1", "dependencies": {"b": "^1.0.0"}})
    )
    install(tmp_path, "b", "1.0.0")

    lock = generate_shrinkwrap(ShrinkwrapOptions(manifest_path=pkg / "package.json"))

    assert lock.dependencies["b"].integrity == "sha512-b1"


def test_missing_yarn_lock(project, tmp_path):
    manifest = project({})
    output = tmp_path / "out.json"

    with pytest.raises(PackageNotFoundError, match="yarn.lock"):
        generate_shrinkwrap(ShrinkwrapOptions(manifest_path=manifest, output_path=output))

    assert not output.exists()


def test_failure_writes_nothing(project, install, tmp_path):
    manifest = project({"a": "^1.0.0"})
    (project.root / "yarn.lock").write_text(NESTED_LOCK, encoding="utf-8")
    install(project.root, "a", "1.0.0", {"b": "^1.0.0"})
    output = tmp_path / "out.json"

    with pytest.raises(PackageNotFoundError):
        generate_shrinkwrap(ShrinkwrapOptions(manifest_path=manifest, output_path=output))

    assert not output.exists()


def test_non_ascii_is_kept(project, tmp_path):
    manifest = project({}, name="émoji-☃")
    (project.root / "yarn.lock").write_text("# yarn lockfile v1\n", encoding="utf-8")
    output = tmp_path / "out.json"

    generate_shrinkwrap(ShrinkwrapOptions(manifest_path=manifest, output_path=output))

    assert '"name": "émoji-☃"' in output.read_text(encoding="utf-8")
