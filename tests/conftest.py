"""Shared fixtures: on-disk projects with node_modules trees."""

import json
from pathlib import Path

import pytest


def _write_manifest(directory: Path, data: dict) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "package.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def install():
    """Return a helper that installs ``name`` under ``<base>/node_modules``."""

    def _install(base, name, version, dependencies=None, manifest_name=None):
        pkg_dir = Path(base) / "node_modules" / name
        data = {"name": manifest_name or name, "version": version}
        if dependencies:
            data["dependencies"] = dependencies
        _write_manifest(pkg_dir, data)
        return pkg_dir

    return _install


@pytest.fixture
def project(tmp_path):
    """Create an empty project directory and return a writer for its package.json."""
    root = tmp_path / "project"
    root.mkdir()

    def _write(dependencies=None, name="root", version="1.0.0"):
        data = {"name": name, "version": version}
        if dependencies is not None:
            data["dependencies"] = dependencies
        return _write_manifest(root, data)

    _write.root = root
    return _write


LEFT_PAD_LOCK = """\
# THIS IS AN AUTOGENERATED FILE. DO NOT EDIT THIS FILE DIRECTLY.
# yarn lockfile v1


left-pad@^1.0.0:
  version "1.0.0"
  resolved "https://example/left-pad-1.0.0.tgz"
  integrity sha512-abc
"""


@pytest.fixture
def left_pad_project(project, install):
    """The left-pad example: one registry dependency without further deps."""
    manifest = project({"left-pad": "^1.0.0"})
    (project.root / "yarn.lock").write_text(LEFT_PAD_LOCK, encoding="utf-8")
    install(project.root, "left-pad", "1.0.0")
    return manifest
