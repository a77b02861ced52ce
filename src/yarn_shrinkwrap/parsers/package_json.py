"""Load package.json manifests."""

from __future__ import annotations

import json
from pathlib import Path

from ..errors import ManifestError
from ..models import Manifest


def load(path: Path) -> Manifest:
    """Read a package.json.

    Read and decode errors propagate unchanged; a document of the wrong shape
    raises :class:`ManifestError`.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ManifestError(path, "expected a JSON object")
    deps = data.get("dependencies")
    if deps is not None and not isinstance(deps, dict):
        raise ManifestError(path, "'dependencies' must be an object")
    return Manifest.from_dict(data)
