"""Loading and validation of the production build manifest."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Sequence, Tuple

from ..errors import ManifestError
from ..models import ManifestChunk, ManifestGraph

MANIFEST_FILENAME = "manifest.json"

# Newer host versions write the manifest under a hidden directory.
_MANIFEST_LOCATIONS: Tuple[str, ...] = (MANIFEST_FILENAME, f".vite/{MANIFEST_FILENAME}")


def find_manifest(out_dir: Path) -> Path:
    """Return the first manifest location that exists under `out_dir`."""
    for relative in _MANIFEST_LOCATIONS:
        candidate = out_dir / relative
        if candidate.is_file():
            return candidate
    raise ManifestError(f"No {MANIFEST_FILENAME} found in {out_dir}")


def load_manifest(out_dir: Path) -> Dict[str, ManifestChunk]:
    """Read and validate the manifest written by the production build."""
    path = find_manifest(out_dir)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ManifestError(f"Failed to read {path}: {exc}") from exc
    return parse_manifest(payload)


def parse_manifest(payload: Any) -> Dict[str, ManifestChunk]:
    """Convert decoded manifest JSON into chunk objects.

    The expected shape is `{key: {"file": str, "css"?: [str], "imports"?: [str]}}`;
    other chunk fields written by the host (`src`, `isEntry`, `assets`, ...)
    are ignored.
    """
    if not isinstance(payload, dict):
        raise ManifestError("Manifest must be a JSON object keyed by chunk")

    graph: Dict[str, ManifestChunk] = {}
    for key, raw in payload.items():
        if not isinstance(raw, dict):
            raise ManifestError(f"Manifest chunk {key!r} is not an object")
        file = raw.get("file")
        if not isinstance(file, str) or not file:
            raise ManifestError(f"Manifest chunk {key!r} has no output file")
        graph[key] = ManifestChunk(
            file=file,
            css=_as_str_tuple(raw.get("css"), key, "css"),
            imports=_as_str_tuple(raw.get("imports"), key, "imports"),
        )
    return graph


def _as_str_tuple(value: Any, key: str, field_name: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise ManifestError(f"Manifest chunk {key!r} field {field_name!r} must be a list")
    if not all(isinstance(item, str) for item in value):
        raise ManifestError(f"Manifest chunk {key!r} field {field_name!r} must hold strings")
    return tuple(value)


__all__ = [
    "MANIFEST_FILENAME",
    "ManifestGraph",
    "find_manifest",
    "load_manifest",
    "parse_manifest",
]
