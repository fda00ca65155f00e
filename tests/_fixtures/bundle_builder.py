"""Helper utilities for constructing temporary bundles in tests."""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import Any, Mapping

GRAPHICS_TEMPLATE = "<!DOCTYPE html>\n<html>\n<head>\n<title>Graphic</title>\n</head>\n<body></body>\n</html>\n"
DASHBOARD_TEMPLATE = "<!DOCTYPE html>\n<html>\n<head>\n<title>Dashboard</title>\n</head>\n<body></body>\n</html>\n"


class BundleBuilder:
    """Utility for writing files into a throwaway bundle directory."""

    def __init__(self, tmp_path: Path, name: str = "mybundle") -> None:
        self.root = tmp_path / name
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the bundle."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def write_default_templates(self) -> None:
        """Write the per-kind templates used by the default rules."""
        (self.root / "src" / "graphics").mkdir(parents=True, exist_ok=True)
        (self.root / "src" / "dashboard").mkdir(parents=True, exist_ok=True)
        (self.root / "src" / "graphics" / "template.html").write_text(GRAPHICS_TEMPLATE, encoding="utf-8")
        (self.root / "src" / "dashboard" / "template.html").write_text(DASHBOARD_TEMPLATE, encoding="utf-8")

    def write_manifest(self, payload: Any, out_dir: str = "shared/dist") -> Path:
        """Write a build manifest (raw text when `payload` is a string)."""
        path = self.root / out_dir / "manifest.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        text = payload if isinstance(payload, str) else json.dumps(payload, indent=2)
        path.write_text(text, encoding="utf-8")
        return path

    def read(self, relative: str) -> str:
        return (self.root / relative).read_text(encoding="utf-8")

    def path(self) -> Path:
        """Return the bundle root path."""
        return self.root


__all__ = ["BundleBuilder", "DASHBOARD_TEMPLATE", "GRAPHICS_TEMPLATE"]
