"""Core data models shared across panelgen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional, Tuple


class BuildMode(str, Enum):
    """Host build mode a resolution pass runs under."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"


class PanelKind(str, Enum):
    """Panel families, named after their top-level source directory."""

    GRAPHICS = "graphics"
    DASHBOARD = "dashboard"

    @classmethod
    def from_relative(cls, relative: str) -> Optional["PanelKind"]:
        head = relative.split("/", 1)[0]
        for kind in cls:
            if kind.value == head:
                return kind
        return None


@dataclass
class InputFile:
    """A single entry file (one deployable panel)."""

    path: Path
    relative: str
    entry_key: str
    kind: Optional[PanelKind]
    name: str


@dataclass(frozen=True)
class TemplateRule:
    """Glob pattern mapped to a template path; order of rules is significant."""

    pattern: str
    template: str


@dataclass(frozen=True)
class ManifestChunk:
    """One chunk of the production manifest."""

    file: str
    css: Tuple[str, ...] = ()
    imports: Tuple[str, ...] = ()


ManifestGraph = Mapping[str, ManifestChunk]


@dataclass(frozen=True)
class DevServerInfo:
    """Address of the running development server."""

    protocol: str = "http"
    host: str = "localhost"
    port: int = 3000

    @property
    def origin(self) -> str:
        return f"{self.protocol}://{self.host}:{self.port}"


@dataclass
class OutputDocument:
    """Rendered HTML for one input plus its output location."""

    input: InputFile
    path: str
    html: str
    template: str = field(default="")
