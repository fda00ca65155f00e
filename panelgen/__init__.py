"""panelgen: panel HTML generation for dev-server and production bundles."""

from .assets import collect_stylesheets, load_manifest, resolve_asset_tags
from .config import PanelGenConfig, load_config
from .errors import (
    ConfigError,
    ManifestEntryError,
    ManifestError,
    NoInputsError,
    OutputCollisionError,
    PanelGenError,
)
from .models import BuildMode, DevServerInfo, InputFile, ManifestChunk, PanelKind, TemplateRule
from .orchestrator import Orchestrator, PassResult
from .output import derive_output_path
from .postproc import inject_tags
from .templates import select_template

__version__ = "0.1.0"

__all__ = [
    "BuildMode",
    "ConfigError",
    "DevServerInfo",
    "InputFile",
    "ManifestChunk",
    "ManifestEntryError",
    "ManifestError",
    "NoInputsError",
    "Orchestrator",
    "OutputCollisionError",
    "PanelGenConfig",
    "PanelGenError",
    "PanelKind",
    "PassResult",
    "TemplateRule",
    "collect_stylesheets",
    "derive_output_path",
    "inject_tags",
    "load_config",
    "load_manifest",
    "resolve_asset_tags",
    "select_template",
]
