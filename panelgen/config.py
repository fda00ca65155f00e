"""Configuration loading for panelgen (.panelgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml

from .errors import ConfigError
from .models import DevServerInfo, PanelKind, TemplateRule

CONFIG_FILENAME = ".panelgen.yml"

_SOURCE_SUFFIXES = "{js,jsx,ts,tsx}"


@dataclass
class ServerConfig:
    """Development server address as configured for the host."""

    host: str = "localhost"
    port: int = 3000
    https: bool = False

    def to_dev_server(self) -> DevServerInfo:
        return DevServerInfo(
            protocol="https" if self.https else "http",
            host=self.host,
            port=self.port,
        )


@dataclass
class DevConfig:
    """Development-mode extras."""

    preamble_file: Optional[Path] = None


@dataclass
class OutputConfig:
    """Where generated pages go and whether stale ones are cleared first."""

    dir: Path = Path(".")
    clean: bool = True


@dataclass
class PanelGenConfig:
    """Represents the settings defined in .panelgen.yml."""

    root: Path
    bundle_name: str = ""
    src_dir: str = "src"
    out_dir: str = "shared/dist"
    base: Optional[str] = None
    rules: Tuple[TemplateRule, ...] = ()
    exclude: List[str] = field(default_factory=list)
    server: ServerConfig = field(default_factory=ServerConfig)
    dev: DevConfig = field(default_factory=DevConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def __post_init__(self) -> None:
        if not self.bundle_name:
            self.bundle_name = self.root.name
        if not self.rules:
            self.rules = default_rules(self.src_dir, root=self.root)

    @property
    def source_root(self) -> Path:
        return self.root / self.src_dir

    @property
    def output_root(self) -> Path:
        return self.root / self.output.dir


def default_rules(src_dir: str = "src", *, root: Path | None = None) -> Tuple[TemplateRule, ...]:
    """Rules used when no `inputs` mapping is configured: one template per panel kind.

    With `root` given, kinds whose template is absent are left out, unless
    none is present at all (the missing template is then reported on load).
    """
    rules = tuple(
        TemplateRule(
            pattern=f"{kind.value}/**/*.{_SOURCE_SUFFIXES}",
            template=f"{src_dir}/{kind.value}/template.html",
        )
        for kind in PanelKind
    )
    if root is None:
        return rules
    present = tuple(rule for rule in rules if (root / rule.template).is_file())
    return present or rules


def load_config(config_path: Path) -> PanelGenConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return PanelGenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    src_dir = _as_str(data.get("src_dir")) or "src"
    rules = _as_rules(data.get("inputs"))

    server_data = _as_dict(data.get("server"))
    server = ServerConfig()
    if server_data:
        server.host = _as_str(server_data.get("host")) or server.host
        port = _as_int(server_data.get("port"))
        if port is not None:
            server.port = port
        server.https = _as_bool(server_data.get("https")) or False

    dev_data = _as_dict(data.get("dev"))
    dev = DevConfig()
    preamble = _as_str(dev_data.get("preamble_file")) if dev_data else None
    if preamble:
        dev.preamble_file = root / preamble

    output_data = _as_dict(data.get("output"))
    output = OutputConfig()
    if output_data:
        output_dir = _as_str(output_data.get("dir"))
        if output_dir:
            output.dir = Path(output_dir)
        clean = _as_bool(output_data.get("clean"))
        if clean is not None:
            output.clean = clean

    return PanelGenConfig(
        root=root,
        bundle_name=_as_str(data.get("bundle_name")) or "",
        src_dir=src_dir,
        out_dir=_as_str(data.get("out_dir")) or "shared/dist",
        base=_as_str(data.get("base")),
        rules=rules,
        exclude=_as_str_list(data.get("exclude")),
        server=server,
        dev=dev,
        output=output,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_rules(value: Any) -> Tuple[TemplateRule, ...]:
    if value is None:
        return ()
    if not isinstance(value, dict):
        raise ConfigError("`inputs` must map glob patterns to template paths")
    rules: List[TemplateRule] = []
    for pattern, template in value.items():
        template_str = _as_str(template)
        if not isinstance(pattern, str) or not template_str:
            raise ConfigError(f"Invalid input rule: {pattern!r} -> {template!r}")
        rules.append(TemplateRule(pattern=pattern, template=template_str))
    return tuple(rules)


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DevConfig",
    "OutputConfig",
    "PanelGenConfig",
    "ServerConfig",
    "default_rules",
    "load_config",
]
