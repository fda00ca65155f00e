"""Settings the host bundler needs so its output lines up with generated pages."""

from __future__ import annotations

from typing import Any, Dict

from .config import PanelGenConfig
from .models import BuildMode

BUNDLES_PREFIX = "/bundles"


def resolve_base(config: PanelGenConfig, mode: BuildMode) -> str:
    """Public base path assets are served from.

    Development assets come straight from the dev server under the bundle
    namespace; production assets live in the build output directory.
    """
    if config.base:
        return config.base
    base = f"{BUNDLES_PREFIX}/{config.bundle_name}/"
    if mode is BuildMode.PRODUCTION:
        base += f"{config.out_dir.strip('/')}/"
    return base


def build_host_config(config: PanelGenConfig, mode: BuildMode) -> Dict[str, Any]:
    """Return the configuration overrides to merge into the host's own config."""
    return {
        "base": resolve_base(config, mode),
        "build": {
            "manifest": True,
            "outDir": config.out_dir,
        },
        "server": {
            "origin": config.server.to_dev_server().origin,
        },
    }


__all__ = ["BUNDLES_PREFIX", "build_host_config", "resolve_base"]
