"""Asset tag resolution for development and production builds."""

from __future__ import annotations

from typing import List, Optional, Set

from ..errors import ManifestEntryError
from ..logging import get_logger
from ..models import BuildMode, DevServerInfo, ManifestGraph

DEV_CLIENT_PATH = "@vite/client"
PREAMBLE_BASE_PLACEHOLDER = "%BASE_URL%"

_logger = get_logger("assets")


def join_url(base: str, path: str) -> str:
    """Join a public base path and an asset path with exactly one slash."""
    if not base:
        return path
    return f"{base.rstrip('/')}/{path.lstrip('/')}"


def script_tag(src: str) -> str:
    return f'<script type="module" src="{src}"></script>'


def stylesheet_tag(href: str) -> str:
    return f'<link rel="stylesheet" href="{href}" />'


def development_tags(
    entry_key: str,
    dev_server: DevServerInfo,
    base: str,
    *,
    preamble: Optional[str] = None,
) -> List[str]:
    """Return the live-reload client and entry module tags served by the dev server."""
    root = join_url(dev_server.origin, base)
    tags: List[str] = []
    if preamble:
        tags.append(preamble.replace(PREAMBLE_BASE_PLACEHOLDER, join_url(root, "")))
    tags.append(script_tag(join_url(root, DEV_CLIENT_PATH)))
    tags.append(script_tag(join_url(root, entry_key)))
    return tags


def collect_stylesheets(entry_key: str, manifest: ManifestGraph) -> List[str]:
    """Return the stylesheets an entry needs, depth-first and without duplicates.

    Each chunk contributes its own `css` before its imports are walked, in the
    order the imports are declared. A chunk is walked at most once, so import
    cycles terminate. The walk keeps its own work-list, so chain depth is not
    bounded by the interpreter's recursion limit.
    """
    if entry_key not in manifest:
        raise ManifestEntryError(entry_key)
    stylesheets: List[str] = []
    visited: Set[str] = set()
    seen_css: Set[str] = set()
    pending = [entry_key]
    while pending:
        key = pending.pop()
        if key in visited:
            continue
        visited.add(key)
        chunk = manifest[key]
        for stylesheet in chunk.css:
            if stylesheet in seen_css:
                continue
            seen_css.add(stylesheet)
            stylesheets.append(stylesheet)
        # Reversed so the first declared import is popped next.
        for imported in reversed(chunk.imports):
            if imported in visited:
                continue
            if imported not in manifest:
                _logger.debug("Chunk %s imports unknown chunk %s; skipping", key, imported)
                continue
            pending.append(imported)
    return stylesheets


def production_tags(entry_key: str, manifest: ManifestGraph, base: str) -> List[str]:
    """Return stylesheet tags for the entry's import closure plus its own script tag."""
    tags = [
        stylesheet_tag(join_url(base, stylesheet))
        for stylesheet in collect_stylesheets(entry_key, manifest)
    ]
    tags.append(script_tag(join_url(base, manifest[entry_key].file)))
    return tags


def resolve_asset_tags(
    entry_key: str,
    mode: BuildMode,
    *,
    base: str,
    dev_server: Optional[DevServerInfo] = None,
    manifest: Optional[ManifestGraph] = None,
    preamble: Optional[str] = None,
) -> List[str]:
    """Return the ordered head tags for `entry_key` under the given build mode."""
    if mode is BuildMode.DEVELOPMENT:
        return development_tags(
            entry_key, dev_server or DevServerInfo(), base, preamble=preamble
        )
    if manifest is None:
        raise ValueError("Production resolution requires a manifest")
    return production_tags(entry_key, manifest, base)


__all__ = [
    "DEV_CLIENT_PATH",
    "PREAMBLE_BASE_PLACEHOLDER",
    "collect_stylesheets",
    "development_tags",
    "join_url",
    "production_tags",
    "resolve_asset_tags",
    "script_tag",
    "stylesheet_tag",
]
