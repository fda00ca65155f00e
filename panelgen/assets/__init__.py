"""Manifest loading and asset tag resolution."""

from .manifest import MANIFEST_FILENAME, find_manifest, load_manifest, parse_manifest
from .resolver import (
    collect_stylesheets,
    development_tags,
    production_tags,
    resolve_asset_tags,
)

__all__ = [
    "MANIFEST_FILENAME",
    "collect_stylesheets",
    "development_tags",
    "find_manifest",
    "load_manifest",
    "parse_manifest",
    "production_tags",
    "resolve_asset_tags",
]
