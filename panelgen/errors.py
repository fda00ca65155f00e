"""Exception types raised by panelgen components."""

from __future__ import annotations


class PanelGenError(RuntimeError):
    """Base class for panelgen failures."""


class ConfigError(PanelGenError):
    """Raised when the configuration file cannot be parsed."""


class NoInputsError(PanelGenError):
    """Raised when input discovery yields nothing to generate."""


class ManifestError(PanelGenError):
    """Raised when the production manifest is missing or malformed."""


class ManifestEntryError(PanelGenError):
    """Raised when an entry has no chunk in the loaded manifest."""

    def __init__(self, entry_key: str) -> None:
        super().__init__(f"Entry {entry_key!r} not found in manifest")
        self.entry_key = entry_key


class OutputCollisionError(PanelGenError):
    """Raised when two inputs derive the same output path."""

    def __init__(self, path: str, first: str, second: str) -> None:
        super().__init__(
            f"Output path {path!r} for {second!r} is already produced by {first!r}"
        )
        self.path = path
        self.first = first
        self.second = second


__all__ = [
    "ConfigError",
    "ManifestEntryError",
    "ManifestError",
    "NoInputsError",
    "OutputCollisionError",
    "PanelGenError",
]
