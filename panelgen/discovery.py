"""Input discovery: turning a source tree into panel entry files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator, List, Mapping, Sequence, Set

from .config import PanelGenConfig
from .errors import NoInputsError
from .logging import get_logger
from .models import InputFile, PanelKind, TemplateRule
from .templates.glob import match_glob

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".idea",
    ".vite",
}

_DECLARATION_SUFFIXES = (".d.ts", ".d.mts", ".d.cts")


def normalize_inputs(value: object) -> List[str]:
    """Flatten host-style input declarations into an ordered list of paths.

    Hosts describe inputs as a single string, a list of strings, or a mapping
    of chunk names to paths. A leading `./` is dropped and repeats are removed.
    """
    if value is None:
        return []
    if isinstance(value, str):
        raw: Iterable[object] = [value]
    elif isinstance(value, Mapping):
        raw = value.values()
    elif isinstance(value, Sequence):
        raw = value
    else:
        raise TypeError(f"Unsupported input declaration: {type(value).__name__}")

    seen: Set[str] = set()
    inputs: List[str] = []
    for item in raw:
        if not isinstance(item, str) or not item:
            continue
        cleaned = item[2:] if item.startswith("./") else item
        if cleaned in seen:
            continue
        seen.add(cleaned)
        inputs.append(cleaned)
    return inputs


def is_declaration_file(path: str) -> bool:
    return path.endswith(_DECLARATION_SUFFIXES)


def build_input_file(path: Path, config: PanelGenConfig) -> InputFile:
    """Describe `path` relative to the source root and the project root."""
    absolute = path if path.is_absolute() else config.root / path
    relative = absolute.relative_to(config.source_root).as_posix()
    entry_key = absolute.relative_to(config.root).as_posix()
    return InputFile(
        path=absolute,
        relative=relative,
        entry_key=entry_key,
        kind=PanelKind.from_relative(relative),
        name=absolute.stem,
    )


class InputScanner:
    """Walks the source root for files matching any template rule."""

    def __init__(self) -> None:
        self.logger = get_logger("discovery")

    def scan(self, config: PanelGenConfig) -> List[InputFile]:
        """Return every entry under the source root, sorted by relative path."""
        source_root = config.source_root
        if not source_root.is_dir():
            raise NoInputsError(f"Source directory not found: {source_root}")

        inputs = [
            build_input_file(path, config)
            for path in self._iter_candidates(source_root, config.rules, config.exclude)
        ]
        inputs.sort(key=lambda item: item.relative)
        if not inputs:
            raise NoInputsError(
                f"No inputs under {source_root} match the configured patterns"
            )
        self.logger.debug("Discovered %d inputs under %s", len(inputs), source_root)
        return inputs

    def from_paths(self, paths: object, config: PanelGenConfig) -> List[InputFile]:
        """Build entries from host-supplied paths (relative to the project root).

        `paths` takes any shape `normalize_inputs` accepts; repeats collapse to
        their first occurrence.
        """
        inputs: List[InputFile] = []
        for raw in normalize_inputs(paths):
            if is_declaration_file(raw):
                continue
            path = Path(raw)
            try:
                inputs.append(build_input_file(path, config))
            except ValueError:
                self.logger.warning(
                    "Input %s is outside source directory %s; skipping",
                    raw,
                    config.src_dir,
                )
        if not inputs:
            raise NoInputsError("The host supplied no usable inputs")
        return inputs

    def _iter_candidates(
        self,
        source_root: Path,
        rules: Sequence[TemplateRule],
        exclude: Sequence[str],
    ) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(source_root):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(source_root).as_posix() if current_dir != source_root else ""
            dirnames[:] = sorted(name for name in dirnames if name not in _EXCLUDED_DIRS)

            for filename in filenames:
                if is_declaration_file(filename):
                    continue
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if any(match_glob(rel_path, pattern) for pattern in exclude):
                    continue
                if any(match_glob(rel_path, rule.pattern) for rule in rules):
                    yield current_dir / filename


__all__ = [
    "InputScanner",
    "build_input_file",
    "is_declaration_file",
    "normalize_inputs",
]
