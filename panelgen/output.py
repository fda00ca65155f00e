"""Output path derivation and writing of generated pages."""

from __future__ import annotations

import shutil
from pathlib import Path, PurePosixPath
from typing import Dict, Iterable, Iterator, List, Set

from .errors import OutputCollisionError
from .logging import get_logger
from .models import OutputDocument

OUTPUT_SUFFIX = ".html"


def derive_output_path(input_path: Path | str, source_root: Path | str) -> str:
    """Return the posix output path of an input, relative to the source root.

    `src/graphics/scoreboard/main.ts` under `src` becomes
    `graphics/scoreboard/main.html`.
    """
    relative = Path(input_path).relative_to(Path(source_root))
    return PurePosixPath(relative.as_posix()).with_suffix(OUTPUT_SUFFIX).as_posix()


class OutputPlan:
    """Ordered set of documents keyed by output path; rejects collisions."""

    def __init__(self) -> None:
        self._documents: Dict[str, OutputDocument] = {}

    def add(self, document: OutputDocument) -> None:
        existing = self._documents.get(document.path)
        if existing is not None:
            raise OutputCollisionError(
                document.path, existing.input.relative, document.input.relative
            )
        self._documents[document.path] = document

    def __iter__(self) -> Iterator[OutputDocument]:
        return iter(self._documents.values())

    def __len__(self) -> int:
        return len(self._documents)

    def paths(self) -> List[str]:
        return list(self._documents)

    def top_level_dirs(self) -> Set[str]:
        """Return the first path segment of every nested output path."""
        return {path.split("/", 1)[0] for path in self._documents if "/" in path}


def _overlaps(first: Path, second: Path) -> bool:
    return first == second or first in second.parents or second in first.parents


class OutputWriter:
    """Writes documents under an output root, one independent write per document."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.logger = get_logger("output")

    def clean(self, directories: Iterable[str], *, protect: Iterable[Path] = ()) -> None:
        """Remove previously generated directories so stale pages do not linger.

        A directory that is, contains, or sits inside one of the `protect`
        paths is kept. Failures are reported and the pass carries on.
        """
        protected = [path.resolve() for path in protect]
        for name in sorted(directories):
            target = self.root / name
            resolved = target.resolve()
            if any(_overlaps(resolved, path) for path in protected):
                self.logger.debug("Not cleaning %s: it overlaps sources or templates", target)
                continue
            if not target.is_dir():
                continue
            self.logger.debug("Removing stale output directory %s", target)
            try:
                shutil.rmtree(target)
            except OSError as exc:
                self.logger.warning("Failed to clean output directory %s: %s", target, exc)

    def write(self, document: OutputDocument) -> Path:
        target = self.root / document.path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(document.html, encoding="utf-8")
        return target

    def write_all(self, documents: Iterable[OutputDocument]) -> List[Path]:
        """Write every document, skipping (and reporting) the ones that fail."""
        written: List[Path] = []
        for document in documents:
            try:
                written.append(self.write(document))
            except OSError as exc:
                self.logger.warning(
                    "Failed to write %s for %s: %s",
                    document.path,
                    document.input.relative,
                    exc,
                )
        return written


__all__ = ["OUTPUT_SUFFIX", "OutputPlan", "OutputWriter", "derive_output_path"]
