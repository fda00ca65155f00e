"""Template rule matching and template text caching."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, Optional, Sequence

from ..errors import ConfigError
from ..logging import get_logger
from ..models import TemplateRule
from .glob import match_glob


def select_template(input_path: str, rules: Sequence[TemplateRule]) -> Optional[str]:
    """Return the template of the first rule matching `input_path`, or None.

    Rules are tried in declaration order and the first hit wins, even when a
    later rule is more specific. `input_path` is relative to the source root.
    """
    for rule in rules:
        if match_glob(input_path, rule.pattern):
            return rule.template
    return None


class TemplateStore:
    """Reads template files once and serves the cached text afterwards."""

    def __init__(self, root: Path) -> None:
        self._root = root
        self._cache: Dict[str, str] = {}
        self.logger = get_logger("templates")

    def preload(self, rules: Iterable[TemplateRule]) -> None:
        """Load every distinct template referenced by `rules`."""
        for rule in rules:
            self.get(rule.template)

    def get(self, template: str) -> str:
        cached = self._cache.get(template)
        if cached is not None:
            return cached
        path = self._root / template
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Unable to read template {template}: {exc}") from exc
        self.logger.debug("Loaded template %s (%d bytes)", template, len(text))
        self._cache[template] = text
        return text

    def __contains__(self, template: object) -> bool:
        return template in self._cache

    def __len__(self) -> int:
        return len(self._cache)
