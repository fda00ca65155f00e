"""Pipeline orchestration for development and production generation passes."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .assets.manifest import load_manifest
from .assets.resolver import resolve_asset_tags
from .config import PanelGenConfig, load_config
from .discovery import InputScanner
from .errors import ConfigError, ManifestEntryError, ManifestError, OutputCollisionError
from .hostconfig import resolve_base
from .logging import get_logger
from .models import BuildMode, DevServerInfo, InputFile, ManifestGraph, OutputDocument
from .output import OutputPlan, OutputWriter, derive_output_path
from .postproc.inject import inject_tags
from .templates.selector import TemplateStore, select_template

_logger = get_logger("orchestrator")


@dataclass
class BuildState:
    """Everything a resolution pass reads; nothing in it changes during the pass."""

    config: PanelGenConfig
    mode: BuildMode
    templates: TemplateStore
    dev_server: Optional[DevServerInfo] = None
    manifest: Optional[ManifestGraph] = None
    preamble: Optional[str] = None

    @property
    def base(self) -> str:
        return resolve_base(self.config, self.mode)


@dataclass
class PassResult:
    """Outcome of a single generation pass."""

    mode: BuildMode
    written: List[Path] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    aborted: bool = False
    reason: Optional[str] = None


def render_documents(
    state: BuildState, inputs: Sequence[InputFile]
) -> Tuple[OutputPlan, List[str]]:
    """Render every input against `state`; returns the plan and skipped inputs."""
    plan = OutputPlan()
    skipped: List[str] = []
    source_root = state.config.source_root

    for item in inputs:
        template = select_template(item.relative, state.config.rules)
        if template is None:
            _logger.warning("No template rule matches %s; skipping", item.relative)
            skipped.append(item.relative)
            continue

        try:
            tags = resolve_asset_tags(
                item.entry_key,
                state.mode,
                base=state.base,
                dev_server=state.dev_server,
                manifest=state.manifest,
                preamble=state.preamble,
            )
        except ManifestEntryError as exc:
            _logger.warning("%s; skipping %s", exc, item.relative)
            skipped.append(item.relative)
            continue

        document = OutputDocument(
            input=item,
            path=derive_output_path(item.path, source_root),
            html=inject_tags(state.templates.get(template), tags),
            template=template,
        )
        try:
            plan.add(document)
        except OutputCollisionError as exc:
            _logger.error("%s; skipping", exc)
            skipped.append(item.relative)

    return plan, skipped


def _protected_paths(config: PanelGenConfig) -> List[Path]:
    """Paths output cleaning must never remove: the sources and every template."""
    paths = [config.source_root]
    paths.extend(config.root / rule.template for rule in config.rules)
    if config.dev.preamble_file is not None:
        paths.append(config.dev.preamble_file)
    return paths


class Orchestrator:
    """Coordinates discovery, resolution and writing for each build mode."""

    def __init__(
        self,
        scanner: InputScanner | None = None,
        writer_factory: Callable[[Path], OutputWriter] | None = None,
    ) -> None:
        self.scanner = scanner or InputScanner()
        self._writer_factory = writer_factory or OutputWriter
        self._template_stores: Dict[Path, TemplateStore] = {}
        self.logger = _logger

    def run_development(
        self,
        path: str | Path,
        *,
        dev_server: DevServerInfo | None = None,
        inputs: Iterable[str] | None = None,
    ) -> PassResult:
        """Regenerate every page with tags pointing at the dev server."""
        config = load_config(Path(path))
        entries = self._discover(config, inputs)
        templates = self._templates_for(config)
        server = dev_server or config.server.to_dev_server()
        state = BuildState(
            config=config,
            mode=BuildMode.DEVELOPMENT,
            templates=templates,
            dev_server=server,
            preamble=self._read_preamble(config),
        )
        self.logger.info("Generating development pages against %s", server.origin)
        return self._run_pass(state, entries)

    def on_server_ready(
        self,
        path: str | Path,
        dev_server: DevServerInfo,
        *,
        inputs: Iterable[str] | None = None,
    ) -> PassResult:
        """Re-run the development pass once the host reports its live address."""
        return self.run_development(path, dev_server=dev_server, inputs=inputs)

    def run_production(
        self,
        path: str | Path,
        *,
        inputs: Iterable[str] | None = None,
    ) -> PassResult:
        """Generate pages referencing the built bundle, after the host build finished."""
        config = load_config(Path(path))
        entries = self._discover(config, inputs)
        templates = self._templates_for(config)

        out_dir = config.root / config.out_dir
        try:
            manifest = load_manifest(out_dir)
        except ManifestError as exc:
            self.logger.error("Failed to load build manifest; pages won't be generated: %s", exc)
            return PassResult(mode=BuildMode.PRODUCTION, aborted=True, reason=str(exc))

        state = BuildState(
            config=config,
            mode=BuildMode.PRODUCTION,
            templates=templates,
            manifest=manifest,
        )
        self.logger.info("Generating production pages from %d manifest chunks", len(manifest))
        return self._run_pass(state, entries)

    def _run_pass(self, state: BuildState, entries: Sequence[InputFile]) -> PassResult:
        plan, skipped = render_documents(state, entries)
        writer = self._writer_factory(state.config.output_root)
        if state.config.output.clean:
            writer.clean(plan.top_level_dirs(), protect=_protected_paths(state.config))
        written = writer.write_all(plan)
        self.logger.info(
            "Wrote %d of %d pages (%d skipped)", len(written), len(entries), len(skipped)
        )
        return PassResult(mode=state.mode, written=written, skipped=skipped)

    def _discover(
        self, config: PanelGenConfig, inputs: Iterable[str] | None
    ) -> List[InputFile]:
        if inputs is not None:
            return self.scanner.from_paths(inputs, config)
        return self.scanner.scan(config)

    def _templates_for(self, config: PanelGenConfig) -> TemplateStore:
        store = self._template_stores.get(config.root)
        if store is None:
            store = TemplateStore(config.root)
            self._template_stores[config.root] = store
        store.preload(config.rules)
        return store

    def _read_preamble(self, config: PanelGenConfig) -> Optional[str]:
        preamble_file = config.dev.preamble_file
        if preamble_file is None:
            return None
        try:
            return preamble_file.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Unable to read dev preamble {preamble_file}: {exc}") from exc


__all__ = ["BuildState", "Orchestrator", "PassResult", "render_documents"]
