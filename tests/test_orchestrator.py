"""End-to-end tests for development and production generation passes."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from panelgen.errors import NoInputsError
from panelgen.models import BuildMode, DevServerInfo
from panelgen.orchestrator import Orchestrator
from tests._fixtures.bundle_builder import BundleBuilder

_CONFIG = """\
server:
  port: 5173
inputs:
  "graphics/special_graphic.js": "templates/special.html"
  "graphics/*/main.js": "templates/graphics.html"
  "dashboard/*/main.js": "templates/dashboard.html"
"""


def _bundle(builder: BundleBuilder) -> Path:
    builder.write(
        {
            ".panelgen.yml": _CONFIG,
            "templates/special.html": "<html><head><title>special</title></head><body></body></html>\n",
            "templates/graphics.html": "<html><head><title>graphic</title></head><body></body></html>\n",
            "templates/dashboard.html": "<html><head><title>dash</title></head><body></body></html>\n",
            "src/graphics/special_graphic.js": "export {}\n",
            "src/graphics/clock/main.js": "export {}\n",
            "src/dashboard/controls/main.js": "export {}\n",
        }
    )
    return builder.path()


def _manifest() -> dict:
    return {
        "src/graphics/special_graphic.js": {"file": "special.js", "imports": ["_shared.js"]},
        "src/graphics/clock/main.js": {
            "file": "clock.js",
            "css": ["assets/clock.css"],
            "imports": ["_shared.js"],
        },
        "src/dashboard/controls/main.js": {"file": "controls.js"},
        "_shared.js": {"file": "shared.js", "css": ["assets/shared.css", "assets/clock.css"]},
    }


def test_development_pass_writes_pages_for_every_input(bundle_builder: BundleBuilder) -> None:
    root = _bundle(bundle_builder)

    result = Orchestrator().run_development(root)

    assert result.mode is BuildMode.DEVELOPMENT
    assert result.skipped == []
    assert sorted(path.relative_to(root).as_posix() for path in result.written) == [
        "dashboard/controls/main.html",
        "graphics/clock/main.html",
        "graphics/special_graphic.html",
    ]
    clock = bundle_builder.read("graphics/clock/main.html")
    assert clock == (
        "<html><head><title>graphic</title>"
        '<script type="module" src="http://localhost:5173/bundles/mybundle/@vite/client"></script>\n'
        '<script type="module" src="http://localhost:5173/bundles/mybundle/src/graphics/clock/main.js"></script>'
        "</head><body></body></html>\n"
    )
    assert "<title>special</title>" in bundle_builder.read("graphics/special_graphic.html")


def test_server_ready_regenerates_with_reported_address(bundle_builder: BundleBuilder) -> None:
    root = _bundle(bundle_builder)
    orchestrator = Orchestrator()
    orchestrator.run_development(root)

    orchestrator.on_server_ready(root, DevServerInfo(protocol="http", host="10.0.0.5", port=4000))

    page = bundle_builder.read("dashboard/controls/main.html")
    assert "http://10.0.0.5:4000/bundles/mybundle/src/dashboard/controls/main.js" in page
    assert "localhost:5173" not in page


def test_production_pass_walks_manifest(bundle_builder: BundleBuilder) -> None:
    root = _bundle(bundle_builder)
    bundle_builder.write_manifest(_manifest())

    result = Orchestrator().run_production(root)

    assert not result.aborted
    assert len(result.written) == 3
    clock = bundle_builder.read("graphics/clock/main.html")
    assert clock == (
        "<html><head><title>graphic</title>"
        '<link rel="stylesheet" href="/bundles/mybundle/shared/dist/assets/clock.css" />\n'
        '<link rel="stylesheet" href="/bundles/mybundle/shared/dist/assets/shared.css" />\n'
        '<script type="module" src="/bundles/mybundle/shared/dist/clock.js"></script>'
        "</head><body></body></html>\n"
    )
    assert "shared.js" not in clock


def test_production_pass_is_idempotent(bundle_builder: BundleBuilder) -> None:
    root = _bundle(bundle_builder)
    bundle_builder.write_manifest(_manifest())
    orchestrator = Orchestrator()

    orchestrator.run_production(root)
    first = {path: bundle_builder.read(path) for path in ("graphics/clock/main.html", "dashboard/controls/main.html")}
    Orchestrator().run_production(root)
    second = {path: bundle_builder.read(path) for path in first}

    assert first == second


def test_unmatched_input_is_skipped_with_warning(
    bundle_builder: BundleBuilder, caplog, monkeypatch
) -> None:
    root = _bundle(bundle_builder)
    bundle_builder.write({"src/graphics/loose.js": "export {}\n"})
    monkeypatch.setattr(logging.getLogger("panelgen"), "propagate", True)
    caplog.set_level(logging.WARNING, logger="panelgen")

    result = Orchestrator().run_development(
        root, inputs=["src/graphics/loose.js", "src/graphics/clock/main.js"]
    )

    assert result.skipped == ["graphics/loose.js"]
    assert not (root / "graphics" / "loose.html").exists()
    assert (root / "graphics" / "clock" / "main.html").exists()
    assert any("graphics/loose.js" in record.getMessage() for record in caplog.records)


def test_malformed_manifest_aborts_production_pass(bundle_builder: BundleBuilder) -> None:
    root = _bundle(bundle_builder)
    bundle_builder.write_manifest("{ definitely not json")

    result = Orchestrator().run_production(root)

    assert result.aborted
    assert result.written == []
    assert not (root / "graphics").exists()
    assert not (root / "dashboard").exists()

    dev_result = Orchestrator().run_development(root)
    assert len(dev_result.written) == 3


def test_missing_manifest_aborts_without_touching_previous_output(bundle_builder: BundleBuilder) -> None:
    root = _bundle(bundle_builder)
    Orchestrator().run_development(root)

    result = Orchestrator().run_production(root)

    assert result.aborted
    assert (root / "graphics" / "clock" / "main.html").exists()


def test_missing_manifest_entry_skips_only_that_input(bundle_builder: BundleBuilder) -> None:
    root = _bundle(bundle_builder)
    manifest = _manifest()
    del manifest["src/dashboard/controls/main.js"]
    bundle_builder.write_manifest(manifest)

    result = Orchestrator().run_production(root)

    assert result.skipped == ["dashboard/controls/main.js"]
    assert len(result.written) == 2


def test_output_collision_keeps_first_input(bundle_builder: BundleBuilder) -> None:
    bundle_builder.write_default_templates()
    bundle_builder.write(
        {
            "src/graphics/foo.js": "export {}\n",
            "src/graphics/foo.ts": "export {}\n",
        }
    )

    result = Orchestrator().run_development(bundle_builder.path())

    assert result.skipped == ["graphics/foo.ts"]
    page = bundle_builder.read("graphics/foo.html")
    assert "src/graphics/foo.js" in page


def test_stale_pages_are_removed_before_writing(bundle_builder: BundleBuilder) -> None:
    root = _bundle(bundle_builder)
    bundle_builder.write({"graphics/removed/main.html": "stale"})

    Orchestrator().run_development(root)

    assert not (root / "graphics" / "removed").exists()


def test_cleaning_spares_sources_when_output_dir_is_source_dir(bundle_builder: BundleBuilder) -> None:
    bundle_builder.write_default_templates()
    bundle_builder.write(
        {
            ".panelgen.yml": "output:\n  dir: src\n",
            "src/graphics/clock/main.js": "export {}\n",
        }
    )
    root = bundle_builder.path()

    result = Orchestrator().run_development(root)

    assert (root / "src" / "graphics" / "clock" / "main.js").is_file()
    assert (root / "src" / "graphics" / "template.html").is_file()
    assert [path.relative_to(root).as_posix() for path in result.written] == [
        "src/graphics/clock/main.html"
    ]


def test_cleaning_spares_sources_when_source_dir_is_project_root(bundle_builder: BundleBuilder) -> None:
    bundle_builder.write(
        {
            ".panelgen.yml": "src_dir: .\n",
            "graphics/template.html": "<html><head></head><body></body></html>\n",
            "graphics/clock.js": "export {}\n",
        }
    )
    root = bundle_builder.path()

    result = Orchestrator().run_development(root)

    assert (root / "graphics" / "clock.js").is_file()
    assert (root / "graphics" / "template.html").is_file()
    assert [path.relative_to(root).as_posix() for path in result.written] == ["graphics/clock.html"]
    assert "bundles/mybundle/graphics/clock.js" in bundle_builder.read("graphics/clock.html")


def test_repeated_host_inputs_produce_one_page(bundle_builder: BundleBuilder) -> None:
    root = _bundle(bundle_builder)

    result = Orchestrator().run_development(
        root, inputs=["./src/graphics/clock/main.js", "src/graphics/clock/main.js"]
    )

    assert result.skipped == []
    assert [path.relative_to(root).as_posix() for path in result.written] == [
        "graphics/clock/main.html"
    ]


def test_dev_preamble_is_injected_first(bundle_builder: BundleBuilder) -> None:
    root = _bundle(bundle_builder)
    bundle_builder.write(
        {
            ".panelgen.yml": _CONFIG + "dev:\n  preamble_file: preamble.html\n",
            "preamble.html": '<script type="module" src="%BASE_URL%@react-refresh"></script>\n',
        }
    )

    Orchestrator().run_development(root)

    page = bundle_builder.read("graphics/clock/main.html")
    preamble = '<script type="module" src="http://localhost:5173/bundles/mybundle/@react-refresh"></script>'
    assert page.index(preamble) < page.index("@vite/client")


def test_no_inputs_is_fatal(bundle_builder: BundleBuilder) -> None:
    bundle_builder.write_default_templates()
    with pytest.raises(NoInputsError):
        Orchestrator().run_development(bundle_builder.path())
