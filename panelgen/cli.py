"""CLI entrypoints for panelgen commands."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

from .config import load_config
from .errors import ConfigError, NoInputsError, PanelGenError
from .hostconfig import build_host_config
from .logging import configure_logging
from .models import BuildMode
from .orchestrator import Orchestrator, PassResult


def _add_common_options(parser: argparse.ArgumentParser, *, suppress_default: bool = False) -> None:
    default: object = argparse.SUPPRESS if suppress_default else False
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default,
        help="Only report warnings and errors.",
    )
    parser.add_argument(
        "--log-file",
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also write log records to this file.",
    )


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the bundle root (defaults to current directory).",
    )


def _add_input_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-i",
        "--input",
        dest="inputs",
        action="append",
        default=None,
        help="Entry file relative to the bundle root; repeatable. Skips source discovery.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="panelgen",
        description="Generate panel HTML pages with dev-server or production asset tags.",
    )
    _add_common_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    dev_parser = subparsers.add_parser(
        "dev",
        help="Generate pages that load entries from the development server.",
    )
    _add_common_options(dev_parser, suppress_default=True)
    _add_path_argument(dev_parser)
    _add_input_option(dev_parser)
    dev_parser.add_argument("--host", help="Dev server host (overrides config).")
    dev_parser.add_argument("--port", type=int, help="Dev server port (overrides config).")
    dev_parser.add_argument(
        "--https",
        action="store_true",
        default=None,
        help="Address the dev server over https.",
    )

    build_parser = subparsers.add_parser(
        "build",
        help="Generate pages from the production build manifest.",
    )
    _add_common_options(build_parser, suppress_default=True)
    _add_path_argument(build_parser)
    _add_input_option(build_parser)

    host_parser = subparsers.add_parser(
        "host-config",
        help="Print the settings the host bundler should merge into its config.",
    )
    _add_common_options(host_parser, suppress_default=True)
    _add_path_argument(host_parser)
    host_parser.add_argument(
        "--mode",
        choices=[mode.value for mode in BuildMode],
        default=BuildMode.DEVELOPMENT.value,
        help="Build mode the settings are for.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for panelgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        quiet=bool(args.quiet),
        log_file=Path(args.log_file) if args.log_file else None,
    )

    if args.command == "host-config":
        try:
            config = load_config(Path(args.path))
        except ConfigError as exc:
            parser.exit(1, f"{exc}\n")
        print(json.dumps(build_host_config(config, BuildMode(args.mode)), indent=2))
        return

    orchestrator = Orchestrator()
    try:
        if args.command == "dev":
            result = _run_dev(orchestrator, args)
        elif args.command == "build":
            result = orchestrator.run_production(args.path, inputs=args.inputs)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except NoInputsError as exc:
        parser.exit(1, f"{exc}\n")
    except PanelGenError as exc:
        parser.exit(1, f"panelgen {args.command} failed: {exc}\nRun with --verbose for more details.\n")

    if result.aborted:
        print(f"No pages generated: {result.reason}")
        return
    print(_summarise(result))


def _run_dev(orchestrator: Orchestrator, args: argparse.Namespace) -> PassResult:
    config = load_config(Path(args.path))
    server = config.server
    if args.host:
        server = replace(server, host=args.host)
    if args.port is not None:
        server = replace(server, port=args.port)
    if args.https is not None:
        server = replace(server, https=args.https)
    return orchestrator.run_development(
        args.path, dev_server=server.to_dev_server(), inputs=args.inputs
    )


def _summarise(result: PassResult) -> str:
    message = f"Generated {len(result.written)} {result.mode.value} page(s)"
    if result.skipped:
        message += f", skipped {len(result.skipped)}: {', '.join(result.skipped)}"
    return message


if __name__ == "__main__":
    main(sys.argv[1:])
