"""CLI entrypoints for wrapgen commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .builder import Builder
from .config import ConfigError, load_config
from .errors import TransformError
from .logging import configure_logging


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_log_file_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "--log-file",
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also write a timestamped debug log of the run to this file.",
    )


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .wrapgen.yml or the directory containing it (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wrapgen",
        description="Generate React wrapper modules for custom element components.",
    )
    _add_verbose_option(parser)
    _add_log_file_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Generate wrapper modules for component sources.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    _add_log_file_option(build_parser, suppress_default=True)
    _add_config_option(build_parser)
    build_parser.add_argument(
        "paths",
        nargs="*",
        help="Files or directories to build (defaults to the configured components root).",
    )
    build_parser.add_argument(
        "--out-dir",
        help="Directory receiving generated wrappers, mirroring the components root.",
    )
    build_parser.add_argument(
        "--non-upgradable",
        action="store_true",
        help="Do not re-export the original custom element class as CustomElement.",
    )
    build_parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop at the first file that fails to transform.",
    )
    build_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print generated modules instead of writing them.",
    )

    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Print the metadata harvested from a component module as JSON.",
    )
    _add_verbose_option(inspect_parser, suppress_default=True)
    _add_log_file_option(inspect_parser, suppress_default=True)
    _add_config_option(inspect_parser)
    inspect_parser.add_argument("path", help="Component module to inspect.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for wrapgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)

    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"Invalid configuration: {exc}\n")

    if args.command == "build":
        if args.out_dir:
            config.build.out_dir = Path(args.out_dir)
        if args.non_upgradable:
            config.transform.upgradable = False
        if args.fail_fast:
            config.build.fail_fast = True
        paths = [Path(item) for item in args.paths] or [config.transform.components_root]
        dry_run = bool(getattr(args, "dry_run", False))
        report = Builder(config).build(paths, dry_run=dry_run)
        if dry_run:
            for result in report.succeeded:
                print(f"// {result.output}")
                print(result.code, end="")
        for result in report.failed:
            print(result.error, file=sys.stderr)
        if not report.ok:
            parser.exit(1, f"wrapgen build failed for {len(report.failed)} file(s)\n")
        print(f"Generated {len(report.succeeded)} wrapper module(s)")
    elif args.command == "inspect":
        try:
            summary = Builder(config).inspect(Path(args.path))
        except (TransformError, OSError, UnicodeDecodeError) as exc:
            parser.exit(1, f"{exc}\n")
        print(json.dumps(summary, indent=2))
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
