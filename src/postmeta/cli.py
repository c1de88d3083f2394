"""Command-line interface entry point for postmeta."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from typing import Any

from postmeta import __version__, pipelines
from postmeta.errors import PostmetaError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="postmeta", description="Postmeta command-line interface"
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    subparsers = parser.add_subparsers(dest="command")

    shared = argparse.ArgumentParser(add_help=False)
    shared.add_argument(
        "--config-path", dest="config_path", help="Override path to config file"
    )

    parse = subparsers.add_parser(
        "parse", parents=[shared], help="Print the metadata header of a document"
    )
    parse.add_argument("path", help="Markdown document to read")
    parse.add_argument(
        "--json", dest="json", action="store_true", default=None, help="Print JSON"
    )
    parse.add_argument(
        "--duplicate-policy",
        dest="duplicate_policy",
        choices=("last", "first"),
        help="Which declaration of a repeated key wins",
    )
    parse.add_argument(
        "--unknown-key-policy",
        dest="unknown_key_policy",
        choices=("skip", "stop"),
        help="Skip unknown keys or end the header at them",
    )
    parse.add_argument(
        "--trim-categories",
        dest="trim_categories",
        action="store_true",
        default=None,
        help="Strip whitespace around each category",
    )
    parse.add_argument("--encoding", dest="encoding", help="Document encoding")
    parse.add_argument(
        "--verbose",
        dest="verbose_logging",
        action="store_true",
        default=None,
        help="Enable debug logging",
    )

    subparsers.add_parser("init", parents=[shared], help="Write a default config file")

    config_cmd = subparsers.add_parser(
        "config", parents=[shared], help="Inspect or change configuration"
    )
    config_subparsers = config_cmd.add_subparsers(dest="config_command")
    config_subparsers.add_parser(
        "show", help="Show effective configuration"
    )
    config_set = config_subparsers.add_parser(
        "set", help="Update one key in the config file"
    )
    config_set.add_argument("key", help="Setting name")
    config_set.add_argument("value", help="New value")

    return parser


def _normalize_cli_options(namespace: argparse.Namespace) -> dict[str, Any]:
    cli_options = {
        key: value
        for key, value in vars(namespace).items()
        if key not in {"command", "config_command", "version"}
    }
    return {key: value for key, value in cli_options.items() if value is not None}


def main(argv: Sequence[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.version:
        print(__version__)
        raise SystemExit(0)
    if args.command is None:
        parser.print_help()
        return

    handlers: dict[str, Any] = {
        "parse": pipelines.run_parse,
        "init": pipelines.run_init,
    }
    cli_options = _normalize_cli_options(args)

    try:
        if args.command == "config":
            if args.config_command == "set":
                pipelines.run_config_set(cli_options)
            else:
                pipelines.run_config_show(cli_options)
            return
        handlers[args.command](cli_options)
    except PostmetaError as exc:
        print(f"postmeta: error: {exc}", file=sys.stderr)
        if exc.hint:
            print(f"postmeta: hint: {exc.hint}", file=sys.stderr)
        raise SystemExit(1) from exc


if __name__ == "__main__":  # pragma: no cover
    main()
