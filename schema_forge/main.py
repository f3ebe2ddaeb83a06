"""Command-line entry point for schema-forge."""

from __future__ import annotations

import argparse
import sys

from rich.console import Console
from rich.markup import escape

from . import __version__
from .cli import CLIHandler
from .codegen.cli_integration import (
    create_generate_subparser,
    list_artifacts,
    show_artifact_info,
)
from .logging_config import get_logger, setup_logging
from .utils import SchemaLoaderError, load_schema

logger = get_logger(__name__)


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    input_group = parser.add_mutually_exclusive_group(required=True)
    input_group.add_argument("file", nargs="?", help="Schema JSON file")
    input_group.add_argument("--url", help="URL to fetch the schema JSON from")


def create_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="schema-forge",
        description="Generate SQL, content configs, CSV, pages and docs from table schemas",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console log level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write DEBUG logs to this file")
    parser.add_argument(
        "--list-artifacts",
        action="store_true",
        help="List supported artifact kinds and exit",
    )
    parser.add_argument(
        "--artifact-info",
        metavar="ARTIFACT",
        help="Show details about one artifact kind and exit",
    )

    subparsers = parser.add_subparsers(dest="command")

    create_generate_subparser(subparsers)

    info_parser = subparsers.add_parser("info", help="Show schema tree and statistics")
    _add_input_arguments(info_parser)
    info_parser.set_defaults(func=_handle_inspection)

    relations_parser = subparsers.add_parser(
        "relations", help="Suggest relations from naming conventions"
    )
    _add_input_arguments(relations_parser)
    relations_parser.set_defaults(func=_handle_inspection)

    return parser


def _handle_inspection(args: argparse.Namespace) -> int:
    console = Console()
    try:
        source, schema = load_schema(file_path=args.file, url=args.url)
    except (SchemaLoaderError, FileNotFoundError) as e:
        console.print(f"❌ [red]{escape(str(e))}[/red]")
        return 1

    handler = CLIHandler(console)
    handler.set_schema(schema, source)
    return handler.run(args)


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return its exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level, args.log_file)
    logger.debug("Arguments: %s", args)

    if args.list_artifacts:
        return list_artifacts()

    if args.artifact_info:
        return show_artifact_info(args.artifact_info)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
