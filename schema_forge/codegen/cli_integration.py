"""
CLI integration for artifact generation.

Provides the ``generate`` subcommand and the artifact listing commands.
"""

import argparse
from pathlib import Path

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table

from . import (
    ArtifactKind,
    GenerationOptions,
    GeneratorError,
    RegistryError,
    generate_artifacts,
    get_artifact_info,
    get_registry,
    list_all_artifact_info,
)
from .core.config import ConfigError, get_config_manager
from ..logging_config import get_logger
from ..utils import SchemaLoaderError, load_schema

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()

SYNTAX_LEXERS = {
    "sql": "sql",
    "content_config": "typescript",
    "acf_json": "json",
    "csv": "text",
    "page": "html",
    "documentation": "markdown",
    "typescript": "typescript",
    "prisma": "text",
    "sample_data": "text",
    "schema_json": "json",
}


def create_generate_subparser(subparsers) -> argparse.ArgumentParser:
    """
    Create the ``generate`` subcommand parser.

    For use with: schema-forge generate [options] SCHEMA

    Args:
        subparsers: Subparser group from main parser

    Returns:
        Configured subparser for the generate command
    """
    parser = subparsers.add_parser(
        "generate",
        help="Generate artifacts from a schema",
        description="Generate SQL, configs, CSV, pages and docs from a schema file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  schema-forge generate schema.json
  schema-forge generate schema.json --table users --artifacts sql,docs
  schema-forge generate schema.json -a sql --dialect sqlite -o build/
  schema-forge generate --url https://example.com/schema.json -a sample_data --seed 42
        """.strip(),
    )

    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("file", nargs="?", help="Schema JSON file")
    input_group.add_argument("--url", help="URL to fetch the schema JSON from")

    parser.add_argument(
        "--table", "-t", metavar="NAME", help="Generate for one table only"
    )
    parser.add_argument(
        "--artifacts",
        "-a",
        metavar="LIST",
        help="Comma-separated artifact kinds or aliases (default: the six core kinds)",
    )
    parser.add_argument(
        "--dialect",
        "-d",
        default=None,
        help="SQL dialect: postgres, sqlite or mysql (default: postgres)",
    )
    parser.add_argument(
        "--output-dir", "-o", metavar="DIR", help="Write artifacts to DIR instead of stdout"
    )
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    parser.add_argument(
        "--sample-rows", type=int, metavar="N", help="Rows of sample data to generate"
    )
    parser.add_argument(
        "--seed", type=int, metavar="N", help="Seed for reproducible sample UUIDs"
    )
    parser.add_argument(
        "--no-comments", action="store_true", help="Omit comments from generated output"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Show generation metadata"
    )

    parser.set_defaults(func=handle_generate_command)
    return parser


def handle_generate_command(args: argparse.Namespace) -> int:
    """
    Handle the generate subcommand.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        if not (getattr(args, "file", None) or getattr(args, "url", None)):
            raise CLIError("Input source required (file or --url)")

        _, schema = load_schema(file_path=args.file, url=args.url)

        target = schema
        if args.table:
            target = schema.get_table(args.table)
            if target is None:
                raise CLIError(
                    f"Table '{args.table}' not found "
                    f"(available: {', '.join(t.name for t in schema.tables) or 'none'})"
                )

        options = _build_options(args)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task(f"[cyan]Generating artifacts for {escape(target.name)}...", total=None)
            bundle = generate_artifacts(target, options)

        return _output_bundle(bundle, args)

    except (CLIError, SchemaLoaderError, RegistryError, ConfigError, GeneratorError) as e:
        console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        logger.debug("Generate command failed", exc_info=True)
        return 1
    except FileNotFoundError as e:
        console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        return 1


def _parse_kinds(value):
    if not value:
        return ArtifactKind.core()
    names = [part.strip() for part in value.split(",") if part.strip()]
    if not names:
        raise CLIError("No artifact kind selected")
    return [ArtifactKind.parse(name) for name in names]


def _build_options(args: argparse.Namespace) -> GenerationOptions:
    """Build generation options from CLI arguments."""
    config = {}

    if getattr(args, "config", None):
        config.update(get_config_manager().load_config_file(args.config))

    if getattr(args, "no_comments", False):
        config["add_comments"] = False

    if getattr(args, "seed", None) is not None:
        config["sample_seed"] = args.seed

    dialect = args.dialect or config.pop("dialect", None) or "postgres"

    return GenerationOptions(
        kinds=_parse_kinds(getattr(args, "artifacts", None)),
        dialect=dialect,
        sample_rows=getattr(args, "sample_rows", None),
        config=config,
    )


def _output_bundle(bundle, args: argparse.Namespace) -> int:
    """Write or print generated artifacts with rich formatting."""
    output_dir = getattr(args, "output_dir", None)

    if output_dir:
        directory = Path(output_dir)
        try:
            directory.mkdir(parents=True, exist_ok=True)
            for kind, content in bundle.artifacts.items():
                path = directory / bundle.filenames[kind]
                path.write_text(content, encoding="utf-8")
                console.print(f"[green]✓[/green] {kind} saved to [cyan]{escape(str(path))}[/cyan]")
        except OSError as e:
            console.print(f"[red]✗ Failed to write to {escape(str(directory))}:[/red] {escape(str(e))}")
            return 1
    else:
        for kind, content in bundle.artifacts.items():
            border = "═" * 30
            console.print(f"[green]{border} 📄 {kind} ({escape(bundle.filenames[kind])}) {border}[/green]\n")
            console.print(Syntax(content, SYNTAX_LEXERS.get(kind, "text"), theme="monokai"))
            console.print()

    if getattr(args, "verbose", False):
        metadata_table = Table(
            title="📊 Generation Metadata",
            box=box.SIMPLE,
            show_header=True,
            header_style="bold cyan",
        )
        metadata_table.add_column("Artifact", style="bold")
        metadata_table.add_column("File", style="green")
        metadata_table.add_column("MIME type", style="cyan")
        metadata_table.add_column("Size", justify="right")

        for kind, content in bundle.artifacts.items():
            metadata_table.add_row(
                kind,
                escape(bundle.filenames[kind]),
                bundle.mime_types[kind],
                f"{len(content)} chars",
            )

        console.print()
        console.print(metadata_table)

    warnings = sorted({w for items in bundle.warnings.values() for w in items})
    if warnings:
        console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in warnings:
            console.print(f"  [yellow]•[/yellow] {escape(warning)}")
        console.print()

    for kind, message in bundle.errors.items():
        console.print(f"[red]✗ {kind} generation failed:[/red] {escape(message)}")

    return 0 if bundle.success else 1


def list_artifacts() -> int:
    """List supported artifact kinds with details."""
    artifact_info = list_all_artifact_info()

    table = Table(title="📋 Supported Artifacts", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Artifact", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("MIME type", style="dim")
    table.add_column("Aliases", style="blue")

    for name, info in sorted(artifact_info.items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(f"🔧 {name}", info["file_extension"], info["mime_type"], aliases)

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold]Usage:[/bold] schema-forge generate [dim]schema.json[/dim] "
            "--artifacts [cyan]sql,docs[/cyan]\n"
            "[bold]Info:[/bold] schema-forge --artifact-info [cyan]ARTIFACT[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0


def show_artifact_info(kind: str) -> int:
    """Show detailed information about one artifact kind."""
    if not get_registry().is_supported(kind):
        console.print(f"[red]✗ Artifact '{escape(kind)}' is not supported[/red]")
        console.print("[dim]Use --list-artifacts to see available options[/dim]")
        return 1

    info = get_artifact_info(kind)

    info_text = f"""[bold]Artifact:[/bold] {info['name']}
[bold]File Extension:[/bold] {info['file_extension']}
[bold]MIME type:[/bold] {info['mime_type']}
[bold]Generator Class:[/bold] {info['class']}
[bold]Module:[/bold] {info['module']}"""

    if info["aliases"]:
        info_text += f"\n[bold]Aliases:[/bold] {', '.join(info['aliases'])}"

    console.print()
    console.print(Panel(info_text, title=f"🔧 {info['name']} generator", border_style="green"))
    return 0
