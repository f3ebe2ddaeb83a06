from __future__ import annotations

from typing import Any

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table as RichTable
from rich.tree import Tree

from .codegen.core.schema import FieldType, Schema
from .logging_config import get_logger
from .relations import suggest_relations

logger = get_logger(__name__)


class CLIHandler:
    """Handle command-line interface (CLI) operations for schema inspection."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize CLI handler."""
        self.schema: Schema | None = None
        self.source: str | None = None
        self.console = console or Console()
        logger.debug("CLIHandler initialized")

    def set_schema(self, schema: Schema, source: str) -> None:
        """Set the schema and source for processing.

        Args:
            schema: The loaded schema.
            source: The source name or identifier.
        """
        self.schema = schema
        self.source = source
        logger.info("Schema set for source: %s", source)

    def run(self, args: Any) -> int:
        """Run the inspection command selected on the command line.

        Args:
            args: Parsed CLI arguments (``command`` is ``info`` or ``relations``).

        Returns:
            Exit code (0 for success, 1 for failure).
        """
        if self.schema is None:
            self.console.print("❌ [red]No schema loaded[/red]")
            logger.warning("No schema loaded; aborting CLI run")
            return 1

        self.console.print(f"📄 Loaded: {escape(self.source or '')}")

        command = getattr(args, "command", "info")
        if command == "info":
            self._handle_tree_display()
            self._handle_stats()
        elif command == "relations":
            self._handle_relations()
        else:
            self.console.print(f"❌ [red]Unknown command: {escape(str(command))}[/red]")
            logger.warning("Unknown command: %s", command)
            return 1
        return 0

    def _handle_tree_display(self) -> None:
        schema = self.schema
        tree = Tree(f"🗂  [bold]{escape(schema.name)}[/bold] [dim]v{escape(schema.version)}[/dim]")

        for table in schema.tables:
            branch = tree.add(f"[bold cyan]{escape(table.name)}[/bold cyan]")
            for field in table.fields:
                flags = []
                if field.primary_key:
                    flags.append("PK")
                if field.required:
                    flags.append("required")
                if field.unique:
                    flags.append("unique")
                if field.foreign_key:
                    flags.append(f"→ {field.foreign_key.render('dotted')}")
                suffix = f" [dim]({escape(', '.join(flags))})[/dim]" if flags else ""
                branch.add(
                    f"{escape(field.name)}: [green]{field.type_general.value}[/green]{suffix}"
                )

        self.console.print()
        self.console.print(tree)
        logger.info("Displayed schema tree for %s", schema.name)

    def _handle_stats(self) -> None:
        schema = self.schema
        fields = [f for t in schema.tables for f in t.fields]

        stats = RichTable(
            title="📊 Schema Statistics",
            box=box.SIMPLE,
            show_header=True,
            header_style="bold cyan",
        )
        stats.add_column("Metric", style="bold")
        stats.add_column("Value", justify="right", style="green")

        stats.add_row("Tables", str(len(schema.tables)))
        stats.add_row("Fields", str(len(fields)))
        stats.add_row("Required", str(sum(1 for f in fields if f.required)))
        stats.add_row("Unique", str(sum(1 for f in fields if f.unique)))
        stats.add_row("Foreign keys", str(sum(1 for f in fields if f.foreign_key)))
        stats.add_row(
            "Enums", str(sum(1 for f in fields if f.type_general == FieldType.ENUM))
        )

        self.console.print()
        self.console.print(stats)

    def _handle_relations(self) -> None:
        suggestions = suggest_relations(self.schema)
        if not suggestions:
            self.console.print("[yellow]No relation suggestions.[/yellow]")
            logger.info("No relation suggestions for %s", self.schema.name)
            return

        table = RichTable(title="💡 Suggested Relations", box=box.ROUNDED)
        table.add_column("From", style="bold")
        table.add_column("To", style="cyan")
        table.add_column("Type", justify="center")
        table.add_column("Confidence")
        table.add_column("Reason", style="dim")

        for suggestion in suggestions:
            table.add_row(
                escape(f"{suggestion.from_table}.{suggestion.from_field}"),
                escape(f"{suggestion.to_table}.{suggestion.to_field}"),
                suggestion.cardinality.value,
                suggestion.confidence,
                escape(suggestion.reason),
            )

        self.console.print()
        self.console.print(table)
        logger.info("Displayed %d relation suggestion(s)", len(suggestions))
