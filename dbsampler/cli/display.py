"""Rich display functions for the dbsampler CLI."""

from typing import List

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from dbsampler.cli.errors import DbSamplerCLIError
from dbsampler.config import ValidationResult
from dbsampler.errors import ConfigurationError
from dbsampler.migrator import MigrationResult
from dbsampler.planner import TablePlan
from dbsampler.spec import MigrationSet

console = Console()

MAX_LISTED_ISSUES = 10


def display_run_summary(result: MigrationResult) -> None:
    """Display rows copied per table, views and trigger failures of a run.

    Args:
        result: Outcome of Migrator.execute
    """
    console.print(
        f"✅ [bold green]Migration '{result.set_name}' completed[/bold green]"
    )

    table = Table(show_header=True, header_style="bold blue")
    table.add_column("Table", style="cyan")
    table.add_column("Rows", style="white", justify="right")

    for name in result.table_order:
        table.add_row(name, str(result.tables.get(name, 0)))

    console.print(table)
    console.print(
        f"📊 {result.total_rows} rows in {len(result.tables)} tables, "
        f"{len(result.views)} views, {result.duration_seconds:.1f}s"
    )

    if result.trigger_failures:
        display_warning("Some triggers could not be migrated:")
        for name, error in result.trigger_failures.items():
            console.print(f"  • [cyan]{name}[/cyan]: [red]{escape(error)}[/red]")


def display_plan(migration_set: MigrationSet, plan: TablePlan) -> None:
    """Display the processing order of a set with each table's dependencies."""
    console.print(
        f"📋 [bold blue]Migration '{migration_set.name}' "
        f"({migration_set.order} order)[/bold blue]"
    )

    table = Table(show_header=True, header_style="bold blue")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Table", style="cyan")
    table.add_column("Sampler", style="white")
    table.add_column("Depends on", style="white")

    for position, name in enumerate(plan.order, 1):
        spec = migration_set.tables[name]
        table.add_row(
            str(position),
            name,
            spec.sampler,
            ", ".join(plan.dependencies(name)) or "-",
        )

    console.print(table)

    if migration_set.views:
        console.print(f"👁️  Views: {', '.join(migration_set.views)}")

    for name, references in plan.unresolved.items():
        display_warning(
            f"'{name}' reads {', '.join(references)} which no table remembers"
        )


def display_validation_result(config_path: str, result: ValidationResult) -> None:
    """Display validation errors and warnings for a config file."""
    for warning in result.warnings:
        display_warning(warning)

    if result.is_valid:
        console.print(f"✅ [bold green]{config_path} is valid[/bold green]")
        return

    console.print(f"❌ [bold red]{config_path} is invalid[/bold red]")
    _display_issues(result.errors)


def display_configuration_error(error: ConfigurationError) -> None:
    """Display a configuration error and any collected problems."""
    console.print(
        f"❌ [bold red]Configuration error: {escape(error.message)}[/bold red]"
    )
    if error.table:
        console.print(f"📍 [dim]Table: {error.table}[/dim]")
    if error.errors:
        _display_issues(error.errors)


def display_cli_error(error: DbSamplerCLIError) -> None:
    console.print(f"❌ [bold red]{escape(error.message)}[/bold red]")
    for suggestion in error.suggestions:
        console.print(f"💡 [dim]{escape(suggestion)}[/dim]")


def display_generic_error(error: Exception, context: str = "") -> None:
    """Display generic error with context.

    Args:
        error: Exception that occurred
        context: Optional context about where the error occurred
    """
    context_text = f" during {context}" if context else ""
    console.print(f"❌ [bold red]Error{context_text}[/bold red]")
    console.print(f"🔍 [dim]{escape(str(error))}[/dim]")


def display_info_panel(title: str, content: str, style: str = "blue") -> None:
    panel = Panel(content, title=title, border_style=style)
    console.print(panel)


def display_warning(message: str) -> None:
    console.print(f"⚠️  [bold yellow]{escape(message)}[/bold yellow]")


def _display_issues(issues: List[str]) -> None:
    console.print("\n📋 [yellow]Issues found:[/yellow]")
    for i, issue in enumerate(issues[:MAX_LISTED_ISSUES], 1):
        console.print(f"  {i}. [red]{escape(issue)}[/red]")

    if len(issues) > MAX_LISTED_ISSUES:
        console.print(f"  ... and {len(issues) - MAX_LISTED_ISSUES} more issues")
