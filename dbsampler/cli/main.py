"""dbsampler CLI - sample a database into a smaller, cleaned copy.

Commands:
- run: copy schema and sampled rows from source to destination
- plan: show the table processing order without connecting anywhere
- validate: check a migration config and report every problem found
"""

from typing import Optional

import typer

from dbsampler.cli.display import (
    console,
    display_cli_error,
    display_configuration_error,
    display_generic_error,
    display_info_panel,
    display_plan,
    display_run_summary,
    display_validation_result,
)
from dbsampler.cli.errors import DbSamplerCLIError, MissingConnectionError
from dbsampler.config import load_migration_config, validate_config_file
from dbsampler.database import (
    DestinationDatabase,
    SourceDatabase,
    create_database_engine,
)
from dbsampler.errors import ConfigurationError, DbSamplerError
from dbsampler.logging import get_logger
from dbsampler.migrator import Migrator
from dbsampler.planner import plan_table_order

logger = get_logger(__name__)

app = typer.Typer(
    name="dbsampler",
    help="dbsampler - copy a sampled, cleaned subset of a database",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        from dbsampler import __version__

        console.print(f"dbsampler v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """dbsampler - copy a sampled, cleaned subset of a database.

    Examples:
        dbsampler validate migrations/staging.yml
        dbsampler plan migrations/staging.yml
        dbsampler run migrations/staging.yml --destination sqlite:///sample.db
    """


def _setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    from dbsampler.logging import configure_logging

    configure_logging(verbose=verbose, quiet=quiet)


@app.command()
def run(
    config_path: str = typer.Argument(..., help="Migration config (YAML or JSON)"),
    source: Optional[str] = typer.Option(
        None, "--source", "-s", help="Source database URL, overrides the config"
    ),
    destination: Optional[str] = typer.Option(
        None,
        "--destination",
        "-d",
        help="Destination database URL, overrides the config",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only show warnings and errors"
    ),
) -> None:
    """Copy schema and sampled rows from the source to the destination."""
    _setup_logging(verbose, quiet)

    try:
        config = load_migration_config(config_path)
        source_config = source or config.source
        destination_config = destination or config.destination
        if source_config is None:
            raise MissingConnectionError("source", config_path)
        if destination_config is None:
            raise MissingConnectionError("destination", config_path)

        source_db = SourceDatabase(create_database_engine(source_config))
        destination_db = DestinationDatabase(
            create_database_engine(destination_config)
        )
        with source_db, destination_db:
            if not quiet:
                display_info_panel(
                    f"Migration '{config.migration_set.name}'",
                    f"Source: {source_db.dialect_name}\n"
                    f"Destination: {destination_db.dialect_name}\n"
                    f"Tables: {len(config.migration_set.tables)}",
                )
            result = Migrator(source_db, destination_db).execute(
                config.migration_set
            )

        display_run_summary(result)

    except ConfigurationError as e:
        display_configuration_error(e)
        raise typer.Exit(1)
    except DbSamplerCLIError as e:
        display_cli_error(e)
        raise typer.Exit(1)
    except DbSamplerError as e:
        display_generic_error(e, "migration")
        raise typer.Exit(1)
    except Exception as e:
        display_generic_error(e, "migration")
        logger.error(f"Unexpected error during migration: {e}")
        raise typer.Exit(1)


@app.command()
def plan(
    config_path: str = typer.Argument(..., help="Migration config (YAML or JSON)"),
) -> None:
    """Show the order tables will be processed in, without touching a database."""
    try:
        config = load_migration_config(config_path)
        table_plan = plan_table_order(config.migration_set)
        display_plan(config.migration_set, table_plan)
    except ConfigurationError as e:
        display_configuration_error(e)
        raise typer.Exit(1)


@app.command()
def validate(
    config_path: str = typer.Argument(..., help="Migration config (YAML or JSON)"),
) -> None:
    """Check a migration config and report every problem found."""
    result = validate_config_file(config_path)
    display_validation_result(config_path, result)
    if not result.is_valid:
        raise typer.Exit(1)


def cli() -> None:
    """Entry point for the console script."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n⚠️  [yellow]Operation cancelled by user[/yellow]")
        raise SystemExit(130)


if __name__ == "__main__":
    cli()
