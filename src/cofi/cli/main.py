"""Main CLI entry point."""

from pathlib import Path

import click
from cofi.config import load_config
from cofi.database.factories import create_sqlite_database
from cofi.logger import configure_logging

# Import and register all commands at module level
from cofi.cli.commands import (
    user,
    add,
    transaction,
    import_cmd,
    report,
    categories,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides COFI_DB_PATH environment variable)",
    envvar="COFI_DB_PATH",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Path to household config file (overrides COFI_CONFIG_PATH environment variable)",
    envvar="COFI_CONFIG_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, config_path: str | None, verbose: bool):
    """Cofi - Shared household finance tracker.

    Record private and public transactions for every member of the
    household and report monthly spending and income.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            ctx.obj["config"] = load_config(Path(config_path) if config_path else None)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)

        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
user.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
import_cmd.register_commands(cli)
report.register_commands(cli)
categories.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
