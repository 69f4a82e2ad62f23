"""CSV import command."""

import click
from cofi.cli.error_handling import resolve_user_or_exit
from cofi.domain.csv_import import CSVImportService


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--user", "username", required=True, help="Name of the importing user")
@click.pass_context
def import_csv(ctx, csv_file: str, username: str):
    """Import transactions from a CSV file.

    The file needs the columns description, category, amount, date and
    is_public. Rows are private unless is_public is "true" or "1".
    """
    user = resolve_user_or_exit(ctx, username)
    service = CSVImportService(ctx.obj["db"])

    try:
        result = service.import_file(user.id, csv_file)
    except (ValueError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {result.imported} of {result.total} transactions")
    if result.errors:
        click.echo(f"  Errors: {len(result.errors)}")
        for error in result.errors:
            click.echo(f"    {error}", err=True)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
