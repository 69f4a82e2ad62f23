"""Predefined category listing command."""

import click


@click.command("categories")
@click.pass_context
def list_categories(ctx):
    """List the predefined categories from the household config."""
    categories = ctx.obj["config"].predefined_categories
    if not categories:
        click.echo("No predefined categories configured.")
        return
    for name in categories:
        click.echo(name)


def register_commands(cli):
    """Register categories command with main CLI."""
    cli.add_command(list_categories)
