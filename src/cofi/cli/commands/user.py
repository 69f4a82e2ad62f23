"""User management commands."""

import click
from cofi.cli.error_handling import handle_domain_error
from cofi.domain.errors import DomainError
from cofi.domain.user import UserService


@click.group("user")
def user_group():
    """Manage household users."""
    pass


@user_group.command("sync")
@click.pass_context
def sync_users(ctx):
    """Register the users listed in the household config."""
    service = UserService(ctx.obj["db"])
    try:
        created = service.sync_users(ctx.obj["config"])
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not created:
        click.echo("All configured users are already registered.")
        return
    for username in created:
        click.echo(f"Registered user '{username}'")


@user_group.command("add")
@click.argument("username")
@click.pass_context
def add_user(ctx, username: str):
    """Register a user that is not in the household config.

    Examples:
        cofi user add Carol
    """
    service = UserService(ctx.obj["db"])
    try:
        user = service.create_user(username)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Registered user '{user.username}' (ID: {user.id})")


@user_group.command("list")
@click.pass_context
def list_users(ctx):
    """List registered users."""
    users = UserService(ctx.obj["db"]).list_users()
    if not users:
        click.echo("No users registered. Run 'cofi user sync' first.")
        return
    click.echo(f"{'ID':<6} {'Username'}")
    click.echo("-" * 30)
    for user in users:
        click.echo(f"{user.id:<6} {user.username}")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group)
