"""CLI error handling helpers."""

import click

from cofi.domain.entities import User
from cofi.domain.errors import DomainError
from cofi.domain.user import UserService
from cofi.logger import get_logger

logger = get_logger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError) -> None:
    """Render a domain error and exit with failure.

    The message goes to stderr; the error kind is logged and shows up
    with --verbose.
    """
    logger.debug("command_failed", command=ctx.command_path, kind=error.kind, error=str(error))
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def resolve_user_or_exit(ctx: click.Context, username: str) -> User:
    """Resolve a user name to a user, exiting on failure."""
    try:
        return UserService(ctx.obj["db"]).require_user(username)
    except DomainError as e:
        handle_domain_error(ctx, e)
