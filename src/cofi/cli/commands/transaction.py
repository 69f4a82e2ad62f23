"""Transaction management commands."""

import click
from cofi.cli.error_handling import handle_domain_error, resolve_user_or_exit
from cofi.domain.entities import VisibleTransaction
from cofi.domain.errors import DomainError
from cofi.domain.statistics import StatisticsService
from cofi.domain.transaction import TransactionService
from cofi.utils.amount_parser import parse_amount


@click.group("transaction")
def transaction_group():
    """Manage transactions."""
    pass


def _format_row(visible: VisibleTransaction) -> str:
    txn = visible.transaction
    owner = "you" if visible.is_owner else (txn.owner_name or f"User {txn.owner_id}")
    visibility = "public" if txn.is_public else "private"
    description = txn.description[:28]
    return (
        f"{txn.id:<6} {txn.date.isoformat():<12} {description:<30} "
        f"{txn.category[:18]:<20} {txn.amount:>12,.2f} {visibility:<9} {owner}"
    )


@transaction_group.command("list")
@click.option("--user", "username", required=True, help="Name of the viewing user")
@click.option(
    "--all",
    "show_all",
    is_flag=True,
    help="Include other users' private transactions (statistics view)",
)
@click.pass_context
def list_transactions(ctx, username: str, show_all: bool):
    """List transactions visible to a user, newest first.

    Shows the user's own transactions and every public transaction.
    With --all, shows every transaction as used for statistics.
    """
    user = resolve_user_or_exit(ctx, username)
    db = ctx.obj["db"]

    if show_all:
        transactions = StatisticsService(db).get_statistics_transactions(viewer_id=user.id)
    else:
        transactions = TransactionService(db).list_visible_transactions(user.id)

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(
        f"{'ID':<6} {'Date':<12} {'Description':<30} {'Category':<20} "
        f"{'Amount':>12} {'Visibility':<9} {'Owner'}"
    )
    click.echo("-" * 110)
    for visible in transactions:
        click.echo(_format_row(visible))
    click.echo(f"\n{len(transactions)} transaction(s)")


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--user", "username", required=True, help="Name of the owning user")
@click.option("--description", required=True, help="Transaction description")
@click.option("--category", required=True, help="Category name")
@click.option("--amount", required=True, help="Transaction amount (e.g., 123.45 or -123.45)")
@click.option("--date", "date_str", required=True, help="Transaction date (YYYY-MM-DD)")
@click.option(
    "--visibility",
    type=click.Choice(["public", "private"]),
    required=True,
    help="Who can see the transaction",
)
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    username: str,
    description: str,
    category: str,
    amount: str,
    date_str: str,
    visibility: str,
) -> None:
    """Replace the fields of a transaction you own.

    Examples:
        cofi transaction update 3 --user Alice --description Rent --category Housing \\
            --amount -900 --date 2024-06-01 --visibility private
    """
    user = resolve_user_or_exit(ctx, username)
    service = TransactionService(ctx.obj["db"])

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        service.update_transaction(
            transaction_id=transaction_id,
            owner_id=user.id,
            description=description,
            category=category,
            amount=txn_amount,
            date=date_str,
            is_public=visibility == "public",
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--user", "username", required=True, help="Name of the owning user")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, username: str, yes: bool) -> None:
    """Permanently delete a transaction you own."""
    user = resolve_user_or_exit(ctx, username)
    service = TransactionService(ctx.obj["db"])

    if not yes:
        click.confirm(f"Delete transaction {transaction_id}? This cannot be undone", abort=True)

    try:
        service.delete_transaction(transaction_id, user.id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group)
