"""Add transaction command."""

import click
from cofi.cli.error_handling import handle_domain_error, resolve_user_or_exit
from cofi.domain.errors import DomainError
from cofi.domain.transaction import TransactionService
from cofi.utils.amount_parser import parse_amount


@click.command("add")
@click.option("--user", "username", required=True, help="Name of the user recording the transaction")
@click.option("--description", required=True, help="Transaction description")
@click.option("--category", required=True, help="Category name (e.g., 'Groceries')")
@click.option(
    "--amount", required=True, help="Transaction amount (negative for expenses, e.g. -12.50)"
)
@click.option("--date", "date_str", required=True, help="Transaction date (YYYY-MM-DD)")
@click.option("--private", is_flag=True, help="Hide the transaction from other users")
@click.pass_context
def add_transaction(
    ctx,
    username: str,
    description: str,
    category: str,
    amount: str,
    date_str: str,
    private: bool,
):
    """Add a transaction manually.

    Transactions are public unless --private is given.

    Examples:
        cofi add --user Alice --description "Weekly shop" --category Groceries --amount -54.20 --date 2024-06-01
        cofi add --user Bob --description Salary --category Income --amount 2500 --date 2024-06-25 --private
    """
    user = resolve_user_or_exit(ctx, username)
    service = TransactionService(ctx.obj["db"])

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        txn = service.create_transaction(
            owner_id=user.id,
            description=description,
            category=category,
            amount=txn_amount,
            date=date_str,
            is_public=not private,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {txn.id}")
    click.echo(f"  Date: {txn.date.isoformat()}")
    click.echo(f"  Amount: ${txn.amount:,.2f}")
    click.echo(f"  Description: {txn.description}")
    click.echo(f"  Category: {txn.category}")
    click.echo(f"  Visibility: {'public' if txn.is_public else 'private'}")

    predefined = ctx.obj["config"].predefined_categories
    if predefined and txn.category not in predefined:
        click.echo(f"  Note: '{txn.category}' is not a predefined category")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
