"""Statistics report commands.

Reports are computed over every transaction of every user, private ones
included, so the whole household sees the same numbers.
"""

from datetime import date

import click
from cofi.domain.entities import CategoryChange
from cofi.domain.statistics import StatisticsService
from cofi.utils.date_parser import month_name, parse_month


def _resolve_month(ctx, month: str | None) -> tuple[int, int]:
    """Parse --month, defaulting to the current month."""
    if month is None:
        today = date.today()
        return today.year, today.month
    try:
        return parse_month(month)
    except ValueError as e:
        click.echo(f"Error: Invalid month: {e}", err=True)
        ctx.exit(1)


def _money(amount) -> str:
    return f"${amount:,.2f}"


def _display_changes(title: str, changes: tuple[CategoryChange, ...]) -> None:
    click.echo(f"\n{title}")
    if not changes:
        click.echo("  (none)")
        return
    for change in changes:
        click.echo(
            f"  {change.category:<30} {_money(change.amount):>14} {change.change_percentage:>+9.1f}%"
        )


@click.group("report")
def report_group():
    """Household spending reports."""
    pass


@report_group.command("monthly")
@click.option("--month", help="Month to report (YYYY-MM, 'this month' or 'last month')")
@click.pass_context
def monthly_report(ctx, month: str | None):
    """Monthly income, expenses and spending trends."""
    year, month_num = _resolve_month(ctx, month)
    report = StatisticsService(ctx.obj["db"]).monthly_report(year, month_num)

    click.echo(f"Monthly report for {month_name(month_num)} {year}")
    click.echo("=" * 60)
    click.echo(f"  {'Income':<30} {_money(report.totals.income):>14}")
    click.echo(f"  {'Expenses':<30} {_money(report.totals.expenses):>14}")
    click.echo(f"  {'Net balance':<30} {_money(report.totals.net_balance):>14}")

    click.echo("\nPrivate spending by user")
    if not report.private_spending:
        click.echo("  (no users)")
    for username, amount in report.private_spending.items():
        click.echo(f"  {username:<30} {_money(amount):>14}")

    _display_changes("Top spending categories", report.top_categories)
    _display_changes("Fastest increasing categories", report.increasing_categories)
    _display_changes("Fastest decreasing categories", report.decreasing_categories)

    click.echo("\nTop public expenses")
    if not report.top_public_expenses:
        click.echo("  (none)")
    for txn in report.top_public_expenses:
        owner = txn.owner_name or f"User {txn.owner_id}"
        click.echo(
            f"  {txn.date.isoformat():<12} {txn.description[:24]:<26} "
            f"{txn.category[:16]:<18} {_money(txn.amount):>12}  {owner}"
        )


@report_group.command("composition")
@click.option("--year", type=int, help="Year to report (defaults to the current year)")
@click.pass_context
def composition_report(ctx, year: int | None):
    """Monthly spending per category for a year."""
    year = year or date.today().year
    months = StatisticsService(ctx.obj["db"]).category_composition(year)

    categories = list(months[0].spending) if months else []
    if not categories:
        click.echo(f"No expenses recorded in {year}.")
        return

    click.echo(f"Category composition for {year}")
    click.echo("=" * 60)
    for entry in months:
        total = sum(entry.spending.values())
        click.echo(f"\n{entry.month} ({_money(total)})")
        for category in sorted(categories):
            amount = entry.spending[category]
            if amount:
                click.echo(f"  {category:<30} {_money(amount):>14}")


@report_group.command("categories")
@click.option("--month", help="Month to report (YYYY-MM, 'this month' or 'last month')")
@click.pass_context
def categories_report(ctx, month: str | None):
    """Spending per category for a month with its share of the total."""
    year, month_num = _resolve_month(ctx, month)
    shares = StatisticsService(ctx.obj["db"]).category_breakdown(year, month_num)

    if not shares:
        click.echo(f"No expenses recorded in {month_name(month_num)} {year}.")
        return

    click.echo(f"Spending by category for {month_name(month_num)} {year}")
    click.echo("=" * 60)
    for share in shares:
        click.echo(f"  {share.category:<30} {_money(share.amount):>14} {share.percentage:>7.1f}%")
    total = sum(share.amount for share in shares)
    click.echo(f"  {'Total':<30} {_money(total):>14}")


@report_group.command("net-balance")
@click.option("--category", "categories", multiple=True, required=True, help="Category to include (repeatable)")
@click.option("--year", type=int, help="Year to report (defaults to the current year)")
@click.pass_context
def net_balance_report(ctx, categories: tuple[str, ...], year: int | None):
    """Monthly net balance of selected categories against the previous year."""
    year = year or date.today().year
    rows = StatisticsService(ctx.obj["db"]).net_balance(year, categories)

    click.echo(f"Net balance for {', '.join(categories)}")
    click.echo("=" * 60)
    click.echo(f"  {'Month':<12} {str(year):>14} {str(year - 1):>14}")
    for row in rows:
        click.echo(f"  {row.month:<12} {_money(row.current_year):>14} {_money(row.last_year):>14}")


@report_group.command("years")
@click.pass_context
def years_report(ctx):
    """List the years that have transactions."""
    for year in StatisticsService(ctx.obj["db"]).available_years(date.today().year):
        click.echo(str(year))


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group)
