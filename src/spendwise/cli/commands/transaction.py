"""Transaction management commands."""

from decimal import Decimal

import click
from spendwise.cli.date_filters import period_options, resolve_cli_date_range
from spendwise.cli.error_handling import handle_domain_error, parse_option_or_exit
from spendwise.domain.errors import DomainError
from spendwise.domain.transaction import TransactionService
from spendwise.utils.amount_parser import parse_amount
from spendwise.utils.date_parser import parse_date


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.option("--category", help="Category slug")
@click.pass_context
def list_transactions(ctx, start_date: str | None, end_date: str | None, category: str | None, **periods):
    """List transactions, newest first."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={name.replace("_", "-"): is_set for name, is_set in periods.items()},
    )
    transactions = service.list_transactions(start_date=start, end_date=end, category=category)

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 100)
    click.echo(
        f"{'ID':<34} {'Date':<12} {'Time':<6} {'Amount':>12} {'Category':<15} {'Description':<20}"
    )
    click.echo("-" * 100)

    for txn in transactions:
        click.echo(
            f"{txn.id:<34} {str(txn.date):<12} {txn.time or '':<6} {txn.amount:>12,.2f} "
            f"{txn.category:<15} {(txn.description or '')[:20]:<20}"
        )

    total = sum((txn.amount for txn in transactions), Decimal("0"))
    click.echo("-" * 100)
    click.echo(f"{'TOTAL':<34} {'':<12} {'':<6} {total:>12,.2f}  Count: {len(transactions)}")


@transaction_group.command("update")
@click.argument("transaction_id")
@click.option("--amount", help="New amount")
@click.option("--date", help="New date (YYYY-MM-DD or relative like 'yesterday')")
@click.option("--time", help="New time as HH:MM")
@click.option("--category", help="New category slug")
@click.option("--description", help="New description")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: str,
    amount: str | None,
    date: str | None,
    time: str | None,
    category: str | None,
    description: str | None,
) -> None:
    """Update the given fields of a transaction.

    Examples:
        spendwise transaction update 3f2c... --amount 75
        spendwise transaction update 3f2c... --category food
    """
    db = ctx.obj["db"]
    service = TransactionService(db)

    txn_amount = parse_option_or_exit(ctx, parse_amount, amount, "amount") if amount else None
    txn_date = parse_option_or_exit(ctx, parse_date, date, "date") if date else None

    try:
        service.update_transaction(
            transaction_id,
            amount=txn_amount,
            description=description,
            category=category,
            date=txn_date,
            time=time,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: str, yes: bool) -> None:
    """Delete a transaction."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    if service.get_transaction(transaction_id) is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to delete transaction {transaction_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
