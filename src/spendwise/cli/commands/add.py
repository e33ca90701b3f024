"""Natural-language entry commands."""

import click
from spendwise.cli.error_handling import handle_domain_error, parse_option_or_exit
from spendwise.domain.errors import DomainError
from spendwise.domain.transaction import TransactionService
from spendwise.utils.amount_parser import parse_amount
from spendwise.utils.date_parser import parse_date


@click.command("add")
@click.argument("text", required=False, default="")
@click.option("--amount", help="Amount; overrides the one found in TEXT")
@click.option("--date", help="Date (YYYY-MM-DD or relative like 'yesterday'); overrides TEXT")
@click.option("--time", help="Time as HH:MM; overrides TEXT")
@click.option("--category", help="Category slug; overrides TEXT")
@click.option("--description", help="Description; overrides TEXT")
@click.pass_context
def add_transaction(
    ctx,
    text: str,
    amount: str | None,
    date: str | None,
    time: str | None,
    category: str | None,
    description: str | None,
):
    """Add a transaction from a plain-language note.

    Options win over whatever is detected in TEXT.

    Examples:
        spendwise add "Spent 450 on groceries yesterday"
        spendwise add "uber 230 at 9pm" --category transport
        spendwise add --amount 99 --category bills --description "phone recharge"
    """
    db = ctx.obj["db"]
    service = TransactionService(db)

    txn_amount = parse_option_or_exit(ctx, parse_amount, amount, "amount") if amount else None
    txn_date = parse_option_or_exit(ctx, parse_date, date, "date") if date else None

    try:
        txn, _ = service.create_from_text(
            text,
            amount=txn_amount,
            description=description,
            category=category,
            date=txn_date,
            time=time,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {txn.id}")
    click.echo(f"  Date: {txn.date}" + (f" {txn.time}" if txn.time else ""))
    click.echo(f"  Amount: {txn.amount:,.2f}")
    click.echo(f"  Category: {txn.category}")
    if txn.description:
        click.echo(f"  Description: {txn.description}")


@click.command("parse")
@click.argument("text")
@click.pass_context
def parse_text(ctx, text: str):
    """Show what would be detected in TEXT without saving anything."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    parsed = service.parse_text(text)
    if parsed is None:
        click.echo("Nothing detected.")
        return

    for field, value in parsed.to_dict().items():
        click.echo(f"  {field}: {value}")


@click.command("suggest")
@click.argument("text")
@click.pass_context
def suggest_descriptions(ctx, text: str):
    """List earlier descriptions containing TEXT."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    for description in service.recent_descriptions(text):
        click.echo(description)


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(add_transaction)
    cli.add_command(parse_text)
    cli.add_command(suggest_descriptions)
