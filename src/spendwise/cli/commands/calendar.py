"""Calendar heat-map command."""

import click
from spendwise.cli.error_handling import handle_domain_error
from spendwise.domain.errors import DomainError
from spendwise.domain.summary import SummaryService


@click.command("calendar")
@click.argument("period")
@click.option("--category", help="Only count spend in this category slug")
@click.pass_context
def calendar_view(ctx, period: str, category: str | None):
    """Show daily spend for a month (MM_YYYY) against its budget.

    Days above the average daily budget are marked with '!'.
    """
    db = ctx.obj["db"]
    service = SummaryService(db)

    try:
        days = service.get_calendar(period, category=category)
    except DomainError as e:
        handle_domain_error(ctx, e)

    for entry in days:
        marker = " !" if entry.over_budget else ""
        click.echo(f"{entry.day.isoformat()}  {entry.day.strftime('%a')}  {entry.spent:>10,.2f}{marker}")


def register_commands(cli):
    """Register calendar command with main CLI."""
    cli.add_command(calendar_view)
