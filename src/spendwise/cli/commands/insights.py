"""Monthly insight command."""

import click
from spendwise.domain.summary import SummaryService


@click.command("insights")
@click.option("--month", help="Month as YYYY-MM (default: current month)")
@click.pass_context
def insights(ctx, month: str | None):
    """Show this month's headline figures and savings suggestions."""
    db = ctx.obj["db"]
    service = SummaryService(db)

    snapshot = service.get_snapshot(month)
    click.echo(f"\nSnapshot for {snapshot.month}")
    click.echo(f"  Total spent: {snapshot.total_spent:,.2f}")
    click.echo(f"  Transactions: {snapshot.transaction_count}")
    if snapshot.top_category:
        click.echo(
            f"  Top category: {snapshot.top_category} ({snapshot.top_category_amount:,.2f})"
        )
    click.echo(f"  Average transaction: {snapshot.average_transaction:,.2f}")

    suggestions = service.get_savings_suggestions()
    if not suggestions:
        return
    click.echo("\nSavings suggestions:")
    for suggestion in suggestions:
        click.echo(
            f"  {suggestion.category}: cut {suggestion.suggested_reduction}% "
            f"to save {suggestion.potential_savings:,.2f} ({suggestion.difficulty})"
        )
        click.echo(f"    {suggestion.reasoning}")


def register_commands(cli):
    """Register insights command with main CLI."""
    cli.add_command(insights)
