"""Spending trend command."""

import click
from spendwise.cli.error_handling import parse_option_or_exit
from spendwise.domain.entities import Granularity
from spendwise.domain.summary import SummaryService
from spendwise.utils.date_parser import parse_date


@click.command("trend")
@click.argument(
    "granularity",
    type=click.Choice([g.value for g in Granularity], case_sensitive=False),
)
@click.option("--date", "selected", help="Day to show for the hour view (default: today)")
@click.option("--week-start", help="Any day of the week to show for the week view (default: this week)")
@click.option("--compare-prev", is_flag=True, help="Show the previous period next to each bucket")
@click.pass_context
def trend(ctx, granularity: str, selected: str | None, week_start: str | None, compare_prev: bool):
    """Show spending bucketed by hour, day, week, month or year.

    Examples:
        spendwise trend month
        spendwise trend hour --date yesterday
        spendwise trend week --compare-prev
    """
    db = ctx.obj["db"]
    service = SummaryService(db)

    selected_date = parse_option_or_exit(ctx, parse_date, selected, "date") if selected else None
    selected_week = (
        parse_option_or_exit(ctx, parse_date, week_start, "week start") if week_start else None
    )

    if compare_prev:
        rows = service.get_trend_comparison(
            granularity.lower(), selected_date=selected_date, selected_week_start=selected_week
        )
        if not rows:
            click.echo("No transactions found.")
            return
        click.echo(f"{'Period':<12} {'Amount':>12} {'Previous':<12} {'Amount':>12} {'Change':>12}")
        click.echo("-" * 64)
        for row in rows:
            click.echo(
                f"{row.label:<12} {row.amount:>12,.2f} {row.previous_label:<12} "
                f"{row.previous_amount:>12,.2f} {row.change:>+12,.2f}"
            )
        return

    buckets = service.get_trend(
        granularity.lower(), selected_date=selected_date, selected_week_start=selected_week
    )
    if not buckets:
        click.echo("No transactions found.")
        return
    for bucket in buckets:
        click.echo(f"{bucket.label:<12} {bucket.amount:>12,.2f}")


def register_commands(cli):
    """Register trend command with main CLI."""
    cli.add_command(trend)
