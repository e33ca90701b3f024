"""Budget commands."""

import click
from spendwise.cli.error_handling import handle_domain_error, parse_option_or_exit
from spendwise.domain.budget import BudgetService
from spendwise.domain.entities import AlertSeverity
from spendwise.domain.errors import DomainError
from spendwise.utils.amount_parser import parse_amount


def _parse_allocation(raw: str):
    category, sep, amount = raw.partition("=")
    if not sep or not category.strip():
        raise ValueError(f"expected CATEGORY=AMOUNT, got '{raw}'")
    return category.strip().lower(), parse_amount(amount)


@click.group()
def budget_group():
    """Manage monthly and yearly budgets.

    Periods are keyed as MM_YYYY (e.g. 03_2025) or YYYY (e.g. 2025).
    """
    pass


@budget_group.command("set")
@click.argument("period")
@click.option(
    "--category",
    "allocations",
    multiple=True,
    required=True,
    help="Allocation as CATEGORY=AMOUNT; repeat for each category",
)
@click.option("--income", help="Expected income for the period")
@click.option("--goal", "goals", multiple=True, help="A savings goal; repeatable")
@click.pass_context
def set_budget(ctx, period: str, allocations: tuple[str, ...], income: str | None, goals: tuple[str, ...]):
    """Create or replace the budget for PERIOD.

    Examples:
        spendwise budget set 03_2025 --category food=5000 --category transport=1500
        spendwise budget set 2025 --category travel=60000 --income 900000
    """
    db = ctx.obj["db"]
    service = BudgetService(db)

    category_budgets = dict(
        parse_option_or_exit(ctx, _parse_allocation, raw, "allocation") for raw in allocations
    )
    budget_income = parse_option_or_exit(ctx, parse_amount, income, "income") if income else None

    try:
        budget = service.save_budget(period, category_budgets, income=budget_income, goals=goals)
    except DomainError as e:
        handle_domain_error(ctx, e)
    total = sum(budget.category_budgets.values())
    click.echo(
        f"Saved {budget.budget_type.value} budget {budget.period}: "
        f"{len(budget.category_budgets)} categories, total {total:,.2f}"
    )


@budget_group.command("show")
@click.argument("period")
@click.pass_context
def show_budget(ctx, period: str):
    """Show spending against the budget for PERIOD."""
    db = ctx.obj["db"]
    service = BudgetService(db)

    try:
        summary = service.get_summary(period)
        alerts = service.get_alerts(period)
        health = service.get_health(period)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nBudget {summary.period}")
    click.echo("-" * 70)
    click.echo(f"{'Category':<20} {'Budget':>12} {'Spent':>12} {'Remaining':>12} {'Used':>6}")
    click.echo("-" * 70)
    for category, row in summary.category_breakdown.items():
        marker = " !" if row.is_over_budget else ""
        click.echo(
            f"{category:<20} {row.budget:>12,.2f} {row.spent:>12,.2f} "
            f"{row.remaining:>12,.2f} {row.percentage:>5}%{marker}"
        )
    click.echo("-" * 70)
    click.echo(
        f"{'TOTAL':<20} {summary.total_budget:>12,.2f} {summary.total_spent:>12,.2f} "
        f"{summary.balance:>12,.2f}"
    )

    if alerts:
        click.echo("\nAlerts:")
        for alert in alerts:
            label = "Over budget" if alert.severity == AlertSeverity.OVER_BUDGET else "Warning"
            click.echo(
                f"  {label}: {alert.category} at {alert.percentage}% "
                f"({alert.spent:,.2f} of {alert.budget:,.2f})"
            )

    click.echo(f"\nHealth: {health.health_percentage}% - {health.level}")
    click.echo(f"  {health.tip}")


@budget_group.command("list")
@click.pass_context
def list_budgets(ctx):
    """List saved budgets."""
    db = ctx.obj["db"]
    service = BudgetService(db)

    budgets = service.list_budgets()
    if not budgets:
        click.echo("No budgets found.")
        return

    for budget in budgets:
        total = sum(budget.category_budgets.values())
        click.echo(f"  {budget.period:<8} {budget.budget_type.value:<8} {total:>12,.2f}")
        for goal in budget.goals:
            click.echo(f"           goal: {goal}")


@budget_group.command("delete")
@click.argument("period")
@click.pass_context
def delete_budget(ctx, period: str):
    """Delete the budget for PERIOD."""
    db = ctx.obj["db"]
    service = BudgetService(db)

    try:
        service.delete_budget(period)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted budget {period}")


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group, name="budget")
