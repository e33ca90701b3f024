"""Category management commands."""

import click
from spendwise.cli.error_handling import handle_domain_error
from spendwise.domain.category import CategoryService
from spendwise.domain.errors import DomainError


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.option("--usage", is_flag=True, help="Show transaction count and total per category")
@click.pass_context
def list_categories(ctx, usage: bool):
    """List all categories."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    categories = service.list_categories()
    if not categories:
        click.echo("No categories found. Run 'init-categories' to create default categories.")
        return

    click.echo("\nCategories:")
    for cat in categories:
        line = f"  {cat.emoji} {cat.label:<20} ({cat.value})"
        if usage:
            count, total = service.get_usage(cat.value)
            line += f"  {count} transaction(s), {total:,.2f}"
        click.echo(line)


@category_group.command("create")
@click.argument("label")
@click.option("--value", help="Slug (default: derived from the label)")
@click.option("--emoji", default="📦", help="Display emoji")
@click.option("--color", default="gray", help="Color tag")
@click.pass_context
def create_category(ctx, label: str, value: str | None, emoji: str, color: str):
    """Create a new category."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        category = service.create_category(label=label, value=value, emoji=emoji, color=color)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created category '{category.label}' ({category.value})")


@category_group.command("update")
@click.argument("value")
@click.option("--label", help="New display name")
@click.option("--emoji", help="New emoji")
@click.option("--color", help="New color tag")
@click.pass_context
def update_category(ctx, value: str, label: str | None, emoji: str | None, color: str | None):
    """Update a category's display fields."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        category = service.update_category(value, label=label, emoji=emoji, color=color)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated category '{category.label}' ({category.value})")


@category_group.command("delete")
@click.argument("value")
@click.pass_context
def delete_category(ctx, value: str):
    """Delete a category that no transaction uses."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        service.delete_category(value)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted category '{value}'")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
