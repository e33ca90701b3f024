"""Initialize default categories."""

import click
from spendwise.domain.category import CategoryService
from spendwise.domain.entities import DEFAULT_CATEGORIES


@click.command("init-categories")
@click.pass_context
def init_categories(ctx):
    """Create the default spending categories.

    Existing categories are left untouched, so running this twice is safe.
    """
    db = ctx.obj["db"]
    service = CategoryService(db)

    created = service.ensure_defaults()
    if created == 0:
        click.echo("Default categories already exist.")
        return

    click.echo(f"Created {created} of {len(DEFAULT_CATEGORIES)} default categories.")


def register_commands(cli):
    """Register init-categories command with main CLI."""
    cli.add_command(init_categories)
