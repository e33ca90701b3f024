"""Main CLI entry point."""

import logging

import click
from spendwise.database.factories import create_sqlite_database

# Import and register all commands at module level
from spendwise.cli.commands import (
    add,
    budget,
    calendar,
    category,
    import_cmd,
    init_categories,
    insights,
    transaction,
    trend,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides SPENDWISE_DB_PATH environment variable)",
    envvar="SPENDWISE_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Spendwise - personal expense and budget tracker.

    Log spending in plain language ("Spent 450 on groceries yesterday"),
    set monthly or yearly budgets and watch trends over time.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
init_categories.register_commands(cli)
category.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
import_cmd.register_commands(cli)
budget.register_commands(cli)
trend.register_commands(cli)
calendar.register_commands(cli)
insights.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
