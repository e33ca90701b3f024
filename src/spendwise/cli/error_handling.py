"""CLI error handling helpers."""

import click

from spendwise.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def parse_option_or_exit(ctx: click.Context, parser, raw: str, label: str):
    """Run ``parser`` on a raw option value, exiting with a message on failure."""
    try:
        return parser(raw)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)
