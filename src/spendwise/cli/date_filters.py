"""CLI helpers for date range resolution."""

from datetime import date

import click

from spendwise.utils.date_parser import get_date_range, parse_date

PERIOD_FLAGS = ("this-week", "this-month", "this-year", "last-week", "last-month", "last-year")


def period_options(command):
    """Attach one ``--<period>`` flag per entry of PERIOD_FLAGS to a command."""
    for period in reversed(PERIOD_FLAGS):
        command = click.option(
            f"--{period}",
            period.replace("-", "_"),
            is_flag=True,
            help=f"Restrict to {period.replace('-', ' ')}",
        )(command)
    return command


def _fail(ctx, message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    ctx.exit(1)


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_range: tuple[date, date] | None = None,
) -> tuple[date | None, date | None]:
    """Resolve a date range from period flags or explicit dates.

    At most one period flag may be set, and it cannot be mixed with
    explicit start or end dates.
    """
    chosen = [period for period, is_set in period_flags.items() if is_set]

    if len(chosen) > 1:
        _fail(ctx, f"Only one period option ({', '.join(chosen)}) can be specified at a time.")
    if chosen and (start_date or end_date):
        _fail(ctx, "Period options cannot be combined with --start-date or --end-date.")

    if chosen:
        return get_date_range(chosen[0])

    start = end = None
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            _fail(ctx, f"Invalid start date: {e}")
    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            _fail(ctx, f"Invalid end date: {e}")

    if start is None and end is None and default_range is not None:
        return default_range
    return start, end
