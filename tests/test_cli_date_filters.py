"""Tests for CLI date filter helper."""

from datetime import date

import click
import pytest

from spendwise.cli.date_filters import period_options, resolve_cli_date_range
from spendwise.utils.date_parser import get_date_range


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def _resolve(**kwargs):
    kwargs.setdefault("start_date", None)
    kwargs.setdefault("end_date", None)
    kwargs.setdefault("period_flags", {})
    return resolve_cli_date_range(_ctx(), **kwargs)


def test_rejects_multiple_periods(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        _resolve(period_flags={"this-month": True, "last-week": True})

    assert excinfo.value.exit_code == 1
    assert "Only one period option" in capsys.readouterr().err


def test_rejects_period_with_explicit_dates(capsys):
    with pytest.raises(click.exceptions.Exit):
        _resolve(start_date="2024-01-01", period_flags={"this-month": True})

    assert "cannot be combined" in capsys.readouterr().err


def test_period_range():
    assert _resolve(period_flags={"last-month": True, "this-year": False}) == get_date_range("last-month")


def test_explicit_dates():
    assert _resolve(start_date="2024-01-02", end_date="2024-01-05") == (
        date(2024, 1, 2),
        date(2024, 1, 5),
    )


def test_default_range_only_when_nothing_given():
    default_range = (date(2020, 1, 1), date(2020, 1, 31))

    assert _resolve(default_range=default_range) == default_range
    assert _resolve(start_date="2024-01-02", default_range=default_range) == (date(2024, 1, 2), None)
    assert _resolve() == (None, None)


def test_invalid_start_date(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        _resolve(start_date="not-a-date")

    assert excinfo.value.exit_code == 1
    assert "Invalid start date" in capsys.readouterr().err


def test_period_options_adds_one_flag_per_period():
    @click.command()
    @period_options
    def command(**periods):
        pass

    names = [param.name for param in command.params]
    assert names == ["this_week", "this_month", "this_year", "last_week", "last_month", "last_year"]
