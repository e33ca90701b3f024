"""CSV import command."""

import click
from spendwise.domain.csv_import import BANK_FORMATS, CSVImportService
from spendwise.domain.errors import DomainError


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True))
@click.option(
    "--bank",
    type=click.Choice(sorted(BANK_FORMATS), case_sensitive=False),
    help="Bank export format (default: detect from headers)",
)
@click.pass_context
def import_csv(ctx, csv_file: str, bank: str | None):
    """Import transactions from a bank statement CSV.

    Rows without a known category are categorised from their description.
    """
    db = ctx.obj["db"]
    service = CSVImportService(db)

    try:
        result = service.import_csv(csv_file_path=csv_file, bank=bank.lower() if bank else None)
    except (DomainError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    click.echo(f"\nImport complete ({result['bank']} format):")
    click.echo(f"  Imported: {result['imported']} transactions")
    if result["errors"]:
        click.echo(f"  Errors: {len(result['errors'])}")
        for error in result["errors"]:
            click.echo(f"    {error}", err=True)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
