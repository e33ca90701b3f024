"""Tests for importing bank statement CSV files."""

import pytest
from datetime import date
from decimal import Decimal
from spendwise.cli.main import cli
from spendwise.domain.csv_import import CSVImportService, detect_bank_format
from spendwise.domain.errors import ValidationError


@pytest.mark.parametrize(
    "headers,expected",
    [
        (["Transaction Date", "Transaction Remarks", "Withdrawal Amt.", "Deposit Amt."], "hdfc"),
        (["Txn Date", "Narration", "Amount"], "sbi"),
        (["Transaction Date", "Transaction Remarks", "Debit", "Credit"], "icici"),
        (["Date", "Amount", "Description", "Category"], "generic"),
    ],
)
def test_detect_bank_format(headers, expected):
    """Formats are recognised from their column names."""
    assert detect_bank_format(headers) == expected


def test_import_generic(temp_db, category_service, fixtures_dir):
    """Valid rows are imported and bad rows are reported by row number."""
    service = CSVImportService(temp_db)

    result = service.import_csv(str(fixtures_dir / "generic.csv"))

    assert result["bank"] == "generic"
    assert result["imported"] == 3
    assert result["errors"] == [
        "Row 5: Invalid amount format",
        "Row 6: Category 'unknowncat' not found",
    ]

    by_description = {t.description: t for t in temp_db.list_transactions()}
    assert by_description["Swiggy dinner"].category == "food"
    electricity = by_description["Electricity bill"]
    assert (electricity.amount, electricity.category, electricity.date) == (
        Decimal("1200.50"), "bills", date(2025, 3, 2),
    )
    assert by_description["Uber ride"].amount == Decimal("300.00")
    assert by_description["Uber ride"].category == "transport"


def test_import_hdfc_semicolon(temp_db, category_service, fixtures_dir):
    """Semicolon-delimited exports are sniffed and categorised by narration."""
    service = CSVImportService(temp_db)

    result = service.import_csv(str(fixtures_dir / "hdfc.csv"))

    assert result["bank"] == "hdfc"
    assert result["imported"] == 2
    assert result["errors"] == ["Row 4: Date is required"]
    categories = sorted(t.category for t in temp_db.list_transactions())
    assert categories == ["entertainment", "shopping"]


def test_import_with_explicit_bank(temp_db, category_service, tmp_path):
    """A named format overrides detection."""
    csv_path = tmp_path / "sbi.csv"
    csv_path.write_text(
        "Date,Narration,Amount\n"
        "05/03/2025,PETROL PUMP,2000\n"
    )
    service = CSVImportService(temp_db)

    result = service.import_csv(str(csv_path), bank="sbi")

    assert result == {"bank": "sbi", "imported": 1, "errors": []}
    assert temp_db.list_transactions()[0].category == "transport"


def test_import_unknown_bank(temp_db, fixtures_dir):
    """Unknown format names are rejected up front."""
    service = CSVImportService(temp_db)

    with pytest.raises(ValidationError, match="Unknown bank format"):
        service.import_csv(str(fixtures_dir / "generic.csv"), bank="chase")


def test_import_missing_file(temp_db):
    """A missing file raises FileNotFoundError."""
    service = CSVImportService(temp_db)

    with pytest.raises(FileNotFoundError):
        service.import_csv("/nonexistent/file.csv")


def test_import_command(cli_runner, temp_db, category_service, fixtures_dir):
    """The import command reports counts and row errors."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "import", str(fixtures_dir / "generic.csv")]
    )

    assert result.exit_code == 0
    assert "Imported: 3 transactions" in result.output
    assert "Errors: 2" in result.output
    assert "Row 6" in result.output
