"""CSV import domain service."""

import csv
import logging
import re
from pathlib import Path
from typing import Any, Optional

from spendwise.database.base import Database
from spendwise.domain.category import CategoryService
from spendwise.domain.category_resolver import IMPORT_KEYWORDS, resolve_category
from spendwise.domain.entities import Category
from spendwise.domain.errors import ValidationError
from spendwise.domain.transaction import TransactionService
from spendwise.utils.amount_parser import parse_amount
from spendwise.utils.date_parser import parse_date

logger = logging.getLogger(__name__)

# Column names per bank export.
BANK_FORMATS: dict[str, dict[str, str]] = {
    "hdfc": {"date": "Transaction Date", "amount": "Withdrawal Amt.",
             "description": "Transaction Remarks", "category": "Category"},
    "sbi": {"date": "Date", "amount": "Amount",
            "description": "Narration", "category": "Category"},
    "icici": {"date": "Transaction Date", "amount": "Debit",
              "description": "Transaction Remarks", "category": "Category"},
    "axis": {"date": "Transaction Date", "amount": "Debit Amount",
             "description": "Transaction Remarks", "category": "Category"},
    "generic": {"date": "Date", "amount": "Amount",
                "description": "Description", "category": "Category"},
}

# Tried after the bank-specific column.
FALLBACK_COLUMNS = {
    "date": ("Date", "Transaction Date"),
    "amount": ("Amount", "Debit", "Withdrawal Amt."),
    "description": ("Description", "Narration", "Transaction Remarks"),
}


def detect_bank_format(headers: list[str]) -> str:
    """Guess the bank export format from CSV headers."""
    joined = " ".join(headers).lower()
    if "hdfc" in joined or "withdrawal amt" in joined:
        return "hdfc"
    if "sbi" in joined or "narration" in joined:
        return "sbi"
    if "icici" in joined or "debit" in joined:
        return "icici"
    if "axis" in joined or "debit amount" in joined:
        return "axis"
    return "generic"


def _first_value(row: dict[str, Optional[str]], columns: tuple[str, ...]) -> str:
    for column in columns:
        value = row.get(column)
        if value and value.strip():
            return value.strip()
    return ""


def _known_category(raw: str, categories: list[Category]) -> Optional[str]:
    needle = raw.strip().lower()
    for category in categories:
        if needle in (category.value.lower(), category.label.lower()):
            return category.value
    return None


class CSVImportService:
    """Service for importing bank statement CSV files."""

    def __init__(self, db: Database):
        """Initialize CSV import service.

        Args:
            db: Database instance
        """
        self.db = db
        self.transaction_service = TransactionService(db)
        self.category_service = CategoryService(db)

    def process_row(
        self, row: dict[str, Optional[str]], bank: str, categories: list[Category]
    ) -> dict[str, Any]:
        """Validate and normalise one CSV row.

        Returns:
            Dict with the parsed fields and an ``errors`` list; the row is
            importable when ``errors`` is empty
        """
        columns = BANK_FORMATS[bank]
        errors: list[str] = []

        date_str = _first_value(row, (columns["date"],) + FALLBACK_COLUMNS["date"])
        amount_str = _first_value(row, (columns["amount"],) + FALLBACK_COLUMNS["amount"])
        description = _first_value(
            row, (columns["description"],) + FALLBACK_COLUMNS["description"]
        )
        raw_category = _first_value(row, (columns["category"],))

        txn_date = None
        if not date_str:
            errors.append("Date is required")
        else:
            try:
                txn_date = parse_date(date_str)
            except ValueError:
                errors.append("Invalid date format")

        amount = None
        if not amount_str:
            errors.append("Amount is required")
        else:
            try:
                # Expenses are stored as positive spend.
                amount = abs(parse_amount(re.sub(r"[^\d.\-()]", "", amount_str)))
            except ValueError:
                errors.append("Invalid amount format")

        if not description:
            errors.append("Description is required")

        if raw_category:
            category = _known_category(raw_category, categories)
            if category is None:
                errors.append(f"Category '{raw_category}' not found")
        else:
            category = resolve_category(description, keywords=IMPORT_KEYWORDS)

        return {
            "date": txn_date,
            "amount": amount,
            "description": description,
            "category": category,
            "errors": errors,
        }

    def import_csv(self, csv_file_path: str, bank: Optional[str] = None) -> dict[str, Any]:
        """Import transactions from a bank CSV file.

        Args:
            csv_file_path: Path to CSV file
            bank: Bank format name; detected from the headers when omitted

        Returns:
            Dict with import statistics:
            - bank: format used
            - imported: number of transactions imported
            - errors: list of error messages for rejected rows

        Raises:
            ValidationError: If the bank format is unknown or the file has no columns
            FileNotFoundError: If CSV file doesn't exist
        """
        if bank is not None and bank not in BANK_FORMATS:
            raise ValidationError(
                f"Unknown bank format '{bank}'. Supported: {', '.join(BANK_FORMATS)}"
            )

        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        categories = self.category_service.list_categories()
        imported = 0
        errors = []

        with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
            sample = f.read(1024)
            f.seek(0)
            try:
                delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t|").delimiter
            except csv.Error:
                delimiter = ","

            reader = csv.DictReader(f, delimiter=delimiter)
            if not reader.fieldnames:
                raise ValidationError("CSV file has no columns")
            fieldnames = [name.strip() for name in reader.fieldnames]
            reader.fieldnames = fieldnames

            if bank is None:
                bank = detect_bank_format(fieldnames)
                logger.info("Detected %s CSV format", bank)

            for row_num, row in enumerate(reader, start=2):  # Header is row 1
                processed = self.process_row(row, bank, categories)
                if processed["errors"]:
                    errors.append(f"Row {row_num}: {'; '.join(processed['errors'])}")
                    continue
                try:
                    self.transaction_service.create_transaction(
                        amount=processed["amount"],
                        category=processed["category"],
                        date=processed["date"],
                        description=processed["description"],
                    )
                except ValueError as e:
                    errors.append(f"Row {row_num}: {e}")
                    continue
                imported += 1

        logger.info("Imported %d rows from %s, %d rejected", imported, csv_path, len(errors))
        return {
            "bank": bank,
            "imported": imported,
            "errors": errors,
        }
