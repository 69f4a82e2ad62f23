"""CSV import domain service.

parse_csv turns raw CSV text into validated rows without touching the store.
CSVImportService stores the rows for an owner in one batch.
"""

import csv
from pathlib import Path
from typing import Optional

from cofi.database.base import Database
from cofi.domain.entities import CSVParseResult, CSVTransaction, ImportResult
from cofi.domain.errors import ParseError, ValidationError, missing_csv_headers
from cofi.domain.transaction import build_new_transaction
from cofi.logger import get_logger
from cofi.utils.amount_parser import parse_amount
from cofi.utils.date_parser import is_date_string

logger = get_logger(__name__)

REQUIRED_HEADERS = ("description", "category", "amount", "date", "is_public")
TRUE_TOKENS = frozenset({"true", "1"})
BOM = "\ufeff"


def split_csv_line(line: str) -> list[str]:
    """Split one CSV line, honouring quoted commas and doubled quotes."""
    return next(csv.reader([line], skipinitialspace=True), [])


def _field(values: list[str], index: int) -> str:
    if index >= len(values):
        return ""
    return values[index].strip()


def read_header(header_line: str) -> dict[str, int]:
    """Map each required column name to its index in the header.

    Extra columns are allowed and ignored.

    Raises:
        ValidationError: If any required column is missing
    """
    header = [name.strip() for name in split_csv_line(header_line)]
    missing = [name for name in REQUIRED_HEADERS if name not in header]
    if missing:
        raise ValidationError(missing_csv_headers(missing))
    return {name: header.index(name) for name in REQUIRED_HEADERS}


def parse_row(row_num: int, values: list[str], columns: dict[str, int]) -> CSVTransaction:
    """Validate one split CSV row.

    Raises:
        ParseError: If the row is missing a field or a field is malformed
    """
    if len(values) < len(REQUIRED_HEADERS):
        raise ParseError(row_num, "Insufficient columns")

    description = _field(values, columns["description"])
    category = _field(values, columns["category"])
    amount_str = _field(values, columns["amount"])
    date_str = _field(values, columns["date"])
    is_public_str = _field(values, columns["is_public"]).lower()

    if not description:
        raise ParseError(row_num, "Description is required")
    if not category:
        raise ParseError(row_num, "Category is required")
    if not amount_str:
        raise ParseError(row_num, "Amount is required")
    if not date_str:
        raise ParseError(row_num, "Date is required")

    try:
        amount = parse_amount(amount_str)
    except ValueError:
        raise ParseError(row_num, f"Invalid amount \"{amount_str}\"")

    # Shape only; calendar validity is checked when the row is stored
    if not is_date_string(date_str):
        raise ParseError(row_num, f"Invalid date format \"{date_str}\". Use YYYY-MM-DD")

    return CSVTransaction(
        row_num=row_num,
        description=description,
        category=category,
        amount=amount,
        date=date_str,
        is_public=is_public_str in TRUE_TOKENS,
    )


def parse_csv_rows(csv_content: str) -> CSVParseResult:
    """Parse CSV text, raising when the document itself is unusable.

    Raises:
        ValidationError: If the CSV is empty or its header lacks required columns
    """
    lines = csv_content.lstrip(BOM).strip().splitlines()
    if not lines:
        raise ValidationError("CSV file is empty")

    columns = read_header(lines[0])

    transactions: list[CSVTransaction] = []
    errors: list[str] = []
    for row_num, line in enumerate(lines[1:], start=2):  # Header is row 1
        line = line.strip()
        if not line:
            continue
        try:
            transactions.append(parse_row(row_num, split_csv_line(line), columns))
        except ParseError as e:
            errors.append(str(e))
        except csv.Error as e:
            errors.append(str(ParseError(row_num, f"Parse error - {e}")))

    return CSVParseResult(
        success=not errors,
        transactions=tuple(transactions),
        errors=tuple(errors),
    )


def parse_csv(csv_content: str) -> CSVParseResult:
    """Parse CSV text into transaction rows.

    The first non-empty line is the header and must name the columns
    description, category, amount, date and is_public in any order. Each
    following non-blank line is one row. Rows are validated independently;
    valid rows are returned even when other rows fail.

    Args:
        csv_content: Raw CSV text

    Returns:
        CSVParseResult; success is True only when no row failed
    """
    try:
        return parse_csv_rows(csv_content)
    except ValidationError as e:
        return CSVParseResult(success=False, errors=(str(e),))


class CSVImportService:
    """Service for importing CSV files."""

    def __init__(self, db: Database):
        """Initialize CSV import service.

        Args:
            db: Database instance
        """
        self.db = db

    def import_csv(self, owner_id: int, csv_content: str) -> ImportResult:
        """Import transactions from CSV text for an owner.

        Parse errors are collected and reported while the rows that parsed
        are still stored. Rows are inserted in order; a row the store
        rejects is reported and does not undo the rows stored before it.
        Imported rows are private unless marked true or 1.

        Args:
            owner_id: ID of the importing user
            csv_content: Raw CSV text

        Returns:
            ImportResult with counts and per-row errors, in row order

        Raises:
            ValidationError: If the CSV is empty or its header is missing columns
            StorageError: If the batch cannot be committed
        """
        parsed = parse_csv_rows(csv_content)

        failures: list[tuple[int, str]] = []
        records = []
        positions = []
        for position, row in enumerate(parsed.transactions, start=1):
            try:
                records.append(
                    build_new_transaction(
                        owner_id=owner_id,
                        description=row.description,
                        category=row.category,
                        amount=row.amount,
                        date=row.date,
                        is_public=row.is_public,
                    )
                )
                positions.append(position)
            except ValidationError as e:
                failures.append((position, str(e)))

        transaction_ids: list[int] = []
        if records:
            for outcome in self.db.insert_transactions(records):
                if outcome.ok:
                    transaction_ids.append(outcome.transaction_id)
                else:
                    failures.append((positions[outcome.index], outcome.error))

        failures.sort(key=lambda failure: failure[0])

        result = ImportResult(
            imported=len(transaction_ids),
            total=len(parsed.transactions),
            parse_errors=parsed.errors,
            insert_errors=tuple(f"Transaction {position}: {error}" for position, error in failures),
            transaction_ids=tuple(transaction_ids),
        )
        logger.info(
            "csv_import_finished",
            owner_id=owner_id,
            imported=result.imported,
            total=result.total,
            parse_errors=len(result.parse_errors),
            insert_errors=len(result.insert_errors),
        )
        return result

    def import_file(
        self, owner_id: int, csv_file_path: str, encoding: Optional[str] = None
    ) -> ImportResult:
        """Import transactions from a CSV file.

        Raises:
            FileNotFoundError: If CSV file doesn't exist
        """
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")
        content = csv_path.read_text(encoding=encoding or "utf-8-sig")
        return self.import_csv(owner_id, content)
