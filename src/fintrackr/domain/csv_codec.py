"""CSV encoding and decoding of transactions.

The format is deliberately simple: every exported field is wrapped in
double quotes without escaping embedded quotes, and the reader treats any
``"`` as a quote toggle. Doubled quotes ("") from RFC 4180 writers are not
understood, so notes containing quotes or commas may not survive a round
trip.
"""

from decimal import Decimal
from typing import Iterable, Optional

from fintrackr.domain.entities import Transaction, TransactionDraft, TransactionKind
from fintrackr.utils.date_parser import parse_datetime_or_now

EXPORT_HEADER = "Date,Type,Amount,Category,Note"
EXPORT_DATE_FORMAT = "%x"

# Columns that must be present and non-empty for a row to be accepted
REQUIRED_COLUMNS = ("amount", "category", "type")

# Alternate header spellings accepted on import
HEADER_ALIASES = {"notes": "note"}


def format_amount(amount: Decimal) -> str:
    """Render an amount without trailing zeros ("50.00" -> "50", "12.50" -> "12.5")."""
    return f"{amount.normalize():f}"


def encode_transactions(transactions: Iterable[Transaction]) -> str:
    """Encode transactions as CSV text.

    Args:
        transactions: Transactions in the order they should appear

    Returns:
        Header line followed by one fully quoted line per transaction,
        separated by newlines, with no trailing newline
    """
    rows = [
        ",".join(
            f'"{value}"'
            for value in (
                txn.occurred_at.strftime(EXPORT_DATE_FORMAT),
                txn.kind.value,
                format_amount(txn.amount),
                txn.category,
                txn.note or "",
            )
        )
        for txn in transactions
    ]
    return EXPORT_HEADER + "\n" + "\n".join(rows)


def split_csv_line(line: str) -> list[str]:
    """Split one CSV line on commas that are outside double quotes.

    Every ``"`` toggles the quoted state and is kept in the field text;
    callers strip quotes afterwards.
    """
    values = []
    current = []
    in_quotes = False
    for char in line:
        if char == '"':
            in_quotes = not in_quotes
            current.append(char)
        elif char == "," and not in_quotes:
            values.append("".join(current))
            current = []
        else:
            current.append(char)
    values.append("".join(current))
    return values


def _clean(value: str) -> str:
    return value.replace('"', "").strip()


def _normalize_header(name: str) -> str:
    key = _clean(name).lower()
    return HEADER_ALIASES.get(key, key)


def _coerce_type(value: str) -> str:
    kind = value.lower()
    if kind not in (TransactionKind.INCOME.value, TransactionKind.EXPENSE.value):
        return TransactionKind.EXPENSE.value
    return kind


def decode_transactions(csv_text: str) -> list[TransactionDraft]:
    """Decode CSV text into transaction drafts.

    The first non-blank line is the header; columns are matched by name
    (case-insensitive) so their order does not matter. Rows whose field
    count differs from the header's are skipped silently, as are rows
    missing an amount, category or type. Unknown types become "expense"
    and a missing or unparseable date becomes the current time.

    Args:
        csv_text: Raw CSV file content

    Returns:
        List of drafts in file order
    """
    lines = [line for line in csv_text.split("\n") if line.strip()]
    if len(lines) < 2:
        return []

    headers = [_normalize_header(name) for name in lines[0].split(",")]
    drafts = []
    for line in lines[1:]:
        values = split_csv_line(line)
        if len(values) != len(headers):
            continue

        row = {header: _clean(value) for header, value in zip(headers, values)}
        if not all(row.get(column) for column in REQUIRED_COLUMNS):
            continue

        date_value: Optional[str] = row.get("date")
        drafts.append(
            TransactionDraft(
                type=_coerce_type(row["type"]),
                amount=row["amount"],
                category=row["category"],
                note=row.get("note", ""),
                date=parse_datetime_or_now(date_value).isoformat(),
            )
        )
    return drafts
