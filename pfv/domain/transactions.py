"""Pure functions for transaction validation and serialization.

This module contains the functional core for transaction operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Amounts are plain floats; no currency rounding is applied anywhere.
"""

import json
import math
from dataclasses import dataclass
from typing import Any, TypedDict

from pfv.domain.models import Description, TransactionId

RECORD_FIELDS = ("id", "amount", "date", "description")


class MalformedLedgerError(ValueError):
    """Raised when a persisted ledger payload cannot be decoded."""


class ParsedTransaction(TypedDict):
    """Validated add input, ready to be given an id."""

    amount: float
    date: str
    description: Description


@dataclass(frozen=True)
class Transaction:
    """Immutable transaction data."""

    id: TransactionId
    amount: float
    date: str
    description: Description


def parse_amount(raw_amount: str) -> float | None:
    """Parse a raw amount string into a finite float.

    Args:
        raw_amount: Amount as typed by the user (e.g., "12.50", "-3").

    Returns:
        Parsed amount, or None if it is not a finite number.
    """
    try:
        amount = float(raw_amount)
    except (TypeError, ValueError):
        return None

    if not math.isfinite(amount):
        return None
    return amount


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def parse_transaction_input(amount_raw: str, date_raw: str, description_raw: str) -> ParsedTransaction | None:
    """Validate raw add input.

    All three fields must be non-empty (whitespace-only counts as empty) and
    the amount must parse to a finite number. The date is kept exactly as
    supplied; whether it is a real calendar date only matters for reporting.

    Args:
        amount_raw: Raw amount string.
        date_raw: Raw ISO-8601 date string.
        description_raw: Raw description.

    Returns:
        ParsedTransaction if valid, None if the input should be rejected.
    """
    if _is_blank(amount_raw) or _is_blank(date_raw) or _is_blank(description_raw):
        return None

    amount = parse_amount(amount_raw)
    if amount is None:
        return None

    return ParsedTransaction(amount=amount, date=date_raw, description=Description(description_raw))


def build_transaction(txn_id: TransactionId, parsed: ParsedTransaction) -> Transaction:
    """Attach an id to validated input."""
    return Transaction(
        id=txn_id,
        amount=parsed["amount"],
        date=parsed["date"],
        description=parsed["description"],
    )


def transaction_to_record(txn: Transaction) -> dict[str, Any]:
    """Convert a transaction to its persisted record shape."""
    return {
        "id": txn.id,
        "amount": txn.amount,
        "date": txn.date,
        "description": txn.description,
    }


def transaction_from_record(record: Any) -> Transaction:
    """Build a transaction from a persisted record.

    Args:
        record: Decoded JSON object with id, amount, date and description.

    Returns:
        Transaction.

    Raises:
        MalformedLedgerError: If the record is missing fields or has wrong types.
    """
    if not isinstance(record, dict):
        raise MalformedLedgerError(f"Expected an object, got {type(record).__name__}")

    missing = [field for field in RECORD_FIELDS if field not in record]
    if missing:
        raise MalformedLedgerError(f"Record is missing fields: {', '.join(missing)}")

    txn_id = record["id"]
    amount = record["amount"]
    date = record["date"]
    description = record["description"]

    if not isinstance(txn_id, str) or not txn_id:
        raise MalformedLedgerError(f"Invalid id: {txn_id!r}")
    # bool is an int subclass but never a valid amount
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise MalformedLedgerError(f"Invalid amount for {txn_id}: {amount!r}")
    try:
        amount = float(amount)
    except OverflowError as e:
        raise MalformedLedgerError(f"Amount out of range for {txn_id}") from e
    if not math.isfinite(amount):
        raise MalformedLedgerError(f"Invalid amount for {txn_id}: {amount!r}")
    if not isinstance(date, str):
        raise MalformedLedgerError(f"Invalid date for {txn_id}: {date!r}")
    if not isinstance(description, str):
        raise MalformedLedgerError(f"Invalid description for {txn_id}: {description!r}")

    return Transaction(
        id=TransactionId(txn_id),
        amount=amount,
        date=date,
        description=Description(description),
    )


def serialize_transactions(transactions: list[Transaction] | tuple[Transaction, ...]) -> str:
    """Serialize transactions to a JSON array, preserving order."""
    return json.dumps([transaction_to_record(txn) for txn in transactions])


def deserialize_transactions(payload: str) -> list[Transaction]:
    """Decode a persisted JSON array of transactions.

    Records repeating an id already seen are dropped so the decoded sequence
    always has unique ids; the first occurrence wins.

    Args:
        payload: JSON text as written by serialize_transactions.

    Returns:
        Transactions in persisted order.

    Raises:
        MalformedLedgerError: If the payload is not a JSON array of valid records.
    """
    try:
        data = json.loads(payload)
    except (TypeError, ValueError) as e:
        raise MalformedLedgerError(f"Ledger is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise MalformedLedgerError(f"Expected a JSON array, got {type(data).__name__}")

    transactions: list[Transaction] = []
    seen: set[str] = set()
    for record in data:
        txn = transaction_from_record(record)
        if txn.id in seen:
            continue
        seen.add(txn.id)
        transactions.append(txn)

    return transactions
