"""Tests for pfv.domain.transactions pure functions."""

import json

import pytest

from pfv.domain.models import Description, TransactionId
from pfv.domain.transactions import (
    MalformedLedgerError,
    Transaction,
    build_transaction,
    deserialize_transactions,
    parse_amount,
    parse_transaction_input,
    serialize_transactions,
    transaction_from_record,
)


def make_transaction(txn_id: str, amount: float, date: str, description: str = "Test") -> Transaction:
    return Transaction(
        id=TransactionId(txn_id),
        amount=amount,
        date=date,
        description=Description(description),
    )


class TestParseAmount:
    """Tests for parse_amount."""

    def test_parses_decimal(self) -> None:
        """Should parse a decimal string."""
        assert parse_amount("12.5") == 12.5

    def test_parses_negative(self) -> None:
        """Should allow negative amounts (refunds)."""
        assert parse_amount("-3") == -3.0

    def test_rejects_text(self) -> None:
        """Should return None for non-numeric text."""
        assert parse_amount("abc") is None

    def test_rejects_trailing_garbage(self) -> None:
        """Should return None when the number is followed by text."""
        assert parse_amount("12abc") is None

    def test_rejects_non_finite(self) -> None:
        """Should return None for NaN and infinity."""
        assert parse_amount("nan") is None
        assert parse_amount("inf") is None
        assert parse_amount("-Infinity") is None


class TestParseTransactionInput:
    """Tests for parse_transaction_input."""

    def test_parses_valid_input(self) -> None:
        """Should accept complete input."""
        result = parse_transaction_input("12.5", "2024-01-01", "Coffee")

        assert result is not None
        assert result["amount"] == 12.5
        assert result["date"] == "2024-01-01"
        assert result["description"] == "Coffee"

    def test_rejects_empty_amount(self) -> None:
        """Should reject a missing amount."""
        assert parse_transaction_input("", "2024-01-01", "desc") is None

    def test_rejects_empty_date(self) -> None:
        """Should reject a missing date."""
        assert parse_transaction_input("12.5", "", "desc") is None

    def test_rejects_empty_description(self) -> None:
        """Should reject a missing description."""
        assert parse_transaction_input("12.5", "2024-01-01", "") is None

    def test_rejects_whitespace_only_fields(self) -> None:
        """Should treat whitespace-only fields as empty."""
        assert parse_transaction_input("12.5", "2024-01-01", "   ") is None
        assert parse_transaction_input("  ", "2024-01-01", "desc") is None

    def test_rejects_unparseable_amount(self) -> None:
        """Should reject an amount that is not a number."""
        assert parse_transaction_input("abc", "2024-01-01", "desc") is None

    def test_keeps_date_as_supplied(self) -> None:
        """Should not validate or rewrite the date."""
        result = parse_transaction_input("5", "not-a-date", "desc")

        assert result is not None
        assert result["date"] == "not-a-date"

    def test_build_transaction_attaches_id(self) -> None:
        """Should combine an id with parsed input."""
        parsed = parse_transaction_input("7", "2024-02-01", "Lunch")
        assert parsed is not None

        txn = build_transaction(TransactionId("42"), parsed)

        assert txn == make_transaction("42", 7.0, "2024-02-01", "Lunch")


class TestSerialization:
    """Tests for ledger serialization."""

    def test_serializes_records_in_order(self) -> None:
        """Should write a JSON array with the four record fields."""
        payload = serialize_transactions(
            [make_transaction("2", 5.0, "2024-01-20", "B"), make_transaction("1", 10.0, "2024-01-05", "A")]
        )

        assert json.loads(payload) == [
            {"id": "2", "amount": 5.0, "date": "2024-01-20", "description": "B"},
            {"id": "1", "amount": 10.0, "date": "2024-01-05", "description": "A"},
        ]

    def test_round_trip_preserves_sequence(self) -> None:
        """Should decode exactly what was encoded."""
        transactions = [
            make_transaction("3", 0.1, "2024-02-01", "Third"),
            make_transaction("2", -4.25, "not-a-date", "Refund"),
            make_transaction("1", 1e6, "2023-12-31", "Ünïcode"),
        ]

        assert deserialize_transactions(serialize_transactions(transactions)) == transactions

    def test_accepts_integer_amounts(self) -> None:
        """Should read integer JSON amounts as floats."""
        result = deserialize_transactions('[{"id": "1", "amount": 10, "date": "2024-01-05", "description": "A"}]')

        assert result == [make_transaction("1", 10.0, "2024-01-05", "A")]

    def test_drops_repeated_ids(self) -> None:
        """Should keep only the first record for a repeated id."""
        payload = json.dumps(
            [
                {"id": "1", "amount": 1, "date": "2024-01-01", "description": "first"},
                {"id": "1", "amount": 2, "date": "2024-01-02", "description": "second"},
            ]
        )

        result = deserialize_transactions(payload)

        assert [txn.description for txn in result] == ["first"]

    @pytest.mark.parametrize(
        "payload",
        [
            "",
            "{not json",
            "null",
            '{"id": "1"}',
            '[{"id": "1", "amount": 1, "date": "2024-01-01"}]',
            '[{"id": 1, "amount": 1, "date": "2024-01-01", "description": "x"}]',
            '[{"id": "1", "amount": "1", "date": "2024-01-01", "description": "x"}]',
            '[{"id": "1", "amount": true, "date": "2024-01-01", "description": "x"}]',
            '[{"id": "1", "amount": NaN, "date": "2024-01-01", "description": "x"}]',
            '[{"id": "1", "amount": 1, "date": null, "description": "x"}]',
            "[42]",
        ],
    )
    def test_malformed_payload_raises(self, payload: str) -> None:
        """Should raise MalformedLedgerError for anything but a valid record array."""
        with pytest.raises(MalformedLedgerError):
            deserialize_transactions(payload)

    def test_malformed_error_is_valueerror(self) -> None:
        """Should be catchable as ValueError."""
        with pytest.raises(ValueError):
            transaction_from_record("nope")
