"""Tests for budgetman.domain.transactions pure functions."""

import pytest

from budgetman.domain.errors import (
    InvalidAmount,
    InvalidDate,
    InvalidTransactionType,
    PersistedStateUnreadable,
)
from budgetman.domain.models import CategoryName, TransactionId
from budgetman.domain.transactions import (
    Transaction,
    TransactionDraft,
    build_transaction,
    next_id,
    parse_amount,
    parse_date,
    parse_transaction_type,
    transaction_from_dict,
    transaction_to_dict,
)


class TestParseAmount:
    """Tests for parse_amount."""

    def test_parses_numeric_string(self) -> None:
        assert parse_amount("42.50") == 42.5

    def test_accepts_numbers(self) -> None:
        assert parse_amount(100) == 100.0
        assert parse_amount(0.01) == 0.01

    def test_strips_whitespace(self) -> None:
        assert parse_amount("  12.30 ") == 12.3

    def test_rejects_non_numeric(self) -> None:
        """Should reject text that is not a number."""
        with pytest.raises(InvalidAmount):
            parse_amount("abc")

    def test_rejects_missing(self) -> None:
        """Should reject None and empty strings."""
        with pytest.raises(InvalidAmount):
            parse_amount(None)
        with pytest.raises(InvalidAmount):
            parse_amount("   ")

    def test_rejects_zero(self) -> None:
        with pytest.raises(InvalidAmount):
            parse_amount("0")

    def test_negative_becomes_magnitude(self) -> None:
        """Should store negative input as its absolute value."""
        assert parse_amount("-5") == 5.0
        assert parse_amount(-12.5) == 12.5

    def test_rejects_underscore_separators(self) -> None:
        with pytest.raises(InvalidAmount):
            parse_amount("1_000")

    def test_rejects_nan_and_infinity(self) -> None:
        """Should reject non-finite numbers."""
        for raw in ("nan", "inf", "-inf", float("nan")):
            with pytest.raises(InvalidAmount):
                parse_amount(raw)

    def test_rejects_booleans(self) -> None:
        with pytest.raises(InvalidAmount):
            parse_amount(True)


class TestParseTransactionType:
    """Tests for parse_transaction_type."""

    def test_accepts_known_types(self) -> None:
        assert parse_transaction_type("income") == "income"
        assert parse_transaction_type("expense") == "expense"

    def test_is_case_insensitive(self) -> None:
        assert parse_transaction_type(" Income ") == "income"

    def test_rejects_unknown_type(self) -> None:
        with pytest.raises(InvalidTransactionType):
            parse_transaction_type("transfer")


class TestParseDate:
    """Tests for parse_date."""

    def test_keeps_valid_date(self) -> None:
        assert parse_date("2024-03-01", "2025-01-01") == "2024-03-01"

    def test_uses_default_when_omitted(self) -> None:
        """Should fall back to the default for None or blank input."""
        assert parse_date(None, "2025-01-01") == "2025-01-01"
        assert parse_date("", "2025-01-01") == "2025-01-01"

    def test_rejects_unparseable_date(self) -> None:
        with pytest.raises(InvalidDate):
            parse_date("yesterday", "2025-01-01")


class TestNextId:
    """Tests for next_id."""

    def test_uses_clock_for_empty_store(self) -> None:
        assert next_id([], 1_700_000_000_000) == 1_700_000_000_000

    def test_uses_clock_when_ahead(self) -> None:
        assert next_id([5, 10], 1_000) == 1_000

    def test_bumps_past_existing_ids(self) -> None:
        """Should stay unique when the clock hasn't moved on."""
        assert next_id([1_000, 999], 1_000) == 1_001


class TestBuildTransaction:
    """Tests for build_transaction."""

    def test_builds_expense_from_draft(self) -> None:
        draft = TransactionDraft(type="expense", amount="42.50", category="Food", date="2024-03-01")

        txn = build_transaction(draft, TransactionId(1), "2025-01-01")

        assert txn == Transaction(
            id=TransactionId(1),
            type="expense",
            amount=42.5,
            category=CategoryName("Food"),
            note="",
            date="2024-03-01",
        )

    def test_applies_form_defaults(self) -> None:
        """Should default to an expense in Food, dated today, with empty note."""
        txn = build_transaction(TransactionDraft(amount=10), TransactionId(7), "2025-06-30")

        assert txn.type == "expense"
        assert txn.category == "Food"
        assert txn.note == ""
        assert txn.date == "2025-06-30"

    def test_keeps_free_form_category(self) -> None:
        """Should not restrict categories to the default list."""
        draft = TransactionDraft(type="income", amount=5, category="Gifts")

        txn = build_transaction(draft, TransactionId(1), "2025-01-01")

        assert txn.category == "Gifts"

    def test_invalid_amount_raises(self) -> None:
        with pytest.raises(InvalidAmount):
            build_transaction(TransactionDraft(amount="abc"), TransactionId(1), "2025-01-01")

    def test_month_property(self) -> None:
        txn = build_transaction(TransactionDraft(amount=1, date="2024-11-30"), TransactionId(1), "2025-01-01")

        assert txn.month == "2024-11"


class TestTransactionFromDict:
    """Tests for transaction_from_dict."""

    def test_parses_persisted_record(self) -> None:
        raw = {
            "id": 1709251200000,
            "type": "income",
            "amount": 100,
            "category": "Salary",
            "note": "March",
            "date": "2024-03-01",
        }

        txn = transaction_from_dict(raw)

        assert txn.id == 1709251200000
        assert txn.is_income
        assert txn.amount == 100.0
        assert transaction_to_dict(txn) == {**raw, "amount": 100.0}

    def test_missing_note_becomes_empty(self) -> None:
        """Should treat a missing note as empty rather than an error."""
        raw = {"id": 1, "type": "expense", "amount": 3.5, "category": "Food", "date": "2024-03-01"}

        assert transaction_from_dict(raw).note == ""

    def test_rejects_non_object(self) -> None:
        with pytest.raises(PersistedStateUnreadable):
            transaction_from_dict(["not", "a", "record"])

    def test_rejects_missing_id(self) -> None:
        raw = {"type": "expense", "amount": 3.5, "category": "Food", "date": "2024-03-01"}

        with pytest.raises(PersistedStateUnreadable):
            transaction_from_dict(raw)

    def test_rejects_bad_date(self) -> None:
        raw = {"id": 1, "type": "expense", "amount": 3.5, "category": "Food", "date": "03/2024"}

        with pytest.raises(PersistedStateUnreadable):
            transaction_from_dict(raw)

    def test_rejects_bad_amount(self) -> None:
        raw = {"id": 1, "type": "expense", "amount": 0, "category": "Food", "date": "2024-03-01"}

        with pytest.raises(PersistedStateUnreadable):
            transaction_from_dict(raw)
