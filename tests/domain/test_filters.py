"""Tests for budgetman.domain.filters pure functions."""

import pytest

from budgetman.domain.errors import InvalidTransactionType
from budgetman.domain.filters import FilterSpec, apply_filter, matches
from budgetman.domain.models import Amount, CategoryName, TransactionId, TransactionType
from budgetman.domain.transactions import Transaction


def make_txn(txn_id: int, txn_type: TransactionType, amount: float, category: str, date: str) -> Transaction:
    return Transaction(
        id=TransactionId(txn_id),
        type=txn_type,
        amount=Amount(amount),
        category=CategoryName(category),
        note="",
        date=date,
    )


SALARY = make_txn(1, "income", 100, "Salary", "2024-01-05")
LUNCH = make_txn(2, "expense", 30, "Food", "2024-01-10")
BUS = make_txn(3, "expense", 20, "Transport", "2024-02-01")
ALL_TXNS = [SALARY, LUNCH, BUS]


class TestFilterSpecCreate:
    """Tests for FilterSpec.create."""

    def test_defaults_to_all(self) -> None:
        spec = FilterSpec.create()

        assert spec == FilterSpec(type="all", category="all", month="all")
        assert spec.is_unfiltered

    def test_keeps_given_values(self) -> None:
        spec = FilterSpec.create("Expense", "Food", "2024-01")

        assert spec == FilterSpec(type="expense", category="Food", month="2024-01")
        assert not spec.is_unfiltered

    def test_rejects_unknown_type(self) -> None:
        with pytest.raises(InvalidTransactionType):
            FilterSpec.create(type="transfer")


class TestMatches:
    """Tests for matches."""

    def test_all_matches_everything(self) -> None:
        spec = FilterSpec()

        assert all(matches(txn, spec) for txn in ALL_TXNS)

    def test_type_must_match_exactly(self) -> None:
        spec = FilterSpec(type="income")

        assert matches(SALARY, spec)
        assert not matches(LUNCH, spec)

    def test_category_is_case_sensitive(self) -> None:
        """Should compare categories exactly, including case."""
        assert matches(LUNCH, FilterSpec(category="Food"))
        assert not matches(LUNCH, FilterSpec(category="food"))

    def test_month_compares_date_prefix(self) -> None:
        spec = FilterSpec(month="2024-01")

        assert matches(SALARY, spec)
        assert matches(LUNCH, spec)
        assert not matches(BUS, spec)

    def test_conditions_are_conjunctive(self) -> None:
        """Should require every constraint to hold."""
        spec = FilterSpec(type="expense", category="Food", month="2024-02")

        assert not matches(LUNCH, spec)
        assert not matches(BUS, spec)


class TestApplyFilter:
    """Tests for apply_filter."""

    def test_preserves_relative_order(self) -> None:
        result = apply_filter([BUS, SALARY, LUNCH], FilterSpec(type="expense"))

        assert result == [BUS, LUNCH]

    def test_result_is_subsequence_of_matches(self) -> None:
        """Should only return matching transactions, in input order."""
        specs = [
            FilterSpec(),
            FilterSpec(type="income"),
            FilterSpec(category="Transport"),
            FilterSpec(month="2024-01"),
            FilterSpec(type="expense", month="2024-01"),
            FilterSpec(category="Rent"),
        ]
        for spec in specs:
            result = apply_filter(ALL_TXNS, spec)

            assert all(matches(txn, spec) for txn in result)
            assert result == [txn for txn in ALL_TXNS if txn in result]

    def test_no_match_returns_empty(self) -> None:
        assert apply_filter(ALL_TXNS, FilterSpec(month="2023-12")) == []
