"""Tests for pfv.domain.report pure functions."""

import pytest

from pfv.domain.models import Description, MonthLabel, TransactionId
from pfv.domain.report import (
    MonthlyBucket,
    aggregate_monthly,
    calculate_grand_total,
    calculate_histogram_bar_length,
)
from pfv.domain.transactions import Transaction


def txn(txn_id: str, amount: float, date: str) -> Transaction:
    return Transaction(id=TransactionId(txn_id), amount=amount, date=date, description=Description("Test"))


class TestAggregateMonthly:
    """Tests for aggregate_monthly."""

    def test_groups_and_sums_by_month(self) -> None:
        """Should sum each month in first-occurrence order."""
        transactions = [
            txn("1", 10, "2024-01-05"),
            txn("2", 5, "2024-01-20"),
            txn("3", 7, "2024-02-01"),
        ]

        result = aggregate_monthly(transactions)

        assert result == [
            MonthlyBucket(label=MonthLabel("Jan 2024"), total=15),
            MonthlyBucket(label=MonthLabel("Feb 2024"), total=7),
        ]

    def test_empty_input(self) -> None:
        """Should return no buckets for no transactions."""
        assert aggregate_monthly([]) == []

    def test_excludes_unparseable_dates(self) -> None:
        """Should skip transactions whose date is not a calendar date."""
        transactions = [txn("1", 3, "not-a-date"), txn("2", 4, "2024-03-10")]

        result = aggregate_monthly(transactions)

        assert result == [MonthlyBucket(label=MonthLabel("Mar 2024"), total=4)]

    @pytest.mark.parametrize("raw_date", ["today", "now", "Jan 5 2024"])
    def test_excludes_relative_and_free_text_dates(self, raw_date: str) -> None:
        """Should not place words like "today" into the current month."""
        transactions = [txn("1", 1, raw_date), txn("2", 2, "2024-03-10")]

        assert aggregate_monthly(transactions) == [MonthlyBucket(label=MonthLabel("Mar 2024"), total=2)]
        assert aggregate_monthly([txn("1", 1, raw_date)]) == []

    def test_only_unparseable_dates(self) -> None:
        """Should return no buckets when no date parses."""
        assert aggregate_monthly([txn("1", 3, "garbage")]) == []

    def test_first_seen_order_follows_input(self) -> None:
        """Should not sort chronologically by default."""
        transactions = [
            txn("3", 1, "2024-03-01"),
            txn("2", 1, "2023-12-01"),
            txn("1", 1, "2024-03-15"),
        ]

        labels = [bucket.label for bucket in aggregate_monthly(transactions)]

        assert labels == ["Mar 2024", "Dec 2023"]

    def test_chronological_order(self) -> None:
        """Should sort by year then month when asked."""
        transactions = [
            txn("4", 1, "2024-03-01"),
            txn("3", 1, "2023-12-01"),
            txn("2", 1, "2024-01-15"),
            txn("1", 1, "2023-02-01"),
        ]

        labels = [bucket.label for bucket in aggregate_monthly(transactions, order="chronological")]

        assert labels == ["Feb 2023", "Dec 2023", "Jan 2024", "Mar 2024"]

    def test_same_month_different_years_are_separate(self) -> None:
        """Should key buckets by month and year."""
        transactions = [txn("2", 2, "2024-01-01"), txn("1", 3, "2023-01-01")]

        result = aggregate_monthly(transactions)

        assert result == [
            MonthlyBucket(label=MonthLabel("Jan 2024"), total=2),
            MonthlyBucket(label=MonthLabel("Jan 2023"), total=3),
        ]

    def test_negative_amounts_subtract(self) -> None:
        """Should sum signed amounts as they are."""
        transactions = [txn("2", -4, "2024-05-02"), txn("1", 10, "2024-05-01")]

        assert aggregate_monthly(transactions) == [MonthlyBucket(label=MonthLabel("May 2024"), total=6)]

    def test_float_summation_in_input_order(self) -> None:
        """Should accept plain float error rather than rounding."""
        transactions = [txn("2", 0.1, "2024-06-01"), txn("1", 0.2, "2024-06-02")]

        result = aggregate_monthly(transactions)

        assert result[0].total == 0.1 + 0.2

    def test_does_not_consume_input(self) -> None:
        """Should leave the input sequence untouched."""
        transactions = (txn("1", 1, "2024-01-01"),)

        aggregate_monthly(transactions)

        assert transactions == (txn("1", 1, "2024-01-01"),)

    def test_unknown_order_raises(self) -> None:
        """Should reject unknown bucket orders."""
        with pytest.raises(ValueError, match="Unknown bucket order"):
            aggregate_monthly([], order="alphabetical")


class TestGrandTotal:
    """Tests for calculate_grand_total."""

    def test_sums_buckets(self) -> None:
        """Should add bucket totals."""
        buckets = [MonthlyBucket(MonthLabel("Jan 2024"), 15.0), MonthlyBucket(MonthLabel("Feb 2024"), 7.0)]

        assert calculate_grand_total(buckets) == 22.0

    def test_empty(self) -> None:
        """Should be zero for no buckets."""
        assert calculate_grand_total([]) == 0.0


class TestHistogramBarLength:
    """Tests for calculate_histogram_bar_length."""

    def test_full_bar_for_max(self) -> None:
        """Should fill the bar for the largest amount."""
        assert calculate_histogram_bar_length(50.0, 50.0, 30) == 30

    def test_scales_proportionally(self) -> None:
        """Should scale smaller amounts down."""
        assert calculate_histogram_bar_length(25.0, 50.0, 30) == 15

    def test_uses_absolute_amount(self) -> None:
        """Should size negative totals by magnitude."""
        assert calculate_histogram_bar_length(-25.0, 50.0, 30) == 15

    def test_zero_max(self) -> None:
        """Should return zero when there is nothing to scale against."""
        assert calculate_histogram_bar_length(0.0, 0.0, 30) == 0
