"""Pure functions for monthly report calculations and aggregations.

This module contains the functional core for reporting operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test
"""

from collections.abc import Iterable
from dataclasses import dataclass

from pfv.dates import month_label, parse_calendar_date
from pfv.domain.models import MonthLabel
from pfv.domain.transactions import Transaction

ORDER_FIRST_SEEN = "first-seen"
ORDER_CHRONOLOGICAL = "chronological"
BUCKET_ORDERS = (ORDER_FIRST_SEEN, ORDER_CHRONOLOGICAL)


@dataclass(frozen=True)
class MonthlyBucket:
    """Immutable total for one calendar month."""

    label: MonthLabel
    total: float


def aggregate_monthly(
    transactions: Iterable[Transaction],
    order: str = ORDER_FIRST_SEEN,
) -> list[MonthlyBucket]:
    """Group transactions by calendar month and sum their amounts.

    Transactions whose date is not a valid calendar date are left out.
    Amounts are summed in input order with plain float addition.

    Args:
        transactions: Transaction snapshot, in store iteration order.
        order: "first-seen" keeps buckets in the order their month first
            appears in the input; "chronological" sorts them oldest first.

    Returns:
        One MonthlyBucket per distinct month.

    Raises:
        ValueError: If order is not a known bucket order.
    """
    if order not in BUCKET_ORDERS:
        raise ValueError(f"Unknown bucket order '{order}' (expected one of: {', '.join(BUCKET_ORDERS)})")

    totals: dict[MonthLabel, float] = {}
    sort_keys: dict[MonthLabel, tuple[int, int]] = {}

    for txn in transactions:
        day = parse_calendar_date(txn.date)
        if day is None:
            continue

        label = month_label(day)
        if label not in totals:
            totals[label] = 0.0
            sort_keys[label] = (day.year, day.month)
        totals[label] += txn.amount

    labels = list(totals)
    if order == ORDER_CHRONOLOGICAL:
        labels.sort(key=lambda label: sort_keys[label])

    return [MonthlyBucket(label=label, total=totals[label]) for label in labels]


def calculate_grand_total(buckets: list[MonthlyBucket]) -> float:
    """Sum bucket totals."""
    return sum((bucket.total for bucket in buckets), 0.0)


def calculate_histogram_bar_length(
    total: float,
    max_total: float,
    bar_width: int,
) -> int:
    """Calculate histogram bar length.

    Args:
        total: Amount to display.
        max_total: Largest absolute amount in the dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_total <= 0:
        return 0
    return int((abs(total) / max_total) * bar_width)
