"""Listing policies for transactions and alerts."""

from collections.abc import Iterable

from src.domain.constants import TransactionType
from src.domain.models import DueAlert, Transaction

SORT_DATE_DESC = "date-desc"
SORT_AMOUNT_DESC = "amount-desc"


def filter_transactions(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType | None = None,
    search: str = "",
    month: int | None = None,
    year: int | None = None,
    sort_by: str = SORT_DATE_DESC,
) -> list[Transaction]:
    """Filter and order transactions for listing.

    Args:
        transactions: Transactions to filter.
        transaction_type: Keep only this type when given.
        search: Case-insensitive substring matched against notes.
        month: Keep only this calendar month (1 to 12) when given.
        year: Keep only this year when given.
        sort_by: ``date-desc`` or ``amount-desc``; anything else keeps
            input order.

    Returns:
        list[Transaction]: Matching transactions.
    """
    needle = search.strip().lower()
    matches = [
        tx
        for tx in transactions
        if (transaction_type is None or tx.transaction_type == transaction_type)
        and (not needle or needle in tx.notes.lower())
        and (month is None or tx.date.month == month)
        and (year is None or tx.date.year == year)
    ]
    if sort_by == SORT_DATE_DESC:
        return sorted(matches, key=lambda tx: tx.date, reverse=True)
    if sort_by == SORT_AMOUNT_DESC:
        return sorted(matches, key=lambda tx: tx.amount, reverse=True)
    return matches


def pending_alerts(alerts: Iterable[DueAlert]) -> list[DueAlert]:
    """Return unpaid alerts, soonest due first."""
    return sorted(
        (alert for alert in alerts if not alert.is_paid),
        key=lambda alert: alert.due_date,
    )


__all__ = [
    "SORT_DATE_DESC",
    "SORT_AMOUNT_DESC",
    "filter_transactions",
    "pending_alerts",
]
