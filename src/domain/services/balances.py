"""Balance engine replaying the ledger over opening balances."""

from collections.abc import Iterable
from dataclasses import replace
from decimal import Decimal

from src.domain.constants import AccountType, TransactionType
from src.domain.models import Account, Transaction


def recalculate_balances(
    accounts: Iterable[Account],
    transactions: Iterable[Transaction],
) -> list[Account]:
    """Recompute every account's current balance from its transactions.

    Transactions touching an account are replayed in ascending date order
    starting from the opening balance. Transactions referencing unknown
    accounts are ignored.

    Args:
        accounts: Accounts whose balances should be derived.
        transactions: Full transaction ledger.

    Returns:
        list[Account]: New accounts with current_balance replaced.
    """
    ledger = list(transactions)
    return [
        replace(account, current_balance=_replay(account, ledger))
        for account in accounts
    ]


def _replay(account: Account, transactions: list[Transaction]) -> Decimal:
    relevant = [
        tx
        for tx in transactions
        if tx.from_account_id == account.id or tx.to_account_id == account.id
    ]
    # sorted() is stable, so same-day transactions keep ledger order.
    ordered = sorted(relevant, key=lambda tx: tx.date)

    balance = account.opening_balance
    for tx in ordered:
        is_source = tx.from_account_id == account.id
        if tx.transaction_type == TransactionType.INCOME:
            if is_source:
                balance = _credit(account, balance, tx.amount)
        elif tx.transaction_type == TransactionType.EXPENSE:
            if is_source:
                balance -= tx.amount
        elif tx.transaction_type == TransactionType.TRANSFER:
            if is_source:
                balance -= tx.amount
            elif tx.to_account_id == account.id:
                balance = _credit(account, balance, tx.amount)
    return balance


def _credit(account: Account, balance: Decimal, amount: Decimal) -> Decimal:
    # Credit card balances are debt: a payment can only bring them to zero.
    if account.account_type == AccountType.CREDIT_CARD:
        return min(balance + amount, Decimal("0"))
    return balance + amount


__all__ = ["recalculate_balances"]
