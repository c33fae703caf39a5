"""Domain validation helpers."""

from src.domain.constants import TransactionType
from src.domain.models import Category, LedgerSnapshot, Transaction
from src.domain.policies.categories import is_category_compatible


def validate_transaction(
    transaction: Transaction,
    snapshot: LedgerSnapshot,
) -> list[str]:
    """List the problems that make a transaction unfit for entry.

    The balance engine tolerates every problem reported here; entry points
    use this to reject bad input before it reaches the ledger.

    Args:
        transaction: Candidate transaction.
        snapshot: Ledger the transaction would be added to.

    Returns:
        list[str]: Human readable problems, empty when valid.
    """
    problems: list[str] = []
    account_ids = {account.id for account in snapshot.accounts}
    categories = {category.id: category for category in snapshot.categories}

    if transaction.amount == 0:
        problems.append("amount must be greater than zero")
    if not transaction.from_account_id:
        problems.append("source account is required")
    elif transaction.from_account_id not in account_ids:
        problems.append(
            f"unknown source account {transaction.from_account_id}"
        )

    if transaction.transaction_type == TransactionType.TRANSFER:
        problems.extend(_transfer_problems(transaction, account_ids))
        return problems

    if transaction.to_account_id:
        problems.append(
            f"{transaction.transaction_type.value} must not name "
            "a destination account"
        )
    problems.extend(_category_problems(transaction, categories))
    return problems


def _transfer_problems(
    transaction: Transaction,
    account_ids: set[str],
) -> list[str]:
    if not transaction.to_account_id:
        return ["transfer requires a destination account"]
    if transaction.to_account_id == transaction.from_account_id:
        return ["transfer accounts must be distinct"]
    if transaction.to_account_id not in account_ids:
        return [f"unknown destination account {transaction.to_account_id}"]
    return []


def _category_problems(
    transaction: Transaction,
    categories: dict[str, Category],
) -> list[str]:
    if not transaction.category_id:
        if transaction.sub_category_id:
            return ["sub-category given without a category"]
        return []
    category = categories.get(transaction.category_id)
    if category is None:
        return [f"unknown category {transaction.category_id}"]
    problems = []
    if not is_category_compatible(category, transaction.transaction_type):
        problems.append(
            f"category {category.name} does not accept "
            f"{transaction.transaction_type.value} transactions"
        )
    if transaction.sub_category_id:
        sub = categories.get(transaction.sub_category_id)
        if sub is None or sub.parent_id != category.id:
            problems.append(
                f"sub-category {transaction.sub_category_id} is not a child "
                f"of {category.name}"
            )
    return problems


def find_dangling_references(
    snapshot: LedgerSnapshot,
) -> list[str]:
    """Describe references in the ledger that point at nothing.

    Returns:
        list[str]: One message per dangling reference.
    """
    account_ids = {account.id for account in snapshot.accounts}
    category_ids = {category.id for category in snapshot.categories}
    messages = []
    for tx in snapshot.transactions:
        for account_id in (tx.from_account_id, tx.to_account_id):
            if account_id and account_id not in account_ids:
                messages.append(
                    f"Transaction {tx.id} references missing account "
                    f"{account_id}"
                )
        if tx.category_id and tx.category_id not in category_ids:
            messages.append(
                f"Transaction {tx.id} references missing category "
                f"{tx.category_id}"
            )
    for budget in snapshot.budgets:
        if budget.category_id not in category_ids:
            messages.append(
                f"Budget {budget.id} references missing category "
                f"{budget.category_id}"
            )
    return messages


def warn_dangling_references(snapshot: LedgerSnapshot, logger) -> int:
    """Log a warning per dangling reference and return how many were found."""
    messages = find_dangling_references(snapshot)
    for message in messages:
        logger.warning(message)
    return len(messages)


__all__ = [
    "validate_transaction",
    "find_dangling_references",
    "warn_dangling_references",
]
