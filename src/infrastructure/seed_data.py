"""Starter ledger offered to new users."""

from datetime import date
from decimal import Decimal

from src.domain.constants import (
    AccountType,
    AlertType,
    TransactionType,
)
from src.domain.models import (
    Account,
    Budget,
    DueAlert,
    LedgerSnapshot,
    SubCategory,
    TopLevelCategory,
    Transaction,
)


def _account(id_, name, account_type, opening, due_date=None) -> Account:
    return Account(
        id=id_,
        name=name,
        account_type=account_type,
        opening_balance=Decimal(opening),
        current_balance=Decimal(opening),
        due_date=due_date,
    )


def default_snapshot() -> LedgerSnapshot:
    """Return the starter ledger.

    Returns:
        LedgerSnapshot: Four accounts, a two-tier category tree, three
        transactions, two budgets and three upcoming alerts.
    """
    food = TopLevelCategory("cat_1", "Food & Dining", TransactionType.EXPENSE)
    salary = TopLevelCategory("cat_4", "Salary", TransactionType.INCOME)
    housing = TopLevelCategory("cat_6", "Housing", TransactionType.EXPENSE)
    categories = [
        food,
        SubCategory("cat_2", "Groceries", food),
        SubCategory("cat_3", "Restaurants", food),
        salary,
        SubCategory("cat_5", "Primary Job", salary),
        housing,
        SubCategory("cat_7", "Rent", housing),
        SubCategory("cat_8", "Utilities", housing),
    ]
    accounts = [
        _account("acc_1", "Main Savings", AccountType.SAVINGS, "5000"),
        _account("acc_2", "Wallet", AccountType.CASH, "200"),
        _account(
            "acc_3",
            "Premium Visa",
            AccountType.CREDIT_CARD,
            "0",
            due_date=date(2024, 6, 15),
        ),
        _account(
            "acc_4",
            "Home Loan",
            AccountType.LOAN,
            "-250000",
            due_date=date(2024, 6, 5),
        ),
    ]
    transactions = [
        Transaction(
            id="tx_1",
            date=date(2024, 5, 1),
            amount=Decimal("3000"),
            transaction_type=TransactionType.INCOME,
            from_account_id="acc_1",
            category_id="cat_4",
            sub_category_id="cat_5",
            notes="Monthly Salary",
        ),
        Transaction(
            id="tx_2",
            date=date(2024, 5, 2),
            amount=Decimal("500"),
            transaction_type=TransactionType.EXPENSE,
            from_account_id="acc_3",
            category_id="cat_1",
            sub_category_id="cat_3",
            notes="Dinner with family",
        ),
        Transaction(
            id="tx_3",
            date=date(2024, 5, 5),
            amount=Decimal("1000"),
            transaction_type=TransactionType.TRANSFER,
            from_account_id="acc_1",
            to_account_id="acc_3",
            notes="Credit Card Payment",
        ),
    ]
    alerts = [
        DueAlert("al_1", "Home Loan EMI", Decimal("1200"),
                 date(2024, 6, 5), AlertType.EMI),
        DueAlert("al_2", "Visa Statement", Decimal("500"),
                 date(2024, 6, 15), AlertType.CREDIT_CARD),
        DueAlert("al_3", "Netflix", Decimal("15.99"),
                 date(2024, 6, 20), AlertType.SUBSCRIPTION),
    ]
    budgets = [
        Budget("b_1", "cat_1", Decimal("600")),
        Budget("b_2", "cat_6", Decimal("2000")),
    ]
    return LedgerSnapshot(
        accounts=accounts,
        transactions=transactions,
        categories=categories,
        budgets=budgets,
        alerts=alerts,
    )


__all__ = ["default_snapshot"]
