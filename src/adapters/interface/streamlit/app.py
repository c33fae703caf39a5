"""Streamlit dashboard entry point."""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal
import importlib

import altair as alt
import streamlit as st

from src.application.ports.statement_parser import TransactionCandidate
from src.application.use_cases.due_alerts import MarkAlertPaidUseCase
from src.application.use_cases.edit_transaction import (
    DeleteTransactionUseCase,
    UpdateTransactionUseCase,
)
from src.application.use_cases.get_account_balances import (
    GetAccountBalancesUseCase,
)
from src.application.use_cases.get_budget_overview import (
    BudgetOverview,
    GetBudgetOverviewUseCase,
)
from src.application.use_cases.get_dashboard_summary import (
    DashboardView,
    GetDashboardSummaryUseCase,
)
from src.application.use_cases.manage_accounts import SaveAccountUseCase
from src.application.use_cases.manage_categories import (
    AddCategoryUseCase,
    DeleteCategoryUseCase,
    RenameCategoryUseCase,
)
from src.application.use_cases.record_transaction import (
    RecordTransactionUseCase,
)
from src.application.use_cases.upsert_budget import (
    DeleteBudgetUseCase,
    UpsertBudgetUseCase,
)
from src.domain.constants import (
    AccountStatus,
    AccountType,
    BudgetStatus,
    TransactionType,
)
from src.domain.models import (
    Account,
    Delta,
    LedgerSnapshot,
    SubCategory,
    TopLevelCategory,
    Transaction,
)
from src.domain.policies.categories import budgetable_categories
from src.domain.policies.transactions import (
    SORT_AMOUNT_DESC,
    SORT_DATE_DESC,
    filter_transactions,
)
from src.infrastructure.container import (
    build_ledger_repository,
    build_settings,
)
from src.infrastructure.logging.logger import get_usage_logger

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

_CURRENCY_SYMBOLS = {"INR": "₹", "EUR": "€", "USD": "$", "GBP": "£"}

_STATUS_COLORS = {
    BudgetStatus.NORMAL: "#6366f1",
    BudgetStatus.NEAR: "#f59e0b",
    BudgetStatus.OVER: "#ef4444",
}


def _fetch_accounts() -> Sequence[Account]:
    """Fetch accounts with recalculated balances."""
    use_case = GetAccountBalancesUseCase(build_ledger_repository())
    return use_case.execute()


@st.cache_data(show_spinner=False)
def _load_accounts() -> Sequence[Account]:
    """Cached wrapper around _fetch_accounts for Streamlit sessions."""
    return _fetch_accounts()


def _fetch_dashboard(month: int, year: int) -> DashboardView:
    """Fetch the dashboard view for a month."""
    use_case = GetDashboardSummaryUseCase(build_ledger_repository())
    return use_case.execute(month=month, year=year)


@st.cache_data(show_spinner=False)
def _load_dashboard(month: int, year: int) -> DashboardView:
    """Cached wrapper around _fetch_dashboard."""
    return _fetch_dashboard(month, year)


def _fetch_budget_overview(month: int, year: int) -> BudgetOverview:
    """Fetch budget utilization for a month."""
    settings = build_settings()
    use_case = GetBudgetOverviewUseCase(
        build_ledger_repository(settings=settings),
        near_threshold=settings.near_threshold,
    )
    return use_case.execute(month=month, year=year)


@st.cache_data(show_spinner=False)
def _load_budget_overview(month: int, year: int) -> BudgetOverview:
    """Cached wrapper around _fetch_budget_overview."""
    return _fetch_budget_overview(month, year)


def _fetch_snapshot() -> LedgerSnapshot:
    """Fetch the raw ledger for listing pages."""
    return build_ledger_repository().load_snapshot()


def _check_altair_dependencies() -> tuple[bool, str | None]:
    """Check that the data libraries Altair relies on import cleanly.

    Returns:
        tuple[bool, str | None]: Success flag and an error message.
    """
    expected = (("numpy", "ndarray"), ("pandas", "Timestamp"))
    for module_name, attribute in expected:
        try:
            module = importlib.import_module(module_name)
        except ImportError as exc:
            return False, f"{module_name} could not be imported: {exc}"
        if not hasattr(module, attribute):
            return False, (
                f"{module_name} is incomplete (missing {attribute}); "
                "reinstall it to render charts."
            )
    return True, None


def _format_currency(value: Decimal, currency_code: str) -> str:
    """Format currency values for display."""
    symbol = _CURRENCY_SYMBOLS.get(currency_code)
    if symbol is None:
        return f"{value:,.2f} {currency_code}"
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def _format_delta(delta: Delta) -> str:
    """Format a delta with its percentage change."""
    sign = "+" if delta.is_positive else ""
    return f"{sign}{delta.diff:,.2f} ({sign}{delta.percent:.1f}%)"


def _month_selector(today: date) -> tuple[int, int]:
    """Render month and year pickers in the sidebar."""
    month_name = st.sidebar.selectbox(
        "Month",
        MONTH_NAMES,
        index=today.month - 1,
    )
    year = st.sidebar.number_input(
        "Year",
        min_value=2000,
        max_value=2100,
        value=today.year,
        step=1,
    )
    return MONTH_NAMES.index(month_name) + 1, int(year)


def _prepare_trend_data(view: DashboardView) -> list[dict[str, str | float]]:
    """Flatten the monthly trend into Altair rows."""
    data: list[dict[str, str | float]] = []
    for point in view.trend:
        label = f"{MONTH_NAMES[point.month - 1][:3]} {point.year}"
        data.append({"month": label, "kind": "Income",
                     "amount": float(point.income)})
        data.append({"month": label, "kind": "Expense",
                     "amount": float(point.expense)})
    return data


def _render_trend_chart(view: DashboardView) -> None:
    data = _prepare_trend_data(view)
    order = [row["month"] for row in data[::2]]
    chart = alt.Chart(alt.Data(values=data)).mark_bar(
        cornerRadiusTopLeft=4,
        cornerRadiusTopRight=4,
    ).encode(
        x=alt.X("month:N", sort=order, title=None),
        xOffset="kind:N",
        y=alt.Y("amount:Q", title=None),
        color=alt.Color(
            "kind:N",
            scale=alt.Scale(
                domain=["Income", "Expense"],
                range=["#10b981", "#ef4444"],
            ),
            legend=alt.Legend(orient="bottom", title=None),
        ),
        tooltip=["month:N", "kind:N", "amount:Q"],
    )
    st.subheader("Income vs Expense")
    st.altair_chart(chart, use_container_width=True)


def _render_breakdown_chart(view: DashboardView, currency_code: str) -> None:
    st.subheader("Spending by Category")
    if not view.breakdown:
        st.info("No expenses recorded for this month.")
        return
    data = [
        {
            "category": item.category,
            "amount": float(item.amount),
            "amount_label": _format_currency(item.amount, currency_code),
        }
        for item in view.breakdown
    ]
    chart = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=70,
        padAngle=0.02,
    ).encode(
        theta=alt.Theta("amount:Q"),
        color=alt.Color(
            "category:N",
            legend=alt.Legend(orient="bottom", title=None),
        ),
        tooltip=[alt.Tooltip("category:N"), alt.Tooltip("amount_label:N")],
    )
    st.altair_chart(chart, use_container_width=True)


def _render_alerts(view: DashboardView, currency_code: str) -> None:
    st.subheader("Upcoming Dues")
    if not view.pending_alerts:
        st.info("No pending dues.")
        return
    for alert in view.pending_alerts:
        label_col, amount_col, action_col = st.columns([3, 2, 1])
        tag = " (market)" if alert.is_market_data else ""
        label_col.write(
            f"**{alert.title}**{tag} · due {alert.due_date:%d %b %Y}"
        )
        amount_col.write(_format_currency(alert.amount, currency_code))
        if action_col.button("Paid", key=f"paid-{alert.id}"):
            MarkAlertPaidUseCase(build_ledger_repository()).execute(alert.id)
            st.cache_data.clear()
            st.rerun()


def _render_dashboard(view: DashboardView, currency_code: str) -> None:
    """Render headline metrics, charts and pending alerts."""
    summary = view.summary
    liquidity_col, debt_col, income_col, expense_col = st.columns(4)
    liquidity_col.metric(
        "Total Liquidity",
        _format_currency(summary.total_liquidity, currency_code),
    )
    debt_col.metric(
        "Total Debt",
        _format_currency(summary.total_credit_debt, currency_code),
    )
    income_col.metric(
        "Monthly Income",
        _format_currency(summary.monthly_income, currency_code),
        _format_delta(view.income_delta),
    )
    expense_col.metric(
        "Monthly Expense",
        _format_currency(summary.monthly_expense, currency_code),
        _format_delta(view.expense_delta),
        delta_color="inverse",
    )
    charts_ok, charts_error = _check_altair_dependencies()
    if not charts_ok:
        st.error(charts_error)
        _render_alerts(view, currency_code)
        return
    chart_left, chart_right = st.columns(2)
    with chart_left:
        _render_trend_chart(view)
    with chart_right:
        _render_breakdown_chart(view, currency_code)
    _render_alerts(view, currency_code)


def _render_budgets(
    overview: BudgetOverview,
    category_names: dict[str, str],
    currency_code: str,
) -> None:
    """Render budget totals and one progress bar per budget."""
    budgeted_col, spent_col, remaining_col = st.columns(3)
    budgeted_col.metric(
        "Total Budgeted",
        _format_currency(overview.total_budgeted, currency_code),
    )
    spent_col.metric(
        "Spent This Month",
        _format_currency(overview.total_spent, currency_code),
    )
    remaining_col.metric(
        "Remaining Safety",
        _format_currency(overview.remaining, currency_code),
    )
    if not overview.items:
        st.info("No budgets configured yet.")
        return
    for item in overview.items:
        name = category_names.get(item.budget.category_id, "Unknown")
        if item.status == BudgetStatus.OVER:
            detail = (
                f"{_format_currency(item.overage, currency_code)} over limit"
            )
        else:
            detail = (
                f"{_format_currency(item.remaining, currency_code)} remaining"
            )
        st.markdown(
            f"**{name}** · "
            f"<span style='color:{_STATUS_COLORS[item.status]}'>"
            f"{item.status.value}</span>",
            unsafe_allow_html=True,
        )
        st.progress(float(item.percent) / 100)
        st.caption(
            f"{_format_currency(item.spent, currency_code)} of "
            f"{_format_currency(item.budget.amount, currency_code)} · "
            f"{item.percent:.1f}% used · {detail}"
        )


def _render_accounts(
    accounts: Sequence[Account],
    currency_code: str,
) -> None:
    """Render the accounts table with derived balances."""
    st.subheader("Accounts")
    data = [
        {
            "Name": acc.name,
            "Type": acc.account_type.value,
            "Opening": _format_currency(acc.opening_balance, currency_code),
            "Balance": _format_currency(acc.current_balance, currency_code),
            "Status": acc.status.value,
            "Due": acc.due_date.isoformat() if acc.due_date else "—",
        }
        for acc in accounts
    ]
    st.dataframe(data, use_container_width=True, hide_index=True)


def _index_of(options: list, value) -> int:
    return options.index(value) if value in options else 0


def _transaction_label(tx: Transaction) -> str:
    label = f"{tx.date.isoformat()} · {tx.transaction_type.value} · "
    label += f"{tx.amount:,.2f}"
    return f"{label} · {tx.notes}" if tx.notes else label


def _render_transaction_form(snapshot: LedgerSnapshot) -> None:
    """Render the entry form, used for new and edited transactions."""
    account_names = {acc.id: acc.name for acc in snapshot.accounts}
    category_names = {c.id: c.name for c in snapshot.categories}
    sub_names = {
        c.id: f"{c.parent.name} / {c.name}"
        for c in snapshot.categories
        if isinstance(c, SubCategory)
    }
    by_id = {tx.id: tx for tx in snapshot.transactions}
    st.subheader("Add or Edit Transaction")
    choice = st.selectbox(
        "Transaction to edit",
        [None, *by_id],
        format_func=lambda key: (
            _transaction_label(by_id[key]) if key in by_id
            else "New transaction"
        ),
    )
    existing = by_id.get(choice)
    kinds = [t.value for t in TransactionType]
    account_ids = list(account_names)
    to_options = [None, *account_names]
    category_options = [None, *category_names]
    sub_options = [None, *sub_names]
    with st.form("transaction-form"):
        kind = st.selectbox(
            "Type",
            kinds,
            index=kinds.index(existing.transaction_type.value)
            if existing else 0,
        )
        entry_date = st.date_input(
            "Date",
            value=existing.date if existing else date.today(),
        )
        amount = st.number_input(
            "Amount",
            min_value=0.0,
            step=1.0,
            value=float(existing.amount) if existing else 0.0,
        )
        from_account = st.selectbox(
            "Account",
            account_ids,
            index=_index_of(
                account_ids,
                existing.from_account_id if existing else None,
            ),
            format_func=account_names.get,
        )
        to_account = st.selectbox(
            "Destination (transfers)",
            to_options,
            index=_index_of(
                to_options,
                existing.to_account_id if existing else None,
            ),
            format_func=lambda key: account_names.get(key, "—"),
        )
        category = st.selectbox(
            "Category",
            category_options,
            index=_index_of(
                category_options,
                existing.category_id if existing else None,
            ),
            format_func=lambda key: category_names.get(key, "—"),
        )
        sub_category = st.selectbox(
            "Sub-category",
            sub_options,
            index=_index_of(
                sub_options,
                existing.sub_category_id if existing else None,
            ),
            format_func=lambda key: sub_names.get(key, "—"),
        )
        notes = st.text_input(
            "Notes",
            value=existing.notes if existing else "",
        )
        submitted = st.form_submit_button("Save transaction")
        deleted = existing is not None and st.form_submit_button(
            "Delete transaction"
        )

    if deleted:
        try:
            DeleteTransactionUseCase(build_ledger_repository()).execute(
                existing.id
            )
        except KeyError as exc:
            st.error(str(exc))
            return
        st.cache_data.clear()
        st.success("Transaction deleted.")
        return
    if not submitted:
        return
    candidate = TransactionCandidate(
        date=entry_date.isoformat(),
        amount=str(amount),
        type=kind,
        from_account_id=from_account,
        to_account_id=to_account,
        category_id=category,
        sub_category_id=sub_category,
        notes=notes,
    )
    try:
        if existing is None:
            RecordTransactionUseCase(build_ledger_repository()).execute(
                candidate
            )
        else:
            UpdateTransactionUseCase(build_ledger_repository()).execute(
                existing.id,
                candidate,
            )
    except (ValueError, KeyError) as exc:
        st.error(str(exc))
        return
    st.cache_data.clear()
    st.success("Transaction saved.")


def _render_budget_form(snapshot: LedgerSnapshot) -> None:
    """Render the budget form and the remove action."""
    targets = {
        c.id: c.name for c in budgetable_categories(snapshot.categories)
    }
    st.subheader("Set Budget")
    if not targets:
        st.info("Add a top-level expense category to set a budget.")
        return
    with st.form("budget-form"):
        category_id = st.selectbox(
            "Budget category",
            list(targets),
            format_func=targets.get,
        )
        amount = st.number_input("Monthly limit", min_value=0.0, step=100.0)
        submitted = st.form_submit_button("Save budget")
    if submitted:
        try:
            UpsertBudgetUseCase(build_ledger_repository()).execute(
                category_id,
                str(amount),
            )
        except ValueError as exc:
            st.error(str(exc))
        else:
            st.cache_data.clear()
            st.success("Budget saved.")

    if not snapshot.budgets:
        return
    labels = {
        b.id: f"{targets.get(b.category_id, b.category_id)} ({b.amount:,.2f})"
        for b in snapshot.budgets
    }
    budget_id = st.selectbox(
        "Remove budget",
        list(labels),
        format_func=labels.get,
    )
    if st.button("Remove", key="remove-budget"):
        try:
            DeleteBudgetUseCase(build_ledger_repository()).execute(budget_id)
        except KeyError as exc:
            st.error(str(exc))
            return
        st.cache_data.clear()
        st.rerun()


def _render_account_form(accounts: Sequence[Account]) -> None:
    """Render the add/edit account form."""
    st.subheader("Add or Edit Account")
    by_id = {acc.id: acc for acc in accounts}
    choice = st.selectbox(
        "Account to edit",
        [None, *by_id],
        format_func=lambda key: (
            by_id[key].name if key in by_id else "New account"
        ),
    )
    existing = by_id.get(choice)
    types = [t.value for t in AccountType]
    statuses = [s.value for s in AccountStatus]
    with st.form("account-form"):
        name = st.text_input("Name", value=existing.name if existing else "")
        kind = st.selectbox(
            "Account type",
            types,
            index=types.index(existing.account_type.value) if existing else 0,
        )
        opening = st.number_input(
            "Opening balance",
            value=float(existing.opening_balance) if existing else 0.0,
            step=100.0,
        )
        due_date = st.date_input(
            "Due date",
            value=existing.due_date if existing else None,
        )
        status = st.selectbox(
            "Status",
            statuses,
            index=statuses.index(existing.status.value) if existing else 0,
        )
        submitted = st.form_submit_button("Save account")
    if not submitted:
        return
    try:
        SaveAccountUseCase(build_ledger_repository()).execute(
            name,
            kind,
            str(opening),
            due_date=due_date,
            status=status,
            account_id=choice,
        )
    except (ValueError, KeyError) as exc:
        st.error(str(exc))
        return
    st.cache_data.clear()
    st.success("Account saved.")


def _render_categories(snapshot: LedgerSnapshot) -> None:
    """Render the category tree with add, rename and delete forms."""
    st.subheader("Categories")
    names = {c.id: c.name for c in snapshot.categories}
    parents = {
        c.id: c.name
        for c in snapshot.categories
        if isinstance(c, TopLevelCategory)
    }
    data = [
        {
            "Name": c.name,
            "Parent": names.get(c.parent_id, "—") if c.parent_id else "—",
            "Type": c.transaction_type.value,
        }
        for c in snapshot.categories
    ]
    st.dataframe(data, use_container_width=True, hide_index=True)

    with st.form("category-add-form"):
        name = st.text_input("Category name")
        kind = st.selectbox(
            "Category type",
            [TransactionType.EXPENSE.value, TransactionType.INCOME.value],
        )
        parent_id = st.selectbox(
            "Parent category",
            [None, *parents],
            format_func=lambda key: parents.get(key, "None (top level)"),
        )
        added = st.form_submit_button("Add category")
    if added:
        try:
            AddCategoryUseCase(build_ledger_repository()).execute(
                name,
                kind,
                parent_id=parent_id,
            )
        except ValueError as exc:
            st.error(str(exc))
        else:
            st.cache_data.clear()
            st.success("Category added.")

    if not names:
        return
    with st.form("category-edit-form"):
        target = st.selectbox(
            "Category to change",
            list(names),
            format_func=names.get,
        )
        new_name = st.text_input("New name")
        renamed = st.form_submit_button("Rename")
        removed = st.form_submit_button("Delete with sub-categories")
    try:
        if renamed:
            RenameCategoryUseCase(build_ledger_repository()).execute(
                target,
                new_name,
            )
        elif removed:
            DeleteCategoryUseCase(build_ledger_repository()).execute(target)
        else:
            return
    except (ValueError, KeyError) as exc:
        st.error(str(exc))
        return
    st.cache_data.clear()
    st.success("Categories updated.")


def _render_transactions(
    snapshot: LedgerSnapshot,
    month: int,
    year: int,
    currency_code: str,
) -> None:
    """Render filters and the transaction list."""
    st.subheader("Transactions")
    search = st.text_input("Search notes", placeholder="Type to filter")
    kind = st.selectbox(
        "Filter by type",
        ["All", *(t.value for t in TransactionType)],
    )
    sort_by = st.selectbox("Sort by", [SORT_DATE_DESC, SORT_AMOUNT_DESC])
    whole_year = st.checkbox("Whole year", value=False)
    transactions = filter_transactions(
        snapshot.transactions,
        transaction_type=None if kind == "All" else TransactionType(kind),
        search=search,
        month=None if whole_year else month,
        year=year,
        sort_by=sort_by,
    )
    account_names = {acc.id: acc.name for acc in snapshot.accounts}
    category_names = {c.id: c.name for c in snapshot.categories}
    st.caption(f"{len(transactions)} transactions shown")
    data = [
        {
            "Date": tx.date.isoformat(),
            "Type": tx.transaction_type.value,
            "Amount": _format_currency(tx.amount, currency_code),
            "From": account_names.get(tx.from_account_id, "—"),
            "To": account_names.get(tx.to_account_id, "—")
            if tx.to_account_id
            else "—",
            "Category": category_names.get(tx.category_id, "—")
            if tx.category_id
            else "—",
            "Notes": tx.notes,
        }
        for tx in transactions
    ]
    st.dataframe(data, use_container_width=True, hide_index=True)
    _render_transaction_form(snapshot)


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="FinTrack", layout="wide")
    st.title("FinTrack")

    settings = build_settings()
    currency_code = settings.currency_code
    page = st.sidebar.selectbox(
        "Page",
        ["Dashboard", "Budgets", "Accounts", "Transactions", "Categories"],
    )
    get_usage_logger().info(f"page_view page={page}")

    if page == "Accounts":
        accounts = _load_accounts()
        if accounts:
            _render_accounts(accounts, currency_code)
        else:
            st.warning("No accounts found. Add one below or run the setup.")
        _render_account_form(accounts)
        return
    if page == "Categories":
        _render_categories(_fetch_snapshot())
        return

    month, year = _month_selector(date.today())
    if page == "Dashboard":
        _render_dashboard(_load_dashboard(month, year), currency_code)
    elif page == "Budgets":
        snapshot = _fetch_snapshot()
        category_names = {c.id: c.name for c in snapshot.categories}
        _render_budgets(
            _load_budget_overview(month, year),
            category_names,
            currency_code,
        )
        _render_budget_form(snapshot)
    else:
        _render_transactions(_fetch_snapshot(), month, year, currency_code)


if __name__ == "__main__":  # pragma: no cover
    main()
