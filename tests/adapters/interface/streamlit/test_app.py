"""Tests for the Streamlit app module."""

from contextlib import nullcontext
from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

from src.adapters.interface.streamlit import app
from src.domain.constants import AccountType
from src.domain.models import (
    Account,
    DashboardSummary,
    DashboardView,
    Delta,
    MonthlyTrendPoint,
)
from src.infrastructure.seed_data import default_snapshot
from src.infrastructure.settings import LedgerSettings


def test_fetch_accounts_invokes_use_case(monkeypatch):
    """_fetch_accounts should build the repository and run the use case."""
    fake_accounts = ["a"]

    class _FakeUseCase:
        def __init__(self, ledger_repository):
            self.ledger_repository = ledger_repository

        def execute(self):
            return fake_accounts

    monkeypatch.setattr(app, "build_ledger_repository", lambda: "repo")
    monkeypatch.setattr(app, "GetAccountBalancesUseCase", _FakeUseCase)

    assert app._fetch_accounts() == fake_accounts


def test_load_accounts_uses_fetch(monkeypatch):
    """The cached loader should delegate to _fetch_accounts."""
    fake_accounts = ["cached"]
    monkeypatch.setattr(app, "_fetch_accounts", lambda: fake_accounts)

    assert app._load_accounts() == fake_accounts


def test_format_currency():
    assert app._format_currency(Decimal("1234.5"), "INR") == "₹1,234.50"
    assert app._format_currency(Decimal("-20"), "USD") == "-$20.00"
    assert app._format_currency(Decimal("7"), "CHF") == "7.00 CHF"


def test_format_delta():
    positive = Delta(Decimal("50"), Decimal("25"), True)
    negative = Delta(Decimal("-10"), Decimal("-5"), False)

    assert app._format_delta(positive) == "+50.00 (+25.0%)"
    assert app._format_delta(negative) == "-10.00 (-5.0%)"


def test_prepare_trend_data_emits_income_and_expense_rows():
    view = SimpleNamespace(
        trend=[
            MonthlyTrendPoint(12, 2023, Decimal("100"), Decimal("40")),
            MonthlyTrendPoint(1, 2024, Decimal("0"), Decimal("5.5")),
        ]
    )

    data = app._prepare_trend_data(view)

    assert data[0] == {"month": "Dec 2023", "kind": "Income",
                       "amount": 100.0}
    assert data[3] == {"month": "Jan 2024", "kind": "Expense",
                       "amount": 5.5}


class _FakeSidebar:
    def __init__(self, page: str) -> None:
        self.page = page

    def selectbox(self, label, options, index=0):
        if label == "Page":
            return self.page
        return options[index]

    def number_input(self, _label, **kwargs):
        return kwargs["value"]


class _FakeStreamlit:
    def __init__(self, page: str = "Accounts") -> None:
        self.sidebar = _FakeSidebar(page)
        self.config_called = False
        self.title_called = False
        self.warning_called = False
        self.dataframe_payload = None
        self.subheaders: list[str] = []

    def set_page_config(self, **kwargs):
        self.config_called = True
        self.config_kwargs = kwargs

    def title(self, text: str):
        self.title_called = True
        self.title_text = text

    def subheader(self, text: str):
        self.subheaders.append(text)

    def warning(self, text: str):
        self.warning_called = True
        self.warning_text = text

    def dataframe(self, data, **kwargs):
        self.dataframe_payload = (data, kwargs)

    def cache_data(self, **_kwargs):
        def decorator(func):
            return func

        return decorator


def _patch_common(monkeypatch, fake_st) -> MagicMock:
    usage_logger = MagicMock()
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "build_settings", lambda: LedgerSettings())
    monkeypatch.setattr(app, "get_usage_logger", lambda: usage_logger)
    return usage_logger


def test_main_displays_accounts(monkeypatch):
    """main should render the accounts table when accounts exist."""
    fake_st = _FakeStreamlit("Accounts")
    usage_logger = _patch_common(monkeypatch, fake_st)
    accounts = [
        Account(
            "acc_3",
            "Premium Visa",
            AccountType.CREDIT_CARD,
            Decimal("0"),
            Decimal("-500"),
            due_date=date(2024, 6, 15),
        )
    ]
    monkeypatch.setattr(app, "_load_accounts", lambda: accounts)
    forms = []
    monkeypatch.setattr(app, "_render_account_form", forms.append)

    app.main()

    assert fake_st.config_called
    assert fake_st.title_called
    assert fake_st.warning_called is False
    table_data, kwargs = fake_st.dataframe_payload
    assert table_data[0]["Name"] == "Premium Visa"
    assert table_data[0]["Balance"] == "-₹500.00"
    assert table_data[0]["Due"] == "2024-06-15"
    assert kwargs["use_container_width"] is True
    assert kwargs["hide_index"] is True
    usage_logger.info.assert_called_once_with("page_view page=Accounts")
    assert forms == [accounts]


def test_main_warns_when_no_accounts(monkeypatch):
    """main should warn the user when the ledger has no accounts."""
    fake_st = _FakeStreamlit("Accounts")
    _patch_common(monkeypatch, fake_st)
    monkeypatch.setattr(app, "_load_accounts", lambda: [])
    forms = []
    monkeypatch.setattr(app, "_render_account_form", forms.append)

    app.main()

    assert fake_st.warning_called
    assert forms == [[]]


def test_main_renders_dashboard_for_selected_month(monkeypatch):
    """The Dashboard page should load the view for the sidebar month."""
    fake_st = _FakeStreamlit("Dashboard")
    _patch_common(monkeypatch, fake_st)
    zero = Decimal("0")
    view = DashboardView(
        month=date.today().month,
        year=date.today().year,
        summary=DashboardSummary(zero, zero, zero, zero),
        income_delta=Delta(zero, zero, True),
        expense_delta=Delta(zero, zero, True),
        trend=[],
        breakdown=[],
        pending_alerts=[],
    )
    requested = {}
    rendered = {}

    def _fake_load(month, year):
        requested["period"] = (month, year)
        return view

    monkeypatch.setattr(app, "_load_dashboard", _fake_load)
    monkeypatch.setattr(
        app,
        "_render_dashboard",
        lambda v, code: rendered.update(view=v, code=code),
    )

    app.main()

    today = date.today()
    assert requested["period"] == (today.month, today.year)
    assert rendered == {"view": view, "code": "INR"}


def test_main_budgets_page_renders_budget_form(monkeypatch):
    """The Budgets page should show utilization and the budget form."""
    fake_st = _FakeStreamlit("Budgets")
    _patch_common(monkeypatch, fake_st)
    snapshot = default_snapshot()
    overview = object()
    calls = {}
    monkeypatch.setattr(app, "_fetch_snapshot", lambda: snapshot)
    monkeypatch.setattr(app, "_load_budget_overview", lambda m, y: overview)
    monkeypatch.setattr(
        app,
        "_render_budgets",
        lambda ov, names, code: calls.update(overview=ov, names=names),
    )
    monkeypatch.setattr(
        app,
        "_render_budget_form",
        lambda snap: calls.update(form=snap),
    )

    app.main()

    assert calls["overview"] is overview
    assert calls["names"]["cat_6"] == "Housing"
    assert calls["form"] is snapshot


def test_main_categories_page(monkeypatch):
    fake_st = _FakeStreamlit("Categories")
    _patch_common(monkeypatch, fake_st)
    snapshot = default_snapshot()
    rendered = []
    monkeypatch.setattr(app, "_fetch_snapshot", lambda: snapshot)
    monkeypatch.setattr(app, "_render_categories", rendered.append)

    app.main()

    assert rendered == [snapshot]


class _FormStreamlit:
    """Streamlit stand-in answering widgets by label."""

    def __init__(self, values=None, pressed=()):
        self.values = values or {}
        self.pressed = set(pressed)
        self.errors: list[str] = []
        self.successes: list[str] = []
        self.infos: list[str] = []
        self.reran = False
        self.dataframe_payload = None
        self.cache_data = SimpleNamespace(clear=MagicMock())

    def form(self, _key):
        return nullcontext()

    def selectbox(self, label, options, index=0, format_func=None):
        if format_func is not None:
            [format_func(option) for option in options]
        default = options[index] if options else None
        return self.values.get(label, default)

    def text_input(self, label, value="", **_kwargs):
        return self.values.get(label, value)

    def number_input(self, label, value=0.0, **_kwargs):
        return self.values.get(label, value)

    def date_input(self, label, value=None, **_kwargs):
        return self.values.get(label, value)

    def form_submit_button(self, label):
        return label in self.pressed

    def button(self, label, **_kwargs):
        return label in self.pressed

    def subheader(self, _text):
        pass

    def dataframe(self, data, **_kwargs):
        self.dataframe_payload = data

    def info(self, text):
        self.infos.append(text)

    def error(self, text):
        self.errors.append(text)

    def success(self, text):
        self.successes.append(text)

    def rerun(self):
        self.reran = True


class _RecordingUseCase:
    """Use case double recording execute calls."""

    calls: list = []
    error: Exception | None = None

    def __init__(self, ledger_repository):
        self.ledger_repository = ledger_repository

    def execute(self, *args, **kwargs):
        type(self).calls.append((args, kwargs))
        if type(self).error is not None:
            raise type(self).error


def _recording(monkeypatch, name, error=None):
    double = type(name, (_RecordingUseCase,), {"calls": [], "error": error})
    monkeypatch.setattr(app, name, double)
    return double


def _use_form_st(monkeypatch, values=None, pressed=()):
    fake_st = _FormStreamlit(values, pressed)
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "build_ledger_repository", lambda: "repo")
    return fake_st


def test_budget_form_saves_budget(monkeypatch):
    fake_st = _use_form_st(
        monkeypatch,
        {"Budget category": "cat_6", "Monthly limit": 1500.0},
        pressed={"Save budget"},
    )
    upsert = _recording(monkeypatch, "UpsertBudgetUseCase")

    app._render_budget_form(default_snapshot())

    assert upsert.calls == [(("cat_6", "1500.0"), {})]
    assert fake_st.successes == ["Budget saved."]
    fake_st.cache_data.clear.assert_called_once()


def test_budget_form_reports_invalid_amount(monkeypatch):
    fake_st = _use_form_st(monkeypatch, pressed={"Save budget"})
    _recording(
        monkeypatch,
        "UpsertBudgetUseCase",
        error=ValueError("Budget amount must be positive, got 0.0"),
    )

    app._render_budget_form(default_snapshot())

    assert fake_st.errors == ["Budget amount must be positive, got 0.0"]
    fake_st.cache_data.clear.assert_not_called()


def test_budget_form_removes_selected_budget(monkeypatch):
    fake_st = _use_form_st(
        monkeypatch,
        {"Remove budget": "b_2"},
        pressed={"Remove"},
    )
    delete = _recording(monkeypatch, "DeleteBudgetUseCase")

    app._render_budget_form(default_snapshot())

    assert delete.calls == [(("b_2",), {})]
    assert fake_st.reran is True


def test_budget_form_needs_expense_category(monkeypatch):
    fake_st = _use_form_st(monkeypatch, pressed={"Save budget"})
    upsert = _recording(monkeypatch, "UpsertBudgetUseCase")

    app._render_budget_form(SimpleNamespace(categories=[], budgets=[]))

    assert upsert.calls == []
    assert len(fake_st.infos) == 1


def test_account_form_creates_account(monkeypatch):
    fake_st = _use_form_st(
        monkeypatch,
        {"Name": "Travel Card", "Account type": "CREDIT_CARD",
         "Opening balance": -25.0},
        pressed={"Save account"},
    )
    save = _recording(monkeypatch, "SaveAccountUseCase")

    app._render_account_form(default_snapshot().accounts)

    [(args, kwargs)] = save.calls
    assert args == ("Travel Card", "CREDIT_CARD", "-25.0")
    assert kwargs == {"due_date": None, "status": "ACTIVE", "account_id": None}
    assert fake_st.successes == ["Account saved."]


def test_account_form_edits_selected_account(monkeypatch):
    _use_form_st(
        monkeypatch,
        {"Account to edit": "acc_3", "Name": "Platinum Visa"},
        pressed={"Save account"},
    )
    save = _recording(monkeypatch, "SaveAccountUseCase")

    app._render_account_form(default_snapshot().accounts)

    [(args, kwargs)] = save.calls
    assert args == ("Platinum Visa", "CREDIT_CARD", "0.0")
    assert kwargs["account_id"] == "acc_3"
    assert kwargs["due_date"] == date(2024, 6, 15)


def test_transaction_form_records_new_transaction(monkeypatch):
    fake_st = _use_form_st(
        monkeypatch,
        {"Amount": 20.0, "Account": "acc_2", "Category": "cat_1",
         "Date": date(2024, 5, 20)},
        pressed={"Save transaction"},
    )
    record = _recording(monkeypatch, "RecordTransactionUseCase")
    update = _recording(monkeypatch, "UpdateTransactionUseCase")

    app._render_transaction_form(default_snapshot())

    [((candidate,), _)] = record.calls
    assert candidate.date == "2024-05-20"
    assert candidate.amount == "20.0"
    assert candidate.type == "EXPENSE"
    assert candidate.from_account_id == "acc_2"
    assert candidate.category_id == "cat_1"
    assert update.calls == []
    assert fake_st.successes == ["Transaction saved."]


def test_transaction_form_updates_selected_transaction(monkeypatch):
    _use_form_st(
        monkeypatch,
        {"Transaction to edit": "tx_2", "Notes": "Team dinner"},
        pressed={"Save transaction"},
    )
    record = _recording(monkeypatch, "RecordTransactionUseCase")
    update = _recording(monkeypatch, "UpdateTransactionUseCase")

    app._render_transaction_form(default_snapshot())

    [((tx_id, candidate), _)] = update.calls
    assert tx_id == "tx_2"
    assert candidate.amount == "500.0"
    assert candidate.from_account_id == "acc_3"
    assert candidate.category_id == "cat_1"
    assert candidate.sub_category_id == "cat_3"
    assert candidate.notes == "Team dinner"
    assert record.calls == []


def test_transaction_form_deletes_selected_transaction(monkeypatch):
    fake_st = _use_form_st(
        monkeypatch,
        {"Transaction to edit": "tx_1"},
        pressed={"Delete transaction"},
    )
    delete = _recording(monkeypatch, "DeleteTransactionUseCase")

    app._render_transaction_form(default_snapshot())

    assert delete.calls == [(("tx_1",), {})]
    assert fake_st.successes == ["Transaction deleted."]


def test_transaction_form_shows_validation_errors(monkeypatch):
    fake_st = _use_form_st(monkeypatch, pressed={"Save transaction"})
    _recording(
        monkeypatch,
        "RecordTransactionUseCase",
        error=ValueError(
            "Invalid transaction: amount must be greater than zero"
        ),
    )

    app._render_transaction_form(default_snapshot())

    assert fake_st.errors == [
        "Invalid transaction: amount must be greater than zero"
    ]
    fake_st.cache_data.clear.assert_not_called()


def test_categories_page_adds_sub_category(monkeypatch):
    fake_st = _use_form_st(
        monkeypatch,
        {"Category name": "Internet", "Parent category": "cat_6"},
        pressed={"Add category"},
    )
    add = _recording(monkeypatch, "AddCategoryUseCase")

    app._render_categories(default_snapshot())

    assert add.calls == [(("Internet", "EXPENSE"), {"parent_id": "cat_6"})]
    assert fake_st.successes == ["Category added."]
    rows = {row["Name"]: row for row in fake_st.dataframe_payload}
    assert rows["Rent"]["Parent"] == "Housing"
    assert rows["Housing"]["Parent"] == "—"


def test_categories_page_renames_and_deletes(monkeypatch):
    _use_form_st(
        monkeypatch,
        {"Category to change": "cat_2", "New name": "Supermarket"},
        pressed={"Rename"},
    )
    rename = _recording(monkeypatch, "RenameCategoryUseCase")

    app._render_categories(default_snapshot())

    assert rename.calls == [(("cat_2", "Supermarket"), {})]

    fake_st = _use_form_st(
        monkeypatch,
        {"Category to change": "cat_6"},
        pressed={"Delete with sub-categories"},
    )
    delete = _recording(monkeypatch, "DeleteCategoryUseCase")

    app._render_categories(default_snapshot())

    assert delete.calls == [(("cat_6",), {})]
    assert fake_st.successes == ["Categories updated."]
