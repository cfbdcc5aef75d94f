import json
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

from budget_core.domain import BudgetDefinition, RecurrenceFrequency
from budget_core.periods import generate_periods
from budget_core.services import BudgetPeriodService
from budget_core.transforms import (
    budget_from_dict,
    default_budget,
    load_seed,
    parse_frequency,
    transaction_from_dict,
    transactions_for_account,
)

SEED = Path(__file__).resolve().parents[1] / "data" / "seed.json"


def test_load_seed():
    budgets, transactions = load_seed(str(SEED))

    assert len(budgets) == 5
    assert len(transactions) >= 10
    household = budgets[0]
    assert household.recurrence_frequency is RecurrenceFrequency.MONTHLY
    assert household.original_start_date == date(2024, 1, 1)
    assert household.categories[0].amount_limit == Decimal("450.00")
    assert household.is_default


def test_seed_views_for_july():
    budgets, transactions = load_seed(str(SEED))
    by_id = {b.id: b for b in budgets}
    svc = BudgetPeriodService()
    now = datetime(2024, 7, 15, 12)

    household = svc.compute_view(by_id["bud_1"], transactions, now)
    assert household.summary.total_spent == Decimal("267.74")

    fun = svc.compute_view(by_id["bud_2"], transactions, now)
    assert fun.periods[0].start == date(2024, 3, 15)
    assert fun.summary.per_category == {
        "Food & Drink": Decimal("45.10"),
        "Entertainment": Decimal("39.00"),
        "Shopping": Decimal("0"),
    }

    one_off = svc.compute_view(by_id["bud_3"], transactions, now)
    assert one_off.summary.total_spent == Decimal("249.00")


def test_load_seed_skips_malformed_records(tmp_path):
    path = tmp_path / "seed.json"
    path.write_text(json.dumps({
        "budgets": [{"name": "no id"}, {"id": "b1", "name": "ok"}],
        "transactions": ["garbage", {"id": "t1", "amount": "-1", "date": "2024-01-01"}],
    }), encoding="utf-8")
    budgets, transactions = load_seed(str(path))
    assert [b.id for b in budgets] == ["b1"]
    assert [t.id for t in transactions] == ["t1"]


def test_budget_from_dict_tolerates_bad_values():
    budget = budget_from_dict({
        "id": 7,
        "name": "Odd",
        "categories": [{"category": " Groceries ", "amount_limit": "lots"}],
        "is_recurring": True,
        "recurrence_frequency": "fortnightly",
        "original_start_date": "someday",
    })
    assert budget.id == "7"
    assert budget.categories[0].category == "Groceries"
    assert budget.categories[0].amount_limit is None
    assert budget.recurrence_frequency is None
    assert budget.original_start_date is None
    assert generate_periods(budget, datetime(2024, 7, 15)) == []


def test_parse_frequency():
    assert parse_frequency("Monthly") is RecurrenceFrequency.MONTHLY
    assert parse_frequency(" biweekly ") is RecurrenceFrequency.BIWEEKLY
    assert parse_frequency("") is None
    assert parse_frequency("daily") is None


def test_transaction_from_dict_keeps_raw_date():
    t = transaction_from_dict({"id": "t1", "date": "2024-07-01T10:00:00Z", "amount": -5, "category": "Groceries"})
    assert t.date == "2024-07-01T10:00:00Z"
    assert t.amount == Decimal("-5")
    assert t.account_id == ""


def test_default_budget():
    a = BudgetDefinition(id="a", name="A")
    b = BudgetDefinition(id="b", name="B", is_default=True)
    assert default_budget([a, b]) is b
    assert default_budget([a]) is a
    assert default_budget([]) is None


def test_transactions_for_account():
    _, transactions = load_seed(str(SEED))
    scoped = transactions_for_account(transactions, "acc_2")
    assert scoped
    assert all(t.account_id == "acc_2" for t in scoped)
    assert len(transactions_for_account(transactions, None)) == len(transactions)
