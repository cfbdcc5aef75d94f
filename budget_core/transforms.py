import json
import logging
from typing import Any, Iterable, Optional, Tuple

from budget_core.dates import parse_date
from budget_core.domain import BudgetDefinition, CategoryLimit, RecurrenceFrequency, Transaction
from budget_core.functional import safe_decimal, safe_frequency

logger = logging.getLogger(__name__)


def parse_frequency(value: Any) -> Optional[RecurrenceFrequency]:
    if value is None or value == "":
        return None
    return safe_frequency(value).get_or_else(None)


def budget_from_dict(data: dict) -> BudgetDefinition:
    """Build a budget from a store record.

    Date and frequency fields that can't be read become None, which the
    validators then report; nothing here raises on bad values.
    """
    categories = tuple(
        CategoryLimit(
            category=str(c.get("category", "")).strip(),
            amount_limit=safe_decimal(c.get("amount_limit")).get_or_else(None),
        )
        for c in data.get("categories", ())
    )
    return BudgetDefinition(
        id=str(data["id"]),
        name=str(data.get("name", "")),
        categories=categories,
        is_recurring=bool(data.get("is_recurring", False)),
        recurrence_frequency=parse_frequency(data.get("recurrence_frequency")),
        original_start_date=parse_date(data.get("original_start_date")),
        start_date=parse_date(data.get("start_date")),
        end_date=parse_date(data.get("end_date")),
        is_default=bool(data.get("is_default", False)),
    )


def transaction_from_dict(data: dict) -> Transaction:
    # date stays as delivered; the aggregator skips the unreadable ones
    return Transaction(
        id=str(data["id"]),
        account_id=str(data.get("account_id", "")),
        date=data.get("date"),
        amount=safe_decimal(data.get("amount")).get_or_else(None),
        category=str(data.get("category", "")),
        description=str(data.get("description", "")),
    )


def _load_all(records: Iterable[dict], build, kind: str) -> tuple:
    loaded = []
    for record in records:
        try:
            loaded.append(build(record))
        except (KeyError, TypeError, AttributeError) as e:
            logger.warning("Skipping malformed %s record %r: %s", kind, record, e)
    return tuple(loaded)


def load_seed(path: str) -> Tuple[Tuple[BudgetDefinition, ...], Tuple[Transaction, ...]]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    budgets = _load_all(data.get("budgets", ()), budget_from_dict, "budget")
    transactions = _load_all(data.get("transactions", ()), transaction_from_dict, "transaction")

    return budgets, transactions


def default_budget(budgets: Iterable[BudgetDefinition]) -> Optional[BudgetDefinition]:
    """The budget flagged as default, else the first one."""
    budgets = tuple(budgets)
    for b in budgets:
        if b.is_default:
            return b
    return budgets[0] if budgets else None


def transactions_for_account(
    trans: Iterable[Transaction], account_id: Optional[str]
) -> Tuple[Transaction, ...]:
    if account_id is None:
        return tuple(trans)
    return tuple(filter(lambda t: t.account_id == account_id, trans))
