from datetime import datetime
from typing import Callable, Iterable

from budget_core.domain import Transaction
from budget_core.functional import safe_decimal, safe_timestamp


def by_categories(names: Iterable[str]) -> Callable[[Transaction], bool]:
    wanted = frozenset(names)

    def _filter(t: Transaction) -> bool:
        return t.category in wanted

    return _filter


def expenses_only() -> Callable[[Transaction], bool]:
    # income and transfers carry amount >= 0
    def _filter(t: Transaction) -> bool:
        return safe_decimal(t.amount).map(lambda a: a < 0).get_or_else(False)

    return _filter


def by_date_range(start: datetime, end: datetime) -> Callable[[Transaction], bool]:
    """Inclusive on both ends; unreadable dates never match."""
    def _filter(t: Transaction) -> bool:
        return safe_timestamp(t.date).map(lambda ts: start <= ts <= end).get_or_else(False)

    return _filter


def all_of(*preds: Callable[[Transaction], bool]) -> Callable[[Transaction], bool]:
    def _filter(t: Transaction) -> bool:
        return all(p(t) for p in preds)

    return _filter
