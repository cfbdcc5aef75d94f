"""Spend of a budget's categories within one period."""

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional

from budget_core.dates import end_of_day, parse_timestamp, start_of_day
from budget_core.domain import CategoryDetails, CategoryLimit, SpendSummary, Transaction
from budget_core.filters import all_of, by_categories, by_date_range, expenses_only
from budget_core.functional import safe_decimal
from budget_core.lazy import iter_transactions

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def usable_limits(category_limits: Iterable[CategoryLimit]) -> dict[str, Decimal]:
    """category -> limit, skipping entries without a category or a readable amount."""
    limits: dict[str, Decimal] = {}
    for limit in category_limits:
        amount = safe_decimal(limit.amount_limit)
        if not limit.category or amount.is_none():
            logger.warning("Skipping malformed category limit %r", limit)
            continue
        limits[limit.category] = amount.get_or_else(ZERO)
    return limits


def matching_expenses(
    categories: Iterable[str],
    period_start: date | datetime,
    period_end: date | datetime,
    transactions: Iterable[Transaction],
):
    pred = all_of(
        by_categories(categories),
        expenses_only(),
        by_date_range(start_of_day(period_start), end_of_day(period_end)),
    )
    return iter_transactions(transactions, pred)


def aggregate_spend(
    category_limits: Iterable[CategoryLimit],
    period_start: date | datetime,
    period_end: date | datetime,
    transactions: Iterable[Transaction],
) -> SpendSummary:
    limits = usable_limits(category_limits)
    per_category = {cat: ZERO for cat in limits}

    for t in matching_expenses(limits, period_start, period_end, transactions):
        per_category[t.category] += abs(safe_decimal(t.amount).get_or_else(ZERO))

    return SpendSummary(
        per_category=per_category,
        total_spent=sum(per_category.values(), ZERO),
        total_limit=sum(limits.values(), ZERO),
        limits=limits,
    )


def category_details(
    category: str,
    period_start: date | datetime,
    period_end: date | datetime,
    transactions: Iterable[Transaction],
    limit: Optional[Decimal] = None,
) -> CategoryDetails:
    """Expenses of one category in the period, newest first."""
    matched = sorted(
        matching_expenses([category], period_start, period_end, transactions),
        key=lambda t: parse_timestamp(t.date),
        reverse=True,
    )
    total = sum((abs(safe_decimal(t.amount).get_or_else(ZERO)) for t in matched), ZERO)
    return CategoryDetails(
        category=category,
        transactions=tuple(matched),
        total_spent=total,
        limit=limit,
    )
