"""Occurrence series of a budget and the choice of the current occurrence.

A recurring budget is a chain of occurrences that begins at its original
start date. The first occurrence is clamped: it starts on the original start
date even when that falls mid-period, and every later one is calendar
aligned (biweekly chains never are, see ``boundaries``).

``generate_periods`` finds the *seed*, the first occurrence that ends on or
after ``now``, then walks ``num_past`` steps back and ``num_future`` steps
forward from it. Both walks, and the seed search, stop ``HORIZON_YEARS``
away from ``now``, so the result is bounded whatever the input dates are.
"""

import logging
from dataclasses import replace
from datetime import date, datetime
from itertools import islice

from dateutil.relativedelta import relativedelta

from budget_core import config
from budget_core.boundaries import boundaries, next_start
from budget_core.dates import as_date, as_datetime, shift
from budget_core.domain import BudgetDefinition, Period, RecurrenceFrequency
from budget_core.functional import safe_frequency, validate_schedule
from budget_core.lazy import walk_backward, walk_forward

logger = logging.getLogger(__name__)


def occurrence(start: date, origin: date, freq: RecurrenceFrequency) -> Period:
    """Occurrence of the chain beginning at origin that starts at start."""
    period = boundaries(start, freq)
    if period.start < origin:
        return replace(period, start=origin)
    return period


def single_period(budget: BudgetDefinition) -> Period:
    return Period(start=as_date(budget.start_date), end=as_date(budget.end_date), label=budget.name)


def _horizon(today: date, years: int) -> date:
    try:
        return shift(today, relativedelta(years=years))
    except OverflowError:
        return date.max if years > 0 else date.min


def find_seed(
    origin: date, freq: RecurrenceFrequency, today: date, ceiling: date
) -> Period | None:
    for start in walk_forward(origin, freq, ceiling):
        try:
            period = occurrence(start, origin, freq)
        except OverflowError:
            break
        if period.end >= today:
            return period
    return None


def generate_periods(
    budget: BudgetDefinition,
    now: date | datetime,
    num_past: int = config.DEFAULT_PAST_PERIODS,
    num_future: int = config.DEFAULT_FUTURE_PERIODS,
) -> list[Period]:
    """Ordered, start-unique occurrences of budget around now.

    Returns [] for a budget whose schedule fields are missing or invalid.
    """
    checked = validate_schedule(budget)
    if checked.is_left():
        logger.warning("No periods for budget %s: %s", budget.id, checked.get_error()["message"])
        return []

    if not budget.is_recurring:
        return [single_period(budget)]

    origin = as_date(budget.original_start_date)
    freq = safe_frequency(budget.recurrence_frequency).get_or_else(None)
    today = as_date(now)
    floor = _horizon(today, -config.HORIZON_YEARS)
    ceiling = _horizon(today, config.HORIZON_YEARS)

    seed = find_seed(origin, freq, today, ceiling)
    if seed is None:
        logger.debug("Budget %s has no occurrence before %s", budget.id, ceiling)
        return _fallback(origin, freq)

    by_start: dict[date, Period] = {seed.start: seed}
    for start in islice(walk_backward(seed.start, freq, origin, floor), max(0, num_past)):
        by_start[start] = occurrence(start, origin, freq)

    try:
        first_future = next_start(seed.start, freq)
    except OverflowError:
        first_future = None
    if first_future is not None:
        for start in islice(walk_forward(first_future, freq, ceiling), max(0, num_future)):
            try:
                by_start[start] = occurrence(start, origin, freq)
            except OverflowError:
                break

    periods = sorted(by_start.values())
    return periods or _fallback(origin, freq)


def _fallback(origin: date, freq: RecurrenceFrequency) -> list[Period]:
    try:
        return [occurrence(origin, origin, freq)]
    except OverflowError:
        return []


def select_current_period(periods: list[Period], now: date | datetime) -> Period | None:
    """The period containing now, else the latest one already started, else the first."""
    if not periods:
        return None
    moment = as_datetime(now)
    for period in periods:
        if period.contains(moment):
            return period
    started = [p for p in periods if p.starts_at <= moment]
    if started:
        return max(started, key=lambda p: p.start)
    return min(periods, key=lambda p: p.start)
