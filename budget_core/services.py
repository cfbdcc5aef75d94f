import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Iterable, Optional

from budget_core import config
from budget_core.aggregate import aggregate_spend, category_details
from budget_core.domain import (
    BudgetDefinition,
    BudgetView,
    CategoryDetails,
    Period,
    Transaction,
)
from budget_core.functional import check_category_limit, safe_category, validate_budget
from budget_core.periods import generate_periods, select_current_period
from budget_core.transforms import default_budget

logger = logging.getLogger(__name__)


class BudgetPeriodService:
    """Facade the presentation layer calls to view a budget.

    Every call is independent: the service keeps no state besides its
    clock and walk sizes, and ``now`` is read from the clock at most once
    per call when the caller does not pass it.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = datetime.now,
        num_past: int = config.DEFAULT_PAST_PERIODS,
        num_future: int = config.DEFAULT_FUTURE_PERIODS,
    ):
        self.clock = clock
        self.num_past = num_past
        self.num_future = num_future

    def _now(self, now: Optional[date | datetime]) -> date | datetime:
        return self.clock() if now is None else now

    def _issues(self, budget: BudgetDefinition) -> tuple[str, ...]:
        checked = validate_budget(budget)
        if checked.is_left():
            error = checked.get_error()
            logger.warning("Budget %s failed validation: %s", budget.id, error["message"])
            return (error["message"],)
        return ()

    def compute_view(
        self,
        budget: BudgetDefinition,
        transactions: Iterable[Transaction],
        now: Optional[date | datetime] = None,
    ) -> BudgetView:
        """Periods around now, the current one, and its spend summary."""
        now = self._now(now)
        periods, issues = self._periods(budget, now)
        selected = select_current_period(list(periods), now)
        return self._view(budget, periods, selected, transactions, issues)

    def view_for_period(
        self,
        budget: BudgetDefinition,
        period: Period,
        transactions: Iterable[Transaction],
        now: Optional[date | datetime] = None,
    ) -> BudgetView:
        """Same as compute_view, but summarised over a period the user picked."""
        periods, issues = self._periods(budget, self._now(now))
        return self._view(budget, periods, period, transactions, issues)

    def _periods(
        self, budget: BudgetDefinition, now: date | datetime
    ) -> tuple[tuple[Period, ...], tuple[str, ...]]:
        issues = self._issues(budget)
        try:
            periods = generate_periods(budget, now, self.num_past, self.num_future)
        except (OverflowError, ValueError, TypeError) as e:
            logger.exception("Period generation failed for budget %s", budget.id)
            return (), issues + (f"period_error: {e}",)
        return tuple(periods), issues

    def _view(
        self,
        budget: BudgetDefinition,
        periods: tuple[Period, ...],
        selected: Optional[Period],
        transactions: Iterable[Transaction],
        issues: tuple[str, ...],
    ) -> BudgetView:
        if selected is None:
            return BudgetView(budget_id=budget.id, periods=periods, issues=issues)
        summary = aggregate_spend(budget.categories, selected.start, selected.end, transactions)
        return BudgetView(
            budget_id=budget.id,
            periods=periods,
            selected=selected,
            summary=summary,
            issues=issues,
        )

    def category_details(
        self,
        budget: BudgetDefinition,
        category: str,
        period: Period,
        transactions: Iterable[Transaction],
    ) -> CategoryDetails:
        limit = safe_category(budget, category).map(lambda c: c.amount_limit).get_or_else(None)
        return category_details(category, period.start, period.end, transactions, limit)

    def limit_alerts(self, budget: BudgetDefinition, view: BudgetView) -> list[dict]:
        """Error dicts for every category limit the selected period breaks.

        A limit that isn't a usable amount is reported as ``invalid_limit``
        rather than compared.
        """
        alerts = []
        for limit in budget.categories:
            spent = view.summary.per_category.get(limit.category, Decimal("0"))
            checked = check_category_limit(limit, spent)
            if checked.is_left():
                alerts.append(checked.get_error())
        return alerts

    def dashboard(
        self,
        budgets: Iterable[BudgetDefinition],
        transactions: Iterable[Transaction],
        now: Optional[date | datetime] = None,
    ) -> Optional[BudgetView]:
        """View of the default budget, None when there are no budgets."""
        budget = default_budget(budgets)
        if budget is None:
            return None
        return self.compute_view(budget, transactions, now)
