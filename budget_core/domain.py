from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


class RecurrenceFrequency(str, Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUALLY = "annually"


@dataclass(frozen=True)
class CategoryLimit:
    category: str
    amount_limit: Decimal


@dataclass(frozen=True)
class BudgetDefinition:
    id: str
    name: str
    categories: tuple[CategoryLimit, ...] = ()
    is_recurring: bool = False
    recurrence_frequency: Optional[RecurrenceFrequency] = None
    original_start_date: Optional[date] = None   # recurring only
    start_date: Optional[date] = None            # non-recurring only
    end_date: Optional[date] = None              # non-recurring only
    is_default: bool = False

    @property
    def category_names(self) -> tuple[str, ...]:
        return tuple(c.category for c in self.categories)


# One occurrence of a budget. start is read at 00:00, end at 23:59:59.999999.
@dataclass(frozen=True, order=True)
class Period:
    start: date
    end: date
    label: str = field(default="", compare=False)

    @property
    def starts_at(self) -> datetime:
        return datetime.combine(self.start, time.min)

    @property
    def ends_at(self) -> datetime:
        return datetime.combine(self.end, time.max)

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def contains(self, moment: datetime) -> bool:
        return self.starts_at <= moment <= self.ends_at


@dataclass(frozen=True)
class Transaction:
    id: str
    account_id: str
    date: Any           # datetime, date or ISO string as delivered by the store
    amount: Decimal     # + for income, - for expense
    category: str
    description: str = ""


@dataclass(frozen=True)
class SpendSummary:
    per_category: dict[str, Decimal] = field(default_factory=dict)
    total_spent: Decimal = Decimal("0")
    total_limit: Decimal = Decimal("0")
    limits: dict[str, Decimal] = field(default_factory=dict)

    @property
    def remaining(self) -> Decimal:
        return self.total_limit - self.total_spent

    @property
    def percent_used(self) -> float:
        if self.total_limit <= 0:
            return 0.0
        return float(self.total_spent / self.total_limit * 100)

    @property
    def over_limit(self) -> tuple[str, ...]:
        return tuple(
            cat for cat, spent in self.per_category.items()
            if spent > self.limits.get(cat, Decimal("0"))
        )

    def rows(self) -> list[dict]:
        """Flat per-category rows for tables and charts."""
        return [
            {
                "category": cat,
                "spent": spent,
                "limit": self.limits.get(cat, Decimal("0")),
                "remaining": self.limits.get(cat, Decimal("0")) - spent,
            }
            for cat, spent in self.per_category.items()
        ]


@dataclass(frozen=True)
class BudgetView:
    budget_id: str
    periods: tuple[Period, ...] = ()
    selected: Optional[Period] = None
    summary: SpendSummary = field(default_factory=SpendSummary)
    issues: tuple[str, ...] = ()


@dataclass(frozen=True)
class CategoryDetails:
    category: str
    transactions: tuple[Transaction, ...] = ()
    total_spent: Decimal = Decimal("0")
    limit: Optional[Decimal] = None
