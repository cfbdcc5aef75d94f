from abc import ABC, abstractmethod
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Generic, TypeVar

from budget_core.dates import as_date, parse_timestamp
from budget_core.domain import BudgetDefinition, CategoryLimit, RecurrenceFrequency

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')


class Maybe(Generic[T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_some(self) -> bool:
        pass

    @abstractmethod
    def is_none(self) -> bool:
        pass


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Some(f(self._value))

    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_some(self) -> bool:
        return True

    def is_none(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"Some({self._value})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value


class Nothing(Maybe[T]):

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Nothing()

    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        return Nothing()

    def get_or_else(self, default: T) -> T:
        return default

    def is_some(self) -> bool:
        return False

    def is_none(self) -> bool:
        return True

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)


class Either(Generic[E, T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_right(self) -> bool:
        pass

    @abstractmethod
    def is_left(self) -> bool:
        pass

    @abstractmethod
    def get_error(self) -> E:
        pass


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return Right(f(self._value))

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_right(self) -> bool:
        return True

    def is_left(self) -> bool:
        return False

    def get_error(self) -> E:
        raise ValueError("Cannot get error from Right")

    def __repr__(self) -> str:
        return f"Right({self._value})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return Left(self._error)

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return Left(self._error)

    def get_or_else(self, default: T) -> T:
        return default

    def is_right(self) -> bool:
        return False

    def is_left(self) -> bool:
        return True

    def get_error(self) -> E:
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


def safe_decimal(value: Any) -> Maybe[Decimal]:
    if isinstance(value, bool) or value is None:
        return Nothing()
    try:
        d = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Nothing()
    return Some(d) if d.is_finite() else Nothing()


def safe_timestamp(value: Any) -> Maybe[datetime]:
    stamp = parse_timestamp(value)
    return Some(stamp) if stamp is not None else Nothing()


def safe_frequency(value: Any) -> Maybe[RecurrenceFrequency]:
    """Accept an enum member or its name in any case ("Monthly", " weekly ")."""
    if isinstance(value, RecurrenceFrequency):
        return Some(value)
    if not isinstance(value, str):
        return Nothing()
    try:
        return Some(RecurrenceFrequency(value.strip().lower()))
    except ValueError:
        return Nothing()


def safe_category(budget: BudgetDefinition, name: str) -> Maybe[CategoryLimit]:
    for limit in budget.categories:
        if limit.category == name:
            return Some(limit)
    return Nothing()


def validate_schedule(budget: BudgetDefinition) -> Either[dict, BudgetDefinition]:
    """Check the date/frequency fields that period generation depends on."""
    if budget.is_recurring:
        if safe_frequency(budget.recurrence_frequency).is_none():
            return Left({
                "error": "missing_frequency",
                "message": f"Recurring budget {budget.id} has no valid recurrence frequency",
                "budget_id": budget.id,
            })
        if not isinstance(budget.original_start_date, date):
            return Left({
                "error": "missing_start_date",
                "message": f"Recurring budget {budget.id} has no original start date",
                "budget_id": budget.id,
            })
        return Right(budget)

    if not isinstance(budget.start_date, date) or not isinstance(budget.end_date, date):
        return Left({
            "error": "missing_dates",
            "message": f"Budget {budget.id} needs both a start and an end date",
            "budget_id": budget.id,
        })
    if as_date(budget.end_date) < as_date(budget.start_date):
        return Left({
            "error": "inverted_dates",
            "message": f"Budget {budget.id} ends ({budget.end_date}) before it starts ({budget.start_date})",
            "budget_id": budget.id,
        })
    return Right(budget)


def validate_category_limits(budget: BudgetDefinition) -> Either[dict, BudgetDefinition]:
    seen: set[str] = set()
    for limit in budget.categories:
        if not limit.category or not limit.category.strip():
            return Left({
                "error": "empty_category",
                "message": f"Budget {budget.id} has a category limit without a category",
                "budget_id": budget.id,
            })
        if limit.category in seen:
            return Left({
                "error": "duplicate_category",
                "message": f"Category {limit.category} appears more than once in budget {budget.id}",
                "category": limit.category,
            })
        seen.add(limit.category)
        amount = safe_decimal(limit.amount_limit)
        if amount.is_none() or amount.get_or_else(Decimal("0")) <= 0:
            return Left({
                "error": "invalid_limit",
                "message": f"Limit for {limit.category} must be a positive amount",
                "category": limit.category,
                "limit": limit.amount_limit,
            })
    return Right(budget)


def validate_budget(budget: BudgetDefinition) -> Either[dict, BudgetDefinition]:
    if not budget.name or not budget.name.strip():
        return Left({
            "error": "missing_name",
            "message": f"Budget {budget.id} has no name",
            "budget_id": budget.id,
        })
    return validate_schedule(budget).bind(validate_category_limits)


def check_category_limit(limit: CategoryLimit, spent: Decimal) -> Either[dict, CategoryLimit]:
    amount = safe_decimal(limit.amount_limit)
    if amount.is_none():
        return Left({
            "error": "invalid_limit",
            "message": f"Limit for {limit.category} must be a positive amount",
            "category": limit.category,
            "limit": limit.amount_limit,
        })
    cap = amount.get_or_else(Decimal("0"))
    if spent > cap:
        return Left({
            "error": "budget_exceeded",
            "message": f"Budget limit exceeded for category {limit.category}",
            "category": limit.category,
            "limit": cap,
            "spent": spent,
            "over_budget": spent - cap,
        })
    return Right(limit)
