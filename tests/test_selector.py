from datetime import date, datetime

from budget_core.domain import Period
from budget_core.periods import select_current_period


def make_period(start, end):
    return Period(start=start, end=end, label=f"{start}")


JAN = make_period(date(2024, 1, 1), date(2024, 1, 31))
FEB = make_period(date(2024, 2, 1), date(2024, 2, 29))
APR = make_period(date(2024, 4, 1), date(2024, 4, 30))


def test_empty_list_returns_none():
    assert select_current_period([], datetime(2024, 1, 5)) is None


def test_period_containing_now():
    assert select_current_period([JAN, FEB, APR], datetime(2024, 2, 10, 8)) == FEB


def test_now_on_last_second_of_period():
    assert select_current_period([JAN, FEB], datetime(2024, 1, 31, 23, 59, 59)) == JAN


def test_gap_picks_latest_started_period():
    assert select_current_period([JAN, FEB, APR], datetime(2024, 3, 15)) == FEB


def test_all_past_picks_latest():
    assert select_current_period([JAN, FEB], datetime(2025, 1, 1)) == FEB


def test_all_future_picks_earliest():
    assert select_current_period([FEB, APR], datetime(2023, 6, 1)) == FEB


def test_now_as_plain_date():
    assert select_current_period([JAN, FEB], date(2024, 2, 29)) == FEB
